"""
Web3 MCP resolution core.

This package exposes LLM-friendly tools that describe, rather than perform,
blockchain data queries: symbol and price resolution backed by the Pyth oracle,
and a capability registry for the Nodit EVM, Bitcoin and Aptos APIs. See
DESIGN.md for full details.
"""

__all__ = ["config"]
