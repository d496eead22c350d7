"""
Well-known token contracts per EVM chain.

Stablecoins and wrapped majors dominate lookups, so they are answered from this
table without any external call.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True, slots=True)
class TokenInfo:
    symbol: str
    contract_address: str
    decimals: int
    display_name: str


def _chain(*rows: Tuple[str, str, int, str]) -> Mapping[str, TokenInfo]:
    return MappingProxyType({row[0]: TokenInfo(*row) for row in rows})


MAJOR_TOKENS: Mapping[str, Mapping[str, TokenInfo]] = MappingProxyType(
    {
        "ethereum": _chain(
            ("USDC", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6, "USD Coin"),
            ("USDT", "0xdAC17F958D2ee523a2206206994597C13D831ec7", 6, "Tether USD"),
            ("WETH", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "Wrapped Ether"),
            ("WBTC", "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", 8, "Wrapped BTC"),
            ("DAI", "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18, "Dai Stablecoin"),
            ("UNI", "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984", 18, "Uniswap"),
            ("LINK", "0x514910771AF9Ca656af840dff83E8264EcF986CA", 18, "ChainLink Token"),
        ),
        "polygon": _chain(
            ("USDC", "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174", 6, "USD Coin"),
            ("USDT", "0xc2132D05D31c914a87C6611C10748AEb04B58e8F", 6, "Tether USD"),
            ("WETH", "0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619", 18, "Wrapped Ether"),
            ("WBTC", "0x1BFD67037B42Cf73acF2047067bd4F2C47D9BfD6", 8, "Wrapped BTC"),
            ("DAI", "0x8f3Cf7ad23Cd3CaDbD9735AFf958023239c6A063", 18, "Dai Stablecoin"),
            ("UNI", "0xb33EaAd8d922B1083446DC23f610c2567fB5180f", 18, "Uniswap"),
            ("LINK", "0x53E0bca35eC356BD5ddDFebbD1Fc0fD03FaBad39", 18, "ChainLink Token"),
        ),
        "arbitrum": _chain(
            ("USDC", "0xaf88d065e77c8cC2239327C5EDb3A432268e5831", 6, "USD Coin"),
            ("USDT", "0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9", 6, "Tether USD"),
            ("WETH", "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", 18, "Wrapped Ether"),
            ("WBTC", "0x2f2a2543B76A4166549F7aaB2e75Bef0aefC5B0f", 8, "Wrapped BTC"),
            ("DAI", "0xDA10009cBd5D07dd0CeCc66161FC93D7c9000da1", 18, "Dai Stablecoin"),
            ("UNI", "0xFa7F8980b0f1E64A2062791cc3b0871572f1F7f0", 18, "Uniswap"),
            ("LINK", "0xf97f4df75117a78c1A5a0DBb814Af92458539FB4", 18, "ChainLink Token"),
        ),
        "base": _chain(
            ("USDC", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", 6, "USD Coin"),
            ("WETH", "0x4200000000000000000000000000000000000006", 18, "Wrapped Ether"),
            ("DAI", "0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb", 18, "Dai Stablecoin"),
        ),
        "optimism": _chain(
            ("USDC", "0x7F5c764cBc14f9669B88837ca1490cCa17c31607", 6, "USD Coin"),
            ("USDT", "0x94b008aA00579c1307B0EF2c499aD98a8ce58e58", 6, "Tether USD"),
            ("WETH", "0x4200000000000000000000000000000000000006", 18, "Wrapped Ether"),
            ("WBTC", "0x68f180fcCe6836688e9084f035309E29Bf0A2095", 8, "Wrapped BTC"),
            ("DAI", "0xDA10009cBd5D07dd0CeCc66161FC93D7c9000da1", 18, "Dai Stablecoin"),
            ("UNI", "0x6fd9d7AD17242c41f7131d257212c54A0e816691", 18, "Uniswap"),
            ("LINK", "0x350a791Bfc2C21F9Ed5d10980Dad2e2638ffa7f6", 18, "ChainLink Token"),
        ),
    }
)

SUPPORTED_CHAINS = tuple(MAJOR_TOKENS.keys())


def lookup_token(chain: str, symbol: str) -> Optional[TokenInfo]:
    table = MAJOR_TOKENS.get(chain)
    if table is None:
        return None
    return table.get(symbol)
