"""
Two-armed outcome shared by every tiered lookup.

Symbol resolution, price resolution and operation dispatch all try a cheap
in-memory source first and otherwise hand back a plan for the caller. Each of
them returns one of these two variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, TypeVar, Union

T = TypeVar("T")

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"
STATUS_NOT_FOUND = "not_found"
STATUS_INSTRUCTION = "instruction"


@dataclass(frozen=True, slots=True)
class Resolved(Generic[T]):
    """The fast tier produced an answer."""

    value: T
    source: str

    @property
    def needs_fallback(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class NeedsFallback:
    """The fast tier could not answer; ``plan`` says what to do next."""

    reason: str
    plan: Dict[str, Any] = field(default_factory=dict)
    status: str = STATUS_INSTRUCTION

    @property
    def needs_fallback(self) -> bool:
        return True


Outcome = Union[Resolved[T], NeedsFallback]
