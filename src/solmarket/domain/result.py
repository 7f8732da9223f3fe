"""
Result Types - Explicit Success/Failure Values

Internal components return Ok or Err instead of swallowing exceptions, so
their behaviour can be asserted on directly. Only the public facade turns
an Err into an empty/default value.

Files that USE this module:
- solmarket.application.pool_resolver (strategies return Result[PoolRecord])
- solmarket.application.lp_lock (analyze returns Result[LockVerdict])
- solmarket.application.market_data (collapses Err at the public boundary)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from solmarket.domain.errors import MalformedLayoutError, ProtocolError, TransportError

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    MALFORMED_LAYOUT = "malformed_layout"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    detail: str = ""

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def err_from_exception(exc: Exception) -> Err:
    """Map a raised solmarket error onto its ErrorKind."""
    if isinstance(exc, ProtocolError):
        return Err(ErrorKind.PROTOCOL, str(exc))
    if isinstance(exc, TransportError):
        return Err(ErrorKind.TRANSPORT, str(exc))
    if isinstance(exc, MalformedLayoutError):
        return Err(ErrorKind.MALFORMED_LAYOUT, str(exc))
    raise TypeError(f"No ErrorKind for {type(exc).__name__}") from exc
