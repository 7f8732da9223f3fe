"""
Domain Layer - Pure Market Objects

This package contains domain models, error types and result types.
No dependencies on infrastructure or external systems.
"""

from solmarket.domain.models import (
    DexId,
    LockVerdict,
    MarketSnapshot,
    PoolRecord,
)
from solmarket.domain.errors import (
    MalformedLayoutError,
    ProtocolError,
    RpcError,
    SolMarketError,
    TransportError,
)
from solmarket.domain.result import Err, ErrorKind, Ok, Result

__all__ = [
    "DexId",
    "LockVerdict",
    "MarketSnapshot",
    "PoolRecord",
    "SolMarketError",
    "RpcError",
    "TransportError",
    "ProtocolError",
    "MalformedLayoutError",
    "Ok",
    "Err",
    "ErrorKind",
    "Result",
]
