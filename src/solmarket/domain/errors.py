"""
Domain Errors - Failure Taxonomy

This module defines the exceptions raised below the public facade.
Transport and protocol failures are both RpcError subclasses so callers
that treat them identically can catch the base class.
"""

from typing import Optional


class SolMarketError(Exception):
    """Base exception for solmarket errors."""
    pass


class RpcError(SolMarketError):
    """Raised when a JSON-RPC call does not produce a result."""
    pass


class TransportError(RpcError):
    """Raised on timeout, connection failure or non-success HTTP status."""
    pass


class ProtocolError(RpcError):
    """Raised when the node answers with a JSON-RPC error object or an unreadable body."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class MalformedLayoutError(SolMarketError):
    """Raised when account data is shorter than the layout being decoded."""
    pass
