"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- RPC (JSON-RPC gateway to a Solana node)
- Decoding (binary account data)
"""

__all__ = []
