"""
RPC Adapters - Solana JSON-RPC Client
"""

from solmarket.adapters.rpc.gateway import RpcGateway

__all__ = ["RpcGateway"]
