"""
solmarket - On-chain Market Data for Solana Tokens

Derives price, liquidity, market cap and liquidity-lock status for a token
from raw JSON-RPC reads against ledger state, without any third-party
market-data API.
"""

__version__ = "0.3.0"
