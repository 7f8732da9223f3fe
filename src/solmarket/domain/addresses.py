"""
Well-known Solana addresses used for pool discovery and price anchoring.
"""

from __future__ import annotations

from dataclasses import dataclass

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDT_MINT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"

# Assumed to track USD 1:1
STABLE_MINTS = frozenset({USDC_MINT, USDT_MINT})

RAYDIUM_AMM_V4_PROGRAM = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
PUMPFUN_PROGRAM = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"

# Mints launched through the bonding-curve platform carry this suffix
PUMPFUN_MINT_SUFFIX = "pump"

LAMPORTS_PER_SOL = 1_000_000_000

# Owners of LP token accounts that count as custodial locks
LP_LOCK_PROGRAMS = frozenset({
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
    "11111111111111111111111111111111111111111",
    "LockuPTQVAiRdxjq7Kw9Dq1iZcRvBKC2gRaB8bKbPH3",
})

BURN_OWNER_PREFIX = "1" * 10
BURN_OWNER_MARKERS = ("dead", "burn")


@dataclass(frozen=True)
class ReferencePool:
    """Highest-liquidity stable/native pool used to price SOL."""
    address: str
    native_vault: str
    stable_vault: str


SOL_USDC_POOL = ReferencePool(
    address="58oQChx4yWmvKdwLLZzBi4ChoCc2fqCUWBkwMihLYQo2",
    native_vault="DQyrAcCrDXQ7NeoqGgDCZwBvWDcYmFCjSb9JtteuvPpz",
    stable_vault="HLmqeL62xR1QoZ1HKKbXRrdN1p3phKpxRMb2VVopvBBz",
)


def is_stable_mint(mint: str) -> bool:
    return mint in STABLE_MINTS
