# src/solmarket/adapters/rpc/gateway.py
"""
Solana JSON-RPC Gateway

This module implements the request/response transport to a single Solana RPC
endpoint. Every call is bounded by a fixed timeout and fails with a
TransportError or ProtocolError that the caller must handle; the gateway
never retries, backs off or caches.

Files that USE this module:
- solmarket.application.price_oracle (vault balance reads)
- solmarket.application.pool_resolver (pool discovery and vault reads)
- solmarket.application.lp_lock (LP holder and supply reads)
- solmarket.application.market_data (signature counts, default wiring)
- solmarket.application.health (node health probe)
- tests.test_gateway (unit tests)

Files that this module USES:
- solmarket.config (settings for endpoint and timeout)
- solmarket.domain.errors (TransportError, ProtocolError)
"""
import itertools
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from solmarket.config import settings
from solmarket.domain.errors import ProtocolError, TransportError

log = logging.getLogger(__name__)


def _value(result: Any) -> Any:
    """Unwrap the {"context": ..., "value": ...} envelope when present."""
    if isinstance(result, dict) and "value" in result:
        return result["value"]
    return result


class RpcGateway:
    """
    Thin JSON-RPC 2.0 client for one Solana node.

    Request ids are seeded from the millisecond clock and incremented, which
    keeps them unique for the lifetime of the process.
    """

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the gateway.

        Args:
            url: Optional RPC endpoint (defaults to settings.rpc_url)
            timeout: Optional per-request timeout in seconds (defaults to settings.rpc_timeout_seconds)
        """
        self.url = url or settings.rpc_url
        self.timeout = timeout or settings.rpc_timeout_seconds
        self._ids = itertools.count(int(time.time() * 1000))

    def call(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        """
        Issue one JSON-RPC call and return its "result" member.

        Raises:
            TransportError: On timeout, connection failure or non-success status
            ProtocolError: On an "error" member or a body that is not a JSON object
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params or []),
        }

        try:
            log.debug("RPC %s -> %s", method, self.url)
            resp = requests.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout:
            log.warning("RPC %s timeout after %s seconds", method, self.timeout)
            raise TransportError(f"RPC {method} timeout after {self.timeout}s")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            log.warning("RPC %s HTTP error %s", method, status)
            raise TransportError(f"RPC {method} HTTP {status}") from e
        except requests.exceptions.RequestException as e:
            log.warning("RPC %s request failed: %s", method, e)
            raise TransportError(f"RPC {method} request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            log.error("RPC %s returned invalid JSON: %s", method, e)
            raise ProtocolError(f"RPC {method} returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            log.error("RPC %s unexpected response type: %r", method, type(data))
            raise ProtocolError(f"RPC {method} returned non-object JSON")

        error = data.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else None
            message = (error.get("message") if isinstance(error, dict) else None) or str(error)
            log.warning("RPC %s error %s: %s", method, code, message)
            raise ProtocolError(f"RPC {method} error: {message}", code=code)

        return data.get("result")

    def gather(self, *tasks: Callable[[], Any]) -> List[Any]:
        """
        Run independent reads concurrently and return their results in order.

        All tasks run to completion; the first failure (in argument order)
        is then re-raised.
        """
        if not tasks:
            return []
        with ThreadPoolExecutor(max_workers=len(tasks)) as pool:
            futures = [pool.submit(task) for task in tasks]
        return [future.result() for future in futures]

    # --- Typed reads -------------------------------------------------------

    def get_token_account_balance(self, address: str) -> Dict[str, Any]:
        return _value(self.call("getTokenAccountBalance", [address])) or {}

    def get_token_supply(self, mint: str) -> Dict[str, Any]:
        return _value(self.call("getTokenSupply", [mint])) or {}

    def get_token_largest_accounts(self, mint: str) -> List[Dict[str, Any]]:
        return _value(self.call("getTokenLargestAccounts", [mint])) or []

    def get_multiple_accounts(
        self, addresses: Sequence[str], encoding: str = "jsonParsed"
    ) -> List[Optional[Dict[str, Any]]]:
        return _value(self.call("getMultipleAccounts", [list(addresses), {"encoding": encoding}])) or []

    def get_account_info(self, address: str, encoding: str = "base64") -> Optional[Dict[str, Any]]:
        return _value(self.call("getAccountInfo", [address, {"encoding": encoding}]))

    def get_token_accounts_by_owner(
        self, owner: str, mint: str, encoding: str = "jsonParsed"
    ) -> List[Dict[str, Any]]:
        result = self.call("getTokenAccountsByOwner", [owner, {"mint": mint}, {"encoding": encoding}])
        return _value(result) or []

    def get_program_accounts(
        self, program_id: str, filters: Sequence[Dict[str, Any]], encoding: str = "base64"
    ) -> List[Dict[str, Any]]:
        result = self.call(
            "getProgramAccounts",
            [program_id, {"encoding": encoding, "filters": list(filters)}],
        )
        return _value(result) or []

    def get_signatures_for_address(self, address: str, limit: int) -> List[Dict[str, Any]]:
        return _value(self.call("getSignaturesForAddress", [address, {"limit": limit}])) or []

    def get_health(self) -> str:
        return self.call("getHealth", [])

    @staticmethod
    def ui_amount(token_amount: Optional[Dict[str, Any]]) -> float:
        """
        Read a token amount in UI units.

        Prefers uiAmount, then uiAmountString, then amount / 10**decimals.
        Missing or unreadable data reads as 0.0.
        """
        if not token_amount:
            return 0.0
        try:
            if token_amount.get("uiAmount") is not None:
                return float(token_amount["uiAmount"])
            if token_amount.get("uiAmountString") is not None:
                return float(token_amount["uiAmountString"])
            if token_amount.get("amount") is not None:
                return int(token_amount["amount"]) / 10 ** int(token_amount.get("decimals", 0))
        except (TypeError, ValueError) as e:
            log.warning("Unreadable token amount %r: %s", token_amount, e)
        return 0.0
