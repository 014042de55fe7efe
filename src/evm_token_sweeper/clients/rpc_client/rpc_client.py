"""EVM JSON-RPC client (block height, logs, eth_call, transaction submission and receipts)."""

from __future__ import annotations

import asyncio
import itertools
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, cast

import structlog

from evm_token_sweeper.exceptions import ReceiptTimeoutError, RpcError

if TYPE_CHECKING:
    from evm_token_sweeper.clients.http import AsyncHttpClient


def hex_to_int(value: Any) -> int:
    """Parse a JSON-RPC quantity ("0x1a") into an int."""
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not value.lower().startswith("0x"):
        raise RpcError(f"Invalid quantity in RPC result: {value!r}")
    return int(value, 16) if len(value) > 2 else 0


def int_to_hex(value: int) -> str:
    return hex(value)


class RpcClient:
    """Client for one EVM JSON-RPC endpoint.

    One instance per network session. The underlying HTTP client is owned by this
    client and closed by aclose().
    """

    def __init__(
        self,
        http_client: AsyncHttpClient,
        rpc_url: str,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the RPC client.

        Args:
            http_client: HTTP client for POST requests (JSON-RPC).
            rpc_url: Endpoint URL of the network.
            sleep: Awaitable sleep used between receipt polls (injected for tests).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._rpc_url = rpc_url.strip()
        self._sleep = sleep
        self._ids = itertools.count(1)
        self._chain_id: int | None = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Perform a JSON-RPC call and return its ``result``.

        Raises:
            RpcTransportError: If the HTTP request fails after retries.
            RpcError: If the response carries an error object or is not a JSON-RPC response.
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        response = await self._http.post(self._rpc_url, json=payload)
        if not isinstance(response, dict):
            raise RpcError(f"Unexpected RPC response type: {type(response).__name__}", method=method)
        resp_dict = cast(dict[str, Any], response)
        if resp_dict.get("error") is not None:
            err = resp_dict["error"]
            if isinstance(err, dict):
                err_d = cast(dict[str, Any], err)
                raise RpcError(
                    f"RPC error in {method}: {err_d.get('message', err_d)}",
                    method=method,
                    code=err_d.get("code"),
                    data=err_d.get("data"),
                )
            raise RpcError(f"RPC error in {method}: {err}", method=method)
        if "result" not in resp_dict:
            raise RpcError(f"RPC response for {method} has no result", method=method)
        return resp_dict["result"]

    async def block_number(self) -> int:
        """Return the current block height."""
        return hex_to_int(await self.call("eth_blockNumber"))

    async def chain_id(self) -> int:
        """Return the chain id (cached after the first call)."""
        if self._chain_id is None:
            self._chain_id = hex_to_int(await self.call("eth_chainId"))
        return self._chain_id

    async def get_logs(
        self,
        *,
        from_block: int,
        to_block: int,
        topics: list[str | None],
        address: str | list[str] | None = None,
    ) -> list[dict[str, Any]]:
        """Return logs matching topics in the inclusive range [from_block, to_block]."""
        log_filter: dict[str, Any] = {
            "fromBlock": int_to_hex(from_block),
            "toBlock": int_to_hex(to_block),
            "topics": topics,
        }
        if address is not None:
            log_filter["address"] = address
        result = await self.call("eth_getLogs", [log_filter])
        if not isinstance(result, list):
            raise RpcError(f"eth_getLogs returned {type(result).__name__}", method="eth_getLogs")
        return cast(list[dict[str, Any]], result)

    async def eth_call(self, to: str, data: str, block: str = "latest") -> str:
        """Perform eth_call (read-only contract call) and return the hex result."""
        to_norm = to.strip()
        if not to_norm.startswith("0x"):
            to_norm = "0x" + to_norm
        result = await self.call("eth_call", [{"to": to_norm, "data": data}, block])
        return str(result) if result is not None else "0x"

    async def get_transaction_count(self, address: str, block: str = "pending") -> int:
        return hex_to_int(await self.call("eth_getTransactionCount", [address, block]))

    async def gas_price(self) -> int:
        return hex_to_int(await self.call("eth_gasPrice"))

    async def estimate_gas(self, tx: dict[str, Any]) -> int:
        return hex_to_int(await self.call("eth_estimateGas", [tx]))

    async def send_raw_transaction(self, raw_tx: str) -> str:
        """Submit a signed transaction and return its hash."""
        result = await self.call("eth_sendRawTransaction", [raw_tx])
        if not isinstance(result, str):
            raise RpcError("eth_sendRawTransaction returned no hash", method="eth_sendRawTransaction")
        return result

    async def get_transaction_by_hash(self, tx_hash: str) -> dict[str, Any] | None:
        """Return the transaction (pending or mined), or None if the node does not know it."""
        result = await self.call("eth_getTransactionByHash", [tx_hash])
        if result is None:
            return None
        return cast(dict[str, Any], result)

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        """Return the receipt, or None while the transaction is pending."""
        result = await self.call("eth_getTransactionReceipt", [tx_hash])
        if result is None:
            return None
        return cast(dict[str, Any], result)

    async def wait_for_receipt(
        self,
        tx_hash: str,
        *,
        poll_seconds: float = 2.0,
        timeout_seconds: float | None = None,
    ) -> dict[str, Any]:
        """Poll until the transaction is mined and return its receipt.

        Args:
            tx_hash: Transaction hash (0x...).
            poll_seconds: Interval between receipt checks.
            timeout_seconds: Give up after this long; None waits indefinitely.

        Raises:
            ReceiptTimeoutError: If timeout_seconds elapses without a receipt.
        """
        started = time.monotonic()
        while True:
            receipt = await self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if timeout_seconds is not None and time.monotonic() - started >= timeout_seconds:
                raise ReceiptTimeoutError(tx_hash, timeout_seconds)
            self._logger.debug("rpc_receipt_pending", tx_hash=tx_hash)
            await self._sleep(poll_seconds)
