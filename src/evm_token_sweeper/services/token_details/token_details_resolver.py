"""Token metadata lookup with per-field fallbacks."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from evm_token_sweeper.clients.rpc_client.erc20 import Erc20Token
from evm_token_sweeper.models.token import (
    DEFAULT_DECIMALS,
    DEFAULT_NAME,
    DEFAULT_SYMBOL,
    TokenDetails,
)

if TYPE_CHECKING:
    from evm_token_sweeper.clients.rpc_client import RpcClient

T = TypeVar("T")


class TokenDetailsResolver:
    """Reads symbol, decimals and name of a token contract.

    The three lookups run concurrently and fail independently: a field whose
    call errors (no such function, revert, bad encoding, transport failure) gets
    its default (UNKNOWN / 18 / Unknown Token) and resolve() itself never raises.
    Results are not cached.
    """

    def __init__(
        self,
        rpc: RpcClient,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._rpc = rpc
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def resolve(self, token_address: str) -> TokenDetails:
        """Return the token's details, substituting defaults for failed fields."""
        token = Erc20Token(self._rpc, token_address)
        symbol, decimals, name = await asyncio.gather(
            self._lookup("symbol", token.symbol, DEFAULT_SYMBOL, token.address),
            self._lookup("decimals", token.decimals, DEFAULT_DECIMALS, token.address),
            self._lookup("name", token.name, DEFAULT_NAME, token.address),
        )
        return TokenDetails(symbol=symbol or DEFAULT_SYMBOL, decimals=decimals, name=name or DEFAULT_NAME)

    async def _lookup(
        self,
        field: str,
        fetch: Callable[[], Awaitable[T]],
        default: T,
        token_address: str,
    ) -> T:
        try:
            return await fetch()
        except Exception as e:
            self._logger.debug(
                "token_detail_lookup_failed",
                token_address=token_address,
                token_field=field,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return default
