# -*- coding: utf-8 -*-
"""aiohttp transport for JSON-RPC endpoints: retries, backoff and Retry-After."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from evm_token_sweeper.config import Settings
from evm_token_sweeper.exceptions import RpcTransportError

# Statuses worth another attempt; any other HTTP error fails immediately.
RETRYABLE_STATUSES = frozenset({408, 425, 429, 500, 502, 503, 504})

_TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class AsyncHttpClient:
    """POSTs JSON bodies to one or more RPC endpoints.

    Uses an injected aiohttp.ClientSession, or creates and owns one (closed
    by aclose()).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (rpc.timeout_seconds, rpc.max_retries).
            session: Optional shared aiohttp session, left open by aclose().
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._rpc_settings = settings.rpc
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _session_for_request(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._rpc_settings.timeout_seconds)
            )
        return self._session

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        return min(4.0, 0.25 * (2**attempt)) + random.uniform(0.0, 0.15)

    def _delay_before_retry(self, error: Exception, attempt: int) -> float:
        retry_after = getattr(error, "retry_after", None)
        if isinstance(retry_after, float) and retry_after > 0:
            return retry_after
        return self._backoff_delay(attempt)

    @staticmethod
    def _parse_retry_after(headers: Any) -> Optional[float]:
        value = headers.get("Retry-After") if headers else None
        try:
            return float(value) if value else None
        except ValueError:
            return None

    async def _post_once(self, url: str, payload: Dict[str, Any]) -> Any:
        session = await self._session_for_request()
        async with session.post(url, json=payload) as response:
            if response.status >= 400:
                error = aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=getattr(response, "reason", None) or "HTTP error",
                )
                error.retry_after = self._parse_retry_after(response.headers)  # type: ignore[attr-defined]
                raise error
            # Some nodes answer with text/plain; parse regardless of content type.
            return await response.json(content_type=None)

    async def post(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """POST a JSON body and return the decoded JSON response.

        Connection errors, timeouts, undecodable bodies and RETRYABLE_STATUSES
        are retried up to rpc.max_retries attempts in total.

        Raises:
            RpcTransportError: On a non-retryable HTTP status or when attempts run out.
        """
        payload = json or {}
        max_retries = self._rpc_settings.max_retries
        last_error: Optional[Exception] = None
        attempts = 0

        with bound_contextvars(
            http_request_id=uuid.uuid4().hex[:12],
            rpc_method=payload.get("method"),
        ):
            while attempts < max_retries:
                attempts += 1
                try:
                    return await self._post_once(url, payload)
                except aiohttp.ClientResponseError as e:
                    last_error = e
                    if e.status not in RETRYABLE_STATUSES:
                        break
                    self._logger.debug(
                        "http_post_retry",
                        http_attempt=attempts,
                        http_status_code=e.status,
                    )
                except _TRANSIENT_ERRORS as e:
                    last_error = e
                    self._logger.debug(
                        "http_post_retry",
                        http_attempt=attempts,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                if attempts < max_retries:
                    await asyncio.sleep(self._delay_before_retry(last_error, attempts - 1))

            status_code = last_error.status if isinstance(last_error, aiohttp.ClientResponseError) else None
            self._logger.warning(
                "http_post_failed",
                http_status_code=status_code,
                http_attempts=attempts,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise RpcTransportError(
                f"POST failed after {attempts} attempt(s)",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
