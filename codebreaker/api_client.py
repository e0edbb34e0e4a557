"""Async HTTP invoker shared by the generated API classes."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from http import HTTPStatus
import logging
import os
from typing import Any
from urllib.parse import quote

import httpx

from .exceptions import ApiConnectionError, ApiException

LOGGER = logging.getLogger(__name__)

# Methods retried after a 5xx response.
_IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Configuration:
    """Connection settings for :class:`ApiClient`.

    ``max_retries`` is the total number of attempts per request.
    """

    base_url: str
    timeout: float = 10.0
    max_retries: int = 3
    initial_delay: float = 1.0
    log_http: bool = False

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("Configuration requires a base_url")
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

    @classmethod
    def from_env(cls, default_base_url: str = "") -> Configuration:
        """Read CODEBREAKER_* environment variables.

        CODEBREAKER_BASE_URL falls back to ``default_base_url``, normally the
        server URL of the OpenAPI document.
        """
        base_url = os.getenv("CODEBREAKER_BASE_URL", default_base_url)
        if not base_url:
            raise ValueError(
                "Configuration requires CODEBREAKER_BASE_URL or a default base URL"
            )
        return cls(
            base_url=base_url,
            timeout=float(os.getenv("CODEBREAKER_TIMEOUT", "10")),
            max_retries=int(os.getenv("CODEBREAKER_MAX_RETRIES", "3")),
            initial_delay=float(os.getenv("CODEBREAKER_RETRY_DELAY", "1")),
            log_http=os.getenv("CODEBREAKER_LOG_HTTP", "").strip().lower() in _TRUTHY,
        )


async def _log_request(request: httpx.Request) -> None:
    LOGGER.info("--> %s %s", request.method, request.url)


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    LOGGER.info("<-- %s %s %s", response.status_code, request.method, request.url)


def expand_path(path: str, path_params: dict[str, Any] | None = None) -> str:
    """Substitute URL-encoded values for ``{name}`` placeholders."""
    if not path_params:
        return path
    return path.format(
        **{name: quote(str(value), safe="") for name, value in path_params.items()}
    )


class ApiClient:
    """Async HTTP client with retry, used by every generated API class.

    Without ``configuration``, settings come from :meth:`Configuration.from_env`
    and CODEBREAKER_BASE_URL must be set; the generated API classes pass the
    document's server URL as the fallback instead.

    The underlying ``httpx.AsyncClient`` is created on first use and released
    by :meth:`close`; the client also works as an async context manager::

        async with ApiClient(Configuration.from_env()) as api_client:
            game = await GamesApi(api_client).get_game(game_id)
    """

    def __init__(
        self,
        configuration: Configuration | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.configuration = configuration or Configuration.from_env()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ApiClient:
        self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def is_closed(self) -> bool:
        return self._client is None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            event_hooks: dict[str, list[Any]] = {}
            if self.configuration.log_http:
                event_hooks = {"request": [_log_request], "response": [_log_response]}
            self._client = httpx.AsyncClient(
                base_url=self.configuration.base_url,
                timeout=self.configuration.timeout,
                transport=self._transport,
                event_hooks=event_hooks,
            )
        return self._client

    async def close(self) -> None:
        """Release the connection pool. The client reopens on next use."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def call_api(
        self,
        method: str,
        path: str,
        *,
        path_params: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """HTTP request with retry on connection errors and idempotent 5xx.

        4xx responses and 5xx responses to non-idempotent requests fail
        immediately with :class:`ApiException`.
        """
        method = method.upper()
        url = expand_path(path, path_params)
        query = {name: value for name, value in (params or {}).items() if value is not None}
        client = self._ensure_client()
        attempts = self.configuration.max_retries
        delay = self.configuration.initial_delay
        last_exception: Exception | None = None

        for attempt in range(attempts):
            try:
                response = await client.request(method, url, params=query or None, json=json)
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status < HTTPStatus.INTERNAL_SERVER_ERROR or method not in _IDEMPOTENT_METHODS:
                    raise ApiException.from_response(e.response) from e
                last_exception = e
                if attempt < attempts - 1:
                    LOGGER.warning(
                        "%s %s returned %s (attempt %d/%d), retrying in %.1fs...",
                        method,
                        url,
                        status,
                        attempt + 1,
                        attempts,
                        delay,
                    )
                    await asyncio.sleep(delay)
                    delay *= 2

            except httpx.ConnectError as e:
                last_exception = e
                if attempt < attempts - 1:
                    LOGGER.warning(
                        "%s unavailable (attempt %d/%d), retrying in %.1fs...",
                        self.configuration.base_url,
                        attempt + 1,
                        attempts,
                        delay,
                    )
                    await asyncio.sleep(delay)
                    delay *= 2

            except httpx.TransportError as e:
                raise ApiConnectionError(f"{method} {url} failed: {e}") from e

        LOGGER.error("%s %s failed after %d attempts", method, url, attempts)
        if isinstance(last_exception, httpx.HTTPStatusError):
            raise ApiException.from_response(last_exception.response) from last_exception
        raise ApiConnectionError(
            f"Could not connect to {self.configuration.base_url}"
        ) from last_exception
