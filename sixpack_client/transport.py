"""
HTTP transport for the Sixpack service.

Each call is a single GET with a short connect timeout. Failures never
propagate: the caller gets back the local default alternative together
with the error, so a slow or unavailable service cannot block the feature
path that asked for an assignment.
"""

import asyncio
from typing import Optional, Union
from urllib.parse import urljoin

import aiohttp
import pydantic
import requests

from sixpack_client.core.config import Settings, get_settings
from sixpack_client.core.exceptions import DecodeError, ServerError, TransportError
from sixpack_client.core.logging import LoggerMixin
from sixpack_client.models import Outcome, SixpackResponse
from sixpack_client.options import RequestParameters


def resolve_url(base_url: str, endpoint: str) -> str:
    """Resolve ``endpoint`` against ``base_url`` as a browser would."""
    return urljoin(base_url, endpoint)


class _BaseTransport(LoggerMixin):
    """Status handling and response decoding shared by both transports."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = get_settings(settings)

    @property
    def headers(self) -> dict:
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }

    def _fallback(self, url: str, default: Optional[str], error: Exception) -> Outcome:
        self.logger.warning(
            "Sixpack request failed, using default alternative",
            url=url,
            default=default,
            error_type=type(error).__name__,
            error_message=str(error),
        )
        return Outcome(default, None, error)

    def _decode(self, url: str, status: int, body: Union[str, bytes], default: Optional[str]) -> Outcome:
        if status >= 500:
            return self._fallback(url, default, ServerError(status, url))

        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                return self._fallback(
                    url,
                    default,
                    DecodeError(f"Undecodable response from Sixpack: {e}", body=body.decode("utf-8", "replace")),
                )

        try:
            response = SixpackResponse.model_validate_json(body)
        except pydantic.ValidationError as e:
            return self._fallback(
                url, default, DecodeError(f"Invalid response from Sixpack: {e}", body=body)
            )

        alternative = response.alternative_name or default
        self.logger.debug(
            "Sixpack request completed",
            url=url,
            status=response.status,
            alternative=alternative,
        )
        return Outcome(alternative, response, None)


class Transport(_BaseTransport):
    """Blocking transport backed by a pooled ``requests.Session``."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(settings)
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
        self.session = session

    def send(
        self,
        base_url: str,
        endpoint: str,
        params: RequestParameters,
        default: Optional[str] = None,
    ) -> Outcome:
        """
        Issue ``GET base_url + endpoint`` with ``params`` as the query string.

        Args:
            base_url: Service root
            endpoint: Path resolved against ``base_url``
            params: Query parameters
            default: Alternative returned when the call fails

        Returns:
            Outcome with the chosen alternative, decoded response and error
        """
        url = resolve_url(base_url, endpoint)
        try:
            with self.session.get(
                url,
                params=params.items(),
                timeout=self.settings.timeout,
            ) as response:
                status = response.status_code
                body = response.text
        except requests.RequestException as e:
            return self._fallback(url, default, TransportError(str(e) or type(e).__name__, url))

        return self._decode(url, status, body, default)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncTransport(_BaseTransport):
    """Asynchronous transport backed by an ``aiohttp.ClientSession``."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__(settings)
        self._owns_session = session is None
        self.session = session

    def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily so it binds to the running event loop
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(
                    total=None,
                    connect=self.settings.connect_timeout,
                    sock_connect=self.settings.connect_timeout,
                    sock_read=self.settings.read_timeout,
                ),
                headers=self.headers,
            )
        return self.session

    async def send(
        self,
        base_url: str,
        endpoint: str,
        params: RequestParameters,
        default: Optional[str] = None,
    ) -> Outcome:
        """Coroutine twin of :meth:`Transport.send`."""
        url = resolve_url(base_url, endpoint)
        session = self._get_session()
        try:
            async with session.get(url, params=params.items()) as response:
                status = response.status
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return self._fallback(url, default, TransportError(str(e) or type(e).__name__, url))

        return self._decode(url, status, body, default)

    async def close(self) -> None:
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
