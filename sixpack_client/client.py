"""
Option-style Sixpack clients.

    client = new_client("http://localhost:5000")
    alternative, response, error = client.participate(
        "button-color",
        with_alternatives("blue", "green"),
        with_client_id(user_id),
    )

Validation problems raise immediately. Network problems are returned in
the outcome next to a usable alternative.
"""

import threading
from typing import Optional, Tuple
from urllib.parse import urlparse

from sixpack_client.core.config import Settings, get_settings
from sixpack_client.core.exceptions import ConfigurationError
from sixpack_client.core.logging import LoggerMixin
from sixpack_client.identity import IdentityGenerator
from sixpack_client.models import Outcome
from sixpack_client.options import (
    CONVERT_ENDPOINT,
    PARTICIPATE_ENDPOINT,
    Option,
    RequestBuilder,
    RequestParameters,
)
from sixpack_client.transport import AsyncTransport, Transport
from sixpack_client.validation import validate_experiment_name


def validate_base_url(base_url: str) -> str:
    """Return ``base_url`` if it is an absolute http(s) URL."""
    parsed = urlparse(base_url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid Sixpack base URL: {base_url!r}")
    return base_url


class _BaseClient(LoggerMixin):
    """Request preparation shared by the blocking and async clients."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        identity_generator: Optional[IdentityGenerator] = None,
    ):
        self.settings = get_settings(settings)
        self.base_url = validate_base_url(base_url or self.settings.base_url)
        self.identity_generator = identity_generator

    def _builder(self, experiment: str, options: Tuple[Option, ...]) -> RequestBuilder:
        validate_experiment_name(experiment)
        builder = RequestBuilder(experiment, self.settings, self.identity_generator)
        return builder.apply(options)

    def _prepare_participate(
        self, experiment: str, options: Tuple[Option, ...]
    ) -> Tuple[RequestParameters, Optional[str]]:
        builder = self._builder(experiment, options)
        return builder.build_participate(), builder.default_alternative

    def _prepare_convert(
        self, experiment: str, options: Tuple[Option, ...]
    ) -> Tuple[RequestParameters, Optional[str]]:
        builder = self._builder(experiment, options)
        return builder.build_convert(), builder.default_alternative


class Client(_BaseClient):
    """Blocking client; safe to share across threads."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[Transport] = None,
        identity_generator: Optional[IdentityGenerator] = None,
    ):
        super().__init__(base_url, settings, identity_generator)
        self.transport = transport or Transport(self.settings)

    def participate(self, experiment: str, *options: Option) -> Outcome:
        """
        Assign the visitor to an alternative of ``experiment``.

        Args:
            experiment: Experiment name
            *options: At least one option; ``with_alternatives`` is required

        Returns:
            Outcome; on failure the alternative is the forced value or the
            first alternative

        Raises:
            ValidationError: bad names, fewer than 2 alternatives, no options
        """
        params, default = self._prepare_participate(experiment, options)
        return self.transport.send(self.base_url, PARTICIPATE_ENDPOINT, params, default)

    def convert(self, experiment: str, *options: Option) -> Outcome:
        """
        Record a conversion for the visitor in ``experiment``.

        Raises:
            ValidationError: bad experiment name or no options
        """
        params, default = self._prepare_convert(experiment, options)
        return self.transport.send(self.base_url, CONVERT_ENDPOINT, params, default)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncClient(_BaseClient):
    """Coroutine client for asyncio applications."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[AsyncTransport] = None,
        identity_generator: Optional[IdentityGenerator] = None,
    ):
        super().__init__(base_url, settings, identity_generator)
        self.transport = transport or AsyncTransport(self.settings)

    async def participate(self, experiment: str, *options: Option) -> Outcome:
        params, default = self._prepare_participate(experiment, options)
        return await self.transport.send(self.base_url, PARTICIPATE_ENDPOINT, params, default)

    async def convert(self, experiment: str, *options: Option) -> Outcome:
        params, default = self._prepare_convert(experiment, options)
        return await self.transport.send(self.base_url, CONVERT_ENDPOINT, params, default)

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def new_client(base_url: str, **kwargs) -> Client:
    """Create a :class:`Client` for ``base_url``, raising ``ConfigurationError`` if unusable."""
    return Client(validate_base_url(base_url), **kwargs)


_clients = {}
_clients_lock = threading.Lock()


def get_client(base_url: Optional[str] = None) -> Client:
    """Get the shared :class:`Client` for ``base_url`` (defaults to ``settings.base_url``)."""
    base_url = validate_base_url(base_url or get_settings().base_url)
    with _clients_lock:
        client = _clients.get(base_url)
        if client is None:
            client = _clients[base_url] = Client(base_url)
        return client
