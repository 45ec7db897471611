"""
sixpack-client: a client for the Sixpack split-testing service.

Assign visitors to experiment alternatives, record conversions, and fall
back to a sensible alternative whenever the service is unavailable.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from sixpack_client.core.config import Settings, settings, get_settings
from sixpack_client.core.logging import get_logger, setup_logging
from sixpack_client.core.exceptions import (
    SixpackError,
    ValidationError,
    ConfigurationError,
    IdentityGenerationError,
    TransportError,
    ServerError,
    DecodeError,
)
from sixpack_client.validation import is_valid_name
from sixpack_client.context import IdentityStore, RequestContext, SimpleRequestContext
from sixpack_client.identity import letter_identity, resolve_identity, uuid_identity
from sixpack_client.models import Outcome, SixpackResponse
from sixpack_client.options import (
    RequestBuilder,
    RequestParameters,
    from_request,
    with_alternatives,
    with_client_id,
    with_force,
    with_ip_address,
    with_kpi,
    with_traffic_fraction,
    with_user_agent,
)
from sixpack_client.transport import AsyncTransport, Transport
from sixpack_client.client import AsyncClient, Client, get_client, new_client
from sixpack_client.experiment import Experiment

__all__ = [
    # Core
    "Settings",
    "settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    # Errors
    "SixpackError",
    "ValidationError",
    "ConfigurationError",
    "IdentityGenerationError",
    "TransportError",
    "ServerError",
    "DecodeError",
    # Identity and request context
    "is_valid_name",
    "IdentityStore",
    "RequestContext",
    "SimpleRequestContext",
    "letter_identity",
    "resolve_identity",
    "uuid_identity",
    # Requests
    "RequestBuilder",
    "RequestParameters",
    "from_request",
    "with_alternatives",
    "with_client_id",
    "with_force",
    "with_ip_address",
    "with_kpi",
    "with_traffic_fraction",
    "with_user_agent",
    # Clients
    "Outcome",
    "SixpackResponse",
    "Transport",
    "AsyncTransport",
    "Client",
    "AsyncClient",
    "get_client",
    "new_client",
    "Experiment",
]
