"""
Request parameter construction for participate and convert calls.

Callers describe a request as a sequence of options, small callables
applied in order to a :class:`RequestBuilder`::

    client.participate(
        "button-color",
        with_alternatives("blue", "green"),
        with_client_id(user_id),
        with_traffic_fraction(0.5),
    )

Later options override earlier ones for single-valued keys. Invalid input
raises :class:`~sixpack_client.core.exceptions.ValidationError` while the
options are applied, before anything is sent.
"""

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from sixpack_client.context import IdentityStore, RequestContext
from sixpack_client.core.config import Settings, get_settings
from sixpack_client.core.exceptions import ValidationError
from sixpack_client.core.logging import get_logger
from sixpack_client.identity import IdentityGenerator, resolve_identity, uuid_identity
from sixpack_client.validation import (
    is_valid_name,
    validate_alternatives,
    validate_experiment_name,
    validate_force,
    validate_traffic_fraction,
)

PARTICIPATE_ENDPOINT = "/participate"
CONVERT_ENDPOINT = "/convert"

DEFAULT_TRAFFIC_FRACTION = 1.0

logger = get_logger(__name__)


class RequestParameters:
    """
    Ordered query parameters.

    ``alternatives`` holds several values in insertion order; every other
    key holds one value and the last write wins.
    """

    MULTI_VALUED = frozenset({"alternatives"})

    def __init__(self):
        self._values: Dict[str, List[str]] = {}

    def set(self, key: str, value) -> None:
        self._values[key] = [str(value)]

    def add(self, key: str, value) -> None:
        if key not in self.MULTI_VALUED:
            raise KeyError(f"{key!r} is single-valued, use set()")
        self._values.setdefault(key, []).append(str(value))

    def replace_all(self, key: str, values: Iterable) -> None:
        self._values[key] = [str(v) for v in values]

    def get(self, key: str) -> Optional[str]:
        values = self._values.get(key)
        return values[0] if values else None

    def get_all(self, key: str) -> List[str]:
        return list(self._values.get(key, []))

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def items(self) -> List[Tuple[str, str]]:
        """Flattened ``(key, value)`` pairs, ready for URL encoding."""
        return [(key, value) for key, values in self._values.items() for value in values]

    def to_dict(self) -> Dict[str, object]:
        return {
            key: list(values) if key in self.MULTI_VALUED else values[0]
            for key, values in self._values.items()
        }

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RequestParameters({self.to_dict()!r})"


class RequestBuilder:
    """In-progress request for one experiment, mutated by options."""

    def __init__(
        self,
        experiment: str,
        settings: Optional[Settings] = None,
        identity_generator: Optional[IdentityGenerator] = None,
    ):
        self.experiment = experiment
        self.settings = get_settings(settings)
        self.identity_generator = identity_generator or uuid_identity
        self.params = RequestParameters()
        self.alternatives: List[str] = []
        self.identity_store: Optional[IdentityStore] = None

    @property
    def force(self) -> Optional[str]:
        return self.params.get("force")

    @property
    def default_alternative(self) -> Optional[str]:
        """Local fallback: the forced value, else the first alternative."""
        if self.force:
            return self.force
        if self.alternatives:
            return self.alternatives[0]
        return None

    def apply(self, options: Sequence["Option"]) -> "RequestBuilder":
        if not options:
            raise ValidationError("At least one option is required")
        for option in options:
            option(self)
        return self

    def _finish(self) -> RequestParameters:
        validate_experiment_name(self.experiment)
        if not self.params.get("client_id"):
            client_id = resolve_identity(
                store=self.identity_store,
                generator=self.identity_generator,
                max_age=self.settings.cookie_max_age,
            )
            self.params.set("client_id", client_id)
        self.params.set("experiment", self.experiment)
        return self.params

    def build_participate(self) -> RequestParameters:
        """Parameters for ``GET /participate``."""
        validate_alternatives(self.alternatives)
        params = self._finish()
        if "traffic_fraction" not in params:
            params.set("traffic_fraction", _format_fraction(DEFAULT_TRAFFIC_FRACTION))
        params.remove("kpi")
        return params

    def build_convert(self) -> RequestParameters:
        """Parameters for ``GET /convert``."""
        params = self._finish()
        params.remove("alternatives")
        return params


Option = Callable[[RequestBuilder], None]


def _format_fraction(fraction: float) -> str:
    return "%.2f" % fraction


def with_client_id(client_id: Optional[str]) -> Option:
    """Use ``client_id`` verbatim. An empty value leaves the id to be generated."""
    def apply(builder: RequestBuilder) -> None:
        if client_id:
            builder.params.set("client_id", client_id)
            builder.identity_store = None
    return apply


def with_ip_address(ip_address: Optional[str]) -> Option:
    def apply(builder: RequestBuilder) -> None:
        if ip_address:
            builder.params.set("ip_address", ip_address)
    return apply


def with_user_agent(user_agent: Optional[str]) -> Option:
    def apply(builder: RequestBuilder) -> None:
        if user_agent:
            builder.params.set("user_agent", user_agent)
    return apply


def with_force(force: str) -> Option:
    """Pin the assignment to ``force``; it also becomes the local fallback."""
    def apply(builder: RequestBuilder) -> None:
        builder.params.set("force", validate_force(force))
    return apply


def with_traffic_fraction(fraction: float) -> Option:
    def apply(builder: RequestBuilder) -> None:
        builder.params.set("traffic_fraction", _format_fraction(validate_traffic_fraction(fraction)))
    return apply


def with_alternatives(*alternatives: str) -> Option:
    """Set the ordered alternatives; the first one is the local fallback."""
    def apply(builder: RequestBuilder) -> None:
        builder.alternatives = validate_alternatives(alternatives)
        builder.params.replace_all("alternatives", builder.alternatives)
    return apply


def with_kpi(kpi: Optional[str]) -> Option:
    def apply(builder: RequestBuilder) -> None:
        if kpi:
            builder.params.set("kpi", kpi)
    return apply


def from_request(context: RequestContext) -> Option:
    """
    Derive client id, IP address, user agent and force from a web request.

    The client id comes from the context's identity store when the request
    is built; when there is none a new one is generated and written back.
    A later :func:`with_client_id` takes precedence and leaves the store
    untouched. A force override is read
    from the ``sixpack-force-<experiment>`` query parameter; values outside
    the naming grammar are logged and ignored.
    """
    def apply(builder: RequestBuilder) -> None:
        builder.params.remove("client_id")
        builder.identity_store = context

        if context.remote_addr:
            builder.params.set("ip_address", context.remote_addr)
        if context.user_agent:
            builder.params.set("user_agent", context.user_agent)

        force = context.query_param(builder.settings.force_param_prefix + builder.experiment)
        if force:
            if is_valid_name(force):
                builder.params.set("force", force)
            else:
                logger.warning("Ignoring invalid force override", experiment=builder.experiment, force=force)
    return apply
