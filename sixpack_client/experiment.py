"""
Experiment definitions.

    button_color = Experiment(
        name="button-color",
        alternatives=("blue", "green", "red"),
        fraction=0.5,
        base_url="http://localhost:5000",
    )
    alternative, response, error = button_color.participate(client_id=user_id)

An :class:`Experiment` translates its attributes and the positional
visitor inputs into options and hands them to a :class:`Client`, so both
calling styles share one validation and request path.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from sixpack_client.client import Client, get_client
from sixpack_client.context import RequestContext
from sixpack_client.models import Outcome
from sixpack_client.options import (
    Option,
    from_request,
    with_alternatives,
    with_client_id,
    with_force,
    with_ip_address,
    with_kpi,
    with_traffic_fraction,
    with_user_agent,
)
from sixpack_client.validation import (
    validate_alternatives,
    validate_experiment_name,
    validate_traffic_fraction,
)


@dataclass(frozen=True)
class Experiment:
    """
    A named A/B(/n) test.

    Attributes:
        name: Experiment name
        alternatives: Ordered alternatives; the first is the fallback.
            May be empty for an experiment only used to record conversions.
        fraction: Fraction of traffic to include (0.0-1.0)
        base_url: Service root; defaults to ``settings.base_url``
    """

    name: str
    alternatives: Sequence[str] = ()
    fraction: float = 1.0
    base_url: Optional[str] = None

    def __post_init__(self):
        validate_experiment_name(self.name)
        object.__setattr__(self, "alternatives", tuple(self.alternatives))
        if self.alternatives:
            validate_alternatives(self.alternatives)
        object.__setattr__(self, "fraction", validate_traffic_fraction(self.fraction))

    @property
    def default_alternative(self) -> Optional[str]:
        return self.alternatives[0] if self.alternatives else None

    def _client(self, client: Optional[Client]) -> Client:
        return client or get_client(self.base_url)

    def _participation_options(self) -> List[Option]:
        return [
            with_alternatives(*self.alternatives),
            with_traffic_fraction(self.fraction),
        ]

    def _conversion_options(self) -> List[Option]:
        # Alternatives only feed the local fallback; they are not sent
        return [with_alternatives(*self.alternatives)] if self.alternatives else []

    def participate(
        self,
        client_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        force: Optional[str] = None,
        client: Optional[Client] = None,
    ) -> Outcome:
        """
        Assign a visitor to one of the alternatives.

        Args:
            client_id: Visitor id; generated (not persisted) when empty
            ip_address: Visitor IP address
            user_agent: Visitor user agent
            force: Pin the assignment to this alternative
            client: Client to use instead of the shared one

        Returns:
            Outcome with the chosen alternative
        """
        options = self._participation_options() + [
            with_client_id(client_id),
            with_ip_address(ip_address),
            with_user_agent(user_agent),
        ]
        if force:
            options.append(with_force(force))
        return self._client(client).participate(self.name, *options)

    def participate_from_request(
        self, context: RequestContext, client: Optional[Client] = None
    ) -> Outcome:
        """Participate using the identity, address, user agent and force override of a web request."""
        options = self._participation_options() + [from_request(context)]
        return self._client(client).participate(self.name, *options)

    def convert(
        self,
        client_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        kpi: Optional[str] = None,
        client: Optional[Client] = None,
    ) -> Outcome:
        """Record a conversion, optionally tagged with ``kpi``."""
        options = self._conversion_options() + [
            with_client_id(client_id),
            with_ip_address(ip_address),
            with_user_agent(user_agent),
            with_kpi(kpi),
        ]
        return self._client(client).convert(self.name, *options)

    def convert_from_request(
        self,
        context: RequestContext,
        kpi: Optional[str] = None,
        client: Optional[Client] = None,
    ) -> Outcome:
        options = self._conversion_options() + [from_request(context), with_kpi(kpi)]
        return self._client(client).convert(self.name, *options)
