"""
Response envelope returned by the Sixpack service and the call outcome
handed back to callers.
"""

from typing import NamedTuple, Optional
from pydantic import BaseModel, ConfigDict

from sixpack_client.core.exceptions import SixpackError


class AlternativeInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None


class ExperimentInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None
    version: Optional[int] = None


class SixpackResponse(BaseModel):
    """Decoded JSON body of a participate or convert call. Every field is optional on the wire."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: Optional[str] = None
    client_id: Optional[str] = None
    message: Optional[str] = None
    alternative: Optional[AlternativeInfo] = None
    experiment: Optional[ExperimentInfo] = None

    @property
    def alternative_name(self) -> Optional[str]:
        return self.alternative.name if self.alternative else None

    @property
    def experiment_name(self) -> Optional[str]:
        return self.experiment.name if self.experiment else None

    @property
    def experiment_version(self) -> Optional[int]:
        return self.experiment.version if self.experiment else None


class Outcome(NamedTuple):
    """
    Result of a participate or convert call.

    ``alternative`` is always usable: the service's choice on success, the
    local default (forced value or first alternative) otherwise. ``error``
    holds the recovered failure, if any.
    """

    alternative: Optional[str]
    response: Optional[SixpackResponse]
    error: Optional[SixpackError]

    @property
    def ok(self) -> bool:
        return self.error is None
