"""
Ambient web-request capabilities.

The client never depends on a web framework. Anything that can read and
write the visitor's identity and describe the incoming request can drive
the ``*_from_request`` flows; see
:mod:`sixpack_client.integrations.fastapi` for a Starlette-backed adapter.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class IdentityStore(Protocol):
    """Reads and persists the visitor's client id (usually a cookie)."""

    def read_identity(self) -> Optional[str]:
        ...

    def write_identity(self, value: str, max_age: int) -> None:
        ...


@runtime_checkable
class RequestContext(IdentityStore, Protocol):
    """Identity store plus the request attributes sent to the service."""

    @property
    def remote_addr(self) -> Optional[str]:
        ...

    @property
    def user_agent(self) -> Optional[str]:
        ...

    def query_param(self, name: str) -> Optional[str]:
        ...


@dataclass
class SimpleRequestContext:
    """
    In-memory request context.

    Useful for non-web callers and for tests: ``cookies`` plays the role of
    the cookie jar and every identity write is recorded in ``written``.
    """

    remote_addr: Optional[str] = None
    user_agent: Optional[str] = None
    query: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    cookie_name: str = "sixpack_client_id"
    written: List[Tuple[str, int]] = field(default_factory=list)

    def read_identity(self) -> Optional[str]:
        return self.cookies.get(self.cookie_name)

    def write_identity(self, value: str, max_age: int) -> None:
        self.cookies[self.cookie_name] = value
        self.written.append((value, max_age))

    def query_param(self, name: str) -> Optional[str]:
        return self.query.get(name)
