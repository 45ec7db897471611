"""
FastAPI / Starlette integration.

    @app.get("/")
    def index(context: FastAPIRequestContext = Depends(get_request_context)):
        alternative, _, _ = BUTTON_COLOR.participate_from_request(context)
        ...

The visitor id lives in the ``sixpack_client_id`` cookie. A freshly
generated id is set on the outgoing response and remembered for the rest
of the request, so several experiments in one request share it.
"""

from typing import Optional

from fastapi import Request, Response

from sixpack_client.core.config import Settings, get_settings


class FastAPIRequestContext:
    """Request context backed by a Starlette request/response pair."""

    def __init__(self, request: Request, response: Response, settings: Optional[Settings] = None):
        self.request = request
        self.response = response
        self.settings = get_settings(settings)
        self._identity: Optional[str] = None

    def read_identity(self) -> Optional[str]:
        return self._identity or self.request.cookies.get(self.settings.cookie_name)

    def write_identity(self, value: str, max_age: int) -> None:
        self._identity = value
        self.response.set_cookie(
            key=self.settings.cookie_name,
            value=value,
            max_age=max_age,
            expires=max_age,
        )

    @property
    def remote_addr(self) -> Optional[str]:
        return self.request.client.host if self.request.client else None

    @property
    def user_agent(self) -> Optional[str]:
        return self.request.headers.get("user-agent")

    def query_param(self, name: str) -> Optional[str]:
        return self.request.query_params.get(name)


def get_request_context(request: Request, response: Response) -> FastAPIRequestContext:
    """FastAPI dependency building a :class:`FastAPIRequestContext`."""
    return FastAPIRequestContext(request, response)
