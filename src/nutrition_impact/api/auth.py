"""Bearer token authentication for API routes."""

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Depends, Header, Request

from nutrition_impact.errors import UnauthenticatedError

if TYPE_CHECKING:
    from nutrition_impact.containers import AppContainer


def _get_api_tokens(request: Request) -> dict[str, UUID]:
    container: AppContainer = request.app.state.container
    return container.api_tokens


async def require_user(
    authorization: str | None = Header(default=None),
    api_tokens: dict[str, UUID] = Depends(_get_api_tokens),
) -> UUID:
    """Resolve the calling user from an ``Authorization: Bearer`` header."""
    if not authorization:
        raise UnauthenticatedError
    scheme, _, token = authorization.partition(" ")
    user_id = api_tokens.get(token.strip())
    if scheme.lower() != "bearer" or user_id is None:
        raise UnauthenticatedError
    return user_id
