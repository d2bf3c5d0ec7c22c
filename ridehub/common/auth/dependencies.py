"""
FastAPI dependencies for authentication and authorization.

Each dependency returns the ``AuthContext`` it checked, so route handlers
receive the authenticated identity as an explicit parameter.
"""

from typing import Callable, Optional

from fastapi import Depends, Header, Request

from ridehub.common.auth.middleware import (
    authenticate,
    authorize_role,
    ensure_active_account,
)
from ridehub.common.auth.user import AuthContext, UserRole
from ridehub.store.base import UserStore


def get_store(request: Request) -> UserStore:
    """The store instance injected into the application at construction."""
    return request.app.state.store


async def get_auth_context(authorization: Optional[str] = Header(None)) -> AuthContext:
    """Authenticate the request from its bearer token."""
    return authenticate(authorization)


def require_role(*roles: UserRole) -> Callable[..., AuthContext]:
    """
    Build a dependency that admits only the given roles.

    Args:
        *roles: The roles allowed to call the endpoint
    """
    async def dependency(context: AuthContext = Depends(get_auth_context)) -> AuthContext:
        return authorize_role(context, roles)

    return dependency


def require_active_account(
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
) -> AuthContext:
    """Admit only accounts whose stored status is active."""
    ensure_active_account(store, context)
    return context
