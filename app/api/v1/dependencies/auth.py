"""Token and role dependencies (composition root).

The caller's identity comes from a bearer token (Authorization header) or,
when absent, the raw api-key header. Invalid tokens never fail the request
by themselves: the caller is anonymous and route permissions decide.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.auth import Principal
from app.application.services.authorization_service import AuthorizationService
from app.application.services.token_verifier import TokenVerifier
from app.core.config import get_settings
from app.domain.enums import Operation, Role
from app.domain.exceptions import AuthenticationException, AuthorizationException

_http_bearer = HTTPBearer(auto_error=False)


def get_token_verifier() -> TokenVerifier:
    """TokenVerifier configured from settings (secret, algorithm, issuer)."""
    settings = get_settings()
    return TokenVerifier(
        secret=settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        expected_issuer=settings.expected_issuer,
    )


def get_authorization_service() -> AuthorizationService:
    """Role authorizer over the static permission table."""
    return AuthorizationService()


def extract_token(
    request: Request, credentials: HTTPAuthorizationCredentials | None
) -> str | None:
    """Bearer credentials first, then the raw api-key header; None when neither."""
    if credentials is not None and credentials.credentials.strip():
        return credentials.credentials.strip()
    raw = request.headers.get(get_settings().api_key_header)
    if raw and raw.strip():
        return raw.strip()
    return None


async def get_current_principal_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> Principal | None:
    """Return the verified caller, or None (no token or token rejected)."""
    principal = verifier.resolve_principal(extract_token(request, credentials))
    request.state.principal = principal
    return principal


def require_operation(
    operation: Operation,
) -> Callable[..., Awaitable[Principal | None]]:
    """Dependency factory: allow the request only if the caller's role permits operation.

    No valid token is treated as the anonymous role. A denial raises
    AuthenticationException (401) when the caller has no valid token and
    AuthorizationException (403) when the caller is verified but lacks the
    permission.
    """

    async def _require(
        principal: Annotated[Principal | None, Depends(get_current_principal_optional)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal | None:
        role = principal.role if principal is not None else Role.ANONYMOUS
        if auth_svc.authorize(role, operation):
            return principal
        if principal is None:
            raise AuthenticationException(
                f"Authentication required for {operation.value}"
            )
        raise AuthorizationException(operation=operation.value, role=role.value)

    return _require
