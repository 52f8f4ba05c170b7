"""Application services: token verification and role authorization."""

from app.application.services.authorization_service import (
    ROLE_PERMISSIONS,
    AuthorizationService,
)
from app.application.services.token_verifier import TokenVerifier

__all__ = ["ROLE_PERMISSIONS", "AuthorizationService", "TokenVerifier"]
