"""Security: JWT creation for local tooling."""

from app.infrastructure.security.jwt import create_access_token

__all__ = ["create_access_token"]
