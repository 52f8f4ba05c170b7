"""JWT creation for scripts and tests.

Request paths only verify tokens (app.application.services.token_verifier);
tokens are issued by the external auth provider. create_access_token signs
a token with the configured secret so local tooling can call the API.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import jwt

from app.core.config import get_settings


def create_access_token(
    claims: dict[str, Any],
    expires_delta: timedelta | None = None,
    *,
    secret: str | None = None,
) -> str:
    """Create a signed JWT with the given claims.

    Args:
        claims: Claims to encode (e.g. sub, role, email, aal, session_id, iss).
        expires_delta: TTL from now; defaults to one hour. Ignored when
            claims already carry exp.
        secret: Signing secret; defaults to settings.jwt_secret.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = claims.copy()
    if "exp" not in to_encode:
        to_encode["exp"] = datetime.now(UTC) + (expires_delta or timedelta(hours=1))
    encoded = jwt.encode(
        to_encode,
        secret if secret is not None else settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )
    return cast(str, encoded)
