"""Bearer token verification: parse, expiry, signature, issuer, role.

Tokens are issued by the external auth provider and verified here with the
shared secret. Failures raise TokenVerificationException carrying the
failed check; request handling recovers by treating the caller as
anonymous (see resolve_principal).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from jose import JWTError, jwt

from app.application.dtos.auth import Claims, Principal
from app.domain.enums import TokenErrorKind
from app.domain.exceptions import TokenVerificationException
from app.shared.utils.datetime import from_timestamp_utc, utc_now

logger = logging.getLogger(__name__)

# Only the signature is checked by jose; expiry and issuer are checked here
# so they can be reported in a fixed order.
_SIGNATURE_ONLY = {
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


def _optional_str(payload: dict[str, Any], name: str) -> str | None:
    value = payload.get(name)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class TokenVerifier:
    """Stateless verifier for HS-signed bearer tokens.

    Check order: MALFORMED, EXPIRED, BAD_SIGNATURE, ISSUER_MISMATCH,
    MISSING_ROLE. Expiry is checked before the signature, so an expired
    token reports EXPIRED whether or not its signature is valid.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expected_issuer: str | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the verifier.

        Args:
            secret: Shared signing secret of the auth provider.
            algorithm: JWS algorithm tokens must be signed with.
            expected_issuer: Issuer tokens must carry when they carry one;
                None disables the issuer check.
            clock: Returns current UTC time (injectable for tests).
        """
        self._secret = secret
        self._algorithm = algorithm
        self._expected_issuer = expected_issuer.rstrip("/") if expected_issuer else None
        self._clock = clock

    def verify(self, token: str) -> Claims:
        """Verify token and return its claims.

        Raises:
            TokenVerificationException: kind names the first failed check.
        """
        payload = self._parse(token)
        expires_at = self._check_expiry(payload)
        self._check_signature(token)
        issuer = _optional_str(payload, "iss")
        if (
            issuer is not None
            and self._expected_issuer is not None
            and issuer.rstrip("/") != self._expected_issuer
        ):
            raise TokenVerificationException(
                TokenErrorKind.ISSUER_MISMATCH, f"Unexpected token issuer: {issuer}"
            )
        role = _optional_str(payload, "role")
        if role is None:
            raise TokenVerificationException(TokenErrorKind.MISSING_ROLE)
        return Claims(
            subject=_optional_str(payload, "sub"),
            role=role,
            expires_at=expires_at,
            email=_optional_str(payload, "email"),
            session_id=_optional_str(payload, "session_id"),
            assurance_level=_optional_str(payload, "aal"),
            issuer=issuer,
        )

    def resolve_principal(self, token: str | None) -> Principal | None:
        """Return the Principal for a valid token, else None (anonymous).

        Verification failures are logged at warning level and never raised.
        """
        if not token or not token.strip():
            return None
        try:
            claims = self.verify(token.strip())
        except TokenVerificationException as e:
            logger.warning("Token rejected: %s", e.kind.value)
            return None
        return Principal.from_claims(claims)

    def _parse(self, token: str) -> dict[str, Any]:
        try:
            payload = jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenVerificationException(
                TokenErrorKind.MALFORMED, "Token could not be parsed"
            ) from e
        if not isinstance(payload, dict):
            raise TokenVerificationException(
                TokenErrorKind.MALFORMED, "Token payload is not an object"
            )
        return payload

    def _check_expiry(self, payload: dict[str, Any]) -> datetime:
        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, int | float):
            raise TokenVerificationException(
                TokenErrorKind.MALFORMED, "Token has no numeric exp claim"
            )
        try:
            expires_at = from_timestamp_utc(exp)
        except (OverflowError, OSError, ValueError) as e:
            raise TokenVerificationException(
                TokenErrorKind.MALFORMED, "Token exp claim is out of range"
            ) from e
        if expires_at <= self._clock():
            raise TokenVerificationException(TokenErrorKind.EXPIRED, "Token has expired")
        return expires_at

    def _check_signature(self, token: str) -> None:
        try:
            jwt.decode(
                token, self._secret, algorithms=[self._algorithm], options=_SIGNATURE_ONLY
            )
        except JWTError as e:
            raise TokenVerificationException(
                TokenErrorKind.BAD_SIGNATURE, "Token signature verification failed"
            ) from e
