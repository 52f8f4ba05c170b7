"""TokenVerifier tests: check order, claim extraction, and principal resolution."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.application.services.token_verifier import TokenVerifier
from app.domain.enums import Role, TokenErrorKind
from app.domain.exceptions import TokenVerificationException

SECRET = "unit-test-secret"
ISSUER = "https://project.supabase.co/auth/v1"
NOW = datetime(2030, 5, 1, 12, 0, tzinfo=UTC)


def _token(secret: str = SECRET, exp_offset: int | None = 3600, **claims) -> str:
    payload = {"sub": "user-1", "role": "authenticated", **claims}
    if exp_offset is not None:
        payload["exp"] = int((NOW + timedelta(seconds=exp_offset)).timestamp())
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def verifier() -> TokenVerifier:
    return TokenVerifier(SECRET, expected_issuer=ISSUER, clock=lambda: NOW)


def _kind(verifier: TokenVerifier, token: str) -> TokenErrorKind:
    with pytest.raises(TokenVerificationException) as exc_info:
        verifier.verify(token)
    return exc_info.value.kind


def test_valid_token_returns_claims(verifier: TokenVerifier) -> None:
    """A valid token yields its subject, role, email, session and assurance level."""
    claims = verifier.verify(
        _token(email="ana@example.com", session_id="s-1", aal="aal2", iss=ISSUER)
    )
    assert claims.subject == "user-1"
    assert claims.role == "authenticated"
    assert claims.email == "ana@example.com"
    assert claims.session_id == "s-1"
    assert claims.assurance_level == "aal2"
    assert claims.expires_at == NOW + timedelta(hours=1)


def test_garbage_is_malformed(verifier: TokenVerifier) -> None:
    assert _kind(verifier, "not-a-jwt") is TokenErrorKind.MALFORMED


def test_missing_exp_is_malformed(verifier: TokenVerifier) -> None:
    assert _kind(verifier, _token(exp_offset=None)) is TokenErrorKind.MALFORMED


def test_non_numeric_exp_is_malformed(verifier: TokenVerifier) -> None:
    token = jwt.encode({"role": "anon", "exp": "tomorrow"}, SECRET, algorithm="HS256")
    assert _kind(verifier, token) is TokenErrorKind.MALFORMED


def test_expired_token(verifier: TokenVerifier) -> None:
    assert _kind(verifier, _token(exp_offset=-60)) is TokenErrorKind.EXPIRED


def test_exp_equal_to_now_is_expired(verifier: TokenVerifier) -> None:
    assert _kind(verifier, _token(exp_offset=0)) is TokenErrorKind.EXPIRED


def test_expired_wins_over_bad_signature(verifier: TokenVerifier) -> None:
    """Expiry is checked before the signature."""
    token = _token(secret="someone-else", exp_offset=-60)
    assert _kind(verifier, token) is TokenErrorKind.EXPIRED


def test_bad_signature(verifier: TokenVerifier) -> None:
    assert _kind(verifier, _token(secret="someone-else")) is TokenErrorKind.BAD_SIGNATURE


def test_issuer_mismatch(verifier: TokenVerifier) -> None:
    token = _token(iss="https://evil.example.com/auth/v1")
    assert _kind(verifier, token) is TokenErrorKind.ISSUER_MISMATCH


def test_issuer_trailing_slash_is_ignored(verifier: TokenVerifier) -> None:
    assert verifier.verify(_token(iss=ISSUER + "/")).issuer == ISSUER + "/"


def test_absent_issuer_is_accepted(verifier: TokenVerifier) -> None:
    assert verifier.verify(_token()).issuer is None


def test_missing_role(verifier: TokenVerifier) -> None:
    token = jwt.encode(
        {"sub": "x", "exp": int((NOW + timedelta(hours=1)).timestamp())},
        SECRET,
        algorithm="HS256",
    )
    assert _kind(verifier, token) is TokenErrorKind.MISSING_ROLE


def test_resolve_principal_maps_provider_roles(verifier: TokenVerifier) -> None:
    """Provider role spellings map onto Role; unknown roles fail closed."""
    assert verifier.resolve_principal(_token(role="anon")).role is Role.ANONYMOUS
    assert verifier.resolve_principal(_token(role="service_role")).role is Role.SERVICE
    assert verifier.resolve_principal(_token(role="superuser")).role is Role.UNKNOWN


def test_resolve_principal_returns_none_on_failure(verifier: TokenVerifier) -> None:
    """Invalid or absent tokens resolve to no principal instead of raising."""
    assert verifier.resolve_principal(None) is None
    assert verifier.resolve_principal("   ") is None
    assert verifier.resolve_principal(_token(exp_offset=-1)) is None


def test_principal_mfa_flag(verifier: TokenVerifier) -> None:
    assert verifier.resolve_principal(_token(aal="aal2")).has_mfa is True
    assert verifier.resolve_principal(_token(aal="aal1")).has_mfa is False
