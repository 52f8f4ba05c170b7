"""DTOs for token verification and the per-request caller identity."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import Role

MFA_ASSURANCE_LEVEL = "aal2"


@dataclass(frozen=True)
class Claims:
    """Verified token claims (signature, expiry, and issuer already checked)."""

    subject: str | None
    role: str
    expires_at: datetime
    email: str | None = None
    session_id: str | None = None
    assurance_level: str | None = None
    issuer: str | None = None


@dataclass(frozen=True)
class Principal:
    """Caller identity built per request from verified claims. Never persisted."""

    subject_id: str | None
    role: Role
    token_expiry: datetime
    email: str | None = None
    session_id: str | None = None
    mfa_level: str | None = None

    @property
    def has_mfa(self) -> bool:
        return self.mfa_level == MFA_ASSURANCE_LEVEL

    @classmethod
    def from_claims(cls, claims: Claims) -> "Principal":
        return cls(
            subject_id=claims.subject,
            role=Role.from_claim(claims.role),
            token_expiry=claims.expires_at,
            email=claims.email,
            session_id=claims.session_id,
            mfa_level=claims.assurance_level,
        )
