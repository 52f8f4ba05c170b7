"""Domain enumerations for the exam calendar application.

Enums represent fixed sets of domain values (roles, operations, sort
direction, token failure kinds).
"""

from enum import Enum


class Role(str, Enum):
    """Caller role derived from the token's role claim.

    UNKNOWN is assigned to any unrecognized claim value and carries no
    permissions (fail closed).
    """

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
    SERVICE = "service"
    UNKNOWN = "unknown"

    @classmethod
    def from_claim(cls, value: str | None) -> "Role":
        """Map a raw role claim (provider spelling) to a Role.

        Accepts the provider's spellings ('anon', 'service_role') and the
        canonical names. Anything else, including None, is UNKNOWN.
        """
        if not value:
            return cls.UNKNOWN
        return _ROLE_ALIASES.get(value.strip().lower(), cls.UNKNOWN)

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]


_ROLE_ALIASES: dict[str, Role] = {
    "anon": Role.ANONYMOUS,
    "anonymous": Role.ANONYMOUS,
    "authenticated": Role.AUTHENTICATED,
    "service_role": Role.SERVICE,
    "service": Role.SERVICE,
}


class Operation(str, Enum):
    """Operations guarded by the role authorizer."""

    READ_LIST = "read_list"
    READ_ONE = "read_one"
    SEARCH = "search"
    BROWSE_REFERENCE = "browse_reference"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE_CACHE = "manage_cache"


class SortDirection(str, Enum):
    """Sort direction for paginated queries."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        """Return DESC for 'desc' (any case); everything else is ASC."""
        if value and value.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


class TokenErrorKind(str, Enum):
    """Why a bearer token was rejected."""

    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    ISSUER_MISMATCH = "issuer_mismatch"
    MISSING_ROLE = "missing_role"
