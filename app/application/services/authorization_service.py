"""Role authorization: static role -> permitted operations table."""

from __future__ import annotations

from app.domain.enums import Operation, Role

_READ_OPERATIONS = frozenset(
    {
        Operation.READ_LIST,
        Operation.READ_ONE,
        Operation.SEARCH,
        Operation.BROWSE_REFERENCE,
    }
)
_AUTHENTICATED_OPERATIONS = _READ_OPERATIONS | {Operation.CREATE, Operation.UPDATE}
_SERVICE_OPERATIONS = _AUTHENTICATED_OPERATIONS | {
    Operation.DELETE,
    Operation.MANAGE_CACHE,
}

ROLE_PERMISSIONS: dict[Role, frozenset[Operation]] = {
    Role.ANONYMOUS: _READ_OPERATIONS,
    Role.AUTHENTICATED: frozenset(_AUTHENTICATED_OPERATIONS),
    Role.SERVICE: frozenset(_SERVICE_OPERATIONS),
    Role.UNKNOWN: frozenset(),
}


class AuthorizationService:
    """Pure permission check against ROLE_PERMISSIONS.

    Denial is a boolean here; the HTTP dependency turns it into a 401 or
    403 depending on whether the caller presented a valid token.
    """

    def __init__(
        self, permissions: dict[Role, frozenset[Operation]] | None = None
    ) -> None:
        self._permissions = permissions if permissions is not None else ROLE_PERMISSIONS

    def permitted_operations(self, role: Role) -> frozenset[Operation]:
        """Return the operations role may perform (empty for unknown roles)."""
        return self._permissions.get(role, frozenset())

    def authorize(self, role: Role, operation: Operation) -> bool:
        """Return True if role may perform operation."""
        return operation in self.permitted_operations(role)
