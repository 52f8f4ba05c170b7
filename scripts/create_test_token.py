"""Print a signed bearer token for calling the API locally.

Tokens are normally issued by the external auth provider; this signs one
with JWT_SECRET so curl / the docs page can be used against a dev server.

Usage:
    uv run python -m scripts.create_test_token <role> [subject] [ttl_minutes]
Role is one of: anon, authenticated, service_role.
"""

import sys
from datetime import timedelta

from dotenv import load_dotenv

from app.core.config import get_settings
from app.infrastructure.security.jwt import create_access_token

_ROLES = ("anon", "authenticated", "service_role")


def main() -> None:
    """Build claims from argv and print the token."""
    if len(sys.argv) < 2 or sys.argv[1] not in _ROLES:
        print(
            "Usage: uv run python -m scripts.create_test_token "
            "<anon|authenticated|service_role> [subject] [ttl_minutes]",
            file=sys.stderr,
        )
        sys.exit(1)
    load_dotenv(override=True)
    settings = get_settings()

    role = sys.argv[1]
    claims: dict[str, str] = {"role": role}
    if len(sys.argv) > 2:
        claims["sub"] = sys.argv[2]
    if settings.expected_issuer:
        claims["iss"] = settings.expected_issuer
    ttl = int(sys.argv[3]) if len(sys.argv) > 3 else 60

    token = create_access_token(claims, expires_delta=timedelta(minutes=ttl))
    print(token)
    print(f"\ncurl -H 'Authorization: Bearer {token}' http://localhost:8000/api/v1/exams", file=sys.stderr)


if __name__ == "__main__":
    main()
