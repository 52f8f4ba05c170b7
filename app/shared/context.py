"""Request context management using contextvars.

Async-safe storage for request-scoped data read by logging (request ID).
Set by RequestIDMiddleware; reads outside a request return "-".
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def set_request_id(request_id: str) -> Token[str]:
    """Set the current request ID. Returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    """Restore the request ID that was current before set_request_id."""
    _request_id.reset(token)


def get_request_id() -> str:
    """Return the current request's ID, or '-' outside a request."""
    return _request_id.get()
