"""HTTP middleware: request ID and security headers.

Applied in main app; order matters (first added = outermost).
No request-timeout middleware: in-flight queries are never cancelled.
"""

from app.middleware.request_id import RequestIDMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["RequestIDMiddleware", "SecurityHeadersMiddleware"]
