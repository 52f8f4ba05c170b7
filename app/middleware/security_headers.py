"""Security headers middleware.

Adds security-related response headers to API responses. The interactive
docs pages load scripts and styles, so they are served without the strict
Content-Security-Policy. Raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}
DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


def SecurityHeadersMiddleware(
    app: Callable,
    headers: dict[str, str] | None = None,
    csp_exempt_paths: tuple[str, ...] = DOCS_PATHS,
) -> Callable:
    """Set security headers on responses (handler-set headers win)."""
    resolved = headers if headers is not None else DEFAULT_HEADERS.copy()
    header_list = [(k.lower().encode(), v.encode()) for k, v in resolved.items()]
    csp = b"content-security-policy"

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        skip_csp = scope.get("path", "").startswith(csp_exempt_paths)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                for name_b, value_b in header_list:
                    if name_b in seen or (skip_csp and name_b == csp):
                        continue
                    headers.append((name_b, value_b))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
