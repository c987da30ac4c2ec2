"""Security headers middleware for the JSON admin API.

Account payloads carry personal data, so responses are marked no-store in
addition to the usual hardening headers. Headers already set by a route
win. Raw ASGI.
"""

from typing import Callable

API_SECURITY_HEADERS: dict[str, str] = {
    "Cache-Control": "no-store",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

# Interactive docs load scripts and styles; the strict CSP would blank them.
_DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Add API_SECURITY_HEADERS (or headers) to every HTTP response."""
    defaults = [
        (name.lower().encode(), value.encode())
        for name, value in (headers or API_SECURITY_HEADERS).items()
    ]
    docs_defaults = [h for h in defaults if h[0] != b"content-security-policy"]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        extra = docs_defaults if scope.get("path", "").startswith(_DOCS_PATHS) else defaults

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                current = list(message.get("headers", []))
                present = {name.lower() for name, _ in current}
                current.extend(h for h in extra if h[0] not in present)
                message["headers"] = current
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
