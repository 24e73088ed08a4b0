"""
Utility helpers shared across routers/middleware.
"""

from starlette.requests import HTTPConnection


def client_ip(request: HTTPConnection) -> str:
    """Caller address: first X-Forwarded-For entry, else the transport peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
