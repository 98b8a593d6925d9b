"""Access logging middleware for FastAPI/Uvicorn."""

import logging
import sys
import time
from ipaddress import IPv6Address

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("devicename.access")

_RESET = "\033[0m"
_STATUS_OK = "\033[92m"  # 2xx (bright green)
_STATUS_REDIRECT = "\033[32m"  # 1xx, 3xx (green)
_STATUS_CLIENT_ERR = "\033[0;31m"  # 4xx (red)
_STATUS_SERVER_ERR = "\033[1;31m"  # 5xx (bright red)
_METHOD_READ = "\033[0;34m"  # GET, HEAD, OPTIONS (blue)
_METHOD_WRITE = "\033[1;34m"  # POST, PUT, DELETE, PATCH (bright blue)
_HOST = "\033[1;30m"  # hostname (dark grey)
_TIMING = "\033[2m"  # timing (dim)


def format_client_ip(ip: str) -> str:
    """Format client IP, shortening IPv6 to its /64 network."""
    if not ip or ip == "-":
        return "-"
    if ":" not in ip:
        return ip
    try:
        network = int(IPv6Address(ip)) >> 64 << 64
    except ValueError:
        return ip
    return str(IPv6Address(network))


def status_color(status: int) -> str:
    if 200 <= status < 300:
        return _STATUS_OK
    if status < 400:
        return _STATUS_REDIRECT
    if status < 500:
        return _STATUS_CLIENT_ERR
    return _STATUS_SERVER_ERR


def method_color(method: str) -> str:
    if method in ("GET", "HEAD", "OPTIONS"):
        return _METHOD_READ
    return _METHOD_WRITE


def format_access_log(
    client: str,
    status: int,
    method: str,
    host: str,
    path: str,
    duration_ms: float,
    use_color: bool | None = None,
) -> str:
    """Format access log line: "IP STATUS METHOD host/path TIMING"."""
    if use_color is None:
        use_color = sys.stderr.isatty()

    ip = format_client_ip(client).ljust(15)  # IPv4 max 15 chars
    timing = f"{duration_ms:.0f}ms"
    method = method.ljust(7)  # Longest method is OPTIONS (7)

    if use_color:
        return (
            f"{ip} {status_color(status)}{status}{_RESET} "
            f"{method_color(method.strip())}{method}{_RESET} "
            f"{_HOST}{host}{_RESET}{path} {_TIMING}{timing}{_RESET}"
        )
    return f"{ip} {status} {method} {host}{path} {timing}"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Middleware that logs HTTP requests with custom format."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        client = request.client.host if request.client else "-"
        host = request.headers.get("host", "-")
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        logger.info(
            format_access_log(
                client, response.status_code, request.method, host, path, duration_ms
            )
        )
        return response


def configure_access_logging():
    """Send the access logger to stderr without the root logger's prefix."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
