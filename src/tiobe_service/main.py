"""
Service entry point.

Runs the listener in the foreground. The process supervisor restarts it
on any exit, so every fatal condition simply returns a non-zero code.
"""

from __future__ import annotations

import socket
import sys

import uvicorn

from tiobe_service.app import create_app
from tiobe_service.config import ConfigurationError, get_settings


class BindError(Exception):
    """Raised when the listening address cannot be bound."""


def check_bind(host: str, port: int) -> None:
    """
    Verify that host:port can be bound right now.

    Raises:
        BindError: If the address is invalid or already in use
    """
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)
    except socket.gaierror as e:
        raise BindError(f"Invalid bind address {host}:{port}: {e}") from e

    family, socktype, proto, _canonname, sockaddr = infos[0]
    try:
        with socket.socket(family, socktype, proto) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(sockaddr)
    except OSError as e:
        raise BindError(f"Cannot bind {host}:{port}: {e}") from e


def main() -> int:
    """
    Run the service with uvicorn.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        # Print to stderr - logging isn't configured yet
        print(f"FATAL: Configuration error\n{e}", file=sys.stderr)
        return 1

    try:
        check_bind(settings.server.host, settings.server.port)
    except BindError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 1

    app = create_app()

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.server.host,
            port=settings.server.port,
            log_level="warning",  # Uvicorn logs (our JSON logger handles app logs)
            access_log=False,
            proxy_headers=True,
        )
    )
    server.run()

    # uvicorn reports startup failures (e.g. losing a bind race) via this flag
    if not server.started:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
