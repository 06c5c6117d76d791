"""API routers for the TIOBE index service."""

from tiobe_service.routers import health, info, languages

__all__ = ["health", "info", "languages"]
