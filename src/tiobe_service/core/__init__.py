"""Core infrastructure components."""

from tiobe_service.core.exceptions import InvalidPeriodError, ServiceError, UpstreamError
from tiobe_service.core.state import AppState, get_app_state, init_app_state

__all__ = [
    "AppState",
    "InvalidPeriodError",
    "ServiceError",
    "UpstreamError",
    "get_app_state",
    "init_app_state",
]
