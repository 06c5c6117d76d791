"""
Base HTTP client for upstream pages.

Provides retry with backoff, a consecutive-failure circuit breaker and
standardized error mapping to UpstreamError.
"""

from __future__ import annotations

import asyncio
import random
import time
from typing import Any

import httpx

from tiobe_service.core.exceptions import UpstreamError
from tiobe_service.logging import get_logger

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})

# Transport failures worth another attempt; other httpx errors fail at once
RETRYABLE_TRANSPORT_ERRORS: tuple[type[httpx.TransportError], ...] = (
    httpx.TimeoutException,
    httpx.ConnectError,
    httpx.ReadError,
    httpx.RemoteProtocolError,
)


class UpstreamClient:
    """
    Base class for clients of an external HTTP source.

    Subclasses build URLs and interpret the body; this class owns transport,
    retries and the circuit breaker.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        source_name: str,
        user_agent: str,
        retry_max_attempts: int,
        retry_initial_backoff_seconds: float,
        retry_max_backoff_seconds: float,
        retry_jitter_seconds: float,
        circuit_breaker_failure_threshold: int,
        circuit_breaker_recovery_timeout_seconds: float,
    ) -> None:
        """
        Initialize the upstream client.

        Args:
            base_url: URL of the upstream page (e.g., "https://www.tiobe.com/tiobe-index/")
            timeout: Request timeout in seconds
            source_name: Name of the source for logging and error messages
            user_agent: User-Agent header sent with every request
            retry_max_attempts: Total attempts for transient request failures
            retry_initial_backoff_seconds: Initial backoff for retries
            retry_max_backoff_seconds: Maximum retry backoff cap
            retry_jitter_seconds: Random jitter added to backoff
            circuit_breaker_failure_threshold: Consecutive failures before opening circuit
            circuit_breaker_recovery_timeout_seconds: Cooldown before half-open probe
        """
        self.base_url = base_url
        self.source_name = source_name
        self.timeout = timeout

        self.retry_max_attempts = retry_max_attempts
        self.retry_initial_backoff_seconds = retry_initial_backoff_seconds
        self.retry_max_backoff_seconds = retry_max_backoff_seconds
        self.retry_jitter_seconds = retry_jitter_seconds

        self.circuit_breaker_failure_threshold = circuit_breaker_failure_threshold
        self.circuit_breaker_recovery_timeout_seconds = circuit_breaker_recovery_timeout_seconds

        self._consecutive_failures = 0
        self._circuit_state = "closed"
        self._circuit_opened_at: float | None = None
        self._probe_started_at: float | None = None
        self._circuit_lock = asyncio.Lock()

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5.0),
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        )

    @property
    def circuit_state(self) -> str:
        """Current breaker state: "closed", "open" or "half_open"."""
        return self._circuit_state

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    def _circuit_open_error(self, url: str) -> UpstreamError:
        return UpstreamError(
            error="upstream_circuit_open",
            message=f"{self.source_name} temporarily unavailable",
            status_code=503,
            details={
                "source": self.source_name,
                "url": url,
                "recovery_timeout_seconds": self.circuit_breaker_recovery_timeout_seconds,
                "failure_threshold": self.circuit_breaker_failure_threshold,
            },
        )

    async def _enforce_circuit_policy(self, url: str) -> None:
        """
        Fail fast when circuit is open, or let a single probe through after cooldown.

        While half-open, requests other than the probe fail fast. A probe that
        never reports back is replaced after another recovery timeout.
        """
        async with self._circuit_lock:
            if self._circuit_state == "closed":
                return

            now = time.monotonic()
            recovery = self.circuit_breaker_recovery_timeout_seconds

            if self._circuit_state == "half_open":
                probe_started = self._probe_started_at
                if probe_started is not None and now - probe_started < recovery:
                    raise self._circuit_open_error(url)
                self._probe_started_at = now
                return

            if self._circuit_opened_at is None:
                self._circuit_opened_at = now

            if now - self._circuit_opened_at < recovery:
                raise self._circuit_open_error(url)

            self._circuit_state = "half_open"
            self._probe_started_at = now

    async def _record_success(self, url: str) -> None:
        """Reset circuit failure state after a successful request."""
        async with self._circuit_lock:
            had_failures = self._consecutive_failures > 0
            was_open = self._circuit_state in {"open", "half_open"}

            self._consecutive_failures = 0
            self._circuit_state = "closed"
            self._circuit_opened_at = None
            self._probe_started_at = None

        if had_failures or was_open:
            get_logger(__name__).info(
                "Upstream circuit closed after successful request",
                extra={"source": self.source_name, "url": url},
            )

    async def _record_failure(self, url: str, reason: str) -> None:
        """Track request failures and open circuit when threshold is exceeded."""
        circuit_opened = False

        async with self._circuit_lock:
            if self._circuit_state == "half_open":
                self._circuit_state = "open"
                self._circuit_opened_at = time.monotonic()
                self._probe_started_at = None
                self._consecutive_failures = self.circuit_breaker_failure_threshold
                circuit_opened = True
            elif self._circuit_state == "closed":
                self._consecutive_failures += 1
                if self._consecutive_failures >= self.circuit_breaker_failure_threshold:
                    self._circuit_state = "open"
                    self._circuit_opened_at = time.monotonic()
                    circuit_opened = True
            failure_count = self._consecutive_failures

        if circuit_opened:
            get_logger(__name__).warning(
                "Upstream circuit opened",
                extra={
                    "source": self.source_name,
                    "url": url,
                    "reason": reason,
                    "consecutive_failures": failure_count,
                    "failure_threshold": self.circuit_breaker_failure_threshold,
                    "recovery_timeout_seconds": self.circuit_breaker_recovery_timeout_seconds,
                },
            )

    async def _should_retry(self, attempt: int, error: Exception) -> bool:
        """Return whether the request should be retried."""
        if attempt >= self.retry_max_attempts:
            return False

        async with self._circuit_lock:
            is_half_open = self._circuit_state == "half_open"

        # A half-open probe gets exactly one try
        if is_half_open:
            return False

        if isinstance(error, RETRYABLE_TRANSPORT_ERRORS):
            return True

        if isinstance(error, httpx.HTTPStatusError):
            return error.response.status_code in RETRYABLE_STATUS_CODES

        return False

    def _compute_backoff_seconds(self, attempt: int) -> float:
        """Compute exponential backoff with jitter."""
        exponential = self.retry_initial_backoff_seconds * (2 ** (attempt - 1))
        capped_backoff = min(exponential, self.retry_max_backoff_seconds)

        jitter = 0.0
        if self.retry_jitter_seconds > 0:
            jitter = random.uniform(0.0, self.retry_jitter_seconds)  # nosec B311

        return float(capped_backoff + jitter)

    async def health_check(self) -> str:
        """
        Probe the upstream page without retries.

        Returns:
            Status string ("healthy", "unavailable" or "error")
        """
        logger = get_logger(__name__)
        url = self.base_url

        try:
            await self._enforce_circuit_policy(url)
            response = await self.client.head(url)
            response.raise_for_status()
        except UpstreamError:
            logger.warning(
                "Upstream health unavailable due to open circuit",
                extra={"source": self.source_name},
            )
            return "unavailable"
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            await self._record_failure(url, type(e).__name__)
            logger.warning(
                "Upstream health check failed",
                extra={"source": self.source_name, "error_type": type(e).__name__},
            )
            return "unavailable"
        except httpx.HTTPStatusError as e:
            await self._record_failure(url, "http_status_error")
            logger.warning(
                "Upstream health check failed: HTTP status error",
                extra={"source": self.source_name, "status_code": e.response.status_code},
            )
            return "unavailable" if e.response.status_code == 503 else "error"
        except httpx.HTTPError as e:
            await self._record_failure(url, "http_error")
            logger.warning(
                "Upstream health check failed: transport error",
                extra={"source": self.source_name, "error": str(e)},
            )
            return "error"

        await self._record_success(url)
        return "healthy"

    async def _request_text(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> str:
        """
        Make request with retries and return the decoded body.

        Args:
            method: HTTP method (GET, HEAD, ...)
            url: Absolute request URL
            **kwargs: Additional arguments passed to httpx

        Raises:
            UpstreamError: If the request ultimately fails
        """
        logger = get_logger(__name__)

        for attempt in range(1, self.retry_max_attempts + 1):
            await self._enforce_circuit_policy(url)

            try:
                response = await self.client.request(method, url, **kwargs)
                response.raise_for_status()
                body = response.text
                await self._record_success(url)
                return body

            except httpx.HTTPError as e:
                if await self._should_retry(attempt, e):
                    backoff_seconds = self._compute_backoff_seconds(attempt)
                    logger.warning(
                        "Upstream request failed, retrying",
                        extra={
                            "source": self.source_name,
                            "url": url,
                            "attempt": attempt,
                            "max_attempts": self.retry_max_attempts,
                            "backoff_seconds": round(backoff_seconds, 3),
                            "error_type": type(e).__name__,
                        },
                    )
                    await asyncio.sleep(backoff_seconds)
                    continue

                if isinstance(e, httpx.TimeoutException):
                    await self._record_failure(url, "timeout")
                    raise UpstreamError(
                        error="upstream_timeout",
                        message=f"{self.source_name} timed out",
                        status_code=504,
                        details={
                            "source": self.source_name,
                            "timeout_seconds": self.timeout,
                            "attempts": attempt,
                        },
                    ) from e

                if isinstance(e, httpx.HTTPStatusError):
                    await self._record_failure(url, "http_status_error")
                    raise UpstreamError(
                        error="upstream_error",
                        message=f"{self.source_name} returned HTTP {e.response.status_code}",
                        status_code=502,
                        details={
                            "source": self.source_name,
                            "url": url,
                            "upstream_status_code": e.response.status_code,
                            "attempts": attempt,
                        },
                    ) from e

                # Connection refused, reset, protocol and proxy errors
                await self._record_failure(url, type(e).__name__)
                raise UpstreamError(
                    error="upstream_unavailable",
                    message=f"{self.source_name} is not responding",
                    status_code=502,
                    details={
                        "source": self.source_name,
                        "url": url,
                        "error_type": type(e).__name__,
                        "attempts": attempt,
                    },
                ) from e

        # The loop always returns or raises; reached only if retry_max_attempts < 1
        raise UpstreamError(
            error="upstream_error",
            message=f"{self.source_name} request failed",
            status_code=502,
            details={"source": self.source_name, "url": url},
        )
