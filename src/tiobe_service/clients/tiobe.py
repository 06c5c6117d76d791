"""
Client for the TIOBE index page.

Builds current and historical index URLs and downloads the HTML.
"""

from __future__ import annotations

from datetime import UTC, datetime

from tiobe_service.clients.base import UpstreamClient
from tiobe_service.core.exceptions import InvalidPeriodError
from tiobe_service.logging import get_logger


def ensure_not_future(year: int, month: int, now: datetime | None = None) -> None:
    """
    Reject periods later than the current UTC month.

    Raises:
        InvalidPeriodError: If year/month lies in the future
    """
    if now is None:
        now = datetime.now(UTC)
    if year > now.year or (year == now.year and month > now.month):
        raise InvalidPeriodError(year, month, now.year, now.month)


class TiobeClient(UpstreamClient):
    """
    Client for the TIOBE index page.

    The current index lives at the configured URL; a historical month is
    selected with page/year/month query parameters.
    """

    def build_params(self, year: int | None, month: int | None) -> dict[str, int | str] | None:
        """
        Return query parameters for a period, or None for the current index.

        Raises:
            InvalidPeriodError: If a full year/month pair lies in the future
        """
        if year is None or month is None:
            return None
        ensure_not_future(year, month)
        return {"page": "index", "year": year, "month": month}

    async def fetch_index_html(self, year: int | None = None, month: int | None = None) -> str:
        """
        Download the index page for a period.

        Args:
            year: Historical year, ignored unless month is also given
            month: Historical month (1-12), ignored unless year is also given

        Returns:
            Raw HTML of the index page

        Raises:
            InvalidPeriodError: If the period is in the future
            UpstreamError: If the page cannot be fetched
        """
        params = self.build_params(year, month)

        get_logger(__name__).debug(
            "Fetching TIOBE index",
            extra={"url": self.base_url, "params": params},
        )

        if params is None:
            return await self._request_text("GET", self.base_url)
        return await self._request_text("GET", self.base_url, params=params)
