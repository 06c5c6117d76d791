"""
Ranking snapshots: cache, live fetch and fallback.

A snapshot is the list of entries for one period. Live snapshots are cached
per period for a fixed TTL; fallback snapshots are never cached so the next
request tries the upstream page again.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from tiobe_service.core.exceptions import InvalidPeriodError, UpstreamError
from tiobe_service.logging import get_logger
from tiobe_service.schemas import Language, LanguageDetail, Period
from tiobe_service.services import catalog
from tiobe_service.services.fallback import get_fallback_languages
from tiobe_service.services.index_parser import parse_index_html

if TYPE_CHECKING:
    from tiobe_service.clients import TiobeClient

Source = Literal["live", "fallback"]

UNKNOWN_VALUE = "N/A"


@dataclass
class Snapshot:
    """Entries for one period and where they came from."""

    period: str
    languages: list[Language]
    source: Source
    fetched_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    loaded_at: float = field(default_factory=time.monotonic)

    def find(self, name: str) -> Language | None:
        """Case-insensitive lookup by language name."""
        wanted = name.strip().lower()
        for language in self.languages:
            if language.name.lower() == wanted:
                return language
        return None


class RankingService:
    """
    Serve ranking snapshots, preferring fresh live data.

    Args:
        client: Client for the TIOBE index page
        ttl_seconds: How long a live snapshot stays fresh
        max_entries: Cached periods kept before the oldest is evicted
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        client: TiobeClient,
        ttl_seconds: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._cache: OrderedDict[str, Snapshot] = OrderedDict()

    @property
    def cached_periods(self) -> list[str]:
        """Cached period keys, oldest first."""
        return list(self._cache)

    def _get_cached(self, key: str) -> Snapshot | None:
        snapshot = self._cache.get(key)
        if snapshot is None:
            return None
        if self._clock() - snapshot.loaded_at >= self.ttl_seconds:
            del self._cache[key]
            return None
        return snapshot

    def _store(self, snapshot: Snapshot) -> None:
        self._cache[snapshot.period] = snapshot
        self._cache.move_to_end(snapshot.period)
        while len(self._cache) > self.max_entries:
            evicted, _ = self._cache.popitem(last=False)
            get_logger(__name__).debug("Snapshot evicted", extra={"period": evicted})

    def _fallback(self, key: str, reason: str) -> Snapshot:
        get_logger(__name__).warning(
            "Serving fallback rankings",
            extra={"period": key, "reason": reason},
        )
        return Snapshot(
            period=key,
            languages=get_fallback_languages(),
            source="fallback",
            loaded_at=self._clock(),
        )

    async def get_snapshot(self, period: Period) -> Snapshot:
        """
        Return the snapshot for a period.

        Never raises for upstream or period problems; those yield the
        built-in fallback instead.
        """
        logger = get_logger(__name__)
        key = period.cache_key

        cached = self._get_cached(key)
        if cached is not None:
            return cached

        try:
            html = await self.client.fetch_index_html(period.year, period.month)
        except InvalidPeriodError as e:
            return self._fallback(key, e.error)
        except UpstreamError as e:
            return self._fallback(key, e.error)

        languages = parse_index_html(html)
        if not languages:
            return self._fallback(key, "empty_table")

        snapshot = Snapshot(
            period=key,
            languages=languages,
            source="live",
            loaded_at=self._clock(),
        )
        self._store(snapshot)

        logger.info(
            "Snapshot refreshed",
            extra={"period": key, "languages": len(languages)},
        )
        return snapshot

    async def get_language_detail(self, name: str, period: Period) -> LanguageDetail:
        """
        Detail for one language in a period.

        Unranked names get a placeholder with rank 0 and rating "N/A".
        """
        snapshot = await self.get_snapshot(period)
        language = snapshot.find(name)
        if language is None:
            language = Language(
                rank=0,
                prev_rank=0,
                name=name,
                rating=UNKNOWN_VALUE,
                change=UNKNOWN_VALUE,
            )
        return catalog.describe(name, language)
