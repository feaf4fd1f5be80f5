"""PriceHistoryService — TTL-cached price history lookups in front of a provider."""

import logging

from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.models.market import PricePoint
from walletlens.infra.cache import TTLCache
from walletlens.services.protocols import PriceHistorySource

logger = logging.getLogger(__name__)


class PriceHistoryService:
    """Price orchestrator: cache lookup → provider fetch → cache store.

    Keys are (upper-cased symbol, period). Empty series are not cached so a
    transient upstream failure is retried on the next cycle.
    """

    def __init__(self, provider: PriceHistorySource, cache: TTLCache[list[PricePoint]]) -> None:
        self._provider = provider
        self._cache = cache

    async def get_history(self, symbol: str, period: TimePeriod) -> list[PricePoint]:
        key = (symbol.upper(), period)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Price history cache hit: %s %s", key[0], period.value)
            return list(cached)

        points = await self._provider.get_history(symbol, period)
        if points:
            self._cache.set(key, list(points))
        return list(points)
