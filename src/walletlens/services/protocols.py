"""Collaborator contracts the orchestrator depends on.

Wallet connectivity and chain access live outside this package; anything
with these async methods can be wired in.
"""

from typing import Protocol

from walletlens.domain.enums.chain import Chain
from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.models.market import Holding, PricePoint
from walletlens.domain.models.tax import TaxEvent


class HoldingsSource(Protocol):
    async def get_holdings(self, address: str, network: Chain) -> list[Holding]: ...


class TransactionSource(Protocol):
    async def get_events(self, address: str, network: Chain) -> list[TaxEvent]:
        """Events in any order. The tax engine sorts them."""
        ...


class PriceHistorySource(Protocol):
    async def get_history(self, symbol: str, period: TimePeriod) -> list[PricePoint]:
        """Ascending, possibly gappy series. Empty on failure, never raises."""
        ...
