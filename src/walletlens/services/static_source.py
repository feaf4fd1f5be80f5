"""In-memory wallet source for callers that already hold the wallet data."""

from collections.abc import Sequence

from walletlens.domain.enums.chain import Chain
from walletlens.domain.models.market import Holding
from walletlens.domain.models.tax import TaxEvent


class StaticWalletSource:
    """Serves fixed holdings and events for any address and network."""

    def __init__(self, holdings: Sequence[Holding], events: Sequence[TaxEvent] = ()) -> None:
        self._holdings = list(holdings)
        self._events = list(events)

    async def get_holdings(self, address: str, network: Chain) -> list[Holding]:
        return list(self._holdings)

    async def get_events(self, address: str, network: Chain) -> list[TaxEvent]:
        return list(self._events)
