"""Per-asset open lot inventory with FIFO / LIFO consumption.

Implements the quantity invariant: for every asset, the open lots sum to net
inflows minus outflows, and no lot goes negative.
"""

import logging
from collections import defaultdict, deque
from decimal import Decimal

from walletlens.domain.enums.tax import LotMethod
from walletlens.domain.models.tax import Lot, LotConsumption
from walletlens.exceptions import InsufficientLotBalanceError

logger = logging.getLogger(__name__)


class LotInventory:
    """Open lots per symbol, oldest first."""

    def __init__(self) -> None:
        self._lots: dict[str, deque[Lot]] = defaultdict(deque)
        self._warned_specific_id = False

    def add(self, lot: Lot) -> None:
        if lot.quantity <= 0:
            raise ValueError(f"Lot {lot.event_id} must have a positive quantity, got {lot.quantity}")
        self._lots[lot.symbol].append(lot)

    def open_quantity(self, symbol: str) -> Decimal:
        return sum((lot.quantity for lot in self._lots.get(symbol, ())), Decimal(0))

    def open_lots(self, symbol: str | None = None) -> list[Lot]:
        """Copies of the open lots, grouped by symbol in insertion order."""
        symbols = [symbol] if symbol is not None else list(self._lots)
        return [lot.model_copy() for s in symbols for lot in self._lots.get(s, ())]

    def consume(
        self,
        symbol: str,
        quantity: Decimal,
        method: LotMethod = LotMethod.FIFO,
        event_id: str = "",
    ) -> list[LotConsumption]:
        """Remove `quantity` units, splitting the last lot touched if needed.

        Raises InsufficientLotBalanceError without touching any lot when the
        open balance is short, and ValueError for a non-positive quantity.
        """
        if quantity <= 0:
            raise ValueError(f"Quantity to consume must be positive, got {quantity}")
        available = self.open_quantity(symbol)
        if quantity > available:
            raise InsufficientLotBalanceError(symbol, quantity, available, event_id)

        newest_first = self._resolve(method) == LotMethod.LIFO
        queue = self._lots[symbol]
        consumed: list[LotConsumption] = []
        remaining = quantity

        while remaining > 0:
            lot = queue[-1] if newest_first else queue[0]
            take = min(remaining, lot.quantity)
            if take == lot.quantity:
                cost = lot.cost_basis_usd
            else:
                cost = lot.cost_basis_usd * take / lot.quantity

            consumed.append(LotConsumption(
                event_id=lot.event_id,
                acquired_at=lot.acquired_at,
                quantity=take,
                cost_basis_usd=cost,
            ))

            lot.quantity -= take
            lot.cost_basis_usd -= cost
            remaining -= take

            if lot.quantity <= 0:
                if newest_first:
                    queue.pop()
                else:
                    queue.popleft()

        if not queue:
            del self._lots[symbol]
        return consumed

    def _resolve(self, method: LotMethod) -> LotMethod:
        if method == LotMethod.SPECIFIC_ID:
            if not self._warned_specific_id:
                logger.warning("SPECIFIC_ID lot selection is not supported, using FIFO")
                self._warned_specific_id = True
            return LotMethod.FIFO
        return method
