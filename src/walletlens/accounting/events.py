"""Tax event classification and preparation — pure functions, no I/O."""

import logging
from collections.abc import Iterable, Sequence
from typing import assert_never

from walletlens.domain.enums.tax import FlowDirection
from walletlens.domain.models.defi import ProtocolPosition
from walletlens.domain.models.tax import (
    AirdropEvent,
    BuyEvent,
    RewardEvent,
    SellEvent,
    TaxEvent,
    TransferInEvent,
    TransferOutEvent,
)

logger = logging.getLogger(__name__)


def classify(event: TaxEvent) -> FlowDirection:
    """Inflows open lots, outflows consume them."""
    match event:
        case BuyEvent() | TransferInEvent() | AirdropEvent() | RewardEvent():
            return FlowDirection.INFLOW
        case SellEvent() | TransferOutEvent():
            return FlowDirection.OUTFLOW
        case _:
            assert_never(event)


def prepare_events(events: Iterable[TaxEvent]) -> list[TaxEvent]:
    """Replay order: ascending timestamp, input order kept for ties.

    Zero-quantity events change nothing and are dropped.
    """
    kept: list[TaxEvent] = []
    for event in events:
        if event.quantity == 0:
            logger.debug("Skipping zero-quantity event %s (%s)", event.id, event.symbol)
            continue
        kept.append(event)
    # list.sort is stable
    kept.sort(key=lambda e: e.timestamp)
    return kept


def rewards_to_events(positions: Sequence[ProtocolPosition]) -> list[RewardEvent]:
    """Claimed protocol rewards as reward inflows, valued at claim time."""
    events: list[RewardEvent] = []
    for position in positions:
        for idx, reward in enumerate(position.rewards):
            if not reward.is_claimed or reward.claimed_at is None or reward.quantity == 0:
                continue
            events.append(RewardEvent(
                id=f"{position.id}:{reward.symbol}:{idx}",
                hash=reward.claim_tx_hash,
                timestamp=reward.claimed_at,
                symbol=reward.symbol,
                quantity=reward.quantity,
                price_usd=reward.value_usd / reward.quantity,
                value_usd=reward.value_usd,
                protocol=position.protocol,
            ))
    return events
