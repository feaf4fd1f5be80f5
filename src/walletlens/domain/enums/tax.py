from enum import Enum


class TxKind(str, Enum):
    """Tax event kinds as delivered by the transaction-history collaborator."""

    BUY = "buy"
    SELL = "sell"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    AIRDROP = "airdrop"
    REWARD = "reward"


class FlowDirection(str, Enum):
    INFLOW = "INFLOW"
    OUTFLOW = "OUTFLOW"


class LotMethod(str, Enum):
    """Lot consumption order. SPECIFIC_ID is accepted but runs as FIFO."""

    FIFO = "FIFO"
    LIFO = "LIFO"
    SPECIFIC_ID = "SPECIFIC_ID"
