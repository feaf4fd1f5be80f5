from walletlens.domain.enums.chain import Chain
from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.enums.risk import MarketPhase, Priority, RiskScore, RiskTolerance, Signal
from walletlens.domain.enums.tax import FlowDirection, LotMethod, TxKind

__all__ = [
    "Chain",
    "FlowDirection",
    "LotMethod",
    "MarketPhase",
    "Priority",
    "RiskScore",
    "RiskTolerance",
    "Signal",
    "TimePeriod",
    "TxKind",
]
