"""Error taxonomy shared by the engines, the orchestrator and the API."""

from decimal import Decimal


class WalletLensError(Exception):
    """Base class for all walletlens errors."""


class ExternalServiceError(WalletLensError):
    """An upstream API call failed in a way that may succeed on retry."""


class InsufficientLotBalanceError(WalletLensError):
    """An outflow asks for more units than the open lots hold.

    Usually means an inflow is missing from the transaction history.
    """

    def __init__(self, symbol: str, requested: Decimal, available: Decimal, event_id: str = "") -> None:
        self.symbol = symbol
        self.requested = requested
        self.available = available
        self.event_id = event_id
        super().__init__(
            f"Insufficient lot balance for {symbol}: requested {requested}, "
            f"available {available} (event {event_id or '?'})"
        )


class InvalidConfigurationError(WalletLensError):
    """Settings failed validation; nothing was computed."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))
