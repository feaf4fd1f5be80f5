import pytest

from tests.factories import series
from walletlens.domain.models.market import Holding, PricePoint


@pytest.fixture()
def eth_usdc_holdings() -> list[Holding]:
    """$6000 of ETH and $4000 of USDC."""
    return [
        Holding(symbol="ETH", quantity=2, price_usd=3000),
        Holding(symbol="USDC", quantity=4000, price_usd=1),
    ]


@pytest.fixture()
def eth_usdc_history() -> dict[str, list[PricePoint]]:
    return {
        "ETH": series([2800, 2900, 2850, 3100, 3000]),
        "USDC": series([1.0, 1.001, 0.999, 1.0, 1.0]),
    }
