from unittest.mock import AsyncMock, MagicMock

from walletlens.config import Settings
from walletlens.container import Container
from walletlens.infra.price.service import PriceHistoryService
from walletlens.services.orchestrator import AnalyticsOrchestrator


def _container(**settings) -> Container:
    container = Container()
    container.settings.override(Settings(_env_file=None, **settings))
    return container


class TestContainer:
    def test_price_service_is_shared(self):
        container = _container()
        assert isinstance(container.price_service(), PriceHistoryService)
        assert container.price_service() is container.price_service()

    def test_orchestrator_uses_settings(self):
        container = _container(reference_asset="BTC", long_term_threshold_days=180, debounce_seconds=1.5)
        source = MagicMock()
        source.get_holdings = AsyncMock(return_value=[])

        orchestrator = container.orchestrator(holdings_source=source, transaction_source=source)

        assert isinstance(orchestrator, AnalyticsOrchestrator)
        assert orchestrator._risk_settings.reference_asset == "BTC"
        assert orchestrator._tax_engine.settings.long_term_threshold_days == 180
        assert orchestrator._debounce == 1.5

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("WALLETLENS_PRICE_CACHE_TTL_SECONDS", "60")
        settings = Settings(_env_file=None)
        assert settings.price_cache_ttl_seconds == 60.0
