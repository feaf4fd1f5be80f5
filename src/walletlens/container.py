from dependency_injector import containers, providers

from walletlens.config import Settings
from walletlens.domain.models.settings import RiskSettings, TaxSettings
from walletlens.infra.cache import TTLCache
from walletlens.infra.http.rate_limited_client import RateLimitedClient
from walletlens.infra.price.coingecko import CoinGeckoHistoryProvider
from walletlens.infra.price.service import PriceHistoryService
from walletlens.services.orchestrator import AnalyticsOrchestrator


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["walletlens.api.deps"])

    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.coingecko_rate_per_second,
        timeout=settings.provided.http_timeout_seconds,
    )

    price_provider = providers.Singleton(
        CoinGeckoHistoryProvider,
        http_client=http_client,
        api_key=settings.provided.coingecko_api_key,
    )

    price_cache = providers.Singleton(
        TTLCache,
        ttl_seconds=settings.provided.price_cache_ttl_seconds,
    )

    price_service = providers.Singleton(
        PriceHistoryService,
        provider=price_provider,
        cache=price_cache,
    )

    tax_settings = providers.Factory(
        TaxSettings,
        long_term_threshold_days=settings.provided.long_term_threshold_days,
    )

    risk_settings = providers.Factory(
        RiskSettings,
        var_confidence=settings.provided.var_confidence,
        risk_free_rate=settings.provided.risk_free_rate,
        reference_asset=settings.provided.reference_asset,
    )

    # Wallet connectivity lives outside this package
    holdings_source = providers.Dependency()
    transaction_source = providers.Dependency()

    orchestrator = providers.Factory(
        AnalyticsOrchestrator,
        holdings_source=holdings_source,
        transaction_source=transaction_source,
        price_history=price_service,
        tax_settings=tax_settings,
        risk_settings=risk_settings,
        debounce_seconds=settings.provided.debounce_seconds,
    )
