from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    coingecko_api_key: str = ""
    coingecko_rate_per_second: float = 0.5  # Public API allows ~30 calls/min
    http_timeout_seconds: float = 30.0
    price_cache_ttl_seconds: float = 3600.0
    debounce_seconds: float = 5.0
    reference_asset: str = "ETH"
    risk_free_rate: float = 0.02  # Annual
    var_confidence: float = 0.95
    long_term_threshold_days: int = 365

    class Config:
        env_file = ".env"
        env_prefix = "WALLETLENS_"
