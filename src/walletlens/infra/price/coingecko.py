"""CoinGecko history provider — daily-ish USD price series for a lookback window."""

import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.models.market import PricePoint
from walletlens.exceptions import ExternalServiceError
from walletlens.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

BASE_URL = "https://api.coingecko.com"

# Symbol → CoinGecko coin id
SYMBOL_TO_COINGECKO: dict[str, str] = {
    # Layer 1
    "ETH": "ethereum",
    "WETH": "ethereum",
    "BTC": "bitcoin",
    "WBTC": "bitcoin",
    "SOL": "solana",
    "ADA": "cardano",
    "DOT": "polkadot",
    "AVAX": "avalanche-2",
    # DeFi
    "UNI": "uniswap",
    "AAVE": "aave",
    "COMP": "compound-governance-token",
    "CRV": "curve-dao-token",
    "BAL": "balancer",
    "SUSHI": "sushi",
    "MKR": "maker",
    "LDO": "lido-dao",
    # Stablecoins
    "USDC": "usd-coin",
    "USDT": "tether",
    "DAI": "dai",
    "BUSD": "binance-usd",
    "FRAX": "frax",
    # Meme
    "DOGE": "dogecoin",
    "SHIB": "shiba-inu",
    "PEPE": "pepe",
    "FLOKI": "floki",
    # Infrastructure / L2
    "LINK": "chainlink",
    "MATIC": "matic-network",
    "ATOM": "cosmos",
    "NEAR": "near",
    "FTM": "fantom",
    "ARB": "arbitrum",
    "OP": "optimism",
    "GRT": "the-graph",
    # Liquid staking (priced as their own coins)
    "STETH": "staked-ether",
    "WSTETH": "wrapped-steth",
    "RETH": "rocket-pool-eth",
}


def resolve_coingecko_id(symbol: str) -> str | None:
    """Static mapping first, then Aave v3 receipt tokens (aEth{TOKEN}) priced as the underlying."""
    upper = symbol.upper()
    if upper in SYMBOL_TO_COINGECKO:
        return SYMBOL_TO_COINGECKO[upper]

    if upper.startswith("AETH") and len(upper) > 4:
        underlying = upper[4:]
        return SYMBOL_TO_COINGECKO.get(underlying) or SYMBOL_TO_COINGECKO.get("W" + underlying)

    return None


class CoinGeckoHistoryProvider:
    """Fetch `/coins/{id}/market_chart` series with rate-limit aware retries.

    get_history never raises: unknown symbols and exhausted retries both
    return an empty series, which the analytics treat as missing data.
    """

    def __init__(self, http_client: RateLimitedClient, api_key: str = "") -> None:
        self._http = http_client
        self._api_key = api_key

    async def get_history(self, symbol: str, period: TimePeriod) -> list[PricePoint]:
        coingecko_id = resolve_coingecko_id(symbol)
        if coingecko_id is None:
            logger.warning("No CoinGecko ID mapping for symbol: %s", symbol)
            return []

        try:
            raw = await self._fetch_prices(coingecko_id, period.days)
        except ExternalServiceError as exc:
            logger.warning("CoinGecko history unavailable for %s (%s): %s", symbol, period.value, exc)
            return []

        points: list[PricePoint] = []
        for entry in raw:
            try:
                ts_ms, price = entry[0], entry[1]
            except (IndexError, TypeError):
                continue
            if price is None:
                continue
            points.append(PricePoint(timestamp=int(ts_ms) // 1000, price=float(price)))
        return points

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=2, min=2, max=16),
        reraise=True,
    )
    async def _fetch_prices(self, coingecko_id: str, days: int) -> list:
        params: dict[str, str] = {"vs_currency": "usd", "days": str(days)}
        if self._api_key:
            params["x_cg_demo_api_key"] = self._api_key

        url = f"{BASE_URL}/api/v3/coins/{coingecko_id}/market_chart"
        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"CoinGecko request failed for {coingecko_id}: {exc}") from exc

        if response.status_code == 429 or response.status_code >= 500:
            raise ExternalServiceError(f"CoinGecko returned {response.status_code} for {coingecko_id}")

        if response.status_code != 200:
            logger.warning("CoinGecko returned %d for %s", response.status_code, coingecko_id)
            return []

        data = response.json()
        prices = data.get("prices", []) if isinstance(data, dict) else []
        return prices if isinstance(prices, list) else []
