"""Technical indicators and a heuristic price projection for one asset.

predict_price is a toy: a handful of multiplicative nudges keyed off RSI, MACD
and the 14-period moving average. It is not a statistical model.
"""

from collections.abc import Sequence

from walletlens.domain.enums.risk import Signal
from walletlens.domain.models.indicators import MacdResult, PredictionFactor, PricePrediction, TechnicalIndicator

RSI_PERIOD = 14
RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9
MA_PERIOD = 14
MIN_PREDICTION_POINTS = 14
MAX_CONFIDENCE = 0.95


def rsi(prices: Sequence[float], period: int = RSI_PERIOD) -> float:
    """Relative Strength Index over the trailing window of up to `period` changes.

    Returns 50 (neutral) with fewer than 2 prices and 100 when there were no
    down-moves in the window.
    """
    if len(prices) < 2:
        return 50.0
    window = prices[-(period + 1):]
    gains = 0.0
    losses = 0.0
    for prev, cur in zip(window, window[1:]):
        change = cur - prev
        if change > 0:
            gains += change
        else:
            losses -= change

    changes = len(window) - 1
    avg_gain = gains / changes
    avg_loss = losses / changes
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def ema_series(prices: Sequence[float], period: int) -> list[float]:
    """Running EMA, seeded with the first price."""
    if not prices:
        return []
    multiplier = 2 / (period + 1)
    out = [prices[0]]
    for price in prices[1:]:
        out.append(price * multiplier + out[-1] * (1 - multiplier))
    return out


def ema(prices: Sequence[float], period: int) -> float:
    series = ema_series(prices, period)
    return series[-1] if series else 0.0


def sma(prices: Sequence[float], period: int) -> float:
    """Mean of the last `period` prices; 0 when there are fewer."""
    if period <= 0 or len(prices) < period:
        return 0.0
    return sum(prices[-period:]) / period


def macd(prices: Sequence[float]) -> MacdResult:
    """EMA(12) - EMA(26) with an EMA(9) signal line over the MACD line."""
    if len(prices) < MACD_SLOW:
        return MacdResult()

    fast = ema_series(prices, MACD_FAST)
    slow = ema_series(prices, MACD_SLOW)
    macd_line = [f - s for f, s in zip(fast, slow)]
    signal_line = ema(macd_line, MACD_SIGNAL)
    value = macd_line[-1]
    histogram = value - signal_line

    signal = Signal.HOLD
    if value > signal_line and histogram > 0:
        signal = Signal.BUY
    elif value < signal_line and histogram < 0:
        signal = Signal.SELL

    return MacdResult(value=value, signal_line=signal_line, histogram=histogram, signal=signal)


def rsi_signal(value: float) -> Signal:
    if value < RSI_OVERSOLD:
        return Signal.BUY
    if value > RSI_OVERBOUGHT:
        return Signal.SELL
    return Signal.HOLD


def technical_indicators(current_price: float, prices: Sequence[float]) -> list[TechnicalIndicator]:
    """RSI, MACD and 14-period moving average readings. Empty below 14 prices."""
    if len(prices) < MIN_PREDICTION_POINTS:
        return []

    rsi_value = rsi(prices)
    macd_result = macd(prices)
    ma = sma(prices, MA_PERIOD)
    above = current_price > ma

    return [
        TechnicalIndicator(
            name="RSI",
            value=rsi_value,
            signal=rsi_signal(rsi_value),
            strength=abs(50 - rsi_value) / 50,
            description=f"RSI at {rsi_value:.2f}",
        ),
        TechnicalIndicator(
            name="MACD",
            value=macd_result.value,
            signal=macd_result.signal,
            strength=min(abs(macd_result.histogram) / current_price, 1.0) if current_price > 0 else 0.0,
            description=f"MACD {macd_result.signal.value} signal",
        ),
        TechnicalIndicator(
            name="Moving Average",
            value=ma,
            signal=Signal.BUY if above else Signal.SELL,
            strength=abs(current_price - ma) / current_price if current_price > 0 else 0.0,
            description=f"Price {'above' if above else 'below'} {MA_PERIOD}-period MA",
        ),
    ]


def predict_price(symbol: str, current_price: float, prices: Sequence[float]) -> PricePrediction | None:
    """Nudge the current price by corroborating signals. None below 14 prices."""
    if len(prices) < MIN_PREDICTION_POINTS:
        return None

    predicted = current_price
    confidence = 0.5
    factors: list[PredictionFactor] = []

    def nudge(name: str, signal: Signal, multiplier: float, weight: float, description: str) -> None:
        nonlocal predicted, confidence
        predicted *= multiplier
        confidence += weight
        factors.append(PredictionFactor(name=name, signal=signal, multiplier=multiplier, description=description))

    rsi_value = rsi(prices)
    if rsi_value < RSI_OVERSOLD:
        nudge("RSI", Signal.BUY, 1.05, 0.1, f"Oversold (RSI {rsi_value:.1f})")
    elif rsi_value > RSI_OVERBOUGHT:
        nudge("RSI", Signal.SELL, 0.95, 0.1, f"Overbought (RSI {rsi_value:.1f})")

    macd_result = macd(prices)
    if macd_result.signal == Signal.BUY:
        nudge("MACD", Signal.BUY, 1.03, 0.1, "MACD above signal line")
    elif macd_result.signal == Signal.SELL:
        nudge("MACD", Signal.SELL, 0.97, 0.1, "MACD below signal line")

    ma = sma(prices, MA_PERIOD)
    if ma > 0:
        if current_price > ma:
            nudge("Moving Average", Signal.BUY, 1.02, 0.05, f"Price above {MA_PERIOD}-period MA")
        else:
            nudge("Moving Average", Signal.SELL, 0.98, 0.05, f"Price at or below {MA_PERIOD}-period MA")

    return PricePrediction(
        symbol=symbol,
        current_price=current_price,
        predicted_price=predicted,
        confidence=min(confidence, MAX_CONFIDENCE),
        factors=factors,
    )
