"""Forecast value types shared by the statistical predictor and the orchestrator."""

from dataclasses import dataclass, field
from enum import Enum


class ModelType(str, Enum):
    """Which predictor produced a forecast."""

    STATISTICAL = "statistical"
    NEURAL = "neural"


class PredictionDirection(str, Enum):
    """Direction of a forecast, bucketed by percent change."""

    STRONGLY_UP = "strongly_up"
    UP = "up"
    NEUTRAL = "neutral"
    DOWN = "down"
    STRONGLY_DOWN = "strongly_down"


class AlertSound(str, Enum):
    """Alert sound category a forecast maps to."""

    PRICE_UP = "price_up"
    PRICE_DOWN = "price_down"
    PRICE_STABLE = "price_stable"


# Percent-change thresholds for direction buckets
STRONG_MOVE_PCT = 3.0
MOVE_PCT = 1.0

# Confidence band half-width: 2% at full confidence, up to 10% at zero
BAND_BASE = 0.02
BAND_UNCERTAINTY = 0.08

_SOUND_BY_DIRECTION = {
    PredictionDirection.STRONGLY_UP: AlertSound.PRICE_UP,
    PredictionDirection.UP: AlertSound.PRICE_UP,
    PredictionDirection.NEUTRAL: AlertSound.PRICE_STABLE,
    PredictionDirection.DOWN: AlertSound.PRICE_DOWN,
    PredictionDirection.STRONGLY_DOWN: AlertSound.PRICE_DOWN,
}


@dataclass(frozen=True)
class ForecastResult:
    """
    Result of a price prediction.

    An empty ``predicted_prices`` means there was not enough history to
    forecast; it is not a failure.
    """

    predicted_prices: tuple[float, ...] = field(default_factory=tuple)
    confidence: float = 0.0
    model_type: ModelType = ModelType.STATISTICAL

    def __post_init__(self) -> None:
        # Accept any iterable of numbers but always store an immutable tuple
        object.__setattr__(self, "predicted_prices", tuple(float(p) for p in self.predicted_prices))
        object.__setattr__(self, "model_type", ModelType(self.model_type))

    @property
    def is_empty(self) -> bool:
        return not self.predicted_prices

    @property
    def percent_change(self) -> float:
        """Percent change from the first to the last predicted price."""
        if self.is_empty:
            return 0.0

        first_price = self.predicted_prices[0]
        if first_price <= 0:
            return 0.0
        return (self.predicted_prices[-1] - first_price) / first_price * 100

    @property
    def direction(self) -> PredictionDirection:
        pct_change = self.percent_change
        if pct_change > STRONG_MOVE_PCT:
            return PredictionDirection.STRONGLY_UP
        if pct_change > MOVE_PCT:
            return PredictionDirection.UP
        if pct_change < -STRONG_MOVE_PCT:
            return PredictionDirection.STRONGLY_DOWN
        if pct_change < -MOVE_PCT:
            return PredictionDirection.DOWN
        return PredictionDirection.NEUTRAL

    @property
    def alert_sound(self) -> AlertSound:
        return _SOUND_BY_DIRECTION[self.direction]

    def confidence_band(self) -> list[tuple[float, float]]:
        """
        Calculate a per-day (lower, upper) band around the forecast.

        The band narrows as confidence grows.

        Returns:
            list: One (lower, upper) pair per predicted price
        """
        interval_factor = BAND_BASE + (1.0 - self.confidence) * BAND_UNCERTAINTY
        return [
            (price - price * interval_factor, price + price * interval_factor)
            for price in self.predicted_prices
        ]

    def to_dict(self) -> dict[str, object]:
        return {
            "predicted_prices": list(self.predicted_prices),
            "confidence": self.confidence,
            "model_type": self.model_type.value,
            "direction": self.direction.value,
            "percent_change": self.percent_change,
        }
