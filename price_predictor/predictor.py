import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from .forecast import ForecastResult, ModelType

# Type aliases
FloatArray = NDArray[np.float64]
PriceSeries = Sequence[float] | FloatArray | pd.Series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredictorConfig:
    """
    Heuristic constants of the statistical model.

    The defaults are hand-picked, not fitted. Override them by passing a
    custom config to PricePredictor.
    """

    window: int = 10  # most recent prices used for all metrics
    min_history: int = 5
    insufficient_data_confidence: float = 0.3
    short_momentum_weight: float = 0.7
    long_momentum_weight: float = 0.3
    neutral_consistency: float = 0.5
    volatility_scale: float = 10.0
    min_volatility_factor: float = 0.2
    max_volatility_factor: float = 0.9
    volatility_blend: float = 0.5
    consistency_blend: float = 0.5
    min_confidence: float = 0.1
    max_confidence: float = 0.9
    decay_rate: float = 0.1  # later days lean more on momentum

    def __post_init__(self) -> None:
        if self.window < 5:
            raise ValueError("window must hold at least 5 prices")
        if self.min_history < 1:
            raise ValueError("min_history must be positive")
        if not 0 <= self.min_confidence <= self.max_confidence <= 1:
            raise ValueError("confidence bounds must satisfy 0 <= min <= max <= 1")
        if not self.min_volatility_factor <= self.max_volatility_factor:
            raise ValueError("min_volatility_factor must not exceed max_volatility_factor")


DEFAULT_CONFIG = PredictorConfig()


def as_price_array(history: PriceSeries) -> FloatArray:
    """
    Normalize a price history to a 1-D float array, oldest first.

    Raises:
        ValueError: If the history is not 1-D or contains NaN, inf or negative prices
    """
    try:
        prices = np.asarray(history, dtype=np.float64)
    except (TypeError, ValueError) as e:
        error_msg = "Price history must contain only numbers"
        raise ValueError(error_msg) from e

    if prices.ndim != 1:
        error_msg = f"Price history must be one-dimensional, got {prices.ndim} dimensions"
        raise ValueError(error_msg)

    if not np.all(np.isfinite(prices)):
        error_msg = "Invalid price data (contains NaN or infinite values)"
        raise ValueError(error_msg)

    if np.any(prices < 0):
        error_msg = "Invalid price data (contains negative prices)"
        raise ValueError(error_msg)

    return prices


def validate_horizon(days_to_predict: int) -> None:
    """Raise ValueError unless the horizon is a non-negative integer."""
    if isinstance(days_to_predict, bool) or not isinstance(days_to_predict, (int, np.integer)):
        raise ValueError("Number of days must be an integer")
    if days_to_predict < 0:
        raise ValueError("Number of days must not be negative")


def relative_change(old: float, new: float) -> float:
    """Relative change from old to new; 0.0 when old is not positive."""
    if old <= 0:
        return 0.0
    return float((new - old) / old)


def relative_changes(prices: FloatArray) -> FloatArray:
    """Relative change of each consecutive pair, guarding zero denominators."""
    previous = prices[:-1]
    current = prices[1:]
    changes: FloatArray = np.zeros(len(previous), dtype=np.float64)
    valid = previous > 0
    changes[valid] = (current[valid] - previous[valid]) / previous[valid]
    return changes


def weighted_trend(prices: FloatArray) -> float:
    """
    Recency-weighted average relative change.

    The change between prices i-1 and i is weighted by i, so later pairs
    count more.
    """
    if len(prices) < 2:
        return 0.0

    changes = relative_changes(prices)
    weights = np.arange(1, len(prices), dtype=np.float64)
    weight_sum = float(np.sum(weights))
    if weight_sum <= 0:
        return 0.0
    return float(np.sum(changes * weights) / weight_sum)


def volatility(prices: FloatArray) -> float:
    """Mean absolute relative change."""
    if len(prices) < 2:
        return 0.0
    return float(np.mean(np.abs(relative_changes(prices))))


def momentum(prices: FloatArray, config: PredictorConfig = DEFAULT_CONFIG) -> float:
    """Blend of the three-point change and the change across the whole window."""
    if len(prices) < 5:
        return 0.0

    short_term = relative_change(prices[-3], prices[-1])
    long_term = relative_change(prices[0], prices[-1])
    return short_term * config.short_momentum_weight + long_term * config.long_momentum_weight


def consistency(prices: FloatArray, config: PredictorConfig = DEFAULT_CONFIG) -> float:
    """Fraction of consecutive deltas moving in the same direction as the one before."""
    if len(prices) < 3:
        return config.neutral_consistency

    deltas = np.diff(prices)
    latest = deltas[1:]
    prior = deltas[:-1]
    same_direction = ((latest > 0) & (prior > 0)) | ((latest < 0) & (prior < 0))
    return float(np.mean(same_direction))


def confidence_score(
    price_volatility: float,
    price_consistency: float,
    config: PredictorConfig = DEFAULT_CONFIG,
) -> float:
    """Combine volatility and consistency into a bounded confidence."""
    volatility_factor = float(
        np.clip(
            1.0 - price_volatility * config.volatility_scale,
            config.min_volatility_factor,
            config.max_volatility_factor,
        )
    )
    score = volatility_factor * config.volatility_blend + price_consistency * config.consistency_blend
    return float(np.clip(score, config.min_confidence, config.max_confidence))


class PricePredictor:
    """
    Statistical short-horizon price predictor.

    Projects a few days ahead from a weighted trend and a momentum term over
    the most recent prices, and scores the forecast by volatility and
    directional consistency. Histories are ordered oldest first, so
    ``history[-1]`` is the latest close.

    The predictor keeps no state between calls and is safe to share across
    threads.
    """

    def __init__(self, config: PredictorConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def analyze(self, history: PriceSeries) -> dict[str, float]:
        """
        Calculate the model metrics over the recent window.

        Args:
            history: Daily closing prices, most recent last

        Returns:
            dict: trend, volatility, momentum, consistency, confidence and last_price

        Raises:
            ValueError: If the history is empty or invalid
        """
        prices = as_price_array(history)
        if len(prices) == 0:
            error_msg = "No price data available to analyze"
            raise ValueError(error_msg)

        recent = prices[-self.config.window :]
        price_volatility = volatility(recent)
        price_consistency = consistency(recent, self.config)

        return {
            "trend": weighted_trend(recent),
            "volatility": price_volatility,
            "momentum": momentum(recent, self.config),
            "consistency": price_consistency,
            "confidence": confidence_score(price_volatility, price_consistency, self.config),
            "last_price": float(prices[-1]),
        }

    def predict(self, history: PriceSeries, days_to_predict: int = 5) -> ForecastResult:
        """
        Forecast the next days' closing prices.

        Args:
            history: Daily closing prices, most recent last
            days_to_predict: Forecast horizon in days (must not be negative)

        Returns:
            ForecastResult: Chained daily predictions with a confidence score.
                Empty predictions with low confidence when the history is too short.

        Raises:
            ValueError: If the horizon is invalid or the history contains invalid prices
        """
        validate_horizon(days_to_predict)
        # Short histories get the low-confidence empty result whatever they contain
        if len(history) < self.config.min_history:
            logger.debug(
                "Not enough price history for statistical prediction (%d < %d)",
                len(history),
                self.config.min_history,
            )
            return ForecastResult((), self.config.insufficient_data_confidence, ModelType.STATISTICAL)

        metrics = self.analyze(history)
        trend = metrics["trend"]
        price_momentum = metrics["momentum"]
        logger.debug(
            "Statistical metrics: trend=%.6f volatility=%.6f momentum=%.6f consistency=%.3f",
            trend,
            metrics["volatility"],
            price_momentum,
            metrics["consistency"],
        )

        predictions: list[float] = []
        last_price = metrics["last_price"]
        for day in range(1, days_to_predict + 1):
            # Trend dominates early days, momentum takes over later
            decay = 1.0 / (1.0 + self.config.decay_rate * day)
            change_rate = trend * decay + price_momentum * (1.0 - decay)
            last_price = last_price * (1.0 + change_rate)
            predictions.append(last_price)

        logger.debug("Statistical prediction: %s (confidence %.3f)", predictions, metrics["confidence"])
        return ForecastResult(tuple(predictions), metrics["confidence"], ModelType.STATISTICAL)
