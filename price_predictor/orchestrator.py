"""Choose between an external model predictor and the statistical one.

The model path never raises to the caller: any failure, or a missing or empty
result, falls back to :class:`~price_predictor.predictor.PricePredictor`.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, NoReturn, Protocol, TypeVar, Union, runtime_checkable

import numpy as np

from .forecast import ForecastResult, ModelType
from .predictor import PricePredictor, PriceSeries, as_price_array, validate_horizon

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)

# Model confidence when the model does not report one
DEFAULT_MODEL_CONFIDENCE = 0.7

# Model output is clamped to this band around the latest close
MAX_MODEL_RISE = 1.5
MAX_MODEL_DROP = 0.5


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def or_else(self, fn: Callable[[BaseException], T]) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error

    def or_else(self, fn: Callable[[E], T]) -> T:
        return fn(self.error)


Result = Union[Ok[T], Err[BaseException]]


class ModelUnavailableError(RuntimeError):
    """The model predictor produced no usable forecast."""


@runtime_checkable
class ModelPredictor(Protocol):
    """
    A model-backed price predictor, e.g. a trained neural network.

    ``predict_prices`` returns predicted closes for the next days, or None
    when the model cannot forecast the given history.
    """

    def predict_prices(self, history: Sequence[float], days: int) -> Sequence[float] | None: ...


class ModelCache:
    """
    Loaded model predictors keyed by symbol.

    Models are loaded lazily through ``loader`` and kept until evicted.
    Loads of different symbols run concurrently; concurrent loads of the
    same symbol call the loader once.
    """

    def __init__(self, loader: Callable[[str], ModelPredictor]) -> None:
        self._loader = loader
        self._models: dict[str, ModelPredictor] = {}
        self._load_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def load(self, symbol: str) -> ModelPredictor:
        """
        Return the cached model for ``symbol``, loading it on first use.

        Raises:
            Exception: Whatever the loader raises; nothing is cached in that case
        """
        with self._lock:
            model = self._models.get(symbol)
            if model is not None:
                return model
            load_lock = self._load_locks.setdefault(symbol, threading.Lock())

        # The cache-wide lock is not held while the loader runs
        with load_lock:
            with self._lock:
                model = self._models.get(symbol)
            if model is not None:
                return model

            logger.debug("Loading model for %s", symbol)
            model = self._loader(symbol)
            with self._lock:
                self._models[symbol] = model
            return model

    def get(self, symbol: str) -> ModelPredictor | None:
        with self._lock:
            return self._models.get(symbol)

    def evict(self, symbol: str) -> bool:
        """Drop the model for ``symbol``. Returns False if none was loaded."""
        with self._lock:
            return self._models.pop(symbol, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._models.clear()

    def symbols(self) -> list[str]:
        with self._lock:
            return sorted(self._models)

    def __contains__(self, symbol: object) -> bool:
        with self._lock:
            return symbol in self._models

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)


def sanitize_predictions(predictions: Sequence[float], last_price: float) -> list[float]:
    """Clamp model output to a plausible band around the latest close."""
    lower = last_price * MAX_MODEL_DROP
    upper = last_price * MAX_MODEL_RISE
    sanitized = []
    for price in predictions:
        clamped = float(np.clip(price, lower, upper))
        if clamped != price:
            logger.warning("Sanitized unreasonable prediction: %s -> %s", price, clamped)
        sanitized.append(clamped)
    return sanitized


class PredictionOrchestrator:
    """
    Dispatch predictions to a model predictor with statistical fallback.

    Args:
        statistical: Predictor used directly and as fallback
        model_cache: Source of per-symbol model predictors; without one only
            the statistical predictor is used
    """

    def __init__(
        self,
        statistical: PricePredictor | None = None,
        model_cache: ModelCache | None = None,
    ) -> None:
        self.statistical = statistical or PricePredictor()
        self.model_cache = model_cache

    def predict_with_model(
        self, symbol: str, history: Sequence[float], days_to_predict: int = 5
    ) -> Result[ForecastResult]:
        """Run the model predictor for ``symbol``, capturing every failure as Err."""
        if self.model_cache is None:
            return Err(ModelUnavailableError("No model cache configured"))

        try:
            model = self.model_cache.load(symbol)
            raw = model.predict_prices(history, days_to_predict)
            if raw is None:
                return Err(ModelUnavailableError(f"Model returned no prediction for {symbol}"))

            predictions = [float(p) for p in raw][:days_to_predict]
            if not predictions:
                return Err(ModelUnavailableError(f"Model returned an empty prediction for {symbol}"))

            if not np.all(np.isfinite(predictions)):
                return Err(ModelUnavailableError(f"Model returned non-finite prices for {symbol}"))

            confidence = float(getattr(model, "confidence", DEFAULT_MODEL_CONFIDENCE))
            if not 0.0 <= confidence <= 1.0:
                return Err(ModelUnavailableError(f"Model reported invalid confidence {confidence} for {symbol}"))

            last_price = float(history[-1])
            return Ok(
                ForecastResult(
                    tuple(sanitize_predictions(predictions, last_price)),
                    confidence,
                    ModelType.NEURAL,
                )
            )
        except Exception as e:
            return Err(e)

    def predict(
        self,
        symbol: str,
        history: PriceSeries,
        use_model: bool = True,
        days_to_predict: int = 5,
    ) -> ForecastResult:
        """
        Predict prices for ``symbol``, preferring the model when requested.

        Raises:
            ValueError: If the history or horizon is invalid
        """
        validate_horizon(days_to_predict)
        # Short histories get the statistical degenerate result whatever they contain
        if len(history) < self.statistical.config.min_history:
            logger.debug("Not enough price history for %s, using statistical prediction", symbol)
            return self.statistical.predict(history, days_to_predict)

        prices = as_price_array(history)

        def statistical_fallback(error: BaseException | None = None) -> ForecastResult:
            if error is not None:
                logger.warning(
                    "Model prediction failed for %s, falling back to statistical",
                    symbol,
                    exc_info=error,
                )
            logger.debug("Using statistical prediction for %s", symbol)
            return self.statistical.predict(prices, days_to_predict)

        if not use_model:
            return statistical_fallback()

        logger.debug("Attempting model prediction for %s", symbol)
        result = self.predict_with_model(symbol, prices.tolist(), days_to_predict)
        if result.is_ok:
            logger.debug("Model prediction succeeded for %s", symbol)
        return result.or_else(statistical_fallback)
