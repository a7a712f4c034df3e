"""Statistical Stock Price Forecaster.

Projects a short multi-day forecast from a history of daily closing prices
using a recency-weighted trend, momentum, volatility and directional
consistency, with a confidence score.

Main modules:
    - predictor: Statistical prediction engine with the PricePredictor class.
    - forecast: ForecastResult and direction classification.
    - orchestrator: Model predictor dispatch with statistical fallback.
    - fetch_prices: Quote history fetching and command line interface.

Example usage:
    >>> from price_predictor import PricePredictor
    >>> predictor = PricePredictor()
    >>> result = predictor.predict([100, 101, 102, 103, 104, 105], days_to_predict=5)
    >>> result.direction
    <PredictionDirection.STRONGLY_UP: 'strongly_up'>
"""

from .forecast import AlertSound, ForecastResult, ModelType, PredictionDirection  # noqa: F401
from .orchestrator import Err, ModelCache, ModelPredictor, Ok, PredictionOrchestrator  # noqa: F401
from .predictor import PricePredictor, PredictorConfig  # noqa: F401

__version__ = "0.1.0"
__author__ = "quinn"
PACKAGE_NAME = "price-predictor"
DESCRIPTION = "A statistical short-horizon stock price forecaster"

# Define what should be imported with "from price_predictor import *"
__all__ = [
    "AlertSound",
    "Err",
    "ForecastResult",
    "ModelCache",
    "ModelPredictor",
    "ModelType",
    "Ok",
    "PredictionDirection",
    "PredictionOrchestrator",
    "PricePredictor",
    "PredictorConfig",
    "__version__",
    "__author__",
]
