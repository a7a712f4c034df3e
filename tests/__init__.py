"""
Test suite for the statistical price predictor

This package contains all unit tests for the price_predictor package.

Test modules:
- test_price_predictor: Tests for the PricePredictor class and its metrics
- test_forecast: Tests for ForecastResult and direction classification
- test_orchestrator: Tests for model dispatch, the model cache and fallback
- test_fetch_prices: Tests for quote history fetching and the CLI

Running tests:
    pytest                          # Run all tests
    pytest -v                       # Verbose output
    pytest --cov=price_predictor   # With coverage report
    pytest -k "momentum"           # Run tests matching "momentum"
"""

import sys
from pathlib import Path

# Add parent directory to path for imports during testing
# This ensures tests can import from price_predictor regardless of where pytest is run
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
