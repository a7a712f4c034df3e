"""
Tests for quote history fetching and the command line interface.
"""

import io
from contextlib import redirect_stdout
from datetime import datetime
from unittest import TestCase, mock

import pandas as pd

from price_predictor.fetch_prices import fetch_history, main, print_forecast
from price_predictor.forecast import ForecastResult, ModelType

# Mock data for testing
MOCK_HISTORY = {
    "Open": [100, 101, 102, 103, 104, 105],
    "Close": [101, 102, 103, 104, 105, 106],
    "High": [102, 103, 104, 105, 106, 107],
    "Low": [99, 100, 101, 102, 103, 104],
    "Volume": [1000, 2000, 1500, 2500, 3000, 2800],
}


class TestFetchHistory(TestCase):
    """Test cases for fetch_history."""

    def setUp(self):
        dates = pd.date_range(end=datetime.now(), periods=6)
        self.mock_df = pd.DataFrame(MOCK_HISTORY, index=dates)

    @mock.patch("yfinance.Ticker")
    def test_fetch_history(self, mock_ticker):
        """Test fetching closes with a mocked yfinance."""
        mock_history = mock.MagicMock()
        mock_history.history.return_value = self.mock_df
        mock_ticker.return_value = mock_history

        closes = fetch_history("AAPL", period="1mo")

        mock_ticker.assert_called_once_with("AAPL")
        mock_history.history.assert_called_once_with(period="1mo", interval="1d")
        self.assertEqual(list(closes), [101.0, 102.0, 103.0, 104.0, 105.0, 106.0])
        self.assertEqual(closes.iloc[-1], 106.0)  # Most recent last

    @mock.patch("yfinance.Ticker")
    def test_fetch_history_sorts_and_drops_missing(self, mock_ticker):
        shuffled = self.mock_df.iloc[::-1].copy()
        shuffled.iloc[0, shuffled.columns.get_loc("Close")] = float("nan")
        mock_ticker.return_value.history.return_value = shuffled

        closes = fetch_history("AAPL")
        self.assertEqual(list(closes), [101.0, 102.0, 103.0, 104.0, 105.0])

    @mock.patch("yfinance.Ticker")
    def test_fetch_history_no_data(self, mock_ticker):
        mock_ticker.return_value.history.return_value = pd.DataFrame()
        with self.assertRaises(ValueError):
            fetch_history("NOPE")

    @mock.patch("yfinance.Ticker")
    def test_fetch_history_download_error(self, mock_ticker):
        mock_ticker.return_value.history.side_effect = ConnectionError("offline")
        with self.assertRaises(ValueError):
            fetch_history("AAPL")


class TestReport(TestCase):
    """Test cases for the printed report and CLI."""

    def test_print_forecast(self):
        history = pd.Series([100.0, 101.0, 102.0, 103.0, 104.0, 105.0])
        result = ForecastResult((106.0, 107.0, 110.0), 0.6, ModelType.STATISTICAL)

        output = io.StringIO()
        with redirect_stdout(output):
            print_forecast("AAPL", history, result)

        text = output.getvalue()
        self.assertIn("3-Day Price Forecast for AAPL", text)
        self.assertIn("Latest Close: $105.00", text)
        self.assertIn("Confidence: 60%", text)
        self.assertIn("STRONGLY UP", text)
        self.assertIn("price_up", text)

    def test_print_empty_forecast(self):
        output = io.StringIO()
        with redirect_stdout(output):
            print_forecast("AAPL", pd.Series([100.0, 101.0]), ForecastResult((), 0.3))

        self.assertIn("Not enough price history", output.getvalue())

    @mock.patch("price_predictor.fetch_prices.fetch_history")
    def test_main(self, mock_fetch):
        mock_fetch.return_value = pd.Series([float(p) for p in range(100, 111)])

        output = io.StringIO()
        with mock.patch("sys.argv", ["price-predictor", "-t", "aapl", "-d", "4"]), redirect_stdout(output):
            main()

        mock_fetch.assert_called_once_with("AAPL", "3mo")
        text = output.getvalue()
        self.assertIn("FORECASTING: AAPL", text)
        self.assertIn("4-Day Price Forecast for AAPL", text)
        self.assertIn("Forecast complete!", text)

    @mock.patch("price_predictor.fetch_prices.fetch_history")
    def test_main_continues_after_error(self, mock_fetch):
        mock_fetch.side_effect = [ValueError("No data found for BAD"), pd.Series([50.0] * 6)]

        output = io.StringIO()
        with mock.patch("sys.argv", ["price-predictor", "-t", "BAD", "GOOD"]), redirect_stdout(output):
            main()

        text = output.getvalue()
        self.assertIn("Error forecasting BAD: No data found for BAD", text)
        self.assertIn("5-Day Price Forecast for GOOD", text)

    def test_main_rejects_negative_days(self):
        with mock.patch("sys.argv", ["price-predictor", "-t", "AAPL", "-d", "-1"]), redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main()
        self.assertEqual(ctx.exception.code, 1)
