import argparse
import logging
import sys

import pandas as pd
import yfinance as yf  # type: ignore[import-untyped]

from .forecast import ForecastResult, PredictionDirection
from .orchestrator import PredictionOrchestrator

logger = logging.getLogger(__name__)

_DIRECTION_LABELS = {
    PredictionDirection.STRONGLY_UP: "📈 STRONGLY UP",
    PredictionDirection.UP: "📈 UP",
    PredictionDirection.NEUTRAL: "➡️  SIDEWAYS",
    PredictionDirection.DOWN: "📉 DOWN",
    PredictionDirection.STRONGLY_DOWN: "⚠️  STRONGLY DOWN",
}


def fetch_history(ticker: str, period: str = "3mo") -> pd.Series:
    """
    Fetch daily closing prices for a ticker.

    Args:
        ticker: Ticker symbol, e.g. "AAPL"
        period: yfinance history period, e.g. "1mo", "3mo", "1y"

    Returns:
        pd.Series: Daily closes, oldest first

    Raises:
        ValueError: If the download fails or returns no data
    """
    logger.info("Fetching %s of data for %s", period, ticker)
    try:
        data = yf.Ticker(ticker).history(period=period, interval="1d")
    except Exception as e:
        error_msg = f"Failed to fetch data for {ticker}"
        raise ValueError(error_msg) from e

    if data is None or data.empty or "Close" not in data.columns:
        error_msg = f"No data found for {ticker}"
        raise ValueError(error_msg)

    closes = data["Close"].dropna().sort_index()
    if closes.empty:
        error_msg = f"No closing prices found for {ticker}"
        raise ValueError(error_msg)
    return closes.astype("float64")


def print_forecast(ticker: str, history: pd.Series, result: ForecastResult) -> None:
    """Print a forecast report for one ticker."""
    print(f"\n=== {len(result.predicted_prices)}-Day Price Forecast for {ticker} ===")
    if len(history) > 0:
        print(f"Latest Close: ${float(history.iloc[-1]):.2f}")
    print(f"Model: {result.model_type.value}")

    if result.is_empty:
        print("\n⚠️  Not enough price history to forecast")
        print(f"Confidence: {result.confidence * 100:.0f}%")
        return

    print("\nDay  Predicted    Band")
    for day, (price, (lower, upper)) in enumerate(
        zip(result.predicted_prices, result.confidence_band()), start=1
    ):
        print(f"{day:>3}  ${price:>9.2f}    ${lower:.2f} - ${upper:.2f}")

    print(f"\nConfidence: {result.confidence * 100:.0f}%")
    print(f"Forecast Change: {result.percent_change:.2f}%")
    print(f"Direction: {_DIRECTION_LABELS[result.direction]}")
    print(f"Alert: {result.alert_sound.value}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Fetch recent closing prices and forecast the next few days."
    )
    parser.add_argument(
        "--tickers",
        "-t",
        nargs="*",
        help="Ticker symbols (e.g. GOOGL MSFT AAPL). If omitted, you'll be prompted.",
    )
    parser.add_argument(
        "--days",
        "-d",
        type=int,
        default=5,
        help="Number of days to predict (default: 5)",
    )
    parser.add_argument(
        "--period",
        "-p",
        default="3mo",
        help="History period to fetch (default: 3mo)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log model metrics",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.days < 0:
        print("Error: days must not be negative")
        sys.exit(1)

    # Determine ticker list
    if args.tickers:
        tickers = [t.strip().upper() for t in args.tickers if t.strip()]
    else:
        raw = input("Enter ticker symbol(s), comma-separated (e.g. GOOGL,MSFT): ").strip()
        if not raw:
            print("No ticker provided. Exiting.")
            sys.exit(1)
        tickers = [t.strip().upper() for t in raw.split(",") if t.strip()]

    orchestrator = PredictionOrchestrator()

    for ticker in tickers:
        print(f"\n{'=' * 60}")
        print(f"FORECASTING: {ticker}")
        print("=" * 60)

        try:
            history = fetch_history(ticker, args.period)
            result = orchestrator.predict(ticker, history, use_model=False, days_to_predict=args.days)
            print_forecast(ticker, history, result)
        except ValueError as e:
            print(f"Error forecasting {ticker}: {e}")
            continue

    print(f"\n{'=' * 60}")
    print("Forecast complete!")
    print(f"{'=' * 60}")


if __name__ == "__main__":
    main()
