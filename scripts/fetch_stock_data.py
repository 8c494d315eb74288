"""
Fetch historical daily prices for one symbol

Usage:
    python scripts/fetch_stock_data.py AAPL 1 1 2015
    python scripts/fetch_stock_data.py ^GSPC 1 1 2015 --use-cache --cache-dir tmp
    python scripts/fetch_stock_data.py MSFT 12 31 2015 --start-year 2014 --output msft.csv
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from stockdata.config.settings import CACHE_DIR, DEFAULT_START, LOGGING_CONFIG
from stockdata.data import StockDataFetcher, StockDataError

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch historical daily stock prices")
    parser.add_argument("symbol", help="Ticker symbol, e.g. AAPL or ^GSPC")
    parser.add_argument("end_month", type=int, help="Ending month (1-12)")
    parser.add_argument("end_day", type=int, help="Ending day")
    parser.add_argument("end_year", type=int, help="Ending year")
    parser.add_argument("--start-month", type=int, default=DEFAULT_START["month"])
    parser.add_argument("--start-day", type=int, default=DEFAULT_START["day"])
    parser.add_argument("--start-year", type=int, default=DEFAULT_START["year"])
    parser.add_argument("--cache-dir", default=CACHE_DIR, help="Cache directory")
    parser.add_argument("--use-cache", action="store_true", help="Read and write the disk cache")
    parser.add_argument("--output", type=Path, help="Write the result to this CSV file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOGGING_CONFIG["level"],
        format=LOGGING_CONFIG["format"],
    )

    fetcher = StockDataFetcher()
    try:
        df = fetcher.fetch(
            args.symbol,
            args.end_month,
            args.end_day,
            args.end_year,
            start_month=args.start_month,
            start_day=args.start_day,
            start_year=args.start_year,
            cache_dir=args.cache_dir,
            use_cache=args.use_cache,
        )
    except StockDataError as e:
        logger.error(f"Failed to fetch {args.symbol}: {e}")
        return 1

    if df.empty:
        logger.warning(f"No rows returned for {args.symbol}")
    else:
        logger.info(f"{len(df)} rows, {df['Date'].iloc[0]} .. {df['Date'].iloc[-1]}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.output, index=False)
        logger.info(f"Saved {args.output}")
    else:
        print(df.to_string(index=False, max_rows=20))

    return 0


if __name__ == "__main__":
    sys.exit(main())
