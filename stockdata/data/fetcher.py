"""
Historical daily stock data fetcher for a CSV quotes endpoint
"""
import io
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union
from urllib.parse import quote

import pandas as pd
import requests

from ..config import settings
from ..config.settings import CACHE_DIR, DEFAULT_START
from .cache import CACHE_SUFFIX, DataCache
from .errors import FetchError

logger = logging.getLogger(__name__)

# Record schema, in output column order
SCHEMA_COLUMNS = ["Date", "Open", "High", "Low", "Close", "Volume", "AdjClose"]


@dataclass(frozen=True)
class StockRecord:
    """One trading day of prices"""
    date: datetime
    open: float
    high: float
    low: float
    close: float
    volume: int
    adj_close: float


# =============================================================================
# Cache key and request URL
# =============================================================================

def escape_symbol(symbol: str) -> str:
    """Percent-escape the index prefix: "^GSPC" -> "%5EGSPC" """
    return symbol.replace("^", "%5E")


def filename_symbol(symbol: str) -> str:
    """Symbol as used in cache filenames: "^GSPC" -> "_GSPC" """
    escaped = escape_symbol(symbol)
    if "%5E" in escaped:
        return escaped.replace("%5E", "_")
    return symbol


def format_date_str(year: int, month0: int, day: int) -> str:
    """
    Build the 8-digit date string used in cache keys

    Args:
        year: Four digit year
        month0: Zero-based month (January = 0)
        day: Day of month

    Returns:
        e.g. (2010, 0, 1) -> "20100001"
    """
    return f"{year}{month0:02d}{day:02d}"


def cache_key(
    symbol: str,
    end_month: int,
    end_day: int,
    end_year: int,
    start_month: int = DEFAULT_START["month"],
    start_day: int = DEFAULT_START["day"],
    start_year: int = DEFAULT_START["year"],
) -> str:
    """
    Cache key for a symbol and date range

    Months are 1-based here. The zero-based month goes into the key, which
    keeps keys identical to the ones existing cache files were written under.
    """
    start_str = format_date_str(start_year, start_month - 1, start_day)
    end_str = format_date_str(end_year, end_month - 1, end_day)
    return f"{filename_symbol(symbol)}_{start_str}_{end_str}{CACHE_SUFFIX}"


def build_request_url(
    symbol: str,
    end_month: int,
    end_day: int,
    end_year: int,
    start_month: int = DEFAULT_START["month"],
    start_day: int = DEFAULT_START["day"],
    start_year: int = DEFAULT_START["year"],
    base_url: Optional[str] = None,
    query_params: Optional[Dict[str, str]] = None,
    fixed_params: Optional[Dict[str, str]] = None,
) -> str:
    """
    Build the quotes request URL

    The symbol is fully percent-encoded ("^" -> "%5E", "&" -> "%26", ...)
    and the query string is joined by hand so it is not encoded twice.
    """
    if base_url is None:
        base_url = settings.DATA_FETCH_CONFIG["base_url"]
    names = query_params or settings.DATA_FETCH_CONFIG["query_params"]
    fixed = settings.DATA_FETCH_CONFIG["fixed_params"] if fixed_params is None else fixed_params

    params = [
        (names["symbol"], quote(symbol, safe="")),
        (names["start_month"], f"{start_month - 1:02d}"),
        (names["start_day"], start_day),
        (names["start_year"], start_year),
        (names["end_month"], f"{end_month - 1:02d}"),
        (names["end_day"], end_day),
        (names["end_year"], end_year),
    ]
    params.extend(fixed.items())

    query = "&".join(f"{name}={value}" for name, value in params)
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}{query}"


def to_records(df: pd.DataFrame) -> List[StockRecord]:
    """Convert a fetched table into StockRecords, keeping row order"""
    records = []
    for row in df[SCHEMA_COLUMNS].itertuples(index=False):
        records.append(
            StockRecord(
                date=pd.Timestamp(row.Date).to_pydatetime(),
                open=float(row.Open),
                high=float(row.High),
                low=float(row.Low),
                close=float(row.Close),
                volume=int(row.Volume),
                adj_close=float(row.AdjClose),
            )
        )
    return records


# =============================================================================
# Fetcher
# =============================================================================

class StockDataFetcher:
    """
    Fetches historical daily prices for one symbol from a CSV quotes endpoint
    Supports an on-disk cache keyed by symbol and date range
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        query_params: Optional[Dict[str, str]] = None,
        fixed_params: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        column_aliases: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize data fetcher

        Args:
            base_url: Quotes endpoint, without query string
            query_params: Parameter names for symbol and date parts
            fixed_params: Parameters appended to every request
            timeout: HTTP timeout in seconds
            session: Optional requests session to reuse
            column_aliases: Feed header names mapped onto the record schema

        Unset arguments are read from DATA_FETCH_CONFIG when the fetcher is built.
        """
        config = settings.DATA_FETCH_CONFIG
        self.base_url = config["base_url"] if base_url is None else base_url
        self.query_params = query_params or dict(config["query_params"])
        self.fixed_params = dict(config["fixed_params"]) if fixed_params is None else fixed_params
        self.timeout = config["timeout"] if timeout is None else timeout
        self.session = session or requests.Session()
        self.column_aliases = (
            dict(config["column_aliases"]) if column_aliases is None else column_aliases
        )

    def build_request_url(
        self,
        symbol: str,
        end_month: int,
        end_day: int,
        end_year: int,
        start_month: int = DEFAULT_START["month"],
        start_day: int = DEFAULT_START["day"],
        start_year: int = DEFAULT_START["year"],
    ) -> str:
        return build_request_url(
            symbol, end_month, end_day, end_year,
            start_month, start_day, start_year,
            base_url=self.base_url,
            query_params=self.query_params,
            fixed_params=self.fixed_params,
        )

    def fetch(
        self,
        symbol: str,
        end_month: int,
        end_day: int,
        end_year: int,
        start_month: int = DEFAULT_START["month"],
        start_day: int = DEFAULT_START["day"],
        start_year: int = DEFAULT_START["year"],
        cache_dir: Union[Path, str] = CACHE_DIR,
        use_cache: bool = False,
    ) -> pd.DataFrame:
        """
        Fetch daily prices for a symbol between two dates

        Args:
            symbol: Ticker symbol (e.g., "AAPL", or "^GSPC" for an index)
            end_month: Ending month, 1-based
            end_day: Ending day
            end_year: Ending year
            start_month: Start month, 1-based
            start_day: Start day
            start_year: Start year
            cache_dir: Directory for cache files
            use_cache: Read from and write to the cache

        Returns:
            DataFrame with columns: Date, Open, High, Low, Close, Volume, AdjClose
            in the order the feed returned the rows. Date is a datetime column.

        Raises:
            FetchError: request, HTTP status or CSV parsing failed
            CacheReadError: cache file exists but cannot be read
            CacheWriteError: cache directory or file cannot be written
        """
        if not symbol:
            raise ValueError("symbol must be a non-empty string")

        cache = DataCache(cache_dir)
        if use_cache:
            cache.ensure_dir()

        key = cache_key(symbol, end_month, end_day, end_year, start_month, start_day, start_year)

        if use_cache and cache.exists(key):
            df = cache.load(key)
            logger.info(f"Loaded {symbol} from cache")
            return df

        url = self.build_request_url(
            symbol, end_month, end_day, end_year, start_month, start_day, start_year
        )
        logger.info(
            f"Fetching {symbol} from {start_year}-{start_month:02d}-{start_day:02d} "
            f"to {end_year}-{end_month:02d}-{end_day:02d}"
        )
        logger.debug(f"Request URL: {url}")

        text = self._download(url, symbol)
        df = self._parse_csv(text, symbol)

        if use_cache:
            cache.save(key, df)

        logger.info(f"Successfully fetched {len(df)} rows for {symbol}")
        return df

    def _download(self, url: str, symbol: str) -> str:
        """Single GET, no retries; anything but 200 is a failure"""
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Request failed: {e}", symbol=symbol, url=url) from e
        if response.status_code != 200:
            raise FetchError(
                f"Unexpected HTTP status {response.status_code}", symbol=symbol, url=url
            )
        return response.text

    def _parse_csv(self, text: str, symbol: str) -> pd.DataFrame:
        """
        Parse the feed CSV into the record schema

        Columns are matched by header name. Values are not validated.
        """
        if not text or not text.strip():
            raise FetchError("Empty response body", symbol=symbol)

        try:
            df = pd.read_csv(io.StringIO(text))
        except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
            raise FetchError(f"Malformed CSV: {e}", symbol=symbol) from e

        df = df.rename(columns=lambda c: str(c).strip())
        df = df.rename(columns=self.column_aliases)

        missing = [c for c in SCHEMA_COLUMNS if c not in df.columns]
        if missing:
            raise FetchError(
                f"Missing expected columns: {missing}",
                symbol=symbol,
                found=df.columns.tolist(),
            )

        try:
            df["Date"] = pd.to_datetime(df["Date"])
        except (ValueError, TypeError) as e:
            raise FetchError(f"Unparseable Date column: {e}", symbol=symbol) from e

        extra = [c for c in df.columns if c not in SCHEMA_COLUMNS]
        return df[SCHEMA_COLUMNS + extra]


# Convenience function
def get_stock_data(
    symbol: str,
    end_month: int,
    end_day: int,
    end_year: int,
    start_month: int = DEFAULT_START["month"],
    start_day: int = DEFAULT_START["day"],
    start_year: int = DEFAULT_START["year"],
    cache_dir: Union[Path, str] = CACHE_DIR,
    use_cache: bool = False,
) -> pd.DataFrame:
    """
    Convenience function to fetch stock data with a default fetcher

    Example:
        # Apple from 1/1/2010 to 1/1/2015
        get_stock_data("AAPL", 1, 1, 2015)
    """
    fetcher = StockDataFetcher()
    return fetcher.fetch(
        symbol, end_month, end_day, end_year,
        start_month, start_day, start_year,
        cache_dir=cache_dir,
        use_cache=use_cache,
    )
