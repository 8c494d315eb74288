"""
Data acquisition and caching modules
"""
from .fetcher import (
    StockDataFetcher,
    StockRecord,
    build_request_url,
    cache_key,
    escape_symbol,
    filename_symbol,
    format_date_str,
    get_stock_data,
    to_records,
)
from .cache import DataCache
from .errors import StockDataError, FetchError, CacheWriteError, CacheReadError

__all__ = [
    "StockDataFetcher",
    "StockRecord",
    "DataCache",
    "get_stock_data",
    "to_records",
    "cache_key",
    "build_request_url",
    "escape_symbol",
    "filename_symbol",
    "format_date_str",
    "StockDataError",
    "FetchError",
    "CacheWriteError",
    "CacheReadError",
]
