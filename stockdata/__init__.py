"""
Historical daily stock prices with an on-disk cache
"""
from .data import (
    StockDataFetcher,
    StockRecord,
    DataCache,
    get_stock_data,
    to_records,
    StockDataError,
    FetchError,
    CacheWriteError,
    CacheReadError,
)

__version__ = "0.1.0"

__all__ = [
    "StockDataFetcher",
    "StockRecord",
    "DataCache",
    "get_stock_data",
    "to_records",
    "StockDataError",
    "FetchError",
    "CacheWriteError",
    "CacheReadError",
]
