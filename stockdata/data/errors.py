"""
Exceptions raised by the stock data fetcher and its cache
"""
from typing import Dict, Optional

__all__ = [
    "StockDataError",
    "FetchError",
    "CacheWriteError",
    "CacheReadError",
]


class StockDataError(RuntimeError):
    """Base class for fetcher failures; carries optional context for logs"""

    def __init__(self, message: str, **ctx):
        super().__init__(message)
        self.message = message
        self.ctx: Optional[Dict[str, object]] = ctx or None

    def __str__(self) -> str:
        if self.ctx:
            return f"{self.message} | ctx={self.ctx}"
        return self.message


class FetchError(StockDataError):
    """Network, HTTP or CSV failure on the remote feed"""


class CacheWriteError(StockDataError):
    """Cache directory or file could not be created or written"""


class CacheReadError(StockDataError):
    """Cache file exists but could not be read or deserialized"""
