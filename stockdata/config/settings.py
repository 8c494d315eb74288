"""
Configuration settings for the historical stock data fetcher
"""
import logging
import os

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, keeping the default on bad input"""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default


# Relative to the working directory, like the fetch() default
CACHE_DIR = "stockDataCache"

# =============================================================================
# DEFAULT DATE RANGE
# =============================================================================

DEFAULT_START = {
    "month": 1,   # 1-based, January
    "day": 1,
    "year": 2010,
}

# =============================================================================
# DATA FETCHING
# =============================================================================

DATA_FETCH_CONFIG = {
    # Historical quotes CSV endpoint
    "base_url": os.environ.get(
        "STOCKDATA_BASE_URL", "http://real-chart.finance.yahoo.com/table.csv"
    ),

    # Query parameter names used by the endpoint
    "query_params": {
        "symbol": "s",
        "start_month": "a",
        "start_day": "b",
        "start_year": "c",
        "end_month": "d",
        "end_day": "e",
        "end_year": "f",
    },

    # Appended to every request after the date parameters
    "fixed_params": {
        "g": "d",        # daily granularity
        "ignore": ".csv",
    },

    # Network
    "timeout": _env_float("STOCKDATA_TIMEOUT", 30.0),  # seconds

    # Cache
    "cache_extension": ".parquet",

    # Feed header names mapped onto the record schema
    "column_aliases": {
        "Adj Close": "AdjClose",
        "Adj.Close": "AdjClose",
        "Adj_Close": "AdjClose",
    },
}

# =============================================================================
# LOGGING
# =============================================================================

LOGGING_CONFIG = {
    "level": os.environ.get("STOCKDATA_LOG_LEVEL", "INFO"),
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
