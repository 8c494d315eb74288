"""
Data cache management utilities
"""
import logging
import os
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, Any, Union

import pandas as pd

from ..config.settings import CACHE_DIR, DATA_FETCH_CONFIG
from .errors import CacheReadError, CacheWriteError

logger = logging.getLogger(__name__)

CACHE_SUFFIX = "_stockData"


class DataCache:
    """
    Stores fetched price tables as parquet files, one file per cache key.
    Files are never expired or refreshed here.
    """

    def __init__(
        self,
        cache_dir: Union[Path, str] = CACHE_DIR,
        extension: str = DATA_FETCH_CONFIG["cache_extension"],
    ) -> None:
        """
        Initialize cache manager

        Args:
            cache_dir: Directory for cache storage (not created until needed)
            extension: File extension for cache files
        """
        self.cache_dir: Path = Path(cache_dir)
        self.extension = extension

    def ensure_dir(self) -> Path:
        """Create the cache directory (and parents) if missing"""
        if self.cache_dir.is_dir():
            return self.cache_dir
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheWriteError(
                f"Cannot create cache directory: {e}", path=str(self.cache_dir)
            ) from e
        logger.debug(f"Created cache directory: {self.cache_dir}")
        return self.cache_dir

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}{self.extension}"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def load(self, key: str) -> pd.DataFrame:
        """
        Load a cached table

        Args:
            key: Cache key as built by the fetcher

        Returns:
            DataFrame exactly as it was saved

        Raises:
            CacheReadError: file missing, unreadable or not valid parquet
        """
        cache_path = self.path_for(key)
        try:
            df = pd.read_parquet(cache_path, engine="pyarrow")
        except Exception as e:
            raise CacheReadError(
                f"Failed to read cache file: {e}", path=str(cache_path)
            ) from e

        logger.debug(f"Loaded {len(df)} rows from cache: {cache_path}")
        return df

    def save(self, key: str, df: pd.DataFrame) -> Path:
        """
        Write a table to the cache, replacing any existing file

        The file is written next to its target and moved into place, so a
        failed write never leaves a truncated cache file behind.

        Raises:
            CacheWriteError: directory or file could not be written
        """
        self.ensure_dir()
        cache_path = self.path_for(key)
        tmp = cache_path.with_suffix(cache_path.suffix + ".tmp")
        try:
            df.to_parquet(tmp, engine="pyarrow", index=False)
            os.replace(str(tmp), str(cache_path))
        except Exception as e:
            if tmp.exists():
                tmp.unlink()
            raise CacheWriteError(
                f"Failed to write cache file: {e}", path=str(cache_path)
            ) from e

        logger.debug(f"Saved {len(df)} rows to cache: {cache_path}")
        return cache_path

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get statistics about cached data

        Returns:
            Dictionary with cache statistics:
            - num_files: Number of cached files
            - total_size_mb: Total size in megabytes
            - oldest_file: Timestamp of oldest file
            - newest_file: Timestamp of newest file
            - cache_dir: Path to cache directory
        """
        pattern = f"*{CACHE_SUFFIX}{self.extension}"
        cache_files = list(self.cache_dir.glob(pattern)) if self.cache_dir.is_dir() else []

        total_size: int = sum(f.stat().st_size for f in cache_files)
        total_size_mb: float = total_size / (1024 * 1024)

        oldest_date: Optional[datetime] = None
        newest_date: Optional[datetime] = None

        if cache_files:
            oldest = min(f.stat().st_mtime for f in cache_files)
            newest = max(f.stat().st_mtime for f in cache_files)
            oldest_date = datetime.fromtimestamp(oldest)
            newest_date = datetime.fromtimestamp(newest)

        return {
            "num_files": len(cache_files),
            "total_size_mb": round(total_size_mb, 2),
            "oldest_file": oldest_date,
            "newest_file": newest_date,
            "cache_dir": str(self.cache_dir),
        }
