"""
Shared fixtures: a canned quotes CSV and a fake HTTP session
"""
import sys
from pathlib import Path

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from stockdata.data import StockDataFetcher

TEST_BASE_URL = "http://quotes.example.com/table.csv"

# Newest first, the way the feed returns it
SAMPLE_CSV = """Date,Open,High,Low,Close,Volume,Adj Close
2014-12-31,112.82,113.13,110.21,110.38,41403400,102.63
2014-12-30,113.64,113.92,112.11,112.52,29881500,104.62
2014-12-29,113.79,114.77,113.70,113.91,27598900,105.91
2010-01-05,214.60,215.59,213.25,214.38,21496600,27.77
2010-01-04,213.43,214.50,212.38,214.01,17633200,27.73
"""


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)


class FakeSession:
    """Records requested URLs and timeouts, returns a canned response"""

    def __init__(self, text: str = SAMPLE_CSV, status_code: int = 200, exc: Exception = None):
        self.text = text
        self.status_code = status_code
        self.exc = exc
        self.calls = []
        self.timeouts = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        self.timeouts.append(timeout)
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.text, self.status_code)


@pytest.fixture
def session() -> FakeSession:
    """Fake HTTP session serving SAMPLE_CSV"""
    return FakeSession()


@pytest.fixture
def fetcher(session) -> StockDataFetcher:
    """Fetcher pointed at the test endpoint through the fake session"""
    return StockDataFetcher(base_url=TEST_BASE_URL, session=session)
