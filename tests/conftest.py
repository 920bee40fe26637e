# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.errors import UpstreamError
from main import create_app
from services.quote_client import get_quote_client


class FakeQuoteClient:
    """
    取代 YahooQuoteClient 的記憶體版本：
    summaries / quotes 內沒有的代號一律丟出 UpstreamError
    """
    def __init__(self, summaries=None, quotes=None):
        self.summaries = summaries or {}
        self.quotes = quotes or {}
        self.calls = []

    def fetch_quote_summary(self, symbol, modules):
        self.calls.append(("summary", symbol, tuple(modules)))
        if symbol not in self.summaries:
            raise UpstreamError(symbol, "Quote not found for ticker symbol")
        return self.summaries[symbol]

    def fetch_quote(self, symbol):
        self.calls.append(("quote", symbol))
        quote = self.quotes.get(symbol)
        if quote is None:
            raise UpstreamError(symbol, "quote not found")
        if isinstance(quote, Exception):
            raise quote
        return quote


def make_quote(symbol, price, change, change_pct):
    return {
        "symbol": symbol,
        "regularMarketPrice": price,
        "regularMarketChange": change,
        "regularMarketChangePercent": change_pct,
    }


@pytest.fixture
def index_quotes():
    return {
        "^GSPC": make_quote("^GSPC", 5800.5, 12.3, 0.21),
        "^IXIC": make_quote("^IXIC", 18300.1, -40.2, -0.22),
        "^DJI": make_quote("^DJI", 42100.0, 0.0, 0.0),
    }


@pytest.fixture
def fake_client():
    return FakeQuoteClient()


@pytest.fixture
def app(fake_client):
    app = create_app(Settings(port=5000))
    app.dependency_overrides[get_quote_client] = lambda: fake_client
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
