import pytest

from core.errors import UpstreamError
from services.normalizer import SUMMARY_MODULES
from services.quote_client import QUOTE_FIELDS, QUOTE_SUMMARY_URL, QUOTE_URL, YahooQuoteClient


class StubYfData:
    """記錄請求並回傳預先設定的 payload (或丟出例外)"""
    def __init__(self, payload=None, exc=None):
        self.payload = payload
        self.exc = exc
        self.requests = []

    def get_raw_json(self, url, params=None, timeout=30):
        self.requests.append((url, params))
        if self.exc is not None:
            raise self.exc
        return self.payload


def summary_client(payload=None, exc=None):
    data = StubYfData(payload, exc)
    return YahooQuoteClient(data), data


class TestFetchQuoteSummary:
    def test_returns_first_result(self):
        sections = {"price": {"symbol": "AAPL"}, "summaryDetail": {"forwardPE": 30.1}}
        client, data = summary_client({"quoteSummary": {"result": [sections], "error": None}})

        assert client.fetch_quote_summary("AAPL", SUMMARY_MODULES) == sections

        url, params = data.requests[0]
        assert url == f"{QUOTE_SUMMARY_URL}/AAPL"
        assert params["modules"] == ",".join(SUMMARY_MODULES)
        assert params["formatted"] == "false"

    def test_symbol_is_encoded_as_one_path_segment(self):
        client, data = summary_client({"quoteSummary": {"result": [{}]}})

        client.fetch_quote_summary("A?B#C/D", SUMMARY_MODULES)

        url, params = data.requests[0]
        assert url == f"{QUOTE_SUMMARY_URL}/A%3FB%23C%2FD"
        assert params["symbol"] == "A?B#C/D"

    def test_index_symbol_caret_is_encoded(self):
        client, data = summary_client({"quoteSummary": {"result": [{}]}})

        client.fetch_quote_summary("^GSPC", SUMMARY_MODULES)

        assert data.requests[0][0] == f"{QUOTE_SUMMARY_URL}/%5EGSPC"

    def test_error_object_uses_description(self):
        client, _ = summary_client({
            "quoteSummary": {
                "result": None,
                "error": {"code": "Not Found", "description": "Quote not found for symbol: NOPE"},
            }
        })

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_quote_summary("NOPE", SUMMARY_MODULES)

        assert str(exc_info.value) == "Unable to retrieve data for NOPE: Quote not found for symbol: NOPE"
        assert exc_info.value.symbol == "NOPE"
        assert exc_info.value.code == "UPSTREAM_FAILURE"

    @pytest.mark.parametrize("payload", [
        {"quoteSummary": {"result": [], "error": None}},
        {"quoteSummary": {"result": None, "error": None}},
        {"quoteSummary": {"result": ["not a dict"]}},
        {"quoteSummary": None},
        {},
    ])
    def test_empty_or_malformed_result(self, payload):
        client, _ = summary_client(payload)

        with pytest.raises(UpstreamError):
            client.fetch_quote_summary("AAPL", SUMMARY_MODULES)

    @pytest.mark.parametrize("payload", [None, [], "<html>", 42])
    def test_non_dict_payload(self, payload):
        client, _ = summary_client(payload)

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_quote_summary("AAPL", SUMMARY_MODULES)

        assert "unexpected payload type" in str(exc_info.value)

    def test_transport_failure_is_wrapped(self):
        cause = ConnectionError("connection reset")
        client, _ = summary_client(exc=cause)

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_quote_summary("AAPL", SUMMARY_MODULES)

        assert exc_info.value.__cause__ is cause
        assert exc_info.value.reason == "connection reset"


class TestFetchQuote:
    def test_keeps_only_quote_fields(self):
        client, data = summary_client({
            "quoteResponse": {
                "result": [{
                    "symbol": "^DJI",
                    "regularMarketPrice": 1.0,
                    "shortName": "Dow Jones Industrial Average",
                    "marketState": "CLOSED",
                }],
                "error": None,
            }
        })

        quote = client.fetch_quote("^DJI")

        assert quote == {
            "symbol": "^DJI",
            "regularMarketPrice": 1.0,
            "regularMarketChange": None,
            "regularMarketChangePercent": None,
        }
        assert list(quote.keys()) == QUOTE_FIELDS
        url, params = data.requests[0]
        assert url == QUOTE_URL
        assert params["symbols"] == "^DJI"

    def test_error_branch(self):
        client, _ = summary_client({"quoteResponse": {"result": [], "error": "Invalid symbol"}})

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_quote("^XXX")

        assert "Invalid symbol" in str(exc_info.value)

    @pytest.mark.parametrize("payload", [
        {"quoteResponse": {"result": [], "error": None}},
        {"quoteResponse": {"result": None}},
        {},
    ])
    def test_empty_result(self, payload):
        client, _ = summary_client(payload)

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_quote("^IXIC")

        assert "quote not found" in str(exc_info.value)

    def test_transport_failure_is_wrapped(self):
        cause = TimeoutError("read timed out")
        client, _ = summary_client(exc=cause)

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_quote("^GSPC")

        assert exc_info.value.__cause__ is cause
