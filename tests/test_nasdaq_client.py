import pytest
import requests

from premium_checker.nasdaq_client import NasdaqClient, parse_chain_payload, parse_last_trade

PAYLOAD = {
    "data": {
        "lastTrade": "LAST TRADE: $1,227.48 (AS OF Feb 7, 2025)",
        "table": {
            "rows": [
                {"expirygroup": "February 21, 2025", "expiryDate": None, "strike": None},
                {"expirygroup": "", "expiryDate": "Feb 21", "strike": "1,200.00",
                 "c_Bid": "40.10", "c_Ask": "41.00", "p_Bid": "--", "p_Ask": "--", "c_Last": "40.5"},
            ]
        },
    }
}


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status}")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        r = self.responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(NasdaqClient, "_sleep_backoff", staticmethod(lambda i: None))


def test_parse_last_trade():
    assert parse_last_trade("LAST TRADE: $227.48 (AS OF Feb 7, 2025)") == pytest.approx(227.48)
    assert parse_last_trade(None) == 0.0
    assert parse_last_trade("n/a") == 0.0


def test_parse_chain_payload():
    quote = parse_chain_payload(PAYLOAD)
    assert quote.current_price == pytest.approx(1227.48)
    assert len(quote.rows) == 2
    row = quote.rows[1]
    assert (row.strike, row.c_bid, row.c_ask, row.p_bid, row.expiry_date) == (
        "1,200.00", "40.10", "41.00", "--", "Feb 21")


def test_parse_chain_payload_missing_data():
    assert parse_chain_payload({"data": None}).rows == []
    assert parse_chain_payload({}).current_price == 0.0


def test_get_option_quote_builds_request():
    session = FakeSession([FakeResponse(PAYLOAD)])
    quote = NasdaqClient(session=session).get_option_quote("AAPL", "2025-03-01", "call")
    assert len(quote.rows) == 2
    url, kwargs = session.requests[0]
    assert url == "https://api.nasdaq.com/api/quote/AAPL/option-chain"
    assert kwargs["params"]["callput"] == "call"
    assert kwargs["params"]["todate"] == "2025-03-01"
    assert kwargs["headers"]["accept-language"] == "*"


def test_get_option_quote_retries_then_succeeds():
    session = FakeSession([requests.ConnectionError("down"), FakeResponse(PAYLOAD)])
    quote = NasdaqClient(session=session).get_option_quote("AAPL", "2025-03-01", "put")
    assert quote.current_price == pytest.approx(1227.48)
    assert len(session.requests) == 2


def test_get_option_quote_failure_is_empty():
    session = FakeSession([
        FakeResponse({}, status=500),
        FakeResponse({"data": {"table": {"rows": []}}}),
        requests.Timeout("slow"),
    ])
    quote = NasdaqClient(session=session).get_option_quote("AAPL", "2025-03-01", "put")
    assert quote.rows == [] and quote.current_price == 0.0
