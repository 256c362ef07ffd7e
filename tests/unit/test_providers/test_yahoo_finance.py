import httpx
import pytest

from asset_converter.data_collection.providers.yahoo_finance import YahooChartSource


def chart(price):
    return {"chart": {"result": [{"meta": {"symbol": "X", "regularMarketPrice": price}}], "error": None}}


class DummyResponse:
    def __init__(self, data, status_code: int = 200):
        self._data = data
        self.status_code = status_code

    def json(self):
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


class DummyClient:
    """Answers per ticker from a {ticker: (payload, status)} table."""

    def __init__(self, responses, timeout=None):
        self.responses = responses
        self.headers = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None, headers=None):
        self.headers.append(headers)
        ticker = url.rsplit("/", 1)[-1]
        data, status = self.responses.get(ticker, (None, 404))
        if status is None:
            raise data
        return DummyResponse(data, status_code=status)


@pytest.mark.asyncio
async def test_yahoo_success(monkeypatch):
    client = DummyClient({"RELIANCE.NS": (chart(2900.5), 200), "TCS.NS": (chart(3900), 200)})
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: client)

    source = YahooChartSource("stocks_in", {"RELIANCE": "RELIANCE.NS", "TCS": "TCS.NS"})
    prices = await source.fetch()

    assert source.BUCKET == "stocks_in"
    assert prices == {"RELIANCE": 2900.5, "TCS": 3900.0}
    assert all("User-Agent" in h for h in client.headers)


@pytest.mark.asyncio
async def test_yahoo_partial_failure(monkeypatch):
    """Test one bad symbol does not sink the batch."""
    client = DummyClient({
        "AAPL": (chart(190.1), 200),
        "MSFT": ({"chart": {"result": None}}, 200),
        "TSLA": (ValueError("not json"), 200),
    })
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: client)

    source = YahooChartSource("stocks_us", {"AAPL": "AAPL", "MSFT": "MSFT", "TSLA": "TSLA", "GOOGL": "GOOGL"})
    assert await source.fetch() == {"AAPL": 190.1}


@pytest.mark.asyncio
async def test_yahoo_all_failed(monkeypatch):
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: DummyClient({}))
    assert await YahooChartSource("stocks_us", {"AAPL": "AAPL"}).fetch() is None


@pytest.mark.asyncio
async def test_yahoo_no_symbols():
    assert await YahooChartSource("stocks_us", {}).fetch() is None


@pytest.mark.asyncio
async def test_yahoo_request_error_on_one_symbol(monkeypatch):
    """Test a transport-level decoding error drops only that ticker."""
    client = DummyClient({
        "AAPL": (chart(190.1), 200),
        "MSFT": (httpx.DecodingError("bad gzip"), None),
        "TSLA": (httpx.TooManyRedirects("loop"), None),
    })
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: client)

    source = YahooChartSource("stocks_us", {"AAPL": "AAPL", "MSFT": "MSFT", "TSLA": "TSLA"})
    assert await source.fetch() == {"AAPL": 190.1}
