import pytest
import requests

from viz_dashboard.core.exceptions import FetchError
from viz_dashboard.core.filter_state import FILTER_KEYS, FilterSet
from viz_dashboard.services.data_fetch import DataFetchController

ENDPOINT = "https://example.test/api/data"


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=None):
        self.status_code = status_code
        self.url = ENDPOINT
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class _FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _records():
    return [
        {"title": "B", "intensity": 9, "published": "2017-01-09"},
        {"title": "A", "intensity": 3, "likelihood": ""},
    ]


def test_fetch_sends_every_filter_key_as_param():
    session = _FakeSession(_FakeResponse(payload=_records()))
    controller = DataFetchController(ENDPOINT, session=session)

    controller.fetch(FilterSet(topic="oil"))

    (call,) = session.calls
    assert call["url"] == ENDPOINT
    assert list(call["params"]) == list(FILTER_KEYS)
    assert call["params"]["topic"] == "oil"
    assert call["params"]["region"] == ""
    assert call["timeout"] is None


def test_fetch_returns_records_in_response_order():
    session = _FakeSession(_FakeResponse(payload=_records()))
    ds = DataFetchController(ENDPOINT, session=session).fetch(FilterSet())

    assert ds.titles() == ["B", "A"]
    assert ds[1].likelihood is None


def test_fetch_passes_configured_timeout():
    session = _FakeSession(_FakeResponse(payload=[]))
    DataFetchController(ENDPOINT, timeout=5.0, session=session).fetch(FilterSet())
    assert session.calls[0]["timeout"] == 5.0


def test_transport_error_becomes_fetch_error():
    session = _FakeSession(error=requests.ConnectionError("boom"))

    with pytest.raises(FetchError) as excinfo:
        DataFetchController(ENDPOINT, session=session).fetch(FilterSet())

    assert excinfo.value.url == ENDPOINT
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


@pytest.mark.parametrize("status", [404, 500, 302])
def test_non_2xx_status_becomes_fetch_error(status):
    session = _FakeSession(_FakeResponse(status_code=status, payload={"error": "x"}))

    with pytest.raises(FetchError) as excinfo:
        DataFetchController(ENDPOINT, session=session).fetch(FilterSet())

    assert excinfo.value.status_code == status


def test_invalid_json_becomes_fetch_error():
    session = _FakeSession(_FakeResponse(json_error=ValueError("no json")))

    with pytest.raises(FetchError):
        DataFetchController(ENDPOINT, session=session).fetch(FilterSet())


@pytest.mark.parametrize("payload", [{"data": []}, "text", [1, 2], None])
def test_unexpected_body_becomes_fetch_error(payload):
    session = _FakeSession(_FakeResponse(payload=payload))

    with pytest.raises(FetchError):
        DataFetchController(ENDPOINT, session=session).fetch(FilterSet())


def test_default_session_uses_requests(monkeypatch):
    calls = []

    def fake_get(self, url, params=None, timeout=None):
        calls.append(params)
        return _FakeResponse(payload=[{"title": "only"}])

    monkeypatch.setattr(requests.Session, "get", fake_get)

    ds = DataFetchController(ENDPOINT).fetch(FilterSet(country="India"))

    assert ds.titles() == ["only"]
    assert calls[0]["country"] == "India"
