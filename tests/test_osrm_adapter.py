import pytest
import requests

from routing import OSRMDistanceMatrixProvider, OSRMError, optimize_route
from routing import osrm_client
from routing.osrm_client import OSRMClient


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def fake_get(url, params=None, timeout=None):
        recorded.append((url, params))
        points = [tuple(map(float, pair.split(","))) for pair in url.rsplit("/", 1)[-1].split(";")]
        # 1 km per degree of longitude keeps the expected numbers simple
        distances = [[abs(a[0] - b[0]) * 1000.0 for b in points] for a in points]
        return FakeResponse({"code": "Ok", "durations": distances, "distances": distances})

    monkeypatch.setattr(osrm_client.requests, "get", fake_get)
    return recorded


def test_table_request_uses_lon_lat_order(calls):
    client = OSRMClient(base_url="http://osrm.test")
    client.compute_table([(-17.8, 31.0), (-17.9, 31.1)])

    url, params = calls[0]
    assert url == "http://osrm.test/table/v1/driving/31.0,-17.8;31.1,-17.9"
    assert params == {"annotations": "duration,distance"}


def test_provider_converts_meters_to_kilometers_and_caches(calls):
    provider = OSRMDistanceMatrixProvider(OSRMClient(base_url="http://osrm.test"))
    coords = [(0.0, 0.0), (0.0, 1.0), (0.0, 2.0)]

    matrix = provider(coords)
    provider(coords)

    assert matrix[0][2] == 2.0
    assert matrix[1][1] == 0.0
    assert len(calls) == 1


def test_optimizer_accepts_the_osrm_provider(calls):
    provider = OSRMDistanceMatrixProvider(OSRMClient(base_url="http://osrm.test"))
    route = optimize_route(["0,0", "0,2", "0,1"], distance_matrix_provider=provider)
    assert route == ["0,0", "0,1", "0,2"]


def test_http_failure_becomes_osrm_error(monkeypatch):
    monkeypatch.setattr(osrm_client.requests, "get", lambda *a, **kw: FakeResponse({}, status_code=503))
    with pytest.raises(OSRMError):
        OSRMClient(base_url="http://osrm.test").compute_table([(0.0, 0.0), (0.0, 1.0)])


def test_non_ok_code_becomes_osrm_error(monkeypatch):
    monkeypatch.setattr(
        osrm_client.requests, "get", lambda *a, **kw: FakeResponse({"code": "NoRoute", "message": "no route"})
    )
    with pytest.raises(OSRMError, match="no route"):
        OSRMClient(base_url="http://osrm.test").compute_table([(0.0, 0.0), (0.0, 1.0)])


def test_missing_base_url(monkeypatch):
    monkeypatch.setattr(osrm_client, "OSRM_BASE_URL", None)
    with pytest.raises(ValueError):
        OSRMClient()
