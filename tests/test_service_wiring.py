from backend.records.store import DatabaseStore
from backend.urls import build_dispatcher
from routing import OSRMDistanceMatrixProvider


def test_service_stores_records_in_the_database(monkeypatch):
    monkeypatch.delenv("OSRM_BASE_URL", raising=False)
    dispatcher = build_dispatcher()

    assert isinstance(dispatcher.store, DatabaseStore)
    assert dispatcher.distance_matrix_provider is None


def test_osrm_base_url_switches_on_road_distances(monkeypatch):
    monkeypatch.setenv("OSRM_BASE_URL", "http://osrm.test")
    dispatcher = build_dispatcher()

    provider = dispatcher.distance_matrix_provider
    assert isinstance(provider, OSRMDistanceMatrixProvider)
    assert provider.osrm_client.base_url == "http://osrm.test"
