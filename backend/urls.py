import os

from django.urls import include, path

from dispatch import Dispatcher
from routing import OSRMDistanceMatrixProvider
from routing.osrm_client import OSRMClient

from .api.urls import build_urlpatterns
from .records.store import DatabaseStore


def build_dispatcher() -> Dispatcher:
    """
    The service's dispatcher: records in the database, road distances from
    OSRM when OSRM_BASE_URL is set, haversine otherwise.
    """
    provider = None
    osrm_base_url = os.getenv("OSRM_BASE_URL")
    if osrm_base_url:
        provider = OSRMDistanceMatrixProvider(OSRMClient(base_url=osrm_base_url))
    return Dispatcher(DatabaseStore(), distance_matrix_provider=provider)


# One dispatcher for the lifetime of the server process.
dispatcher = build_dispatcher()

urlpatterns = [
    path("api/v1/", include(build_urlpatterns(dispatcher))),
]
