#Marks routing as a package.
#Re-exports the public routing API so other modules import from routing
#without knowing internal file names. No business logic.

from .distance import LatLon, distance, parse_coordinate
from .errors import InvalidCoordinate, OSRMError, RoutingError
from .matrix_adapter import DistanceMatrixProvider, OSRMDistanceMatrixProvider, haversine_matrix
from .route_optimizer import optimize_route, total_distance

__all__ = [
    "LatLon",
    "distance",
    "parse_coordinate",
    "InvalidCoordinate",
    "OSRMError",
    "RoutingError",
    "DistanceMatrixProvider",
    "OSRMDistanceMatrixProvider",
    "haversine_matrix",
    "optimize_route",
    "total_distance",
]
