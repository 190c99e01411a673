"""
Purpose: Single-courier visiting sequence for a batch.
What it does:
- optimize_route(locations) -> same "lat,lon" strings, depot first, greedy nearest-neighbor order
- total_distance(route) -> kilometers along the route as given

Notes:
- The first location is the depot; it is never revisited and there is no return leg.
- O(n²) distance evaluations. Courier batches are tens of stops at most.
- Distances come from a DistanceMatrixProvider (haversine by default).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .distance import LatLon, distance, parse_coordinate
from .matrix_adapter import DistanceMatrixProvider, haversine_matrix

logger = logging.getLogger(__name__)


def _parse_all(locations: Sequence[str]) -> List[LatLon]:
    # parse everything up front so a bad coordinate aborts before any output
    return [parse_coordinate(location) for location in locations]


def optimize_route(
    locations: Sequence[str],
    *,
    distance_matrix_provider: Optional[DistanceMatrixProvider] = None,
) -> List[str]:
    """
    Nearest-neighbor tour construction starting from locations[0].

    From the last-added stop, every unvisited stop is scanned in input order and
    the closest one is appended. Ties go to the first occurrence.

    Raises InvalidCoordinate if any location is malformed.
    """
    if not locations:
        return []

    coordinates = _parse_all(locations)
    provider = distance_matrix_provider or haversine_matrix
    distances = provider(coordinates)

    route_indices = [0]
    unvisited = list(range(1, len(locations)))

    while unvisited:
        current = route_indices[-1]
        nearest_position = 0
        min_distance = float("inf")

        for position, candidate in enumerate(unvisited):
            candidate_distance = distances[current][candidate]
            if candidate_distance < min_distance:
                min_distance = candidate_distance
                nearest_position = position

        route_indices.append(unvisited.pop(nearest_position))

    route = [locations[i] for i in route_indices]
    logger.debug("optimized %d stops starting at depot %s", len(route), route[0])
    return route


def total_distance(
    route: Sequence[str],
    *,
    distance_matrix_provider: Optional[DistanceMatrixProvider] = None,
) -> float:
    """
    Sum of leg distances (km) over consecutive stops of an already-ordered route.
    """
    coordinates = _parse_all(route)
    if len(coordinates) < 2:
        return 0.0

    if distance_matrix_provider is None:
        return sum(
            distance(src[0], src[1], dest[0], dest[1])
            for src, dest in zip(coordinates, coordinates[1:])
        )

    distances = distance_matrix_provider(coordinates)
    return sum(distances[i][i + 1] for i in range(len(coordinates) - 1))
