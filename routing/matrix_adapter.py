from __future__ import annotations

import logging
from typing import Callable, Dict, List, Tuple

from .distance import LatLon, distance

logger = logging.getLogger(__name__)

# Provide a function that returns an NxN distance matrix (kilometers)
# for the given list of coordinates in the same order.
DistanceMatrixProvider = Callable[[List[LatLon]], List[List[float]]]


def haversine_matrix(coordinates: List[LatLon]) -> List[List[float]]:
    """
    Default provider: great-circle distance between every pair of coordinates.
    """
    return [
        [distance(src[0], src[1], dest[0], dest[1]) for dest in coordinates]
        for src in coordinates
    ]


class OSRMDistanceMatrixProvider:
    """
    Adapts routing.osrm_client.OSRMClient into a route-optimizer-friendly
    distance-matrix provider (kilometers) with a local cache.
    """
    def __init__(self, osrm_client):
        self.osrm_client = osrm_client
        self._cache: Dict[Tuple[float, float, float, float], float] = {}

    def __call__(self, coordinates: List[LatLon]) -> List[List[float]]:
        num_coordinates = len(coordinates)
        if num_coordinates == 0:
            return []

        matrix = [[float("inf") for _ in range(num_coordinates)] for _ in range(num_coordinates)]

        has_missing = False
        for src_idx, src in enumerate(coordinates):
            for dest_idx, dest in enumerate(coordinates):
                key = (src[0], src[1], dest[0], dest[1])
                if key in self._cache:
                    matrix[src_idx][dest_idx] = self._cache[key]
                else:
                    has_missing = True

        if has_missing:
            logger.debug("OSRM distance cache miss for %d coordinates", num_coordinates)
            self._store(coordinates, self.osrm_client.compute_table(coordinates))
            for src_idx, src in enumerate(coordinates):
                for dest_idx, dest in enumerate(coordinates):
                    key = (src[0], src[1], dest[0], dest[1])
                    if key in self._cache:
                        matrix[src_idx][dest_idx] = self._cache[key]

        return matrix

    def _store(self, coordinates: List[LatLon], table) -> None:
        distances = table.get("distances", [])
        for src_idx, src in enumerate(coordinates):
            if src_idx >= len(distances):
                break
            for dest_idx, dest in enumerate(coordinates):
                if dest_idx >= len(distances[src_idx]):
                    break
                meters = distances[src_idx][dest_idx]
                # unroutable pairs stay at inf
                if meters is not None:
                    self._cache[(src[0], src[1], dest[0], dest[1])] = float(meters) / 1000.0
