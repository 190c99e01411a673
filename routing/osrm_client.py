#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Used when OSRM_BASE_URL is set: backend.urls then injects it into the route optimizer;
#the default provider is the haversine matrix.


import logging
import os
from typing import Dict, List, Optional

import requests
from dotenv import load_dotenv

from .distance import LatLon
from .errors import OSRMError

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=http://router.project-osrm.org
load_dotenv()
OSRM_BASE_URL = os.getenv("OSRM_BASE_URL")

logger = logging.getLogger(__name__)


class OSRMClient:
    """
    OSRM Adapter / Client

    - Talk to OSRM via HTTP
    - Convert internal (lat, lon) -> OSRM (lon,lat)
    - Return normalized outputs (meters / seconds)
    """
    def __init__(self, base_url: Optional[str] = None, profile: str = "driving", timeout: int = 5):
        self.base_url = base_url or OSRM_BASE_URL
        self.timeout = timeout
        self.profile = profile

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    def format_coordinates(self, coords: List[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'"""
        return ";".join(f"{lon},{lat}" for lat, lon in coords)

    def _get(self, url: str, params: Dict[str, str]) -> dict:
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("OSRM request failed: %s", exc)
            raise OSRMError(f"OSRM request failed: {exc}") from exc

        data = response.json()
        if data.get("code") != "Ok":
            raise OSRMError(f"OSRM error: {data.get('message', 'Unknown error')}")
        return data

    def compute_table(self, coordinates: List[LatLon]) -> Dict[str, list]:
        """
        Calls the OSRM /table endpoint for every pair of the given coordinates.

        Returns the full NxN matrices in input order:
            {"durations": [[...]], "distances": [[...]]}  # seconds / meters
        """
        if not coordinates:
            return {"durations": [], "distances": []}

        url = f"{self.base_url}/table/v1/{self.profile}/{self.format_coordinates(coordinates)}"
        data = self._get(url, {"annotations": "duration,distance"})

        return {
            "durations": data["durations"],
            "distances": data["distances"],
        }
