# src/services/geocoder.py — v1
"""Geocoding: free-text address to coordinates and formatted address."""

from __future__ import annotations

import logging
import urllib.error
from abc import ABC, abstractmethod

from petassist.core.errors import InputValidationError, LocationNotFoundError
from petassist.core.http import build_url, request_json_async
from petassist.services.models import GeoLocation

logger = logging.getLogger(__name__)


class BaseGeocoder(ABC):
    @abstractmethod
    async def geocode(self, address: str) -> GeoLocation:
        """Resolve an address, raising LocationNotFoundError when it cannot."""


class GoogleGeocoder(BaseGeocoder):
    """Google Maps Geocoding API client."""

    def __init__(
        self,
        api_key: str,
        url: str = "https://maps.googleapis.com/maps/api/geocode/json",
    ) -> None:
        self._api_key = api_key
        self._url = url

    async def geocode(self, address: str) -> GeoLocation:
        if not address.strip():
            raise InputValidationError("Address must not be empty")

        url = build_url(self._url, {"address": address.strip(), "key": self._api_key})
        try:
            data = await request_json_async(url)
        except (urllib.error.URLError, ValueError, OSError) as e:
            logger.error("Geocoding request failed: %s", e)
            raise LocationNotFoundError() from e

        status = (data or {}).get("status")
        results = (data or {}).get("results") or []
        if status != "OK" or not results:
            logger.info("Geocoding found nothing for %r (status=%s)", address, status)
            raise LocationNotFoundError()

        first = results[0]
        loc = first["geometry"]["location"]
        return GeoLocation(
            latitude=float(loc["lat"]),
            longitude=float(loc["lng"]),
            address=first.get("formatted_address") or address.strip(),
        )
