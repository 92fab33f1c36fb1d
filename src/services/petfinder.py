# src/services/petfinder.py — v1
"""Petfinder v2 client for adoption-center search.

Authenticates with the OAuth client-credentials grant; the bearer token is
reused until shortly before it expires.
"""

from __future__ import annotations

import logging
import time
import urllib.error
from typing import Any, Callable

from petassist.core.errors import DirectorySearchError, InputValidationError
from petassist.core.http import build_url, request_json_async
from petassist.services.models import Organization, OrganizationAddress

logger = logging.getLogger(__name__)

_TOKEN_SAFETY_MARGIN_S = 60


class PetfinderClient:
    """Search adoption organizations near a location."""

    def __init__(
        self,
        api_key: str,
        secret: str,
        base_url: str = "https://api.petfinder.com/v2",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api_key = api_key
        self._secret = secret
        self._base_url = base_url.rstrip("/")
        self._clock = clock
        self._token: str | None = None
        self._token_expires_at = 0.0

    async def search_organizations(
        self, location: str, distance: int = 50, limit: int = 20
    ) -> list[Organization]:
        """Organizations within ``distance`` miles of ``location``.

        Raises:
            InputValidationError: If location is blank.
            DirectorySearchError: On authentication or search failure.
        """
        if not location.strip():
            raise InputValidationError("Location must not be empty")

        token = await self._access_token()
        url = build_url(
            f"{self._base_url}/organizations",
            {"location": location.strip(), "distance": distance, "limit": limit},
        )
        try:
            data = await request_json_async(
                url, headers={"Authorization": f"Bearer {token}"}
            )
        except (urllib.error.URLError, ValueError, OSError) as e:
            logger.error("Error fetching organizations: %s", e)
            raise DirectorySearchError() from e

        orgs = [parse_organization(raw) for raw in (data or {}).get("organizations", [])]
        logger.info("Found %d organizations near %r", len(orgs), location)
        return orgs

    async def _access_token(self) -> str:
        if self._token and self._clock() < self._token_expires_at:
            return self._token
        try:
            data = await request_json_async(
                f"{self._base_url}/oauth2/token",
                method="POST",
                form={
                    "grant_type": "client_credentials",
                    "client_id": self._api_key,
                    "client_secret": self._secret,
                },
            )
        except (urllib.error.URLError, ValueError, OSError) as e:
            logger.error("Petfinder authentication failed: %s", e)
            raise DirectorySearchError() from e

        token = (data or {}).get("access_token")
        if not token:
            raise DirectorySearchError("Petfinder authentication returned no token")
        expires_in = float(data.get("expires_in", 3600))
        self._token = token
        self._token_expires_at = self._clock() + max(0.0, expires_in - _TOKEN_SAFETY_MARGIN_S)
        return token


def parse_organization(raw: dict[str, Any]) -> Organization:
    address = raw.get("address") or {}
    return Organization(
        id=str(raw.get("id", "")),
        name=raw.get("name", ""),
        address=OrganizationAddress(
            address1=address.get("address1"),
            city=address.get("city") or "",
            state=address.get("state") or "",
            postcode=address.get("postcode") or "",
            country=address.get("country") or "",
        ),
        phone=raw.get("phone"),
        email=raw.get("email"),
        url=raw.get("website") or raw.get("url"),
        distance=raw.get("distance"),
    )
