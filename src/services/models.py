# src/services/models.py — v1
"""Collaborator result types: GeoLocation, Organization."""

from __future__ import annotations

from pydantic import BaseModel


class GeoLocation(BaseModel):
    latitude: float
    longitude: float
    address: str


class OrganizationAddress(BaseModel):
    address1: str | None = None
    city: str = ""
    state: str = ""
    postcode: str = ""
    country: str = ""


class Organization(BaseModel):
    """Adoption center as returned by the directory search."""

    id: str
    name: str
    address: OrganizationAddress = OrganizationAddress()
    phone: str | None = None
    email: str | None = None
    url: str | None = None
    distance: float | None = None

    @property
    def location_line(self) -> str:
        a = self.address
        return f"{a.city}, {a.state} {a.postcode}".strip(" ,")


class LocationInsight(BaseModel):
    """Geocoded location plus the pet-friendliness analysis of it."""

    location: GeoLocation
    analysis: str
