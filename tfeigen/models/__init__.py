"""tfeigen data models — Pydantic v2, frozen."""

from tfeigen.models.coordinates import IntegrationMode, LibraryCoordinates

__all__ = ["IntegrationMode", "LibraryCoordinates"]
