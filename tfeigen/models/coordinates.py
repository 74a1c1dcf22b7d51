"""Resolved Eigen coordinates and CMake integration modes."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IntegrationMode(str, Enum):
    """How the downstream CMake build consumes Eigen."""

    INSTALLED = "installed"
    EXTERNAL = "external"

    @property
    def template_name(self) -> str:
        """Static CMake template copied next to the descriptor."""
        if self is IntegrationMode.INSTALLED:
            return "FindEigen.cmake"
        return "Eigen.cmake"


class LibraryCoordinates(BaseModel):
    """Where to fetch the pinned Eigen archive and how to recognise it.

    Built once by whichever extraction strategy matches the manifest and
    never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    content_hash: str = Field(min_length=1)  # SHA-256 of the tarball
    archive_hash: str = Field(min_length=1)  # names the tarball and its top directory

    @field_validator("content_hash")
    @classmethod
    def _lowercase_digest(cls, value: str) -> str:
        return value.lower()

    @property
    def directory_name(self) -> str:
        return f"eigen-eigen-{self.archive_hash}"

    @property
    def archive_filename(self) -> str:
        return f"{self.archive_hash}.tar.gz"

    def include_dir(self, install_root: Path | str) -> Path:
        """Header directory of this release under *install_root*."""
        return Path(install_root) / "include" / "eigen" / self.directory_name
