"""Generate action — CMake descriptor and integration template.

Writes ``Eigen_VERSION.cmake`` describing the resolved coordinates, then
copies either ``FindEigen.cmake`` (use an existing installation) or
``Eigen.cmake`` (fetch via ExternalProject) alongside it.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

from tfeigen.models.coordinates import IntegrationMode, LibraryCoordinates

logger = logging.getLogger(__name__)

DESCRIPTOR_FILENAME = "Eigen_VERSION.cmake"
HASH_ALGORITHM = "SHA256"


class InstallationNotFoundError(FileNotFoundError):
    """Raised when the pinned Eigen release is not installed under the install root."""


def render_descriptor(coordinates: LibraryCoordinates, install_dir: Path | str) -> str:
    """Render the five ``set(...)`` lines of ``Eigen_VERSION.cmake``."""
    lines = [
        f"set(Eigen_URL {coordinates.url})",
        f"set(Eigen_ARCHIVE_HASH {coordinates.archive_hash})",
        f"set(Eigen_HASH {HASH_ALGORITHM}={coordinates.content_hash})",
        f"set(Eigen_DIR {coordinates.directory_name})",
        f"set(Eigen_INSTALL_DIR {install_dir})",
    ]
    return "\n".join(lines) + "\n"


def template_bytes(mode: IntegrationMode) -> bytes:
    """Contents of the static template shipped for *mode*."""
    return resources.files("tfeigen.templates").joinpath(mode.template_name).read_bytes()


class CMakeGenerator:
    """Emits the CMake files that let a build find the pinned Eigen."""

    def __init__(self, install_dir: Path | str, cmake_dir: Path | str) -> None:
        self.install_dir = Path(install_dir).resolve()
        self.cmake_dir = Path(cmake_dir)

    def check_installed(self, coordinates: LibraryCoordinates) -> Path:
        include_dir = coordinates.include_dir(self.install_dir)
        if not include_dir.is_dir():
            raise InstallationNotFoundError(
                f"Could not find Eigen {coordinates.archive_hash} in {self.install_dir}"
            )
        logger.info("Found Eigen in %s", self.install_dir)
        return include_dir

    def generate(self, coordinates: LibraryCoordinates, mode: IntegrationMode) -> list[Path]:
        """Write the descriptor and template, returning the paths written.

        Nothing is written when the installation check fails.
        """
        self.check_installed(coordinates)
        self.cmake_dir.mkdir(parents=True, exist_ok=True)

        descriptor = self.cmake_dir / DESCRIPTOR_FILENAME
        descriptor.write_text(
            render_descriptor(coordinates, self.install_dir), encoding="utf-8"
        )
        logger.info("%s written to %s", DESCRIPTOR_FILENAME, self.cmake_dir)

        template = self.cmake_dir / mode.template_name
        template.write_bytes(template_bytes(mode))
        logger.info("%s copied to %s", mode.template_name, self.cmake_dir)

        return [descriptor, template]
