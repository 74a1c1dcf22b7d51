"""tfeigen: locate, install and describe the Eigen version pinned by TensorFlow.

Reads ``tensorflow/workspace.bzl`` from a TensorFlow source tree, resolves
the ``eigen_archive`` coordinates (URL, SHA-256, archive hash), and then
either builds and installs that Eigen release or emits CMake files that
point at an existing installation.
"""

__version__ = "0.2.0"
__description__ = "Locate, install and describe the Eigen release pinned by TensorFlow"

from tfeigen.core.locator import VersionLocator
from tfeigen.models.coordinates import IntegrationMode, LibraryCoordinates

__all__ = ["VersionLocator", "LibraryCoordinates", "IntegrationMode", "__version__"]
