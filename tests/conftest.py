"""Shared test fixtures for tfeigen."""

from __future__ import annotations

import io
import tarfile
from collections.abc import Callable
from pathlib import Path

import pytest

from tfeigen.models.coordinates import LibraryCoordinates

EIGEN_VERSION = "f3a22f35b044"
EIGEN_SHA256 = "ca7beac153d4059c02c8fc59816c82d54ea47fe58365e8aded4082ded0b820c4"
EIGEN_URL = f"https://bitbucket.org/eigen/eigen/get/{EIGEN_VERSION}.tar.gz"

_PREAMBLE = '''\
# TensorFlow external dependencies that can be loaded in WORKSPACE files.

load("//tensorflow/core:platform/default/build_config_root.bzl", "tf_cuda_tests_tags")

# If TensorFlow is linked as a submodule.
# path_prefix and tf_repo_name are no longer used.
def tf_workspace(path_prefix = "", tf_repo_name = ""):
  native.new_http_archive(
    name = "gemmlowp",
    url = "http://github.com/google/gemmlowp/archive/a6f29d8ac48d63293f845f2253eccbf86bc28321.tar.gz",
    sha256 = "75d40ea8e68b0d1644f052fffe8f14a410b2a73d40ccb859a95c0578d194ec26",
    strip_prefix = "gemmlowp-a6f29d8ac48d63293f845f2253eccbf86bc28321",
    build_file = path_prefix + "gemmlowp.BUILD",
  )

'''

_TRAILER = '''
  native.git_repository(
    name = "com_googlesource_code_re2",
    remote = "https://github.com/google/re2.git",
    commit = "7bab3dc83df6a838cc004cc7a7f51d5fe1a427d5",
  )
'''

VERSIONED_MANIFEST = _PREAMBLE + f'''\
  eigen_version = "{EIGEN_VERSION}"
  eigen_sha256 = "{EIGEN_SHA256}"

  native.new_http_archive(
    name = "eigen_archive",
    url = "https://bitbucket.org/eigen/eigen/get/" + eigen_version + ".tar.gz",
    sha256 = eigen_sha256,
    strip_prefix = "eigen-eigen-" + eigen_version,
    build_file = str(Label("//:eigen.BUILD")),
  )
''' + _TRAILER

DIRECT_MANIFEST = _PREAMBLE + f'''\
  native.new_http_archive(
    name = "eigen_archive",
    url = "{EIGEN_URL}",
    sha256 = "{EIGEN_SHA256}",
    strip_prefix = "eigen-eigen-{EIGEN_VERSION}",
    build_file = str(Label("//:eigen.BUILD")),
  )
''' + _TRAILER

UNRECOGNISED_MANIFEST = _PREAMBLE + '''\
  native.http_archive(
    name = "eigen_archive",
    urls = ["https://mirror.example.org/eigen.tar.gz"],
  )
''' + _TRAILER


@pytest.fixture
def versioned_manifest() -> str:
    """Manifest pinning Eigen through ``eigen_version``/``eigen_sha256`` labels."""
    return VERSIONED_MANIFEST


@pytest.fixture
def direct_manifest() -> str:
    """Manifest writing the Eigen URL and SHA-256 literally."""
    return DIRECT_MANIFEST


@pytest.fixture
def unrecognised_manifest() -> str:
    """Manifest declaring Eigen in a shape no strategy understands."""
    return UNRECOGNISED_MANIFEST


@pytest.fixture
def coordinates() -> LibraryCoordinates:
    """Coordinates matching the sample manifests."""
    return LibraryCoordinates(
        url=EIGEN_URL, content_hash=EIGEN_SHA256, archive_hash=EIGEN_VERSION
    )


@pytest.fixture
def make_tf_tree(tmp_path: Path) -> Callable[[str], Path]:
    """Factory fixture: a TensorFlow source tree containing *manifest_text*."""

    def _factory(manifest_text: str, name: str = "tensorflow-src") -> Path:
        root = tmp_path / name
        manifest = root / "tensorflow" / "workspace.bzl"
        manifest.parent.mkdir(parents=True)
        manifest.write_text(manifest_text, encoding="utf-8")
        return root

    return _factory


@pytest.fixture
def make_eigen_tarball() -> Callable[..., bytes]:
    """Factory fixture: gzip tarball bytes with a single top-level directory."""

    def _factory(
        top_dir: str = f"eigen-eigen-{EIGEN_VERSION}",
        extra_files: dict[str, bytes] | None = None,
    ) -> bytes:
        files = {"CMakeLists.txt": b"project(Eigen3)\n", "Eigen/Core": b"// core\n"}
        files.update(extra_files or {})
        buf = io.BytesIO()
        with tarfile.open(fileobj=buf, mode="w:gz") as tar:
            for name, content in files.items():
                info = tarfile.TarInfo(f"{top_dir}/{name}")
                info.size = len(content)
                tar.addfile(info, io.BytesIO(content))
        return buf.getvalue()

    return _factory
