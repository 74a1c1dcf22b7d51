"""Runtime configuration — env-driven via pydantic-settings.

Every setting can be overridden with a ``TFEIGEN_*`` environment variable or
a ``.env`` file in the working directory. CLI positional arguments take
precedence over these values.

Examples
--------
Install into a private prefix with a parallel build::

    export TFEIGEN_INSTALL_DIR=$HOME/.local
    export TFEIGEN_BUILD_JOBS=8
    tfeigen install ~/src/tensorflow
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class EigenSettings(BaseSettings):
    """Defaults for locating, installing and describing Eigen."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TFEIGEN_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Manifest lookup
    manifest_path: Path = Path("tensorflow/workspace.bzl")
    archive_name: str = "eigen_archive"
    version_label: str = "eigen_version"
    hash_label: str = "eigen_sha256"

    # Locations
    install_dir: Path = Path("/usr/local")
    download_dir: Path = Path(".")
    cmake_dir: Path = Path(".")

    # Download
    download_timeout_seconds: float = 300.0
    verify_checksum: bool = True

    # Build toolchain
    cmake_executable: str = "cmake"
    make_executable: str = "make"
    build_jobs: int | None = None
