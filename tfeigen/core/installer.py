"""Install action — download, extract, build and install an Eigen release.

Layout inside the download directory while a build runs::

    <download_dir>/
        <archive_hash>.tar.gz
        eigen-eigen-<archive_hash>/
            build/            # cmake .. && make && make install

Both the tarball and the extracted tree are removed once ``make install``
succeeds. A failure at any step stops the run and leaves whatever was
already on disk in place.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tarfile
from collections.abc import Sequence
from pathlib import Path

from tfeigen.core.downloader import ArchiveDownloader, InstallError
from tfeigen.models.coordinates import LibraryCoordinates

logger = logging.getLogger(__name__)


class ToolFailedError(InstallError):
    """Raised when an external build tool is missing or exits non-zero."""


class CommandRunner:
    """Runs external tools to completion in an explicit working directory."""

    def run(self, args: Sequence[str], cwd: Path) -> None:
        command = list(args)
        logger.info("Running %s (in %s)", " ".join(command), cwd)
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise ToolFailedError(f"Could not run {command[0]}: {exc}") from exc

        if result.stdout:
            logger.debug("%s stdout:\n%s", command[0], result.stdout)
        if result.returncode != 0:
            tail = "\n".join(result.stderr.strip().splitlines()[-20:])
            raise ToolFailedError(
                f"{' '.join(command)} exited with status {result.returncode}: {tail}"
            )


class EigenInstaller:
    """Fetches and builds the Eigen release described by some coordinates.

    Parameters
    ----------
    install_dir:
        CMake install prefix. Headers land in
        ``<install_dir>/include/eigen/eigen-eigen-<archive_hash>``.
    download_dir:
        Scratch directory for the tarball and the source tree. Must not be
        shared by two concurrent installs.
    """

    def __init__(
        self,
        install_dir: Path | str,
        download_dir: Path | str,
        *,
        downloader: ArchiveDownloader | None = None,
        runner: CommandRunner | None = None,
        verify_checksum: bool = True,
        cmake_executable: str = "cmake",
        make_executable: str = "make",
        build_jobs: int | None = None,
    ) -> None:
        self.install_dir = Path(install_dir).resolve()
        self.download_dir = Path(download_dir).resolve()
        self._downloader = downloader or ArchiveDownloader()
        self._runner = runner or CommandRunner()
        self._verify_checksum = verify_checksum
        self._cmake = cmake_executable
        self._make = make_executable
        self._build_jobs = build_jobs

    def install(self, coordinates: LibraryCoordinates) -> Path:
        """Run the full install and return the installed include directory."""
        try:
            self.download_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InstallError(
                f"Could not create download directory {self.download_dir}: {exc}"
            ) from exc
        self.clean(coordinates)

        archive = self.download_dir / coordinates.archive_filename
        self._downloader.fetch(
            coordinates.url,
            archive,
            coordinates.content_hash if self._verify_checksum else None,
        )

        source_dir = self.extract(archive, coordinates)
        self.build(source_dir, coordinates)
        logger.info("Installation complete")

        logger.info("Cleaning up %s", self.download_dir)
        self.clean(coordinates)
        return coordinates.include_dir(self.install_dir)

    def clean(self, coordinates: LibraryCoordinates) -> None:
        """Remove the extracted tree and any ``<archive_hash>.tar.gz*`` files."""
        shutil.rmtree(self.download_dir / coordinates.directory_name, ignore_errors=True)
        for stale in self.download_dir.glob(f"{coordinates.archive_filename}*"):
            try:
                stale.unlink()
            except OSError as exc:
                raise InstallError(f"Could not remove stale download {stale}: {exc}") from exc

    def extract(self, archive: Path, coordinates: LibraryCoordinates) -> Path:
        """Unpack *archive* and return the ``eigen-eigen-<hash>`` source tree."""
        logger.info("Extracting %s", archive.name)
        try:
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(self.download_dir, filter="data")
        except (tarfile.TarError, OSError) as exc:
            raise InstallError(f"Could not extract {archive}: {exc}") from exc

        source_dir = self.download_dir / coordinates.directory_name
        if not source_dir.is_dir():
            raise InstallError(
                f"{archive.name} did not contain the expected directory "
                f"{coordinates.directory_name}"
            )
        return source_dir

    def build(self, source_dir: Path, coordinates: LibraryCoordinates) -> None:
        """Configure, compile and install from ``<source_dir>/build``."""
        build_dir = source_dir / "build"
        try:
            build_dir.mkdir(exist_ok=True)
        except OSError as exc:
            raise InstallError(f"Could not create build directory {build_dir}: {exc}") from exc

        include_dir = coordinates.include_dir(self.install_dir)
        self._runner.run(
            [
                self._cmake,
                f"-DCMAKE_INSTALL_PREFIX={self.install_dir}",
                f"-DINCLUDE_INSTALL_DIR={include_dir}",
                "..",
            ],
            build_dir,
        )
        make = [self._make]
        if self._build_jobs:
            make.append(f"-j{self._build_jobs}")
        self._runner.run(make, build_dir)
        self._runner.run([self._make, "install"], build_dir)
