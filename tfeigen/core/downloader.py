"""Archive download over HTTP with SHA-256 verification."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1 << 16


class InstallError(RuntimeError):
    """Raised when any step of fetching, extracting or building Eigen fails."""


class DownloadError(InstallError):
    """Raised when the archive cannot be fetched."""


class ChecksumMismatchError(InstallError):
    """Raised when the downloaded bytes do not match the pinned SHA-256."""


class ArchiveDownloader:
    """Streams an archive to disk, hashing it on the way.

    Parameters
    ----------
    client:
        Optional pre-built ``httpx.Client``. When omitted a client is created
        per download with *timeout* and redirect following enabled.
    timeout:
        Seconds allowed for connecting and for each read.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float = 300.0) -> None:
        self._client = client
        self._timeout = timeout

    def fetch(self, url: str, destination: Path, expected_sha256: str | None = None) -> Path:
        """Download *url* to *destination*.

        When *expected_sha256* is given the file is deleted and
        :class:`ChecksumMismatchError` raised if its digest differs.
        """
        destination = Path(destination)
        logger.info("Downloading %s to %s", url, destination)

        digest = hashlib.sha256()
        size = 0
        client = self._client or httpx.Client(timeout=self._timeout, follow_redirects=True)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with client.stream("GET", url) as response:
                response.raise_for_status()
                with destination.open("wb") as fh:
                    for chunk in response.iter_bytes(_CHUNK_SIZE):
                        fh.write(chunk)
                        digest.update(chunk)
                        size += len(chunk)
        except httpx.HTTPError as exc:
            destination.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {exc}") from exc
        except OSError as exc:
            raise DownloadError(f"Could not write {destination}: {exc}") from exc
        finally:
            if self._client is None:
                client.close()

        actual = digest.hexdigest()
        logger.debug("Downloaded %d bytes, sha256=%s", size, actual)
        if expected_sha256 and actual != expected_sha256.lower():
            destination.unlink(missing_ok=True)
            raise ChecksumMismatchError(
                f"SHA-256 mismatch for {url}: expected {expected_sha256}, got {actual}"
            )
        return destination
