"""Version Locator — resolve Eigen coordinates from the TensorFlow manifest.

TensorFlow has declared its Eigen dependency in more than one shape over
time. Each shape is handled by one extraction strategy; the locator tries
them in order and the first one that yields a complete
:class:`LibraryCoordinates` wins.

Strategy 0 (versioned)::

    eigen_version = "f3a22f35b044"
    eigen_sha256 = "ca7beac153d4059c02c8fc59816c82d54ea47fe58365e8aded4082ded0b820c4"
    native.new_http_archive(
        name = "eigen_archive",
        url = "https://bitbucket.org/eigen/eigen/get/" + eigen_version + ".tar.gz",
        sha256 = eigen_sha256,
        ...
    )

Strategy 1 (direct)::

    native.new_http_archive(
        name = "eigen_archive",
        url = "https://bitbucket.org/eigen/eigen/get/f3a22f35b044.tar.gz",
        sha256 = "ca7beac153d4059c02c8fc59816c82d54ea47fe58365e8aded4082ded0b820c4",
        ...
    )

Supporting another manifest shape means appending a strategy to
:data:`DEFAULT_STRATEGIES` (or passing a custom sequence to the locator).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from tfeigen.core.manifest import find_archive_block, read_manifest
from tfeigen.models.coordinates import LibraryCoordinates

logger = logging.getLogger(__name__)

_HEX = r"[a-fA-F0-9]*"
_UNQUOTED = r'[^)"]*'


class VersionNotFoundError(LookupError):
    """Raised when no extraction strategy matches the manifest."""


class UnknownStrategyError(IndexError):
    """Raised when asked to run a strategy index that does not exist."""


class ExtractionStrategy(Protocol):
    """One way of reading Eigen coordinates out of the manifest text."""

    name: str

    def extract(self, manifest_text: str) -> LibraryCoordinates | None:
        """Return the coordinates, or ``None`` when any field is missing."""
        ...


def _first_group(pattern: re.Pattern[str], text: str | None) -> str:
    if not text:
        return ""
    match = pattern.search(text)
    return match.group(1) if match else ""


def _coordinates_or_none(
    strategy: str, url: str, content_hash: str, archive_hash: str
) -> LibraryCoordinates | None:
    missing = [
        field
        for field, value in (
            ("url", url),
            ("content_hash", content_hash),
            ("archive_hash", archive_hash),
        )
        if not value
    ]
    if missing:
        logger.debug("Strategy %s missed: no %s", strategy, ", ".join(missing))
        return None
    return LibraryCoordinates(
        url=url, content_hash=content_hash, archive_hash=archive_hash
    )


class VersionedStrategy:
    """Manifest pins ``eigen_version`` and ``eigen_sha256`` as separate labels.

    The archive's URL concatenates the version label into a template; the
    label is replaced by the pinned archive hash to get the final URL.
    """

    name = "versioned"

    def __init__(
        self,
        archive_name: str = "eigen_archive",
        version_label: str = "eigen_version",
        hash_label: str = "eigen_sha256",
    ) -> None:
        self._archive_name = archive_name
        label = re.escape(version_label)
        self._version_re = re.compile(rf'\b{label}\s*=\s*"({_HEX})"')
        self._hash_re = re.compile(rf'\b{re.escape(hash_label)}\s*=\s*"({_HEX})"')
        self._url_re = re.compile(
            rf'\burl\s*=\s*"({_UNQUOTED})"\s*\+\s*{label}\s*\+\s*"({_UNQUOTED})"\s*,'
        )

    def extract(self, manifest_text: str) -> LibraryCoordinates | None:
        block = find_archive_block(manifest_text, self._archive_name)
        archive_hash = _first_group(self._version_re, manifest_text)
        content_hash = _first_group(self._hash_re, manifest_text)

        url = ""
        if block and archive_hash:
            match = self._url_re.search(block)
            if match:
                url = f"{match.group(1)}{archive_hash}{match.group(2)}"

        return _coordinates_or_none(self.name, url, content_hash, archive_hash)


class DirectStrategy:
    """Manifest writes the URL and SHA-256 literally inside the archive block.

    The archive hash is the hex stem of the URL's ``<hash>.tar.gz`` filename.
    """

    name = "direct"

    _url_re = re.compile(rf'\burl\s*=\s*"({_UNQUOTED})"\s*,')
    _hash_re = re.compile(rf'\bsha256\s*=\s*"({_HEX})"\s*,')
    _archive_hash_re = re.compile(rf".*/({_HEX})\.tar\.gz")

    def __init__(self, archive_name: str = "eigen_archive") -> None:
        self._archive_name = archive_name

    def extract(self, manifest_text: str) -> LibraryCoordinates | None:
        block = find_archive_block(manifest_text, self._archive_name)
        url = _first_group(self._url_re, block)
        content_hash = _first_group(self._hash_re, block)
        archive_hash = _first_group(self._archive_hash_re, url)
        return _coordinates_or_none(self.name, url, content_hash, archive_hash)


DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    VersionedStrategy(),
    DirectStrategy(),
)


class VersionLocator:
    """Tries each extraction strategy in order until one matches.

    Parameters
    ----------
    strategies:
        Ordered strategies; index 0 is tried first. Defaults to
        :data:`DEFAULT_STRATEGIES`.
    """

    def __init__(self, strategies: Sequence[ExtractionStrategy] | None = None) -> None:
        self._strategies: tuple[ExtractionStrategy, ...] = tuple(
            DEFAULT_STRATEGIES if strategies is None else strategies
        )

    @classmethod
    def for_archive(
        cls,
        archive_name: str,
        version_label: str = "eigen_version",
        hash_label: str = "eigen_sha256",
    ) -> VersionLocator:
        """Build a locator with the default strategies bound to *archive_name*."""
        return cls(
            [
                VersionedStrategy(
                    archive_name=archive_name,
                    version_label=version_label,
                    hash_label=hash_label,
                ),
                DirectStrategy(archive_name=archive_name),
            ]
        )

    @property
    def strategies(self) -> tuple[ExtractionStrategy, ...]:
        return self._strategies

    def try_strategy(self, manifest_text: str, index: int) -> LibraryCoordinates | None:
        """Run the strategy at *index*.

        Returns ``None`` on a miss. Raises :class:`UnknownStrategyError` when
        *index* names no strategy; that is fatal, not a miss.
        """
        if not 0 <= index < len(self._strategies):
            raise UnknownStrategyError(f"No extraction strategy with index {index}")
        strategy = self._strategies[index]
        logger.info("Finding Eigen version using method %d (%s)", index, strategy.name)
        return strategy.extract(manifest_text)

    def locate_in_text(self, manifest_text: str, *, source: str = "manifest") -> LibraryCoordinates:
        """Return the coordinates from the first matching strategy.

        Raises :class:`VersionNotFoundError` once every strategy has missed.
        """
        index = 0
        while True:
            try:
                coordinates = self.try_strategy(manifest_text, index)
            except UnknownStrategyError:
                raise VersionNotFoundError(
                    f"Could not find Eigen version information in {source}"
                ) from None
            if coordinates is not None:
                logger.debug("Method %d matched: %s", index, coordinates)
                return coordinates
            index += 1

    def locate(self, manifest_path: Path | str) -> LibraryCoordinates:
        """Read *manifest_path* and resolve the Eigen coordinates from it."""
        return self.locate_in_text(read_manifest(manifest_path), source=str(manifest_path))
