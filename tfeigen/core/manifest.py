"""Access to TensorFlow's Bazel dependency manifest.

The manifest is treated as untyped text. The only structure recognised here
is a ``native.new_http_archive(...)`` call whose ``name`` matches the
requested archive; everything finer-grained is left to the extraction
strategies in :mod:`tfeigen.core.locator`.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)


class ManifestNotFoundError(FileNotFoundError):
    """Raised when the TensorFlow source tree has no manifest at the expected path."""


def resolve_manifest(source_dir: Path | str, relative_path: Path | str) -> Path:
    """Return the manifest path inside *source_dir*, checking that it exists."""
    path = Path(source_dir) / relative_path
    if not path.is_file():
        raise ManifestNotFoundError(f"No manifest found at {path}")
    return path


def read_manifest(path: Path | str) -> str:
    """Read the manifest as UTF-8 text; undecodable bytes become U+FFFD."""
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    logger.debug("Read %d characters from %s", len(text), path)
    return text


def find_archive_block(text: str, archive_name: str) -> str | None:
    """Return the first ``native.new_http_archive(...)`` call naming *archive_name*.

    The match never crosses a closing parenthesis, so it stays inside a
    single call even when the manifest declares many archives.
    """
    pattern = re.compile(
        r"native\.new_http_archive\(\s*[^)]*"
        rf'name\s*=\s*"{re.escape(archive_name)}"\s*,\s*'
        r"[^)]*\)"
    )
    match = pattern.search(text)
    if match is None:
        logger.debug("No new_http_archive block named %r", archive_name)
        return None
    return match.group(0)
