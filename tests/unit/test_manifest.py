"""Tests for manifest access — path resolution and archive block lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

from tfeigen.core.manifest import (
    ManifestNotFoundError,
    find_archive_block,
    read_manifest,
    resolve_manifest,
)


class TestResolveManifest:
    def test_resolves_relative_path(self, make_tf_tree, versioned_manifest):
        root = make_tf_tree(versioned_manifest)
        path = resolve_manifest(root, "tensorflow/workspace.bzl")
        assert path == root / "tensorflow" / "workspace.bzl"
        assert read_manifest(path) == versioned_manifest

    def test_missing_manifest_raises(self, tmp_path: Path):
        with pytest.raises(ManifestNotFoundError, match="workspace.bzl"):
            resolve_manifest(tmp_path, Path("tensorflow/workspace.bzl"))

    def test_directory_is_not_a_manifest(self, tmp_path: Path):
        (tmp_path / "tensorflow" / "workspace.bzl").mkdir(parents=True)
        with pytest.raises(ManifestNotFoundError):
            resolve_manifest(tmp_path, "tensorflow/workspace.bzl")

    def test_undecodable_bytes_are_replaced(self, tmp_path: Path, versioned_manifest):
        manifest = tmp_path / "workspace.bzl"
        manifest.write_bytes(b"# Copyright \xa9 Google\n" + versioned_manifest.encode("utf-8"))
        text = read_manifest(manifest)
        assert text.startswith("# Copyright \ufffd Google\n")
        assert text.endswith(versioned_manifest)


class TestFindArchiveBlock:
    def test_returns_only_the_named_block(self, direct_manifest):
        block = find_archive_block(direct_manifest, "eigen_archive")
        assert block is not None
        assert block.startswith("native.new_http_archive(")
        assert '"eigen_archive"' in block
        assert "gemmlowp" not in block
        assert "re2" not in block

    def test_other_archive_by_name(self, direct_manifest):
        block = find_archive_block(direct_manifest, "gemmlowp")
        assert block is not None
        assert "eigen" not in block

    def test_absent_archive(self, direct_manifest):
        assert find_archive_block(direct_manifest, "protobuf") is None

    def test_other_rule_kinds_are_ignored(self, unrecognised_manifest):
        assert find_archive_block(unrecognised_manifest, "eigen_archive") is None

    def test_name_is_matched_literally(self):
        text = 'native.new_http_archive(\n  name = "eigenXarchive",\n  url = "u",\n)'
        assert find_archive_block(text, "eigen.archive") is None
