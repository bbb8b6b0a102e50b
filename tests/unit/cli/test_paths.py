"""Unit tests for download destination resolution."""

from pathlib import Path

import pytest

from bh.cli.paths import resolve_artifact_destination, resolve_blob_destination
from bh.core.exceptions import ValidationError


class TestArtifactDestination:
    """Tests for resolve_artifact_destination."""

    def test_defaults_to_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_artifact_destination("results.zip", None) == tmp_path / "results.zip"

    def test_existing_directory(self, tmp_path: Path) -> None:
        assert resolve_artifact_destination("results.zip", tmp_path) == tmp_path / "results.zip"

    def test_file_path(self, tmp_path: Path) -> None:
        target = tmp_path / "renamed.zip"
        assert resolve_artifact_destination("results.zip", target) == target


class TestBlobDestination:
    """Tests for resolve_blob_destination."""

    def test_defaults_to_basename_in_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_blob_destination("wordlists/dns.txt", None) == tmp_path / "dns.txt"

    def test_directory_keeps_remote_layout(self, tmp_path: Path) -> None:
        destination = resolve_blob_destination("wordlists/dns/top.txt", tmp_path)
        assert destination == tmp_path / "wordlists" / "dns" / "top.txt"

    def test_resolution_creates_nothing(self, tmp_path: Path) -> None:
        resolve_blob_destination("a/b/c.txt", tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_leading_slash_is_ignored(self, tmp_path: Path) -> None:
        assert resolve_blob_destination("/dns.txt", tmp_path) == tmp_path / "dns.txt"

    def test_file_path(self, tmp_path: Path) -> None:
        target = tmp_path / "local.txt"
        assert resolve_blob_destination("wordlists/dns.txt", target) == target

    @pytest.mark.parametrize("src", ["", "../secret", "a/../../b", "/"])
    def test_invalid_paths(self, src: str, tmp_path: Path) -> None:
        with pytest.raises(ValidationError, match="Invalid blob path"):
            resolve_blob_destination(src, tmp_path)
