"""Shared test fixtures."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fs_kit.types import CallerIdentity


def make_stat(mode: int, uid: int = 1000, gid: int = 1000) -> os.stat_result:
    """Build a stat result with the given mode and ownership."""
    return os.stat_result((mode, 0, 0, 1, uid, gid, 0, 0, 0, 0))


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


@pytest.fixture
def identity() -> CallerIdentity:
    """A non-root caller identity."""
    return CallerIdentity(uid=1000, gid=1000)


# ============================================================================
# Directory Tree Fixtures
# ============================================================================


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    """Create a directory with a file, an executable, a subdirectory and a dead link.

    Layout:
        sample/
            notes.txt        (0644)
            run.sh           (0755)
            sub/
            dead -> missing  (dangling symlink)
    """
    root = tmp_path / "sample"
    root.mkdir()
    (root / "notes.txt").write_text("notes")
    (root / "notes.txt").chmod(0o644)
    script = root / "run.sh"
    script.write_text("#!/bin/sh\n")
    script.chmod(0o755)
    (root / "sub").mkdir()
    (root / "dead").symlink_to(root / "missing")
    return root


@pytest.fixture
def nested_dirs(tmp_path: Path) -> Path:
    """Create a/b/c with a/.config present and a/b/.config absent."""
    deepest = tmp_path / "a" / "b" / "c"
    deepest.mkdir(parents=True)
    (tmp_path / "a" / ".config").write_text("")
    return deepest


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.listdir.return_value = []
    fs.exists.return_value = False
    fs.realpath.side_effect = lambda path: Path(path)
    return fs


@pytest.fixture
def regular_file_stat() -> os.stat_result:
    """Stat result for a non-executable regular file."""
    return make_stat(stat.S_IFREG | 0o644)


@pytest.fixture
def directory_stat() -> os.stat_result:
    """Stat result for a directory."""
    return make_stat(stat.S_IFDIR | 0o755)


@pytest.fixture
def stat_factory():
    """Factory for stat results with custom mode and ownership."""
    return make_stat
