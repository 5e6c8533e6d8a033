"""Tests for CLI commands using context injection.

Commands accept a ``_context`` parameter so they can be called directly
with a fake filesystem and in-memory config.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from fs_kit import __version__, cli
from fs_kit.config import FsKitConfig
from fs_kit.context import AppContext
from fs_kit.errors import DeleteError, EnsurePathError
from fs_kit.filesystem import RealFileSystem
from fs_kit.options import ListingOptions

runner = CliRunner()


@pytest.fixture
def real_context() -> AppContext:
    """Context backed by the real filesystem and default config."""
    return AppContext(config=FsKitConfig(), filesystem=RealFileSystem())


@pytest.fixture
def mock_context(mock_filesystem: MagicMock) -> AppContext:
    """Context backed by a mock filesystem."""
    return AppContext(config=FsKitConfig(max_busy_tries=2), filesystem=mock_filesystem)


class TestMergeOptions:
    """Tests for overlaying flags on configured defaults."""

    def test_flags_override_defaults(self) -> None:
        """Test explicit flags win over config defaults."""
        defaults = ListingOptions(slash=True, files=False)
        merged = cli._merge_options(defaults, None, True, None, None)
        assert merged == ListingOptions(slash=True, files=True)

    def test_unset_flags_keep_defaults(self) -> None:
        """Test unset flags keep config defaults."""
        defaults = ListingOptions(directories=False, exe=True)
        assert cli._merge_options(defaults, None, None, None, None) == defaults


class TestLsCommand:
    """Tests for the ls command."""

    def test_ls_filters(
        self, tmp_path: Path, real_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test ls prints filtered names."""
        (tmp_path / "x").write_text("")
        (tmp_path / "y").mkdir()

        cli.ls(directory=tmp_path, slash=True, files=False, _context=real_context)

        assert capsys.readouterr().out.split() == ["y/"]

    def test_ls_uses_config_defaults(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Test configured listing defaults apply when no flag is given."""
        (tmp_path / "x").write_text("")
        (tmp_path / "y").mkdir()
        ctx = AppContext(config=FsKitConfig(listing=ListingOptions(directories=False)))

        cli.ls(directory=tmp_path, _context=ctx)

        assert capsys.readouterr().out.split() == ["x"]

    def test_ls_long(
        self, sample_dir: Path, real_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test ls --long shows entry kinds."""
        cli.ls(directory=sample_dir, long=True, _context=real_context)

        output = capsys.readouterr().out
        assert "directory" in output
        assert "unknown" in output

    def test_ls_long_applies_filters(
        self, sample_dir: Path, real_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test ls --long honors the listing filters."""
        cli.ls(directory=sample_dir, long=True, files=False, slash=True, _context=real_context)

        output = capsys.readouterr().out
        assert "sub/" in output
        assert "notes.txt" not in output
        assert "run.sh" not in output
        assert "unknown" not in output

    def test_ls_long_uses_config_defaults(
        self, sample_dir: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Test ls --long applies configured listing defaults."""
        ctx = AppContext(config=FsKitConfig(listing=ListingOptions(directories=False)))

        cli.ls(directory=sample_dir, long=True, _context=ctx)

        output = capsys.readouterr().out
        assert "notes.txt" in output
        assert "directory" not in output

    def test_ls_missing_directory(
        self, tmp_path: Path, real_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test ls exits with 1 for an unreadable directory."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.ls(directory=tmp_path / "missing", _context=real_context)

        assert exc_info.value.exit_code == 1
        assert "Cannot read directory" in capsys.readouterr().out


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_found(
        self, nested_dirs: Path, real_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test search prints the nearest match."""
        cli.search(start=str(nested_dirs), target=".config", _context=real_context)

        output = capsys.readouterr().out
        assert "Found:" in output
        assert ".config" in output

    def test_search_one_argument(
        self, nested_dirs: Path, real_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test the one-argument form."""
        cli.search(start=str(nested_dirs / ".config"), _context=real_context)

        assert "Found:" in capsys.readouterr().out

    def test_search_not_found(
        self, mock_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test search exits with 1 when nothing is found."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.search(start="/a/b", target="missing", _context=mock_context)

        assert exc_info.value.exit_code == 1
        assert "not found" in capsys.readouterr().out


class TestFileOperationCommands:
    """Tests for mkdir, rm, touch and cp."""

    def test_mkdir(self, mock_context: AppContext) -> None:
        """Test mkdir parses an octal mode."""
        cli.mkdir(path=Path("/tmp/x"), mode="755", _context=mock_context)
        mock_context.filesystem.ensure_path.assert_called_once_with(Path("/tmp/x"), 0o755)

    def test_mkdir_invalid_mode(self, mock_context: AppContext) -> None:
        """Test an invalid mode exits with 1."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.mkdir(path=Path("/tmp/x"), mode="9z", _context=mock_context)
        assert exc_info.value.exit_code == 1
        mock_context.filesystem.ensure_path.assert_not_called()

    def test_mkdir_error(self, mock_context: AppContext) -> None:
        """Test creation errors exit with 1."""
        mock_context.filesystem.ensure_path.side_effect = EnsurePathError("denied")
        with pytest.raises(typer.Exit):
            cli.mkdir(path=Path("/tmp/x"), _context=mock_context)

    def test_rm_passes_config(self, mock_context: AppContext) -> None:
        """Test rm forwards glob and retry settings."""
        mock_context.filesystem.deltree.return_value = [Path("/tmp/a.log")]

        cli.rm(pattern="/tmp/*.log", _context=mock_context)

        mock_context.filesystem.deltree.assert_called_once_with(
            "/tmp/*.log", glob=True, max_busy_tries=2
        )

    def test_rm_nothing_matched(
        self, mock_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test rm warns when nothing matched."""
        mock_context.filesystem.deltree.return_value = []

        cli.rm(pattern="/tmp/none", no_glob=True, _context=mock_context)

        assert "Nothing matched" in capsys.readouterr().out

    def test_rm_error(self, mock_context: AppContext) -> None:
        """Test delete errors exit with 1."""
        mock_context.filesystem.deltree.side_effect = DeleteError("busy")
        with pytest.raises(typer.Exit):
            cli.rm(pattern="/tmp/x", _context=mock_context)

    def test_touch_access_only(self, mock_context: AppContext) -> None:
        """Test -a updates only the access time."""
        cli.touch(path=Path("/tmp/f"), access_only=True, _context=mock_context)

        mock_context.filesystem.touch.assert_called_once_with(
            Path("/tmp/f"), atime=True, mtime=False, reference=None, no_create=False
        )

    def test_cp_directory(self, tmp_path: Path, real_context: AppContext) -> None:
        """Test cp copies a directory tree with a filter."""
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.py").write_text("print()")
        (src / "b.txt").write_text("")

        cli.cp(src=src, dst=tmp_path / "dst", name_filter="*.py", _context=real_context)

        assert [p.name for p in (tmp_path / "dst").iterdir()] == ["a.py"]

    def test_cp_file_no_clobber(
        self, tmp_path: Path, real_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test cp -n refuses to overwrite."""
        (tmp_path / "a").write_text("new")
        (tmp_path / "b").write_text("old")

        with pytest.raises(typer.Exit):
            cli.cp(src=tmp_path / "a", dst=tmp_path / "b", no_clobber=True, _context=real_context)

        assert (tmp_path / "b").read_text() == "old"
        assert "already exists" in capsys.readouterr().out


class TestAppInvocation:
    """Tests running the Typer app end to end."""

    def test_version(self) -> None:
        """Test --version prints the version."""
        result = runner.invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_show(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test config show prints the effective configuration."""
        monkeypatch.setattr(
            cli, "create_context", lambda: AppContext(config=FsKitConfig(max_busy_tries=9))
        )

        result = runner.invoke(cli.app, ["config", "show"])

        assert result.exit_code == 0
        assert "maxBusyTries: 9" in result.output

    def test_ls_invocation(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the ls command through the Typer app."""
        (tmp_path / "x").write_text("")
        (tmp_path / "y").mkdir()
        monkeypatch.setattr(cli, "create_context", lambda: AppContext())

        result = runner.invoke(cli.app, ["ls", str(tmp_path), "--no-files", "--slash"])

        assert result.exit_code == 0
        assert result.output.split() == ["y/"]
