"""CLI commands using Typer."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from fs_kit.context import AppContext

import typer
from rich.logging import RichHandler

from fs_kit import __version__
from fs_kit.console import ConsoleUI
from fs_kit.context import create_context
from fs_kit.errors import ConfigError, FsKitError
from fs_kit.listing import filter_entries, readdir, scan_entries
from fs_kit.options import ListingOptions
from fs_kit.search import recursive_parent_search

app = typer.Typer(
    name="fs-kit",
    help="Filesystem convenience toolkit",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")

ui = ConsoleUI()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        ui.console.print(f"fs-kit v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("fs_kit")
    if not verbose:
        return
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=ui.console, show_path=False))


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output")
    ] = False,
) -> None:
    """Filesystem convenience toolkit."""
    _configure_logging(verbose)


def _load_context(context: AppContext | None) -> AppContext:
    if context is not None:
        return context
    try:
        return create_context()
    except ConfigError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e


def _merge_options(
    defaults: ListingOptions,
    slash: bool | None,
    files: bool | None,
    directories: bool | None,
    exe: bool | None,
) -> ListingOptions:
    """Overlay command-line flags on the configured listing defaults."""
    return ListingOptions(
        slash=defaults.slash if slash is None else slash,
        files=defaults.files if files is None else files,
        directories=defaults.directories if directories is None else directories,
        exe=defaults.exe if exe is None else exe,
    )


# ============================================================================
# Core Commands
# ============================================================================


@app.command("ls")
def ls(
    directory: Annotated[Path, typer.Argument(help="Directory to list")] = Path("."),
    slash: Annotated[
        bool | None,
        typer.Option("--slash/--no-slash", help="Append / to directory names"),
    ] = None,
    files: Annotated[
        bool | None, typer.Option("--files/--no-files", help="Include or exclude files")
    ] = None,
    directories: Annotated[
        bool | None,
        typer.Option("--dirs/--no-dirs", help="Include or exclude directories"),
    ] = None,
    exe: Annotated[
        bool | None,
        typer.Option("--exe/--no-exe", help="Keep only executable or non-executable files"),
    ] = None,
    long: Annotated[
        bool, typer.Option("--long", "-l", help="Show entry kind and executability")
    ] = False,
    _context=None,
) -> None:
    """List a directory with optional type filters."""
    ctx = _load_context(_context)
    timeout = ctx.config.probe_timeout

    options = _merge_options(ctx.config.listing, slash, files, directories, exe)

    try:
        if long:
            entries = asyncio.run(
                scan_entries(directory, filesystem=ctx.filesystem, probe_timeout=timeout)
            )
            ui.show_entries(filter_entries(entries, options), title=str(directory))
            return

        names = asyncio.run(
            readdir(directory, options, filesystem=ctx.filesystem, probe_timeout=timeout)
        )
    except FsKitError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e

    ui.show_names(names)


@app.command("search")
def search(
    start: Annotated[str, typer.Argument(help="Starting path")],
    target: Annotated[
        str | None, typer.Argument(help="Relative path to look for")
    ] = None,
    _context=None,
) -> None:
    """Find the nearest parent directory containing a path.

    With one argument, the last component of START is the target.
    """
    ctx = _load_context(_context)
    if target:
        ui.show_info(f"Searching for: {target}   from: {start}")
    else:
        ui.show_info(f"Searching for: {start}")

    try:
        found = asyncio.run(
            recursive_parent_search(start, target, filesystem=ctx.filesystem)
        )
    except FsKitError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e

    ui.show_success(f"Found: {found}")


# ============================================================================
# File Operation Commands
# ============================================================================


@app.command("mkdir")
def mkdir(
    path: Annotated[Path, typer.Argument(help="Directory to create")],
    mode: Annotated[str, typer.Option("--mode", "-m", help="Octal permissions")] = "777",
    _context=None,
) -> None:
    """Create a directory and any missing parents."""
    ctx = _load_context(_context)
    try:
        mode_bits = int(mode, 8)
    except ValueError as e:
        ui.show_error(f"Invalid mode: {mode}")
        raise typer.Exit(1) from e

    try:
        ctx.filesystem.ensure_path(path, mode_bits)
    except FsKitError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e
    ui.show_success(f"Created {path}")


@app.command("rm")
def rm(
    pattern: Annotated[str, typer.Argument(help="Path or glob pattern")],
    no_glob: Annotated[
        bool, typer.Option("--no-glob", help="Treat the pattern literally")
    ] = False,
    _context=None,
) -> None:
    """Delete files and directory trees."""
    ctx = _load_context(_context)
    try:
        removed = ctx.filesystem.deltree(
            pattern, glob=not no_glob, max_busy_tries=ctx.config.max_busy_tries
        )
    except FsKitError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e

    if not removed:
        ui.show_warning(f"Nothing matched {pattern}")
        return
    ui.show_success(f"Removed {len(removed)} path(s)")


@app.command("touch")
def touch(
    path: Annotated[Path, typer.Argument(help="File to touch")],
    access_only: Annotated[
        bool, typer.Option("-a", help="Change only the access time")
    ] = False,
    modify_only: Annotated[
        bool, typer.Option("-m", help="Change only the modification time")
    ] = False,
    no_create: Annotated[
        bool, typer.Option("--no-create", "-c", help="Do not create missing files")
    ] = False,
    reference: Annotated[
        Path | None, typer.Option("--reference", "-r", help="Use this file's times")
    ] = None,
    _context=None,
) -> None:
    """Create a file or update its timestamps."""
    ctx = _load_context(_context)
    both = not access_only and not modify_only
    try:
        ctx.filesystem.touch(
            path,
            atime=both or access_only,
            mtime=both or modify_only,
            reference=reference,
            no_create=no_create,
        )
    except FsKitError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e


@app.command("cp")
def cp(
    src: Annotated[Path, typer.Argument(help="Source file or directory")],
    dst: Annotated[Path, typer.Argument(help="Destination")],
    no_clobber: Annotated[
        bool, typer.Option("--no-clobber", "-n", help="Do not overwrite existing files")
    ] = False,
    name_filter: Annotated[
        str | None,
        typer.Option("--filter", "-f", help="Glob pattern entry names must match"),
    ] = None,
    keep_going: Annotated[
        bool, typer.Option("--keep-going", help="Skip entries that fail to copy")
    ] = False,
    _context=None,
) -> None:
    """Copy a file or a directory tree."""
    ctx = _load_context(_context)
    try:
        if src.is_dir():
            copied = ctx.filesystem.copy_dir(
                src,
                dst,
                filter=name_filter,
                clobber=not no_clobber,
                stop_on_error=not keep_going,
            )
            ui.show_success(f"Copied {len(copied)} file(s) to {dst}")
        else:
            written = ctx.filesystem.copy_file(src, dst, clobber=not no_clobber)
            ui.show_success(f"Copied {src} to {written}")
    except FsKitError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show the effective configuration."""
    ctx = _load_context(_context)
    ui.console.print(ctx.config.to_yaml(), markup=False, highlight=False)


if __name__ == "__main__":
    app()
