"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from pathish import __version__, files
from pathish.console import ConsoleOutput
from pathish.errors import InvalidPathError
from pathish.stream import walk

app = typer.Typer(
    name="pathish",
    help="Copy, delete, walk and inspect paths",
    no_args_is_help=True,
)

output = ConsoleOutput()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        output.console.print(f"pathish v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send pathish debug logging to the console when verbose."""
    if not verbose:
        return
    package_logger = logging.getLogger("pathish")
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=output.console, show_path=False, show_time=False)
        )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log every filesystem operation")
    ] = False,
) -> None:
    """Copy, delete, walk and inspect paths."""
    configure_logging(verbose)


def _fail(message: str, error: Exception) -> typer.Exit:
    """Report an error and build the exit to raise."""
    output.show_error(f"{message}: {error}")
    return typer.Exit(1)


@app.command("copy")
def copy_command(
    source: Annotated[Path, typer.Argument(help="File or directory to copy")],
    destination: Annotated[Path, typer.Argument(help="Destination path")],
    recurse: Annotated[
        bool, typer.Option("--recurse", "-r", help="Copy everything under a directory")
    ] = False,
    _filesystem=None,
) -> None:
    """Copy a file or directory."""
    try:
        files.copy(source, destination, recurse=recurse, fs=_filesystem)
    except (OSError, InvalidPathError) as e:
        raise _fail("Copy failed", e) from e
    output.show_success(f"Copied {source} to {destination}")


@app.command("delete")
def delete_command(
    path: Annotated[Path, typer.Argument(help="File or directory to delete")],
    recurse: Annotated[
        bool, typer.Option("--recurse", "-r", help="Delete everything under a directory")
    ] = False,
    _filesystem=None,
) -> None:
    """Delete a file or directory. A missing path is not an error."""
    try:
        deleted = files.delete(path, recurse=recurse, fs=_filesystem)
    except (OSError, InvalidPathError) as e:
        raise _fail("Delete failed", e) from e
    if deleted:
        output.show_success(f"Deleted {path}")
    else:
        output.show_success(f"Nothing to delete at {path}")


@app.command("walk")
def walk_command(
    path: Annotated[Path, typer.Argument(help="Directory to walk")],
    max_depth: Annotated[
        int | None, typer.Option("--max-depth", "-d", min=0, help="Deepest level to show")
    ] = None,
    follow_links: Annotated[
        bool, typer.Option("--follow-links", help="Descend into linked directories")
    ] = False,
    _filesystem=None,
) -> None:
    """Print the tree below a directory, depth first."""
    try:
        with walk(path, max_depth, fs=_filesystem, follow_links=follow_links) as entries:
            for entry in entries:
                output.show_entry(path, entry)
    except (OSError, InvalidPathError) as e:
        raise _fail("Walk failed", e) from e


@app.command("info")
def info_command(
    path: Annotated[Path, typer.Argument(help="Path to inspect")],
) -> None:
    """Show what kind of entry a path is."""
    facts: dict[str, object] = {
        "exists": files.exists(path),
        "file": files.is_file(path),
        "directory": files.is_dir(path),
        "symbolic link": files.is_link(path),
    }
    if files.is_link(path):
        facts["link target"] = files.read_link(path)
    if files.is_file(path, follow_links=True):
        facts["size"] = files.size(path)
    output.show_info(path, facts)
    if not facts["exists"]:
        raise typer.Exit(1)


@app.command("cat")
def cat_command(
    path: Annotated[Path, typer.Argument(help="File to print")],
    encoding: Annotated[
        str, typer.Option("--encoding", "-e", help="Character encoding of the file")
    ] = "utf-8",
) -> None:
    """Print a text file."""
    try:
        content = files.read_str(path, encoding=encoding)
    except (OSError, ValueError) as e:
        raise _fail("Read failed", e) from e
    typer.echo(content, nl=False)


if __name__ == "__main__":
    app()
