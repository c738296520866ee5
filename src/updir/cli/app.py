"""Typer CLI application."""

import errno
import os
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from updir.cli.session import run_picker
from updir.cli.shell import UD_FUNCTION
from updir.core.constants import EXIT_ERROR, EXIT_QUIT, KEYMAP_ENV_VAR
from updir.core.keymap import (
    CONTEXT_FOR_KEYMAP,
    BindingRegistry,
    Keymap,
    create_default_bindings,
    parse_keymap,
)


def resolve_keymap(value: Optional[str], console: Console) -> Keymap:
    """Keymap for ``value``; unknown values fall back to Vim with a warning.

    Without a value ``PD_KEYMAP`` is read directly, so an empty variable
    (which click reports as unset) is warned about too.
    """
    if value is None:
        value = os.environ.get(KEYMAP_ENV_VAR)
    keymap = parse_keymap(value)
    if keymap is not None:
        return keymap
    if value is not None:
        console.print(
            f"[yellow]Warning:[/] Unknown keymap '{escape(value)}', defaulting to vim"
        )
    return Keymap.VIM


def resolve_start(path: Optional[Path]) -> Path:
    """Absolute, normalized directory to decompose."""
    if path is None:
        return Path.cwd()
    start = Path(os.path.normpath(path.absolute()))
    if not start.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(start))
    return start


def write_selected_path(path: str) -> None:
    """Print the selection to stdout.

    On POSIX the raw filesystem bytes are written so that paths which are
    not valid UTF-8 survive the trip through the shell.
    """
    if os.name == "posix":
        out = sys.stdout.buffer
        out.write(os.fsencode(path) + b"\n")
        out.flush()
    else:
        sys.stdout.write(path)
        sys.stdout.flush()


def build_key_table(keymap: Keymap, registry: Optional[BindingRegistry] = None) -> Table:
    """Key help for ``keymap`` plus the shared bindings."""
    registry = registry or create_default_bindings()
    table = Table(title=f"pd key bindings ({keymap.value})", show_header=True, header_style="bold")
    table.add_column("Keys", style="cyan", no_wrap=True)
    table.add_column("Action")

    for category, bindings in registry.get_by_category(CONTEXT_FOR_KEYMAP[keymap]).items():
        table.add_section()
        table.add_row(f"[bold]{category}[/]", "")
        for binding in bindings:
            table.add_row(escape(binding.key_display), binding.description)
    return table


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="pd",
        help="Interactively pick a parent directory of the current path.",
        add_completion=False,
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    @app.command()
    def pick(
        path: Annotated[Optional[Path], typer.Argument(help="Directory to start from (default: current directory)")] = None,
        keymap: Annotated[Optional[str], typer.Option("--keymap", "-k", envvar=KEYMAP_ENV_VAR, help="Key bindings: vim or emacs")] = None,
        keys: Annotated[bool, typer.Option("--keys", help="List key bindings and exit")] = False,
        shell_init: Annotated[bool, typer.Option("--shell-init", help="Print the ud shell function and exit")] = False,
    ) -> None:
        """Print the selected ancestor directory to stdout.

        Exits with status 1 when the user quits without a selection and 2
        on I/O errors.
        """
        if shell_init:
            sys.stdout.write(UD_FUNCTION)
            return

        active = resolve_keymap(keymap, err_console)
        if keys:
            console.print(build_key_table(active))
            return

        try:
            selected = run_picker(resolve_start(path), active)
            if selected is None:
                raise typer.Exit(EXIT_QUIT)
            write_selected_path(selected)
        except OSError as e:
            # The picker has already restored the terminal by now
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(EXIT_ERROR)

    return app
