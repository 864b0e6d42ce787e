"""kubeswitch command line: typer app, rich output, hidden completion hook."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kubeswitch import __version__
from kubeswitch.commands import (
    complete,
    current_selection,
    delete_cluster,
    list_contexts,
    set_cluster,
    switch_namespace,
    use_context,
)
from kubeswitch.config import get_config
from kubeswitch.editor import MergeFileSource
from kubeswitch.errors import KubeSwitchError
from kubeswitch.logs import configure_logging
from kubeswitch.models import ListOutput
from kubeswitch.runtime import Runtime, build_runtime

configure_logging(get_config().log_level)

log = structlog.get_logger()

# Everything the operator reads goes to stderr; stdout is reserved for completion.
console = Console(stderr=True, soft_wrap=True)

app = typer.Typer(
    name="kubeswitch",
    help="Switch between different clusters.",
    add_completion=False,
    pretty_exceptions_enable=False,
)

COMPLETION_FLAG = "--comp"


def _name(text: str) -> str:
    return f"[bold magenta]{escape(text)}[/bold magenta]"


def _runtime() -> Runtime:
    return build_runtime(notify=lambda message: console.print(message, markup=False))


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except KubeSwitchError as exc:
        log.debug("command_failed", error_type=type(exc).__name__, error=str(exc))
        console.print(f"[red]error[/red]: {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"kubeswitch {__version__}", highlight=False)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def show_current(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log debug details to stderr.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Show the current cluster and namespace."""
    if verbose:
        configure_logging("debug")
    if ctx.invoked_subcommand is not None:
        return

    with _reporting_errors():
        selection = current_selection(_runtime())
    console.print(f"Current cluster: {_name(selection.context)}", highlight=False)
    console.print(f"Current namespace: {_name(selection.namespace)}", highlight=False)


@app.command("use")
def use_command(
    name: Annotated[Optional[str], typer.Argument(help="Context name, or '-' for the last used one.")] = None,
) -> None:
    """Switch to a cluster."""
    with _reporting_errors():
        result = use_context(_runtime(), name)
    console.print(f"Switch to cluster {_name(result.name)}", highlight=False)


@app.command("ns")
def ns_command(
    name: Annotated[Optional[str], typer.Argument(help="Namespace, or '-' for the last used one.")] = None,
) -> None:
    """Switch to a namespace."""
    with _reporting_errors():
        result = switch_namespace(_runtime(), name)
    console.print(f"Switch to namespace {_name(result.name)}", highlight=False)


@app.command("set")
def set_command(
    name: Annotated[str, typer.Argument(help="Name of the cluster, user, and context.")],
    file: Annotated[
        Optional[Path],
        typer.Option(
            "--file",
            "-f",
            help="The merge config filename, if not provided, will open an editor to edit config.",
        ),
    ] = None,
) -> None:
    """Set cluster."""
    editor = MergeFileSource(file) if file is not None else None
    with _reporting_errors():
        result = set_cluster(_runtime(), name, editor=editor)
    if not result.applied:
        console.print("None cluster, cancel set", highlight=False)
        return
    console.print(f"Set cluster {escape(repr(result.name))} done.", highlight=False)


@app.command("del")
def delete_command(
    name: Annotated[str, typer.Argument(help="Name of the cluster to delete.")],
) -> None:
    """Delete a cluster."""
    with _reporting_errors():
        result = delete_cluster(_runtime(), name)
    console.print(f"Delete cluster {escape(repr(result.name))}", highlight=False)


def render_table(output: ListOutput) -> Table:
    table = Table(box=None, show_edge=False, pad_edge=False, header_style="bold")
    table.add_column("")
    table.add_column("NAME", no_wrap=True)
    table.add_column("NAMESPACE", no_wrap=True)
    if output.wide:
        table.add_column("SERVER", no_wrap=True)

    for row in output.rows:
        cells = [
            "*" if row.current else "",
            _name(row.name) if row.current else escape(row.name),
            escape(row.namespace),
        ]
        if output.wide:
            cells.append(escape(row.server or ""))
        table.add_row(*cells)
    return table


@app.command("list")
def list_command(
    wide: Annotated[bool, typer.Option("--wide", "-w", help="Show more info")] = False,
) -> None:
    """List clusters."""
    with _reporting_errors():
        output = list_contexts(_runtime(), wide=wide)
    console.print(render_table(output), highlight=False)


def run_completion(words: list[str]) -> None:
    """Print completion candidates for ``words``, one per line."""
    if words and words[0] == "--":
        words = words[1:]
    try:
        candidates = complete(build_runtime(), words)
    except Exception as exc:
        log.debug("completion_failed", error=str(exc))
        candidates = []
    for candidate in candidates:
        typer.echo(candidate)


def main(argv: Optional[list[str]] = None) -> None:
    """Console script entry point."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args and args[0] == COMPLETION_FLAG:
        run_completion(args[1:])
        return
    app(args=args, prog_name="kubeswitch")


if __name__ == "__main__":
    main()
