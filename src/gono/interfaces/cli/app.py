"""Terminal interface for gono using Rich and Typer."""

import logging
import sys

import click
import typer
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from gono.core.config import setup_logging
from gono.core.session import Session
from gono.core.types import (
    ConfirmDelete,
    DirectoryCreate,
    Editor,
    FileCreate,
    FileList,
    StatusLevel,
    VaultCreate,
    VaultOpenByPath,
    VaultSelect,
)
from gono.core.views import ViewPayload, build_view

app = typer.Typer(
    name="gono",
    help="gono - terminal notes in local vaults",
    no_args_is_help=False,
    add_completion=False,
)

console = Console()

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    StatusLevel.INFO: "bold blue",
    StatusLevel.SUCCESS: "bold green",
    StatusLevel.WARNING: "bold yellow",
    StatusLevel.ERROR: "bold red",
}

PROMPT_STATES = (VaultCreate, VaultOpenByPath, FileCreate, DirectoryCreate)

# Line that ends a typed note
TYPING_END = "."


def render(payload: ViewPayload) -> Panel:
    """Render a view payload as a Rich panel."""
    parts = []
    if payload.subtitle.strip():
        parts.append(Text(payload.subtitle, style="dim"))
    if payload.status.strip():
        parts.append(Text(payload.status, style=STATUS_STYLES[payload.status_level]))

    if payload.rows:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("#", style="dim", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Details", style="dim")
        for i, row in enumerate(payload.rows, 1):
            table.add_row(str(i), row.title, row.description)
        parts.append(table)
    elif payload.text.strip():
        parts.append(Markdown(payload.text))
    elif payload.placeholder:
        parts.append(Text(payload.placeholder, style="italic dim"))

    parts.append(Text(payload.hints, style="dim"))
    return Panel(
        Group(*parts),
        title=f"[bold blue]{payload.title}[/bold blue]",
        border_style="blue",
    )


def _row_at(payload: ViewPayload, arg: str):
    """Resolve a 1-based row number typed by the user."""
    try:
        index = int(arg)
    except ValueError:
        return None
    if 1 <= index <= len(payload.rows):
        return payload.rows[index - 1]
    return None


def edit_buffer(session: Session) -> None:
    """Edit the open note in the user's $EDITOR."""
    view = session.view
    if not isinstance(view, Editor):
        return
    try:
        edited = click.edit(view.buffer, extension=".md", require_save=False)
    except click.ClickException as e:
        logger.warning(f"Editor failed: {e.format_message()}")
        session.status = f"Error: {e.format_message()}"
        return
    if edited is None or edited.rstrip("\n") == view.buffer.rstrip("\n"):
        console.print("[dim]No changes.[/dim]")
        return
    session.update_buffer(edited)


def type_buffer(session: Session) -> None:
    """Replace the open note with lines typed at the terminal."""
    if not isinstance(session.view, Editor):
        return
    console.print(
        f"[dim]Type the note. A line with a single '{TYPING_END}' ends it.[/dim]"
    )
    lines = []
    while True:
        line = console.input("[dim]|[/dim] ")
        if line == TYPING_END:
            break
        lines.append(line)
    session.update_buffer("\n".join(lines))


def handle_command(session: Session, command: str) -> bool:
    """
    Handle a command typed in a list or editor view.

    Returns True if the loop should continue, False to exit.
    """
    parts = command.strip().split(maxsplit=1)
    if not parts:
        return True
    cmd = parts[0].lower()
    args = parts[1] if len(parts) > 1 else ""
    payload = build_view(session, console.width)
    view = session.view

    if cmd in ("q", "quit", "exit"):
        session.quit()
        console.print("[dim]Goodbye![/dim]")
        return False

    if isinstance(view, VaultSelect):
        if cmd.isdigit():
            row = _row_at(payload, cmd)
            if row is None:
                console.print(f"[red]No such row: {cmd}[/red]")
            else:
                session.select_vault_row(row)
        elif cmd == "n":
            session.begin_create_vault()
        elif cmd == "o":
            session.begin_open_by_path()
        elif cmd == "p":
            session.open_via_picker()
        elif cmd == "x":
            row = _row_at(payload, args)
            if row is None:
                console.print("[red]Usage: x <row number>[/red]")
            else:
                session.request_delete_vault(row)
        else:
            console.print(f"[red]Unknown command: {cmd}[/red]")

    elif isinstance(view, FileList):
        if cmd.isdigit():
            row = _row_at(payload, cmd)
            if row is None:
                console.print(f"[red]No such row: {cmd}[/red]")
            else:
                session.select_entry(row)
        elif cmd in ("u", ".."):
            session.go_parent()
        elif cmd == "n":
            session.begin_create_file()
        elif cmd == "d":
            session.begin_create_directory()
        elif cmd == "x":
            row = _row_at(payload, args)
            if row is None:
                console.print("[red]Usage: x <row number>[/red]")
            else:
                session.request_delete_entry(row)
        else:
            console.print(f"[red]Unknown command: {cmd}[/red]")

    elif isinstance(view, Editor):
        if cmd == "e":
            edit_buffer(session)
        elif cmd == "t":
            type_buffer(session)
        elif cmd == "s":
            session.save()
        elif cmd == "b":
            session.cancel()
        else:
            console.print(f"[red]Unknown command: {cmd}[/red]")

    return True


def step(session: Session) -> None:
    """Render the current view and process one user intent."""
    payload = build_view(session, console.width)
    console.print(render(payload))
    view = session.view

    try:
        if isinstance(view, PROMPT_STATES):
            value = Prompt.ask(f"[bold blue]{payload.placeholder}[/bold blue]")
            session.submit(value)
        elif isinstance(view, ConfirmDelete):
            if Confirm.ask(f"[bold red]Delete {view.target.label}?[/bold red]"):
                session.confirm()
            else:
                session.decline()
        else:
            text = Prompt.ask("[bold blue]>[/bold blue]")
            handle_command(session, text)
    except KeyboardInterrupt:
        console.print()
        if isinstance(view, (VaultSelect, FileList, Editor)):
            console.print("[dim]Use q to quit.[/dim]")
        else:
            session.cancel()


def repl(session: Session) -> None:
    """Run the interactive loop until the user quits."""
    while session.running:
        try:
            step(session)
        except EOFError:
            session.quit()


@app.callback(invoke_without_command=True)
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """Browse and edit notes in your vaults."""
    setup_logging(debug=debug)
    if debug:
        console.print("[dim]Debug logging enabled[/dim]")

    if not sys.stdin.isatty() or not console.is_terminal:
        console.print("[red]Error: gono needs an interactive terminal[/red]")
        raise typer.Exit(1)

    logger.debug("Starting interactive session")
    repl(Session())


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
