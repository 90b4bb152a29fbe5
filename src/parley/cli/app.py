"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..conversation import (
    PersistenceError,
    PersistenceFailed,
    SessionEvent,
    TurnFailed,
)
from ..ui.config import LEVEL_STYLES, LogLevel
from .providers import get_config, get_session, get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="parley",
    help="Chat with an LLM while keeping a persistent transcript",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_COMMANDS = ("exit", "quit", "q")
CLEAR_COMMAND = "/clear"


def _print_debug(threshold: int):
    """Build a debug callback that prints engine log lines at or above threshold."""
    def _callback(level: str, component: str, message: str) -> None:
        parsed = LogLevel.from_string(level)
        if parsed < threshold:
            return
        style = LEVEL_STYLES[parsed]
        console.print(f"[{style}]{parsed.name:<7}[/] [dim]\\[{component}][/] {message}")
    return _callback


def _print_event(event: SessionEvent) -> None:
    if isinstance(event, TurnFailed):
        console.print(f"[bold red]Error:[/bold red] {event.reason}\n")
    elif isinstance(event, PersistenceFailed):
        console.print(f"[yellow]Warning: chat not saved ({event.reason})[/yellow]")


@app.command()
def chat(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="LLM provider: gemini, openai or anthropic (default: PARLEY_PROVIDER or gemini)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model id (default: provider default)"
    ),
    storage: str | None = typer.Option(
        None,
        "--storage",
        "-s",
        help="Transcript storage: memory, sqlite or file"
    ),
    storage_path: Path | None = typer.Option(
        None,
        "--storage-path",
        help="Database or preferences file for the transcript"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print engine logs with level: debug (all), info, warning, or error"
    ),
):
    """Interactive chat in the terminal."""
    config = get_config(
        console,
        provider=provider,
        model=model,
        storage_backend=storage,
        storage_path=storage_path,
    )
    session = get_session(config, console)

    async def _chat() -> None:
        if log_level is not None:
            session.set_debug_callback(_print_debug(LogLevel.from_string(log_level)))
        session.subscribe(_print_event)

        try:
            history = await session.open()
        except PersistenceError as e:
            console.print(f"[red]Error: {e}[/red]")
            await session.close()
            raise typer.Exit(code=1) from e

        try:
            console.print("[bold cyan]Parley Interactive Chat[/bold cyan]")
            console.print(f"[dim]{session.model_name} | {session.backend_type} storage[/dim]")
            console.print("[dim]Type '/clear' to start over, 'exit', 'quit', or 'q' to leave[/dim]\n")
            if history:
                console.print(f"[dim]Restored {len(history)} message(s)[/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in EXIT_COMMANDS:
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == CLEAR_COMMAND:
                    await session.clear()
                    console.print("[dim]Chat cleared.[/dim]\n")
                    continue

                with console.status("[dim]Thinking...[/dim]"):
                    replied = await session.send(user_input)
                if replied:
                    reply = session.messages[-1]
                    console.print(f"[bold green]Assistant:[/bold green] {reply.text}\n")
        finally:
            await session.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="LLM provider: gemini, openai or anthropic (default: PARLEY_PROVIDER or gemini)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model id (default: provider default)"
    ),
    storage: str | None = typer.Option(
        None,
        "--storage",
        "-s",
        help="Transcript storage: memory, sqlite or file"
    ),
    storage_path: Path | None = typer.Option(
        None,
        "--storage-path",
        help="Database or preferences file for the transcript"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    from ..ui import run_textual_tui

    config = get_config(
        console,
        provider=provider,
        model=model,
        storage_backend=storage,
        storage_path=storage_path,
    )
    session = get_session(config, console)
    asyncio.run(run_textual_tui(session, log_level=log_level))


@app.command()
def history(
    storage: str | None = typer.Option(
        None,
        "--storage",
        "-s",
        help="Transcript storage: memory, sqlite or file"
    ),
    storage_path: Path | None = typer.Option(
        None,
        "--storage-path",
        help="Database or preferences file for the transcript"
    ),
):
    """Show the persisted transcript."""
    config = get_config(console, storage_backend=storage, storage_path=storage_path)
    adapter, store = get_store(config)

    async def _history() -> bool:
        try:
            await adapter.connect()
            messages = await store.load()
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            return False
        finally:
            await adapter.disconnect()

        if not messages:
            console.print("[dim]No messages yet.[/dim]")
            return True

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Time", style="dim")
        table.add_column("Role")
        table.add_column("Message")

        for position, message in enumerate(messages, 1):
            role = "[yellow]You[/yellow]" if message.is_user else "[green]Assistant[/green]"
            table.add_row(
                str(position),
                message.timestamp.strftime("%Y-%m-%d %H:%M"),
                role,
                message.text,
            )

        console.print(table)
        if store.skipped_on_load:
            console.print(f"[yellow]Skipped {store.skipped_on_load} unreadable record(s)[/yellow]")
        return True

    if not asyncio.run(_history()):
        raise typer.Exit(code=1)


@app.command()
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
    storage: str | None = typer.Option(
        None,
        "--storage",
        "-s",
        help="Transcript storage: memory, sqlite or file"
    ),
    storage_path: Path | None = typer.Option(
        None,
        "--storage-path",
        help="Database or preferences file for the transcript"
    ),
):
    """Delete the persisted transcript."""
    if not yes:
        console.print("[yellow]WARNING: This will delete the whole chat history![/yellow]")
        confirm = typer.confirm("Are you sure you want to continue?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    config = get_config(console, storage_backend=storage, storage_path=storage_path)
    adapter, store = get_store(config)

    async def _clear() -> int | None:
        try:
            await adapter.connect()
            messages = await store.load()
            store.clear()
            await store.persist()
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            return None
        finally:
            await adapter.disconnect()
        return len(messages) + store.skipped_on_load

    deleted = asyncio.run(_clear())
    if deleted is None:
        raise typer.Exit(code=1)
    console.print(f"[green]Success! Deleted {deleted} message(s).[/green]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
