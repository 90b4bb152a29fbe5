"""Session factory functions for CLI.

Centralizes creation of configuration, sessions and storage from environment
variables. Hides configuration details from command implementations.
"""

from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console

from ..config import API_KEY_ENV, SessionConfig, load_config_from_env
from ..conversation import MessageStore
from ..persistence import PersistenceAdapter, create_persistence_adapter
from ..session import ChatSession, create_session

# Default console for output
_console = Console()


def get_config(console: Console | None = None, **overrides: Any) -> SessionConfig:
    """Load session configuration from environment variables.

    Args:
        console: Optional Rich console for output
        **overrides: Command-line values that take precedence (None is ignored)

    Raises:
        typer.Exit: If a configured value is invalid
    """
    con = console or _console
    try:
        return load_config_from_env(**overrides)
    except ValidationError as e:
        con.print("[red]Error: invalid configuration[/red]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            con.print(f"[red]  {field}: {error['msg']}[/red]")
        raise typer.Exit(code=1) from e


def get_session(config: SessionConfig, console: Console | None = None) -> ChatSession:
    """Create a chat session, exiting with an error if it cannot be built.

    Raises:
        typer.Exit: If the API key is missing or the provider is unknown
    """
    con = console or _console
    if config.api_key is None and config.provider in API_KEY_ENV:
        con.print(f"[red]Error: {API_KEY_ENV[config.provider]} not set in environment[/red]")
        raise typer.Exit(code=1)

    try:
        return create_session(config)
    except (TypeError, ValueError) as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e


def get_store(config: SessionConfig) -> tuple[PersistenceAdapter, MessageStore]:
    """Create the storage adapter and transcript store without a model client.

    Used by commands that only read or reset the persisted transcript.
    """
    storage_config: dict[str, Any] = {}
    storage_path = config.resolved_storage_path()
    if storage_path is not None:
        storage_config["path"] = storage_path
    adapter = create_persistence_adapter(config.storage_backend, **storage_config)
    return adapter, MessageStore(adapter, key=config.storage_key)
