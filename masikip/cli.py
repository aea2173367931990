"""
Masikip Notes CLI.

Primary entry point. Use --service to select what to run.

Usage:
    masikip --help
    masikip --service tui
    masikip --service list --verbose
    masikip --service config
    masikip --service info
"""

import asyncio

import click
import structlog
from rich.console import Console
from rich.table import Table

from masikip import __version__
from masikip.core.config import get_api_endpoint, get_app_config, validate_project_root
from masikip.core.logging import get_logger, setup_logging
from masikip.services.note import NoteService
from masikip.state.notes import NotesState
from masikip.views.sidebar import SECTION_TITLES, SidebarModel

console = Console()


def _build_state() -> NotesState:
    sync = get_app_config().application.sync
    return NotesState(NoteService(), sync_deletes=sync.deletes)


def run_tui(logger) -> None:
    """Start the Textual interface."""
    from masikip.tui.app import NotesApp

    base_url = get_api_endpoint().base_url
    logger.info("Starting TUI", backend=base_url)
    app = NotesApp(state=_build_state(), backend=base_url)
    app.run()


async def _load_and_list(search: str) -> None:
    state = _build_state()
    try:
        await state.load()
    finally:
        await state.close()

    sidebar = SidebarModel(search_term=search)
    for section in sidebar.sections(state.notes):
        table = Table(title=SECTION_TITLES[section.key], show_lines=False)
        table.add_column("ID", style="dim")
        table.add_column("Title", style="bold")
        table.add_column("Modified")
        table.add_column("Preview")
        if not section.rows:
            console.print(f"[dim]{section.empty_message}[/dim]")
            continue
        for row in section.rows:
            table.add_row(row.note_id, row.title, row.meta, row.preview)
        console.print(table)


def list_notes(logger, search: str) -> None:
    """Print the backend's notes grouped like the sidebar."""
    logger.debug("Listing notes", search=search)
    asyncio.run(_load_and_list(search))


def show_config(logger) -> None:
    """Print the effective configuration."""
    app = get_app_config().application
    endpoint = get_api_endpoint()
    logger.debug("Showing configuration", environment=app.environment)
    table = Table(title="Configuration")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("name", app.name)
    table.add_row("environment", app.environment)
    table.add_row("api.base_url", endpoint.base_url)
    table.add_row("api.timeout", f"{endpoint.timeout:g}s")
    table.add_row("api.frontend_id", endpoint.frontend_id)
    table.add_row("sync.deletes", str(app.sync.deletes))
    console.print(table)


def show_info(logger) -> None:
    """Print version and usage hints."""
    logger.debug("Showing info", version=__version__)
    click.echo(f"Masikip Notes {__version__}")
    click.echo("Run 'masikip --service tui' to open the notes interface.")


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["tui", "list", "config", "info"]),
    default="tui",
    help="Service or command to run.",
)
@click.option(
    "--search",
    default="",
    help="Filter for --service list (matches title or content).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
def main(service: str, search: str, verbose: bool, debug: bool) -> None:
    """
    Masikip Notes CLI.

    \b
    Examples:
        masikip
        masikip --service tui --debug
        masikip --service list --search groceries
        masikip --service config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    # The TUI draws on the terminal, so its logs go to the JSONL file only.
    setup_logging(level=log_level, format_type="console", enable_console=service != "tui")

    structlog.contextvars.bind_contextvars(source="tui" if service == "tui" else "cli")

    logger = get_logger(__name__)
    logger.debug("CLI invoked", service=service, log_level=log_level)

    if service == "tui":
        run_tui(logger)
    elif service == "list":
        list_notes(logger, search)
    elif service == "config":
        show_config(logger)
    elif service == "info":
        show_info(logger)


if __name__ == "__main__":
    main()
