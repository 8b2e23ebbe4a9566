"""Command line entry point for qrgen."""
from __future__ import annotations

from typing import Annotated, Optional

import typer

from . import __version__
from .colors import parse_hex_color
from .config import AppConfig, OutputFormat, QRConfig
from .errors import GenerationError, UpdateError, ValidationError
from .history import HistoryStore
from .logging_setup import configure_logging
from .output import console, print_error, print_info, print_success, print_table
from .qr import QRCodeManager
from .updater import UpdateManager

app = typer.Typer(
    name="qrgen",
    help="Create QR codes from your terminal.",
    no_args_is_help=False,
    invoke_without_command=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"qrgen {__version__}")
        raise typer.Exit()


def _launch_wizard(config: AppConfig) -> None:
    from .app import run as run_app

    code = run_app(config)
    if code:
        raise typer.Exit(code)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging on stderr."),
    ] = False,
) -> None:
    """Interactive QR code generator.

    Run [bold]qrgen[/bold] without arguments to start the wizard.
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        _launch_wizard(AppConfig())


@app.command()
def run(
    no_history: Annotated[
        bool,
        typer.Option("--no-history", help="Do not record the generated code in the history."),
    ] = False,
    no_preview: Annotated[
        bool,
        typer.Option("--no-preview", help="Skip the terminal preview after generation."),
    ] = False,
) -> None:
    """Launch the interactive wizard."""
    config = AppConfig(show_preview=not no_preview, record_history=not no_history)
    _launch_wizard(config)


@app.command()
def history(
    clear: Annotated[bool, typer.Option("--clear", help="Delete all history entries.")] = False,
    plain: Annotated[bool, typer.Option("--plain", help="Print without table formatting.")] = False,
) -> None:
    """Show previously generated QR codes."""
    try:
        store = HistoryStore()
        if clear:
            store.clear()
            print_success("History cleared.")
            return
    except OSError as exc:
        print_error(f"Failed to access history: {exc}")
        raise typer.Exit(1)

    entries = store.list()
    if plain:
        console.print(store.format_table(), markup=False, highlight=False)
        return
    if not entries:
        print_info("No QR codes generated yet.")
        return

    rows = [
        [
            entry.id,
            f"{entry.created_at:%Y-%m-%d %H:%M}",
            entry.format.upper(),
            f"{entry.size}x{entry.size}",
            entry.content if len(entry.content) <= 40 else entry.content[:37] + "...",
            entry.output_path,
        ]
        for entry in entries
    ]
    print_table(["ID", "Created", "Format", "Size", "Content", "Output"], rows, title="History")


@app.command()
def regen(
    entry_id: Annotated[str, typer.Argument(metavar="ID", help="History entry to re-generate.")],
) -> None:
    """Re-generate a QR code from a history entry."""
    try:
        number = int(entry_id)
    except ValueError:
        print_error(f"Invalid ID: {entry_id}")
        raise typer.Exit(1)

    try:
        entry = HistoryStore().get(number)
    except LookupError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    try:
        qr_config = QRConfig(
            content=entry.content,
            format=OutputFormat(entry.format),
            size=entry.size,
            foreground=parse_hex_color(entry.fg_color),
            background=parse_hex_color(entry.bg_color),
            output_path=entry.output_path,
        )
        path = QRCodeManager(AppConfig()).generate(qr_config)
    except (ValidationError, GenerationError, ValueError) as exc:
        print_error(f"Generation failed: {exc}")
        raise typer.Exit(1)

    print_success(f"Re-generated QR code: {path}")


@app.command()
def update() -> None:
    """Install the latest release."""
    print_info("Checking for updates...")
    try:
        new_version = UpdateManager(AppConfig()).self_update(__version__)
    except UpdateError as exc:
        print_error(f"Update failed: {exc}")
        raise typer.Exit(1)
    print_success(f"Successfully updated to v{new_version}!")


@app.command("check-update")
def check_update() -> None:
    """Check whether a newer release is available."""
    try:
        result = UpdateManager(AppConfig()).check_for_update(__version__)
    except UpdateError as exc:
        print_error(f"Failed to check for updates: {exc}")
        raise typer.Exit(1)

    if result.update_available:
        print_info(
            f"Update available: v{result.current_version} → v{result.latest_version}\n"
            "Run 'qrgen update' to update."
        )
    else:
        print_success(f"You're up to date (v{result.current_version}).")


def main() -> None:
    app()


__all__ = ["app", "main"]
