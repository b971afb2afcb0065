"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from modpack_cli import __version__
from modpack_cli.api.client import CurseForgeClient
from modpack_cli.core.installer import ModpackInstaller
from modpack_cli.exceptions import ModpackCliError
from modpack_cli.models.modpack import ModpackReference
from modpack_cli.models.stats import InstallStats
from modpack_cli.storage.config_manager import ConfigManager
from modpack_cli.utils.uri import parse_modpack_uri

from .formatters import OPTIONS_HELP, USAGE, format_error_with_suggestions
from .progress_manager import ProgressReporter

console = Console(stderr=True, soft_wrap=True)

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("modpack_cli")

app = typer.Typer(
    name="modpack-cli",
    help="Install a CurseForge modpack from a curseforge://install link.",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "modpack-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def print_usage() -> None:
    console.print(USAGE, markup=False, highlight=False)
    console.print(OPTIONS_HELP, markup=False, highlight=False, end="")


# --help is handled by the command so usage goes to stderr with exit code 1
@app.command(context_settings={"help_option_names": []})
def install(
    modpack_url: str | None = typer.Argument(
        None, metavar="MODPACK_URL", show_default=False
    ),
    target_dir: str | None = typer.Argument(
        None, metavar="TARGET_DIRECTORY", show_default=False
    ),
    workers: int | None = typer.Option(
        None, "-w", "--workers", help="Number of simultaneous mod downloads."
    ),
    config_file: Path | None = typer.Option(
        None, "-c", "--config", help="Path to an INI settings file."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    show_help: bool = typer.Option(False, "-h", "--help", help="Show usage and exit."),
):
    """Install a CurseForge modpack into TARGET_DIRECTORY."""
    if version:
        console.print(f"[bold]modpack-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    if show_help or not modpack_url or not target_dir:
        print_usage()
        raise typer.Exit(code=1)

    if verbose:
        logging.getLogger("modpack_cli").setLevel("DEBUG")

    cli_options = {"max_workers": workers} if workers is not None else {}

    try:
        reference = parse_modpack_uri(modpack_url, target_dir)
        config_manager = ConfigManager(
            config_file or CONFIG_FILE, required=config_file is not None
        )
        config = config_manager.load_config(cli_options)
    except ModpackCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    async def _install_async() -> InstallStats:
        async with CurseForgeClient(config) as client:
            installer = ModpackInstaller(config, client, ProgressReporter(console))
            return await installer.install(reference)

    try:
        asyncio.run(_install_async())
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        raise typer.Exit() from None
    except ModpackCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(format_error_with_suggestions(e, _error_context(reference)))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e


def _error_context(reference: ModpackReference) -> dict:
    return {
        "addonId": reference.project_id,
        "fileId": reference.file_id,
        "target": str(reference.target_dir),
    }
