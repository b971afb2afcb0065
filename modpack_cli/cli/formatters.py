"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

USAGE = (
    "Usage: modpack-cli modpack_url(curseforge://install?addonId=...&fileId=...)"
    " target_directory"
)

OPTIONS_HELP = """
Options:
  -w, --workers N    Number of simultaneous mod downloads (default 6).
  -c, --config PATH  Read settings from this INI file.
  -v, --verbose      Show debug logging.
      --version      Show version and exit.
  -h, --help         Show this message and exit.
"""


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "InvalidModpackUrlError": [
            "• Copy the link from the 'Install' button on the CurseForge website.",
            "• The link must look like curseforge://install?addonId=...&fileId=...",
        ],
        "InvalidModpackError": [
            "• The file behind this link may not be a CurseForge modpack export.",
            "• Check that the fileId points at the modpack itself, not a server pack.",
        ],
        "ConfigurationError": [
            "• Check the values in your config.ini.",
            "• Delete the config file to fall back to the defaults.",
        ],
        "ClientResponseError": [
            "• The CurseForge API rejected the request or is unavailable.",
            "• Verify the addonId and fileId in the link.",
            "• Please try again in a few minutes.",
        ],
        "ClientConnectorError": [
            "• Could not reach the server. Check your internet connection.",
        ],
        "TimeoutError": [
            "• A request timed out. Raise `timeout` in config.ini or set it to 0.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )
