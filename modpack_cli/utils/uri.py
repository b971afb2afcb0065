"""
Parsing for curseforge://install links, as handed out by the CurseForge website.
"""

from pathlib import Path
from urllib.parse import parse_qs, urlsplit

from modpack_cli.exceptions import InvalidModpackUrlError
from modpack_cli.models.modpack import ModpackReference

MODPACK_URI_SCHEME = "curseforge"
MODPACK_URI_HOST = "install"


def parse_modpack_uri(uri: str, target_dir: str | Path) -> ModpackReference:
    """
    Parses a link of the form `curseforge://install?addonId=<A>&fileId=<F>`.

    Raises:
        InvalidModpackUrlError: If the scheme or host is wrong or either
        query parameter is missing or empty.
    """
    try:
        parts = urlsplit(uri.strip())
    except ValueError as e:
        raise InvalidModpackUrlError(f"Malformed modpack URL '{uri}': {e}") from e

    if parts.scheme.lower() != MODPACK_URI_SCHEME:
        raise InvalidModpackUrlError(
            f"Unsupported URL scheme '{parts.scheme}', expected "
            f"'{MODPACK_URI_SCHEME}://{MODPACK_URI_HOST}'."
        )
    # Case-sensitive, unlike SplitResult.hostname
    host = parts.netloc.rpartition("@")[2].partition(":")[0]
    if host != MODPACK_URI_HOST:
        raise InvalidModpackUrlError(
            f"Unsupported URL host '{parts.netloc}', expected '{MODPACK_URI_HOST}'."
        )

    query = parse_qs(parts.query)
    addon_id = next(iter(query.get("addonId", [])), "")
    file_id = next(iter(query.get("fileId", [])), "")
    if not addon_id or not file_id:
        raise InvalidModpackUrlError(
            "Modpack URL must carry both 'addonId' and 'fileId' query parameters."
        )

    return ModpackReference(
        project_id=addon_id, file_id=file_id, target_dir=Path(target_dir)
    )
