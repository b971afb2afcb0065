"""
Utilities for resolving output paths inside the install directory.
"""

from pathlib import Path, PurePosixPath

from pathvalidate import sanitize_filename

from modpack_cli.exceptions import InvalidModpackError


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def mod_file_path(mods_dir: Path, file_name: str) -> Path:
    """
    Builds the destination for a downloaded mod. Any directory components in
    the remote file name are dropped so the file always lands in `mods_dir`.
    """
    name = sanitize_filename(PurePosixPath(file_name.replace("\\", "/")).name)
    if not name:
        raise InvalidModpackError(f"Remote file name '{file_name}' is not usable.")
    return mods_dir / name


def resolve_entry_path(target_dir: Path, relative_path: str) -> Path:
    """
    Maps an archive-relative path onto `target_dir`.

    Raises:
        InvalidModpackError: If the path is absolute or escapes `target_dir`.
    """
    pure = PurePosixPath(relative_path)
    if pure.is_absolute() or ".." in pure.parts:
        raise InvalidModpackError(f"Refusing to extract unsafe path '{relative_path}'.")
    return target_dir.joinpath(*pure.parts)
