"""Enumeration of team folders and result files in a competition source folder.

Layout::

    <source>/<team>/<stage>/<character>.json
"""

from pathlib import Path

RESULT_SUFFIX = ".json"


def list_teams(source: str | Path, reserved: set[str] | frozenset[str] = frozenset()) -> list[str]:
    """List team folder names, sorted.

    Hidden entries and reserved folders (run logs, exported results) are
    skipped.
    """
    source = Path(source)
    return sorted(
        entry.name
        for entry in source.iterdir()
        if entry.is_dir() and not entry.name.startswith(".") and entry.name not in reserved
    )


def list_result_files(folder: str | Path) -> list[str]:
    """List non-hidden regular files in a stage folder, sorted.

    Returns:
        File names, or an empty list if the folder doesn't exist
    """
    folder = Path(folder)
    if not folder.is_dir():
        return []
    return sorted(
        entry.name for entry in folder.iterdir() if entry.is_file() and not entry.name.startswith(".")
    )


def character_from_filename(file_name: str) -> str:
    """'A.json' -> 'A'"""
    if file_name.endswith(RESULT_SUFFIX):
        return file_name[: -len(RESULT_SUFFIX)]
    return file_name


def result_path(source: str | Path, team: str, stage: str, character: str) -> Path:
    return Path(source) / team / stage / f"{character}{RESULT_SUFFIX}"
