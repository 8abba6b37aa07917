"""Resolution of the folder reference typed by the user into an existing directory."""

import logging
from pathlib import Path
from typing import (
    Dict,
    List,
)

logger = logging.getLogger(__name__)

SHORTCUTS: Dict[str, str] = {
    "desktop": "Desktop",
    "downloads": "Downloads",
    "documents": "Documents",
    "pictures": "Pictures",
    "music": "Music",
    "videos": "Videos",
    "home": "",
}

# Folders that OneDrive redirects on Windows when backup is enabled.
_ONEDRIVE_FOLDERS = {"desktop", "documents", "pictures"}


def _candidates(keyword: str, home: Path) -> List[Path]:
    folder = SHORTCUTS[keyword]
    if not folder:
        return [home]
    paths = [home / folder]
    if keyword in _ONEDRIVE_FOLDERS:
        paths.insert(0, home / "OneDrive" / folder)
    return paths


def resolve_folder_reference(reference: str, home: Path | None = None) -> Path | None:
    """
    Map a shortcut keyword (``desktop``, ``downloads``, ...) or a literal path to an absolute,
    existing directory.

    Returns ``None`` when the reference does not lead to an existing directory.
    """
    home = home or Path.home()
    cleaned = reference.strip().strip("'\"").strip()
    if not cleaned:
        return None

    keyword = cleaned.lower()
    if keyword in SHORTCUTS:
        for candidate in _candidates(keyword, home):
            if candidate.is_dir():
                logger.debug("Shortcut '%s' resolved to %s", keyword, candidate)
                return candidate.resolve()
        logger.debug("Shortcut '%s' has no existing folder under %s", keyword, home)
        return None

    if cleaned == "~" or cleaned.startswith(("~/", "~\\")):
        path = home / cleaned[2:] if len(cleaned) > 1 else home
    else:
        path = Path(cleaned)
    path = path.resolve()
    return path if path.is_dir() else None
