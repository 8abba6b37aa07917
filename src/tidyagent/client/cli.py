"""Interactive prompts that pick and confirm the folder to organize."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from tidyagent.common import (
    AnsiColors,
    colored_print,
)
from tidyagent.core.paths import resolve_folder_reference

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE = "desktop"


class FolderNotFoundError(LookupError):
    """Raised when the user's folder reference cannot be mapped to an existing directory."""


# ---------------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------------
def get_user_message(prompt: str) -> Tuple[str, bool]:
    """
    Show *prompt* and read one line from standard input.

    Returns:
        Tuple of (user_input, success_flag)
        The success_flag is False if input couldn't be read (e.g., Ctrl+C)
    """
    colored_print(prompt, AnsiColors.BLUE, end="")
    try:
        user_input = input().strip()
        return user_input, True
    except (EOFError, KeyboardInterrupt):
        print()
        return "", False


def ask_yes_no(prompt: str) -> bool | None:
    """Ask a yes/no question until answered; ``None`` when input is unavailable."""
    while True:
        answer, ok = get_user_message(prompt)
        if not ok:
            return None
        if answer.lower() in {"y", "yes"}:
            return True
        if answer.lower() in {"n", "no"}:
            return False
        colored_print("Please answer 'y' or 'n'.", AnsiColors.YELLOW)


def _resolve_or_raise(reference: str) -> Path:
    target = resolve_folder_reference(reference)
    if target is None:
        raise FolderNotFoundError(f"Folder not found: {reference}")
    return target


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def choose_target_directory() -> Path | None:
    """
    Prompt for a folder reference and confirm it with the user.

    Returns the confirmed absolute directory, or ``None`` if the user cancelled.

    Raises
    ------
    FolderNotFoundError
        If the reference (or the fallback literal path) does not resolve to a directory.
    """
    reference, ok = get_user_message(
        f"📁 Which folder should I organize? (desktop, downloads, documents, or a path) "
        f"[{DEFAULT_REFERENCE}]: "
    )
    if not ok:
        return None
    target = _resolve_or_raise(reference or DEFAULT_REFERENCE)

    colored_print(f"\nTarget folder: {target}", AnsiColors.YELLOW)
    confirmed = ask_yes_no("Organize this folder? (y/n): ")
    if confirmed is None:
        return None
    if confirmed:
        return target

    literal, ok = get_user_message("Enter the full path of the folder to organize: ")
    if not ok or not literal:
        return None
    target = _resolve_or_raise(literal)
    logger.info("User supplied literal path %s", target)
    return target
