"""
Filesystem tools offered to the model.

Every tool returns a human-readable status string.  Expected conditions (missing source, folder
already there, ...) are reported in that string so the model can react to them; anything else,
such as a permission error, is left to propagate.
"""

import logging
import os
import shutil
import time

from tidyagent.tools import (
    ToolName,
    register_tool,
)

logger = logging.getLogger(__name__)


@register_tool(
    ToolName.LIST_FILES,
    "List all files in a directory",
    params={"directory": "Path to the directory"},
)
def list_files(directory: str) -> str:
    """Return the names of the regular files directly inside *directory*, one per line."""
    if not os.path.exists(directory):
        return f"Directory not found: {directory}"

    items = [
        entry
        for entry in os.listdir(directory)
        if os.path.isfile(os.path.join(directory, entry))
    ]
    return "\n".join(items) if items else "No files found."


@register_tool(
    ToolName.CREATE_FOLDER,
    "Create a new subfolder inside the target directory",
    params={"folder_path": "Full path of folder to create"},
)
def create_folder(folder_path: str) -> str:
    """Create *folder_path* and any missing parents; never touches an existing path."""
    if os.path.exists(folder_path):
        return f"Folder already exists: {folder_path}"
    os.makedirs(folder_path)
    return f"Created folder: {folder_path}"


def _unique_destination(destination: str) -> str:
    """Insert a millisecond timestamp before the extension until the path is free."""
    base, ext = os.path.splitext(destination)
    token = int(time.time() * 1000)
    candidate = f"{base}_{token}{ext}"
    while os.path.exists(candidate):
        token += 1
        candidate = f"{base}_{token}{ext}"
    return candidate


@register_tool(
    ToolName.MOVE_FILE,
    "Move a file from source to destination",
    params={
        "source": "Current full path of the file",
        "destination": "Destination full path",
    },
)
def move_file(source: str, destination: str) -> str:
    """Move *source* to *destination*, renaming rather than overwriting on collision."""
    if not os.path.exists(source):
        return f"Source file not found: {source}"

    if os.path.exists(destination):
        renamed = _unique_destination(destination)
        logger.info("Destination %s exists, using %s", destination, renamed)
        destination = renamed

    shutil.move(source, destination)
    return f"Moved: {os.path.basename(source)} → {destination}"


@register_tool(
    ToolName.WRITE_REPORT,
    "Write a text report summarizing what was done",
    params={
        "report_path": "Full path to save the report",
        "content": "Report content",
    },
)
def write_report(report_path: str, content: str) -> str:
    """Write *content* to *report_path*, replacing any previous file."""
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(content)
    return f"Report saved to: {report_path}"
