import json
import os
import shlex
import subprocess
from typing import Any, List, Optional

from loguru import logger


def read_json_file(file_path: str) -> Optional[Any]:
    if not os.path.exists(file_path):
        logger.error(f"JSON file {file_path} does not exist.")
        return None

    with open(file_path, "r", encoding="utf-8") as file:
        try:
            return json.load(file)
        except ValueError as e:
            logger.error(f"Failed to read JSON file {file_path}: {e}")
            return None


def find_executable(name: str, path_env: Optional[str] = None) -> Optional[str]:
    """
    Find an executable by scanning the directories listed in PATH.

    Args:
        name: File name to look for (e.g. "zoxide.exe")
        path_env: PATH-style string, defaults to the process environment

    Returns:
        Full path of the first existing match, or None
    """
    if path_env is None:
        path_env = os.environ.get("PATH")

    if not path_env:
        return None

    for directory in path_env.split(os.pathsep):
        if not directory.strip():
            continue
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate):
            return candidate

    return None


def copy_to_clipboard(text: str, commands: List[List[str]]) -> bool:
    """
    Copy text to the clipboard.
    Each command is tried in order (e.g. wl-copy for Wayland, xclip for X11).
    """
    for command in commands:
        try:
            subprocess.run(
                command,
                input=text.encode(errors="surrogateescape"),
                check=True,
                timeout=3,
            )
            return True
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Clipboard command {command[0]} failed: {e}")

    logger.warning("Failed to copy text to clipboard: no clipboard command succeeded")
    return False


def open_in_file_manager(path: str, file_manager: str) -> bool:
    """Open a directory in the file manager without waiting for it."""
    try:
        subprocess.Popen(
            shlex.split(file_manager) + [path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        logger.info(f"Opened: {path}")
        return True
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to open {path}: {e}")
        return False
