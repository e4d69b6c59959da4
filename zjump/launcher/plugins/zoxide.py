"""
Zoxide plugin for the launcher.
Jump to frequently used directories ranked by zoxide.
"""

import os
import re
import subprocess
from typing import List, Optional

from loguru import logger

from zjump.launcher.api import Theme
from zjump.launcher.plugin_base import PluginBase
from zjump.launcher.result import Result, ToolTipData
from zjump.utils.functions import (
    copy_to_clipboard,
    find_executable,
    open_in_file_manager,
)

PLUGIN_ID = "477BD4818E6134BCB38BB543A7B1E2EE"

# Printed by `zoxide query` when nothing in its database matches
NO_MATCH_MESSAGE = "zoxide: no match found"

IMAGES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "images")
ICON_LIGHT = os.path.join(IMAGES_DIR, "zoxide.light.svg")
ICON_DARK = os.path.join(IMAGES_DIR, "zoxide.dark.svg")


def directory_name(path: str) -> str:
    """Last component of a path, accepting both / and \\ separators."""
    stripped = path.rstrip("/\\")
    if not stripped:
        return path
    return re.split(r"[\\/]", stripped)[-1].strip()


class ZoxidePlugin(PluginBase):
    """
    Plugin that forwards the query to zoxide and offers to open its best match.
    """

    TRIGGERS = ["z"]

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self.plugin_id = PLUGIN_ID
        self.display_name = "Zoxide"
        self.description = "Jump to frequently used directories with zoxide"

        self.api = None
        self.icon_path = ICON_DARK
        self.zoxide_path: Optional[str] = None
        self.initialized = False
        self.disposed = False
        self._theme_handler = None

    def initialize(self, api=None):
        """Subscribe to theme changes and locate the zoxide executable."""
        if api is None:
            raise ValueError("ZoxidePlugin requires a plugin API")

        self.api = api
        self._theme_handler = api.connect_theme_changed(self._on_theme_changed)
        self._update_icon_path(api.get_current_theme())

        self.zoxide_path = self._resolve_zoxide_path()
        if self.zoxide_path is None:
            logger.warning(
                f"[Zoxide] Cannot find {self.config['zoxide_binary']} in PATH"
            )
        else:
            logger.info(f"[Zoxide] Current zoxide path: {self.zoxide_path}")

        self.initialized = True

    def cleanup(self):
        """Unsubscribe from theme changes. Safe to call more than once."""
        if self.disposed:
            return

        if self.api is not None and self._theme_handler is not None:
            self.api.disconnect_theme_changed(self._theme_handler)
        self._theme_handler = None

        self.disposed = True

    def _resolve_zoxide_path(self) -> Optional[str]:
        configured = self.config.get("zoxide_path")
        if configured:
            configured = os.path.expanduser(configured)
            if os.path.isfile(configured):
                return configured
            logger.warning(
                f"[Zoxide] Configured zoxide_path {configured} does not exist, "
                "falling back to PATH"
            )

        return find_executable(self.config["zoxide_binary"])

    def _run_zoxide(self, *args: str) -> subprocess.CompletedProcess:
        logger.debug(f"[Zoxide] Running zoxide {' '.join(args)}")
        return subprocess.run(
            [self.zoxide_path, *args],
            capture_output=True,
            text=True,
            errors="surrogateescape",
            timeout=self.config.get("query_timeout"),
        )

    def query(self, query_string: str) -> List[Result]:
        """Ask zoxide for the best match of the query."""
        search = query_string

        if self.zoxide_path is None:
            return [self._not_found_result(search)]

        try:
            completed = self._run_zoxide("query", search)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            logger.warning(f"[Zoxide] Query '{search}' failed: {e}")
            return [self._query_error_result(search, str(e).strip())]

        error = completed.stderr or ""

        if completed.returncode != 0:
            message = error.strip()
            if message == NO_MATCH_MESSAGE:
                directory = os.path.expanduser(search)
                if directory and os.path.isdir(directory):
                    return [self._direct_path_result(search, os.path.abspath(directory))]
            if not message:
                message = f"zoxide exited with status {completed.returncode}"
            return [self._query_error_result(search, message)]

        if error.strip():
            return [self._warning_result(search, error.strip())]

        path = (completed.stdout or "").strip()
        if not path:
            return []

        return [self._navigate_result(search, path)]

    def _not_found_result(self, search: str) -> Result:
        return Result(
            title="Error: Cannot find zoxide",
            subtitle="Error: Cannot find zoxide",
            tooltip=ToolTipData("Error", "Cannot find zoxide"),
            icon_path=self.icon_path,
            query_text_display=search,
            action=lambda: True,
            relevance=1.0,
            plugin_name=self.display_name,
            context_data=search,
            data={"type": "not_found"},
        )

    def _query_error_result(self, search: str, message: str) -> Result:
        return Result(
            title="Error while query",
            subtitle=message,
            icon_path=self.icon_path,
            query_text_display=search,
            action=lambda: self._copy(message),
            relevance=1.0,
            plugin_name=self.display_name,
            data={"type": "error", "message": message},
        )

    def _warning_result(self, search: str, message: str) -> Result:
        return Result(
            title="Error: zoxide",
            subtitle=message,
            icon_path=self.icon_path,
            query_text_display=search,
            action=lambda: self._copy(message),
            relevance=1.0,
            plugin_name=self.display_name,
            data={"type": "warning", "message": message},
        )

    def _navigate_result(self, search: str, path: str) -> Result:
        return Result(
            title=f"Navigate to: {directory_name(path)}",
            subtitle=f"Full path: {path}",
            tooltip=ToolTipData("Open", path),
            icon_path=self.icon_path,
            query_text_display=search,
            action=lambda: self._navigate(path),
            relevance=1.0,
            plugin_name=self.display_name,
            data={"type": "navigate", "path": path},
        )

    def _direct_path_result(self, search: str, path: str) -> Result:
        result = self._navigate_result(search, path)
        result.tooltip = ToolTipData("Add and open", path)
        result.data["type"] = "add"
        return result

    def _navigate(self, path: str) -> bool:
        """Record the visit with zoxide, then open the directory."""
        self._register_visit(path)
        return open_in_file_manager(path, self.config["file_manager"])

    def _register_visit(self, path: str):
        try:
            self._run_zoxide("add", path)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            logger.warning(f"[Zoxide] Failed to add {path}: {e}")

    def _copy(self, text: str) -> bool:
        return copy_to_clipboard(text, self.config["clipboard_commands"])

    def _update_icon_path(self, theme):
        self.icon_path = ICON_LIGHT if Theme.coerce(theme).is_light else ICON_DARK

    def _on_theme_changed(self, _old_theme, new_theme):
        self._update_icon_path(new_theme)
