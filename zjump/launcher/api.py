"""
Capabilities the launcher hands to plugins on initialization.
"""

from enum import Enum
from typing import Any, Callable


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"
    HIGH_CONTRAST_WHITE = "high-contrast-white"
    HIGH_CONTRAST_BLACK = "high-contrast-black"

    @property
    def is_light(self) -> bool:
        return self in (Theme.LIGHT, Theme.HIGH_CONTRAST_WHITE)

    @classmethod
    def coerce(cls, value: Any) -> "Theme":
        """Turn a Theme or its string value into a Theme, defaulting to DARK."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.DARK

    @classmethod
    def from_settings(cls, theme_name: str, prefer_dark: bool = False) -> "Theme":
        """
        Classify a GTK theme.

        Args:
            theme_name: Value of gtk-theme-name (e.g. "Adwaita-dark")
            prefer_dark: Whether a dark variant is preferred

        Returns:
            The matching Theme
        """
        name = (theme_name or "").lower()
        compact = name.replace("-", "").replace("_", "").replace(" ", "")

        if "highcontrastinverse" in compact:
            return cls.HIGH_CONTRAST_BLACK
        if "highcontrast" in compact:
            return cls.HIGH_CONTRAST_WHITE
        if prefer_dark or name.endswith("-dark") or name.endswith(":dark"):
            return cls.DARK
        return cls.LIGHT


class PluginAPI:
    """
    Narrow interface plugins use to talk to the launcher.

    Wraps a theme source exposing a readable ``theme`` value and a
    ``theme-changed(old, new)`` signal.
    """

    def __init__(self, theme_service):
        self._theme_service = theme_service

    @classmethod
    def from_desktop(cls) -> "PluginAPI":
        from zjump.services.theme import ThemeService

        return cls(ThemeService())

    def get_current_theme(self) -> Theme:
        return Theme.coerce(self._theme_service.theme)

    def connect_theme_changed(self, callback: Callable[[Theme, Theme], Any]) -> int:
        """Subscribe to theme changes. Returns a handle for disconnecting."""
        return self._theme_service.connect(
            "theme-changed",
            lambda _service, old, new: callback(Theme.coerce(old), Theme.coerce(new)),
        )

    def disconnect_theme_changed(self, handler_id: int):
        self._theme_service.disconnect(handler_id)
