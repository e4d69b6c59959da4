import gi

gi.require_version("Gtk", "3.0")

from fabric.core.service import Property, Service, Signal
from fabric.utils import exec_shell_command
from gi.repository import Gtk
from loguru import logger

from zjump.launcher.api import Theme


class ThemeService(Service):
    """
    Tracks whether the desktop uses a light or dark theme.

    Reads the GTK settings and the GNOME color-scheme, and emits
    ``theme-changed(old, new)`` with Theme values when the classification
    changes.
    """

    @Signal
    def theme_changed(self, old_theme: str, new_theme: str) -> None: ...

    @Property(str, flags="readable")
    def theme(self) -> str:
        return self._theme.value

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._settings = Gtk.Settings.get_default()
        self._theme = self._read_theme()

        if self._settings is not None:
            self._settings.connect("notify::gtk-theme-name", self._on_settings_changed)
            self._settings.connect(
                "notify::gtk-application-prefer-dark-theme", self._on_settings_changed
            )
        else:
            logger.warning("[Theme] No default GTK settings, theme changes not tracked")

        logger.info(f"[Theme] Current theme: {self._theme.value}")

    def _prefers_dark_color_scheme(self) -> bool:
        result = exec_shell_command(
            "gsettings get org.gnome.desktop.interface color-scheme"
        )
        if not result:
            return False
        return result.strip().replace("'", "") == "prefer-dark"

    def _read_theme(self) -> Theme:
        theme_name = ""
        prefer_dark = False

        if self._settings is not None:
            theme_name = self._settings.get_property("gtk-theme-name") or ""
            prefer_dark = bool(
                self._settings.get_property("gtk-application-prefer-dark-theme")
            )

        if not prefer_dark:
            prefer_dark = self._prefers_dark_color_scheme()

        return Theme.from_settings(theme_name, prefer_dark)

    def refresh(self):
        """Re-read the desktop theme and emit theme-changed if it differs."""
        new_theme = self._read_theme()
        if new_theme == self._theme:
            return

        old_theme = self._theme
        self._theme = new_theme
        logger.info(f"[Theme] Theme changed: {old_theme.value} -> {new_theme.value}")
        self.theme_changed(old_theme.value, new_theme.value)

    def _on_settings_changed(self, *_):
        self.refresh()
