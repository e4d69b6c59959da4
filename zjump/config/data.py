import copy
import os
import sys

from loguru import logger

from zjump.utils.functions import read_json_file

APP_NAME = "zjump"

CONFIG_DIR = os.path.expanduser(f"~/.config/{APP_NAME}")
CONFIG_FILE = os.environ.get("ZJUMP_CONFIG", os.path.join(CONFIG_DIR, "config.json"))


def default_zoxide_binary(platform: str = sys.platform) -> str:
    return "zoxide.exe" if platform.startswith("win") else "zoxide"


def default_file_manager(platform: str = sys.platform) -> str:
    if platform.startswith("win"):
        return "explorer.exe"
    if platform == "darwin":
        return "open"
    return "xdg-open"


def default_clipboard_commands(platform: str = sys.platform):
    if platform.startswith("win"):
        return [["clip"]]
    if platform == "darwin":
        return [["pbcopy"]]
    # wl-copy for Wayland, xclip for X11
    return [["wl-copy"], ["xclip", "-selection", "clipboard"]]


DEFAULT_CONFIG = {
    "zoxide_binary": default_zoxide_binary(),
    "zoxide_path": None,
    "query_timeout": None,
    "file_manager": default_file_manager(),
    "clipboard_commands": default_clipboard_commands(),
    "plugins": {},
}


def load_config(path: str = None) -> dict:
    """
    Load the configuration from config.json, filling in defaults.

    Unknown keys are ignored. The "plugins" section is merged per plugin so
    a user file only needs to name the settings it changes.
    """
    if path is None:
        path = CONFIG_FILE

    config = copy.deepcopy(DEFAULT_CONFIG)

    if not os.path.exists(path):
        return config

    try:
        user_config = read_json_file(path)
    except (OSError, ValueError) as e:
        logger.error(f"[Config] Error loading config {path}: {e}")
        return config

    if user_config is None:
        logger.error(f"[Config] Could not read {path}, using defaults")
        return config

    if not isinstance(user_config, dict):
        logger.warning(f"[Config] Ignoring {path}: expected a JSON object")
        return config

    return merge_config(user_config, base=config)


def merge_config(overrides: dict, base: dict = None) -> dict:
    """Merge known keys of overrides over base (a copy of the defaults by default)."""
    config = base if base is not None else copy.deepcopy(DEFAULT_CONFIG)

    for key, value in overrides.items():
        if key not in DEFAULT_CONFIG:
            continue
        if key == "plugins":
            if not isinstance(value, dict):
                logger.warning("[Config] Ignoring 'plugins': expected a JSON object")
                continue
            for plugin_name, plugin_config in value.items():
                if isinstance(plugin_config, dict):
                    config["plugins"].setdefault(plugin_name, {}).update(plugin_config)
        else:
            config[key] = value

    return config
