import importlib
import os
from typing import Dict, List, Optional, Tuple, Type

from loguru import logger

from zjump.config.data import load_config, merge_config
from zjump.launcher.api import PluginAPI
from zjump.launcher.plugin_base import PluginBase
from zjump.launcher.result import Result

PLUGINS_PACKAGE = "zjump.launcher.plugins"


class PluginManager:
    """
    Manages launcher plugins with lazy loading support.
    """

    def __init__(self, api: Optional[PluginAPI] = None, config: Optional[dict] = None):
        self.api = api
        self.config = merge_config(config) if config is not None else load_config()

        self.plugins: Dict[str, PluginBase] = {}  # Actually loaded plugin instances
        self.plugin_classes: Dict[str, Type[PluginBase]] = {}  # Available plugin classes
        self.active_plugins: List[str] = []  # List of loaded plugin names
        self.trigger_map: Dict[str, str] = {}  # Maps triggers to plugin names

        # Discover classes only
        self._load_builtin_plugins()

        # Build trigger mapping without activating plugins
        self._build_trigger_map()

    def _load_builtin_plugins(self):
        """Load built-in plugins from the plugins directory."""
        plugins_dir = os.path.join(os.path.dirname(__file__), "plugins")

        if not os.path.exists(plugins_dir):
            return

        for filename in sorted(os.listdir(plugins_dir)):
            if filename.endswith(".py") and not filename.startswith("_"):
                self._load_plugin_module(filename[:-3])

    def _load_plugin_module(self, plugin_name: str):
        """Import a plugin module and register the first PluginBase subclass in it."""
        try:
            module = importlib.import_module(f"{PLUGINS_PACKAGE}.{plugin_name}")
        except Exception as e:
            logger.warning(f"[PluginManager] Failed to load plugin {plugin_name}: {e}")
            return

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if (
                isinstance(attr, type)
                and issubclass(attr, PluginBase)
                and attr is not PluginBase
                and attr.__module__ == module.__name__
            ):
                self.plugin_classes[plugin_name] = attr
                break

    def _plugin_config(self, plugin_name: str) -> dict:
        return self.config.get("plugins", {}).get(plugin_name, {})

    def _build_trigger_map(self):
        """Build a mapping of triggers to plugin names without loading plugins."""
        for plugin_name, plugin_class in self.plugin_classes.items():
            if self._plugin_config(plugin_name).get("enabled", True) is False:
                continue
            for trigger in self._get_class_triggers(plugin_name, plugin_class):
                self.trigger_map[trigger.lower()] = plugin_name

    def _get_class_triggers(
        self, plugin_name: str, plugin_class: Type[PluginBase]
    ) -> List[str]:
        """Get triggers for a plugin class, preferring the configured ones."""
        configured = self._plugin_config(plugin_name).get("triggers")
        if configured is not None:
            return list(configured)
        return list(plugin_class.TRIGGERS)

    def _get_api(self) -> PluginAPI:
        if self.api is None:
            self.api = PluginAPI.from_desktop()
        return self.api

    def activate_plugin(self, plugin_name: str) -> bool:
        """Activate a plugin by name (lazy loading)."""
        if plugin_name in self.plugins:
            # Already activated
            return True

        if plugin_name not in self.plugin_classes:
            return False

        try:
            plugin_class = self.plugin_classes[plugin_name]
            plugin_instance = plugin_class(config=self.config)
            plugin_instance.initialize(self._get_api())
            plugin_instance.set_config(self._plugin_config(plugin_name))
        except Exception as e:
            logger.warning(f"[PluginManager] Failed to activate plugin {plugin_name}: {e}")
            return False

        self.plugins[plugin_name] = plugin_instance
        self.active_plugins.append(plugin_name)

        logger.info(f"[PluginManager] Lazy loaded plugin: {plugin_name}")
        return True

    def deactivate_plugin(self, plugin_name: str) -> bool:
        """Deactivate a plugin by name."""
        if plugin_name not in self.plugins:
            return False

        plugin = self.plugins.pop(plugin_name)
        if plugin_name in self.active_plugins:
            self.active_plugins.remove(plugin_name)

        try:
            plugin.cleanup()
        except Exception as e:
            logger.warning(f"[PluginManager] Failed to clean up plugin {plugin_name}: {e}")

        return True

    def cleanup(self):
        """Deactivate every active plugin."""
        for plugin_name in list(self.active_plugins):
            self.deactivate_plugin(plugin_name)

    def get_active_plugins(self) -> List[PluginBase]:
        """Get list of active plugin instances."""
        return [
            self.plugins[name] for name in self.active_plugins if name in self.plugins
        ]

    def get_plugin_for_trigger(self, trigger: str) -> Optional[PluginBase]:
        """Get plugin instance for a trigger, loading it if necessary."""
        plugin_name = self.trigger_map.get(trigger.lower())
        if not plugin_name:
            return None

        if plugin_name not in self.plugins:
            if not self.activate_plugin(plugin_name):
                return None

        return self.plugins.get(plugin_name)

    def find_trigger_plugin(self, query: str) -> Tuple[Optional[str], str]:
        """Find plugin and trigger for a query without loading the plugin."""
        query_lower = query.lower().strip()

        # Longest first so more specific triggers win
        sorted_triggers = sorted(
            self.trigger_map.items(), key=lambda x: len(x[0]), reverse=True
        )

        for trigger, plugin_name in sorted_triggers:
            if query_lower == trigger:
                return plugin_name, trigger

            if query_lower.startswith(trigger + " "):
                return plugin_name, trigger

        return None, ""

    def query(self, query_string: str) -> List[Result]:
        """
        Route a query to the plugin owning its trigger, or to every active
        plugin willing to handle it.
        """
        plugin_name, trigger = self.find_trigger_plugin(query_string)
        if plugin_name:
            plugin = self.get_plugin_for_trigger(trigger)
            if plugin is None or not plugin.enabled:
                return []
            return plugin.query_triggered(query_string, trigger)

        results: List[Result] = []
        for plugin in self.get_active_plugins():
            if plugin.handles_query(query_string):
                results.extend(plugin.query(query_string))

        return sorted(results, key=lambda r: r.relevance, reverse=True)

    def get_plugin_names(self) -> List[str]:
        """Get list of available plugin names."""
        return list(self.plugin_classes.keys())

    def get_active_plugin_names(self) -> List[str]:
        """Get list of active plugin names."""
        return self.active_plugins.copy()
