"""
Base class for launcher plugins.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from zjump.config.data import load_config, merge_config

from .result import Result


class PluginBase(ABC):
    """
    Abstract base class for launcher plugins.
    All plugins must inherit from this class.
    """

    # Default trigger keywords, readable without instantiating the plugin
    TRIGGERS: List[str] = []

    def __init__(self, config: Optional[dict] = None):
        self.config = merge_config(config) if config is not None else load_config()
        self.name = self.__class__.__name__.lower()
        self.display_name = self.__class__.__name__
        self.description = "A launcher plugin"
        self.version = "1.0.0"
        self.enabled = True
        self._triggers = list(self.TRIGGERS)

    @abstractmethod
    def initialize(self, api=None):
        """
        Initialize the plugin.
        Called once when the plugin is activated.

        Args:
            api: The PluginAPI provided by the launcher
        """
        pass

    @abstractmethod
    def cleanup(self):
        """
        Cleanup the plugin.
        Called when the plugin is deactivated.
        """
        pass

    @abstractmethod
    def query(self, query_string: str) -> List[Result]:
        """
        Process a search query and return results.

        Args:
            query_string: The search query from the user

        Returns:
            List of Result objects
        """
        pass

    def context_menu(self, result: Result) -> List[Result]:
        """
        Secondary actions shown next to a selected result.

        Args:
            result: The selected result

        Returns:
            List of Result objects (none by default)
        """
        return []

    def get_triggers(self) -> List[str]:
        """
        Get list of trigger keywords for this plugin.
        If the query starts with any of these, this plugin gets priority.

        Returns:
            List of trigger strings (e.g., ["z", "zoxide"])
        """
        return self._triggers

    def set_triggers(self, triggers: List[str]):
        """
        Set the trigger keywords for this plugin.

        Args:
            triggers: List of trigger keywords
        """
        self._triggers = list(triggers)

    def handles_query(self, query_string: str) -> bool:
        """
        Check if this plugin should handle the given query.

        Args:
            query_string: The search query

        Returns:
            True if this plugin should process the query
        """
        if not self.enabled:
            return False

        triggers = self.get_triggers()
        if triggers:
            query_lower = query_string.lower().strip()
            return any(query_lower.startswith(trigger.lower()) for trigger in triggers)

        # Default: handle all queries
        return True

    def query_triggered(self, query_string: str, trigger: str) -> List[Result]:
        """
        Process a triggered query.
        Default implementation removes trigger and calls query().

        Args:
            query_string: The full query string including trigger
            trigger: The trigger that activated this plugin

        Returns:
            List of Result objects
        """
        remaining_query = query_string.lstrip()[len(trigger):].strip()
        return self.query(remaining_query)

    def get_config(self) -> dict:
        """
        Get plugin configuration.

        Returns:
            Dictionary of configuration options
        """
        return {
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "version": self.version,
            "enabled": self.enabled,
            "triggers": self.get_triggers(),
        }

    def set_config(self, config: dict):
        """
        Set plugin configuration.

        Args:
            config: Dictionary of configuration options
        """
        self.enabled = config.get("enabled", self.enabled)
        if "triggers" in config:
            self.set_triggers(config["triggers"])

    def __str__(self):
        return f"Plugin({self.name})"

    def __repr__(self):
        return self.__str__()
