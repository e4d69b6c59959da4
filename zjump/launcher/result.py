"""
Result class representing a search result from plugins.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class ToolTipData:
    title: str
    text: str


@dataclass
class Result:
    """
    Represents a search result that can be displayed and activated.
    """

    # Display information
    title: str
    subtitle: str = ""
    tooltip: Optional[ToolTipData] = None
    icon_path: Optional[str] = None
    query_text_display: str = ""

    # Behavior
    action: Optional[Callable[[], bool]] = None
    relevance: float = 0.0

    # Metadata
    plugin_name: str = ""
    context_data: Any = None
    data: Optional[dict] = None

    def activate(self):
        """Activate this result (execute its action)."""
        if self.action:
            return self.action()
        else:
            raise NotImplementedError("No action defined for this result")

    def __post_init__(self):
        """Post-initialization processing."""
        # Ensure relevance is within valid range
        self.relevance = max(0.0, min(1.0, self.relevance))

        if self.data is None:
            self.data = {}

    def __str__(self):
        return f"Result(title='{self.title}', relevance={self.relevance})"

    def __repr__(self):
        return self.__str__()
