"""
Heuristic registry and configuration.

This module provides the central registry for all heuristic implementations.
"""

from .base import HeuristicRegistry
from .content.file_presence import MarkupPresenceHeuristic, ScriptPresenceHeuristic
from .framework.hybrid_framework import HybridFrameworkHeuristic
from .webview.webview_usage import WebViewUsageHeuristic


# Registry of all available heuristics, in run order
HEURISTICS = [
    MarkupPresenceHeuristic,
    ScriptPresenceHeuristic,
    HybridFrameworkHeuristic,
    WebViewUsageHeuristic,
]

# Heuristic categories for organization
HEURISTIC_CATEGORIES = {
    "Bundled Content": [
        MarkupPresenceHeuristic,
        ScriptPresenceHeuristic,
    ],
    "Wrapper SDK": [
        HybridFrameworkHeuristic,
    ],
    "Embedded Browser": [
        WebViewUsageHeuristic,
    ],
}


def create_default_registry() -> HeuristicRegistry:
    """Create a registry holding every built-in heuristic in run order."""
    registry = HeuristicRegistry()
    for heuristic in HEURISTICS:
        registry.register(heuristic)
    return registry


def get_heuristic_by_name(name: str):
    """Get a heuristic class by name."""
    for heuristic in HEURISTICS:
        if heuristic().name == name:
            return heuristic
    return None


def get_heuristics_by_category(category: str):
    """Get all heuristics in a specific category."""
    return HEURISTIC_CATEGORIES.get(category, [])


def get_all_heuristic_names():
    """Get all available heuristic names."""
    return [h().name for h in HEURISTICS]
