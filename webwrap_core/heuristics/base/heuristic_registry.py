"""
Heuristic registry for plugin management.

Provides a centralized registry for registering heuristics and creating
configured instances in run order.
"""

from typing import Dict, List, Type, Optional
import logging

from .base_heuristic import BaseHeuristic
from webwrap_core.logic.models import AnalysisConfig, HeuristicConfig


class HeuristicRegistry:
    """
    Registry for managing heuristic plugins.

    Registration order is run order, which is also the order traits appear in
    each report entry.
    """

    def __init__(self):
        self._heuristics: Dict[str, Type[BaseHeuristic]] = {}
        self.logger = logging.getLogger("heuristic.registry")

    def register(self, heuristic_class: Type[BaseHeuristic]) -> None:
        """
        Register a heuristic class.

        Args:
            heuristic_class: The heuristic class to register
        """
        if not isinstance(heuristic_class, type) or not issubclass(heuristic_class, BaseHeuristic):
            raise ValueError(f"Class {heuristic_class} must inherit from BaseHeuristic")

        name = heuristic_class().name

        if name in self._heuristics:
            self.logger.warning(f"Heuristic {name} is already registered, overwriting")

        self._heuristics[name] = heuristic_class
        self.logger.debug(f"Registered heuristic: {name}")

    def get_heuristic_class(self, name: str) -> Optional[Type[BaseHeuristic]]:
        return self._heuristics.get(name)

    def get_available_heuristics(self) -> List[str]:
        """Get registered heuristic names in run order."""
        return list(self._heuristics.keys())

    def create_instance(self, name: str, config: Optional[HeuristicConfig] = None) -> Optional[BaseHeuristic]:
        heuristic_class = self.get_heuristic_class(name)
        if heuristic_class is None:
            return None
        return heuristic_class(config)

    def create_instances(self, config: AnalysisConfig) -> List[BaseHeuristic]:
        """
        Create one configured instance of every registered heuristic.

        Args:
            config: Analysis configuration holding per-heuristic settings

        Returns:
            Heuristic instances in run order
        """
        instances = []

        for name in self._heuristics:
            instance = self.create_instance(name, config.get_heuristic_config(name))
            if instance is not None:
                instances.append(instance)
            else:
                self.logger.error(f"Failed to create instance for heuristic: {name}")

        return instances

    def clear(self) -> None:
        """Clear all registered heuristics."""
        self._heuristics.clear()
