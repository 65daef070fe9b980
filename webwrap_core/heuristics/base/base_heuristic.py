"""
Base heuristic interface.

Defines the contract that all signature scanners must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Sequence
import time
import logging

from webwrap_core.logic.models import ArtifactTree, HeuristicConfig, Trait


@dataclass
class HeuristicResult:
    """Result from running a heuristic."""
    name: str
    traits: List[Trait]
    execution_time: float
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class BaseHeuristic(ABC):
    """
    Base class for all signature scanners.

    A heuristic looks at one artifact tree and reports zero or more traits.
    The run() wrapper guarantees that a heuristic never fails the package:
    any error, including missing input, degrades to zero traits.
    """

    def __init__(self, config: Optional[HeuristicConfig] = None):
        """Initialize the heuristic with configuration."""
        self.config = config or HeuristicConfig(name=self.name)
        self.logger = logging.getLogger(f"heuristic.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of this heuristic."""
        pass

    @property
    @abstractmethod
    def category(self) -> str:
        """Get the category of this heuristic (e.g., 'Bundled Content')."""
        pass

    @property
    def description(self) -> str:
        """Get a description of what this heuristic detects."""
        return f"Heuristic: {self.name}"

    @abstractmethod
    def analyze(self, tree: ArtifactTree) -> List[Trait]:
        """
        Analyze the artifact tree and return traits.

        This is the main method that must be implemented by each heuristic.

        Args:
            tree: Materialized contents of one package

        Returns:
            List of traits found by this heuristic
        """
        pass

    def run(self, tree: ArtifactTree) -> HeuristicResult:
        """
        Run the heuristic with timing and error handling.

        Args:
            tree: Materialized contents of one package

        Returns:
            HeuristicResult containing traits and metadata
        """
        start_time = time.time()
        traits: List[Trait] = []
        error = None

        if not self.config.enabled:
            self.logger.info(f"Heuristic {self.name} is disabled, skipping")
            return HeuristicResult(name=self.name, traits=[], execution_time=0.0)

        try:
            self.logger.info(f"Starting analysis of {tree.package_name} with {self.name}")
            traits = list(self.analyze(tree))
            self.logger.info(f"Completed analysis with {self.name}, found {len(traits)} traits")
        except Exception as e:
            error = f"Error in heuristic {self.name}: {e}"
            self.logger.error(error, exc_info=True)
            traits = []

        return HeuristicResult(
            name=self.name,
            traits=traits,
            execution_time=time.time() - start_time,
            error=error,
            metadata={
                'category': self.category,
                'description': self.description,
                'config': self.config.to_dict()
            }
        )

    def create_trait(self, amount: float, reason: str, files: Sequence[str]) -> Trait:
        """Helper method to create a trait for this heuristic."""
        return Trait(amount=amount, reason=reason, files=tuple(files))

    def get_amount(self, default: float) -> float:
        """Get the configured fixed trait weight."""
        return float(self.config.get_parameter('amount', default))
