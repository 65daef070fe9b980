"""
Base heuristic interfaces and utilities.

This module provides the foundation for all heuristic implementations.
"""

from .base_heuristic import BaseHeuristic, HeuristicResult
from .heuristic_registry import HeuristicRegistry

__all__ = [
    'BaseHeuristic',
    'HeuristicResult',
    'HeuristicRegistry'
]
