"""
Heuristics that recognise hybrid wrapper SDKs.
"""
from .hybrid_framework import HybridFrameworkHeuristic

__all__ = ['HybridFrameworkHeuristic']
