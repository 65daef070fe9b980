"""
Domain models for the webwrap-core scanner.

This module contains all the core data structures used throughout the system.
These models represent the business domain and are independent of any external concerns.
"""

from .trait import Trait, ScanResult
from .report import Report, ReportEntry, round_total
from .artifact_tree import ArtifactTree, recursive_dir_list
from .configuration import (
    AnalysisConfig, HeuristicConfig, PathsConfig, ToolsConfig, DEFAULT_HEURISTIC_ORDER
)

__all__ = [
    'Trait',
    'ScanResult',
    'Report',
    'ReportEntry',
    'round_total',
    'ArtifactTree',
    'recursive_dir_list',
    'AnalysisConfig',
    'HeuristicConfig',
    'PathsConfig',
    'ToolsConfig',
    'DEFAULT_HEURISTIC_ORDER'
]
