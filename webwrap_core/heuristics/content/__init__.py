"""
Heuristics over the files bundled in a package.
"""
from .file_presence import FilePresenceHeuristic, MarkupPresenceHeuristic, ScriptPresenceHeuristic

__all__ = ['FilePresenceHeuristic', 'MarkupPresenceHeuristic', 'ScriptPresenceHeuristic']
