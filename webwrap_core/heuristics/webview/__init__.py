"""
Heuristics over the disassembled code of a package.
"""
from .webview_usage import WebViewUsageHeuristic

__all__ = ['WebViewUsageHeuristic']
