"""
Rendering of the totals report.
"""

from .report_viewer import ReportViewer, make_sorter

__all__ = ['ReportViewer', 'make_sorter']
