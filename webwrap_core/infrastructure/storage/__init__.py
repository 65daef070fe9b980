"""
Storage implementations for the totals report.
"""

from .result_storage import ResultStorage, ReportStorageError

__all__ = ['ResultStorage', 'ReportStorageError']
