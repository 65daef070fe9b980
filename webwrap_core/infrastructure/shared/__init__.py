"""
Shared infrastructure utilities.
"""

from .error_handling import (
    ErrorSeverity,
    ErrorContext,
    ErrorInfo,
    ErrorHandlingService,
    get_error_service,
    safe_execute,
    log_and_continue
)
from .text_search import files_containing

__all__ = [
    'ErrorSeverity',
    'ErrorContext',
    'ErrorInfo',
    'ErrorHandlingService',
    'get_error_service',
    'safe_execute',
    'log_and_continue',
    'files_containing'
]
