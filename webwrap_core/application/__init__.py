"""
Application layer for the webwrap-core scanner.

This module contains the use cases and application services.
"""

from .scan_packages import ScanPackagesUseCase

__all__ = [
    'ScanPackagesUseCase'
]
