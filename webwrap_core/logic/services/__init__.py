"""
Domain services for the webwrap-core scanner.

This module contains the core business logic services.
"""

from .analysis_service import AnalysisService

__all__ = [
    'AnalysisService'
]
