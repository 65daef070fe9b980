"""
Infrastructure layer for the webwrap-core scanner.

This module contains technical concerns like artifact materialization,
storage, logging and report rendering.
"""

from .materializer import ArtifactMaterializer
from .storage import ResultStorage, ReportStorageError
from .logging import enhanced_logger
from .reporting import ReportViewer

__all__ = [
    'ArtifactMaterializer',
    'ResultStorage',
    'ReportStorageError',
    'enhanced_logger',
    'ReportViewer'
]
