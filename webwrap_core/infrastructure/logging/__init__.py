"""
Enhanced logging infrastructure for webwrap-core.

Provides logging to both console and file for troubleshooting.
"""

from .enhanced_logging import EnhancedLogger, enhanced_logger

__all__ = [
    'EnhancedLogger',
    'enhanced_logger'
]
