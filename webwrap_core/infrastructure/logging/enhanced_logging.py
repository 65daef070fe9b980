"""
Enhanced logging system for webwrap-core.

Provides logging to both console and file, with the log file saved
next to the totals report for troubleshooting purposes.
"""

import logging
import os
import platform
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional, List, Dict, Any
import atexit


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class EnhancedLogger:
    """
    Enhanced logging system that logs to both console and file.

    Console output goes to stderr so stdout stays clean for the JSON summary.
    """

    def __init__(self):
        self.file_handlers: List[logging.FileHandler] = []
        self.original_handlers: List[logging.Handler] = []
        self.original_level: Optional[int] = None
        self.log_file_path: Optional[Path] = None

        atexit.register(self.cleanup)

    def setup_logging(self, output_directory: str, log_filename: str = "scan.log", verbose: bool = False) -> str:
        """
        Set up enhanced logging to both console and file.

        Args:
            output_directory: Directory where log file should be saved
            log_filename: Name of the log file (default: scan.log)
            verbose: Enable verbose console logging (default: False)

        Returns:
            Path to the created log file
        """
        # A second setup must not stack on top of the first
        self.cleanup()

        output_dir = Path(output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file_path = output_dir / f"{timestamp}_{log_filename}"

        root_logger = logging.getLogger()

        # Store original handlers for cleanup
        self.original_handlers = root_logger.handlers[:]
        self.original_level = root_logger.level
        root_logger.handlers.clear()
        root_logger.setLevel(logging.DEBUG)

        formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        # In non-verbose mode, only show WARNING and above to reduce noise
        console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
        root_logger.addHandler(console_handler)

        file_handler = logging.FileHandler(self.log_file_path, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        self.file_handlers.append(file_handler)

        logger = logging.getLogger("enhanced.logging")
        logger.info("Enhanced logging initialized")
        logger.info(f"Log file: {self.log_file_path}")
        logger.info(f"Console logging level: {'INFO' if verbose else 'WARNING'}")

        return str(self.log_file_path)

    def log_system_info(self):
        """Log system information for troubleshooting."""
        logger = logging.getLogger("system.info")

        logger.info("=== System Information ===")
        logger.info(f"Platform: {platform.platform()}")
        logger.info(f"Python version: {platform.python_version()}")
        logger.info(f"Working directory: {os.getcwd()}")
        logger.info(f"Command line: {' '.join(sys.argv)}")
        logger.info(f"Scan start time: {datetime.now().isoformat()}")
        logger.info("=== System Info Complete ===")

    def log_batch_summary(self,
                          packages_directory: str,
                          package_count: int,
                          degraded_count: int,
                          report_path: str,
                          execution_time: float):
        """Log batch execution summary."""
        logger = logging.getLogger("scan.summary")

        logger.info("=== Scan Execution Summary ===")
        logger.info(f"Packages directory: {packages_directory}")
        logger.info(f"Packages scanned: {package_count}")
        logger.info(f"Packages with materialization problems: {degraded_count}")
        logger.info(f"Report: {report_path}")
        logger.info(f"Total execution time: {execution_time:.2f} seconds")
        logger.info("=== Summary Complete ===")

    def log_error_details(self, error: Exception, context: str = ""):
        """Log detailed error information for troubleshooting."""
        logger = logging.getLogger("error.details")

        logger.error("=== Error Details ===")
        if context:
            logger.error(f"Context: {context}")
        logger.error(f"Error type: {type(error).__name__}")
        logger.error(f"Error message: {error}")
        logger.error("Full stack trace:", exc_info=error)
        logger.error("=== Error Details Complete ===")

    def create_scan_log_entry(self, stage: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Create a structured log entry for scan stages."""
        logger = logging.getLogger(f"scan.{stage}")

        log_message = f"[{stage.upper()}] {message}"
        if details:
            log_message += f" | Details: {details}"

        logger.info(log_message)

    def cleanup(self):
        """Clean up file handlers and restore original logging."""
        root_logger = logging.getLogger()

        for handler in self.file_handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self.file_handlers.clear()

        # original_level is only set while our handlers are installed
        if self.original_level is not None:
            root_logger.handlers.clear()
            for handler in self.original_handlers:
                root_logger.addHandler(handler)
            self.original_handlers.clear()
            root_logger.setLevel(self.original_level)
            self.original_level = None

    def get_log_file_path(self) -> Optional[str]:
        return str(self.log_file_path) if self.log_file_path else None

    def finalize_logging(self, success: bool = True):
        """Finalize logging with completion status."""
        logger = logging.getLogger("enhanced.logging")

        if success:
            logger.info("Scan completed successfully")
        else:
            logger.error("Scan completed with errors")

        if self.log_file_path and self.log_file_path.exists():
            logger.info(f"Log saved: {self.log_file_path} ({self.log_file_path.stat().st_size:,} bytes)")

        for handler in logging.getLogger().handlers:
            handler.flush()


# Global instance for use throughout the application
enhanced_logger = EnhancedLogger()
