"""
Main use case for scanning a directory of packages.

Each package is materialized and scanned to completion before the next one
starts, so external tools never contend for the same work directories.
"""

import sys
import time
from pathlib import Path
from typing import Dict, Any, List, Optional
import logging

from webwrap_core.logic.models import AnalysisConfig, Report, ReportEntry
from webwrap_core.logic.services import AnalysisService
from webwrap_core.infrastructure.materializer import ArtifactMaterializer
from webwrap_core.infrastructure.storage import ResultStorage
from webwrap_core.infrastructure.reporting import ReportViewer
from webwrap_core.infrastructure.logging import enhanced_logger
from webwrap_core.infrastructure.shared import safe_execute


def progress_percent(done: int, count: int) -> int:
    """Percentage of the batch processed so far, halves rounded up."""
    return int(done * 100.0 / count + 0.5)


class ScanPackagesUseCase:
    """
    Use case for scoring every package in a directory.

    Supports two modes:
    1. Scan a packages directory and write the totals report
    2. Render an existing totals report as an HTML page
    """

    def __init__(self, config_path: str = None, verbose: bool = False,
                 config: Optional[AnalysisConfig] = None,
                 materializer: Optional[ArtifactMaterializer] = None,
                 setup_file_logging: bool = True):
        """
        Initialize the scan use case.

        Args:
            config_path: Path to configuration file (optional)
            verbose: Enable verbose logging (optional)
            config: Ready-made configuration, takes precedence over config_path
            materializer: Artifact materializer (defaults to one using the configured tools)
            setup_file_logging: Write a log file next to the report
        """
        self.logger = logging.getLogger("scan.packages")
        self.progress_logger = logging.getLogger("progress")
        self.verbose = verbose
        self.setup_file_logging = setup_file_logging

        if config is not None:
            self.config = config
        elif config_path and Path(config_path).exists():
            self.config = AnalysisConfig.from_file(config_path)
        else:
            self.config = AnalysisConfig()

        self.analysis_service = AnalysisService(self.config)
        self.materializer = materializer or ArtifactMaterializer(
            self.config.paths.work_dir, self.config.tools
        )
        self.storage = ResultStorage()
        self.viewer = ReportViewer()
        self.degraded_packages: List[str] = []

    def list_packages(self, package_directory: str) -> List[Path]:
        """List package files directly inside a directory, in name order."""
        extension = self.config.paths.package_extension
        directory = Path(package_directory)
        return [
            directory / entry.name
            for entry in sorted(directory.iterdir(), key=lambda p: p.name)
            if entry.is_file() and entry.name.endswith(extension)
        ]

    def run_batch(self, package_directory: str, packages: Optional[List[Path]] = None,
                  report_path: Optional[str] = None) -> Report:
        """
        Scan packages one at a time and write the totals report.

        Args:
            package_directory: Directory holding the packages
            packages: Explicit package list in processing order (defaults to the directory listing)
            report_path: Where to write the report (defaults to the configured path)

        Returns:
            Report with one entry per package, in processing order

        Raises:
            ReportStorageError: If the report cannot be written
        """
        report_path = report_path or self.config.paths.report_path
        if packages is None:
            packages = self.list_packages(package_directory)

        report = Report()
        self.degraded_packages = []

        for index, package_path in enumerate(packages, start=1):
            self.progress_logger.warning(f"Scanning {progress_percent(index, len(packages)):.2f}%")
            entry = self.scan_package(Path(package_path))
            report.add(entry)

        self.logger.info("All packages scanned, writing totals")
        for entry in report:
            for line in entry.get_summary_lines():
                self.logger.info(line)

        self.storage.save_report(report, report_path)
        self.progress_logger.warning(f"Report with {len(report)} entries saved to: {report_path}")

        return report

    def scan_package(self, package_path: Path) -> ReportEntry:
        """
        Materialize and scan a single package.

        Never raises: a package that crashes the scan still yields an entry.
        """
        entry = safe_execute(
            lambda: self._scan_package(package_path),
            default_value=None,
            operation="scan_package",
            component="scan.packages",
            package=package_path.name
        )

        if entry is None:
            self.degraded_packages.append(package_path.name)
            entry = ReportEntry(name=package_path.name)

        return entry

    def _scan_package(self, package_path: Path) -> ReportEntry:
        materialized = self.materializer.materialize(package_path)
        if materialized.has_errors():
            self.degraded_packages.append(package_path.name)

        self.logger.info(f"Guessing html5-ness in {materialized.tree.root}")
        return self.analysis_service.aggregate(package_path.name, materialized.tree)

    def execute(self, package_directory: str, report_path: Optional[str] = None) -> Report:
        """
        Execute a full batch with file logging and run summary.

        Args:
            package_directory: Directory holding the packages
            report_path: Where to write the report (optional)

        Returns:
            The written report
        """
        start_time = time.time()
        report_path = report_path or self.config.paths.report_path

        if self.setup_file_logging:
            log_directory = self.config.paths.log_directory or str(Path(report_path).parent)
            enhanced_logger.setup_logging(log_directory, "scan.log", verbose=self.verbose)
            enhanced_logger.log_system_info()

        try:
            enhanced_logger.create_scan_log_entry("start", "Scan initiated", {
                "packages_directory": package_directory,
                "config_file": getattr(self.config, '_source_file', 'default'),
                "report_path": report_path
            })

            report = self.run_batch(package_directory, report_path=report_path)

            enhanced_logger.log_batch_summary(
                packages_directory=package_directory,
                package_count=len(report),
                degraded_count=len(set(self.degraded_packages)),
                report_path=report_path,
                execution_time=time.time() - start_time
            )
            enhanced_logger.finalize_logging(success=True)
            return report

        except Exception as e:
            enhanced_logger.log_error_details(e, f"Scan failed after {time.time() - start_time:.2f} seconds")
            enhanced_logger.finalize_logging(success=False)
            raise

    def render_report(self, report_path: str, html_path: Optional[str] = None) -> Optional[str]:
        """Render a totals report to HTML next to it unless a path is given."""
        html_path = html_path or str(Path(report_path).with_suffix('.html'))
        return self.viewer.render_file(report_path, html_path)

    def execute_from_command_line(self, args: list = None) -> Dict[str, Any]:
        """
        Execute from command line with error handling for JSON output.

        Supports:
        1. (no args): scan the configured packages directory
        2. <packages_directory> [--output <report>]: scan a directory
        3. --view <report> [--html <page>]: render a report

        Args:
            args: Command line arguments (defaults to sys.argv)

        Returns:
            Run summary as dictionary for JSON serialization
        """
        if args is None:
            args = sys.argv[1:]

        try:
            if args and args[0] == "--view":
                if len(args) < 2:
                    return {"error": self._get_usage_message()}
                html_path = self._option_value(args, "--html")
                page = self.render_report(args[1], html_path)
                if page is None:
                    return {"error": f"Report '{args[1]}' could not be rendered"}
                return {"report": args[1], "page": page}

            report_path = self._option_value(args, "--output") or self.config.paths.report_path
            positional = [a for i, a in enumerate(args)
                          if not a.startswith("--") and (i == 0 or args[i - 1] != "--output")]

            if len(positional) > 1:
                return {"error": self._get_usage_message()}

            package_directory = positional[0] if positional else self.config.paths.packages_dir
            if not Path(package_directory).is_dir():
                return {"error": f"Packages directory '{package_directory}' not found"}

            report = self.execute(package_directory, report_path)

            return {
                "report": report_path,
                "packages_scanned": len(report),
                "degraded_packages": sorted(set(self.degraded_packages)),
                "totals": {entry.name: entry.formatted_total for entry in report}
            }

        except Exception as e:
            self.logger.error(f"Command line execution failed: {e}", exc_info=True)
            return {
                "error": str(e),
                "error_type": type(e).__name__
            }

    @staticmethod
    def _option_value(args: list, option: str) -> Optional[str]:
        if option in args:
            i = args.index(option)
            if i + 1 < len(args):
                return args[i + 1]
        return None

    def _get_usage_message(self) -> str:
        """Get usage message for command line interface."""
        return """Usage:
        webwrap-core [--verbose|-v] [--config <file>]                       # Scan the configured packages directory
        webwrap-core [--verbose|-v] <packages_directory> [--output <file>]  # Scan a directory of .apk files
        webwrap-core --view <report.json> [--html <page.html>]              # Render a totals report

        Options:
        --verbose, -v    Enable verbose logging (shows all debug information)
                        Without this flag, only progress and status messages are shown"""
