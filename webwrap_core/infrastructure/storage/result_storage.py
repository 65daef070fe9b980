"""
Result storage implementation.
"""

import json
from pathlib import Path
from typing import Dict, Any, List

from webwrap_core.logic.models import Report


class ReportStorageError(Exception):
    """Exception raised when the totals report cannot be written."""
    pass


class ResultStorage:
    """
    Storage service for the totals report.
    """

    def save_report(self, report: Report, output_path: str) -> None:
        """
        Save the report to file, overwriting any earlier report.

        Args:
            report: Report to save
            output_path: Path to save the report

        Raises:
            ReportStorageError: If the file cannot be written
        """
        entries = report.to_list()

        try:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(entries, f, indent=4, ensure_ascii=False)
        except OSError as e:
            raise ReportStorageError(f"Cannot write report to {output_path}: {e}") from e

    def load_report(self, input_path: str) -> Report:
        """
        Load a report from file.

        Args:
            input_path: Path to load the report from

        Returns:
            Report with entries in file order
        """
        return Report.from_list(self.load_raw(input_path))

    def load_raw(self, input_path: str) -> List[Dict[str, Any]]:
        """Load the report as plain JSON data."""
        with open(input_path, 'r', encoding='utf-8') as f:
            return json.load(f)
