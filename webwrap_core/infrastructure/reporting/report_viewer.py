"""
Report viewer.

Renders the totals report as a static HTML page: packages sorted by total
(highest first), each followed by a details row with its traits sorted by
amount. Hovering a trait row shows the files that produced it.
"""

import functools
import html
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

# Values closer than this compare as equal, keeping their input order
SORT_EPSILON = 0.0001

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
table {{ border-collapse: collapse; font-family: sans-serif; }}
tr.title td {{ font-weight: bold; padding-top: 1em; }}
table.traits td {{ padding: 0 1em; }}
table.traits tr:hover {{ background: #eee; }}
</style>
</head>
<body>
<table id="out">
{rows}
</table>
</body>
</html>
"""


def make_sorter(property_name: str):
    """Build a descending comparator over a numeric (or numeric string) field."""
    def compare(a: Dict[str, Any], b: Dict[str, Any]) -> int:
        difference = float(a[property_name]) - float(b[property_name])
        if abs(difference) < SORT_EPSILON:
            return 0
        return -1 if difference > 0 else 1
    return functools.cmp_to_key(compare)


class ReportViewer:
    """
    Loads a totals report and renders it for display.

    The viewer only sorts and displays; it never recomputes totals.
    """

    def __init__(self, title: str = "Hybrid app likelihood"):
        self.title = title
        self.logger = logging.getLogger("report.viewer")

    def load(self, report_path: str) -> Optional[List[Dict[str, Any]]]:
        """
        Load the report JSON.

        Returns:
            Report entries, or None if the file is missing or malformed
        """
        try:
            with open(report_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.error(f"Failed loading report {report_path}: {e}")
            return None

        if not isinstance(data, list):
            self.logger.error(f"Report {report_path} is not a list of entries")
            return None

        return data

    def sort_entries(self, entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Sort entries by total and each entry's traits by amount, highest first."""
        sorted_entries = []
        for entry in sorted(entries, key=make_sorter('total')):
            entry = dict(entry)
            entry['traits'] = sorted(entry.get('traits', []), key=make_sorter('amount'))
            sorted_entries.append(entry)
        return sorted_entries

    def render_html(self, entries: List[Dict[str, Any]]) -> str:
        """Render sorted entries as an HTML page."""
        rows = []

        for app in self.sort_entries(entries):
            rows.append(
                '<tr class="title">'
                f'<td>{html.escape(str(app["total"]))}</td>'
                f'<td>{html.escape(str(app["name"]))}</td>'
                '</tr>'
            )

            trait_rows = []
            for trait in app['traits']:
                hover = '\n'.join(trait.get('files', []))
                trait_rows.append(
                    f'<tr title="{html.escape(hover, quote=True)}">'
                    f'<td>{float(trait["amount"]):.2f}</td>'
                    f'<td>{html.escape(trait["reason"])}</td>'
                    '</tr>'
                )

            rows.append(
                '<tr class="details"><td colspan="2">'
                '<table class="traits">' + ''.join(trait_rows) + '</table>'
                '</td></tr>'
            )

        return PAGE_TEMPLATE.format(title=html.escape(self.title), rows='\n'.join(rows))

    def render_file(self, report_path: str, html_path: str) -> Optional[str]:
        """
        Render a report file to an HTML file.

        Returns:
            Path of the written page, or None if the report could not be rendered
        """
        entries = self.load(report_path)
        if entries is None:
            return None

        try:
            page = self.render_html(entries)
        except (KeyError, TypeError, ValueError) as e:
            self.logger.error(f"Failed rendering report {report_path}: {e}")
            return None

        output = Path(html_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(page, encoding='utf-8')
        self.logger.info(f"Report page written to {output}")
        return str(output)
