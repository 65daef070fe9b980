"""
Bundled content heuristics.

Web-wrapped apps ship their UI as HTML and JavaScript inside the package.
Either file type on its own is a weak signal: plenty of native apps bundle a
licence page or an analytics snippet.
"""

import re
from typing import List

from webwrap_core.heuristics.base import BaseHeuristic
from webwrap_core.logic.models import ArtifactTree, Trait


class FilePresenceHeuristic(BaseHeuristic):
    """Reports a fixed-weight trait when any file in the tree matches a pattern."""

    FILE_PATTERN: re.Pattern = None
    DEFAULT_AMOUNT: float = 0.0
    REASON: str = ""

    @property
    def category(self) -> str:
        return "Bundled Content"

    def analyze(self, tree: ArtifactTree) -> List[Trait]:
        if not tree.exists():
            self.logger.warning(f"No extracted contents for {tree.package_name} in {tree.root}")
            return []

        matching = [f for f in tree.list_files() if self.FILE_PATTERN.search(f)]

        if not matching:
            return []

        return [self.create_trait(self.get_amount(self.DEFAULT_AMOUNT), self.REASON, matching)]


class MarkupPresenceHeuristic(FilePresenceHeuristic):
    """Detects bundled HTML files."""

    FILE_PATTERN = re.compile(r'\.html?$', re.IGNORECASE)
    DEFAULT_AMOUNT = 5
    REASON = "Presence of HTML files"

    @property
    def name(self) -> str:
        return "markup_presence"

    @property
    def description(self) -> str:
        return "Detects bundled .htm/.html files"


class ScriptPresenceHeuristic(FilePresenceHeuristic):
    """Detects bundled JavaScript files."""

    FILE_PATTERN = re.compile(r'\.js$', re.IGNORECASE)
    DEFAULT_AMOUNT = 15
    REASON = "Presence of JavaScript files"

    @property
    def name(self) -> str:
        return "script_presence"

    @property
    def description(self) -> str:
        return "Detects bundled .js files"
