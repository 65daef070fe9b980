"""
WebView Usage Heuristic - Embedded Browser API Detection

The ddx listings carry metadata naming the classes each disassembled class
uses. Every listing that mentions WebView (or a class derived from it) makes a
web app a little more likely. The signal is graduated and uncapped, so apps
built around web views score arbitrarily high.
"""

from typing import List

from webwrap_core.heuristics.base import BaseHeuristic
from webwrap_core.infrastructure.shared import files_containing
from webwrap_core.logic.models import ArtifactTree, Trait


class WebViewUsageHeuristic(BaseHeuristic):
    """Counts disassembled listings that reference the WebView API."""

    API_REFERENCE = "WebView"
    DEFAULT_PER_MATCH = 0.1

    # The disassembly directory also holds the dex copy fed to ddx
    SKIP_SUFFIXES = ('.dex',)

    @property
    def name(self) -> str:
        return "webview_usage"

    @property
    def category(self) -> str:
        return "Embedded Browser"

    @property
    def description(self) -> str:
        return "Counts disassembled classes that reference WebView"

    def analyze(self, tree: ArtifactTree) -> List[Trait]:
        if not tree.disassembly_dir.is_dir():
            self.logger.warning(f"No disassembly for {tree.package_name} in {tree.disassembly_dir}")
            return []

        needle = self.config.get_parameter('api_reference', self.API_REFERENCE)
        matches = files_containing(tree.disassembly_dir, needle, skip_suffixes=self.SKIP_SUFFIXES)

        # Zero matches emit nothing rather than a phantom 0.1 trait
        if not matches:
            return []

        count = len(matches)
        per_match = float(self.config.get_parameter('per_match', self.DEFAULT_PER_MATCH))

        return [self.create_trait(
            amount=per_match * count,
            reason=f"{count:.2f} calls to {needle}",
            files=matches
        )]
