"""
Hybrid Framework Heuristic - Wrapper SDK Class Detection

Looks for compiled classes from known web-wrapper SDKs in the re-expanded
code archive. Any class below one of these packages is near-certain proof
that the app is a hybrid build:
- com.phonegap (PhoneGap)
- com.sencha (Sencha Touch)
- org.apache.cordova (Apache Cordova)
- org.appcelerator (Titanium)
"""

import re
from typing import List

from webwrap_core.heuristics.base import BaseHeuristic
from webwrap_core.logic.models import ArtifactTree, Trait


class HybridFrameworkHeuristic(BaseHeuristic):
    """Detects class files belonging to hybrid wrapper SDKs."""

    CLASS_FILE_PATTERN = re.compile(r'\.class$', re.IGNORECASE)

    FRAMEWORK_PREFIXES = [
        'com/phonegap',
        'com/sencha',
        'org/apache/cordova',
        'org/appcelerator',
    ]

    DEFAULT_AMOUNT = 50
    REASON = "Presence of Phonegap or similar"

    def __init__(self, config=None):
        super().__init__(config)
        prefixes = self.config.get_parameter('prefixes', self.FRAMEWORK_PREFIXES)
        # Anchored at the class tree root, whole segments only
        self.prefix_patterns = [
            re.compile(r'^' + re.escape(prefix.strip('/')) + r'/')
            for prefix in prefixes
        ]

    @property
    def name(self) -> str:
        return "hybrid_framework"

    @property
    def category(self) -> str:
        return "Wrapper SDK"

    @property
    def description(self) -> str:
        return "Detects classes from PhoneGap, Sencha, Cordova or Appcelerator"

    def analyze(self, tree: ArtifactTree) -> List[Trait]:
        if not tree.exists():
            self.logger.warning(f"No extracted contents for {tree.package_name} in {tree.root}")
            return []

        class_files = [f for f in tree.list_files() if self.CLASS_FILE_PATTERN.search(f)]
        if not class_files:
            self.logger.debug(f"No class files for {tree.package_name}; dex2jar output may be missing")
            return []

        framework_classes = [f for f in class_files if self._is_framework_class(tree, f)]

        if not framework_classes:
            return []

        return [self.create_trait(self.get_amount(self.DEFAULT_AMOUNT), self.REASON, framework_classes)]

    def _is_framework_class(self, tree: ArtifactTree, file_path: str) -> bool:
        relative = tree.relative_path(file_path, tree.classes_dir)
        if relative is None:
            return False
        return any(pattern.search(relative) for pattern in self.prefix_patterns)
