"""
Analysis service - aggregates heuristic traits for one package.
"""

from typing import Dict, List, Optional
import logging
import time

from webwrap_core.logic.models import AnalysisConfig, ArtifactTree, ReportEntry, ScanResult
from webwrap_core.heuristics import create_default_registry
from webwrap_core.heuristics.base import BaseHeuristic, HeuristicRegistry, HeuristicResult


class AnalysisService:
    """
    Runs every heuristic against an artifact tree and builds the report entry.

    Heuristics run in registry order (markup, script, framework, webview) and
    their traits are concatenated in that order without truncation or
    deduplication.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None,
                 registry: Optional[HeuristicRegistry] = None):
        """
        Initialize the analysis service.

        Args:
            config: Analysis configuration
            registry: Heuristic registry (defaults to the built-in heuristics)
        """
        self.config = config or AnalysisConfig()
        self.registry = registry or create_default_registry()
        self.logger = logging.getLogger("analysis.service")

        self.heuristics: List[BaseHeuristic] = self.registry.create_instances(self.config)
        self.logger.info(f"Initialized {len(self.heuristics)} heuristics: "
                         f"{[h.name for h in self.heuristics]}")

    def analyze(self, tree: ArtifactTree) -> ScanResult:
        """
        Run all heuristics against one artifact tree.

        Args:
            tree: Materialized contents of one package

        Returns:
            Scan result holding traits in heuristic order
        """
        scan_result = ScanResult(package_name=tree.package_name)

        for result in self.run_heuristics(tree).values():
            scan_result.extend(result.traits)

        return scan_result

    def run_heuristics(self, tree: ArtifactTree) -> Dict[str, HeuristicResult]:
        """Run each heuristic exactly once, keyed by heuristic name in run order."""
        results: Dict[str, HeuristicResult] = {}
        start_time = time.time()

        for heuristic in self.heuristics:
            result = heuristic.run(tree)
            if result.error:
                self.logger.warning(f"{heuristic.name} degraded to zero traits for {tree.package_name}")
            results[heuristic.name] = result

        self.logger.info(f"Ran {len(results)} heuristics on {tree.package_name} "
                         f"in {time.time() - start_time:.2f}s")
        return results

    def aggregate(self, package_name: str, tree: ArtifactTree) -> ReportEntry:
        """
        Build the report entry for a package.

        Args:
            package_name: Package file name used as the entry name
            tree: Materialized contents of the package

        Returns:
            Report entry whose total is the rounded sum of its traits
        """
        scan_result = self.analyze(tree)
        entry = ReportEntry(name=package_name, traits=list(scan_result.traits))

        self.logger.info(f"{package_name}: {len(entry.traits)} traits, total {entry.formatted_total}")

        return entry
