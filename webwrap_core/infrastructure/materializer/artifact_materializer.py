"""
Artifact materializer.

Turns a package file into an artifact tree on disk: the raw extracted
package, the dex2jar re-expansion of its code and the ddx disassembly.

Each step has a completion marker. A step whose marker exists is skipped,
even if an earlier interrupted run left its output incomplete. A failing step
is recorded and logged but never stops the steps after it.
"""

import logging
import shutil
import subprocess
import time
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from webwrap_core.logic.models import ArtifactTree, ToolsConfig
from webwrap_core.infrastructure.shared import log_and_continue, ErrorSeverity


DEX2JAR_OUTPUT = "classes-dex2jar.jar"


class MaterializationError(Exception):
    """Exception raised when a materialization step fails."""
    pass


class CommandRunner:
    """Runs one external conversion tool."""

    def __init__(self, timeout_seconds: Optional[int] = None):
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger("materializer.command")

    def __call__(self, cmd: List[str], cwd: Path) -> None:
        self.logger.info(f"Running: {' '.join(cmd)} (in {cwd})")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='ignore',
                timeout=self.timeout_seconds,
                cwd=str(cwd)
            )
        except FileNotFoundError as e:
            raise MaterializationError(f"Tool not found: {cmd[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise MaterializationError(f"{cmd[0]} timed out after {self.timeout_seconds}s") from e

        if result.stdout:
            self.logger.debug(result.stdout.strip())

        if result.returncode != 0:
            raise MaterializationError(
                f"{cmd[0]} exited with status {result.returncode}: {result.stderr.strip()}"
            )


@dataclass
class MaterializationStep:
    """One idempotent preparation step."""
    name: str
    marker: Callable[[ArtifactTree], Path]
    action: Callable[[ArtifactTree, Path], None]

    def is_complete(self, tree: ArtifactTree) -> bool:
        return self.marker(tree).exists()


@dataclass
class StepResult:
    """Outcome of one step for one package."""
    name: str
    skipped: bool = False
    error: Optional[str] = None
    execution_time: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class MaterializationResult:
    """Artifact tree plus what happened while preparing it."""
    tree: ArtifactTree
    steps: List[StepResult] = field(default_factory=list)

    def has_errors(self) -> bool:
        return any(not step.succeeded for step in self.steps)

    def get_errors(self) -> List[str]:
        return [f"{step.name}: {step.error}" for step in self.steps if not step.succeeded]

    def get_skipped_steps(self) -> List[str]:
        return [step.name for step in self.steps if step.skipped]


class ArtifactMaterializer:
    """
    Prepares the artifact tree for a package.

    Work directory layout:
    <work_dir>/
    └── <package stem>/                # unzipped package, completion marker for "extract"
        ├── classes.dex
        ├── classes/
        │   ├── classes.dex            # marker for "stage_dex"
        │   ├── classes-dex2jar.jar    # marker for "dex2jar"
        │   └── com/..., org/...       # re-expanded .class files
        └── ddx/                       # marker for "disassemble"
            ├── classes.dex
            └── ddx/...                # .ddx listings
    """

    def __init__(self, work_dir: str, tools: Optional[ToolsConfig] = None,
                 runner: Optional[Callable[[List[str], Path], None]] = None):
        """
        Initialize the materializer.

        Args:
            work_dir: Directory that holds one artifact tree per package
            tools: External tool configuration
            runner: Callable used to run external tools (defaults to subprocess)
        """
        self.work_dir = Path(work_dir)
        self.tools = tools or ToolsConfig()
        self.runner = runner or CommandRunner(self.tools.step_timeout_seconds)
        self.logger = logging.getLogger("materializer")
        self.steps = self._build_steps()

    def tree_for(self, package_path: Path) -> ArtifactTree:
        """Get the artifact tree location for a package without touching disk."""
        package_path = Path(package_path)
        return ArtifactTree(
            package_name=package_path.name,
            root=self.work_dir / package_path.stem
        )

    def materialize(self, package_path: Path) -> MaterializationResult:
        """
        Ensure the artifact tree for a package exists.

        Args:
            package_path: Path to the package file

        Returns:
            Materialization result; the tree may be partial if steps failed
        """
        package_path = Path(package_path)
        tree = self.tree_for(package_path)
        result = MaterializationResult(tree=tree)

        self.work_dir.mkdir(parents=True, exist_ok=True)
        self.logger.info(f"Materializing {package_path.name} into {tree.root}")

        for step in self.steps:
            result.steps.append(self._run_step(step, tree, package_path))

        if result.has_errors():
            log_and_continue(
                f"Artifacts for {package_path.name} are incomplete; scan results may be undercounted",
                component="materializer",
                severity=ErrorSeverity.WARNING,
                package=package_path.name,
                failed_steps=result.get_errors()
            )

        return result

    def _run_step(self, step: MaterializationStep, tree: ArtifactTree, package_path: Path) -> StepResult:
        """Run one step unless its marker exists, capturing any failure."""
        if step.is_complete(tree):
            self.logger.debug(f"Skipping {step.name} for {tree.package_name}: {step.marker(tree)} exists")
            return StepResult(name=step.name, skipped=True)

        start_time = time.time()
        try:
            step.action(tree, package_path)
        except (MaterializationError, OSError, zipfile.BadZipFile) as e:
            self.logger.warning(f"Step {step.name} failed for {tree.package_name}: {e}")
            return StepResult(name=step.name, error=str(e), execution_time=time.time() - start_time)

        return StepResult(name=step.name, execution_time=time.time() - start_time)

    def _build_steps(self) -> List[MaterializationStep]:
        return [
            MaterializationStep(
                name="extract",
                marker=lambda tree: tree.root,
                action=self._extract_package
            ),
            MaterializationStep(
                name="stage_dex",
                marker=lambda tree: tree.classes_dir / "classes.dex",
                action=self._stage_dex
            ),
            MaterializationStep(
                name="dex2jar",
                marker=lambda tree: tree.classes_dir / DEX2JAR_OUTPUT,
                action=self._convert_dex_to_classes
            ),
            MaterializationStep(
                name="disassemble",
                marker=lambda tree: tree.disassembly_dir,
                action=self._disassemble
            ),
        ]

    def _extract_package(self, tree: ArtifactTree, package_path: Path) -> None:
        """Unzip the package into the tree root."""
        tree.root.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(package_path, 'r') as archive:
            archive.extractall(tree.root)

    def _stage_dex(self, tree: ArtifactTree, package_path: Path) -> None:
        """Copy the extracted dex file next to where dex2jar will run."""
        self._require_dex(tree)
        tree.classes_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(tree.classes_dex, tree.classes_dir / "classes.dex")

    def _convert_dex_to_classes(self, tree: ArtifactTree, package_path: Path) -> None:
        """Convert the dex into a jar, then expand the jar into class files."""
        staged_dex = tree.classes_dir / "classes.dex"
        if not staged_dex.exists():
            raise MaterializationError(f"No staged dex in {tree.classes_dir}")

        self.runner(list(self.tools.dex2jar_command) + ["classes.dex"], tree.classes_dir)

        jar_path = tree.classes_dir / DEX2JAR_OUTPUT
        if not jar_path.exists():
            raise MaterializationError(f"dex2jar did not produce {jar_path.name}")

        with zipfile.ZipFile(jar_path, 'r') as jar:
            jar.extractall(tree.classes_dir)

    def _disassemble(self, tree: ArtifactTree, package_path: Path) -> None:
        """Produce ddx listings for the dex file."""
        tree.disassembly_dir.mkdir(parents=True, exist_ok=True)
        self._require_dex(tree)
        shutil.copy2(tree.classes_dex, tree.disassembly_dir / "classes.dex")

        ddx_jar = Path(self.tools.ddx_jar).resolve()
        self.runner(
            [self.tools.java_command, "-jar", str(ddx_jar), "-d", "ddx", "classes.dex"],
            tree.disassembly_dir
        )

    def _require_dex(self, tree: ArtifactTree) -> None:
        if not tree.classes_dex.exists():
            raise MaterializationError(f"No classes.dex in {tree.root}")
