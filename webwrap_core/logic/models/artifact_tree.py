"""
Artifact tree domain model.

Describes where the materialized contents of one package live on disk.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def recursive_dir_list(directory: Path) -> List[str]:
    """
    List every file below a directory, depth first, entries in name order.

    Args:
        directory: Directory to walk

    Returns:
        File paths as strings; empty if the directory does not exist
    """
    results: List[str] = []
    if not directory.is_dir():
        return results

    for entry in sorted(os.listdir(directory)):
        full_path = directory / entry
        if full_path.is_dir():
            results.extend(recursive_dir_list(full_path))
        else:
            results.append(str(full_path))

    return results


@dataclass
class ArtifactTree:
    """
    Handle to the extracted and derived files of one package.

    Layout under the work directory:
    <work_dir>/<package stem>/            # raw extracted package (root)
    ├── classes/                          # dex2jar output and re-expanded class files
    └── ddx/                              # disassembled listings
    """
    package_name: str
    root: Path
    classes_dir_name: str = "classes"
    disassembly_dir_name: str = "ddx"
    _files: Optional[List[str]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.root, str):
            self.root = Path(self.root)

    @property
    def classes_dir(self) -> Path:
        return self.root / self.classes_dir_name

    @property
    def disassembly_dir(self) -> Path:
        return self.root / self.disassembly_dir_name

    @property
    def classes_dex(self) -> Path:
        """The dex file extracted from the package."""
        return self.root / "classes.dex"

    def exists(self) -> bool:
        """Check if extraction produced anything at all."""
        return self.root.is_dir()

    def list_files(self) -> List[str]:
        """
        Get all files in the tree, recursively.

        The listing is computed once and reused by every scanner of the package.
        """
        if self._files is None:
            self._files = recursive_dir_list(self.root)
        return list(self._files)

    def relative_path(self, file_path: str, base: Optional[Path] = None) -> Optional[str]:
        """
        Get a POSIX-style path relative to the tree root, or to 'base' if given.

        Returns None when the file lies outside that directory.
        """
        try:
            return Path(file_path).relative_to(base or self.root).as_posix()
        except ValueError:
            return None
