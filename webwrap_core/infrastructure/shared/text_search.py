"""
Recursive text search over a directory tree (the equivalent of `grep -lr`).
"""

import logging
from pathlib import Path
from typing import Iterable, List

from webwrap_core.logic.models import recursive_dir_list


logger = logging.getLogger("text.search")


def files_containing(directory: Path, needle: str, skip_suffixes: Iterable[str] = ()) -> List[str]:
    """
    List files below a directory whose content contains a string.

    Args:
        directory: Directory to search; a missing directory yields no matches
        needle: Literal text to look for
        skip_suffixes: File suffixes to ignore (lower case, with dot)

    Returns:
        Matching file paths in walk order
    """
    pattern = needle.encode('utf-8')
    skipped = {suffix.lower() for suffix in skip_suffixes}
    matches = []

    for file_path in recursive_dir_list(Path(directory)):
        if Path(file_path).suffix.lower() in skipped:
            continue

        try:
            with open(file_path, 'rb') as f:
                if pattern in f.read():
                    matches.append(file_path)
        except OSError as e:
            logger.debug(f"Cannot read {file_path}: {e}")

    return matches
