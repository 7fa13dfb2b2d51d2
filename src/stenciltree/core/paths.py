"""
Filesystem probes used during manifest discovery.

Both helpers are side-effect free and never raise for missing or
inaccessible paths.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def exists(path: PathLike) -> bool:
    """Check whether anything is accessible at `path`."""
    try:
        return Path(path).exists()
    except (OSError, ValueError):
        return False


def search_upward(start_path: PathLike, target_name: PathLike) -> Optional[Path]:
    """
    Find `target_name` in `start_path` or the nearest ancestor containing it.

    `target_name` may be a relative path with several segments
    (e.g. "src/components/my-button/my-button.tsx").

    Args:
        start_path: Directory to start from. Relative paths are made absolute.
        target_name: File name or relative path to look for.

    Returns:
        Optional[Path]: Absolute path of the first hit, or None once the
        filesystem root has been checked without a match.
    """
    current = Path(os.path.abspath(start_path))
    candidate = current / target_name
    steps = 0

    while not exists(candidate) and current.parent != current:
        current = current.parent
        candidate = current / target_name
        steps += 1

    if not exists(candidate):
        logger.debug(f"{target_name} not found above {start_path} ({steps} levels searched)")
        return None

    logger.debug(f"Found {candidate} after {steps} parent traversals")
    return candidate
