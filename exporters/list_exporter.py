"""Plain list exporter: one absolute path per line."""

from pathlib import Path
from typing import Callable, List, Optional

from graph.model import ClosureResult


def to_list(
    result: ClosureResult,
    keep: Optional[Callable[[Path], bool]] = None,
) -> str:
    """
    Convert a closure result to a newline-separated list of paths.

    Notes come first in discovery order, then assets.

    Args:
        result: The closure to export.
        keep: Optional filter; files for which it returns False are
              left out (e.g. unchanged files).

    Returns:
        The list as a string, without a trailing newline.
    """
    lines: List[str] = []
    for path in result.files():
        if keep is None or keep(path):
            lines.append(str(path))
    return "\n".join(lines)
