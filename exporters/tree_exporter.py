"""ASCII tree-style exporter showing how each file was discovered."""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from graph.identity import RoamFile
from graph.model import ClosureResult


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_tree(
    result: ClosureResult,
    base: Optional[Path] = None,
    style: str = "tree",
    keep: Optional[Callable[[Path], bool]] = None,
) -> str:
    """
    Render a closure result as one tree per seed.

    Every file appears once, under the note that first referenced it.
    Excluded notes are marked ``[excluded]``, assets ``[asset]``, and
    files rejected by ``keep`` are marked ``[unchanged]`` rather than
    hidden so the tree stays connected.

    Args:
        result: The closure to export.
        base: Optional base path for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        keep: Optional filter deciding which files count as changed.

    Returns:
        Tree string.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    lines: List[str] = []
    seeds = result.get_seeds()
    children = result.children_map()

    for i, seed in enumerate(seeds):
        _render_node(
            result=result,
            node=seed.path,
            children=children,
            base=base,
            prefix="",
            is_last=True,
            chars=chars,
            lines=lines,
            is_root=True,
            keep=keep,
        )

        # Add blank line between seed trees (except after last)
        if i < len(seeds) - 1:
            lines.append("")

    return "\n".join(lines)


def _render_node(
    result: ClosureResult,
    node: Path,
    children: Dict[RoamFile, List[Path]],
    base: Optional[Path],
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    lines: List[str],
    is_root: bool = False,
    keep: Optional[Callable[[Path], bool]] = None,
) -> None:
    """
    Recursively render a node and the entries it discovered.

    Args:
        result: The closure result.
        node: Current file to render.
        children: Entries discovered by each note.
        base: Base path for display.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        lines: Output lines list (modified in place).
        is_root: Whether this is a seed.
        keep: Optional filter deciding which files count as changed.
    """
    branch, last, vertical, space = chars

    display_path = _get_display_path(node, base) + _markers(result, node, keep)

    if is_root:
        lines.append(display_path)
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{display_path}")

    note = RoamFile(node)
    if note not in result:
        return
    node_children = children.get(note, [])

    if is_root:
        new_prefix = ""
    else:
        new_prefix = prefix + (space if is_last else vertical)

    for index, child in enumerate(node_children):
        _render_node(
            result=result,
            node=child,
            children=children,
            base=base,
            prefix=new_prefix,
            is_last=(index == len(node_children) - 1),
            chars=chars,
            lines=lines,
            is_root=False,
            keep=keep,
        )


def _markers(
    result: ClosureResult,
    node: Path,
    keep: Optional[Callable[[Path], bool]],
) -> str:
    markers = ""
    note = RoamFile(node)
    if note not in result:
        markers += " [asset]"
    elif result.is_excluded(note):
        markers += " [excluded]"
    if keep is not None and not keep(node):
        markers += " [unchanged]"
    return markers


def _get_display_path(node: Path, base: Optional[Path]) -> str:
    """Get the display path for a node."""
    if base is None:
        return str(node)
    try:
        return node.relative_to(base).as_posix()
    except ValueError:
        return str(node)
