"""JSON exporter for closure results (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from graph.model import ClosureResult


def to_json(
    result: ClosureResult,
    keep: Optional[Callable[[Path], bool]] = None,
    indent: int = 2,
) -> str:
    """
    Convert a closure result to JSON format.

    Args:
        result: The closure to export.
        keep: Optional filter applied to notes and assets.
        indent: JSON indentation level.

    Returns:
        JSON string with ``notes``, ``assets``, ``excluded`` and ``edges``.
    """

    def kept(path: Path) -> bool:
        return keep is None or keep(path)

    notes: List[str] = [str(note) for note in result.notes if kept(note.path)]
    assets: List[str] = [str(asset) for asset in result.assets if kept(asset)]

    # Excluded notes keep discovery order
    excluded: List[str] = [
        str(note) for note in result.notes if result.is_excluded(note) and kept(note.path)
    ]

    edges: List[Dict[str, Any]] = []
    for parent, child in result.iter_discoveries():
        edges.append({"source": str(parent), "target": str(child)})

    data: Dict[str, Any] = {
        "seeds": [str(seed) for seed in result.get_seeds()],
        "notes": notes,
        "assets": assets,
        "excluded": excluded,
        "edges": edges,
    }

    return json.dumps(data, indent=indent)
