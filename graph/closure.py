"""Breadth-first transitive closure over note references."""

import logging
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Iterable, List, Optional, Protocol

from graph.identity import RoamFile
from graph.model import ClosureResult

logger = logging.getLogger(__name__)

ExcludePredicate = Callable[[RoamFile], bool]


class ReferenceResolver(Protocol):
    """Anything that can list the direct references of a note."""

    def resolve(self, node: RoamFile) -> List[RoamFile]:
        ...

    def assets(self, node: RoamFile) -> List[Path]:
        ...


def never_exclude(node: RoamFile) -> bool:
    return False


def transitive_closure(
    resolver: ReferenceResolver,
    seeds: Iterable[RoamFile],
    exclude: Optional[ExcludePredicate] = None,
) -> ClosureResult:
    """
    Collect every note reachable from ``seeds`` through id links.

    Seeds come first in caller order, then notes in breadth-first
    discovery order. A note for which ``exclude`` returns True is still
    reported but its references are not followed. The predicate is
    called at most once per note.

    Args:
        resolver: Source of one-hop references (see ReferenceResolver).
        seeds: Starting notes.
        exclude: Predicate telling which notes stop the walk.

    Returns:
        ClosureResult with notes, assets and discovery information.

    Raises:
        StoreQueryError: If the resolver fails; no partial result is kept.
    """
    if exclude is None:
        exclude = never_exclude

    result = ClosureResult()
    queue: Deque[RoamFile] = deque()

    for seed in seeds:
        if result.add_note(seed):
            queue.append(seed)

    while queue:
        current = queue.popleft()

        if exclude(current):
            logger.debug("Not expanding excluded note %s", current)
            result.mark_excluded(current)
            continue

        targets = resolver.resolve(current)
        logger.debug("%s references %d note(s)", current, len(targets))
        for target in targets:
            if result.add_note(target, parent=current):
                queue.append(target)

        for asset in resolver.assets(current):
            result.add_asset(asset, parent=current)

    return result
