"""Result model for the transitive closure of note references."""

from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple

from graph.identity import RoamFile


class ClosureResult:
    """
    Files reachable from a set of seed notes, in discovery order.

    Notes are the org-roam files reached through id links. Assets are
    plain files (images, attachments) reached through file links; they
    are never expanded further.
    """

    def __init__(self):
        self._notes: List[RoamFile] = []
        self._seen: Set[RoamFile] = set()
        self._assets: List[Path] = []
        self._seen_assets: Set[Path] = set()
        self._excluded: Set[RoamFile] = set()
        self._discovered_by: Dict[Path, RoamFile] = {}

    @property
    def notes(self) -> List[RoamFile]:
        """Return notes in discovery order."""
        return list(self._notes)

    @property
    def assets(self) -> List[Path]:
        """Return assets in discovery order."""
        return list(self._assets)

    @property
    def excluded(self) -> Set[RoamFile]:
        """Return notes that were reported but not expanded."""
        return set(self._excluded)

    @property
    def discovered_by(self) -> Dict[Path, RoamFile]:
        """Return the note that first referenced each non-seed entry."""
        return dict(self._discovered_by)

    def add_note(self, note: RoamFile, parent: Optional[RoamFile] = None) -> bool:
        """
        Append a note unless it is already present.

        Returns:
            True if the note was new.
        """
        if note in self._seen:
            return False
        self._seen.add(note)
        self._notes.append(note)
        # A file first seen through a file link is promoted to a note.
        if note.path in self._seen_assets:
            self._seen_assets.discard(note.path)
            self._assets.remove(note.path)
        if parent is not None:
            self._discovered_by[note.path] = parent
        return True

    def add_asset(self, asset: Path, parent: RoamFile) -> bool:
        """
        Append an asset unless it is already present as an asset or a note.

        Returns:
            True if the asset was new.
        """
        if asset in self._seen_assets or RoamFile(asset) in self._seen:
            return False
        self._seen_assets.add(asset)
        self._assets.append(asset)
        self._discovered_by[asset] = parent
        return True

    def mark_excluded(self, note: RoamFile) -> None:
        self._excluded.add(note)

    def is_excluded(self, note: RoamFile) -> bool:
        return note in self._excluded

    def files(self) -> Iterator[Path]:
        """Iterate over all files, notes first, as plain paths."""
        for note in self._notes:
            yield note.path
        yield from self._assets

    def iter_discoveries(self) -> Iterator[Tuple[RoamFile, Path]]:
        """Iterate over (parent, child) pairs in discovery order."""
        for path in self.files():
            parent = self._discovered_by.get(path)
            if parent is not None:
                yield parent, path

    def children_map(self) -> Dict[RoamFile, List[Path]]:
        """Map each note to the entries it discovered, in discovery order."""
        children: Dict[RoamFile, List[Path]] = {}
        for parent, child in self.iter_discoveries():
            children.setdefault(parent, []).append(child)
        return children

    def get_children(self, parent: RoamFile) -> List[Path]:
        """Get the entries first discovered through ``parent``."""
        return self.children_map().get(parent, [])

    def get_seeds(self) -> List[RoamFile]:
        """Get the notes that were not discovered through another note."""
        return [note for note in self._notes if note.path not in self._discovered_by]

    def __iter__(self) -> Iterator[RoamFile]:
        return iter(list(self._notes))

    def __len__(self) -> int:
        """Return the number of notes and assets."""
        return len(self._notes) + len(self._assets)

    def __contains__(self, item) -> bool:
        if isinstance(item, RoamFile):
            return item in self._seen
        return Path(item) in self._seen_assets or RoamFile(Path(item)) in self._seen

    def __repr__(self) -> str:
        return (
            f"ClosureResult(notes={len(self._notes)}, assets={len(self._assets)}, "
            f"excluded={len(self._excluded)})"
        )
