"""Note identity and transitive closure of note references."""

from .identity import RoamFile
from .model import ClosureResult
from .closure import transitive_closure

__all__ = [
    "RoamFile",
    "ClosureResult",
    "transitive_closure",
]
