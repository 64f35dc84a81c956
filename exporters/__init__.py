"""Exporters for printing closure results in various formats."""

from .list_exporter import to_list
from .tree_exporter import to_tree
from .json_exporter import to_json

__all__ = ["to_list", "to_tree", "to_json"]
