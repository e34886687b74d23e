"""
Unsaved-change detection.

A snapshot is the flattened tree dumped to plain JSON-compatible data, so
node handles never take part in the comparison and list order does.
"""

from typing import Any, Dict, List
from editor.builder import flatten_tree
from editor.tree import TreeNode

Snapshot = List[Dict[str, Any]]


def snapshot(tree: List[TreeNode]) -> Snapshot:
    return [entry.model_dump(mode="json", exclude_none=True) for entry in flatten_tree(tree)]


def has_changes(tree: List[TreeNode], reference: Snapshot) -> bool:
    """True when the tree no longer matches the reference snapshot."""
    return snapshot(tree) != reference
