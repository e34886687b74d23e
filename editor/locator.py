"""
Lookup helpers shared by every tree operation.

All searches are depth-first and linear in the number of nodes; menus are
editor-sized so nothing is indexed.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Set
from editor.tree import NodeHandle, PersistedId, TreeNode


@dataclass
class NodeLocation:
    """A node together with the sibling list that owns it."""
    node: TreeNode
    siblings: List[TreeNode]
    index: int
    parent: Optional[TreeNode] = None

    @property
    def is_root(self) -> bool:
        return self.parent is None


def iter_nodes(tree: List[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node in depth-first, pre-order."""
    for node in tree:
        yield node
        yield from iter_nodes(node.children)


def find_node(tree: List[TreeNode], node_id: NodeHandle) -> Optional[TreeNode]:
    for node in iter_nodes(tree):
        if node.id == node_id:
            return node
    return None


def find_with_parent(
    tree: List[TreeNode],
    node_id: NodeHandle,
    parent: Optional[TreeNode] = None,
) -> Optional[NodeLocation]:
    """Find a node plus its owning list and index.

    For root nodes ``siblings`` is ``tree`` itself and ``parent`` is None.
    """
    for index, node in enumerate(tree):
        if node.id == node_id:
            return NodeLocation(node=node, siblings=tree, index=index, parent=parent)
        found = find_with_parent(node.children, node_id, parent=node)
        if found:
            return found
    return None


def find_by_entry_id(tree: List[TreeNode], entry_id: PersistedId) -> Optional[TreeNode]:
    """Find a node by the persisted id of its entry."""
    for node in iter_nodes(tree):
        if node.data.id == entry_id:
            return node
    return None


def collect_entry_ids(tree: List[TreeNode]) -> Set[PersistedId]:
    """Every persisted id present anywhere in the tree."""
    return {node.data.id for node in iter_nodes(tree) if node.data.id}


def collect_handles(tree: List[TreeNode]) -> Set[NodeHandle]:
    return {node.id for node in iter_nodes(tree)}


def contains_node(node: TreeNode, node_id: NodeHandle) -> bool:
    """True when ``node_id`` is ``node`` or one of its descendants."""
    if node.id == node_id:
        return True
    return find_node(node.children, node_id) is not None
