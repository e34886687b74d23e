"""
In-memory editing form of a menu.

Two identifier spaces exist side by side:

- ``PersistedId``: ``MenuEntry.id``, durable and stored with the menu.
- ``NodeHandle``: ``TreeNode.id``, derived from the node's position when the
  tree is built and only meaningful inside one editing session.

Code addressing nodes in the tree uses handles; code minting or checking
stored ids uses persisted ids. The two are never compared with each other.
"""

from enum import Enum
from typing import List, NewType
from pydantic import BaseModel, Field
from models.menu import MenuEntry

NodeHandle = NewType("NodeHandle", str)
PersistedId = NewType("PersistedId", str)

ROOT_PREFIX = "root"


class NodeKind(str, Enum):
    """Whether a node is a plain item or a branch holding a submenu."""
    MENU = "menu"
    SUBMENU = "submenu"


class MovePosition(str, Enum):
    """Where a dragged node lands relative to the drop target."""
    BEFORE = "before"
    AFTER = "after"
    INSIDE = "inside"


class TreeNode(BaseModel):
    """One editable menu entry and its children."""
    id: NodeHandle
    data: MenuEntry
    children: List["TreeNode"] = Field(default_factory=list)
    level: int = 0
    kind: NodeKind = NodeKind.MENU


TreeNode.model_rebuild()


def kind_of(entry: MenuEntry) -> NodeKind:
    return NodeKind.SUBMENU if entry.is_branch else NodeKind.MENU


def copy_tree(tree: List[TreeNode]) -> List[TreeNode]:
    """Deep copy a tree so edits never alias the caller's nodes."""
    return [node.model_copy(deep=True) for node in tree]
