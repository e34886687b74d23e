"""
Editing session for one menu.

The session holds the only live tree, the snapshot of what is currently
persisted and the transient drag-and-drop state. Refused edits come back as
``EditResult(success=False, ...)`` with a message for the user; edits that
address a node which is gone succeed without changing anything.

Example:

    session = EditorSession(document.entries(), menu_id=document.id)
    result = session.add_item(NodeKind.MENU)
    if result.has_unsaved_changes:
        session.save(store_items)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from models.helper import id_generator
from models.menu import MenuEntry
from editor.builder import build_tree, flatten_tree, normalize_entries
from editor.changes import Snapshot, has_changes, snapshot
from editor.errors import MenuValidationError
from editor.locator import find_node, find_with_parent
from editor.mutations import (
    duplicate_node,
    insert_node,
    move_node,
    new_menu_node,
    new_submenu_node,
    remove_node,
    update_payload,
)
from editor.tree import MovePosition, NodeHandle, NodeKind, TreeNode
from settings import logger

new_session_id = id_generator("editor", 10)


@dataclass(frozen=True)
class EditResult:
    """Outcome of an edit requested through the session."""
    success: bool
    message: str
    changed: bool = False
    has_unsaved_changes: bool = False
    node_id: Optional[NodeHandle] = None


@dataclass
class DragState:
    """Node being dragged and where it would currently land."""
    dragged_id: Optional[NodeHandle] = None
    over_id: Optional[NodeHandle] = None
    position: Optional[MovePosition] = None

    @property
    def is_dragging(self) -> bool:
        return self.dragged_id is not None


class EditorSession:
    """In-memory editor for one menu structure."""

    def __init__(self, entries: Optional[List[MenuEntry]] = None, menu_id: Optional[str] = None):
        self.id = new_session_id()
        self.menu_id = menu_id
        self.tree: List[TreeNode] = []
        self.reference: Snapshot = []
        self.drag = DragState()
        self.last_active = datetime.now(timezone.utc)
        self.load(entries or [])

    def touch(self) -> None:
        self.last_active = datetime.now(timezone.utc)

    # Load / save boundary

    def load(self, entries: List[MenuEntry]) -> None:
        """Replace the tree with freshly loaded entries and reset the reference."""
        self.tree = build_tree(normalize_entries(entries))
        self.reference = snapshot(self.tree)
        self.drag = DragState()
        logger.info("Menu loaded into editor", extra={
            "session_id": self.id,
            "menu_id": self.menu_id,
            "root_items": len(self.tree)
        })

    def entries(self) -> List[MenuEntry]:
        """Flattened tree, ready to hand over for persistence."""
        return flatten_tree(self.tree)

    def save(self, persist: Callable[[List[MenuEntry]], Any]) -> List[MenuEntry]:
        """Persist the current entries.

        The reference snapshot only advances once ``persist`` returns; an
        exception raised by it propagates and leaves the session dirty.
        """
        entries = self.entries()
        persist(entries)
        self.reference = snapshot(self.tree)
        logger.info("Menu saved from editor", extra={
            "session_id": self.id,
            "menu_id": self.menu_id,
            "root_items": len(entries)
        })
        return entries

    def revert(self) -> None:
        """Drop every edit made since the last load or save."""
        self.tree = build_tree([MenuEntry.model_validate(item) for item in self.reference])
        self.drag = DragState()
        logger.info("Editor changes discarded", extra={"session_id": self.id})

    @property
    def has_unsaved_changes(self) -> bool:
        return has_changes(self.tree, self.reference)

    # Edits

    def _apply(self, updated: List[TreeNode], message: str, node_id: Optional[NodeHandle] = None) -> EditResult:
        changed = snapshot(updated) != snapshot(self.tree)
        self.tree = updated
        return EditResult(
            success=True,
            message=message if changed else "Nothing to change",
            changed=changed,
            has_unsaved_changes=self.has_unsaved_changes,
            node_id=node_id,
        )

    def _refuse(self, error: MenuValidationError) -> EditResult:
        logger.warning("Menu edit refused", extra={
            "session_id": self.id,
            "node_id": error.node_id,
            "reason": error.message
        })
        return EditResult(
            success=False,
            message=error.message,
            has_unsaved_changes=self.has_unsaved_changes,
            node_id=error.node_id,
        )

    def add_item(self, kind: NodeKind = NodeKind.MENU, parent_id: Optional[NodeHandle] = None) -> EditResult:
        """Add a new item or submenu at the end of the root or the front of a branch."""
        parent = find_node(self.tree, parent_id) if parent_id is not None else None
        if parent_id is not None and parent is None:
            return self._apply(list(self.tree), "Item not found")

        level = parent.level + 1 if parent is not None else 0
        if NodeKind(kind) == NodeKind.SUBMENU:
            node = new_submenu_node(self.tree, level=level)
        else:
            node = new_menu_node(self.tree, level=level)

        try:
            updated = insert_node(self.tree, node, parent_id=parent_id)
        except MenuValidationError as e:
            return self._refuse(e)

        logger.info("Menu item added", extra={
            "session_id": self.id,
            "node_id": node.id,
            "parent_id": parent_id,
            "menu_item_id": node.data.id
        })
        return self._apply(updated, f"'{node.data.title}' added", node_id=node.id)

    def delete_item(self, node_id: NodeHandle) -> EditResult:
        updated = remove_node(self.tree, node_id)
        return self._apply(updated, "Item deleted", node_id=node_id)

    def duplicate_item(self, node_id: NodeHandle) -> EditResult:
        """Copy an item and its whole subtree right after the original."""
        updated = duplicate_node(self.tree, node_id)
        location = find_with_parent(updated, node_id)
        if location is None:
            return self._apply(updated, "Item not found")

        clone = location.siblings[location.index + 1]
        logger.info("Menu item duplicated", extra={
            "session_id": self.id,
            "node_id": node_id,
            "copy_id": clone.id
        })
        return self._apply(updated, f"'{clone.data.title}' created", node_id=clone.id)

    def move_item(self, node_id: NodeHandle, target_id: NodeHandle, position: MovePosition) -> EditResult:
        updated = move_node(self.tree, node_id, target_id, position)
        return self._apply(updated, "Item moved", node_id=node_id)

    def update_item(self, node_id: NodeHandle, changes: Dict[str, Any]) -> EditResult:
        try:
            updated = update_payload(self.tree, node_id, changes)
        except MenuValidationError as e:
            return self._refuse(e)
        return self._apply(updated, "Item updated", node_id=node_id)

    # Drag and drop

    def start_drag(self, node_id: NodeHandle) -> bool:
        if find_node(self.tree, node_id) is None:
            self.drag = DragState()
            return False
        self.drag = DragState(dragged_id=node_id)
        return True

    def drag_over(self, target_id: NodeHandle, position: MovePosition) -> bool:
        """Record the current drop target; hovering the dragged node itself is ignored."""
        if not self.drag.is_dragging or target_id == self.drag.dragged_id:
            return False
        self.drag.over_id = target_id
        self.drag.position = MovePosition(position)
        return True

    def drop(self) -> EditResult:
        """Finish the drag by moving to the last recorded target.

        The drag state is cleared however the drop ends.
        """
        drag = self.drag
        try:
            if not drag.is_dragging or drag.over_id is None or drag.position is None:
                return self._apply(list(self.tree), "Nothing to drop")
            return self.move_item(drag.dragged_id, drag.over_id, drag.position)
        finally:
            self.drag = DragState()

    def cancel_drag(self) -> None:
        self.drag = DragState()
