"""
Structural edits on the menu tree.

Every function takes a tree and returns a new one; the argument is never
modified, so callers rebind to the returned value. Operations that address a
node that is no longer present return an equal copy of the tree.
"""

from typing import Any, Callable, Dict, List, Optional, Set
from pydantic import ValidationError
import settings
from models.helper import id_generator
from models.menu import MenuEntry, RouteTarget, SubmenuConfig, SubmenuLayout, SubmenuStyle
from editor.builder import synthesize_submenu
from editor.errors import MenuValidationError
from editor.identifiers import generate_menu_id
from editor.locator import collect_entry_ids, collect_handles, contains_node, find_node, find_with_parent
from editor.tree import MovePosition, NodeHandle, NodeKind, TreeNode, copy_tree, kind_of
from settings import logger

COPY_SUFFIX = " (Copy)"

new_node_handle = id_generator("node", 10)
new_copy_handle = id_generator("copy", 10)
MOVE_POSITIONS = tuple(MovePosition)


def _mint_handle(factory: Callable[[], str], taken: Set[NodeHandle]) -> NodeHandle:
    handle = NodeHandle(factory())
    while handle in taken:
        handle = NodeHandle(factory())
    taken.add(handle)
    return handle


def relevel(node: TreeNode, level: int) -> TreeNode:
    """Set ``level`` on a node and every descendant, in place."""
    node.level = level
    for child in node.children:
        relevel(child, level + 1)
    return node


def new_menu_node(tree: List[TreeNode], level: int = 0, title: Optional[str] = None) -> TreeNode:
    """Create a leaf with the default payload and a fresh persisted id."""
    title = title or settings.NEW_MENU_TITLE
    entry = MenuEntry(
        id=generate_menu_id(title, collect_entry_ids(tree)),
        title=title,
        icon=settings.NEW_MENU_ICON,
        text_size=settings.NEW_MENU_TEXT_SIZE,
        navigation_target=RouteTarget(
            route=settings.NEW_MENU_ROUTE,
            args=dict(settings.NEW_MENU_ROUTE_ARGS),
        ),
    )
    return TreeNode(
        id=_mint_handle(new_node_handle, collect_handles(tree)),
        data=entry,
        level=level,
        kind=NodeKind.MENU,
    )


def new_submenu_node(tree: List[TreeNode], level: int = 0, title: Optional[str] = None) -> TreeNode:
    """Create an empty branch with default submenu metadata."""
    title = title or settings.NEW_SUBMENU_TITLE
    entry = MenuEntry(
        id=generate_menu_id(title, collect_entry_ids(tree)),
        title=title,
        icon=settings.NEW_MENU_ICON,
        text_size=settings.NEW_MENU_TEXT_SIZE,
        submenu=SubmenuConfig(
            title=title,
            style=SubmenuStyle.FULL_SCREEN,
            layout=SubmenuLayout.GRID,
        ),
    )
    return TreeNode(
        id=_mint_handle(new_node_handle, collect_handles(tree)),
        data=entry,
        level=level,
        kind=NodeKind.SUBMENU,
    )


def insert_node(
    tree: List[TreeNode],
    new_node: TreeNode,
    parent_id: Optional[NodeHandle] = None,
) -> List[TreeNode]:
    """Insert ``new_node`` at the end of the root list or at the front of a branch.

    Raises:
        MenuValidationError: when the parent is a plain item; items only gain
            children by being branches first.
    """
    updated = copy_tree(tree)
    node = new_node.model_copy(deep=True)

    if parent_id is None:
        updated.append(relevel(node, 0))
        return updated

    parent = find_node(updated, parent_id)
    if parent is None:
        logger.debug("Insert target not found", extra={"node_id": parent_id})
        return updated

    if parent.kind != NodeKind.SUBMENU:
        raise MenuValidationError(
            f"'{parent.data.title}' is not a submenu. Convert it to a submenu before adding items to it.",
            node_id=parent_id,
        )

    parent.children.insert(0, relevel(node, parent.level + 1))
    return updated


def remove_node(tree: List[TreeNode], node_id: NodeHandle) -> List[TreeNode]:
    """Remove a node and its subtree; unknown ids leave the tree as is."""
    updated = copy_tree(tree)
    location = find_with_parent(updated, node_id)
    if location is None:
        logger.debug("Remove target not found", extra={"node_id": node_id})
        return updated

    del location.siblings[location.index]
    return updated


def _promote_to_branch(node: TreeNode) -> None:
    if node.data.submenu is None:
        node.data.submenu = synthesize_submenu(node.data)
    node.kind = NodeKind.SUBMENU


def move_node(
    tree: List[TreeNode],
    moved_id: NodeHandle,
    target_id: NodeHandle,
    position: MovePosition,
) -> List[TreeNode]:
    """Move a subtree before, after, or as the first child of a target.

    Moving a node onto itself or into its own subtree does nothing. A target
    that disappears once the moved node is detached sends the node to the end
    of the root list.
    """
    updated = copy_tree(tree)
    if moved_id == target_id or position not in MOVE_POSITIONS:
        return updated

    source = find_with_parent(updated, moved_id)
    if source is None or find_node(updated, target_id) is None:
        logger.debug("Move source or target not found", extra={
            "node_id": moved_id,
            "target_id": target_id
        })
        return updated

    moved = source.node
    if contains_node(moved, target_id):
        logger.warning("Refused to move node into its own subtree", extra={
            "node_id": moved_id,
            "target_id": target_id
        })
        return updated

    del source.siblings[source.index]

    target = find_with_parent(updated, target_id)
    if target is None:
        updated.append(relevel(moved, 0))
        return updated

    if position == MovePosition.INSIDE:
        if target.node.kind != NodeKind.SUBMENU:
            _promote_to_branch(target.node)
        target.node.children.insert(0, relevel(moved, target.node.level + 1))
    else:
        insert_at = target.index if position == MovePosition.BEFORE else target.index + 1
        target.siblings.insert(insert_at, relevel(moved, target.node.level))

    return updated


def _clone_subtree(node: TreeNode, existing_ids: Set[str], taken_handles: Set[NodeHandle]) -> TreeNode:
    title = f"{node.data.title}{COPY_SUFFIX}"
    new_id = generate_menu_id(title, existing_ids)
    existing_ids.add(new_id)

    data = node.data.model_copy(deep=True)
    data.id = new_id
    data.title = title

    if data.submenu is not None:
        submenu_update: Dict[str, Any] = {"items": []}
        if data.submenu.title:
            submenu_update["title"] = f"{data.submenu.title}{COPY_SUFFIX}"
        if data.submenu_title:
            data.submenu_title = f"{data.submenu_title}{COPY_SUFFIX}"
        if data.submenu.id:
            submenu_update["id"] = f"submenu_{new_id}"
        data.submenu = data.submenu.model_copy(update=submenu_update)

    return TreeNode(
        id=_mint_handle(new_copy_handle, taken_handles),
        data=data,
        children=[_clone_subtree(child, existing_ids, taken_handles) for child in node.children],
        level=node.level,
        kind=node.kind,
    )


def duplicate_node(tree: List[TreeNode], node_id: NodeHandle) -> List[TreeNode]:
    """Insert a deep copy of a subtree right after the original.

    Every copied entry gets ``" (Copy)"`` appended to its title and a fresh
    persisted id minted from that title. Ids minted during the walk count as
    taken, so copied siblings never collide.
    """
    updated = copy_tree(tree)
    location = find_with_parent(updated, node_id)
    if location is None:
        logger.debug("Duplicate source not found", extra={"node_id": node_id})
        return updated

    clone = _clone_subtree(location.node, collect_entry_ids(updated), collect_handles(updated))
    location.siblings.insert(location.index + 1, clone)
    return updated


def update_payload(tree: List[TreeNode], node_id: NodeHandle, changes: Dict[str, Any]) -> List[TreeNode]:
    """Shallow-merge ``changes`` into a node's entry.

    The node kind is derived again from the merged entry. When the merge
    leaves no submenu block but legacy submenu fields, or existing children,
    still call for one, a block is rebuilt from them. Children are untouched.

    Raises:
        MenuValidationError: when the merged entry is invalid or its id is
            already used by another entry.
    """
    updated = copy_tree(tree)
    node = find_node(updated, node_id)
    if node is None:
        logger.debug("Update target not found", extra={"node_id": node_id})
        return updated

    previous = node.data
    merged_fields = previous.model_dump()
    merged_fields.update(changes)
    try:
        merged = MenuEntry.model_validate(merged_fields)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise MenuValidationError(f"Invalid item data: {errors}", node_id=node_id) from e

    if merged.id and merged.id != previous.id and merged.id in collect_entry_ids(updated):
        raise MenuValidationError(
            f"Menu id '{merged.id}' is already used by another item.",
            node_id=node_id,
        )

    if merged.submenu is None and (merged.has_legacy_submenu_fields or node.children):
        if previous.submenu is not None:
            merged.submenu = previous.submenu.model_copy(deep=True)
        else:
            merged.submenu = synthesize_submenu(merged)

    if merged.submenu is not None and merged.submenu.items:
        merged.submenu = merged.submenu.model_copy(update={"items": []})

    node.data = merged
    node.kind = kind_of(merged)
    return updated
