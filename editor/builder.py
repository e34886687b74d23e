"""
Conversion between stored menu entries and the editable tree.

``build_tree`` turns nested ``MenuEntry`` lists into ``TreeNode`` lists with
position-derived handles; ``flatten_tree`` is its inverse and is what gets
saved and compared for unsaved changes.
"""

from typing import List, Optional, Set
from models.menu import MenuEntry, SubmenuConfig, SubmenuLayout, SubmenuStyle
from editor.identifiers import generate_menu_id
from editor.tree import ROOT_PREFIX, NodeHandle, TreeNode, kind_of
from settings import logger


def build_tree(
    entries: List[MenuEntry],
    parent_path: Optional[str] = None,
    level: int = 0,
) -> List[TreeNode]:
    """Build editor nodes from stored entries.

    Handles are ``root_<i>`` for top-level entries and ``<parent>_<i>`` below,
    so they are unique within one build without looking at persisted ids.
    """
    tree: List[TreeNode] = []

    for index, entry in enumerate(entries):
        node_id = NodeHandle(f"{parent_path or ROOT_PREFIX}_{index}")
        data = entry.model_copy(deep=True)
        children: List[TreeNode] = []

        if data.submenu is not None:
            children = build_tree(data.submenu.items, parent_path=node_id, level=level + 1)
            # Children live on the node; the block is regenerated on flatten
            data.submenu = data.submenu.model_copy(update={"items": []})

        tree.append(TreeNode(
            id=node_id,
            data=data,
            children=children,
            level=level,
            kind=kind_of(data),
        ))

    return tree


def synthesize_submenu(entry: MenuEntry) -> SubmenuConfig:
    """Submenu block for an entry, repaired from legacy fields when missing."""
    if entry.submenu is not None:
        return entry.submenu.model_copy(deep=True)

    return SubmenuConfig(
        title=entry.submenu_title,
        style=entry.submenu_style or SubmenuStyle.FULL_SCREEN,
        layout=entry.submenu_layout or SubmenuLayout.GRID,
    )


def flatten_tree(tree: List[TreeNode]) -> List[MenuEntry]:
    """Convert editor nodes back into stored entries.

    Nodes with children, or that already are branches, get a submenu block
    whose items are their flattened children. Childless leaves never carry
    one, whatever legacy submenu fields they hold.
    """
    result: List[MenuEntry] = []

    for node in tree:
        entry = node.data.model_copy(deep=True)

        if node.children or entry.submenu is not None:
            entry.submenu = synthesize_submenu(entry).model_copy(
                update={"items": flatten_tree(node.children)}
            )
        else:
            entry.submenu = None

        result.append(entry)

    return result


def _collect_ids(entries: List[MenuEntry], ids: Set[str]) -> Set[str]:
    for entry in entries:
        if entry.id:
            ids.add(entry.id)
        if entry.submenu is not None:
            _collect_ids(entry.submenu.items, ids)
    return ids


def normalize_entries(entries: List[MenuEntry]) -> List[MenuEntry]:
    """Backfill missing ids and re-mint duplicated ones.

    Every id in the incoming structure is collected before any new one is
    minted, so two siblings that both lack an id cannot receive the same one.
    """
    existing_ids = _collect_ids(entries, set())
    seen: Set[str] = set()
    repaired = 0

    def process(entry: MenuEntry) -> MenuEntry:
        nonlocal repaired
        processed = entry.model_copy(deep=True)

        if not processed.id or processed.id in seen:
            new_id = generate_menu_id(processed.title, existing_ids)
            logger.warning("Assigned menu id during load", extra={
                "title": processed.title,
                "previous_id": processed.id,
                "menu_id": new_id
            })
            processed.id = new_id
            existing_ids.add(new_id)
            repaired += 1
        seen.add(processed.id)

        if processed.submenu is not None:
            processed.submenu.items = [process(child) for child in processed.submenu.items]

        return processed

    result = [process(entry) for entry in entries]

    if repaired:
        logger.info("Normalized menu entries", extra={"repaired_ids": repaired})

    return result
