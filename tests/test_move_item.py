"""
Feature: Drag and drop items in the menu tree
  As an admin editing a menu
  I want to move items before, after or inside other items
  So that I can reorganize the app navigation

Scenario: Move a nested item to the root
  Given a tree where C lives inside B
  When C is moved before A
  Then C is the first root entry at level 0 and B no longer contains it

Scenario: Move an item inside a submenu
  When an item is moved inside a submenu
  Then it becomes the submenu's first child and its subtree is re-leveled

Scenario: Move onto itself
  When an item is moved relative to itself
  Then nothing changes

Scenario: Move into its own subtree
  When a submenu is moved inside one of its descendants
  Then nothing changes
"""

import pytest
from models.menu import MenuEntry
from editor.builder import build_tree, flatten_tree
from editor.changes import snapshot
from editor.locator import find_by_entry_id, iter_nodes
from editor.mutations import move_node
from editor.tree import MovePosition, NodeKind


def assert_levels(tree, level=0):
    for node in tree:
        assert node.level == level
        assert_levels(node.children, level + 1)


@pytest.fixture(name="tree")
def tree_fixture():
    entries = [
        MenuEntry.model_validate({"id": "menu_a", "title": "A"}),
        MenuEntry.model_validate({
            "id": "menu_b",
            "title": "B",
            "submenu": {"items": [{"id": "menu_c", "title": "C"}]}
        }),
        MenuEntry.model_validate({
            "id": "menu_d",
            "title": "D",
            "submenu": {"items": [
                {"id": "menu_e", "title": "E", "submenu": {"items": [{"id": "menu_f", "title": "F"}]}}
            ]}
        }),
    ]
    return build_tree(entries)


def test_move_nested_item_before_root_item(tree):
    # When C is moved before A
    updated = move_node(tree, "root_1_0", "root_0", "before")

    # Then C leads the root list at level 0
    flat = flatten_tree(updated)
    assert [entry.id for entry in flat] == ["menu_c", "menu_a", "menu_b", "menu_d"]
    assert find_by_entry_id(updated, "menu_c").level == 0
    # And B's submenu no longer contains it
    assert flat[2].submenu.items == []
    assert_levels(updated)


def test_move_after_sibling(tree):
    updated = move_node(tree, "root_0", "root_1", MovePosition.AFTER)

    assert [node.data.id for node in updated] == ["menu_b", "menu_a", "menu_d"]


def test_move_inside_submenu_becomes_first_child(tree):
    # When A is moved inside D
    updated = move_node(tree, "root_0", "root_2", MovePosition.INSIDE)

    # Then it is D's first child
    d = find_by_entry_id(updated, "menu_d")
    assert [child.data.id for child in d.children] == ["menu_a", "menu_e"]
    assert d.children[0].level == 1
    assert_levels(updated)


def test_move_subtree_relevels_all_descendants(tree):
    # When E (with child F) is moved inside C's parent B
    updated = move_node(tree, "root_2_0", "root_1", MovePosition.INSIDE)

    e = find_by_entry_id(updated, "menu_e")
    f = find_by_entry_id(updated, "menu_f")
    assert e.level == 1
    assert f.level == 2

    # And when B (now with E and F) is moved inside D
    updated = move_node(updated, "root_1", "root_2", MovePosition.INSIDE)

    assert find_by_entry_id(updated, "menu_b").level == 1
    assert find_by_entry_id(updated, "menu_e").level == 2
    assert find_by_entry_id(updated, "menu_f").level == 3
    assert_levels(updated)


def test_move_deep_item_to_root_relevels(tree):
    updated = move_node(tree, "root_2_0", "root_0", MovePosition.AFTER)

    assert [node.data.id for node in updated] == ["menu_a", "menu_e", "menu_b", "menu_d"]
    assert find_by_entry_id(updated, "menu_f").level == 1
    assert_levels(updated)


def test_move_inside_plain_item_promotes_it(tree):
    # When C is dropped inside the plain item A
    updated = move_node(tree, "root_1_0", "root_0", MovePosition.INSIDE)

    # Then A becomes a submenu holding C
    a = find_by_entry_id(updated, "menu_a")
    assert a.kind == NodeKind.SUBMENU
    assert a.data.submenu is not None
    assert [child.data.id for child in a.children] == ["menu_c"]
    assert flatten_tree(updated)[0].submenu.items[0].id == "menu_c"


@pytest.mark.parametrize("position", ["before", "after", "inside"])
def test_move_onto_itself_is_noop(tree, position):
    for node in list(iter_nodes(tree)):
        updated = move_node(tree, node.id, node.id, position)
        assert snapshot(updated) == snapshot(tree)


def test_move_into_own_subtree_is_noop(tree):
    # When D is moved inside its grandchild F's parent E
    updated = move_node(tree, "root_2", "root_2_0", MovePosition.INSIDE)
    assert snapshot(updated) == snapshot(tree)

    # Or next to its own descendant
    updated = move_node(tree, "root_2", "root_2_0_0", MovePosition.BEFORE)
    assert snapshot(updated) == snapshot(tree)


def test_move_to_missing_target_is_noop(tree):
    updated = move_node(tree, "root_0", "root_99", MovePosition.BEFORE)

    assert snapshot(updated) == snapshot(tree)


def test_move_missing_item_is_noop(tree):
    updated = move_node(tree, "root_99", "root_0", MovePosition.BEFORE)

    assert snapshot(updated) == snapshot(tree)


def test_move_with_invalid_position_is_noop(tree):
    updated = move_node(tree, "root_0", "root_1", "sideways")

    assert snapshot(updated) == snapshot(tree)


def test_move_does_not_modify_input(tree):
    before = snapshot(tree)

    move_node(tree, "root_1_0", "root_0", MovePosition.BEFORE)

    assert snapshot(tree) == before
    assert tree[1].children[0].data.id == "menu_c"
