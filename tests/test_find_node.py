"""
Feature: Locate nodes in the menu tree
  As the mutation engine
  I want to find nodes with their owning sibling list
  So that edits can splice the tree at the right place

Scenario: Find a nested node
  Given a tree with a submenu
  When a nested handle is looked up
  Then the node, its sibling list, index and parent are returned

Scenario: Find a root node
  Given a tree
  When a root handle is looked up
  Then the sibling list is the root list itself

Scenario: Unknown handle
  When an unknown handle is looked up
  Then nothing is returned
"""

import pytest
from models.menu import MenuEntry
from editor.builder import build_tree
from editor.locator import (
    collect_entry_ids,
    collect_handles,
    contains_node,
    find_by_entry_id,
    find_node,
    find_with_parent,
    iter_nodes,
)


@pytest.fixture(name="tree")
def tree_fixture():
    entries = [
        MenuEntry.model_validate({"id": "menu_a", "title": "A"}),
        MenuEntry.model_validate({
            "id": "menu_b",
            "title": "B",
            "submenu": {"items": [
                {"id": "menu_c", "title": "C"},
                {"id": "menu_d", "title": "D", "submenu": {"items": [{"id": "menu_e", "title": "E"}]}}
            ]}
        }),
    ]
    return build_tree(entries)


def test_iter_nodes_is_depth_first_preorder(tree):
    assert [node.data.id for node in iter_nodes(tree)] == ["menu_a", "menu_b", "menu_c", "menu_d", "menu_e"]


def test_find_node_nested(tree):
    node = find_node(tree, "root_1_1_0")

    assert node is not None
    assert node.data.id == "menu_e"


def test_find_node_missing(tree):
    assert find_node(tree, "root_9") is None


def test_find_with_parent_nested(tree):
    # When a nested handle is looked up
    location = find_with_parent(tree, "root_1_1")

    # Then the owning list, index and parent are returned
    assert location.node.data.id == "menu_d"
    assert location.index == 1
    assert location.siblings is tree[1].children
    assert location.parent is tree[1]
    assert not location.is_root


def test_find_with_parent_root(tree):
    location = find_with_parent(tree, "root_0")

    assert location.siblings is tree
    assert location.index == 0
    assert location.parent is None
    assert location.is_root


def test_find_with_parent_missing(tree):
    assert find_with_parent(tree, "nope") is None


def test_find_by_entry_id(tree):
    node = find_by_entry_id(tree, "menu_c")

    assert node.id == "root_1_0"
    assert find_by_entry_id(tree, "menu_zzz") is None


def test_collect_ids_and_handles(tree):
    assert collect_entry_ids(tree) == {"menu_a", "menu_b", "menu_c", "menu_d", "menu_e"}
    assert collect_handles(tree) == {"root_0", "root_1", "root_1_0", "root_1_1", "root_1_1_0"}


def test_contains_node(tree):
    branch = tree[1]

    assert contains_node(branch, "root_1")
    assert contains_node(branch, "root_1_1_0")
    assert not contains_node(branch, "root_0")
