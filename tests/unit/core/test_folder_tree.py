"""
Unit Tests for the in-memory folder hierarchy
"""
from types import SimpleNamespace

import pytest

from app.folder_tree import FolderTree


def folder(fid, parent=None, name=None):
    return SimpleNamespace(id=fid, parent_id=parent, name=name or fid, color='#135bec')


@pytest.fixture
def folders():
    # a
    # |- a1
    # |  `- a1x
    # `- a2
    # b
    return [
        folder('a'),
        folder('a1', 'a'),
        folder('b'),
        folder('a2', 'a'),
        folder('a1x', 'a1'),
    ]


class TestBuild:
    def test_roots_are_folders_without_parent(self, folders):
        tree = FolderTree(folders)
        assert [f.id for f in tree.roots()] == ['a', 'b']

    def test_children_keep_input_order(self, folders):
        tree = FolderTree(folders)
        assert [f.id for f in tree.children('a')] == ['a1', 'a2']
        assert tree.children('b') == []

    def test_dangling_parent_is_shown_at_root(self):
        tree = FolderTree([folder('x', 'deleted-parent')])
        assert [f.id for f in tree.roots()] == ['x']


class TestWalk:
    def test_every_folder_appears_once_under_its_parent(self, folders):
        """Pre-order walk: each node once, directly after its parent's subtree starts"""
        tree = FolderTree(folders)
        nodes = list(tree.walk())

        ids = [n.id for n in nodes]
        assert sorted(ids) == sorted(f.id for f in folders)
        assert len(ids) == len(set(ids))

        by_id = {f.id: f for f in folders}
        stack = []
        for node in nodes:
            del stack[node.depth:]
            expected_parent = stack[-1] if stack else None
            assert by_id[node.id].parent_id == expected_parent
            stack.append(node.id)

    def test_depths(self, folders):
        depths = {n.id: n.depth for n in FolderTree(folders).walk()}
        assert depths == {'a': 0, 'a1': 1, 'a1x': 2, 'a2': 1, 'b': 0}

    def test_existing_cycle_is_not_looped(self):
        """Records that point at each other are unreachable but never loop"""
        tree = FolderTree([folder('r'), folder('p', 'q'), folder('q', 'p')])
        assert [n.id for n in tree.walk()] == ['r']

    def test_has_children_flag(self, folders):
        flags = {n.id: n.has_children for n in FolderTree(folders).walk()}
        assert flags['a'] and flags['a1']
        assert not flags['a2'] and not flags['b']


class TestExpandCollapse:
    def test_collapsed_tree_shows_only_roots(self, folders):
        assert [n.id for n in FolderTree(folders).visible()] == ['a', 'b']

    def test_expanding_a_node_shows_its_children(self, folders):
        tree = FolderTree(folders, expanded=['a'])
        assert [n.id for n in tree.visible()] == ['a', 'a1', 'a2', 'b']

    def test_toggle_flips_state(self, folders):
        tree = FolderTree(folders)
        assert tree.toggle('a') is True
        assert tree.is_expanded('a')
        assert tree.toggle('a') is False
        assert not tree.is_expanded('a')

    def test_toggle_unknown_folder_is_ignored(self, folders):
        tree = FolderTree(folders)
        assert tree.toggle('nope') is False
        assert tree.expanded == set()

    def test_toggled_does_not_change_current_state(self, folders):
        tree = FolderTree(folders, expanded=['a'])
        assert tree.toggled('a1') == ['a', 'a1']
        assert tree.toggled('a') == []
        assert tree.expanded == {'a'}

    def test_unknown_expanded_ids_are_dropped(self, folders):
        assert FolderTree(folders, expanded=['ghost']).expanded == set()


class TestAncestry:
    def test_ancestors_walk_up_to_root(self, folders):
        tree = FolderTree(folders)
        assert [f.id for f in tree.ancestors('a1x')] == ['a1', 'a']
        assert tree.ancestors('a') == []

    def test_path_is_root_first(self, folders):
        assert [f.id for f in FolderTree(folders).path('a1x')] == ['a', 'a1', 'a1x']

    def test_cannot_move_into_itself(self, folders):
        assert not FolderTree(folders).can_move('a', 'a')

    def test_cannot_move_into_descendant(self, folders):
        tree = FolderTree(folders)
        assert not tree.can_move('a', 'a1x')
        assert not tree.can_move('a', 'a2')

    def test_can_move_to_unrelated_folder_or_root(self, folders):
        tree = FolderTree(folders)
        assert tree.can_move('a1', 'b')
        assert tree.can_move('a1x', 'a')
        assert tree.can_move('a1', None)
