"""
Tests for tree traversal helpers.

Tests cover:
- Pre-order group and prompt lookup
- Container lookup and subtree removal
- Paths, containment, duplicate ids and cloning
"""

from pocket.managers.navigation_manager import (
    clone_group,
    contains_group,
    duplicate_ids,
    find_group,
    find_group_container,
    find_parent_group,
    find_prompt,
    group_path,
    iter_groups,
    iter_prompts,
    remove_group,
)


class TestLookup:
    """Test find_group / find_prompt."""

    def test_iter_groups_is_pre_order(self, sample_tree):
        assert [g.id for g in iter_groups(sample_tree.groups)] == ["g1", "g2", "g3", "g4"]

    def test_iter_prompts_scans_group_before_children(self, sample_tree):
        ids = [p.id for _, p in iter_prompts(sample_tree.groups)]
        assert ids == ["p1", "p2", "p3", "p4", "p5", "p6"]

    def test_find_root_group(self, sample_tree):
        assert find_group(sample_tree.groups, "g4").name == "Personal"

    def test_find_nested_group(self, sample_tree):
        assert find_group(sample_tree.groups, "g3").name == "Deep"

    def test_find_missing_group(self, sample_tree):
        assert find_group(sample_tree.groups, "nope") is None
        assert find_group([], "g1") is None

    def test_find_returns_first_match_in_pre_order(self, mock_data):
        inner = mock_data.create_group(id="dup", name="Inner")
        outer = mock_data.create_group(id="a", name="A", children=[inner])
        later = mock_data.create_group(id="dup", name="Later root")
        assert find_group([outer, later], "dup").name == "Inner"

    def test_find_prompt(self, sample_tree):
        assert find_prompt(sample_tree.groups, "p5").title == "Deepest"
        assert find_prompt(sample_tree.groups, "g1") is None

    def test_find_parent_group(self, sample_tree):
        assert find_parent_group(sample_tree.groups, "p4").id == "g2"
        assert find_parent_group(sample_tree.groups, "missing") is None


class TestRemoval:
    """Test container lookup and remove_group."""

    def test_container_of_root_group(self, sample_tree):
        container, index, parent = find_group_container(sample_tree.groups, "g4")
        assert container is sample_tree.groups
        assert index == 1
        assert parent is None

    def test_container_of_nested_group(self, sample_tree):
        container, index, parent = find_group_container(sample_tree.groups, "g3")
        assert parent.id == "g2"
        assert container is parent.children
        assert index == 0

    def test_remove_nested_group_takes_subtree(self, sample_tree):
        removed = remove_group(sample_tree.groups, "g2")
        assert removed.id == "g2"
        assert find_group(sample_tree.groups, "g2") is None
        assert find_group(sample_tree.groups, "g3") is None
        assert find_prompt(sample_tree.groups, "p4") is None
        assert find_prompt(sample_tree.groups, "p5") is None
        assert find_prompt(sample_tree.groups, "p1") is not None

    def test_remove_prefers_root_match_on_repeated_ids(self, mock_data):
        inner = mock_data.create_group(id="dup", name="Inner")
        outer = mock_data.create_group(id="a", name="A", children=[inner])
        later = mock_data.create_group(id="dup", name="Later root")
        roots = [outer, later]
        assert remove_group(roots, "dup") is later
        assert [g.id for g in roots] == ["a"]
        assert outer.children == [inner]

    def test_remove_searches_each_level_before_descending(self, mock_data):
        deep = mock_data.create_group(id="dup", name="Deep")
        mid = mock_data.create_group(id="m", children=[deep])
        shallow = mock_data.create_group(id="dup", name="Shallow")
        outer = mock_data.create_group(id="a", children=[mid, shallow])
        assert remove_group([outer], "dup") is shallow
        assert mid.children == [deep]

    def test_container_lookup_follows_pre_order(self, mock_data):
        inner = mock_data.create_group(id="dup", name="Inner")
        outer = mock_data.create_group(id="a", name="A", children=[inner])
        later = mock_data.create_group(id="dup", name="Later root")
        container, index, parent = find_group_container([outer, later], "dup")
        assert parent is outer
        assert container[index] is inner

    def test_remove_missing_group(self, sample_tree):
        assert remove_group(sample_tree.groups, "nope") is None
        assert len(sample_tree.groups) == 2


class TestPathsAndIds:
    """Test group_path, contains_group, duplicate_ids and clone_group."""

    def test_group_path(self, sample_tree):
        assert group_path(sample_tree.groups, "g3") == ["Work", "Sub", "Deep"]
        assert group_path(sample_tree.groups, "g4") == ["Personal"]
        assert group_path(sample_tree.groups, "nope") is None

    def test_contains_group(self, sample_tree):
        work = sample_tree.groups[0]
        assert contains_group(work, "g1")
        assert contains_group(work, "g3")
        assert not contains_group(work, "g4")

    def test_no_duplicates_in_sample(self, sample_tree):
        assert duplicate_ids(sample_tree.groups) == []

    def test_duplicates_across_kinds(self, mock_data):
        group = mock_data.create_group(
            id="same", prompts=[mock_data.create_prompt(id="same")]
        )
        other = mock_data.create_group(id="g2", prompts=[mock_data.create_prompt(id="p")])
        again = mock_data.create_group(id="g2")
        assert duplicate_ids([group, other, again]) == ["g2", "same"]

    def test_clone_group_gets_fresh_ids(self, sample_tree):
        work = sample_tree.groups[0]
        clone = clone_group(work, " (Copy)")

        original_ids = {g.id for g in iter_groups([work])}
        original_ids |= {p.id for _, p in iter_prompts([work])}
        clone_ids = {g.id for g in iter_groups([clone])}
        clone_ids |= {p.id for _, p in iter_prompts([clone])}

        assert len(clone_ids) == len(original_ids)
        assert not clone_ids & original_ids
        assert [g.name for g in iter_groups([clone])] == [
            "Work (Copy)",
            "Sub (Copy)",
            "Deep (Copy)",
        ]
        assert [p.content for _, p in iter_prompts([clone])] == [
            p.content for _, p in iter_prompts([work])
        ]

    def test_clone_does_not_touch_original(self, sample_tree):
        work = sample_tree.groups[0]
        clone_group(work, " (Copy)")
        assert work.id == "g1"
        assert work.name == "Work"
        assert work.children[0].prompts[0].id == "p4"
