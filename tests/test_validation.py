"""
Tests for structural validation of untrusted tree data.
"""

import pytest

from pocket.constants import MAX_GROUP_DEPTH
from pocket.models.base import Group, Prompt
from pocket.models.files import PromptTree
from pocket.models.validation import (
    find_shape_error,
    is_group,
    is_prompt,
    parse_tree,
    validate_tree,
)


def _group(id="g", name="G", children=None, prompts=None):
    return {"id": id, "name": name, "children": children or [], "prompts": prompts or []}


def _prompt(id="p", title="T", content="C"):
    return {"id": id, "title": title, "content": content}


def _nested(depth):
    """Tree holding one chain of depth groups, the leaf owning a prompt."""
    node = _group(id="leaf", prompts=[_prompt(id="leaf-p")])
    for level in range(depth - 1):
        node = _group(id=f"g{level}", children=[node])
    return {"groups": [node]}


class TestNodeDiscriminators:
    """Test is_group / is_prompt."""

    def test_models(self):
        group = Group(name="G")
        prompt = Prompt(title="T")
        assert is_group(group) and not is_prompt(group)
        assert is_prompt(prompt) and not is_group(prompt)

    def test_raw_mappings(self):
        assert is_group(_group())
        assert not is_prompt(_group())
        assert is_prompt(_prompt())
        assert not is_group(_prompt())

    def test_mapping_with_only_prompts_is_group(self):
        assert is_group({"prompts": []})

    def test_content_with_children_is_not_prompt(self):
        assert not is_prompt({"content": "x", "children": []})

    def test_other_values(self):
        assert not is_group("group")
        assert not is_prompt(None)


class TestValidateTree:
    """Test validate_tree acceptance and rejection."""

    def test_accepts_empty_tree(self):
        assert validate_tree({"groups": []})

    def test_accepts_valid_tree(self):
        data = {"groups": [_group(prompts=[_prompt()], children=[_group(id="c")])]}
        assert validate_tree(data)

    def test_accepts_nesting_up_to_the_limit(self):
        assert validate_tree(_nested(MAX_GROUP_DEPTH))

    @pytest.mark.parametrize("depth", [MAX_GROUP_DEPTH + 1, 300, 5000])
    def test_rejects_nesting_past_the_limit(self, depth):
        assert not validate_tree(_nested(depth))
        assert "nested deeper than" in find_shape_error(_nested(depth))

    def test_accepts_extra_fields_and_color(self):
        group = _group()
        group["color"] = "blue"
        group["extra"] = 1
        assert validate_tree({"groups": [group], "version": 2})

    @pytest.mark.parametrize("candidate", [None, "text", 42, ["groups"], True])
    def test_rejects_non_object(self, candidate):
        assert validate_tree(candidate) is False

    def test_rejects_groups_not_a_list(self):
        assert not validate_tree({"groups": "not an array"})
        assert not validate_tree({"groups": {"id": "g"}})
        assert not validate_tree({})

    @pytest.mark.parametrize("missing", ["id", "name", "children", "prompts"])
    def test_rejects_group_missing_field(self, missing):
        group = _group()
        del group[missing]
        assert not validate_tree({"groups": [group]})

    def test_rejects_non_string_group_id(self):
        assert not validate_tree({"groups": [_group(id=1)]})

    @pytest.mark.parametrize("missing", ["id", "title", "content"])
    def test_rejects_prompt_missing_field(self, missing):
        prompt = _prompt()
        del prompt[missing]
        assert not validate_tree({"groups": [_group(prompts=[prompt])]})

    def test_rejects_malformed_node_deep_in_tree(self):
        bad = _group(id="bad", prompts=[{"id": "p", "title": None, "content": ""}])
        data = {"groups": [_group(id="ok"), _group(id="outer", children=[bad])]}
        assert not validate_tree(data)

    def test_rejects_non_object_prompt(self):
        assert not validate_tree({"groups": [_group(prompts=["just text"])]})


class TestParseTree:
    """Test parse_tree tagged results."""

    def test_success_returns_tree(self):
        result = parse_tree({"groups": [_group(prompts=[_prompt()])]})
        assert result.ok
        assert result.error is None
        assert isinstance(result.tree, PromptTree)
        assert result.tree.groups[0].prompts[0].title == "T"

    def test_failure_names_the_offending_node(self):
        data = {"groups": [_group(children=[_group(id="c", prompts=[_prompt(title=3)])])]}
        result = parse_tree(data)
        assert not result.ok
        assert result.tree is None
        assert result.error == "groups[0].children[0].prompts[0]: 'title' must be a string"

    def test_root_error(self):
        assert find_shape_error([]) == "root must be an object"

    def test_parses_tree_at_the_depth_limit(self):
        result = parse_tree(_nested(MAX_GROUP_DEPTH))
        assert result.ok
        node = result.tree.groups[0]
        for _ in range(MAX_GROUP_DEPTH - 1):
            node = node.children[0]
        assert node.prompts[0].id == "leaf-p"

    def test_parse_agrees_with_validate(self):
        candidates = [
            {"groups": []},
            {"groups": [_group(prompts=[_prompt()])]},
            {"groups": [{"id": "x"}]},
            None,
            _nested(MAX_GROUP_DEPTH),
            _nested(MAX_GROUP_DEPTH + 1),
            _nested(300),
        ]
        for candidate in candidates:
            assert parse_tree(candidate).ok == validate_tree(candidate)
