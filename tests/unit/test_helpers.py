"""Unit tests for condition upserts and merge patch generation."""

import json
import warnings
from addonhub.types.models import Condition
from addonhub.utils.helpers import (
    canonicalize_dict,
    create_merge_patch,
    deep_compare_dict,
    find_condition,
    set_condition,
)


def make_condition(type_, status, reason=None, ltt=None):
    return Condition(
        type=type_,
        status=status,
        reason=reason,
        message=None,
        observed_generation=None,
        last_transition_time=ltt,
    )


class TestSetCondition:
    """Tests for set_condition."""

    def test_appends_new_type(self):
        conds = [make_condition("ManifestApplied", "True", ltt="2024-01-01T00:00:00Z")]
        result = set_condition(conds, make_condition("Progressing", "True"))
        assert [c.type for c in result] == ["ManifestApplied", "Progressing"]
        assert result[1].last_transition_time is not None

    def test_input_is_not_mutated(self):
        conds = [make_condition("Progressing", "True", "Installing", "2024-01-01T00:00:00Z")]
        set_condition(conds, make_condition("Progressing", "False", "InstallSucceed"))
        assert conds[0].status == "True"
        assert conds[0].reason == "Installing"

    def test_same_status_keeps_transition_time(self):
        conds = [make_condition("Progressing", "True", "Installing", "2024-01-01T00:00:00Z")]
        result = set_condition(conds, make_condition("Progressing", "True", "Upgrading"))
        assert result[0].reason == "Upgrading"
        assert result[0].last_transition_time == "2024-01-01T00:00:00Z"

    def test_status_flip_bumps_transition_time(self):
        conds = [make_condition("Progressing", "True", "Installing", "2024-01-01T00:00:00Z")]
        result = set_condition(conds, make_condition("Progressing", "False", "InstallSucceed"))
        assert result[0].last_transition_time != "2024-01-01T00:00:00Z"

    def test_keeps_position(self):
        conds = [
            make_condition("A", "True", ltt="t"),
            make_condition("Progressing", "True", ltt="t"),
            make_condition("B", "True", ltt="t"),
        ]
        result = set_condition(conds, make_condition("Progressing", "False"))
        assert [c.type for c in result] == ["A", "Progressing", "B"]

    def test_find_condition(self):
        conds = [make_condition("A", "True"), make_condition("B", "False")]
        assert find_condition(conds, "B").status == "False"
        assert find_condition(conds, "C") is None
        assert find_condition(None, "A") is None


class TestCreateMergePatch:
    """Tests for create_merge_patch."""

    def test_no_changes(self):
        doc = {"status": {"conditions": [{"type": "A"}], "configReferences": []}}
        assert create_merge_patch(doc, doc) == {}

    def test_added_key(self):
        assert create_merge_patch({}, {"metadata": {"uid": "1"}}) == {"metadata": {"uid": "1"}}

    def test_removed_key_is_null(self):
        assert create_merge_patch({"a": 1, "b": 2}, {"a": 1}) == {"b": None}

    def test_nested_objects_are_diffed(self):
        original = {"status": {"a": 1, "b": {"c": 1, "d": 2}}}
        modified = {"status": {"a": 1, "b": {"c": 1, "d": 3}}}
        assert create_merge_patch(original, modified) == {"status": {"b": {"d": 3}}}

    def test_lists_are_replaced(self):
        original = {"conditions": [{"type": "A"}, {"type": "B"}]}
        modified = {"conditions": [{"type": "A"}, {"type": "C"}]}
        assert create_merge_patch(original, modified) == modified


class TestDeepCompare:
    def test_ignores_key_order(self):
        assert deep_compare_dict({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"d": 3, "c": 2}, "a": 1})

    def test_list_order_matters(self):
        assert not deep_compare_dict([1, 2], [2, 1])

    def test_none(self):
        assert deep_compare_dict(None, None)
        assert not deep_compare_dict({}, None)

    def test_canonical_form_is_sorted(self):
        assert canonicalize_dict({"b": 1, "a": 2}) == canonicalize_dict({"a": 2, "b": 1})

    def test_canonical_form_is_plain_json(self):
        data = {"open-cluster-management.io/addon-name": "test", "b": [{"d": 1, "c": None}]}
        assert json.loads(canonicalize_dict(data)) == data
        assert canonicalize_dict(data) == (
            '{"b": [{"c": null, "d": 1}], "open-cluster-management.io/addon-name": "test"}'
        )

    def test_canonical_form_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            canonicalize_dict({"a": {"b": 1}})
