"""Tests for snapshot assembly."""

import pytest
from pydantic import ValidationError

from axsnap.accessibility.models import Element
from axsnap.core.element_classifier import FilterPolicy
from axsnap.core.errors import InvalidRootError
from axsnap.core.snapshot import element_sort_key, sort_elements, traverse

from conftest import make_node


class TestSorting:
    def test_missing_coordinates_sort_last(self):
        floating = Element(role="AXApplication", text="Calculator")
        low = Element(role="AXButton", text="=", x=60, y=150)
        high = Element(role="AXButton", text="7", x=10, y=100)
        assert sort_elements([floating, low, high]) == [high, low, floating]

    def test_x_breaks_row_ties(self):
        right = Element(role="AXButton", text="8", x=60, y=100)
        left = Element(role="AXButton", text="7", x=10, y=100)
        assert sort_elements([right, left]) == [left, right]

    def test_key_is_total_on_attributes(self):
        a = Element(role="AXButton", text="A", x=0, y=0)
        b = Element(role="AXButton", text="B", x=0, y=0)
        assert element_sort_key(a) < element_sort_key(b)
        assert sort_elements([b, a]) == sort_elements([a, b])


class TestTraverse:
    def test_calculator_snapshot(self, provider, calculator_tree):
        snapshot = traverse(provider, calculator_tree, False)

        assert snapshot.label == "Calculator"
        assert [(e.role, e.text) for e in snapshot.elements] == [
            ("AXMenuBar", None),
            ("AXWindow", "Calculator"),
            ("AXStaticText", "0"),
            ("AXButton", "7"),
            ("AXButton", "8"),
            ("AXButton", "="),
            ("AXApplication", "Calculator"),
        ]

    def test_calculator_statistics(self, provider, calculator_tree):
        stats = traverse(provider, calculator_tree, False).stats

        assert stats.count == 7
        assert stats.with_text_count == 6
        assert stats.without_text_count == 1
        assert stats.excluded_count == 1
        assert stats.excluded_non_interactable == 1
        assert stats.excluded_no_text == 1
        assert stats.visible_elements_count == 7
        assert stats.role_counts["AXButton"] == 3
        assert sum(stats.role_counts.values()) == 8

    def test_only_visible_drops_application(self, provider, calculator_tree):
        snapshot = traverse(provider, calculator_tree, True)
        assert all(element.x is not None for element in snapshot.elements)
        assert snapshot.stats.count == 6
        assert snapshot.stats.excluded_count == 2

    def test_only_visible_overrides_policy(self, provider, calculator_tree):
        snapshot = traverse(provider, calculator_tree, True, policy=FilterPolicy(only_visible=False))
        assert snapshot.stats.count == 6

    def test_traversal_is_idempotent(self, provider, calculator_tree):
        first = traverse(provider, calculator_tree, False)
        second = traverse(provider, calculator_tree, False)
        assert first.elements == second.elements
        assert first.stats == second.stats

    def test_no_duplicates(self, provider, calculator_tree):
        calculator_tree.add_child(make_node("AXButton", title="7", position=(10, 100), size=(40, 40)))
        elements = traverse(provider, calculator_tree, False).elements
        assert len(elements) == len(set(elements))

    def test_empty_snapshot_is_valid(self, provider):
        snapshot = traverse(provider, make_node("AXGroup"), False)
        assert snapshot.elements == ()
        assert snapshot.stats.count == 0
        assert snapshot.stats.excluded_count == 1

    def test_label_and_depth_overrides(self, provider, calculator_tree):
        snapshot = traverse(provider, calculator_tree, False, max_depth=0, label="root only")
        assert snapshot.label == "root only"
        assert [e.role for e in snapshot.elements] == ["AXApplication"]

    def test_none_root(self, provider):
        with pytest.raises(InvalidRootError):
            traverse(provider, None, False)

    def test_capture_duration_recorded(self, provider, calculator_tree):
        assert traverse(provider, calculator_tree, False).capture_duration.total_seconds() >= 0


class TestSnapshotImmutability:
    def test_statistics_cannot_be_reassigned(self, provider, calculator_tree):
        snapshot = traverse(provider, calculator_tree, False)
        with pytest.raises(ValidationError):
            snapshot.stats.count = 999
        assert snapshot.stats.count == 7

    def test_role_counts_are_read_only(self, provider, calculator_tree):
        snapshot = traverse(provider, calculator_tree, False)
        with pytest.raises(TypeError):
            snapshot.stats.role_counts["AXButton"] = 99
        assert snapshot.stats.role_counts["AXButton"] == 3

    def test_snapshot_fields_cannot_be_reassigned(self, provider, calculator_tree):
        snapshot = traverse(provider, calculator_tree, False)
        with pytest.raises(ValidationError):
            snapshot.label = "changed"
