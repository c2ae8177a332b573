"""Tests for element classification, filtering and statistics."""

from axsnap.accessibility.node_provider import NodeAttributes
from axsnap.core.element_classifier import (
    DEFAULT_NON_INTERACTABLE_ROLES,
    ElementCollector,
    FilterPolicy,
    classify,
    display_role,
    resolve_geometry,
    resolve_text,
)
from axsnap.core.tree_walker import RawNodeRecord


def record(role, texts=(), position=None, size=None, role_description=None):
    return RawNodeRecord(
        handle=object(),
        depth=0,
        attributes=NodeAttributes(
            role=role,
            role_description=role_description,
            text_candidates=list(texts),
            position=position,
            size=size,
        ),
    )


class TestResolveGeometry:
    def test_full_geometry(self):
        geometry = resolve_geometry((10, 20), (30, 40))
        assert (geometry.x, geometry.y, geometry.width, geometry.height) == (10, 20, 30, 40)
        assert geometry.visible

    def test_missing_position_or_size(self):
        assert not resolve_geometry(None, (30, 40)).visible
        assert not resolve_geometry((10, 20), None).visible
        assert resolve_geometry(None, None).x is None

    def test_zero_dimension_reported_absent(self):
        geometry = resolve_geometry((10, 20), (0, 40))
        assert geometry.visible
        assert geometry.width is None
        assert geometry.height == 40

    def test_both_dimensions_zero_is_invisible(self):
        geometry = resolve_geometry((10, 20), (0, 0))
        assert not geometry.visible
        assert geometry.x is None and geometry.width is None


class TestResolveText:
    def test_joins_all_candidates(self):
        assert resolve_text(["7", None, "Seven", ""]) == "7 Seven"

    def test_blank_is_no_text(self):
        assert resolve_text([None, "", "   "]) is None
        assert resolve_text([]) is None


class TestDisplayRole:
    def test_description_appended(self):
        assert display_role("AXButton", "push button") == "AXButton (push button)"

    def test_redundant_description_dropped(self):
        assert display_role("AXButton", "Button") == "AXButton"
        assert display_role("AXButton", None) == "AXButton"
        assert display_role("AXButton", "") == "AXButton"


class TestClassify:
    def test_group_without_text_excluded(self):
        outcome = classify(record("AXGroup", position=(0, 0), size=(10, 10)), FilterPolicy())
        assert not outcome.accepted
        assert outcome.non_interactable
        assert not outcome.has_text

    def test_group_with_text_accepted(self):
        outcome = classify(record("AXGroup", texts=["Keypad"]), FilterPolicy())
        assert outcome.accepted
        assert outcome.element.text == "Keypad"

    def test_interactable_without_text_accepted(self):
        outcome = classify(record("AXButton"), FilterPolicy())
        assert outcome.accepted
        assert outcome.element.text is None

    def test_only_visible_requires_geometry(self):
        policy = FilterPolicy(only_visible=True)
        assert not classify(record("AXButton", texts=["OK"]), policy).accepted
        assert classify(record("AXButton", texts=["OK"], position=(1, 2), size=(3, 4)), policy).accepted

    def test_element_uses_annotated_role(self):
        outcome = classify(record("AXButton", texts=["OK"], role_description="push button"), FilterPolicy())
        assert outcome.element.role == "AXButton (push button)"
        assert outcome.raw_role == "AXButton"

    def test_custom_role_set(self):
        policy = FilterPolicy(non_interactable_roles=frozenset({"AXButton"}))
        assert not classify(record("AXButton"), policy).accepted
        assert classify(record("AXGroup"), policy).accepted

    def test_default_roles(self):
        assert {"AXGroup", "AXStaticText", "AXUnknown"} <= DEFAULT_NON_INTERACTABLE_ROLES
        assert "AXButton" not in DEFAULT_NON_INTERACTABLE_ROLES


class TestElementCollector:
    def test_statistics_invariants(self):
        collector = ElementCollector()
        collector.extend(
            [
                record("AXButton", texts=["OK"], position=(0, 0), size=(10, 10)),
                record("AXButton"),
                record("AXGroup"),
                record("AXStaticText", texts=["Label"]),
            ]
        )
        stats = collector.stats
        assert len(collector.elements) == 3
        assert stats.with_text_count == 2
        assert stats.without_text_count == 1
        assert stats.with_text_count + stats.without_text_count == len(collector.elements)
        assert stats.excluded_count == 1
        assert stats.visible_elements_count == 1
        assert stats.role_counts == {"AXButton": 2, "AXGroup": 1, "AXStaticText": 1}

    def test_exclusion_reasons_counted_independently(self):
        collector = ElementCollector()
        collector.add(record("AXGroup"))
        stats = collector.stats
        assert stats.excluded_count == 1
        assert stats.excluded_non_interactable == 1
        assert stats.excluded_no_text == 1

    def test_invisible_exclusion_has_no_reason_counter(self):
        collector = ElementCollector(FilterPolicy(only_visible=True))
        collector.add(record("AXButton", texts=["OK"]))
        stats = collector.stats
        assert stats.excluded_count == 1
        assert stats.excluded_non_interactable == 0
        assert stats.excluded_no_text == 0

    def test_invisible_non_interactable_counts_role_reason(self):
        collector = ElementCollector(FilterPolicy(only_visible=True))
        collector.add(record("AXStaticText", texts=["Label"]))
        stats = collector.stats
        assert stats.excluded_count == 1
        assert stats.excluded_non_interactable == 1
        assert stats.excluded_no_text == 0

    def test_visible_count_includes_rejected_nodes(self):
        collector = ElementCollector()
        collector.add(record("AXGroup", position=(0, 0), size=(5, 5)))
        assert collector.stats.visible_elements_count == 1
        assert collector.elements == []

    def test_duplicates_collapse(self):
        collector = ElementCollector()
        collector.add(record("AXButton", texts=["OK"], position=(1, 1), size=(2, 2)))
        collector.add(record("AXButton", texts=["OK"], position=(1, 1), size=(2, 2)))
        assert len(collector.elements) == 1
        assert collector.stats.with_text_count == 1
        assert collector.stats.role_counts["AXButton"] == 2

    def test_statistics_are_a_frozen_copy(self):
        collector = ElementCollector()
        collector.add(record("AXButton", texts=["OK"]))
        before = collector.stats
        collector.add(record("AXButton", texts=["Cancel"]))

        assert before.count == 1
        assert before.role_counts == {"AXButton": 1}
        assert collector.stats.count == 2
        assert collector.stats.role_counts == {"AXButton": 2}
