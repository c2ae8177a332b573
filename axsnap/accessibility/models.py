"""Data models for element tree snapshots and their differences."""

from __future__ import annotations

from datetime import timedelta
from types import MappingProxyType
from typing import Annotated, Dict, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Element(BaseModel):
    """Representation of one reported UI node after filtering.

    Equality and hashing cover all six fields, so two elements that agree on
    role, text and geometry are the same element.
    """

    model_config = ConfigDict(frozen=True)

    role: str
    text: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    def has_position(self) -> bool:
        """True when both coordinates are known."""
        return self.x is not None and self.y is not None


class Statistics(BaseModel):
    """Aggregate counters of one traversal, fixed once the snapshot is built."""

    model_config = ConfigDict(frozen=True)

    count: int = 0
    excluded_count: int = 0
    excluded_non_interactable: int = 0
    excluded_no_text: int = 0
    with_text_count: int = 0
    without_text_count: int = 0
    visible_elements_count: int = 0
    role_counts: Mapping[str, int] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("role_counts", mode="after")
    @classmethod
    def _freeze_role_counts(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(sorted(value.items())))

    @field_serializer("role_counts")
    def _serialize_role_counts(self, value: Mapping[str, int]) -> Dict[str, int]:
        return dict(value)


class Snapshot(BaseModel):
    """Sorted, deduplicated output of one traversal."""

    model_config = ConfigDict(frozen=True)

    label: str
    elements: Tuple[Element, ...] = ()
    stats: Statistics = Field(default_factory=Statistics)
    capture_duration: timedelta = timedelta(0)


def text_delta(before: Optional[str], after: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Cheap ``(added_text, removed_text)`` delta between two texts.

    Only prefix and suffix extensions are recognised; anything else yields
    ``(None, None)``.
    """
    old = before or ""
    new = after or ""
    if len(new) > len(old):
        if new.startswith(old):
            return new[len(old):], None
        if new.endswith(old):
            return new[: len(new) - len(old)], None
    elif len(old) > len(new):
        if old.startswith(new):
            return None, old[len(new):]
        if old.endswith(new):
            return None, old[: len(old) - len(new)]
    return None, None


class TextChange(BaseModel):
    """Change of an element's text between two snapshots."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    attribute: Literal["text"] = "text"
    before: Optional[str] = None
    after: Optional[str] = None
    added_text: Optional[str] = None
    removed_text: Optional[str] = None

    @classmethod
    def between(cls, before: Optional[str], after: Optional[str]) -> TextChange:
        added, removed = text_delta(before, after)
        return cls(before=before, after=after, added_text=added, removed_text=removed)


class NumericChange(BaseModel):
    """Change of one geometric attribute between two snapshots."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric"] = "numeric"
    attribute: Literal["x", "y", "width", "height"]
    before: Optional[float] = None
    after: Optional[float] = None


AttributeChange = Annotated[Union[TextChange, NumericChange], Field(discriminator="kind")]


class ModifiedElement(BaseModel):
    """A matched element pair together with what changed."""

    model_config = ConfigDict(frozen=True)

    before: Element
    after: Element
    changes: Tuple[AttributeChange, ...]


class Diff(BaseModel):
    """Difference between two snapshots."""

    model_config = ConfigDict(frozen=True)

    added: Tuple[Element, ...] = ()
    removed: Tuple[Element, ...] = ()
    modified: Tuple[ModifiedElement, ...] = ()

    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)
