# -*- coding: utf-8 -*-
"""
mushtree.records
================

Mushroom records and the read-only view the induction engine uses on them.

The engine never touches record fields directly.  It goes through a
:class:`RecordView`, a pair of callables answering "what is the value of
attribute ``a`` on this record?" and "is this record edible?".  The default
view, :data:`MUSHROOM_VIEW`, reads :class:`MushroomRecord` instances through the
single attribute table :data:`ATTRIBUTE_ACCESSORS`.

Attribute names are matched case-insensitively.  Unknown names read as the
empty string, which is folded into partitions like any other value.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, fields
from operator import attrgetter
from typing import Any

import numpy as np

EDIBLE = "EDIBLE"
POISONOUS = "POISONOUS"

# Canonical order of the 22 UCI attributes.  "STALK-SRFACE-UNDER-RING" is
# misspelled in the data schema and is used verbatim as a key.
ATTRIBUTE_NAMES: tuple[str, ...] = (
    "CAP-SHAPE",
    "CAP-SURFACE",
    "CAP-COLOR",
    "BRUISES",
    "ODOR",
    "GILL-ATTACHMENT",
    "GILL-SPACING",
    "GILL-SIZE",
    "GILL-COLOR",
    "STALK-SHAPE",
    "STALK-ROOT",
    "STALK-SURFACE-ABOVE-RING",
    "STALK-SRFACE-UNDER-RING",
    "STALK-COLOR-ABOVE-RING",
    "STALK-COLOR-BELOW-RING",
    "VEIL-TYPE",
    "VEIL-COLOR",
    "RING-NUMBER",
    "RING-TYPE",
    "SPORE-PRINT-COLOR",
    "POPULATION",
    "HABITAT",
)


# -----------------------------------------------------------------------------
# Record
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class MushroomRecord:
    """One row of the mushroom dataset.

    Attribute fields are declared in the same order as
    :data:`ATTRIBUTE_NAMES`.  Missing keyword arguments default to the empty
    string so that small hand-written records stay readable in tests and
    examples.
    """

    edible: bool
    cap_shape: str = ""
    cap_surface: str = ""
    cap_color: str = ""
    bruises: str = ""
    odor: str = ""
    gill_attachment: str = ""
    gill_spacing: str = ""
    gill_size: str = ""
    gill_color: str = ""
    stalk_shape: str = ""
    stalk_root: str = ""
    stalk_surface_above_ring: str = ""
    stalk_surface_below_ring: str = ""
    stalk_color_above_ring: str = ""
    stalk_color_below_ring: str = ""
    veil_type: str = ""
    veil_color: str = ""
    ring_number: str = ""
    ring_type: str = ""
    spore_print_color: str = ""
    population: str = ""
    habitat: str = ""

    @property
    def label(self) -> str:
        return EDIBLE if self.edible else POISONOUS

    @classmethod
    def from_values(cls, edible: bool, values: Sequence[str]) -> MushroomRecord:
        """Build a record from 22 attribute values in canonical order."""
        if len(values) != len(ATTRIBUTE_NAMES):
            raise ValueError(
                f"expected {len(ATTRIBUTE_NAMES)} attribute values, got {len(values)}"
            )
        return cls(edible, *values)


_ATTRIBUTE_FIELDS = [f.name for f in fields(MushroomRecord)][1:]

# name -> accessor.  Every module that needs an attribute value goes through
# this table (via ``value_of``).
ATTRIBUTE_ACCESSORS: dict[str, Callable[[MushroomRecord], str]] = {
    name: attrgetter(field_name)
    for name, field_name in zip(ATTRIBUTE_NAMES, _ATTRIBUTE_FIELDS, strict=True)
}


def value_of(record: MushroomRecord, attribute: str) -> str:
    """Return the value of ``attribute`` on ``record``, or ``""`` if unknown."""
    accessor = ATTRIBUTE_ACCESSORS.get(attribute.upper())
    if accessor is None:
        return ""
    return accessor(record)


# -----------------------------------------------------------------------------
# View
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RecordView:
    """Read-only accessors from a record to its attribute values and target.

    Parameters
    ----------
    value_of : callable
        ``value_of(record, attribute) -> str``.  Must treat unknown attribute
        names as a legitimate value rather than raising.
    is_edible : callable
        ``is_edible(record) -> bool``.
    """

    value_of: Callable[[Any, str], str]
    is_edible: Callable[[Any], bool]


MUSHROOM_VIEW = RecordView(value_of=value_of, is_edible=attrgetter("edible"))


# -----------------------------------------------------------------------------
# Partitioning and class counts
# -----------------------------------------------------------------------------
def partition(records: Iterable[Any], attribute: str,
              view: RecordView = MUSHROOM_VIEW) -> dict[str, list]:
    """Group ``records`` by their value of ``attribute``.

    Keys appear in order of first appearance; no partition is ever empty.
    """
    groups: dict[str, list] = {}
    for record in records:
        groups.setdefault(view.value_of(record, attribute), []).append(record)
    return groups


def class_counts(records: Iterable[Any], view: RecordView = MUSHROOM_VIEW) -> np.ndarray:
    """Return ``[n_edible, n_poisonous]`` for ``records`` as a float vector."""
    n_edible = 0
    n_total = 0
    for record in records:
        n_total += 1
        if view.is_edible(record):
            n_edible += 1
    return np.array([n_edible, n_total - n_edible], dtype=float)


def majority_label(records: Iterable[Any], view: RecordView = MUSHROOM_VIEW) -> str:
    """Majority class of ``records``; ties (including the empty set) go to EDIBLE."""
    n_edible, n_poisonous = class_counts(records, view)
    return EDIBLE if n_edible >= n_poisonous else POISONOUS


def dedupe_attributes(attributes: Iterable[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling and order."""
    seen: set[str] = set()
    out: list[str] = []
    for name in attributes:
        key = name.upper()
        if key in seen:
            continue
        seen.add(key)
        out.append(name)
    return out
