import pytest
from mushtree import ATTRIBUTE_NAMES, EDIBLE, POISONOUS, MushroomRecord, value_of
from mushtree.records import class_counts, dedupe_attributes, majority_label, partition


def test_attribute_table_has_22_names_in_order():
    assert len(ATTRIBUTE_NAMES) == 22
    assert ATTRIBUTE_NAMES[0] == "CAP-SHAPE"
    assert ATTRIBUTE_NAMES[4] == "ODOR"
    assert ATTRIBUTE_NAMES[-1] == "HABITAT"


def test_value_of_is_case_insensitive():
    r = MushroomRecord(True, odor="almond", cap_shape="x")
    assert value_of(r, "ODOR") == "almond"
    assert value_of(r, "odor") == "almond"
    assert value_of(r, "Cap-Shape") == "x"


def test_value_of_unknown_attribute_is_empty_string():
    r = MushroomRecord(True, odor="almond")
    assert value_of(r, "SMELL") == ""


def test_misspelled_key_reads_stalk_surface_below_ring():
    r = MushroomRecord(False, stalk_surface_below_ring="silky")
    assert value_of(r, "STALK-SRFACE-UNDER-RING") == "silky"
    # the corrected spelling is not a known attribute
    assert value_of(r, "STALK-SURFACE-BELOW-RING") == ""


def test_from_values_uses_canonical_order():
    values = [f"v{i}" for i in range(22)]
    r = MushroomRecord.from_values(False, values)
    for name, expected in zip(ATTRIBUTE_NAMES, values):
        assert value_of(r, name) == expected
    assert r.label == POISONOUS


def test_from_values_rejects_wrong_length():
    with pytest.raises(ValueError):
        MushroomRecord.from_values(True, ["x"] * 21)


def test_partition_keeps_first_appearance_order():
    records = [
        MushroomRecord(True, odor="foul"),
        MushroomRecord(True, odor="almond"),
        MushroomRecord(False, odor="foul"),
        MushroomRecord(True, odor="anise"),
    ]
    groups = partition(records, "ODOR")
    assert list(groups) == ["foul", "almond", "anise"]
    assert len(groups["foul"]) == 2
    assert all(groups.values())


def test_class_counts_and_majority_tie():
    records = [MushroomRecord(True), MushroomRecord(False)]
    assert list(class_counts(records)) == [1.0, 1.0]
    assert majority_label(records) == EDIBLE
    assert majority_label([]) == EDIBLE
    assert majority_label(records + [MushroomRecord(False)]) == POISONOUS


def test_dedupe_attributes_keeps_first_spelling():
    assert dedupe_attributes(["odor", "HABITAT", "ODOR", "habitat", "bruises"]) == [
        "odor", "HABITAT", "bruises"]
