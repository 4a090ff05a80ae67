import random

import pytest

from conftest import make_entry
from models.selection_state import SortDirection, SortKey
from services.sort_service import sort_entries


def names(entries):
    return [e.name for e in entries]


@pytest.fixture
def entries():
    return [
        make_entry("e3", ["z"], name="myrcene", descriptor="Earthy", sources=("Mango",)),
        make_entry("e1", ["x"], name="Limonene", descriptor="citrus", sources=("Lemon",)),
        make_entry("e2", ["y"], name="Écorce", descriptor="Bark", sources=("Oak",)),
        make_entry("e4", ["x", "z"], name="Linalool", descriptor="Floral", sources=("Lavender",)),
    ]


def test_name_is_case_and_accent_insensitive(entries):
    assert names(sort_entries(entries, SortKey.NAME)) == ["Écorce", "Limonene", "Linalool", "myrcene"]


def test_desc_reverses_primary(entries):
    out = sort_entries(entries, SortKey.NAME, SortDirection.DESC)
    assert names(out) == ["myrcene", "Linalool", "Limonene", "Écorce"]


def test_descriptor_key(entries):
    assert [e.id for e in sort_entries(entries, SortKey.DESCRIPTOR)] == ["e2", "e1", "e3", "e4"]


def test_sources_key(entries):
    assert [e.id for e in sort_entries(entries, "sources")] == ["e4", "e1", "e3", "e2"]


def test_ties_broken_by_id_in_both_directions():
    twins = [make_entry("b", ["x"], name="Same"), make_entry("a", ["x"], name="same"),
             make_entry("c", ["x"], name="SAME")]
    # casefold ties resolve on the original spelling, then on id
    asc = sort_entries(twins, SortKey.NAME)
    assert [e.id for e in asc] == ["c", "b", "a"]
    same = [make_entry("b", ["x"], name="Same"), make_entry("a", ["x"], name="Same")]
    assert [e.id for e in sort_entries(same, SortKey.NAME)] == ["a", "b"]
    assert [e.id for e in sort_entries(same, SortKey.NAME, SortDirection.DESC)] == ["a", "b"]


@pytest.mark.parametrize("key", [SortKey.NAME, SortKey.DESCRIPTOR, SortKey.TAGS, SortKey.SOURCES])
@pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
def test_order_does_not_depend_on_input_order(entries, key, direction):
    expected = sort_entries(entries, key, direction)
    assert sort_entries(entries, key, direction) == expected
    assert sort_entries(list(reversed(entries)), key, direction) == expected
    shuffled = list(entries)
    random.Random(7).shuffle(shuffled)
    assert sort_entries(shuffled, key, direction) == expected


def test_category_groups_stay_ascending_in_desc(taxonomy):
    data = [
        make_entry("c1", ["z"], name="Alpha"),
        make_entry("c2", ["z"], name="Beta"),
        make_entry("a1", ["x"], name="Gamma"),
        make_entry("a2", ["y"], name="Delta"),
        make_entry("u1", ["ghost"], name="Omega"),
    ]
    asc = sort_entries(data, SortKey.CATEGORY, SortDirection.ASC, taxonomy)
    assert names(asc) == ["Delta", "Gamma", "Alpha", "Beta", "Omega"]
    desc = sort_entries(data, SortKey.CATEGORY, SortDirection.DESC, taxonomy)
    assert names(desc) == ["Gamma", "Delta", "Beta", "Alpha", "Omega"]


def test_category_rank_field_used_without_taxonomy():
    data = [make_entry("a", ["x"], name="A", category_rank=3), make_entry("b", ["x"], name="B", category_rank=1),
            make_entry("c", ["x"], name="C")]
    assert names(sort_entries(data, SortKey.CATEGORY)) == ["B", "A", "C"]


def test_does_not_mutate_input(entries):
    before = list(entries)
    sort_entries(entries, SortKey.NAME, SortDirection.DESC)
    assert entries == before
