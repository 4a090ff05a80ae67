# Ensures project root is importable for tests (so 'models', 'data', 'services' can be imported)
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from models.entry import Entry
from models.taxonomy import Category, Taxonomy


def make_entry(id, tags, name=None, **kw):
    return Entry(id=id, name=name or id, tags=frozenset(tags), **kw)


@pytest.fixture
def taxonomy():
    return Taxonomy.from_groups(
        [
            Category(id="cat1", display_rank=1, name="Category One"),
            Category(id="cat2", display_rank=2, name="Category Two"),
        ],
        {"cat1": ["x", "y"], "cat2": ["z"]},
    )


@pytest.fixture
def dataset():
    return [
        make_entry("A", ["x", "y"]),
        make_entry("B", ["y"]),
        make_entry("C", ["z"]),
    ]
