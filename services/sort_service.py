"""Stable multi-key sorting of entries.

- Field keys: case-insensitive, diacritic-folded collation; ties by id
- Category key: category rank always ascending, name follows the
  direction, id breaks any remaining tie
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from data.search_normalizer import fold
from models.entry import Entry
from models.selection_state import SortDirection, SortKey
from models.taxonomy import UNRANKED, Taxonomy


def collation_key(text: str) -> Tuple[str, str, str]:
    t = text or ""
    return (fold(t), t.casefold(), t)


_FIELDS: Dict[SortKey, Callable[[Entry], str]] = {
    SortKey.NAME: lambda e: e.name,
    SortKey.DESCRIPTOR: lambda e: e.descriptor,
    SortKey.DESCRIPTION: lambda e: e.description,
    SortKey.TAGS: lambda e: ", ".join(sorted(e.tags, key=collation_key)),
    SortKey.SOURCES: lambda e: ", ".join(e.sources),
}


def _rank(entry: Entry, taxonomy: Optional[Taxonomy]) -> int:
    if taxonomy is not None:
        return taxonomy.entry_rank(entry)
    return entry.category_rank if entry.category_rank is not None else UNRANKED


def sort_entries(
    entries: Iterable[Entry],
    key: SortKey = SortKey.NAME,
    direction: SortDirection = SortDirection.ASC,
    taxonomy: Optional[Taxonomy] = None,
) -> List[Entry]:
    key = SortKey(key)
    desc = SortDirection(direction) == SortDirection.DESC

    # least significant key first; list.sort is stable, also with reverse=True
    out = sorted(entries, key=lambda e: e.id)
    if key == SortKey.CATEGORY:
        out.sort(key=lambda e: collation_key(e.name), reverse=desc)
        out.sort(key=lambda e: _rank(e, taxonomy))
        return out

    field = _FIELDS[key]
    out.sort(key=lambda e: collation_key(field(e)), reverse=desc)
    return out
