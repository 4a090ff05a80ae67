from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Sequence, Tuple

from data.search_normalizer import MAX_QUERY_LENGTH
from models.entry import Entry
from models.selection_state import SelectionState
from models.taxonomy import Taxonomy
from services.category_sync import sync_categories
from services.filter_service import filter_entries
from services.sort_service import sort_entries

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    entries: Tuple[Entry, ...] = ()
    count: int = 0
    dropped_categories: FrozenSet[str] = field(default_factory=frozenset)


def query(
    dataset: Sequence[Entry],
    taxonomy: Taxonomy,
    state: SelectionState,
    tag_removed: bool = False,
    max_query_length: int = MAX_QUERY_LENGTH,
) -> QueryResult:
    """Sync (after a tag removal), filter, sort.

    ``state.selected_categories`` is updated in place when the sync drops
    anything; nothing else on ``state`` is touched.
    """
    dropped: FrozenSet[str] = frozenset()
    if tag_removed:
        kept = sync_categories(state.selected_tags, state.selected_categories, taxonomy)
        dropped = frozenset(state.selected_categories - kept)
        if dropped:
            state.selected_categories = kept
            log.info("categories auto-removed after tag deselection: %s", sorted(dropped))

    filtered = filter_entries(dataset, state, taxonomy, max_query_length)
    ordered = sort_entries(filtered, state.sort_key, state.sort_direction, taxonomy)
    log.debug("query() -> %s of %s entries (sort=%s/%s)", len(ordered), len(dataset),
              state.sort_key.value, state.sort_direction.value)
    return QueryResult(entries=tuple(ordered), count=len(ordered), dropped_categories=dropped)
