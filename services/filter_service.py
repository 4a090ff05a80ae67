"""Filter: free text, tags with ANY/ALL logic, categories (OR).

Combination:
- tags AND categories both selected -> entry passes if it satisfies either side
- otherwise the side with a selection decides (the empty side is vacuously true)
- the query is always intersected with that result
"""
from __future__ import annotations

import logging
from typing import Callable, FrozenSet, Iterable, List

from data.search_normalizer import MAX_QUERY_LENGTH, matches_prepared, prepare_query
from models.entry import Entry
from models.selection_state import SelectionState, TagMode
from models.taxonomy import Taxonomy

log = logging.getLogger(__name__)


def tag_match(entry_tags: FrozenSet[str], selected_tags: FrozenSet[str], mode: TagMode) -> bool:
    if not selected_tags:
        return True
    if mode == TagMode.ALL:
        return selected_tags <= entry_tags
    return not entry_tags.isdisjoint(selected_tags)


def category_match(entry_tags: FrozenSet[str], category_tags: FrozenSet[str], has_categories: bool) -> bool:
    if not has_categories:
        return True
    return not entry_tags.isdisjoint(category_tags)


def build_predicate(state: SelectionState, taxonomy: Taxonomy, max_query_length: int = MAX_QUERY_LENGTH,
                    unknown_level: int = logging.WARNING) -> Callable[[Entry], bool]:
    """Resolve the selection once and return a per-entry predicate."""
    folded_query = prepare_query(state.query, max_query_length)
    selected_tags = frozenset(state.selected_tags)
    selected_categories = frozenset(state.selected_categories)
    mode = state.tag_mode

    unknown_tags = selected_tags - taxonomy.tags
    if unknown_tags:
        log.log(unknown_level, "selected tags not in taxonomy (never match): %s", sorted(unknown_tags))
    unknown_cats = {c for c in selected_categories if taxonomy.get(c) is None}
    if unknown_cats:
        log.log(unknown_level, "selected categories not in taxonomy (never match): %s", sorted(unknown_cats))

    category_tags = taxonomy.tags_in(selected_categories)
    union = bool(selected_tags) and bool(selected_categories)

    def predicate(entry: Entry) -> bool:
        if not matches_prepared(entry, folded_query):
            return False
        by_tag = tag_match(entry.tags, selected_tags, mode)
        by_cat = category_match(entry.tags, category_tags, bool(selected_categories))
        if union:
            return by_tag or by_cat
        return by_tag and by_cat

    return predicate


def evaluate(entry: Entry, state: SelectionState, taxonomy: Taxonomy) -> bool:
    # unknown selections are reported once per query, by filter_entries
    return build_predicate(state, taxonomy, unknown_level=logging.DEBUG)(entry)


def filter_entries(entries: Iterable[Entry], state: SelectionState, taxonomy: Taxonomy, max_query_length: int = MAX_QUERY_LENGTH) -> List[Entry]:
    predicate = build_predicate(state, taxonomy, max_query_length)
    return [e for e in entries if predicate(e)]
