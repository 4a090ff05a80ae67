"""Browse session: owns one SelectionState and re-runs the pipeline per action.

Every mutator returns the fresh QueryResult so the caller can render the
entries and announce the count. Tag removals go through category sync;
category toggles and query changes never do.
"""
from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional, Sequence

from config.config_loader import EngineSettings
from data.dataset_repository import DatasetRepository
from data.search_normalizer import normalize
from data.tag_resolver import TagResolver
from models.entry import Entry
from models.selection_state import SelectionState, SortDirection, SortKey, TagMode
from models.taxonomy import Taxonomy
from services.category_sync import dropped_by_sync
from services.pipeline import QueryResult, query

log = logging.getLogger(__name__)


class BrowseSession:
    def __init__(self, dataset: Sequence[Entry], taxonomy: Taxonomy, state: Optional[SelectionState] = None,
                 settings: Optional[EngineSettings] = None, resolver: Optional[TagResolver] = None) -> None:
        self.settings = settings or EngineSettings()
        self.dataset: List[Entry] = list(dataset)
        self.taxonomy = taxonomy
        self.state = state if state is not None else SelectionState()
        self.resolver = resolver or TagResolver(taxonomy.ordered_tags(), alias_path=self.settings.tag_alias_path)
        self.last_result = QueryResult()

    @classmethod
    def from_settings(cls, settings: EngineSettings, state: Optional[SelectionState] = None) -> "BrowseSession":
        repo = DatasetRepository(settings.dataset_path, settings.taxonomy_path)
        taxonomy = repo.load_taxonomy()
        resolver = TagResolver(taxonomy.ordered_tags(), alias_path=settings.tag_alias_path)
        dataset = repo.load_entries(taxonomy, resolver)
        session = cls(dataset, taxonomy, state=state, settings=settings, resolver=resolver)
        session.refresh()
        return session

    # --- pipeline ---
    def _run(self, tag_removed: bool = False) -> QueryResult:
        self.last_result = query(self.dataset, self.taxonomy, self.state, tag_removed=tag_removed,
                                 max_query_length=self.settings.query_max_length)
        return self.last_result

    def refresh(self) -> QueryResult:
        return self._run()

    def replace_dataset(self, dataset: Sequence[Entry]) -> QueryResult:
        self.dataset = list(dataset)
        log.info("dataset replaced: %d entries", len(self.dataset))
        return self._run()

    # --- query ---
    def set_query(self, raw: str) -> QueryResult:
        self.state.query = normalize(raw, self.settings.query_max_length)
        return self._run()

    def clear_query(self) -> QueryResult:
        self.state.query = ""
        return self._run()

    # --- tags ---
    def toggle_tag(self, tag: str) -> QueryResult:
        if not tag or not tag.strip():
            return self.last_result
        selected = self._selected_spelling(tag)
        if selected is not None:
            self.state.selected_tags.discard(selected)
            return self._run(tag_removed=True)
        self.state.selected_tags.add(self.resolver.resolve(tag))
        return self._run()

    def _selected_spelling(self, tag: str) -> Optional[str]:
        """The form of ``tag`` currently in the selection, raw spelling first."""
        raw = tag.strip()
        if raw in self.state.selected_tags:
            return raw
        resolved = self.resolver.resolve(raw)
        return resolved if resolved in self.state.selected_tags else None

    def preview_tag_toggle(self, tag: str) -> FrozenSet[str]:
        """Categories that would be auto-removed if ``tag`` were toggled now."""
        selected = self._selected_spelling(tag or "")
        if selected is None:
            return frozenset()
        remaining = self.state.selected_tags - {selected}
        return dropped_by_sync(remaining, self.state.selected_categories, self.taxonomy)

    def clear_tags(self) -> QueryResult:
        self.state.selected_tags.clear()
        return self._run(tag_removed=True)

    # --- categories ---
    def toggle_category(self, category_id: str) -> QueryResult:
        if not category_id or not category_id.strip():
            return self.last_result
        if category_id in self.state.selected_categories:
            self.state.selected_categories.discard(category_id)
        else:
            self.state.selected_categories.add(category_id)
        return self._run()

    def clear_categories(self) -> QueryResult:
        self.state.selected_categories.clear()
        return self._run()

    # --- mode & sort ---
    def set_tag_mode(self, mode: TagMode) -> QueryResult:
        self.state.tag_mode = TagMode(mode)
        return self._run()

    def toggle_tag_mode(self) -> QueryResult:
        is_any = self.state.tag_mode == TagMode.ANY
        return self.set_tag_mode(TagMode.ALL if is_any else TagMode.ANY)

    def set_sort(self, key: SortKey, direction: Optional[SortDirection] = None) -> QueryResult:
        self.state.sort_key = SortKey(key)
        if direction is not None:
            self.state.sort_direction = SortDirection(direction)
        return self._run()

    def handle_sort(self, key: SortKey) -> QueryResult:
        """Same key flips the direction; a new key starts ascending."""
        key = SortKey(key)
        if self.state.sort_key == key:
            flipped = SortDirection.DESC if self.state.sort_direction == SortDirection.ASC else SortDirection.ASC
            return self.set_sort(key, flipped)
        return self.set_sort(key, SortDirection.ASC)

    def clear_all_filters(self) -> QueryResult:
        """Reset query, tags, categories and mode; sort stays."""
        self.state.query = ""
        self.state.selected_tags.clear()
        self.state.selected_categories.clear()
        self.state.tag_mode = TagMode.ANY
        return self._run()

    @property
    def has_active_filters(self) -> bool:
        return self.state.has_active_filters
