"""Static tag -> category taxonomy.

- Categories carry a unique, positive display rank and a human name
- Every tag maps to exactly one category (dict keys are unique)
- Checked once when the model is built; read-only afterwards
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from models.entry import Entry

# Entries without any known category sort after every ranked group.
UNRANKED = 10**9


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    display_rank: PositiveInt
    name: str = Field(min_length=1)
    icon: str = ""


class Taxonomy(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: Tuple[Category, ...]
    tag_categories: Dict[str, str]

    @model_validator(mode="after")
    def _check_closed(self) -> "Taxonomy":
        ids = [c.id for c in self.categories]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate category ids: {sorted(i for i in set(ids) if ids.count(i) > 1)}")
        ranks = [c.display_rank for c in self.categories]
        if len(set(ranks)) != len(ranks):
            raise ValueError("category display ranks must be unique")
        known = set(ids)
        orphans = sorted(t for t, c in self.tag_categories.items() if c not in known)
        if orphans:
            raise ValueError(f"tags mapped to unknown categories: {orphans}")
        return self

    @classmethod
    def from_groups(cls, categories: Iterable[Category | dict], groups: Dict[str, Iterable[str]]) -> "Taxonomy":
        """Build from ``{category_id: [tag, ...]}``; a tag listed twice is rejected."""
        mapping: Dict[str, str] = {}
        for cat_id, tags in groups.items():
            for t in tags:
                if t in mapping and mapping[t] != cat_id:
                    raise ValueError(f"tag {t!r} listed in both {mapping[t]!r} and {cat_id!r}")
                mapping[t] = cat_id
        return cls(categories=tuple(categories), tag_categories=mapping)

    # ----------------- lookups -----------------
    @property
    def tags(self) -> FrozenSet[str]:
        return frozenset(self.tag_categories)

    def ordered_categories(self) -> List[Category]:
        return sorted(self.categories, key=lambda c: c.display_rank)

    def ordered_tags(self) -> List[str]:
        """Vocabulary grouped by category rank, file order within a category."""
        out: List[str] = []
        for c in self.ordered_categories():
            out.extend(t for t, cid in self.tag_categories.items() if cid == c.id)
        return out

    def get(self, category_id: str) -> Optional[Category]:
        for c in self.categories:
            if c.id == category_id:
                return c
        return None

    def rank_of(self, category_id: str) -> int:
        cat = self.get(category_id)
        return cat.display_rank if cat else UNRANKED

    def category_of(self, tag: str) -> Optional[str]:
        return self.tag_categories.get(tag)

    def categories_of(self, tags: Iterable[str]) -> Set[str]:
        out: Set[str] = set()
        for t in tags:
            c = self.tag_categories.get(t)
            if c is not None:
                out.add(c)
        return out

    def tags_in(self, category_ids: Iterable[str]) -> FrozenSet[str]:
        wanted = set(category_ids)
        return frozenset(t for t, c in self.tag_categories.items() if c in wanted)

    def entry_rank(self, entry: Entry) -> int:
        if entry.category_rank is not None:
            return entry.category_rank
        ranks = [self.rank_of(c) for c in self.categories_of(entry.tags)]
        return min(ranks) if ranks else UNRANKED
