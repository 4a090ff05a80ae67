from __future__ import annotations

from enum import Enum
from typing import Set

from pydantic import BaseModel, ConfigDict, Field


class TagMode(str, Enum):
    ANY = "any"
    ALL = "all"


class SortKey(str, Enum):
    NAME = "name"
    DESCRIPTOR = "descriptor"
    DESCRIPTION = "description"
    TAGS = "tags"
    SOURCES = "sources"
    CATEGORY = "category"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SelectionState(BaseModel):
    """Current user choices for one browsing session.

    Owned by the caller and mutated in place by the session helpers. Every
    category in ``selected_categories`` is justified by a selected tag after
    any tag removal; a category picked on its own (no tags) means "any entry
    touching this category".
    """

    model_config = ConfigDict(validate_assignment=True)

    query: str = ""
    selected_tags: Set[str] = Field(default_factory=set)
    selected_categories: Set[str] = Field(default_factory=set)
    tag_mode: TagMode = TagMode.ANY
    sort_key: SortKey = SortKey.NAME
    sort_direction: SortDirection = SortDirection.ASC

    @property
    def has_active_filters(self) -> bool:
        return bool(self.query.strip() or self.selected_tags or self.selected_categories)
