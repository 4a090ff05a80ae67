from __future__ import annotations

import logging
from typing import AbstractSet, FrozenSet, Set

from models.taxonomy import Taxonomy

log = logging.getLogger(__name__)


def sync_categories(selected_tags: AbstractSet[str], selected_categories: AbstractSet[str], taxonomy: Taxonomy) -> Set[str]:
    """Keep only the categories still justified by at least one selected tag.

    Never adds a category. With no tags selected every category is dropped.
    """
    justified = taxonomy.categories_of(selected_tags)
    return {c for c in selected_categories if c in justified}


def dropped_by_sync(selected_tags: AbstractSet[str], selected_categories: AbstractSet[str], taxonomy: Taxonomy) -> FrozenSet[str]:
    kept = sync_categories(selected_tags, selected_categories, taxonomy)
    dropped = frozenset(selected_categories) - kept
    if dropped:
        log.debug("category sync would drop %s (tags=%s)", sorted(dropped), sorted(selected_tags))
    return dropped
