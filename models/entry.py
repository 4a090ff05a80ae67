from __future__ import annotations

from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """One browsable record. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)

    # Suchfelder
    descriptor: str = ""
    description: str = ""
    tags: FrozenSet[str] = Field(min_length=1)

    # nur für die Sortierung
    sources: Tuple[str, ...] = ()
    category_rank: Optional[int] = None
