"""Dataset & taxonomy loader.

- Anchors default paths at the project root (data/entries.yaml, data/taxonomy.yaml)
- Environment overrides: DATASET_PATH, TAXONOMY_PATH
- Reads YAML or JSON by suffix, validates through the pydantic models
- Canonicalises entry tags against the taxonomy before validation
"""
from __future__ import annotations

import json, logging, os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from data.tag_resolver import TagResolver
from models.entry import Entry
from models.taxonomy import Category, Taxonomy

log = logging.getLogger(__name__)


def _default_repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _resolve(env_name: str, ctor_value: Optional[str], default_name: str) -> Tuple[Path, str]:
    env_override = os.environ.get(env_name)
    repo_root = _default_repo_root()
    if env_override:
        path, source = Path(env_override), env_name
    elif ctor_value is not None:
        path, source = Path(ctor_value), "ctor"
    else:
        return (repo_root / "data" / default_name).resolve(), "default@repo_root"
    return (path if path.is_absolute() else (repo_root / path).resolve()), source


def read_document(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def _extract_items(data: Any, *keys: str) -> List[Dict]:
    """Accept a bare list or a dict holding the list under one of ``keys``."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for k in keys:
            if isinstance(data.get(k), list):
                return data[k]
    return []


def parse_taxonomy(data: Any) -> Taxonomy:
    categories: List[Category] = []
    groups: Dict[str, List[str]] = {}
    for raw in _extract_items(data, "categories"):
        raw = dict(raw)
        tags = raw.pop("tags", None) or []
        cat = Category.model_validate(raw)
        categories.append(cat)
        groups[cat.id] = list(tags)
    return Taxonomy.from_groups(categories, groups)


def check_dataset(entries: Iterable[Entry], taxonomy: Taxonomy) -> None:
    """Raise ValueError on duplicate ids or tags the taxonomy does not know."""
    seen = set()
    dupes = set()
    unmapped = set()
    for e in entries:
        if e.id in seen:
            dupes.add(e.id)
        seen.add(e.id)
        unmapped.update(e.tags - taxonomy.tags)
    if dupes:
        raise ValueError(f"duplicate entry ids: {sorted(dupes)}")
    if unmapped:
        raise ValueError(f"tags not in taxonomy: {sorted(unmapped)}")


class DatasetRepository:
    def __init__(self, dataset_path: Optional[str] = None, taxonomy_path: Optional[str] = None,
                 resolver: Optional[TagResolver] = None) -> None:
        self.dataset_path, ds_source = _resolve("DATASET_PATH", dataset_path, "entries.yaml")
        self.taxonomy_path, tx_source = _resolve("TAXONOMY_PATH", taxonomy_path, "taxonomy.yaml")
        self._resolver = resolver
        log.info("DatasetRepository using dataset=%s (source=%s), taxonomy=%s (source=%s)",
                 self.dataset_path, ds_source, self.taxonomy_path, tx_source)

    def load_taxonomy(self) -> Taxonomy:
        taxonomy = parse_taxonomy(read_document(self.taxonomy_path))
        log.info("taxonomy loaded: %d categories, %d tags", len(taxonomy.categories), len(taxonomy.tags))
        return taxonomy

    def load_entries(self, taxonomy: Taxonomy, resolver: Optional[TagResolver] = None) -> List[Entry]:
        resolver = resolver or self._resolver or TagResolver(taxonomy.ordered_tags())
        entries: List[Entry] = []
        for raw in _extract_items(read_document(self.dataset_path), "entries", "items"):
            item = dict(raw)
            item["id"] = str(item.get("id", ""))
            item["tags"], mapping = resolver.resolve_list(item.get("tags") or [])
            for before, after in mapping:
                if before != after:
                    log.info("entry %s: tag %r canonicalised to %r", item["id"], before, after)
            item["sources"] = tuple(item.get("sources") or ())
            entries.append(Entry.model_validate(item))
        check_dataset(entries, taxonomy)
        log.info("dataset loaded: %d entries (db=%s)", len(entries), self.dataset_path)
        return entries

    def load(self) -> Tuple[List[Entry], Taxonomy]:
        taxonomy = self.load_taxonomy()
        return self.load_entries(taxonomy), taxonomy
