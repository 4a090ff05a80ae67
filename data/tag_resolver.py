"""Tag resolver (canonical spelling lookup)

- Normalize tag strings (trim, casefold, de-accent, unify separators)
- Exact vocabulary members always resolve to themselves
- Map aliases/synonyms and loose spellings onto the taxonomy's own tag names
- A loose spelling shared by two vocabulary tags is ambiguous and not mapped
- Unknown tags are returned unchanged; they simply never match anything
"""
from __future__ import annotations

import json, logging, os, re, unicodedata
from typing import Dict, Iterable, List, Optional, Set, Tuple

log = logging.getLogger(__name__)

_NORMALIZE_NONALNUM = re.compile(r"[\W_]+")


def _basic_normalize(text: str) -> str:
    if text is None:
        return ""
    t = unicodedata.normalize("NFKD", text.strip().casefold())
    t = "".join(ch for ch in t if not unicodedata.combining(ch))
    t = _NORMALIZE_NONALNUM.sub(" ", t)
    t = " ".join(t.split())
    return t


class TagResolver:
    def __init__(self, vocabulary: Iterable[str], alias_path: Optional[str] = None,
                 alias_map: Optional[Dict[str, Iterable[str]]] = None) -> None:
        if alias_map is None:
            alias_path = alias_path or os.environ.get("TAG_ALIAS_PATH")
            if alias_path and os.path.exists(alias_path):
                with open(alias_path, "r", encoding="utf-8") as f:
                    alias_map = json.load(f)
            else:
                alias_map = {}
        self._exact: Set[str] = set()
        self._lookup: Dict[str, str] = {}
        ambiguous: Set[str] = set()
        for tag in vocabulary:
            self._exact.add(tag)
            key = _basic_normalize(tag)
            if not key or key in ambiguous:
                continue
            if key in self._lookup and self._lookup[key] != tag:
                log.warning("loose spelling %r matches both %r and %r – not mapped", key, self._lookup[key], tag)
                ambiguous.add(key)
                del self._lookup[key]
                continue
            self._lookup[key] = tag
        for canonical, aliases in alias_map.items():
            target = canonical if canonical in self._exact else self._lookup.get(_basic_normalize(canonical))
            if target is None:
                log.warning("alias target %r is not a known tag – ignored", canonical)
                continue
            for a in aliases:
                key = _basic_normalize(a)
                if not key or key in ambiguous:
                    continue
                if self._lookup.get(key, target) != target:
                    log.warning("alias %r already resolves to %r – ignored for %r", a, self._lookup[key], target)
                    continue
                self._lookup[key] = target

    def resolve(self, tag: str) -> str:
        if tag is None:
            return ""
        raw = tag.strip()
        if raw in self._exact:
            return raw
        return self._lookup.get(_basic_normalize(raw), raw)

    def resolve_list(self, tags: Iterable[str]) -> Tuple[List[str], List[Tuple[str, str]]]:
        """Resolve and de-duplicate, keeping first-seen order. Also returns (raw, resolved) pairs."""
        seen = set()
        result: List[str] = []
        mapping_log = []
        for t in tags or []:
            final = self.resolve(t)
            mapping_log.append((t, final))
            if final and final not in seen:
                seen.add(final)
                result.append(final)
        return result, mapping_log
