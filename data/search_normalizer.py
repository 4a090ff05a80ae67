"""Search query normalizer & match predicate.

- Normalize free-text queries (drop control chars, strip markup, collapse
  whitespace, case-fold, cap length); normalize() is idempotent
- Match a normalized query as a substring of an entry's searchable fields
  or tag labels, ignoring case and diacritics
"""
from __future__ import annotations

import re, unicodedata
from typing import Tuple

from models.entry import Entry

MAX_QUERY_LENGTH = 500

_CTRL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WS = re.compile(r"\s+")


def normalize(raw: str, max_length: int = MAX_QUERY_LENGTH) -> str:
    if raw is None:
        return ""
    s = str(raw).replace("\xa0", " ")
    s = _CTRL.sub("", s)
    s = _SCRIPT_RE.sub(" ", s)
    s = _STYLE_RE.sub(" ", s)
    # every "<" left behind has no ">" after it, so a second pass is a no-op
    s = _TAG_RE.sub(" ", s)
    s = s.casefold()
    s = _WS.sub(" ", s).strip()
    if len(s) > max_length:
        s = s[:max_length].rstrip()
    return s


def fold(text: str) -> str:
    """Case- and diacritic-insensitive form used on both sides of a match."""
    if not text:
        return ""
    t = unicodedata.normalize("NFKD", text.casefold())
    t = "".join(ch for ch in t if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", t)


def searchable_text(entry: Entry) -> Tuple[str, ...]:
    fields = [entry.name, entry.descriptor, entry.description]
    fields.extend(sorted(entry.tags))
    return tuple(fold(f) for f in fields if f)


def prepare_query(raw: str, max_length: int = MAX_QUERY_LENGTH) -> str:
    """Normalize and fold once per query cycle."""
    return fold(normalize(raw, max_length))


def matches_prepared(entry: Entry, folded_query: str) -> bool:
    if not folded_query:
        return True
    return any(folded_query in field for field in searchable_text(entry))


def matches(entry: Entry, normalized_query: str) -> bool:
    return matches_prepared(entry, fold(normalized_query))
