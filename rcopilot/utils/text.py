"""Keyword and field helpers shared across catalogs and matchers."""

from __future__ import annotations

from collections.abc import Sequence
import re
from typing import Callable, Hashable, Iterable, List, TypeVar

DEFAULT_DELIMITERS = r"[;,]"

T = TypeVar("T")


def split_fields(value: str | Sequence[str] | None, *, delimiters: str = DEFAULT_DELIMITERS) -> List[str]:
    """Split a CSV-like field into trimmed tokens.

    Catalog files may write keyword lists either as YAML sequences or as a
    single ``"laplace; boundary value"`` string; both collapse to a flat list.
    """

    if not value:
        return []
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        tokens: List[str] = []
        for item in value:
            tokens.extend(split_fields(item, delimiters=delimiters))
        return tokens
    raw_tokens = re.split(delimiters, str(value))
    return [token.strip() for token in raw_tokens if token.strip()]


def matching_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    """Return the distinct keywords occurring in ``text`` (case-insensitive), in keyword order."""

    haystack = (text or "").lower()
    hits: List[str] = []
    for keyword in keywords:
        needle = keyword.lower()
        if needle and needle in haystack and needle not in hits:
            hits.append(needle)
    return hits


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    haystack = (text or "").lower()
    return any(keyword and keyword.lower() in haystack for keyword in keywords)


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Drop later duplicates, keeping the first item seen for each key."""

    seen: set[Hashable] = set()
    unique: List[T] = []
    for item in items:
        marker = key(item)
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(item)
    return unique
