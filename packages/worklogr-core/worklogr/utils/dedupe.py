"""
Stable deduplication helpers.
"""

from collections.abc import Mapping
from typing import Any, Hashable, Iterable, List, TypeVar

T = TypeVar("T")


def _key_of(item: Any, key: str) -> Hashable:
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def dedupe_by_key(items: Iterable[T], key: str) -> List[T]:
    """
    Keep only the first item for each distinct value of ``key``.

    Items may be mappings (looked up by key) or objects (looked up by
    attribute). Order of first occurrences is preserved.

    Later occurrences are dropped together with whatever they carry, so
    a task exported for several days keeps only its first day's
    ``time_spent``. Sum time before deduplicating, never after.

    Args:
        items: Sequence of mappings or objects
        key: Field or attribute name to deduplicate on

    Returns:
        New list with duplicates removed
    """
    seen = set()
    result = []
    for item in items:
        value = _key_of(item, key)
        if value in seen:
            continue
        seen.add(value)
        result.append(item)
    return result
