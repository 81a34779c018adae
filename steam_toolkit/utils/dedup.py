# ===== IMPORTS & DEPENDENCIES =====
from typing import Callable, Hashable, Iterable, List, TypeVar

T = TypeVar('T')

# ===== UTILITY FUNCTIONS =====

def dedupe_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """
    Removes entries whose key was already seen, keeping the first occurrence
    and the original order of everything that survives.
    """
    seen = set()
    unique: List[T] = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        unique.append(item)
    return unique
