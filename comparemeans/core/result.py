"""
Per-request result cache for comparemeans calculators.

Every calculator is a solution object wrapping an immutable design plus one
ResultCache. Derived quantities (groupings, tables, post-hoc results) are
computed on first access and the same object is handed back afterwards.

Design decisions:
    - Keyed by computation name (e.g. 'grouped', 'levene', 'subsets:Duncan')
    - Values are never replaced once stored
    - No eviction: a cache lives exactly as long as its calculator
"""

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

T = TypeVar('T')


@dataclass
class ResultCache:
    """
    Memo of derived results, keyed by computation name.

    Examples:
        >>> cache = ResultCache()
        >>> table = cache.get_or_compute('anova', lambda: build_table(groups))
        >>> cache.get_or_compute('anova', lambda: build_table(groups)) is table
        True
    """
    _entries: dict[str, Any] = field(default_factory=dict)

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        """Return the cached value for key, computing and storing it once."""
        if key not in self._entries:
            self._entries[key] = compute()
        return self._entries[key]

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def keys(self) -> frozenset[str]:
        """Names of the computations performed so far."""
        return frozenset(self._entries)
