"""Hash consing of terms: equal term descriptions map to one term handle."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable

from smtterms.types import Kind

__all__ = ["hash_composite_term", "hash_integer_term", "TermHashTable"]

_MASK64 = (1 << 64) - 1


def _hash_int(value: int) -> int:
    return value & _MASK64


def hash_composite_term(kind: Kind, args: Iterable[int]) -> int:
    """64-bit hash of a composite term from its kind and argument handles."""
    result = _hash_int(int(kind))
    for arg in args:
        result = (result * 31 + _hash_int(arg)) & _MASK64
    return result


def hash_integer_term(kind: Kind, type_: int, index: int) -> int:
    """64-bit hash of a constant term of a finite type."""
    result = _hash_int(int(kind))
    result = (result * 31 + _hash_int(type_)) & _MASK64
    result = (result * 31 + _hash_int(index)) & _MASK64
    return result


class TermHashTable:
    """Maps term descriptions to existing term handles.

    A key is any hashable description of a term (for example a tuple of its
    kind, type and arguments). The term is built by ``factory`` only the first
    time its key is seen.
    """

    def __init__(self) -> None:
        self._terms: dict[Hashable, int] = {}

    def get_or_insert(self, key: Hashable, factory: Callable[[], int]) -> int:
        """Return the term for ``key``, creating it with ``factory`` if unknown."""
        term = self._terms.get(key)
        if term is None:
            term = factory()
            self._terms[key] = term
        return term

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._terms
        except TypeError:
            return False