"""Sparse linear polynomials over term variables with rational coefficients."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Union

__all__ = ["Monomial", "Polynomial"]

Number = Union[int, Fraction]


@dataclass(frozen=True)
class Monomial:
    """A single ``coeff * var`` term; ``var`` is UNDEF for the constant part."""

    var: int
    coeff: Fraction


class Polynomial:
    """Linear polynomial whose monomials are kept ordered by variable."""

    def __init__(self) -> None:
        self._terms: list[Monomial] = []

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[Monomial]:
        return iter(self._terms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._terms == other._terms

    def __repr__(self) -> str:
        body = " + ".join(f"{m.coeff} * {m.var}v" for m in self._terms)
        return f"Polynomial({body})"

    def _find(self, var: int) -> Optional[int]:
        return next((pos for pos, m in enumerate(self._terms) if m.var == var), None)

    def contains(self, var: int) -> bool:
        """Whether ``var`` has a monomial in this polynomial."""
        return self._find(var) is not None

    def add_term(self, var: int, coeff: Number) -> None:
        """Insert a monomial for a variable not yet present."""
        if self.contains(var):
            raise ValueError(f"variable {var} is already in the polynomial")
        self._terms.append(Monomial(var, Fraction(coeff)))
        self._terms.sort(key=lambda m: m.var)

    def get_coeff(self, var: int) -> Fraction:
        """Coefficient of ``var``."""
        pos = self._find(var)
        if pos is None:
            raise KeyError(var)
        return self._terms[pos].coeff

    def remove_var(self, var: int) -> Fraction:
        """Remove the monomial of ``var`` and return its coefficient."""
        pos = self._find(var)
        if pos is None:
            raise KeyError(var)
        return self._terms.pop(pos).coeff

    def negate(self) -> None:
        """Multiply every coefficient by -1."""
        self._terms = [Monomial(m.var, -m.coeff) for m in self._terms]

    def divide_by(self, r: Number) -> None:
        """Divide every coefficient by ``r``."""
        r = Fraction(r)
        self._terms = [Monomial(m.var, m.coeff / r) for m in self._terms]

    def multiply_by(self, r: Number) -> None:
        """Multiply every coefficient by ``r``."""
        r = Fraction(r)
        self._terms = [Monomial(m.var, m.coeff * r) for m in self._terms]

    def merge(
        self,
        other: Polynomial,
        coeff: Number = 1,
        on_added: Optional[Callable[[int], None]] = None,
        on_removed: Optional[Callable[[int], None]] = None,
    ) -> None:
        """Add ``coeff * other`` to this polynomial in place.

        ``on_added`` is called for each variable that is new in the result and
        ``on_removed`` for each variable whose coefficient cancelled to zero.
        """
        coeff = Fraction(coeff)
        combined = {m.var: m.coeff for m in self._terms}
        for mono in list(other):
            scaled = mono.coeff * coeff
            if mono.var in combined:
                total = combined[mono.var] + scaled
                if total == 0:
                    del combined[mono.var]
                    if on_removed is not None:
                        on_removed(mono.var)
                else:
                    combined[mono.var] = total
            else:
                combined[mono.var] = scaled
                if on_added is not None:
                    on_added(mono.var)
        self._terms = [Monomial(var, c) for var, c in sorted(combined.items())]