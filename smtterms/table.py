"""Storage of terms with hash consing, names and structural queries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Union

from smtterms.hashcons import TermHashTable
from smtterms.types import (
    BOOL_TYPE,
    NULL_TYPE,
    REAL_TYPE,
    TRUE_TERM,
    ZERO_TERM,
    Kind,
    index_of,
    positive_term_of,
)

__all__ = ["TermTable"]

Descriptor = Union[tuple[int, ...], Fraction, int, None]

_ATOMIC_KINDS = frozenset({Kind.ARITH_CONSTANT, Kind.CONSTANT_TERM, Kind.UNINTERPRETED_TERM})


@dataclass(frozen=True)
class _Entry:
    kind: Kind
    type_: int
    # composite terms: tuple of argument handles; rational constants: the value;
    # finite constants: their index; uninterpreted constants: None
    descriptor: Descriptor


class TermTable:
    """Creates, stores and queries terms.

    Structurally equal terms are created only once; asking for the same term
    again returns the existing handle.
    """

    def __init__(self) -> None:
        self._entries: list[_Entry] = []
        self._known = TermHashTable()
        self._symbols: dict[str, int] = {}
        self._names: dict[int, str] = {}
        self._add_primitive_terms()

    # -- construction helpers -------------------------------------------------

    def _add_primitive_terms(self) -> None:
        self._entries.append(_Entry(Kind.RESERVED_TERM, NULL_TYPE, None))
        true_term = self.constant_term(BOOL_TYPE, 0)
        zero_term = self.arithmetic_constant(Fraction(0))
        assert true_term == TRUE_TERM
        assert zero_term == ZERO_TERM

    def _append(self, kind: Kind, type_: int, descriptor: Descriptor) -> int:
        index = len(self._entries)
        self._entries.append(_Entry(kind, type_, descriptor))
        return positive_term_of(index)

    def _composite(self, kind: Kind, type_: int, args: Iterable[int]) -> int:
        args = tuple(args)
        return self._known.get_or_insert(
            (kind, type_, args), lambda: self._append(kind, type_, args)
        )

    def _entry(self, term: int) -> _Entry:
        index = index_of(term)
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"unknown term {term}")
        return self._entries[index]

    def _composite_args(self, term: int) -> tuple[int, ...]:
        descriptor = self._entry(term).descriptor
        if not isinstance(descriptor, tuple) or not descriptor:
            raise ValueError(f"term {term} is not a composite term")
        return descriptor

    # -- names ----------------------------------------------------------------

    def set_term_name(self, term: int, name: str) -> None:
        """Associate ``term`` with ``name``; both must be unnamed so far."""
        if name in self._symbols:
            raise ValueError(f"name {name!r} is already in use")
        if term in self._names:
            raise ValueError(f"term {term} already has a name")
        self._symbols[name] = term
        self._names[term] = name

    def get_term_name(self, term: int) -> Optional[str]:
        """Name of ``term``; applications take the name of their function symbol."""
        name = self._names.get(term)
        if name is not None:
            return name
        if self.get_kind(term) == Kind.APP_TERM:
            return self.get_term_name(self.get_fnc_symbol(term))
        return None

    def get_term_by_name(self, name: str) -> Optional[int]:
        """Term associated with ``name``, or None."""
        return self._symbols.get(name)

    # -- basic queries --------------------------------------------------------

    def get_kind(self, term: int) -> Kind:
        return self._entry(term).kind

    def get_type(self, term: int) -> int:
        return self._entry(term).type_

    def get_args(self, term: int) -> tuple[int, ...]:
        """Arguments of ``term``; an application's function symbol is left out."""
        kind = self.get_kind(term)
        if kind in _ATOMIC_KINDS:
            return ()
        args = self._composite_args(term)
        return args[1:] if kind == Kind.APP_TERM else args

    def get_fnc_symbol(self, term: int) -> int:
        """Function symbol of an application term."""
        if self.get_kind(term) != Kind.APP_TERM:
            raise ValueError(f"term {term} is not a function application")
        return self._composite_args(term)[0]

    # -- term constructors ----------------------------------------------------

    def or_term(self, args: Iterable[int]) -> int:
        """Disjunction of ``args``."""
        return self._composite(Kind.OR_TERM, BOOL_TYPE, args)

    def constant_term(self, type_: int, index: int) -> int:
        """Constant number ``index`` of the finite type ``type_``."""
        key = (Kind.CONSTANT_TERM, type_, index)
        return self._known.get_or_insert(
            key, lambda: self._append(Kind.CONSTANT_TERM, type_, index)
        )

    def new_uninterpreted_constant(self, type_: int) -> int:
        """A fresh free variable of type ``type_``; never shared."""
        return self._append(Kind.UNINTERPRETED_TERM, type_, None)

    def arithmetic_constant(self, value: Union[int, Fraction]) -> int:
        """Term for the rational ``value``."""
        value = Fraction(value)
        key = (Kind.ARITH_CONSTANT, REAL_TYPE, value)
        return self._known.get_or_insert(
            key, lambda: self._append(Kind.ARITH_CONSTANT, REAL_TYPE, value)
        )

    def arithmetic_product(self, coeff: Union[int, Fraction], var: int) -> int:
        """Monomial ``coeff * var``."""
        kind = self.get_kind(var)
        if not (
            kind == Kind.UNINTERPRETED_TERM
            or (kind in (Kind.ITE_TERM, Kind.APP_TERM) and self.get_type(var) == REAL_TYPE)
        ):
            raise ValueError(f"term {var} cannot be the variable of a product")
        coeff_term = self.arithmetic_constant(coeff)
        return self._composite(Kind.ARITH_PRODUCT, REAL_TYPE, (coeff_term, var))

    def arithmetic_polynomial(self, monomials: Iterable[int]) -> int:
        """Sum of at least two monomials."""
        monomials = tuple(monomials)
        if len(monomials) < 2:
            raise ValueError("a polynomial needs at least two monomials")
        return self._composite(Kind.ARITH_POLY, REAL_TYPE, monomials)

    def _require_real(self, term: int) -> None:
        if self.get_type(term) != REAL_TYPE:
            raise TypeError(f"term {term} is not of the real type")

    def arithmetic_geq_zero(self, term: int) -> int:
        """Atom ``term >= 0``."""
        self._require_real(term)
        return self._composite(Kind.ARITH_GE_ATOM, BOOL_TYPE, (term,))

    def arithmetic_eq_zero(self, term: int) -> int:
        """Atom ``term = 0``."""
        self._require_real(term)
        return self._composite(Kind.ARITH_EQ_ATOM, BOOL_TYPE, (term,))

    def arithmetic_binary_eq(self, t1: int, t2: int) -> int:
        """Atom ``t1 = t2`` where ``t1`` is variable-like."""
        self._require_real(t1)
        self._require_real(t2)
        if self.get_kind(t1) not in (Kind.UNINTERPRETED_TERM, Kind.ITE_TERM, Kind.APP_TERM):
            raise ValueError("left-hand side of a binary equality must be a variable")
        if self.get_kind(t2) in (Kind.ARITH_PRODUCT, Kind.ARITH_POLY):
            raise ValueError("right-hand side of a binary equality must not be compound")
        return self._composite(Kind.ARITH_BINEQ_ATOM, BOOL_TYPE, (t1, t2))

    def arithmetic_ite(self, c: int, t: int, e: int) -> int:
        """Real-valued if-then-else."""
        if self.get_type(c) != BOOL_TYPE:
            raise TypeError("condition of an if-then-else must be Boolean")
        self._require_real(t)
        self._require_real(e)
        return self._composite(Kind.ITE_TERM, REAL_TYPE, (c, t, e))

    def app_term(self, ret_type: int, args: Iterable[int]) -> int:
        """Application; ``args`` starts with the function symbol."""
        return self._composite(Kind.APP_TERM, ret_type, args)

    # -- kind tests -----------------------------------------------------------

    def is_arithmetic_constant(self, term: int) -> bool:
        return self.get_kind(term) == Kind.ARITH_CONSTANT

    def is_uninterpreted_constant(self, term: int) -> bool:
        return self.get_kind(term) == Kind.UNINTERPRETED_TERM

    def is_arithmetic_product(self, term: int) -> bool:
        return self.get_kind(term) == Kind.ARITH_PRODUCT

    def is_arithmetic_polynomial(self, term: int) -> bool:
        return self.get_kind(term) == Kind.ARITH_POLY

    def is_ite(self, term: int) -> bool:
        return self.get_kind(term) == Kind.ITE_TERM

    def is_app(self, term: int) -> bool:
        return self.get_kind(term) == Kind.APP_TERM

    # -- arithmetic accessors -------------------------------------------------

    def arithmetic_constant_value(self, term: int) -> Fraction:
        """Rational value of an arithmetic constant."""
        if not self.is_arithmetic_constant(term):
            raise ValueError(f"term {term} is not an arithmetic constant")
        descriptor = self._entry(term).descriptor
        assert isinstance(descriptor, Fraction)
        return descriptor

    def var_of_product(self, term: int) -> int:
        """Variable ``x`` of a product ``c * x``."""
        if not self.is_arithmetic_product(term):
            raise ValueError(f"term {term} is not an arithmetic product")
        return self._composite_args(term)[1]

    def coeff_of_product(self, term: int) -> Fraction:
        """Coefficient ``c`` of a product ``c * x``."""
        if not self.is_arithmetic_product(term):
            raise ValueError(f"term {term} is not an arithmetic product")
        return self.arithmetic_constant_value(self._composite_args(term)[0])

    def monomials_of(self, term: int) -> tuple[int, ...]:
        """Monomials of a polynomial term."""
        if not self.is_arithmetic_polynomial(term):
            raise ValueError(f"term {term} is not an arithmetic polynomial")
        return self._composite_args(term)