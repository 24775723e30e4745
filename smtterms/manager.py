"""Outward-facing construction and querying of normalized terms."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from fractions import Fraction
from itertools import combinations
from typing import Optional

from smtterms.arith import (
    is_var_like,
    parse_decimal,
    parse_integer,
    poly_to_term,
    term_to_poly,
)
from smtterms.polynomial import Polynomial
from smtterms.table import TermTable
from smtterms.types import (
    BOOL_TYPE,
    FALSE_TERM,
    REAL_TYPE,
    TRUE_TERM,
    UNDEF,
    ZERO_TERM,
    Kind,
    index_of,
    is_negated,
    opposite_term,
    positive_term,
)

__all__ = ["TermManager"]


def _expect_arity(op: str, args: Sequence[int], count: int) -> None:
    if len(args) != count:
        raise ValueError(f"operator {op!r} expects {count} argument(s), got {len(args)}")


class TermManager:
    """Creates and queries terms, normalizing them so that semantically
    equivalent terms tend to share one representation."""

    def __init__(self) -> None:
        self._table = TermTable()

    # -- generic construction -------------------------------------------------

    def mk_term(self, op: str, args: Iterable[int], not_app: bool = False) -> int:
        """Term for the operator named ``op`` applied to ``args``."""
        args = list(args)
        if op == ">=":
            _expect_arity(op, args, 2)
            return self.mk_arithmetic_geq(args[0], args[1])
        if op == "<=":
            _expect_arity(op, args, 2)
            return self.mk_arithmetic_leq(args[0], args[1])
        if op == "<":
            _expect_arity(op, args, 2)
            return self.mk_arithmetic_lt(args[0], args[1])
        if op == ">":
            _expect_arity(op, args, 2)
            return self.mk_arithmetic_gt(args[0], args[1])
        if op == "=":
            return self.mk_eq(args)
        if op == "or":
            return self.mk_or(args)
        if op == "and":
            return self.mk_and(args)
        if op == "=>":
            _expect_arity(op, args, 2)
            return self.mk_implies(args[0], args[1])
        if op == "not":
            _expect_arity(op, args, 1)
            return opposite_term(args[0])
        if op == "-":
            if len(args) == 1:
                return self.mk_unary_minus(args[0])
            _expect_arity(op, args, 2)
            return self.mk_arithmetic_minus(args[0], args[1])
        if op == "+":
            return self.mk_arithmetic_plus(args)
        if op == "*":
            return self.mk_arithmetic_times(args)
        if op == "/":
            _expect_arity(op, args, 2)
            return self.mk_divides(args[0], args[1])
        if op == "ite":
            _expect_arity(op, args, 3)
            return self.mk_ite(args[0], args[1], args[2])
        if op == "xor":
            _expect_arity(op, args, 2)
            return self.mk_xor(args[0], args[1])
        if op == "distinct":
            return self.mk_and(
                opposite_term(self.mk_eq([a, b])) for a, b in combinations(args, 2)
            )
        if not_app:
            raise ValueError(f"unknown function symbol: {op}")
        return self.mk_app_from(args)

    def mk_term_of_kind(self, kind: Kind, args: Iterable[int]) -> int:
        """Term of the given ``kind`` with arguments ``args``."""
        args = list(args)
        if kind == Kind.ARITH_GE_ATOM:
            _expect_arity(kind.name, args, 1)
            return self.mk_arithmetic_geq(args[0], ZERO_TERM)
        if kind == Kind.ARITH_EQ_ATOM:
            _expect_arity(kind.name, args, 1)
            return self.mk_arithmetic_eq(args[0], ZERO_TERM)
        if kind == Kind.ARITH_BINEQ_ATOM:
            _expect_arity(kind.name, args, 2)
            return self.mk_arithmetic_eq(args[0], args[1])
        if kind == Kind.EQ_TERM:
            _expect_arity(kind.name, args, 2)
            return self.mk_binary_eq(args[0], args[1])
        if kind == Kind.OR_TERM:
            return self.mk_or(args)
        if kind == Kind.ARITH_PRODUCT:
            return self.mk_arithmetic_times(args)
        if kind == Kind.ARITH_POLY:
            return self.mk_arithmetic_plus(args)
        if kind == Kind.ITE_TERM:
            _expect_arity(kind.name, args, 3)
            return self.mk_ite(args[0], args[1], args[2])
        if kind == Kind.APP_TERM:
            return self.mk_app_from(args)
        if kind in (Kind.UNINTERPRETED_TERM, Kind.ARITH_CONSTANT):
            raise ValueError(f"cannot build a term of kind {kind.name} from arguments")
        raise ValueError(f"case not covered: {kind.name}")

    def mk_eq(self, args: Iterable[int]) -> int:
        """Equality of ``args``; only the binary case is supported."""
        args = list(args)
        if len(args) == 2:
            return self.mk_binary_eq(args[0], args[1])
        raise NotImplementedError("only binary equality is supported")

    def mk_binary_eq(self, t1: int, t2: int) -> int:
        """Term equivalent to ``t1 = t2``."""
        type_ = self.get_type(t1)
        if type_ != self.get_type(t2):
            raise TypeError("types do not match")
        if type_ == REAL_TYPE:
            return self.mk_arithmetic_eq(t1, t2)
        if type_ == BOOL_TYPE:
            return self.mk_iff(t1, t2)
        raise NotImplementedError(f"equality over type {type_} is not supported")

    def mk_uninterpreted_constant(self, type_: int) -> int:
        """A fresh free variable of type ``type_``."""
        return self._table.new_uninterpreted_constant(type_)

    def mk_app(self, name: str, ret_type: int, args: Iterable[int]) -> int:
        """Application of the function named ``name`` to ``args``."""
        symbol = self.get_term_by_name(name)
        if symbol is None:
            raise ValueError(f"unknown function symbol: {name}")
        return self._table.app_term(ret_type, [symbol, *args])

    def mk_app_from(self, args: Sequence[int]) -> int:
        """Application whose first argument is the function symbol."""
        args = list(args)
        if not args:
            raise ValueError("an application needs a function symbol")
        return self._table.app_term(self.get_type(args[0]), args)

    # -- Boolean terms --------------------------------------------------------

    def mk_or(self, args: Iterable[int]) -> int:
        """Simplified disjunction of ``args``."""
        ordered = sorted(args)
        if not ordered:
            return FALSE_TERM
        first = ordered[0]
        if first == TRUE_TERM:
            return TRUE_TERM
        simplified = [] if first == FALSE_TERM else [first]
        previous = first
        for current in ordered[1:]:
            if current == previous:
                continue
            if current == opposite_term(previous):
                return TRUE_TERM
            previous = current
            simplified.append(current)
        if len(simplified) <= 1:
            return previous
        return self._table.or_term(simplified)

    def mk_and(self, args: Iterable[int]) -> int:
        """Simplified conjunction of ``args``."""
        return opposite_term(self.mk_or(opposite_term(arg) for arg in args))

    def mk_binary_or(self, x: int, y: int) -> int:
        if x == y or x == TRUE_TERM:
            return x
        if y == TRUE_TERM:
            return y
        if x == FALSE_TERM:
            return y
        if y == FALSE_TERM:
            return x
        if opposite_term(x) == y:
            return TRUE_TERM
        return self._table.or_term(sorted((x, y)))

    def mk_binary_and(self, x: int, y: int) -> int:
        return opposite_term(self.mk_binary_or(opposite_term(x), opposite_term(y)))

    def mk_implies(self, x: int, y: int) -> int:
        return self.mk_binary_or(opposite_term(x), y)

    def mk_iff(self, t1: int, t2: int) -> int:
        return self.mk_binary_and(self.mk_implies(t1, t2), self.mk_implies(t2, t1))

    def mk_xor(self, t1: int, t2: int) -> int:
        return self.mk_binary_and(
            self.mk_binary_or(t1, t2), opposite_term(self.mk_binary_and(t1, t2))
        )

    # -- arithmetic terms -----------------------------------------------------

    def mk_integer_constant(self, text: str) -> int:
        """Constant for an integer numeral."""
        return self._table.arithmetic_constant(parse_integer(text))

    def mk_rational_constant(self, text: str) -> int:
        """Constant for a decimal or integer numeral."""
        return self._table.arithmetic_constant(parse_decimal(text))

    def _direct_binary_eq(self, t1: int, t2: int) -> int:
        if not is_var_like(self._table, t1) or (is_var_like(self._table, t2) and t2 < t1):
            t1, t2 = t2, t1
        return self._table.arithmetic_binary_eq(t1, t2)

    def mk_arithmetic_eq(self, t1: int, t2: int) -> int:
        """Normalized atom equivalent to ``t1 = t2``."""
        if t1 == t2:
            return TRUE_TERM
        poly = self._poly(t1)
        poly.merge(self._poly(t2), -1)
        monomials = list(poly)
        if not monomials:
            return TRUE_TERM
        if len(monomials) == 1:
            mono = monomials[0]
            if mono.var == UNDEF:
                return FALSE_TERM
            return self._table.arithmetic_eq_zero(mono.var)
        if len(monomials) == 2:
            mono1, mono2 = monomials
            if mono1.var == UNDEF:
                value = self._table.arithmetic_constant(-mono1.coeff / mono2.coeff)
                return self._direct_binary_eq(mono2.var, value)
            if mono1.coeff + mono2.coeff == 0:
                return self._direct_binary_eq(mono1.var, mono2.var)
        return self._table.arithmetic_eq_zero(poly_to_term(self._table, poly))

    def mk_arithmetic_geq(self, t1: int, t2: int) -> int:
        """Atom equivalent to ``t1 >= t2``, in the form ``t >= 0``."""
        diff = self.mk_arithmetic_minus(t1, t2)
        if self._table.is_arithmetic_constant(diff):
            return TRUE_TERM if self._table.arithmetic_constant_value(diff) >= 0 else FALSE_TERM
        return self._table.arithmetic_geq_zero(diff)

    def mk_arithmetic_leq(self, t1: int, t2: int) -> int:
        return self.mk_arithmetic_geq(t2, t1)

    def mk_arithmetic_lt(self, t1: int, t2: int) -> int:
        return opposite_term(self.mk_arithmetic_geq(t1, t2))

    def mk_arithmetic_gt(self, t1: int, t2: int) -> int:
        return self.mk_arithmetic_lt(t2, t1)

    def mk_arithmetic_minus(self, t1: int, t2: int) -> int:
        """Normalized term equal to ``t1 - t2``."""
        poly = self._poly(t1)
        poly.merge(self._poly(t2), -1)
        return poly_to_term(self._table, poly)

    def mk_unary_minus(self, term: int) -> int:
        poly = self._poly(term)
        poly.negate()
        return poly_to_term(self._table, poly)

    def mk_arithmetic_plus(self, args: Iterable[int]) -> int:
        result = Polynomial()
        for arg in args:
            result.merge(self._poly(arg), 1)
        return poly_to_term(self._table, result)

    def mk_arithmetic_times(self, args: Iterable[int]) -> int:
        """Linear product of ``args``; at most one may be non-constant."""
        args = list(args)
        if not args:
            return self._table.arithmetic_constant(1)
        if len(args) == 1:
            return args[0]
        constants = [a for a in args if self._table.is_arithmetic_constant(a)]
        others = [a for a in args if not self._table.is_arithmetic_constant(a)]
        if len(others) > 1:
            raise ValueError("non-linear products are not supported")
        value = Fraction(1)
        for constant in constants:
            value *= self._table.arithmetic_constant_value(constant)
        if value == 0:
            return ZERO_TERM
        if not others:
            return self._table.arithmetic_constant(value)
        term = others[0]
        if value == 1:
            return term
        kind = self.get_kind(term)
        if kind in (Kind.UNINTERPRETED_TERM, Kind.ITE_TERM, Kind.APP_TERM):
            if self.get_type(term) != REAL_TYPE:
                raise TypeError(f"term {term} is not of the real type")
            return self._table.arithmetic_product(value, term)
        if kind == Kind.ARITH_PRODUCT:
            return self._table.arithmetic_product(
                self._table.coeff_of_product(term) * value, self._table.var_of_product(term)
            )
        if kind == Kind.ARITH_POLY:
            poly = self._poly(term)
            poly.multiply_by(value)
            return poly_to_term(self._table, poly)
        raise ValueError(f"term {term} is not an arithmetic term")

    def mk_divides(self, t1: int, t2: int) -> int:
        """``t1 / t2`` where ``t2`` is a constant."""
        if not self._table.is_arithmetic_constant(t2):
            raise ValueError("division is only supported by a constant")
        divisor = self._table.arithmetic_constant_value(t2)
        if self._table.is_arithmetic_constant(t1):
            return self._table.arithmetic_constant(
                self._table.arithmetic_constant_value(t1) / divisor
            )
        inverse = 1 / divisor
        return self.mk_arithmetic_times([t1, self._table.arithmetic_constant(inverse)])

    def mk_ite(self, c: int, t: int, e: int) -> int:
        """If-then-else over Boolean or real branches."""
        if self.get_type(c) != BOOL_TYPE:
            raise TypeError("condition of an if-then-else must be Boolean")
        type_ = self.get_type(t)
        if self.get_type(e) != type_:
            raise TypeError("types in if-then-else do not match")
        if type_ == BOOL_TYPE:
            return self._mk_bool_ite(c, t, e)
        if type_ == REAL_TYPE:
            return self._mk_arithmetic_ite(c, t, e)
        raise ValueError(f"if-then-else over type {type_} is not supported")

    def _mk_bool_ite(self, c: int, t: int, e: int) -> int:
        if t == e:
            return t
        if c == TRUE_TERM:
            return t
        if c == FALSE_TERM:
            return e
        if t == opposite_term(e):
            return self.mk_iff(c, t)
        if c == t:
            return self.mk_binary_or(t, e)
        if c == e:
            return self.mk_binary_and(e, t)
        if c == opposite_term(t):
            return self.mk_binary_and(t, e)
        if c == opposite_term(e):
            return self.mk_binary_or(e, t)
        if t == TRUE_TERM:
            return self.mk_binary_or(c, e)
        if t == FALSE_TERM:
            return self.mk_binary_and(opposite_term(c), e)
        if e == FALSE_TERM:
            return self.mk_binary_and(c, t)
        if e == TRUE_TERM:
            return self.mk_binary_or(opposite_term(c), t)
        if is_negated(c):
            c, t, e = opposite_term(c), e, t
        return self.mk_binary_and(self.mk_implies(c, t), self.mk_implies(opposite_term(c), e))

    def _mk_arithmetic_ite(self, c: int, t: int, e: int) -> int:
        if c == TRUE_TERM:
            return t
        if c == FALSE_TERM:
            return e
        if t == e:
            return t
        if is_negated(c):
            c, t, e = opposite_term(c), e, t
        return self._table.arithmetic_ite(c, t, e)

    def _poly(self, term: int) -> Polynomial:
        return term_to_poly(self._table, term)

    # -- names ----------------------------------------------------------------

    def set_term_name(self, term: int, name: str) -> None:
        self._table.set_term_name(term, name)

    def get_term_name(self, term: int) -> Optional[str]:
        return self._table.get_term_name(term)

    def get_term_by_name(self, name: str) -> Optional[int]:
        return self._table.get_term_by_name(name)

    # -- queries --------------------------------------------------------------

    def get_type(self, term: int) -> int:
        return self._table.get_type(term)

    def get_args(self, term: int) -> tuple[int, ...]:
        return self._table.get_args(term)

    def get_fnc_symbol(self, term: int) -> int:
        return self._table.get_fnc_symbol(term)

    def get_kind(self, term: int) -> Kind:
        return self._table.get_kind(term)

    def index_of(self, term: int) -> int:
        return index_of(term)

    def positive_term(self, term: int) -> int:
        return positive_term(term)

    def is_negated(self, term: int) -> bool:
        return is_negated(term)

    def arithmetic_constant_value(self, term: int) -> Fraction:
        return self._table.arithmetic_constant_value(term)

    def is_arithmetic_constant(self, term: int) -> bool:
        return self._table.is_arithmetic_constant(term)

    def is_uninterpreted_constant(self, term: int) -> bool:
        return self._table.is_uninterpreted_constant(term)

    def is_uninterpreted(self, term: int) -> bool:
        return self.is_uninterpreted_constant(term) or self.is_app(term)

    def is_arithmetic_product(self, term: int) -> bool:
        return self._table.is_arithmetic_product(term)

    def is_arithmetic_polynomial(self, term: int) -> bool:
        return self._table.is_arithmetic_polynomial(term)

    def is_ite(self, term: int) -> bool:
        return self._table.is_ite(term)

    def is_app(self, term: int) -> bool:
        return self._table.is_app(term)

    def var_of_product(self, term: int) -> int:
        return self._table.var_of_product(term)

    def coeff_of_product(self, term: int) -> Fraction:
        return self._table.coeff_of_product(term)