"""Conversions between arithmetic terms and polynomials, and numeral parsing."""

from __future__ import annotations

from fractions import Fraction

from smtterms.polynomial import Polynomial
from smtterms.table import TermTable
from smtterms.types import UNDEF, ZERO_TERM, Kind

__all__ = [
    "is_var_like",
    "term_to_poly",
    "poly_to_term",
    "parse_integer",
    "parse_decimal",
]

_VAR_LIKE = frozenset({Kind.UNINTERPRETED_TERM, Kind.ITE_TERM, Kind.APP_TERM})


def is_var_like(table: TermTable, term: int) -> bool:
    """Whether ``term`` acts as a variable in polynomials."""
    return table.get_kind(term) in _VAR_LIKE


def term_to_poly(table: TermTable, term: int) -> Polynomial:
    """Polynomial denoted by the arithmetic ``term``."""
    poly = Polynomial()
    if table.is_arithmetic_constant(term):
        if term != ZERO_TERM:
            poly.add_term(UNDEF, table.arithmetic_constant_value(term))
        return poly
    if is_var_like(table, term):
        poly.add_term(term, 1)
        return poly
    if table.is_arithmetic_product(term):
        poly.add_term(table.var_of_product(term), table.coeff_of_product(term))
        return poly
    if table.is_arithmetic_polynomial(term):
        for child in table.monomials_of(term):
            poly.merge(term_to_poly(table, child), 1)
        return poly
    raise ValueError(f"term {term} is not an arithmetic term")


def poly_to_term(table: TermTable, poly: Polynomial) -> int:
    """Normalized term for ``poly``."""

    def monomial_to_term(mono) -> int:
        if mono.coeff == 0:
            raise ValueError("polynomial contains a zero coefficient")
        if mono.var == UNDEF:
            return table.arithmetic_constant(mono.coeff)
        if mono.coeff == 1:
            return mono.var
        return table.arithmetic_product(mono.coeff, mono.var)

    monomials = [monomial_to_term(mono) for mono in poly]
    if not monomials:
        return ZERO_TERM
    if len(monomials) == 1:
        return monomials[0]
    return table.arithmetic_polynomial(monomials)


def parse_integer(text: str) -> Fraction:
    """Value of an integer numeral."""
    try:
        return Fraction(int(text))
    except ValueError:
        raise ValueError(f"not an integer numeral: {text!r}") from None


def parse_decimal(text: str) -> Fraction:
    """Value of a decimal numeral such as ``12.25``."""
    integral, sep, fractional = text.partition(".")
    if not sep:
        return parse_integer(text)
    integral_value = parse_integer(integral)
    if not fractional.isdigit():
        raise ValueError(f"not a decimal numeral: {text!r}")
    den = 10 ** len(fractional)
    return Fraction(integral_value * den + int(fractional), den)