from fractions import Fraction

import pytest

from smtterms.arith import (
    is_var_like,
    parse_decimal,
    parse_integer,
    poly_to_term,
    term_to_poly,
)
from smtterms.polynomial import Monomial, Polynomial
from smtterms.table import TermTable
from smtterms.types import BOOL_TYPE, REAL_TYPE, UNDEF, ZERO_TERM


@pytest.fixture
def table():
    return TermTable()


def test_is_var_like(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    y = table.new_uninterpreted_constant(REAL_TYPE)
    c = table.new_uninterpreted_constant(BOOL_TYPE)
    ite = table.arithmetic_ite(c, x, y)
    five = table.arithmetic_constant(5)
    assert is_var_like(table, x)
    assert is_var_like(table, ite)
    assert not is_var_like(table, five)
    assert not is_var_like(table, table.arithmetic_product(2, x))


def test_zero_constant_is_empty_polynomial(table):
    assert len(term_to_poly(table, ZERO_TERM)) == 0
    assert poly_to_term(table, Polynomial()) == ZERO_TERM


def test_constant_to_poly(table):
    five = table.arithmetic_constant(5)
    assert list(term_to_poly(table, five)) == [Monomial(UNDEF, Fraction(5))]


def test_variable_and_product_to_poly(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    assert list(term_to_poly(table, x)) == [Monomial(x, Fraction(1))]
    prod = table.arithmetic_product(Fraction(3, 4), x)
    assert list(term_to_poly(table, prod)) == [Monomial(x, Fraction(3, 4))]


def test_poly_to_term_unit_coefficient_is_variable(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    poly = Polynomial()
    poly.add_term(x, 1)
    assert poly_to_term(table, poly) == x


def test_poly_to_term_constant(table):
    poly = Polynomial()
    poly.add_term(UNDEF, 7)
    assert poly_to_term(table, poly) == table.arithmetic_constant(7)


def test_round_trip_polynomial(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    y = table.new_uninterpreted_constant(REAL_TYPE)
    poly = Polynomial()
    poly.add_term(UNDEF, 2)
    poly.add_term(x, -1)
    poly.add_term(y, Fraction(5, 2))
    term = poly_to_term(table, poly)
    assert table.is_arithmetic_polynomial(term)
    assert term_to_poly(table, term) == poly
    assert poly_to_term(table, term_to_poly(table, term)) == term


def test_poly_to_term_rejects_zero_coefficient(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    poly = Polynomial()
    poly.add_term(x, 0)
    with pytest.raises(ValueError):
        poly_to_term(table, poly)


def test_term_to_poly_rejects_boolean(table):
    b = table.new_uninterpreted_constant(BOOL_TYPE)
    atom = table.arithmetic_geq_zero(table.new_uninterpreted_constant(REAL_TYPE))
    assert is_var_like(table, b)
    with pytest.raises(ValueError):
        term_to_poly(table, atom)


@pytest.mark.parametrize("text", ["0", "42", "-17", "123456789012345678901234567890"])
def test_parse_integer(text):
    assert parse_integer(text) == int(text)


@pytest.mark.parametrize("text", ["1.5", "abc", ""])
def test_parse_integer_rejects(text):
    with pytest.raises(ValueError):
        parse_integer(text)


@pytest.mark.parametrize("text", ["0.5", "12.25", "3.000", "7", "0.001", "10.0625"])
def test_parse_decimal_matches_fraction(text):
    assert parse_decimal(text) == Fraction(text)


@pytest.mark.parametrize("text", ["1.", "1.x", "a.5"])
def test_parse_decimal_rejects(text):
    with pytest.raises(ValueError):
        parse_decimal(text)