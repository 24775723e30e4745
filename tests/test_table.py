from fractions import Fraction

import pytest

from smtterms.table import TermTable
from smtterms.types import (
    BOOL_TYPE,
    REAL_TYPE,
    TRUE_TERM,
    ZERO_TERM,
    Kind,
    opposite_term,
)


@pytest.fixture
def table():
    return TermTable()


def test_primitive_terms(table):
    assert table.constant_term(BOOL_TYPE, 0) == TRUE_TERM
    assert table.arithmetic_constant(0) == ZERO_TERM
    assert table.get_kind(TRUE_TERM) == Kind.CONSTANT_TERM
    assert table.get_type(ZERO_TERM) == REAL_TYPE
    assert table.arithmetic_constant_value(ZERO_TERM) == 0


def test_negated_term_shares_entry(table):
    false_term = opposite_term(TRUE_TERM)
    assert table.get_kind(false_term) == Kind.CONSTANT_TERM
    assert table.get_type(false_term) == BOOL_TYPE


def test_arithmetic_constant_hash_consed(table):
    a = table.arithmetic_constant(Fraction(3, 4))
    b = table.arithmetic_constant(Fraction(6, 8))
    assert a == b
    assert table.arithmetic_constant_value(a) == Fraction(3, 4)
    assert table.arithmetic_constant(Fraction(1, 4)) != a


def test_uninterpreted_constants_are_fresh(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    y = table.new_uninterpreted_constant(REAL_TYPE)
    assert x != y
    assert table.is_uninterpreted_constant(x)
    assert table.get_args(x) == ()


def test_or_term_hash_consed(table):
    p = table.new_uninterpreted_constant(BOOL_TYPE)
    q = table.new_uninterpreted_constant(BOOL_TYPE)
    o1 = table.or_term([p, q])
    o2 = table.or_term((p, q))
    assert o1 == o2
    assert table.get_kind(o1) == Kind.OR_TERM
    assert table.get_args(o1) == (p, q)


def test_product_accessors(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    prod = table.arithmetic_product(Fraction(2), x)
    assert table.is_arithmetic_product(prod)
    assert table.var_of_product(prod) == x
    assert table.coeff_of_product(prod) == 2
    assert table.arithmetic_product(2, x) == prod


def test_product_rejects_constant_variable(table):
    with pytest.raises(ValueError):
        table.arithmetic_product(2, ZERO_TERM)


def test_polynomial(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    y = table.new_uninterpreted_constant(REAL_TYPE)
    poly = table.arithmetic_polynomial([x, table.arithmetic_product(3, y)])
    assert table.is_arithmetic_polynomial(poly)
    assert table.monomials_of(poly)[0] == x
    assert len(table.monomials_of(poly)) == 2
    with pytest.raises(ValueError):
        table.arithmetic_polynomial([x])


def test_atoms(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    c = table.arithmetic_constant(5)
    ge = table.arithmetic_geq_zero(x)
    eq = table.arithmetic_eq_zero(x)
    bineq = table.arithmetic_binary_eq(x, c)
    assert table.get_kind(ge) == Kind.ARITH_GE_ATOM
    assert table.get_kind(eq) == Kind.ARITH_EQ_ATOM
    assert table.get_kind(bineq) == Kind.ARITH_BINEQ_ATOM
    assert table.get_type(ge) == BOOL_TYPE
    assert table.get_args(bineq) == (x, c)
    assert ge != eq


def test_atom_type_checks(table):
    p = table.new_uninterpreted_constant(BOOL_TYPE)
    x = table.new_uninterpreted_constant(REAL_TYPE)
    with pytest.raises(TypeError):
        table.arithmetic_geq_zero(p)
    with pytest.raises(ValueError):
        table.arithmetic_binary_eq(table.arithmetic_constant(1), x)


def test_ite(table):
    c = table.new_uninterpreted_constant(BOOL_TYPE)
    x = table.new_uninterpreted_constant(REAL_TYPE)
    y = table.new_uninterpreted_constant(REAL_TYPE)
    ite = table.arithmetic_ite(c, x, y)
    assert table.is_ite(ite)
    assert table.get_type(ite) == REAL_TYPE
    assert table.get_args(ite) == (c, x, y)
    with pytest.raises(TypeError):
        table.arithmetic_ite(x, x, y)


def test_app_term_and_names(table):
    f = table.new_uninterpreted_constant(REAL_TYPE)
    table.set_term_name(f, "f")
    x = table.new_uninterpreted_constant(REAL_TYPE)
    app = table.app_term(REAL_TYPE, [f, x])
    assert table.is_app(app)
    assert table.get_fnc_symbol(app) == f
    assert table.get_args(app) == (x,)
    assert table.get_term_name(app) == "f"
    assert table.get_term_by_name("f") == f
    assert table.get_term_name(x) is None
    assert table.get_term_by_name("g") is None


def test_duplicate_name_rejected(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    y = table.new_uninterpreted_constant(REAL_TYPE)
    table.set_term_name(x, "x")
    with pytest.raises(ValueError):
        table.set_term_name(y, "x")
    with pytest.raises(ValueError):
        table.set_term_name(x, "z")


def test_accessor_errors(table):
    x = table.new_uninterpreted_constant(REAL_TYPE)
    with pytest.raises(ValueError):
        table.arithmetic_constant_value(x)
    with pytest.raises(ValueError):
        table.var_of_product(x)
    with pytest.raises(ValueError):
        table.get_fnc_symbol(x)
    with pytest.raises(IndexError):
        table.get_kind(10_000)