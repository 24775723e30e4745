from fractions import Fraction

import pytest

from smtterms.polynomial import Monomial, Polynomial
from smtterms.types import UNDEF


def make(*pairs):
    poly = Polynomial()
    for var, coeff in pairs:
        poly.add_term(var, coeff)
    return poly


def test_add_term_keeps_variable_order():
    poly = make((10, 2), (4, 3), (UNDEF, 7))
    assert [m.var for m in poly] == [UNDEF, 4, 10]
    assert len(poly) == 3


def test_add_duplicate_variable_raises():
    poly = make((4, 1))
    with pytest.raises(ValueError):
        poly.add_term(4, 2)


def test_contains_and_get_coeff():
    poly = make((6, Fraction(3, 2)))
    assert poly.contains(6)
    assert not poly.contains(8)
    assert poly.get_coeff(6) == Fraction(3, 2)
    with pytest.raises(KeyError):
        poly.get_coeff(8)


def test_remove_var_returns_coefficient():
    poly = make((6, 5), (8, 9))
    assert poly.remove_var(6) == 5
    assert list(poly) == [Monomial(8, Fraction(9))]
    with pytest.raises(KeyError):
        poly.remove_var(6)


def test_negate_twice_is_identity():
    poly = make((6, 5), (8, -9))
    original = list(poly)
    poly.negate()
    assert [m.coeff for m in poly] == [-m.coeff for m in original]
    poly.negate()
    assert list(poly) == original


def test_multiply_then_divide_round_trip():
    poly = make((UNDEF, 3), (6, Fraction(2, 7)))
    original = list(poly)
    poly.multiply_by(Fraction(5, 3))
    assert list(poly) != original
    poly.divide_by(Fraction(5, 3))
    assert list(poly) == original


def test_merge_disjoint_reports_added():
    poly = make((6, 1))
    other = make((8, 2), (UNDEF, 4))
    added = []
    poly.merge(other, 1, on_added=added.append)
    assert sorted(added) == [UNDEF, 8]
    assert [m.var for m in poly] == [UNDEF, 6, 8]
    assert poly.get_coeff(8) == 2


def test_merge_with_negated_self_cancels_everything():
    poly = make((6, 1), (8, 3))
    removed = []
    poly.merge(poly, -1, on_removed=removed.append)
    assert len(poly) == 0
    assert removed == [6, 8]


def test_merge_scales_other():
    poly = make((6, 1))
    other = make((6, 2), (8, 3))
    poly.merge(other, Fraction(1, 2))
    assert poly.get_coeff(6) == 1 + Fraction(2) * Fraction(1, 2)
    assert poly.get_coeff(8) == Fraction(3) * Fraction(1, 2)


def test_equality_compares_monomials():
    assert make((6, 1), (8, 2)) == make((8, 2), (6, 1))
    assert not (make((6, 1)) == make((6, 2)))