"""Term handles, term kinds and the predefined types and terms.

A term is a plain integer handle. Its least significant bit is the polarity:
only Boolean terms may have it set, which denotes the negation of the
underlying term. The remaining bits are the index of the term in its table.
"""

from __future__ import annotations

from enum import IntEnum
from fractions import Fraction
from typing import Union

__all__ = [
    "Kind",
    "VarValue",
    "NULL_TYPE",
    "BOOL_TYPE",
    "REAL_TYPE",
    "NULL_TERM",
    "TRUE_TERM",
    "FALSE_TERM",
    "ZERO_TERM",
    "UNDEF",
    "index_of",
    "is_negated",
    "opposite_term",
    "positive_term",
    "negative_term",
    "positive_term_of",
    "negative_term_of",
]

# Value of a model variable: Boolean or rational.
VarValue = Union[bool, Fraction]

# Predefined types.
NULL_TYPE = -1
BOOL_TYPE = 0
REAL_TYPE = 1

# Predefined terms.
NULL_TERM = -1
TRUE_TERM = 2
FALSE_TERM = 3
ZERO_TERM = 4

# Marker for "no variable", e.g. the constant monomial of a polynomial.
UNDEF = NULL_TERM


class Kind(IntEnum):
    """Kinds of terms stored in a term table."""

    # special marks
    UNUSED_TERM = 0
    RESERVED_TERM = 1
    # constants
    CONSTANT_TERM = 2
    ARITH_CONSTANT = 3
    # non-constant atomic terms (free variables)
    UNINTERPRETED_TERM = 4
    # composites
    ITE_TERM = 5
    APP_TERM = 6
    EQ_TERM = 7
    DISTINCT_TERM = 8
    OR_TERM = 9
    XOR_TERM = 10
    ARITH_EQ_ATOM = 11
    ARITH_GE_ATOM = 12
    ARITH_BINEQ_ATOM = 13
    # polynomials
    ARITH_PRODUCT = 14
    ARITH_POLY = 15


def index_of(term: int) -> int:
    """Index of the underlying term (the same for both polarities)."""
    return term >> 1


def is_negated(term: int) -> bool:
    """Whether the handle denotes a negated term."""
    return bool(term & 1)


def opposite_term(term: int) -> int:
    """Handle of the negation of ``term``."""
    return term ^ 1


def positive_term_of(index: int) -> int:
    """Positive handle of the term with table index ``index``."""
    return index << 1


def negative_term_of(index: int) -> int:
    """Negative handle of the term with table index ``index``."""
    return (index << 1) | 1


def positive_term(term: int) -> int:
    """Positive version of ``term``."""
    return positive_term_of(index_of(term))


def negative_term(term: int) -> int:
    """Negative version of ``term``."""
    return negative_term_of(index_of(term))