# smtterms

A small library for building and normalizing SMT terms over Booleans and
linear real arithmetic, with uninterpreted functions.

Terms are plain integer handles. The lowest bit of a handle marks negation,
so a Boolean term and its negation share a single table entry. Composite
terms and constants are hash-consed: building the same term twice gives the
same handle. Free variables made with `mk_uninterpreted_constant` are always
fresh.

## Installation

```
pip install smtterms
```

## Building terms

`TermManager` (in `smtterms.manager`) is the entry point. It normalizes terms
as it builds them:

- arithmetic comparisons become `p >= 0` atoms (`<` and `>` are negations of
  them), and equalities become `p = 0` or, for two variables or a variable
  and a constant, a binary equality `x = y`;
- comparisons and equalities between constants fold to `TRUE_TERM` or
  `FALSE_TERM`;
- disjunctions are sorted and deduplicated, and collapse to true when they
  contain a term and its negation;
- conjunctions, implications, equivalences, `xor` and Boolean if-then-else
  are built from disjunction and negation;
- numerals and decimals are read as exact `fractions.Fraction` values.

```python
from smtterms.manager import TermManager
from smtterms.types import REAL_TYPE, opposite_term

tm = TermManager()

x = tm.mk_uninterpreted_constant(REAL_TYPE)
tm.set_term_name(x, "x")
one = tm.mk_rational_constant("1")

atom = tm.mk_term(">=", [x, one])        # x - 1 >= 0
same = tm.mk_arithmetic_leq(one, x)      # the same handle as atom
strict = tm.mk_arithmetic_lt(x, one)     # opposite_term(atom)
assert atom == same and strict == opposite_term(atom)
```

`mk_term` takes SMT-LIB operator names (`>=`, `<=`, `<`, `>`, `=`, `or`,
`and`, `=>`, `not`, `-`, `+`, `*`, `/`, `ite`, `xor`, `distinct`); any other
name builds a function application, or raises `ValueError` when `not_app` is
true. Functions are applied with `mk_app(name, ret_type, args)` after their
symbol has been named with `set_term_name`.

## Modules

- `smtterms.types`: the `Kind` enumeration, the predefined types
  (`BOOL_TYPE`, `REAL_TYPE`) and terms (`TRUE_TERM`, `FALSE_TERM`,
  `ZERO_TERM`), and helpers on handles (`index_of`, `is_negated`,
  `opposite_term`, `positive_term`, `negative_term`, `positive_term_of`,
  `negative_term_of`).
- `smtterms.hashcons`: `TermHashTable` and the hash functions
  `hash_composite_term` and `hash_integer_term`.
- `smtterms.table`: `TermTable`, the hash-consed storage under the manager,
  with names and structural queries.
- `smtterms.polynomial`: `Monomial` and `Polynomial`, a sparse linear
  polynomial kept sorted by variable, with `merge` and optional callbacks for
  added and cancelled variables.
- `smtterms.arith`: `term_to_poly`, `poly_to_term`, `is_var_like`,
  `parse_integer` and `parse_decimal`.
- `smtterms.manager`: `TermManager`.
- `smtterms.rewriter`: `Rewriter`, `DefaultRewriterConfig`,
  `VarSubstituteConfig` and `simultaneous_variable_substitution`.
- `smtterms.visitor`: `Visitor` and `DefaultVisitorConfig`, a post-order
  traversal that visits each term index once until `reset`.
- `smtterms.context`: `ParserContext`, which keeps scoped let-bindings
  (`LetRecords`), declared functions (`FunctionDeclaration`) and defined
  functions (`FunctionTemplate`, expanded by substitution), and resolves
  symbols and sorts (`Bool`, `Real`) to terms and types.

## Limits

- Only binary equality is supported; `mk_eq` with another number of
  arguments raises `NotImplementedError`.
- Products must be linear: at most one non-constant factor, and division only
  by a constant.
- There is no SMT-LIB reader and no solver. `ParserContext` resolves symbols
  and builds terms for a parser, but the package does not read input files,
  check satisfiability or produce models.

## Running the tests

```
pip install -e ".[test]"
pytest
```