"""Symbol scopes, let bindings and function definitions used while parsing."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from smtterms.manager import TermManager
from smtterms.rewriter import simultaneous_variable_substitution
from smtterms.types import BOOL_TYPE, FALSE_TERM, REAL_TYPE, TRUE_TERM

__all__ = [
    "SortedVar",
    "FunctionTemplate",
    "FunctionDeclaration",
    "LetRecords",
    "ParserContext",
]


@dataclass(frozen=True)
class SortedVar:
    """A variable name with its sort."""

    var_name: str
    type_: int


@dataclass(frozen=True)
class FunctionTemplate:
    """A defined function: formal argument terms and a body over them."""

    name: str
    args: tuple[int, ...]
    return_type: int
    body: int


@dataclass(frozen=True)
class FunctionDeclaration:
    """A declared uninterpreted function with its argument and return sorts."""

    name: str
    arg_types: tuple[int, ...]
    return_type: int


class LetRecords:
    """Scoped name bindings; inner bindings shadow outer ones until popped."""

    def __init__(self) -> None:
        self._binders: dict[str, list[int]] = {}
        self._known: list[str] = []
        self._frames: list[int] = []

    def get(self, name: str) -> Optional[int]:
        """Current value bound to ``name``, or None."""
        values = self._binders.get(name)
        return values[-1] if values else None

    def push_frame(self) -> None:
        self._frames.append(len(self._known))

    def pop_frame(self) -> None:
        """Drop every binding made since the matching ``push_frame``."""
        if not self._frames:
            raise IndexError("no binding frame to pop")
        limit = self._frames.pop()
        while len(self._known) > limit:
            name = self._known.pop()
            values = self._binders[name]
            values.pop()
            if not values:
                del self._binders[name]

    def add_binding(self, name: str, term: int) -> None:
        self._binders.setdefault(name, []).append(term)
        self._known.append(name)


class ParserContext:
    """Resolves symbols and builds terms for a parser."""

    def __init__(self, term_manager: TermManager) -> None:
        self.term_manager = term_manager
        self._let_records = LetRecords()
        self._defined: dict[str, FunctionTemplate] = {}
        self._declared: dict[str, FunctionDeclaration] = {}

    # -- let bindings ---------------------------------------------------------

    def add_let_bindings(self, bindings: Iterable[tuple[str, int]]) -> None:
        """Open a new scope holding ``bindings``."""
        self._let_records.push_frame()
        for name, term in bindings:
            self._let_records.add_binding(name, term)

    def pop_let_bindings(self) -> None:
        self._let_records.pop_frame()

    def push_binding_scope(self) -> None:
        self._let_records.push_frame()

    def pop_binding_scope(self) -> None:
        self._let_records.pop_frame()

    # -- symbols --------------------------------------------------------------

    def get_term_for_symbol(self, symbol: str) -> int:
        """Term that ``symbol`` currently stands for."""
        if symbol == "true":
            return TRUE_TERM
        if symbol == "false":
            return FALSE_TERM
        bound = self._let_records.get(symbol)
        if bound is not None:
            return bound
        defined = self._defined.get(symbol)
        if defined is not None:
            if defined.args:
                raise ValueError(f"function {symbol!r} needs arguments")
            return defined.body
        term = self.term_manager.get_term_by_name(symbol)
        if term is None:
            raise KeyError(f"unknown symbol: {symbol}")
        return term

    def get_type_for_symbol(self, symbol: str) -> int:
        if symbol == "Bool":
            return BOOL_TYPE
        if symbol == "Real":
            return REAL_TYPE
        raise ValueError(f"Requested unknown type: {symbol}")

    # -- declarations ---------------------------------------------------------

    def declare_uninterpreted_constant(self, sort: int, name: str) -> int:
        term = self.term_manager.mk_uninterpreted_constant(sort)
        self.term_manager.set_term_name(term, name)
        return term

    def declare_uninterpreted_function(
        self, ret_type: int, arg_sorts: Sequence[int], name: str
    ) -> None:
        if name in self._declared:
            raise ValueError(f"function {name!r} is already declared")
        symbol = self.term_manager.mk_uninterpreted_constant(ret_type)
        self.term_manager.set_term_name(symbol, name)
        self._declared[name] = FunctionDeclaration(name, tuple(arg_sorts), ret_type)

    def store_defined_fun(
        self, name: str, definition: int, formal_args: Sequence[int], return_sort: int
    ) -> None:
        if name in self._defined:
            raise ValueError(f"function {name!r} is already defined")
        self._defined[name] = FunctionTemplate(name, tuple(formal_args), return_sort, definition)

    def bind_vars(self, sorted_vars: Iterable[SortedVar]) -> list[int]:
        """Create a fresh constant per variable and bind it in the current scope."""
        result = []
        for sorted_var in sorted_vars:
            var = self.term_manager.mk_uninterpreted_constant(sorted_var.type_)
            self._let_records.add_binding(sorted_var.var_name, var)
            result.append(var)
        return result

    # -- terms ----------------------------------------------------------------

    def mk_numeral(self, text: str) -> int:
        return self.term_manager.mk_integer_constant(text)

    def mk_decimal(self, text: str) -> int:
        return self.term_manager.mk_rational_constant(text)

    def resolve_term(self, name: str, args: Sequence[int]) -> int:
        """Term for ``name`` applied to ``args``."""
        args = list(args)
        if name in self._defined:
            return self._resolve_defined_function(name, args)
        declaration = self._declared.get(name)
        if declaration is not None:
            if len(declaration.arg_types) != len(args):
                raise ValueError(
                    f"function {name!r} expects {len(declaration.arg_types)} argument(s), "
                    f"got {len(args)}"
                )
            for expected, arg in zip(declaration.arg_types, args):
                if self.term_manager.get_type(arg) != expected:
                    raise TypeError(f"argument of {name!r} has the wrong sort")
            return self.term_manager.mk_app(name, declaration.return_type, args)
        return self.term_manager.mk_term(name, args, True)

    def _resolve_defined_function(self, name: str, args: list[int]) -> int:
        template = self._defined[name]
        if len(template.args) != len(args):
            raise ValueError(
                f"function {name!r} expects {len(template.args)} argument(s), got {len(args)}"
            )
        subst_map = dict(zip(template.args, args))
        return simultaneous_variable_substitution(self.term_manager, subst_map, template.body)