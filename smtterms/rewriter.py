"""Bottom-up rewriting of term DAGs and simultaneous variable substitution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from smtterms.manager import TermManager
from smtterms.types import Kind, is_negated, opposite_term, positive_term

__all__ = [
    "Rewriter",
    "DefaultRewriterConfig",
    "VarSubstituteConfig",
    "simultaneous_variable_substitution",
]


class _RewriteConfig(Protocol):
    def rewrite(self, term: int) -> int: ...


class DefaultRewriterConfig:
    """Rewriter configuration that leaves every term unchanged."""

    def rewrite(self, term: int) -> int:
        return term


class VarSubstituteConfig(DefaultRewriterConfig):
    """Replaces positive uninterpreted constants found in ``subst_map``."""

    def __init__(self, tm: TermManager, subst_map: Mapping[int, int]) -> None:
        self.tm = tm
        self.subst_map = subst_map

    def rewrite(self, term: int) -> int:
        if not is_negated(term) and self.tm.get_kind(term) == Kind.UNINTERPRETED_TERM:
            return self.subst_map.get(term, term)
        return term


class Rewriter:
    """Rewrites a term bottom-up, rebuilding every term whose arguments changed.

    Each distinct subterm is processed once. Negated terms are handled through
    their positive form, so polarity is kept in the result.
    """

    def __init__(self, tm: TermManager, cfg: _RewriteConfig) -> None:
        self.tm = tm
        self.cfg = cfg

    def rewrite(self, root: int) -> int:
        tm = self.tm
        substitutions: dict[int, int] = {}
        processed: set[int] = set()

        def result_of(term: int) -> int:
            positive = positive_term(term)
            new = substitutions.get(positive, positive)
            return opposite_term(new) if is_negated(term) else new

        stack: list[list[int]] = [[positive_term(root), 0]]
        while stack:
            entry = stack[-1]
            term, next_child = entry
            children = tm.get_args(term)
            if next_child < len(children):
                entry[1] += 1
                child = positive_term(children[next_child])
                if child not in processed:
                    stack.append([child, 0])
                continue

            new_args = [result_of(child) for child in children]
            for old, new in zip(children, new_args):
                if tm.get_type(old) != tm.get_type(new):
                    raise TypeError(f"rewriting changed the type of term {old}")
            if new_args != list(children):
                new_term = self._rebuild(term, new_args)
            else:
                new_term = term
            rewritten = self.cfg.rewrite(new_term)
            if rewritten != term:
                if tm.get_type(rewritten) != tm.get_type(term):
                    raise TypeError(f"rewriting changed the type of term {term}")
                substitutions[term] = rewritten
            processed.add(term)
            stack.pop()

        return result_of(root)

    def _rebuild(self, term: int, args: list[int]) -> int:
        kind = self.tm.get_kind(term)
        if kind == Kind.APP_TERM:
            return self.tm.mk_term_of_kind(kind, [self.tm.get_fnc_symbol(term), *args])
        return self.tm.mk_term_of_kind(kind, args)


def simultaneous_variable_substitution(
    tm: TermManager, subst_map: Mapping[int, int], term: int
) -> int:
    """Replace all variables in ``term`` by their images in ``subst_map`` at once."""
    return Rewriter(tm, VarSubstituteConfig(tm, subst_map)).rewrite(term)