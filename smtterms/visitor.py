"""Post-order traversal of term DAGs visiting every term index once."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from smtterms.manager import TermManager

__all__ = ["Visitor", "DefaultVisitorConfig"]


class _VisitConfig(Protocol):
    def visit(self, term: int) -> None: ...

    def reset(self) -> None: ...


class DefaultVisitorConfig:
    """Visitor configuration that does nothing."""

    def visit(self, term: int) -> None:
        return None

    def reset(self) -> None:
        return None


class Visitor:
    """Calls ``config.visit`` on each subterm after all of its arguments.

    A term and its negation share one index and are visited once between
    resets, also across separate calls.
    """

    def __init__(self, term_manager: TermManager, config: _VisitConfig) -> None:
        self.term_manager = term_manager
        self.config = config
        self._processed: set[int] = set()

    def reset(self) -> None:
        """Forget visited terms and reset the configuration."""
        self._processed.clear()
        self.config.reset()

    def visit_all(self, roots: Iterable[int]) -> None:
        """Visit each root that has not been visited yet."""
        for root in roots:
            self.visit(root)

    def visit(self, root: int) -> None:
        """Visit ``root`` and all its unvisited subterms in post-order."""
        tm = self.term_manager
        if tm.index_of(root) in self._processed:
            return
        stack: list[list[int]] = [[root, 0]]
        while stack:
            entry = stack[-1]
            current, next_child = entry
            children = tm.get_args(current)
            if next_child < len(children):
                entry[1] += 1
                child = children[next_child]
                if tm.index_of(child) not in self._processed:
                    stack.append([child, 0])
                continue
            self.config.visit(current)
            self._processed.add(tm.index_of(current))
            stack.pop()