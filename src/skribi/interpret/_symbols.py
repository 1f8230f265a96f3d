"""Symbol table: stores bindings by name and scope level.

The table tracks the current scope depth.  Entering a block raises the
depth; exiting it discards every binding declared at that depth.
Bindings declared with ``fu`` live at ``GLOBAL_SCOPE`` and survive every
exit.  The ``pu`` flag is kept on the binding but not enforced here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from skribi.errors import (
    Redeclaration,
    ScopeOverflow,
    ScopeUnderflow,
    UndefinedVariable,
)
from skribi.model.binding import Binding
from skribi.model.values import GLOBAL_SCOPE, MAX_SCOPE_LEVEL, Value

from ._declarations import build_binding

logger = logging.getLogger(__name__)


class SymbolTable:
    """Bindings of a running program, keyed by ``(name, scope_level)``.

    Parameters
    ----------
    max_depth : int
        Deepest scope level ``enter_scope`` may reach (default 255).
    """

    def __init__(self, max_depth: int = MAX_SCOPE_LEVEL) -> None:
        if not GLOBAL_SCOPE <= max_depth <= MAX_SCOPE_LEVEL:
            raise ValueError(
                f"max_depth must be between {GLOBAL_SCOPE} and {MAX_SCOPE_LEVEL}, "
                f"got {max_depth}"
            )
        self._max_depth = max_depth
        self._scope_level = GLOBAL_SCOPE
        self._bindings: dict[tuple[str, int], Binding] = {}

    # -----------------------------------------------------------------------
    # Scopes
    # -----------------------------------------------------------------------

    @property
    def scope_level(self) -> int:
        """Current scope depth (``GLOBAL_SCOPE`` outside any block)."""
        return self._scope_level

    def enter_scope(self, line: int | None = None) -> int:
        if self._scope_level >= self._max_depth:
            raise ScopeOverflow(self._max_depth, line)
        self._scope_level += 1
        return self._scope_level

    def exit_scope(self, line: int | None = None) -> list[str]:
        """Leave the current block and discard its bindings.

        Returns the names of the discarded bindings.
        """
        if self._scope_level == GLOBAL_SCOPE:
            raise ScopeUnderflow(line)
        level = self._scope_level
        dropped = [key for key in self._bindings if key[1] == level]
        for key in dropped:
            del self._bindings[key]
        self._scope_level -= 1
        names = [name for name, _ in dropped]
        logger.debug("exited scope %d, discarded %s", level, names)
        return names

    # -----------------------------------------------------------------------
    # Bindings
    # -----------------------------------------------------------------------

    def declare(self, tokens: Sequence[str], line: int | None = None) -> Binding:
        """Build a binding from a declaration statement and store it."""
        binding, name = build_binding(tokens, self._scope_level, line)
        key = (name, binding.scope_level)
        if key in self._bindings:
            raise Redeclaration(name, binding.scope_level, line)
        self._bindings[key] = binding
        return binding

    def lookup(self, name: str, line: int | None = None) -> Binding:
        """Return the innermost visible binding for *name*."""
        for level in range(self._scope_level, GLOBAL_SCOPE - 1, -1):
            binding = self._bindings.get((name, level))
            if binding is not None:
                return binding
        raise UndefinedVariable(name, line)

    def assign(self, name: str, value: Value, line: int | None = None) -> None:
        self.lookup(name, line).write(value, line)

    def read(self, name: str, line: int | None = None) -> Value:
        return self.lookup(name, line).read(line)

    def bindings(self) -> Iterator[Binding]:
        """Iterate over all live bindings, outermost scope first."""
        for key in sorted(self._bindings, key=lambda k: k[1]):
            yield self._bindings[key]

    def __contains__(self, name: object) -> bool:
        return any(key[0] == name for key in self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
