"""skribi variable bindings — declaration parsing and typed storage.

Entry point::

    from skribi.interpret import declare_all, halt_on_error

    with halt_on_error():
        table = declare_all('''
            ju int limit 10
            string name
        ''')
        table.read("limit")          # IntValue(value=10)
        table.read("name")           # UseBeforeInitialization -> exit 1
"""

from __future__ import annotations

import logging

from skribi.errors import SkribiError

from ._declarations import Modifier, build_binding, scan_modifiers
from ._diagnostics import fatal, format_diagnostic, halt_on_error
from ._symbols import SymbolTable
from ._tokens import tokenize
from ._values import make_value, parse_literal, resolve_type, type_default

logging.getLogger("skribi").addHandler(logging.NullHandler())


def declare_all(
    source: str,
    *,
    table: SymbolTable | None = None,
    first_line: int = 1,
) -> SymbolTable:
    """Declare every non-blank line of *source* into a symbol table.

    Parameters
    ----------
    source
        One declaration statement per line.
    table
        Table to declare into; a fresh global-scope ``SymbolTable`` is
        created when omitted.
    first_line
        Line number reported for the first line of *source*.

    Returns
    -------
    SymbolTable
        The table holding the new bindings.
    """
    if table is None:
        table = SymbolTable()
    for offset, text in enumerate(source.splitlines()):
        tokens = tokenize(text)
        if not tokens:
            continue
        table.declare(tokens, first_line + offset)
    return table


__all__ = [
    "Modifier",
    "SkribiError",
    "SymbolTable",
    "build_binding",
    "declare_all",
    "fatal",
    "format_diagnostic",
    "halt_on_error",
    "make_value",
    "parse_literal",
    "resolve_type",
    "scan_modifiers",
    "tokenize",
    "type_default",
]
