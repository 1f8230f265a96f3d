"""Declaration builder: turns a tokenized declaration into a Binding.

Grammar (one statement, already split into word tokens)::

    [modifier]* <type> <name> [<literal>]

    modifier := pu | fu | ju          private, global, constant
    type     := string | int | float | bool

Only the first two tokens are scanned for modifiers.  The builder is a
pure function: it never touches a symbol table, it only validates the
statement and returns the new Binding together with its name.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from skribi.errors import (
    ConflictingScopeModifiers,
    DuplicateModifier,
    InvalidScopeLevel,
    MissingTypeOrName,
    TooManyTokens,
)
from skribi.model.binding import Binding
from skribi.model.values import GLOBAL_SCOPE, MAX_SCOPE_LEVEL

from ._values import parse_literal, resolve_type, type_default

logger = logging.getLogger(__name__)


class Modifier(str, Enum):
    """Declaration modifier keywords."""

    PRIVATE = "pu"
    GLOBAL = "fu"
    CONSTANT = "ju"


_MODIFIER_SLOTS = 2


def _valid_scope_level(level: object) -> bool:
    return (
        isinstance(level, int)
        and not isinstance(level, bool)
        and GLOBAL_SCOPE <= level <= MAX_SCOPE_LEVEL
    )


def scan_modifiers(tokens: Sequence[str]) -> set[Modifier]:
    """Return the modifiers present among the first two tokens."""
    head = tokens[:_MODIFIER_SLOTS]
    return {m for m in Modifier if m.value in head}


def build_binding(
    tokens: Sequence[str],
    scope_level: int,
    line: int | None = None,
) -> tuple[Binding, str]:
    """Build a Binding from one declaration statement.

    Parameters
    ----------
    tokens : Sequence[str]
        Word tokens of the statement, in source order.
    scope_level : int
        Scope level the statement appears in (``GLOBAL_SCOPE`` is 0).
        Must be in ``0..255``; ignored when the ``fu`` modifier is present.
    line : int | None
        Source line, attached to any error raised.

    Returns
    -------
    tuple[Binding, str]
        The new binding and its name.

    Raises
    ------
    DeclarationError
        The first rule the statement breaks, checked in order: duplicate
        modifier, conflicting scope modifiers, arity, unknown type,
        malformed literal.
    InvalidScopeLevel
        *scope_level* is outside ``0..255`` and ``fu`` is absent.
    """
    modifiers = scan_modifiers(tokens)

    if len(tokens) >= _MODIFIER_SLOTS and tokens[0] == tokens[1]:
        raise DuplicateModifier(tokens[0], line)
    if Modifier.PRIVATE in modifiers and Modifier.GLOBAL in modifiers:
        raise ConflictingScopeModifiers(line)

    start = len(modifiers)
    remaining = len(tokens) - start
    if remaining < 2:
        raise MissingTypeOrName(line)
    if remaining > 3:
        raise TooManyTokens(line)

    type_token = tokens[start]
    name = tokens[start + 1]
    declared_type = resolve_type(type_token, line)

    has_initializer = remaining == 3
    if has_initializer:
        value = parse_literal(tokens[start + 2], declared_type, line)
    else:
        value = type_default(declared_type)

    is_global = Modifier.GLOBAL in modifiers
    if not is_global and not _valid_scope_level(scope_level):
        raise InvalidScopeLevel(scope_level, line)

    binding = Binding(
        name=name,
        declared_type=declared_type,
        value=value,
        scope_level=GLOBAL_SCOPE if is_global else scope_level,
        is_constant=Modifier.CONSTANT in modifiers,
        is_private=Modifier.PRIVATE in modifiers,
        is_set=has_initializer,
    )
    logger.debug(
        "declared %s %s at scope %d (line %s)",
        declared_type.value, name, binding.scope_level, line,
    )
    return binding, name
