"""Runtime values for skribi variables.

A Value is a closed discriminated union over the four scalar kinds plus
the ``Unset`` sentinel:

- TextValue:  ``string`` payload
- IntValue:   32-bit signed integer
- RealValue:  32-bit float (stored rounded to single precision)
- FlagValue:  boolean
- UnsetValue: declared but never assigned

There is no implicit coercion between kinds.  Every consumer of a Value
handles all five kinds; ``VALUE_KINDS`` lists them so tests can check
that lookup tables keyed by kind stay exhaustive.
"""

from __future__ import annotations

import math
import struct
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

GLOBAL_SCOPE = 0
"""Scope level of the global scope.  Bindings at this level live for the
whole program; any other level is a block nesting depth."""

MAX_SCOPE_LEVEL = 255

ScopeLevel = Annotated[int, Field(ge=GLOBAL_SCOPE, le=MAX_SCOPE_LEVEL)]


class DeclaredType(str, Enum):
    """Primitive type names accepted in a declaration."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"


# ---------------------------------------------------------------------------
# Single precision helper
# ---------------------------------------------------------------------------

def to_f32(value: float) -> float:
    """Round a Python float to the nearest IEEE-754 single."""
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


# ---------------------------------------------------------------------------
# Value kinds
# ---------------------------------------------------------------------------

class _FrozenValue(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextValue(_FrozenValue):
    """A ``string`` value."""

    kind: Literal["text"] = "text"
    value: str


class IntValue(_FrozenValue):
    """An ``int`` value (32-bit signed)."""

    kind: Literal["int"] = "int"
    value: int = Field(strict=True, ge=INT32_MIN, le=INT32_MAX)


class RealValue(_FrozenValue):
    """A ``float`` value (32-bit)."""

    kind: Literal["real"] = "real"
    value: float

    @field_validator("value")
    @classmethod
    def _single_precision(cls, v: float) -> float:
        return to_f32(v)


class FlagValue(_FrozenValue):
    """A ``bool`` value."""

    kind: Literal["flag"] = "flag"
    value: bool = Field(strict=True)


class UnsetValue(_FrozenValue):
    """Marker for a declared variable that never received a value."""

    kind: Literal["unset"] = "unset"


Value = Annotated[
    Union[TextValue, IntValue, RealValue, FlagValue, UnsetValue],
    Field(discriminator="kind"),
]

UNSET = UnsetValue()

VALUE_KINDS: frozenset[str] = frozenset({"text", "int", "real", "flag", "unset"})


# Which declared type each assignable kind belongs to.  ``unset`` maps to
# None: it is never assignable.
KIND_TO_DECLARED_TYPE: dict[str, DeclaredType | None] = {
    "text": DeclaredType.STRING,
    "int": DeclaredType.INT,
    "real": DeclaredType.FLOAT,
    "flag": DeclaredType.BOOL,
    "unset": None,
}
