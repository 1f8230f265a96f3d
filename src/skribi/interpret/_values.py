"""Literal parsing and type defaults for declarations.

Turns initializer tokens into Values for a declared type and provides
the zero-value used when a declaration has no initializer.
"""

from __future__ import annotations

import math
import re
import struct
from fractions import Fraction

from skribi.errors import MalformedLiteral, UnknownType
from skribi.model.values import (
    INT32_MAX,
    INT32_MIN,
    DeclaredType,
    FlagValue,
    IntValue,
    RealValue,
    TextValue,
    Value,
    to_f32,
)


# ---------------------------------------------------------------------------
# Literal syntax
# ---------------------------------------------------------------------------

# Python's int()/float() also accept whitespace and "_" separators; skribi
# literals do not.
_INT_RE = re.compile(r"[+-]?[0-9]+")

_FLOAT_RE = re.compile(
    r"[+-]?"
    r"(?:"
    r"inf(?:inity)?"
    r"|nan"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r")",
    re.IGNORECASE,
)

_BOOL_LITERALS = {"true": True, "false": False}


def resolve_type(type_name: str, line: int | None = None) -> DeclaredType:
    """Map a type token to a DeclaredType."""
    try:
        return DeclaredType(type_name)
    except ValueError:
        raise UnknownType(type_name, line) from None


def _parse_int(literal: str, line: int | None) -> IntValue:
    if not _INT_RE.fullmatch(literal):
        raise MalformedLiteral("int", literal, line)
    number = int(literal)
    if not INT32_MIN <= number <= INT32_MAX:
        raise MalformedLiteral("int", literal, line)
    return IntValue(value=number)


_F32_MAX_BITS = 0x7F7FFFFF
_F32_OVERFLOW = Fraction(2**128 - 2**103)


def _f32_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _f32_from_bits(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits))[0]


def _decimal_to_f32(literal: str) -> float:
    """Round a decimal literal straight to the nearest single, ties to even.

    Going through ``float()`` first would round twice (decimal -> double ->
    single) and can land one unit off next to a halfway point.
    """
    approx = float(literal)
    if approx == 0.0 or not math.isfinite(approx):
        return to_f32(approx)

    exact = abs(Fraction(literal))
    nearest = to_f32(abs(approx))
    if math.isinf(nearest):
        # halfway between the largest single and 2**128 rounds to inf
        if exact < _F32_OVERFLOW:
            nearest = _f32_from_bits(_F32_MAX_BITS)
        return math.copysign(nearest, approx)

    bits = _f32_bits(nearest)
    candidates = [nearest]
    if bits > 0:
        candidates.append(_f32_from_bits(bits - 1))
    above = _f32_from_bits(bits + 1)
    if not math.isinf(above):
        candidates.append(above)
    best = min(
        candidates,
        key=lambda c: (abs(Fraction(c) - exact), _f32_bits(c) & 1),
    )
    return math.copysign(best, approx)


def _parse_float(literal: str, line: int | None) -> RealValue:
    if not _FLOAT_RE.fullmatch(literal):
        raise MalformedLiteral("float", literal, line)
    return RealValue(value=_decimal_to_f32(literal))


def _parse_bool(literal: str, line: int | None) -> FlagValue:
    if literal not in _BOOL_LITERALS:
        raise MalformedLiteral("bool", literal, line)
    return FlagValue(value=_BOOL_LITERALS[literal])


def parse_literal(
    literal: str,
    declared_type: DeclaredType,
    line: int | None = None,
) -> Value:
    """Parse an initializer token into the Value for *declared_type*.

    - string -> TextValue, token taken verbatim
    - int    -> IntValue, optional sign and digits, 32-bit range
    - float  -> RealValue, decimal/exponent forms, inf, nan
    - bool   -> FlagValue, exactly ``true`` or ``false``
    """
    if declared_type is DeclaredType.STRING:
        return TextValue(value=literal)
    if declared_type is DeclaredType.INT:
        return _parse_int(literal, line)
    if declared_type is DeclaredType.FLOAT:
        return _parse_float(literal, line)
    if declared_type is DeclaredType.BOOL:
        return _parse_bool(literal, line)
    raise UnknownType(str(declared_type), line)


# ---------------------------------------------------------------------------
# Type defaults
# ---------------------------------------------------------------------------

_DEFAULTS: dict[DeclaredType, Value] = {
    DeclaredType.STRING: TextValue(value=""),
    DeclaredType.INT: IntValue(value=0),
    DeclaredType.FLOAT: RealValue(value=0.0),
    DeclaredType.BOOL: FlagValue(value=False),
}


def type_default(declared_type: DeclaredType) -> Value:
    """Return the zero-value for a declared type."""
    return _DEFAULTS[declared_type]


def make_value(payload: object) -> Value:
    """Wrap a plain Python scalar in the matching Value kind.

    ``bool`` is checked before ``int`` since it is an ``int`` subclass.
    Out-of-range integers raise ``pydantic.ValidationError``.
    """
    if isinstance(payload, bool):
        return FlagValue(value=payload)
    if isinstance(payload, int):
        return IntValue(value=payload)
    if isinstance(payload, float):
        return RealValue(value=payload)
    if isinstance(payload, str):
        return TextValue(value=payload)
    raise TypeError(
        f"make_value() expects str, int, float or bool, "
        f"got {type(payload).__name__}"
    )

