"""Shared test helpers for the skribi test suite."""

from skribi.interpret import build_binding
from skribi.model.values import FlagValue, IntValue, RealValue, TextValue


# One sample value per declared type, used for the write type grid.
SAMPLES = {
    "string": TextValue(value="hello"),
    "int": IntValue(value=7),
    "float": RealValue(value=1.5),
    "bool": FlagValue(value=True),
}


def declare(*tokens: str, scope: int = 0, line: int = 1):
    """Build a binding from tokens, returning only the Binding."""
    binding, _ = build_binding(list(tokens), scope, line)
    return binding
