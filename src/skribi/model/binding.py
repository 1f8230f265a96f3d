"""Variable bindings.

A Binding is the storage cell behind one declared skribi variable.  It is
created by the declaration builder (``skribi.interpret.build_binding``)
and afterwards only changed through ``write``.  Bindings know their scope
level but never remove themselves: the symbol table discards them when
their scope exits.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field, model_validator

from skribi.errors import (
    ConstantReassignment,
    InvalidAssignment,
    TypeMismatch,
    UseBeforeInitialization,
)

from .values import (
    GLOBAL_SCOPE,
    KIND_TO_DECLARED_TYPE,
    DeclaredType,
    ScopeLevel,
    UnsetValue,
    Value,
)


class Binding(BaseModel):
    """A named, typed, scope-anchored variable.

    ``scope_level`` is ``GLOBAL_SCOPE`` (0) for globals, otherwise the
    block depth the variable was declared in.  ``is_private`` records the
    ``pu`` modifier for the scope manager; bindings do not enforce it.
    """

    name: str = Field(frozen=True)
    declared_type: DeclaredType = Field(frozen=True)
    value: Value
    scope_level: ScopeLevel = Field(default=GLOBAL_SCOPE, frozen=True)
    is_constant: bool = Field(default=False, frozen=True)
    is_private: bool = Field(default=False, frozen=True)
    is_set: bool = False

    @model_validator(mode="after")
    def _value_matches_type(self) -> Self:
        if isinstance(self.value, UnsetValue):
            if self.is_set:
                raise ValueError(f"binding '{self.name}' is set but holds no value")
            return self
        expected = KIND_TO_DECLARED_TYPE[self.value.kind]
        if expected is not self.declared_type:
            raise ValueError(
                f"binding '{self.name}' declared {self.declared_type.value} "
                f"cannot hold a {self.value.kind} value"
            )
        return self

    @property
    def is_global(self) -> bool:
        return self.scope_level == GLOBAL_SCOPE

    def write(self, new_value: Value, line: int | None = None) -> None:
        """Replace the value, enforcing constness and the declared type.

        The binding counts as initialized as soon as a write is attempted,
        even if the type check then rejects the value.
        """
        if self.is_constant:
            raise ConstantReassignment(self.name, line)

        if not self.is_set:
            self.is_set = True

        if isinstance(new_value, UnsetValue):
            raise InvalidAssignment("unset", line)

        attempted = KIND_TO_DECLARED_TYPE[new_value.kind]
        if attempted is not self.declared_type:
            raise TypeMismatch(self.declared_type.value, attempted.value, line)

        self.value = new_value

    def read(self, line: int | None = None) -> Value:
        """Return the current value; fails if the variable was never set."""
        if not self.is_set:
            raise UseBeforeInitialization(self.name, line)
        return self.value
