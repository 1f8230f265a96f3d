"""Error kinds raised by skribi variable handling.

Every error is fatal to the running program.  Library code only raises;
the top-level driver (``skribi.interpret.halt_on_error``) formats the
diagnostic and halts.

Hierarchy::

    SkribiError
    ├── DeclarationError        malformed declaration statement
    │   ├── DuplicateModifier
    │   ├── ConflictingScopeModifiers
    │   ├── MissingTypeOrName
    │   ├── TooManyTokens
    │   ├── UnknownType
    │   └── MalformedLiteral
    ├── BindingError            rejected read/write on a binding
    │   ├── ConstantReassignment
    │   ├── TypeMismatch
    │   ├── InvalidAssignment
    │   └── UseBeforeInitialization
    └── ScopeError              symbol table bookkeeping
        ├── Redeclaration
        ├── UndefinedVariable
        ├── ScopeOverflow
        ├── ScopeUnderflow
        └── InvalidScopeLevel
"""

from __future__ import annotations


class SkribiError(Exception):
    """Fatal error with the source line it was detected on."""

    def __init__(self, message: str, line: int | None = None):
        self.message = message
        self.line = line
        loc = ""
        if line is not None:
            loc = f" (line {line})"
        super().__init__(f"{message}{loc}")


# ---------------------------------------------------------------------------
# Declaration parsing
# ---------------------------------------------------------------------------

class DeclarationError(SkribiError):
    """The declaration statement itself is malformed."""


class DuplicateModifier(DeclarationError):
    def __init__(self, token: str, line: int | None = None):
        self.token = token
        super().__init__(
            f"Syntax error: too many {token} in variable declaration", line,
        )


class ConflictingScopeModifiers(DeclarationError):
    def __init__(self, line: int | None = None):
        super().__init__("Variable cannot be both global and private", line)


class MissingTypeOrName(DeclarationError):
    def __init__(self, line: int | None = None):
        super().__init__(
            "Syntax error: variable declaration need at least a type and a name",
            line,
        )


class TooManyTokens(DeclarationError):
    def __init__(self, line: int | None = None):
        super().__init__(
            "Syntax error: variable declaration can only have a type, "
            "a name and a value",
            line,
        )


class UnknownType(DeclarationError):
    def __init__(self, type_name: str, line: int | None = None):
        self.type_name = type_name
        super().__init__(f"Unknown variable type: {type_name!r}", line)


class MalformedLiteral(DeclarationError):
    def __init__(self, type_name: str, literal: str, line: int | None = None):
        self.type_name = type_name
        self.literal = literal
        super().__init__(f"Invalid {type_name} literal: {literal!r}", line)


# ---------------------------------------------------------------------------
# Binding access
# ---------------------------------------------------------------------------

class BindingError(SkribiError):
    """A read or write was rejected by a binding."""


class ConstantReassignment(BindingError):
    def __init__(self, name: str, line: int | None = None):
        self.name = name
        super().__init__(f"Cannot redefine value of constant '{name}'", line)


class TypeMismatch(BindingError):
    def __init__(self, declared_type: str, attempted_kind: str, line: int | None = None):
        self.declared_type = declared_type
        self.attempted_kind = attempted_kind
        super().__init__(f"Cannot set {declared_type} to {attempted_kind}", line)


class InvalidAssignment(BindingError):
    def __init__(self, what: str, line: int | None = None):
        self.what = what
        super().__init__(f"Cannot set variable to {what}", line)


class UseBeforeInitialization(BindingError):
    def __init__(self, name: str, line: int | None = None):
        self.name = name
        super().__init__(f"Variable '{name}' was never initialized", line)


# ---------------------------------------------------------------------------
# Symbol table
# ---------------------------------------------------------------------------

class ScopeError(SkribiError):
    """Symbol table bookkeeping failed."""


class Redeclaration(ScopeError):
    def __init__(self, name: str, scope_level: int, line: int | None = None):
        self.name = name
        self.scope_level = scope_level
        super().__init__(
            f"Variable '{name}' is already declared at scope level {scope_level}",
            line,
        )


class UndefinedVariable(ScopeError):
    def __init__(self, name: str, line: int | None = None):
        self.name = name
        super().__init__(f"Undefined variable '{name}'", line)


class ScopeOverflow(ScopeError):
    def __init__(self, max_depth: int, line: int | None = None):
        self.max_depth = max_depth
        super().__init__(f"Scopes nested deeper than {max_depth} levels", line)


class ScopeUnderflow(ScopeError):
    def __init__(self, line: int | None = None):
        super().__init__("Cannot exit the global scope", line)


class InvalidScopeLevel(ScopeError):
    def __init__(self, scope_level: object, line: int | None = None):
        self.scope_level = scope_level
        super().__init__(
            f"Scope level {scope_level!r} is outside 0..255", line,
        )
