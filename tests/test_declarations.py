"""Tests for the declaration builder."""

import io

import pytest

from conftest import declare

from skribi.errors import (
    ConflictingScopeModifiers,
    DeclarationError,
    DuplicateModifier,
    InvalidScopeLevel,
    MalformedLiteral,
    MissingTypeOrName,
    TooManyTokens,
    UnknownType,
    UseBeforeInitialization,
)
from skribi.interpret import Modifier, build_binding, halt_on_error, scan_modifiers
from skribi.model.values import (
    DeclaredType,
    FlagValue,
    IntValue,
    RealValue,
    TextValue,
)


_SUFFIXES = [
    ["string", "s"],
    ["int", "i", "3"],
    ["float", "f"],
    ["bool", "b", "false"],
]


# ---------------------------------------------------------------------------
# Basic declarations
# ---------------------------------------------------------------------------

class TestBuild:
    def test_int_with_initializer(self):
        binding, name = build_binding(["int", "x", "5"], 0, 1)
        assert name == "x"
        assert binding.name == "x"
        assert binding.declared_type is DeclaredType.INT
        assert binding.value == IntValue(value=5)
        assert binding.is_set
        assert not binding.is_constant
        assert binding.scope_level == 0

    def test_constant_bool(self):
        b = declare("ju", "bool", "flag", "true")
        assert b.is_constant
        assert b.value == FlagValue(value=True)
        assert b.is_set

    @pytest.mark.parametrize("tokens, expected", [
        (["string", "s", "hello"], TextValue(value="hello")),
        (["int", "i", "-12"], IntValue(value=-12)),
        (["float", "f", "2.5"], RealValue(value=2.5)),
        (["bool", "b", "false"], FlagValue(value=False)),
    ])
    def test_initializer_parsed(self, tokens, expected):
        b = declare(*tokens)
        assert b.is_set
        assert b.value == expected

    @pytest.mark.parametrize("type_name, expected", [
        ("string", TextValue(value="")),
        ("int", IntValue(value=0)),
        ("float", RealValue(value=0.0)),
        ("bool", FlagValue(value=False)),
    ])
    def test_default_without_initializer(self, type_name, expected):
        b = declare(type_name, "v")
        assert not b.is_set
        assert b.value == expected
        with pytest.raises(UseBeforeInitialization):
            b.read()

    def test_string_literal_that_looks_like_modifier(self):
        b = declare("string", "s", "ju")
        assert not b.is_constant
        assert b.value == TextValue(value="ju")

    def test_name_is_any_token(self):
        b = declare("int", "5", "5")
        assert b.name == "5"


# ---------------------------------------------------------------------------
# Modifiers and scope
# ---------------------------------------------------------------------------

class TestModifiers:
    def test_scan(self):
        assert scan_modifiers(["pu", "ju", "int", "x"]) == {Modifier.PRIVATE, Modifier.CONSTANT}
        assert scan_modifiers(["int", "x", "ju"]) == set()
        assert scan_modifiers([]) == set()

    def test_global_forces_scope_zero(self):
        b = declare("fu", "int", "g", scope=4)
        assert b.scope_level == 0
        assert b.is_global

    def test_scope_preserved_without_global(self):
        assert declare("int", "x", scope=4).scope_level == 4
        assert declare("ju", "int", "x", "1", scope=7).scope_level == 7

    def test_private_recorded(self):
        b = declare("pu", "string", "p", scope=2)
        assert b.is_private
        assert b.scope_level == 2

    def test_global_constant(self):
        b = declare("fu", "ju", "float", "pi", "3.14", scope=3)
        assert b.is_constant
        assert b.scope_level == 0
        assert b.value.value == pytest.approx(3.14, rel=1e-6)

    def test_modifier_order_irrelevant(self):
        a = declare("ju", "pu", "int", "x", "1", scope=1)
        b = declare("pu", "ju", "int", "x", "1", scope=1)
        assert a == b

    @pytest.mark.parametrize("suffix", _SUFFIXES)
    @pytest.mark.parametrize("mods", [["fu", "pu"], ["pu", "fu"]])
    def test_global_and_private_conflict(self, mods, suffix):
        with pytest.raises(ConflictingScopeModifiers, match="both global and private"):
            build_binding(mods + suffix, 3, 8)

    def test_conflict_spec_example(self):
        with pytest.raises(ConflictingScopeModifiers):
            build_binding(["fu", "pu", "string", "s"], 3, 1)

    @pytest.mark.parametrize("mod", ["pu", "fu", "ju"])
    def test_duplicate_modifier(self, mod):
        with pytest.raises(DuplicateModifier, match=f"too many {mod}") as info:
            build_binding([mod, mod, "int", "x"], 0, 2)
        assert info.value.token == mod

    def test_duplicate_non_modifier(self):
        with pytest.raises(DuplicateModifier):
            build_binding(["int", "int", "5"], 0, 1)

    def test_modifier_in_second_slot_shifts_type(self):
        with pytest.raises(UnknownType):
            build_binding(["int", "ju", "x"], 0, 1)


# ---------------------------------------------------------------------------
# Arity and types
# ---------------------------------------------------------------------------

class TestArity:
    @pytest.mark.parametrize("tokens", [
        [],
        ["int"],
        ["ju", "int"],
        ["fu", "ju", "int"],
        ["int", "pu"],
    ])
    def test_missing_type_or_name(self, tokens):
        with pytest.raises(MissingTypeOrName, match="at least a type and a name"):
            build_binding(tokens, 0, 1)

    @pytest.mark.parametrize("tokens", [
        ["string", "a", "b", "c"],
        ["ju", "int", "x", "1", "2"],
        ["fu", "ju", "bool", "b", "true", "false"],
    ])
    def test_too_many_tokens(self, tokens):
        with pytest.raises(TooManyTokens, match="only have a type, a name and a value"):
            build_binding(tokens, 0, 1)

    def test_arity_checked_before_type(self):
        with pytest.raises(TooManyTokens):
            build_binding(["char", "a", "b", "c"], 0, 1)

    def test_duplicate_checked_before_arity(self):
        with pytest.raises(DuplicateModifier):
            build_binding(["ju", "ju"], 0, 1)


class TestTypes:
    @pytest.mark.parametrize("tokens", [["char", "c"], ["char", "c", "x"], ["Int", "x", "5"]])
    def test_unknown_type(self, tokens):
        with pytest.raises(UnknownType):
            build_binding(tokens, 0, 6)

    def test_unknown_type_before_literal(self):
        with pytest.raises(UnknownType):
            build_binding(["double", "x", "not-a-number"], 0, 1)

    @pytest.mark.parametrize("tokens", [
        ["int", "x", "5.5"],
        ["int", "x", "99999999999"],
        ["float", "x", "one"],
        ["bool", "x", "TRUE"],
        ["int", "x", "5\n"],
        ["float", "y", "1.5\n"],
    ])
    def test_malformed_literal(self, tokens):
        with pytest.raises(MalformedLiteral):
            build_binding(tokens, 0, 1)


# ---------------------------------------------------------------------------
# Error reporting
# ---------------------------------------------------------------------------

class TestErrors:
    def test_line_attached(self):
        with pytest.raises(DeclarationError) as info:
            build_binding(["string", "a", "b", "c"], 0, 12)
        assert info.value.line == 12
        assert str(info.value).endswith("(line 12)")

    @pytest.mark.parametrize("level", [256, -1, True, "1"])
    def test_scope_level_out_of_range(self, level):
        with pytest.raises(InvalidScopeLevel, match="outside 0..255") as info:
            build_binding(["int", "x"], level, 5)
        assert info.value.scope_level == level
        assert info.value.line == 5

    def test_bad_scope_level_halts_with_one_line(self):
        out = io.StringIO()
        with pytest.raises(SystemExit):
            with halt_on_error(stream=out):
                build_binding(["int", "x"], 256, 5)
        assert out.getvalue() == "Error on line 5: Scope level 256 is outside 0..255\n"

    def test_global_ignores_bad_scope(self):
        assert declare("fu", "int", "x", scope=999).scope_level == 0
