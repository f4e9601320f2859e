"""Tests for parselet registration and lookup, including grammar extension."""

from __future__ import annotations

import pytest

from prattcalc.core import Calculator, ErrorKind, Precedence
from prattcalc.core.parselets import (
    GroupParselet,
    IdentifierParselet,
    InfixParselet,
    LiteralParselet,
    PostfixParselet,
    PrefixOperatorParselet,
)
from prattcalc.core.registry import DEFAULT_REGISTRY, ParseletRegistry, default_registry
from prattcalc.core.tokenizer import Token, TokenKind


def symbol(value: str) -> Token:
    return Token(TokenKind.SYMBOL, value, 0)


class TestDefaultBindings:
    """The standard grammar binds each token as documented."""

    def test_number_shares_one_entry(self) -> None:
        for lexeme in ["1", "2.5", ".5"]:
            prefix, infix = DEFAULT_REGISTRY.lookup(Token(TokenKind.NUMBER, lexeme, 0))
            assert isinstance(prefix, LiteralParselet)
            assert infix is None

    def test_identifier_shares_one_entry(self) -> None:
        for lexeme in ["x", "sqrt", "_tmp"]:
            prefix, infix = DEFAULT_REGISTRY.lookup(Token(TokenKind.IDENTIFIER, lexeme, 0))
            assert isinstance(prefix, IdentifierParselet)
            assert infix is None

    def test_group(self) -> None:
        prefix, infix = DEFAULT_REGISTRY.lookup(symbol("("))
        assert isinstance(prefix, GroupParselet)
        assert infix is None

    def test_minus_has_both_meanings(self) -> None:
        prefix, infix = DEFAULT_REGISTRY.lookup(symbol("-"))
        assert isinstance(prefix, PrefixOperatorParselet)
        assert prefix.precedence == Precedence.PREFIX
        assert isinstance(infix, InfixParselet)
        assert infix.precedence == Precedence.SUM
        assert not infix.right_associative

    @pytest.mark.parametrize(
        ("op", "precedence"),
        [("+", Precedence.SUM), ("*", Precedence.PRODUCT), ("/", Precedence.PRODUCT),
         ("%", Precedence.PRODUCT)],
    )
    def test_infix_only(self, op: str, precedence: Precedence) -> None:
        prefix, infix = DEFAULT_REGISTRY.lookup(symbol(op))
        assert prefix is None
        assert infix.precedence == precedence
        assert not infix.right_associative

    def test_power_is_right_associative(self) -> None:
        prefix, infix = DEFAULT_REGISTRY.lookup(symbol("^"))
        assert prefix is None
        assert infix.precedence == Precedence.EXPONENT
        assert infix.right_associative

    def test_factorial_is_postfix(self) -> None:
        prefix, infix = DEFAULT_REGISTRY.lookup(symbol("!"))
        assert prefix is None
        assert isinstance(infix, PostfixParselet)
        assert infix.precedence == Precedence.FACTORIAL

    @pytest.mark.parametrize("lexeme", [")", "=", "$"])
    def test_unbound_symbols(self, lexeme: str) -> None:
        assert DEFAULT_REGISTRY.lookup(symbol(lexeme)) == (None, None)


class TestRegistration:
    """Registry invariants: one parselet per slot, frozen default."""

    def test_duplicate_prefix_rejected(self) -> None:
        registry = ParseletRegistry().register_prefix("(", GroupParselet())
        with pytest.raises(ValueError, match="already registered"):
            registry.register_prefix("(", GroupParselet())

    def test_duplicate_infix_rejected(self) -> None:
        registry = ParseletRegistry().infix_left("+", lambda a, b: a + b, Precedence.SUM)
        with pytest.raises(ValueError, match="already registered"):
            registry.postfix("+", lambda a: a)

    def test_prefix_and_infix_can_share_a_key(self) -> None:
        registry = (
            ParseletRegistry()
            .prefix_operator("-", lambda a: -a)
            .infix_left("-", lambda a, b: a - b, Precedence.SUM)
        )
        prefix, infix = registry.lookup(symbol("-"))
        assert prefix is not None
        assert infix is not None

    def test_default_registry_is_frozen(self) -> None:
        assert DEFAULT_REGISTRY.frozen
        with pytest.raises(RuntimeError, match="frozen"):
            DEFAULT_REGISTRY.infix_left("&", lambda a, b: a, Precedence.SUM)

    def test_copy_is_writable_and_independent(self) -> None:
        extended = DEFAULT_REGISTRY.copy()
        assert not extended.frozen
        extended.infix_left("&", lambda a, b: a, Precedence.SUM)
        assert extended.infix(symbol("&")) is not None
        assert DEFAULT_REGISTRY.infix(symbol("&")) is None

    def test_default_registry_builds_fresh_instances(self) -> None:
        assert default_registry() is not default_registry()
        assert not default_registry().frozen


class TestExtension:
    """New operators slot into precedence climbing without touching the loop."""

    def test_custom_infix_operator(self) -> None:
        registry = DEFAULT_REGISTRY.copy().infix_left("$", max, Precedence.SUM)
        calc = Calculator(registry=registry)
        assert calc.evaluate("3 $ 7 * 2").value == 14
        assert calc.evaluate("3 $ 1 - 5").value == -2

    def test_custom_prefix_operator(self) -> None:
        registry = DEFAULT_REGISTRY.copy().prefix_operator("~", lambda a: a * 2)
        calc = Calculator(registry=registry)
        assert calc.evaluate("~3 + 1").value == 7

    def test_custom_postfix_operator(self) -> None:
        registry = DEFAULT_REGISTRY.copy().postfix("#", lambda a: a * a, Precedence.POSTFIX)
        calc = Calculator(registry=registry)
        assert calc.evaluate("3# + 1").value == 10

    def test_unregistered_symbol_still_fails(self) -> None:
        result = Calculator().evaluate("~3")
        assert result.error.kind == ErrorKind.INVALID_EXPRESSION_START
