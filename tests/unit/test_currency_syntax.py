"""
Тесты currency lexer и recursive-descent парсера

Проверяемые инварианты:
1. Money-литерал: число, сразу за которым буквы; валюта lowercase
2. "to" — keyword в любом регистре; top-level "to" ищется вне скобок
3. Сахар суффиксов: "120 usd" → money, "(a)pln" → (a) * 1pln
4. Приоритеты: + - < * / < ^ < ~ < унарный минус
5. Base placeholder разрешён только с allow_base_token
"""

import pytest

from src.core.config import BASE_CURRENCY_TOKEN
from src.core.domain.nodes import BaseNode, BinaryNode, LiteralNode, UnaryNode
from src.core.domain.tokens import CurrencyTokenType
from src.core.errors import ExpressionSyntaxError
from src.currency.lexer import find_top_level_to, format_token_sequence, lex_currency_expression
from src.currency.parser import parse_currency_expression_tokens


def parse(expression, **options):
    return parse_currency_expression_tokens(lex_currency_expression(expression), **options)


def num(value):
    return LiteralNode.scalar(float(value))


# =============================================================================
# ТЕСТЫ: Lexer
# =============================================================================


class TestLexCurrencyExpression:
    """Тесты lex_currency_expression"""

    def test_money_to_identifier(self) -> None:
        tokens = lex_currency_expression("120EUR to PLN")
        assert [t.type for t in tokens] == [
            CurrencyTokenType.MONEY,
            CurrencyTokenType.TO,
            CurrencyTokenType.IDENTIFIER,
        ]
        assert tokens[0].value == 120.0
        assert tokens[0].currency == "eur"
        assert tokens[0].raw == "120EUR"
        assert tokens[2].value == "pln"

    def test_number_with_space_before_identifier(self) -> None:
        """С пробелом — два токена: число и идентификатор"""
        tokens = lex_currency_expression("120 usd")
        assert [t.type for t in tokens] == [CurrencyTokenType.NUMBER, CurrencyTokenType.IDENTIFIER]

    def test_decimal_numbers(self) -> None:
        tokens = lex_currency_expression("3.5 + 5.")
        assert tokens[0].value == 3.5
        assert tokens[2].value == 5.0
        assert tokens[2].raw == "5."

    def test_to_keyword_case_insensitive(self) -> None:
        assert lex_currency_expression("To")[0].type == CurrencyTokenType.TO

    def test_operators(self) -> None:
        tokens = lex_currency_expression("(1~2)^-3/4*5")
        operators = [t.value for t in tokens if t.type == CurrencyTokenType.OPERATOR]
        assert operators == ["(", "~", ")", "^", "-", "/", "*"]

    def test_unsupported_character(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Unsupported character '\\$'"):
            lex_currency_expression("12$")


class TestTokenHelpers:
    """Тесты find_top_level_to / format_token_sequence"""

    def test_top_level_to(self) -> None:
        tokens = lex_currency_expression("(1eur to pln) to usd")
        assert find_top_level_to(tokens) == 5

    def test_no_top_level_to(self) -> None:
        assert find_top_level_to(lex_currency_expression("1eur + 2eur")) == -1

    def test_format_token_sequence(self) -> None:
        tokens = lex_currency_expression("(  1+2 )*3EUR")
        assert format_token_sequence(tokens) == "(1 + 2) * 3eur"

    def test_format_tail(self) -> None:
        assert format_token_sequence(lex_currency_expression("*  2")) == "* 2"


# =============================================================================
# ТЕСТЫ: Parser
# =============================================================================


class TestParseCurrencyExpression:
    """Тесты parse_currency_expression_tokens"""

    def test_precedence(self) -> None:
        assert parse("1 + 2 * 3") == BinaryNode("+", num(1), BinaryNode("*", num(2), num(3)))

    def test_left_associative_subtraction(self) -> None:
        assert parse("1 - 2 - 3") == BinaryNode("-", BinaryNode("-", num(1), num(2)), num(3))

    def test_power_is_left_associative(self) -> None:
        assert parse("2 ^ 3 ^ 2") == BinaryNode("^", BinaryNode("^", num(2), num(3)), num(2))

    def test_range_binds_tighter_than_power(self) -> None:
        assert parse("1 ~ 2 ^ 2") == BinaryNode("^", BinaryNode("~", num(1), num(2)), num(2))

    def test_unary_minus(self) -> None:
        assert parse("--5") == UnaryNode("-", UnaryNode("-", num(5)))
        assert parse("-1 ~ 2") == BinaryNode("~", UnaryNode("-", num(1)), num(2))

    def test_money_literal(self) -> None:
        assert parse("120USD") == LiteralNode.money(120.0, "usd")

    def test_number_with_currency_suffix(self) -> None:
        assert parse("120 usd") == LiteralNode.money(120.0, "usd")

    def test_grouped_currency_suffix(self) -> None:
        """(60~115)pln → (60 ~ 115) * 1pln"""
        assert parse("(60~115)pln") == BinaryNode(
            "*", BinaryNode("~", num(60), num(115)), LiteralNode.money(1.0, "pln")
        )

    def test_currency_suffix_disabled(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Unexpected token 'usd'"):
            parse("120 usd", allow_currency_suffix=False)

    def test_base_token(self) -> None:
        assert parse(f"{BASE_CURRENCY_TOKEN} * 2", allow_base_token=True) == BinaryNode(
            "*", BaseNode(), num(2)
        )

    def test_base_token_not_allowed(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Unexpected identifier '__base__'"):
            parse(f"{BASE_CURRENCY_TOKEN} * 2")

    def test_base_token_is_not_currency_suffix(self) -> None:
        """Число перед __base__ не становится money"""
        with pytest.raises(ExpressionSyntaxError, match="Unexpected token '__base__'"):
            parse(f"2 {BASE_CURRENCY_TOKEN}")

    def test_bare_identifier(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Unexpected identifier 'abc'"):
            parse("abc")

    def test_missing_close_parenthesis(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Mismatched parentheses in expression"):
            parse("(1 + 2")

    def test_unexpected_end(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Unexpected end of expression"):
            parse("1 +")

    def test_trailing_tokens(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Unexpected token '2'"):
            parse("1 2")

    def test_stray_operator(self) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Unexpected token '\\*'"):
            parse("* 2")
