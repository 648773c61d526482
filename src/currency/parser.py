"""
Currency Parser — Recursive-descent разбор currency-токенов в AST

Грамматика (приоритет растёт сверху вниз):

    expression := add_sub
    add_sub    := mul_div (('+' | '-') mul_div)*
    mul_div    := power (('*' | '/') power)*
    power      := range ('^' range)*
    range      := unary ('~' unary)*
    unary      := '-' unary | primary
    primary    := '(' expression ')' [currency]
                | money
                | number [currency]
                | base

Сахар валютных суффиксов:
- "(60~115)pln" → (60~115) * 1pln
- "120 usd" → money-литерал 120usd
"""

from typing import Optional, Sequence

from src.core.config import BASE_CURRENCY_TOKEN
from src.core.domain.nodes import BaseNode, BinaryNode, CurrencyNode, LiteralNode, UnaryNode
from src.core.domain.tokens import CurrencyToken, CurrencyTokenType
from src.core.errors import ExpressionSyntaxError


class CurrencyExpressionParser:
    """
    Парсер одной последовательности токенов.

    Args:
        tokens: Результат lex_currency_expression (или его срез)
        allow_base_token: Разрешить BASE_CURRENCY_TOKEN как узел Base
        allow_currency_suffix: Разрешить идентификатор валюты после числа / ')'
    """

    def __init__(
        self,
        tokens: Sequence[CurrencyToken],
        allow_base_token: bool = False,
        allow_currency_suffix: bool = True,
    ):
        self._tokens = tokens
        self._index = 0
        self.allow_base_token = allow_base_token
        self.allow_currency_suffix = allow_currency_suffix

    def parse(self) -> CurrencyNode:
        """
        Разбор всей последовательности.

        Raises:
            ExpressionSyntaxError: Лишние токены, неожиданный токен или конец
        """
        node = self._parse_add_sub()
        if self._index != len(self._tokens):
            raise ExpressionSyntaxError(
                f"Unexpected token '{self._tokens[self._index].raw}'"
            )
        return node

    # -------------------------------------------------------------------------
    # Token cursor
    # -------------------------------------------------------------------------

    def _peek(self) -> Optional[CurrencyToken]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _consume(self) -> CurrencyToken:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _match_operator(self, symbol: str) -> bool:
        token = self._peek()
        if token is not None and token.is_operator(symbol):
            self._index += 1
            return True
        return False

    def _match_any_operator(self, symbols: str) -> Optional[str]:
        for symbol in symbols:
            if self._match_operator(symbol):
                return symbol
        return None

    def _match_currency_suffix(self) -> Optional[str]:
        token = self._peek()
        if (
            self.allow_currency_suffix
            and token is not None
            and token.is_currency_identifier(BASE_CURRENCY_TOKEN)
        ):
            self._index += 1
            return token.value
        return None

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------

    def _parse_add_sub(self) -> CurrencyNode:
        node = self._parse_mul_div()
        while (op := self._match_any_operator("+-")) is not None:
            node = BinaryNode(op, node, self._parse_mul_div())
        return node

    def _parse_mul_div(self) -> CurrencyNode:
        node = self._parse_power()
        while (op := self._match_any_operator("*/")) is not None:
            node = BinaryNode(op, node, self._parse_power())
        return node

    def _parse_power(self) -> CurrencyNode:
        node = self._parse_range()
        while self._match_operator("^"):
            node = BinaryNode("^", node, self._parse_range())
        return node

    def _parse_range(self) -> CurrencyNode:
        node = self._parse_unary()
        while self._match_operator("~"):
            node = BinaryNode("~", node, self._parse_unary())
        return node

    def _parse_unary(self) -> CurrencyNode:
        if self._match_operator("-"):
            return UnaryNode("-", self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> CurrencyNode:
        token = self._peek()
        if token is None:
            raise ExpressionSyntaxError("Unexpected end of expression")

        if token.is_operator("("):
            self._consume()
            node = self._parse_add_sub()
            if not self._match_operator(")"):
                raise ExpressionSyntaxError("Mismatched parentheses in expression")
            currency = self._match_currency_suffix()
            if currency is not None:
                return BinaryNode("*", node, LiteralNode.money(1.0, currency))
            return node

        if token.type == CurrencyTokenType.MONEY:
            self._consume()
            return LiteralNode.money(token.value, token.currency)

        if token.type == CurrencyTokenType.NUMBER:
            self._consume()
            currency = self._match_currency_suffix()
            if currency is not None:
                return LiteralNode.money(token.value, currency)
            return LiteralNode.scalar(token.value)

        if token.type == CurrencyTokenType.IDENTIFIER:
            self._consume()
            if self.allow_base_token and token.value == BASE_CURRENCY_TOKEN:
                return BaseNode()
            raise ExpressionSyntaxError(f"Unexpected identifier '{token.value}'")

        raise ExpressionSyntaxError(f"Unexpected token '{token.raw}'")


def parse_currency_expression_tokens(
    tokens: Sequence[CurrencyToken],
    allow_base_token: bool = False,
    allow_currency_suffix: bool = True,
) -> CurrencyNode:
    """
    Разбор токенов в AST.

    Raises:
        ExpressionSyntaxError: Любая синтаксическая ошибка
    """
    parser = CurrencyExpressionParser(
        tokens,
        allow_base_token=allow_base_token,
        allow_currency_suffix=allow_currency_suffix,
    )
    return parser.parse()
