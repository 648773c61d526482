"""
Currency Lexer — Токенизация currency-выражений

Распознаёт:
- числа (целые и десятичные)
- money-литералы: число, сразу за которым идут буквы ("120usd" → 120, "usd")
- идентификаторы (lowercase); "to" — отдельный keyword-токен
- операторы + - * / ^ ( ) ~

Плюс помощники уровня токенов: поиск top-level "to" и
форматирование последовательности токенов для отображения шагов.
"""

import re
from typing import Final, Sequence

from src.core.domain.tokens import OPERATOR_CHARS, CurrencyToken, CurrencyTokenType
from src.core.errors import ExpressionSyntaxError
from src.presentation.formatting import format_currency_amount, format_scalar_amount

NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]+(?:\.[0-9]*)?")
SUFFIX_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]*")
IDENTIFIER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_]+")

TO_KEYWORD: Final[str] = "to"


# =============================================================================
# LEXER
# =============================================================================


def lex_currency_expression(expression: str) -> list[CurrencyToken]:
    """
    Лексический разбор currency-выражения.

    Raises:
        ExpressionSyntaxError: Неподдерживаемый символ

    Examples:
        >>> [t.type.value for t in lex_currency_expression("120EUR to pln")]
        ['money', 'to', 'identifier']
    """
    tokens: list[CurrencyToken] = []
    i = 0

    while i < len(expression):
        ch = expression[i]

        if ch.isspace():
            i += 1
            continue

        if "0" <= ch <= "9":
            number = NUMBER_PATTERN.match(expression, i)
            suffix = SUFFIX_PATTERN.match(expression, number.end())
            value = float(number.group(0))
            if suffix.group(0):
                tokens.append(
                    CurrencyToken(
                        type=CurrencyTokenType.MONEY,
                        raw=expression[i:suffix.end()],
                        value=value,
                        currency=suffix.group(0).lower(),
                    )
                )
            else:
                tokens.append(
                    CurrencyToken(
                        type=CurrencyTokenType.NUMBER, raw=number.group(0), value=value
                    )
                )
            i = suffix.end()
            continue

        identifier = IDENTIFIER_PATTERN.match(expression, i)
        if identifier:
            raw = identifier.group(0)
            lowered = raw.lower()
            if lowered == TO_KEYWORD:
                tokens.append(CurrencyToken(type=CurrencyTokenType.TO, raw=raw))
            else:
                tokens.append(
                    CurrencyToken(type=CurrencyTokenType.IDENTIFIER, raw=raw, value=lowered)
                )
            i = identifier.end()
            continue

        if ch in OPERATOR_CHARS:
            tokens.append(CurrencyToken(type=CurrencyTokenType.OPERATOR, raw=ch, value=ch))
            i += 1
            continue

        raise ExpressionSyntaxError(
            f"Syntax Error: Unsupported character '{ch}' in expression"
        )

    return tokens


# =============================================================================
# TOKEN HELPERS
# =============================================================================


def find_top_level_to(tokens: Sequence[CurrencyToken]) -> int:
    """
    Индекс "to" на нулевой глубине скобок или -1.
    """
    depth = 0
    for index, token in enumerate(tokens):
        if token.is_operator("("):
            depth += 1
        elif token.is_operator(")"):
            depth -= 1
        elif token.type == CurrencyTokenType.TO and depth == 0:
            return index
    return -1


def _render_token(token: CurrencyToken) -> str:
    if token.type == CurrencyTokenType.MONEY:
        return f"{format_currency_amount(token.value)}{token.currency}"
    if token.type == CurrencyTokenType.NUMBER:
        return format_scalar_amount(token.value)
    if token.type == CurrencyTokenType.TO:
        return TO_KEYWORD
    return str(token.value)


def format_token_sequence(tokens: Sequence[CurrencyToken]) -> str:
    """
    Нормализованный текст последовательности токенов.

    Без пробелов внутри скобок, по одному пробелу вокруг операторов.

    Examples:
        >>> format_token_sequence(lex_currency_expression("*  2"))
        '* 2'
    """
    text = " ".join(_render_token(token) for token in tokens)
    text = re.sub(r"\(\s+", "(", text)
    text = re.sub(r"\s+\)", ")", text)
    text = re.sub(r"\s+([+\-*/^~])", r" \1", text)
    text = re.sub(r"([+\-*/^~])\s+", r"\1 ", text)
    return text.strip()
