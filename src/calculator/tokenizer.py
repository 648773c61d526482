"""
Tokenizer — Разбиение plain-выражения на токены

Последовательно снимает ведущие пробелы и пытается сопоставить (по порядку):
- десятичное число digits[.digits]
- односимвольный оператор из OPERATOR_CHARS

Минус никогда не склеивается с числом: унарность решает shunting-yard.
"""

import re
from typing import Final

from src.core.domain.tokens import OPERATOR_CHARS, PlainToken
from src.core.errors import ExpressionSyntaxError

NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]+(\.[0-9]+)?")
WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")

# Длина фрагмента в сообщении об ошибке
ERROR_CONTEXT_CHARS: Final[int] = 10


def tokenize(expression: str) -> list[PlainToken]:
    """
    Токенизация plain-выражения.

    Args:
        expression: Исходная строка

    Returns:
        Список токенов: float для чисел, str для операторов

    Raises:
        ExpressionSyntaxError: Нераспознанный символ

    Examples:
        >>> tokenize("1-2")
        [1.0, '-', 2.0]
        >>> tokenize("(5 ~ 10) * 2.5")
        ['(', 5.0, '~', 10.0, ')', '*', 2.5]
    """
    tokens: list[PlainToken] = []
    remaining = expression.strip()

    while remaining:
        match = WHITESPACE_PATTERN.match(remaining)
        if match:
            remaining = remaining[match.end():]
            continue

        match = NUMBER_PATTERN.match(remaining)
        if match:
            tokens.append(float(match.group(0)))
            remaining = remaining[match.end():]
            continue

        if remaining[0] in OPERATOR_CHARS:
            tokens.append(remaining[0])
            remaining = remaining[1:]
            continue

        raise ExpressionSyntaxError(
            f"Syntax Error: Cannot parse near '{remaining[:ERROR_CONTEXT_CHARS]}...' "
            f"in expression '{expression}'"
        )

    return tokens
