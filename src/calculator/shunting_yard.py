"""
Shunting-Yard — Перевод infix-токенов в RPN

Приоритеты (low → high): + - (1) < * / (2) < ^ (3) < ~ (4) < NEG (5).
Все операторы левоассоциативны, кроме '~' и NEG (правоассоциативны).

Правило унарного минуса: '-' унарный, если это первый токен, либо он идёт
сразу после '(' или после любого токена, который не число и не ')'.
Унарный минус кладётся в стек как отдельный синтетический оператор NEG.
"""

from typing import Final

from src.core.domain.tokens import NEG, PlainToken, is_number_token
from src.core.errors import ExpressionSyntaxError

PRECEDENCE: Final[dict[str, int]] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
    "~": 4,
    NEG: 5,
}

RIGHT_ASSOCIATIVE: Final[frozenset[str]] = frozenset({"~", NEG})


def _is_unary_position(prev_token: PlainToken | None) -> bool:
    if prev_token is None:
        return True
    return not is_number_token(prev_token) and prev_token != ")"


def shunting_yard(tokens: list[PlainToken]) -> list[PlainToken]:
    """
    Конвертация infix → RPN.

    Args:
        tokens: Результат tokenize()

    Returns:
        Очередь RPN

    Raises:
        ExpressionSyntaxError: Несбалансированные скобки или неизвестный токен

    Examples:
        >>> shunting_yard([2.0, '-', 5.0])
        [2.0, 5.0, '-']
        >>> shunting_yard(['-', 2.0, '+', 5.0])
        [2.0, 'NEG', 5.0, '+']
    """
    output: list[PlainToken] = []
    operators: list[str] = []
    prev_token: PlainToken | None = None

    for token in tokens:
        if token == "-" and _is_unary_position(prev_token):
            operators.append(NEG)
            prev_token = token
            continue

        if is_number_token(token):
            output.append(token)
        elif token == "(":
            operators.append(token)
        elif token == ")":
            while operators and operators[-1] != "(":
                output.append(operators.pop())
            if not operators:
                raise ExpressionSyntaxError(
                    "Mismatched parentheses: Found ')' without matching '('"
                )
            operators.pop()
        elif token in PRECEDENCE:
            precedence = PRECEDENCE[token]
            while (
                operators
                and operators[-1] != "("
                and (
                    PRECEDENCE[operators[-1]] > precedence
                    or (
                        PRECEDENCE[operators[-1]] == precedence
                        and token not in RIGHT_ASSOCIATIVE
                    )
                )
            ):
                output.append(operators.pop())
            operators.append(token)
        else:
            raise ExpressionSyntaxError(f"Unknown token: {token}")

        prev_token = token

    while operators:
        op = operators.pop()
        if op == "(":
            raise ExpressionSyntaxError(
                "Mismatched parentheses: Found '(' without matching ')'"
            )
        output.append(op)

    return output
