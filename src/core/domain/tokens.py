"""
Tokens — Токены обоих лексеров

Plain tokenizer выдаёт плоский список float | str (число или символ оператора),
а RPN дополнительно содержит синтетический оператор NEG (унарный минус).

Currency lexer выдаёт типизированные CurrencyToken:
number, money{value, currency}, identifier{value}, to, operator.

Токены создаются один раз на разбор и не изменяются.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional, Union

# =============================================================================
# PLAIN TOKENS
# =============================================================================

# Число или односимвольный оператор из OPERATOR_CHARS (в RPN ещё и NEG)
PlainToken = Union[float, str]

OPERATOR_CHARS: Final[str] = "+-*/^~()"

# Синтетический оператор унарного минуса в RPN
NEG: Final[str] = "NEG"


def is_number_token(token: PlainToken) -> bool:
    """Проверка, является ли plain-токен числом."""
    return isinstance(token, (int, float)) and not isinstance(token, bool)


# =============================================================================
# CURRENCY TOKENS
# =============================================================================


class CurrencyTokenType(str, Enum):
    """Тип токена currency lexer-а"""

    NUMBER = "number"
    MONEY = "money"
    IDENTIFIER = "identifier"
    TO = "to"
    OPERATOR = "operator"


@dataclass(frozen=True)
class CurrencyToken:
    """
    Токен currency lexer-а.

    value: float для number/money, str (lowercase) для identifier/operator,
    None для to. currency заполнен только для money.
    raw: исходный фрагмент текста (для диагностики).
    """

    type: CurrencyTokenType
    raw: str
    value: Optional[Union[float, str]] = None
    currency: Optional[str] = None

    def is_operator(self, symbol: str) -> bool:
        return self.type == CurrencyTokenType.OPERATOR and self.value == symbol

    def is_currency_identifier(self, base_token: str) -> bool:
        """Идентификатор, пригодный как суффикс валюты (не base placeholder)."""
        return self.type == CurrencyTokenType.IDENTIFIER and self.value != base_token
