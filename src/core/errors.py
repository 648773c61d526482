"""
Errors — Иерархия исключений калькулятора

Все ошибки синхронные и фатальные: частичных результатов нет,
вызывающий слой (UI/CLI) сам перехватывает и отображает сообщение.

Численные edge cases (деление на ноль, NaN, ±Infinity) НЕ являются ошибками
и пропагируют как значения. Исключения только для структурных нарушений.
"""


# =============================================================================
# BASE
# =============================================================================


class CalculatorError(ValueError):
    """Базовое исключение для всех ошибок разбора и вычисления выражений."""

    pass


# =============================================================================
# SYNTAX
# =============================================================================


class ExpressionSyntaxError(CalculatorError):
    """
    Синтаксическая ошибка выражения.

    Нераспознанный символ, несбалансированные скобки, неожиданный или
    лишний токен, неожиданный конец выражения.
    """

    pass


# =============================================================================
# SEMANTIC
# =============================================================================


class OperandTypeError(CalculatorError):
    """
    Недопустимый kind операнда для оператора.

    Например: money * money, scalar / money, money-операнды у '~',
    конверсия scalar в валюту, неизвестный оператор.
    """

    pass


class EvaluationStackError(CalculatorError):
    """Нарушение баланса RPN-стека: не хватает операндов или они остались."""

    pass


class SimplificationError(CalculatorError):
    """Пошаговая редукция AST не продвинулась, а дерево ещё не literal."""

    pass


# =============================================================================
# CONVERSION
# =============================================================================


class MissingExchangeRateError(CalculatorError):
    """
    В rate graph нет пути между двумя валютами.

    Attributes:
        from_currency: Исходная валюта (как её передал вызывающий)
        to_currency: Целевая валюта
    """

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(
            f"Missing exchange rate path for {from_currency}->{to_currency}"
        )
