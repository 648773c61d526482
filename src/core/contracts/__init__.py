"""
Contract Validation Module

Модуль для валидации JSON контрактов калькулятора.
"""

from .validators import (
    ContractValidator,
    CurrencyRatesValidator,
    EvaluationResultValidator,
    SchemaLoader,
    validate_currency_rates,
    validate_evaluation_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CurrencyRatesValidator",
    "EvaluationResultValidator",
    # Functions
    "validate_currency_rates",
    "validate_evaluation_result",
]
