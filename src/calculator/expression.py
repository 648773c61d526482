"""
Expression — Точки входа калькулятора

evaluate_expression: tokenize → shunting_yard → evaluate_rpn.
evaluate_expression_with_steps: сначала currency pipeline; если выражение
не currency — plain pipeline без шагов.
"""

import logging
from typing import Mapping, Optional

from src.calculator.rpn_evaluator import evaluate_rpn
from src.calculator.shunting_yard import shunting_yard
from src.calculator.tokenizer import tokenize
from src.core.config import DEFAULT_SAMPLES
from src.core.domain.results import EvaluationWithSteps
from src.core.domain.values import UncertainValue
from src.core.math.sampling import GaussianSampler
from src.currency.evaluator import evaluate_currency_expression_with_steps

logger = logging.getLogger(__name__)


def evaluate_expression(
    expression: str,
    sample_count: int = DEFAULT_SAMPLES,
    sampler: Optional[GaussianSampler] = None,
) -> Optional[UncertainValue]:
    """
    Plain-вычисление выражения.

    Returns:
        UncertainValue или None для пустого выражения

    Raises:
        CalculatorError: Синтаксические и семантические ошибки

    Examples:
        >>> evaluate_expression("2 + 3 * 4").mean
        14.0
    """
    return evaluate_rpn(shunting_yard(tokenize(expression)), sample_count, sampler)


def evaluate_expression_with_steps(
    expression: str,
    sample_count: int = DEFAULT_SAMPLES,
    currency_rates: Optional[Mapping[str, Mapping[str, float]]] = None,
    sampler: Optional[GaussianSampler] = None,
) -> EvaluationWithSteps:
    """
    Единая точка входа для UI/CLI.

    Args:
        expression: Текст выражения
        sample_count: Размер выборки для '~'
        currency_rates: Пользовательские курсы валют
        sampler: Источник гауссовых значений (seed для воспроизводимости)

    Returns:
        EvaluationWithSteps; для plain-выражений is_currency_expression=False
        и пустые steps
    """
    currency_result = evaluate_currency_expression_with_steps(
        expression, sample_count, currency_rates=currency_rates, sampler=sampler
    )
    if currency_result is not None:
        return currency_result

    logger.debug("Falling back to plain evaluation for %r", expression)
    return EvaluationWithSteps(
        is_currency_expression=False,
        currency=None,
        steps=(),
        result=evaluate_expression(expression, sample_count, sampler),
    )
