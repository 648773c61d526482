"""
RPN Evaluator — Интервально-выборочное вычисление RPN

Стек операндов содержит UncertainValue:
- число → точное значение (min == max == mean, samples=None)
- NEG → отрицание mean, границ и выборки
- a ~ b → N((a+b)/2, |b-a|/3.28970725), интервал [min(a,b), max(a,b)]
- + - * / ^ → mean по точечной арифметике, границы по интервальной,
  выборка поэлементно, если хотя бы у одного операнда она есть

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Операнды '~' обязаны быть точными (samples=None)
2. Численные edge cases (деление на 0, NaN, Inf) не бросают исключений
3. Пустая очередь RPN → None (нечего показывать)
"""

import logging
from typing import Optional

from src.core.config import DEFAULT_SAMPLES
from src.core.domain.tokens import NEG, PlainToken, is_number_token
from src.core.domain.values import UncertainValue
from src.core.errors import EvaluationStackError, OperandTypeError
from src.core.math.interval import (
    ARITHMETIC_OPERATORS,
    apply_operator,
    binary_bounds,
    neg_bounds,
)
from src.core.math.numerical_safeguards import nan_max, nan_min
from src.core.math.sampling import (
    GaussianSampler,
    generate_samples,
    operate_samples,
    range_std_dev,
)

logger = logging.getLogger(__name__)


# =============================================================================
# OPERATIONS
# =============================================================================


def negate_value(value: UncertainValue) -> UncertainValue:
    """Унарный минус над UncertainValue."""
    bounds = neg_bounds(value.min, value.max)
    return UncertainValue(
        mean=-value.mean,
        min=bounds.min,
        max=bounds.max,
        samples=None if value.samples is None else [-x for x in value.samples],
    )


def range_value(
    a: UncertainValue,
    b: UncertainValue,
    sample_count: int,
    sampler: GaussianSampler,
) -> UncertainValue:
    """
    Диапазон a~b как нормальное распределение.

    Raises:
        OperandTypeError: Если хотя бы один операнд уже случайный
    """
    if a.samples is not None or b.samples is not None:
        raise OperandTypeError(
            "Operands for '~' must be exact numbers (e.g., 100~200, not (5~10)~200)"
        )
    mean = (a.mean + b.mean) / 2.0
    samples = generate_samples(mean, range_std_dev(a.mean, b.mean), sample_count, sampler)
    return UncertainValue(
        mean=mean,
        min=nan_min(a.mean, b.mean),
        max=nan_max(a.mean, b.mean),
        samples=samples,
    )


def combine_values(
    operator: str,
    a: UncertainValue,
    b: UncertainValue,
    sample_count: int,
) -> UncertainValue:
    """Бинарная арифметика над UncertainValue."""
    mean = apply_operator(operator, a.mean, b.mean)
    bounds = binary_bounds(operator, a.min, a.max, b.min, b.max)

    samples = operate_samples(
        a.samples if a.samples is not None else a.mean,
        b.samples if b.samples is not None else b.mean,
        operator,
        sample_count,
    )
    return UncertainValue(mean=mean, min=bounds.min, max=bounds.max, samples=samples)


# =============================================================================
# EVALUATOR
# =============================================================================


def evaluate_rpn(
    rpn_queue: list[PlainToken],
    sample_count: int = DEFAULT_SAMPLES,
    sampler: Optional[GaussianSampler] = None,
) -> Optional[UncertainValue]:
    """
    Вычисление очереди RPN.

    Args:
        rpn_queue: Результат shunting_yard()
        sample_count: Размер Monte-Carlo выборки для '~'
        sampler: Источник гауссовых значений (по умолчанию новый на вызов)

    Returns:
        UncertainValue или None для пустой очереди

    Raises:
        EvaluationStackError: Не хватает операндов / операнды остались
        OperandTypeError: Неточные операнды у '~' или неизвестный токен
    """
    sampler = sampler or GaussianSampler()
    stack: list[UncertainValue] = []

    for token in rpn_queue:
        if is_number_token(token):
            stack.append(UncertainValue.exact(float(token)))
        elif token == NEG:
            if not stack:
                raise EvaluationStackError("Not enough operands for unary minus")
            stack.append(negate_value(stack.pop()))
        elif token == "~" or (isinstance(token, str) and token in ARITHMETIC_OPERATORS):
            if len(stack) < 2:
                raise EvaluationStackError(f"Not enough operands for '{token}'")
            b = stack.pop()
            a = stack.pop()
            if token == "~":
                stack.append(range_value(a, b, sample_count, sampler))
            else:
                stack.append(combine_values(token, a, b, sample_count))
        else:
            raise OperandTypeError(f"Internal Error: Unknown RPN token: {token}")

    if not stack:
        return None
    if len(stack) > 1:
        raise EvaluationStackError("Invalid expression: Operands left over")

    logger.debug("Evaluated RPN of %d tokens (sampled=%s)", len(rpn_queue), stack[0].samples is not None)
    return stack[0]
