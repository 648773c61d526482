"""
Uncertainty — Вычисление currency AST с распространением неопределённости

Тот же набор правил kind, что и в reduction, но над Quantity
(Scalar | Money) с mean, интервалом [min, max] и Monte-Carlo выборкой:
- интервальная арифметика как в plain-вычислителе (src.core.math.interval)
- выборки комбинируются поэлементно, если хотя бы у одного операнда они есть
- money-результат: mean, min, max и каждая выборка округлены до 2 знаков
- money±money в разных валютах: правый операнд целиком (mean, интервал,
  выборка) конвертируется в валюту левого до операции

Этот проход запускается только если в выражении есть '~'.
"""

from typing import Optional, Sequence

from src.core.domain.nodes import BaseNode, BinaryNode, CurrencyNode, LiteralNode, UnaryNode
from src.core.domain.values import Money, Quantity, Scalar, ValueKind
from src.core.errors import OperandTypeError
from src.core.math.interval import apply_operator, binary_bounds, neg_bounds
from src.core.math.numerical_safeguards import nan_max, nan_min, round_money
from src.core.math.sampling import (
    GaussianSampler,
    generate_samples,
    operate_samples,
    range_std_dev,
)
from src.currency.rates import RateGraph, get_currency_rate

SCALAR = ValueKind.SCALAR
MONEY = ValueKind.MONEY

# Допустимые комбинации (kind левого, kind правого) → kind результата
RESULT_KINDS: dict[str, dict[tuple[ValueKind, ValueKind], ValueKind]] = {
    "+": {(SCALAR, SCALAR): SCALAR, (MONEY, MONEY): MONEY},
    "-": {(SCALAR, SCALAR): SCALAR, (MONEY, MONEY): MONEY},
    "*": {(SCALAR, SCALAR): SCALAR, (MONEY, SCALAR): MONEY, (SCALAR, MONEY): MONEY},
    "/": {(SCALAR, SCALAR): SCALAR, (MONEY, SCALAR): MONEY, (MONEY, MONEY): SCALAR},
    "^": {(SCALAR, SCALAR): SCALAR, (MONEY, SCALAR): MONEY},
}

KIND_ERRORS: dict[str, str] = {
    "+": "Cannot add scalar and currency values",
    "-": "Cannot subtract scalar and currency values",
    "*": "Multiplying two currency values is not supported",
    "/": "Cannot divide scalar by a currency value",
    "^": "Power is supported for scalar^scalar or money^scalar only",
}


# =============================================================================
# CONSTRUCTION
# =============================================================================


def quantity_from_literal(literal: LiteralNode) -> Quantity:
    if literal.kind == MONEY:
        return Money.exact(literal.value, literal.currency)
    return Scalar.exact(literal.value)


def _rounded_samples(samples: Optional[Sequence[float]]) -> Optional[tuple[float, ...]]:
    if samples is None:
        return None
    return tuple(round_money(x) for x in samples)


def make_money(
    currency: str,
    mean: float,
    low: float,
    high: float,
    samples: Optional[Sequence[float]] = None,
) -> Money:
    """Money с округлением mean, упорядоченных границ и выборки."""
    return Money(
        currency=currency,
        mean=round_money(mean),
        min=round_money(nan_min(low, high)),
        max=round_money(nan_max(low, high)),
        samples=_rounded_samples(samples),
    )


def _samples_or_mean(value: Quantity):
    return value.samples if value.samples is not None else value.mean


# =============================================================================
# CONVERSION
# =============================================================================


def convert_quantity(value: Quantity, target_currency: str, rates: RateGraph) -> Money:
    """
    Конвертация money-величины в target_currency.

    mean, обе границы и каждая выборка умножаются на курс и округляются;
    границы переупорядочиваются.

    Raises:
        OperandTypeError: Величина scalar
        MissingExchangeRateError: Нет пути конвертации
    """
    if value.kind != MONEY:
        raise OperandTypeError(f"Cannot convert scalar value to {target_currency}")
    target = target_currency.lower()
    if value.currency == target:
        return value

    rate = get_currency_rate(value.currency, target, rates)
    samples = None if value.samples is None else [x * rate for x in value.samples]
    return make_money(target, value.mean * rate, value.min * rate, value.max * rate, samples)


# =============================================================================
# OPERATIONS
# =============================================================================


def negate_quantity(value: Quantity) -> Quantity:
    bounds = neg_bounds(value.min, value.max)
    samples = None if value.samples is None else tuple(-x for x in value.samples)
    if value.kind == MONEY:
        return make_money(value.currency, -value.mean, bounds.min, bounds.max, samples)
    return Scalar(-value.mean, bounds.min, bounds.max, samples)


def range_quantity(
    left: Quantity, right: Quantity, sample_count: int, sampler: GaussianSampler
) -> Scalar:
    """
    Диапазон a~b над точными scalar.

    Raises:
        OperandTypeError: Операнд money или уже случайный
    """
    if left.kind != SCALAR or right.kind != SCALAR:
        raise OperandTypeError("Range operator '~' supports scalar values only")
    if left.samples is not None or right.samples is not None:
        raise OperandTypeError("Operands for '~' must be exact scalar values")
    a, b = left.mean, right.mean
    mean = (a + b) / 2
    samples = generate_samples(mean, range_std_dev(a, b), sample_count, sampler)
    return Scalar(mean, nan_min(a, b), nan_max(a, b), tuple(samples))


def combine_quantities(
    operator: str,
    left: Quantity,
    right: Quantity,
    rates: RateGraph,
    sample_count: int,
    sampler: GaussianSampler,
) -> Quantity:
    """
    Бинарная операция над Quantity.

    Raises:
        OperandTypeError: Недопустимая комбинация kind или неизвестный оператор
        MissingExchangeRateError: money±money без пути конвертации
    """
    if operator == "~":
        return range_quantity(left, right, sample_count, sampler)

    if operator not in RESULT_KINDS:
        raise OperandTypeError(f"Unsupported operator '{operator}'")

    result_kind = RESULT_KINDS[operator].get((left.kind, right.kind))
    if result_kind is None:
        raise OperandTypeError(KIND_ERRORS[operator])

    if operator in ("+", "-") and result_kind == MONEY:
        right = convert_quantity(right, left.currency, rates)

    mean = apply_operator(operator, left.mean, right.mean)
    bounds = binary_bounds(operator, left.min, left.max, right.min, right.max)
    samples = operate_samples(
        _samples_or_mean(left), _samples_or_mean(right), operator, sample_count
    )

    if result_kind == SCALAR:
        return Scalar(mean, bounds.min, bounds.max, None if samples is None else tuple(samples))

    currency = left.currency if left.kind == MONEY else right.currency
    return make_money(currency, mean, bounds.min, bounds.max, samples)


# =============================================================================
# TREE EVALUATION
# =============================================================================


def evaluate_with_uncertainty(
    node: CurrencyNode,
    rates: RateGraph,
    sample_count: int,
    sampler: GaussianSampler,
    base_value: Optional[Quantity] = None,
) -> Quantity:
    """
    Рекурсивное вычисление AST в Quantity.

    Args:
        node: Корень AST
        rates: Граф курсов
        sample_count: Размер выборки для '~'
        sampler: Источник гауссовых значений
        base_value: Значение для BaseNode (tail-выражение после "to")

    Raises:
        OperandTypeError: Ошибки kind или BaseNode без base_value
    """
    if isinstance(node, LiteralNode):
        return quantity_from_literal(node)

    if isinstance(node, BaseNode):
        if base_value is None:
            raise OperandTypeError("Base token was used without a replacement value")
        return base_value

    if isinstance(node, UnaryNode):
        if node.operator != "-":
            raise OperandTypeError(f"Unsupported unary operator '{node.operator}'")
        operand = evaluate_with_uncertainty(node.operand, rates, sample_count, sampler, base_value)
        return negate_quantity(operand)

    left = evaluate_with_uncertainty(node.left, rates, sample_count, sampler, base_value)
    right = evaluate_with_uncertainty(node.right, rates, sample_count, sampler, base_value)
    return combine_quantities(node.operator, left, right, rates, sample_count, sampler)
