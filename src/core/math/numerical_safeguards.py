"""
Numerical Safeguards — IEEE-совместимые примитивы

Модуль приводит float-арифметику Python к семантике IEEE 754 там,
где Python бросает исключение вместо значения:
- Деление на ноль → NaN (а не ZeroDivisionError)
- Степень: отрицательное основание с дробным показателем → NaN,
  0 в отрицательной степени → ±Infinity, переполнение → ±Infinity
- min/max с NaN среди кандидатов → NaN (а не порядко-зависимый результат)
- Денежное округление до 2 знаков (round half up)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна функция модуля не бросает на NaN/Inf входах
2. NaN/Inf пропагируют как значения, а не санитизируются
3. Все операции детерминированы и воспроизводимы
"""

import math
import sys
from typing import Final, Iterable

from src.core.config import MONEY_DECIMALS

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Nudge для денежного округления (компенсирует 1.005 → 1.00 из-за binary float)
EPS_MONEY_ROUNDING: Final[float] = sys.float_info.epsilon

# Порог, ниже которого scalar отображается как 0
EPS_DISPLAY_ZERO: Final[float] = 1e-12

NAN: Final[float] = float("nan")
INF: Final[float] = float("inf")


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def finite_values(values: Iterable[float] | None) -> list[float]:
    """
    Отбор только finite значений из последовательности.

    Args:
        values: Последовательность (или None)

    Returns:
        Новый список без NaN/±Inf (пустой для None)
    """
    if values is None:
        return []
    return [v for v in values if is_valid_float(v)]


# =============================================================================
# БЕЗОПАСНАЯ АРИФМЕТИКА
# =============================================================================


def safe_divide(numerator: float, denominator: float) -> float:
    """
    Деление с NaN вместо ZeroDivisionError.

    Examples:
        >>> safe_divide(10.0, 4.0)
        2.5
        >>> safe_divide(1.0, 0.0)
        nan
    """
    if denominator == 0:
        return NAN
    return numerator / denominator


def safe_pow(base: float, exponent: float) -> float:
    """
    Возведение в степень по правилам IEEE (как Math.pow).

    Python's math.pow бросает ValueError/OverflowError там, где IEEE
    даёт NaN или ±Infinity; оператор ** может вернуть complex.

    Examples:
        >>> safe_pow(2.0, 10.0)
        1024.0
        >>> safe_pow(-8.0, 1 / 3)
        nan
        >>> safe_pow(0.0, -1.0)
        inf
        >>> safe_pow(10.0, 400.0)
        inf
    """
    if math.isnan(exponent):
        return NAN
    if math.isnan(base):
        return 1.0 if exponent == 0 else NAN

    odd_integer_exponent = (
        math.isfinite(exponent) and exponent == int(exponent) and int(exponent) % 2 == 1
    )

    if base == 0 and exponent < 0:
        # -0 в нечётной отрицательной степени → -Infinity
        if odd_integer_exponent and math.copysign(1.0, base) < 0:
            return -INF
        return INF

    try:
        return math.pow(base, exponent)
    except ValueError:
        return NAN
    except OverflowError:
        if base < 0 and odd_integer_exponent:
            return -INF
        return INF


def nan_min(*values: float) -> float:
    """Минимум, который возвращает NaN, если среди значений есть NaN."""
    if any(math.isnan(v) for v in values):
        return NAN
    return min(values)


def nan_max(*values: float) -> float:
    """Максимум, который возвращает NaN, если среди значений есть NaN."""
    if any(math.isnan(v) for v in values):
        return NAN
    return max(values)


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_money(value: float) -> float:
    """
    Округление денежной суммы до 2 знаков (round half up).

    NaN/Inf возвращаются без изменений.

    Examples:
        >>> round_money(1.005)
        1.01
        >>> round_money(-1.234)
        -1.23
        >>> round_money(float('inf'))
        inf
    """
    if not is_valid_float(value):
        return value
    scale = 10**MONEY_DECIMALS
    return math.floor((value + EPS_MONEY_ROUNDING) * scale + 0.5) / scale


def normalize_zero(value: float, tol: float = EPS_DISPLAY_ZERO) -> float:
    """
    Схлопывание околонулевых значений (и -0.0) в 0.0 для отображения.
    """
    if abs(value) < tol:
        return 0.0
    return value


def clamp_index(index: int, length: int) -> int:
    """
    Ограничение индекса диапазоном [0, length - 1].

    Raises:
        ValueError: Если length <= 0
    """
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")
    return max(0, min(length - 1, index))
