"""
Interval — Интервальная арифметика над [min, max]

Гарантированные границы результата бинарной операции по границам операндов:
- '+' и '-': покомпонентно
- '*' и '^': min/max по четырём угловым комбинациям
- '/': особый случай, если делитель касается нуля или содержит его

Точечная арифметика (mean) считается отдельно вызывающим кодом.
"""

from typing import Callable, Final, NamedTuple

from src.core.math.numerical_safeguards import (
    INF,
    NAN,
    nan_max,
    nan_min,
    safe_divide,
    safe_pow,
)

ARITHMETIC_OPERATORS: Final[str] = "+-*/^"


class Bounds(NamedTuple):
    """Границы интервала."""

    min: float
    max: float


# =============================================================================
# CORNER BOUNDS
# =============================================================================


def _corner_bounds(
    a_min: float,
    a_max: float,
    b_min: float,
    b_max: float,
    op: Callable[[float, float], float],
) -> Bounds:
    corners = (op(a_min, b_min), op(a_min, b_max), op(a_max, b_min), op(a_max, b_max))
    return Bounds(nan_min(*corners), nan_max(*corners))


def add_bounds(a_min: float, a_max: float, b_min: float, b_max: float) -> Bounds:
    return Bounds(a_min + b_min, a_max + b_max)


def sub_bounds(a_min: float, a_max: float, b_min: float, b_max: float) -> Bounds:
    return Bounds(a_min - b_max, a_max - b_min)


def mul_bounds(a_min: float, a_max: float, b_min: float, b_max: float) -> Bounds:
    return _corner_bounds(a_min, a_max, b_min, b_max, lambda x, y: x * y)


def pow_bounds(a_min: float, a_max: float, b_min: float, b_max: float) -> Bounds:
    return _corner_bounds(a_min, a_max, b_min, b_max, safe_pow)


def div_bounds(a_min: float, a_max: float, b_min: float, b_max: float) -> Bounds:
    """
    Границы частного.

    Если делитель касается нуля или содержит его:
    - делитель ровно [0, 0] → [NaN, NaN]
    - числитель ровно [0, 0] → [0, 0]
    - иначе → [-Infinity, +Infinity]

    Examples:
        >>> div_bounds(1.0, 2.0, 2.0, 4.0)
        Bounds(min=0.25, max=1.0)
        >>> div_bounds(1.0, 2.0, -1.0, 1.0)
        Bounds(min=-inf, max=inf)
    """
    if b_min <= 0 and b_max >= 0:
        if b_min == 0 and b_max == 0:
            return Bounds(NAN, NAN)
        if a_min == 0 and a_max == 0:
            return Bounds(0.0, 0.0)
        return Bounds(-INF, INF)
    return _corner_bounds(a_min, a_max, b_min, b_max, safe_divide)


def neg_bounds(a_min: float, a_max: float) -> Bounds:
    """Границы унарного минуса."""
    return Bounds(nan_min(-a_max, -a_min), nan_max(-a_max, -a_min))


_BOUNDS_BY_OPERATOR: Final[dict[str, Callable[[float, float, float, float], Bounds]]] = {
    "+": add_bounds,
    "-": sub_bounds,
    "*": mul_bounds,
    "/": div_bounds,
    "^": pow_bounds,
}


def binary_bounds(
    operator: str, a_min: float, a_max: float, b_min: float, b_max: float
) -> Bounds:
    """
    Диспетчер интервальной арифметики по символу оператора.

    Raises:
        KeyError: Если оператор не арифметический
    """
    return _BOUNDS_BY_OPERATOR[operator](a_min, a_max, b_min, b_max)


# =============================================================================
# POINT ARITHMETIC
# =============================================================================


def apply_operator(operator: str, a: float, b: float) -> float:
    """
    Точечная бинарная операция с IEEE-семантикой (деление на 0 → NaN).

    Raises:
        KeyError: Если оператор не арифметический
    """
    return _POINT_BY_OPERATOR[operator](a, b)


_POINT_BY_OPERATOR: Final[dict[str, Callable[[float, float], float]]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": safe_divide,
    "^": safe_pow,
}
