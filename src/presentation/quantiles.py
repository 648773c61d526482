"""
Quantiles — Перцентили и среднее Monte-Carlo выборки

NaN/±Inf сэмплы отбрасываются перед расчётом.
"""

import math
from typing import Final, Optional, Sequence

from src.core.domain.results import Quantiles
from src.core.math.numerical_safeguards import NAN, clamp_index, finite_values

LOWER_QUANTILE: Final[float] = 0.05
UPPER_QUANTILE: Final[float] = 0.95


def get_quantiles(samples: Optional[Sequence[float]]) -> Quantiles:
    """
    5-й и 95-й перцентили.

    Индексы по отсортированной выборке:
    p05 = floor(0.05 * n) - 1, p95 = ceil(0.95 * n) - 1 (с clamp в [0, n - 1]).

    Returns:
        Quantiles(NaN, NaN), если выборки нет или все значения невалидны

    Examples:
        >>> get_quantiles(None)
        Quantiles(p05=nan, p95=nan)
    """
    valid = sorted(finite_values(samples))
    if not valid:
        return Quantiles(p05=NAN, p95=NAN)

    n = len(valid)
    p05_index = clamp_index(math.floor(LOWER_QUANTILE * n) - 1, n)
    p95_index = clamp_index(math.ceil(UPPER_QUANTILE * n) - 1, n)
    return Quantiles(p05=valid[p05_index], p95=valid[p95_index])


def calculate_sample_mean(samples: Optional[Sequence[float]]) -> float:
    """Среднее finite сэмплов; NaN, если их нет."""
    valid = finite_values(samples)
    if not valid:
        return NAN
    return math.fsum(valid) / len(valid)
