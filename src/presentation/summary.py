"""
Summary — Текстовая сводка результата для UI/CLI

Строки повторяют то, что показывает браузерная поверхность:
точное среднее и интервал, симулированный диапазон 5%–95%,
либо пометка, что результат точный.
"""

import math
from typing import Optional

from src.core.domain.values import UncertainValue
from src.presentation.formatting import format_number
from src.presentation.quantiles import get_quantiles


def summarize_result(result: Optional[UncertainValue]) -> list[str]:
    """
    Сводка результата построчно.

    Returns:
        [] для пустого результата
    """
    if result is None:
        return []

    lines = []
    if math.isnan(result.mean) or math.isnan(result.min) or math.isnan(result.max):
        lines.append("Exact Result Contains NaN")
    else:
        lines.append(f"Exact Average: {format_number(result.mean)}")
        lines.append(f"Exact Range : {format_number(result.min)} - {format_number(result.max)}")

    if result.samples is None:
        lines.append("Result is an exact number, no distribution to simulate")
        return lines

    quantiles = get_quantiles(result.samples)
    if math.isnan(quantiles.p05) or math.isnan(quantiles.p95):
        lines.append("Simulated Result Contains NaN/Infinity")
    else:
        lines.append(
            f"Simulated Range (5%-95%): {format_number(quantiles.p05)} ~ "
            f"{format_number(quantiles.p95)}"
        )
    return lines
