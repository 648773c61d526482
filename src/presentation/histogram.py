"""
Histogram — Текстовая гистограмма выборки

Одна строка на бин, от верхнего бина к нижнему:
"<начало бина, ширина 7> | <бар>", бин со средним помечается "(mean≈…)".
Длина бара пропорциональна count / max_count.
"""

import math
from typing import Optional, Sequence

from src.core.config import HistogramConfig
from src.core.math.numerical_safeguards import finite_values
from src.presentation.formatting import format_number
from src.presentation.quantiles import calculate_sample_mean

LABEL_WIDTH = 7


def _bin_index(value: float, min_value: float, bin_size: float, bins: int) -> int:
    if bin_size == 0:
        return 0
    ratio = (value - min_value) / bin_size
    if not math.isfinite(ratio):
        return bins - 1 if ratio > 0 else 0
    index = math.floor(ratio)
    return max(0, min(bins - 1, index))


def generate_text_histogram(
    samples: Optional[Sequence[float]],
    config: Optional[HistogramConfig] = None,
) -> list[str]:
    """
    Строки текстовой гистограммы.

    Вырожденные случаи дают одну поясняющую строку:
    нет выборки, нет валидных значений, все значения равны.

    Args:
        samples: Monte-Carlo выборка
        config: bins / width / bar_char (по умолчанию HistogramConfig())
    """
    config = config or HistogramConfig()

    if not samples:
        return ["Histogram unavailable (no samples)."]

    valid = finite_values(samples)
    if not valid:
        return ["Cannot generate histogram (no valid numeric samples)."]

    min_value = min(valid)
    max_value = max(valid)

    if min_value == max_value:
        label = format_number(min_value, LABEL_WIDTH)
        return [f"{label} | {config.bar_char * config.width} (all samples)"]

    bin_size = (max_value - min_value) / config.bins
    counts = [0] * config.bins
    for value in valid:
        counts[_bin_index(value, min_value, bin_size, config.bins)] += 1

    max_count = max(counts)
    sample_mean = calculate_sample_mean(valid)
    mean_bin = _bin_index(sample_mean, min_value, bin_size, config.bins)

    lines = []
    for i in range(config.bins - 1, -1, -1):
        bin_start = min_value + i * bin_size
        bar_width = math.floor(counts[i] / max_count * config.width + 0.5)
        line = f"{format_number(bin_start, LABEL_WIDTH)} | {config.bar_char * bar_width}"
        if i == mean_bin:
            line += f" (mean≈{format_number(sample_mean)})"
        lines.append(line)
    return lines
