"""
Sampling — Monte-Carlo выборки для диапазонов a~b

Гауссов генератор на основе polar Box-Muller transform.
Каждое преобразование даёт два независимых N(0, 1) значения;
второе (spare) кэшируется в состоянии sampler-а и отдаётся следующим вызовом.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Состояние RNG (включая spare) принадлежит экземпляру GaussianSampler,
   глобального состояния нет: вызовы с разными sampler-ами независимы
2. Длина любой выборки равна запрошенному sample_count
3. Поэлементная арифметика никогда не бросает (деление на 0 → NaN)
"""

import math
import random
from typing import Optional, Sequence, Union

from src.core.config import RANGE_STD_DEV_DIVISOR
from src.core.math.interval import apply_operator

# Операнд поэлементной операции: выборка или точное число (broadcast)
SampleOperand = Union[Sequence[float], float]


# =============================================================================
# GAUSSIAN SAMPLER
# =============================================================================


class GaussianSampler:
    """
    Источник N(mean, std_dev) значений с собственным RNG-состоянием.

    Args:
        rng: Источник uniform [0, 1) (по умолчанию новый random.Random)
        seed: Seed для нового random.Random (игнорируется, если передан rng)
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self._rng = rng if rng is not None else random.Random(seed)
        self._spare: Optional[float] = None

    def reset(self) -> None:
        """Сброс кэшированного spare значения."""
        self._spare = None

    def gauss(self, mean: float, std_dev: float) -> float:
        """Одно значение из N(mean, std_dev)."""
        if self._spare is not None:
            spare = self._spare
            self._spare = None
            return mean + std_dev * spare

        while True:
            u = self._rng.random() * 2 - 1
            v = self._rng.random() * 2 - 1
            s = u * u + v * v
            if 0 < s < 1:
                break

        mul = math.sqrt((-2.0 * math.log(s)) / s)
        self._spare = v * mul
        return mean + std_dev * (u * mul)


# =============================================================================
# SAMPLE GENERATION
# =============================================================================


def range_std_dev(a: float, b: float) -> float:
    """Стандартное отклонение для диапазона a~b."""
    return abs(b - a) / RANGE_STD_DEV_DIVISOR


def generate_samples(
    mean: float, std_dev: float, sample_count: int, sampler: GaussianSampler
) -> list[float]:
    """
    Выборка из N(mean, std_dev).

    Returns:
        [] при sample_count <= 0; [mean] * n при std_dev == 0
    """
    if not sample_count or sample_count <= 0:
        return []
    if std_dev == 0:
        return [mean] * sample_count
    return [sampler.gauss(mean, std_dev) for _ in range(sample_count)]


def operate_samples(
    samples_a: SampleOperand,
    samples_b: SampleOperand,
    operator: str,
    sample_count: int,
) -> Optional[list[float]]:
    """
    Поэлементная бинарная операция над выборками.

    Точное число транслируется (broadcast) на все позиции.

    Returns:
        None, если оба операнда точные (нет случайности — нет выборки)

    Raises:
        KeyError: Если оператор не арифметический
    """
    a_is_sequence = not isinstance(samples_a, (int, float))
    b_is_sequence = not isinstance(samples_b, (int, float))
    if not a_is_sequence and not b_is_sequence:
        return None

    result = []
    for i in range(sample_count):
        a = samples_a[i] if a_is_sequence else samples_a
        b = samples_b[i] if b_is_sequence else samples_b
        result.append(apply_operator(operator, a, b))
    return result
