"""
Values — Неопределённые значения

UncertainValue — результат plain-вычисления: mean, гарантированный интервал
[min, max] и (опционально) Monte-Carlo выборка.

Quantity — вариант для currency-вычисления с неопределённостью:
Scalar (безразмерное) | Money (с валютой). Закрытый tagged union:
каждый оператор разбирает все комбинации явно, остальные → ошибка.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. min <= mean <= max, когда все значения finite (нарушается только NaN)
2. samples присутствует только если в вычислении участвовал '~'
3. len(samples) == sample_count вычисления
4. Значения immutable: каждая операция создаёт новый экземпляр
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class ValueKind(str, Enum):
    """Вид значения в currency-выражении"""

    SCALAR = "scalar"
    MONEY = "money"


# =============================================================================
# UNCERTAIN VALUE
# =============================================================================


class UncertainValue(BaseModel):
    """
    Результат вычисления с неопределённостью.

    Immutable модель (frozen=True).
    """

    mean: float = Field(..., description="Точечная оценка (арифметика по mean)")
    min: float = Field(..., description="Нижняя граница интервала")
    max: float = Field(..., description="Верхняя граница интервала")
    samples: Optional[tuple[float, ...]] = Field(
        default=None, description="Monte-Carlo выборка (None для точных значений)"
    )

    model_config = {"frozen": True}

    @classmethod
    def exact(cls, value: float) -> "UncertainValue":
        """Точное значение: min == max == mean, без выборки."""
        return cls(mean=value, min=value, max=value, samples=None)

    @property
    def is_exact(self) -> bool:
        return self.samples is None


# =============================================================================
# QUANTITIES (currency-aware)
# =============================================================================


@dataclass(frozen=True)
class Scalar:
    """Безразмерная величина с неопределённостью."""

    mean: float
    min: float
    max: float
    samples: Optional[tuple[float, ...]] = None

    kind = ValueKind.SCALAR

    @classmethod
    def exact(cls, value: float) -> "Scalar":
        return cls(value, value, value)


@dataclass(frozen=True)
class Money:
    """Денежная величина с неопределённостью; currency — lowercase код."""

    currency: str
    mean: float
    min: float
    max: float
    samples: Optional[tuple[float, ...]] = None

    kind = ValueKind.MONEY

    @classmethod
    def exact(cls, value: float, currency: str) -> "Money":
        return cls(currency.lower(), value, value, value)


Quantity = Union[Scalar, Money]
