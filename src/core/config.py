"""
Config — Константы и конфигурация калькулятора

Все дефолты собраны здесь. Опции передаются frozen dataclass-ами,
чтобы вызовы оставались независимыми и воспроизводимыми.
"""

from dataclasses import dataclass
from typing import Final, Mapping

# =============================================================================
# SAMPLING
# =============================================================================

# Количество Monte-Carlo сэмплов по умолчанию
DEFAULT_SAMPLES: Final[int] = 10000

# Делитель для перевода диапазона a~b в стандартное отклонение:
# stdDev = |b - a| / RANGE_STD_DEV_DIVISOR (≈ ±1.645σ на концах диапазона)
RANGE_STD_DEV_DIVISOR: Final[float] = 3.28970725

# =============================================================================
# HISTOGRAM
# =============================================================================

DEFAULT_BINS: Final[int] = 20
DEFAULT_WIDTH: Final[int] = 40
DEFAULT_BAR: Final[str] = "█"

# =============================================================================
# CURRENCY
# =============================================================================

# Placeholder-идентификатор для tail-выражения после "to <currency>"
BASE_CURRENCY_TOKEN: Final[str] = "__base__"

# Встроенная таблица курсов: 1 unit ключа = value units цели
DEFAULT_CURRENCY_RATES: Final[Mapping[str, Mapping[str, float]]] = {
    "eur": {"pln": 4.22},
    "pln": {"eur": 1 / 4.22},
}

# Количество знаков после запятой для денежных сумм
MONEY_DECIMALS: Final[int] = 2


# =============================================================================
# CONFIG DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class HistogramConfig:
    """Конфигурация текстовой гистограммы.

    bar_char обрезается до первого символа; пустая строка → DEFAULT_BAR.
    """

    bins: int = DEFAULT_BINS
    width: int = DEFAULT_WIDTH
    bar_char: str = DEFAULT_BAR

    def __post_init__(self) -> None:
        if self.bins <= 0:
            raise ValueError(f"bins must be positive, got {self.bins}")
        if self.width < 0:
            raise ValueError(f"width must be non-negative, got {self.width}")
        object.__setattr__(self, "bar_char", self.bar_char[:1] or DEFAULT_BAR)

