"""
Formatting — Форматирование чисел для отображения

- format_number: адаптивная точность по порядку величины
- format_currency_amount: денежная сумма с 2 знаками
- format_scalar_amount: scalar в шагах упрощения (до 6 знаков)
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from src.core.config import MONEY_DECIMALS
from src.core.math.numerical_safeguards import is_valid_float, normalize_zero, round_money

# Границы десятичного представления: вне [1e-6, 1e9) → научная нотация
SCIENTIFIC_LOWER: Final[float] = 1e-6
SCIENTIFIC_UPPER: Final[float] = 1e9
SCIENTIFIC_DIGITS: Final[int] = 4

# (нижняя граница |x|, число знаков после запятой), по убыванию
DECIMALS_BY_MAGNITUDE: Final[tuple[tuple[float, int], ...]] = (
    (1000.0, 1),
    (100.0, 2),
    (10.0, 3),
    (1.0, 4),
    (0.01, 5),
    (0.0, 6),
)

SCALAR_DECIMALS: Final[int] = 6

_TRAILING_ZEROS: Final[re.Pattern[str]] = re.compile(r"\.?0+$")


def _trim_fraction(text: str) -> str:
    if "." not in text:
        return text
    return _TRAILING_ZEROS.sub("", text)


def _to_fixed(value: float, decimals: int) -> str:
    # Точные двоичные половины округляются от нуля: 1000.25 → "1000.3"
    quantum = Decimal(1).scaleb(-decimals)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def _non_finite_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def _to_exponential(value: float, digits: int) -> str:
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    power = int(exponent)
    return f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


# =============================================================================
# FORMAT NUMBER
# =============================================================================


def format_number(value: float, pad_width: int = 0) -> str:
    """
    Форматирование числа с адаптивной точностью.

    - NaN / Infinity / -Infinity как литеральные строки
    - научная нотация (4 знака) вне [1e-6, 1e9)
    - иначе десятичная запись: 1 знак для |x| >= 1000 … 6 знаков для |x| < 0.01,
      хвостовые нули и точка отбрасываются

    Args:
        value: Число
        pad_width: Ширина для выравнивания вправо (0 — без выравнивания)

    Examples:
        >>> format_number(1234.5678)
        '1234.6'
        >>> format_number(0.5)
        '0.5'
        >>> format_number(1234567890)
        '1.2346e+9'
        >>> format_number(3, pad_width=5)
        '    3'
    """
    abs_value = abs(value)

    if not is_valid_float(value):
        text = _non_finite_text(value)
    elif abs_value == 0:
        text = "0"
    elif abs_value < SCIENTIFIC_LOWER or abs_value >= SCIENTIFIC_UPPER:
        text = _to_exponential(value, SCIENTIFIC_DIGITS)
    else:
        decimals = next(d for bound, d in DECIMALS_BY_MAGNITUDE if abs_value >= bound)
        text = _trim_fraction(_to_fixed(value, decimals))

    return text.rjust(pad_width) if pad_width > 0 else text


# =============================================================================
# AMOUNTS
# =============================================================================


def format_currency_amount(value: float, fixed_decimals: bool = False) -> str:
    """
    Денежная сумма, округлённая до 2 знаков.

    Args:
        value: Сумма
        fixed_decimals: Всегда 2 знака ("0.50") вместо обрезки ("0.5")
    """
    if not is_valid_float(value):
        return format_number(value)
    text = f"{round_money(value) + 0.0:.{MONEY_DECIMALS}f}"
    zero = f"{0.0:.{MONEY_DECIMALS}f}"
    if text == f"-{zero}":
        text = zero
    return text if fixed_decimals else _trim_fraction(text)


def format_scalar_amount(value: float) -> str:
    """Scalar для шагов упрощения: до 6 знаков, околонулевые значения → 0."""
    if not is_valid_float(value):
        return format_number(value)
    return _trim_fraction(f"{normalize_zero(value) + 0.0:.{SCALAR_DECIMALS}f}")
