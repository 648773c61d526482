"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Деление с NaN вместо ZeroDivisionError
2. Степень с IEEE-семантикой (NaN, ±Infinity вместо исключений)
3. NaN-пропагирующие min/max
4. Денежное округление (round half up)
5. Схлопывание околонулевых значений и clamp индексов
"""

import math

import pytest

from src.core.math.numerical_safeguards import (
    EPS_DISPLAY_ZERO,
    clamp_index,
    finite_values,
    is_valid_float,
    nan_max,
    nan_min,
    normalize_zero,
    round_money,
    safe_divide,
    safe_pow,
)

# =============================================================================
# ТЕСТЫ ПРОВЕРОК
# =============================================================================


class TestValidity:
    """Тесты is_valid_float / finite_values"""

    def test_finite_values_are_valid(self) -> None:
        """Обычные числа валидны"""
        assert is_valid_float(0.0)
        assert is_valid_float(-1e300)

    def test_nan_and_inf_are_invalid(self) -> None:
        """NaN и ±Inf невалидны"""
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))

    def test_finite_values_filters(self) -> None:
        """finite_values отбрасывает NaN/Inf и сохраняет порядок"""
        assert finite_values([3.0, float("nan"), 1.0, float("inf")]) == [3.0, 1.0]

    def test_finite_values_none(self) -> None:
        """None → пустой список"""
        assert finite_values(None) == []


# =============================================================================
# ТЕСТЫ БЕЗОПАСНОЙ АРИФМЕТИКИ
# =============================================================================


class TestSafeDivide:
    """Тесты safe_divide"""

    def test_regular_division(self) -> None:
        assert safe_divide(10.0, 4.0) == 2.5

    def test_zero_divisor_gives_nan(self) -> None:
        """Деление на 0 → NaN, а не исключение"""
        assert math.isnan(safe_divide(1.0, 0.0))
        assert math.isnan(safe_divide(0.0, 0.0))
        assert math.isnan(safe_divide(-5.0, -0.0))

    def test_infinite_operands(self) -> None:
        """inf/inf → NaN, 1/inf → 0"""
        assert math.isnan(safe_divide(float("inf"), float("inf")))
        assert safe_divide(1.0, float("inf")) == 0.0


class TestSafePow:
    """Тесты safe_pow"""

    def test_regular_power(self) -> None:
        assert safe_pow(2.0, 10.0) == 1024.0
        assert safe_pow(4.0, 0.5) == 2.0

    def test_negative_base_integer_exponent(self) -> None:
        """Отрицательное основание с целым показателем"""
        assert safe_pow(-2.0, 3.0) == -8.0
        assert safe_pow(-2.0, 2.0) == 4.0

    def test_negative_base_fractional_exponent_gives_nan(self) -> None:
        """(-8)^(1/3) → NaN (а не complex)"""
        assert math.isnan(safe_pow(-8.0, 1 / 3))

    def test_zero_negative_exponent_gives_infinity(self) -> None:
        """0^-1 → +Infinity, -0^-1 → -Infinity"""
        assert safe_pow(0.0, -1.0) == float("inf")
        assert safe_pow(-0.0, -1.0) == float("-inf")
        assert safe_pow(-0.0, -2.0) == float("inf")

    def test_overflow_gives_infinity(self) -> None:
        """Переполнение → ±Infinity"""
        assert safe_pow(10.0, 400.0) == float("inf")
        assert safe_pow(-10.0, 401.0) == float("-inf")

    def test_nan_propagation(self) -> None:
        """NaN в показателе → NaN; NaN^0 → 1"""
        assert math.isnan(safe_pow(2.0, float("nan")))
        assert math.isnan(safe_pow(float("nan"), 2.0))
        assert safe_pow(float("nan"), 0.0) == 1.0


class TestNanMinMax:
    """Тесты nan_min / nan_max"""

    def test_regular_values(self) -> None:
        assert nan_min(3.0, 1.0, 2.0) == 1.0
        assert nan_max(3.0, 1.0, 2.0) == 3.0

    def test_nan_anywhere_gives_nan(self) -> None:
        """NaN в любой позиции → NaN (независимо от порядка)"""
        assert math.isnan(nan_min(1.0, float("nan")))
        assert math.isnan(nan_min(float("nan"), 1.0))
        assert math.isnan(nan_max(1.0, float("nan"), 5.0))


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestRoundMoney:
    """Тесты round_money"""

    def test_half_up(self) -> None:
        """1.005 → 1.01 несмотря на binary float"""
        assert round_money(1.005) == 1.01

    def test_negative_values(self) -> None:
        """Half up в сторону +Infinity для отрицательных"""
        assert round_money(-1.234) == -1.23
        assert round_money(-1.5) == -1.5

    def test_already_rounded(self) -> None:
        assert round_money(506.4) == 506.4
        assert round_money(0.0) == 0.0

    def test_non_finite_passthrough(self) -> None:
        """NaN/Inf возвращаются без изменений"""
        assert math.isnan(round_money(float("nan")))
        assert round_money(float("inf")) == float("inf")
        assert round_money(float("-inf")) == float("-inf")


class TestNormalizeZero:
    """Тесты normalize_zero"""

    def test_tiny_values_collapse(self) -> None:
        assert normalize_zero(EPS_DISPLAY_ZERO / 10) == 0.0
        assert normalize_zero(-1e-15) == 0.0

    def test_negative_zero_becomes_positive(self) -> None:
        assert math.copysign(1.0, normalize_zero(-0.0)) == 1.0

    def test_regular_values_unchanged(self) -> None:
        assert normalize_zero(0.5) == 0.5


class TestClampIndex:
    """Тесты clamp_index"""

    def test_clamps_both_sides(self) -> None:
        assert clamp_index(-1, 10) == 0
        assert clamp_index(10, 10) == 9
        assert clamp_index(4, 10) == 4

    def test_empty_length_raises(self) -> None:
        with pytest.raises(ValueError, match="length must be positive"):
            clamp_index(0, 0)
