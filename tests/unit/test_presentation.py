"""
Тесты presentation-помощников: форматирование, квантили, гистограмма, сводка

Проверяемые инварианты:
1. format_number: NaN/Infinity литералами, научная нотация вне [1e-6, 1e9),
   точность по порядку величины, хвостовые нули отбрасываются
2. get_quantiles: индексы floor(0.05n)-1 / ceil(0.95n)-1 с clamp, NaN без валидных данных
3. Гистограмма: бины сверху вниз, бар пропорционален count/max, бин среднего помечен
4. Вырожденные выборки дают одну поясняющую строку
"""

import math

import pytest

from src.calculator.expression import evaluate_expression
from src.core.config import MONEY_DECIMALS, HistogramConfig
from src.core.domain.values import UncertainValue
from src.core.math.sampling import GaussianSampler
from src.presentation import (
    calculate_sample_mean,
    format_currency_amount,
    format_number,
    format_scalar_amount,
    generate_text_histogram,
    get_quantiles,
    summarize_result,
)

# =============================================================================
# ТЕСТЫ: Formatting
# =============================================================================


class TestFormatNumber:
    """Тесты format_number"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, "0"),
            (-0.0, "0"),
            (1234.5678, "1234.6"),
            (123.456, "123.46"),
            (12.3456, "12.346"),
            (1.5, "1.5"),
            (0.5, "0.5"),
            (0.001234, "0.001234"),
            (3.0, "3"),
            (-42.0, "-42"),
            (1234567890.0, "1.2346e+9"),
            (1e-7, "1.0000e-7"),
            (-2.5e12, "-2.5000e+12"),
        ],
    )
    def test_values(self, value, expected) -> None:
        assert format_number(value) == expected

    def test_exact_binary_halves_round_up(self) -> None:
        """Половины, точно представимые в float, округляются от нуля"""
        assert format_number(1000.25) == "1000.3"
        assert format_number(-1000.25) == "-1000.3"
        assert format_number(12.0625) == "12.063"

    def test_non_finite(self) -> None:
        assert format_number(float("nan")) == "NaN"
        assert format_number(float("inf")) == "Infinity"
        assert format_number(float("-inf")) == "-Infinity"

    def test_padding(self) -> None:
        assert format_number(3.0, pad_width=5) == "    3"
        assert format_number(123456.0, pad_width=3) == "123456"


class TestFormatAmounts:
    """Тесты format_currency_amount / format_scalar_amount"""

    def test_currency_amount(self) -> None:
        assert format_currency_amount(2.5) == "2.5"
        assert format_currency_amount(2.5, fixed_decimals=True) == "2.50"
        assert format_currency_amount(1.005, fixed_decimals=True) == "1.01"
        assert format_currency_amount(100.0) == "100"

    def test_currency_amount_negative_zero(self) -> None:
        assert format_currency_amount(-0.001, fixed_decimals=True) == "0.00"

    def test_currency_amount_non_finite(self) -> None:
        assert format_currency_amount(float("nan"), fixed_decimals=True) == "NaN"

    def test_money_precision_follows_config(self) -> None:
        assert format_currency_amount(7.0, fixed_decimals=True) == "7." + "0" * MONEY_DECIMALS
        assert format_currency_amount(1.23456) == f"{1.23456:.{MONEY_DECIMALS}f}"

    def test_scalar_amount(self) -> None:
        assert format_scalar_amount(2.0) == "2"
        assert format_scalar_amount(1 / 3) == "0.333333"
        assert format_scalar_amount(1e-13) == "0"
        assert format_scalar_amount(-87.5) == "-87.5"


# =============================================================================
# ТЕСТЫ: Quantiles
# =============================================================================


class TestQuantiles:
    """Тесты get_quantiles / calculate_sample_mean"""

    def test_hundred_values(self) -> None:
        samples = [float(i) for i in range(100, 0, -1)]
        quantiles = get_quantiles(samples)
        assert quantiles.p05 == 5.0
        assert quantiles.p95 == 95.0

    def test_small_sample_clamped(self) -> None:
        """floor(0.05*3)-1 = -1 → clamp в 0"""
        quantiles = get_quantiles([3.0, 1.0, 2.0])
        assert quantiles.p05 == 1.0
        assert quantiles.p95 == 3.0

    def test_non_finite_ignored(self) -> None:
        quantiles = get_quantiles([float("nan"), 2.0, float("inf")])
        assert quantiles.p05 == quantiles.p95 == 2.0

    def test_no_valid_samples(self) -> None:
        for samples in (None, [], [float("nan")]):
            quantiles = get_quantiles(samples)
            assert math.isnan(quantiles.p05)
            assert math.isnan(quantiles.p95)

    def test_quantiles_of_range_samples(self) -> None:
        result = evaluate_expression("10 ~ 20", 1000, GaussianSampler(seed=11))
        quantiles = get_quantiles(result.samples)
        assert quantiles.p05 <= quantiles.p95
        assert min(result.samples) <= quantiles.p05
        assert quantiles.p95 <= max(result.samples)

    def test_sample_mean(self) -> None:
        assert calculate_sample_mean([1.0, 2.0, float("nan"), 6.0]) == 3.0
        assert math.isnan(calculate_sample_mean([]))
        assert math.isnan(calculate_sample_mean(None))


# =============================================================================
# ТЕСТЫ: Histogram
# =============================================================================


class TestHistogram:
    """Тесты generate_text_histogram"""

    def test_no_samples(self) -> None:
        assert generate_text_histogram(None) == ["Histogram unavailable (no samples)."]
        assert generate_text_histogram([]) == ["Histogram unavailable (no samples)."]

    def test_no_valid_samples(self) -> None:
        assert generate_text_histogram([float("nan"), float("inf")]) == [
            "Cannot generate histogram (no valid numeric samples)."
        ]

    def test_identical_samples(self) -> None:
        lines = generate_text_histogram([5.0, 5.0], HistogramConfig(width=3, bar_char="#"))
        assert lines == ["      5 | ### (all samples)"]

    def test_bins_from_top_to_bottom(self) -> None:
        lines = generate_text_histogram([0.0, 1.0, 2.0, 3.0], HistogramConfig(bins=2, width=4))
        assert lines == [
            "    1.5 | ████ (mean≈1.5)",
            "      0 | ████",
        ]

    def test_bar_width_proportional(self) -> None:
        samples = [0.0, 0.0, 0.0, 0.0, 10.0]
        lines = generate_text_histogram(samples, HistogramConfig(bins=2, width=8, bar_char="*"))
        assert lines[0] == "      5 | **"
        assert lines[1] == "      0 | ******** (mean≈2)"

    def test_default_config(self) -> None:
        lines = generate_text_histogram([float(i) for i in range(100)])
        assert len(lines) == 20


# =============================================================================
# ТЕСТЫ: Summary
# =============================================================================


class TestSummary:
    """Тесты summarize_result"""

    def test_none(self) -> None:
        assert summarize_result(None) == []

    def test_exact(self) -> None:
        assert summarize_result(UncertainValue.exact(5.0)) == [
            "Exact Average: 5",
            "Exact Range : 5 - 5",
            "Result is an exact number, no distribution to simulate",
        ]

    def test_nan(self) -> None:
        lines = summarize_result(UncertainValue.exact(float("nan")))
        assert lines[0] == "Exact Result Contains NaN"

    def test_sampled(self) -> None:
        samples = tuple(float(i) for i in range(1, 101))
        value = UncertainValue(mean=50.5, min=1.0, max=100.0, samples=samples)
        assert summarize_result(value)[-1] == "Simulated Range (5%-95%): 5 ~ 95"

    def test_sampled_without_valid_values(self) -> None:
        value = UncertainValue(mean=1.0, min=0.0, max=2.0, samples=(float("nan"),))
        assert summarize_result(value)[-1] == "Simulated Result Contains NaN/Infinity"
