"""
Core math modules калькулятора

Численные примитивы с IEEE-семантикой, интервальная арифметика и Monte-Carlo выборки.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    EPS_DISPLAY_ZERO,
    EPS_MONEY_ROUNDING,
    INF,
    NAN,
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

# Interval arithmetic
from src.core.math.interval import (
    ARITHMETIC_OPERATORS,
    Bounds,
    add_bounds,
    apply_operator,
    binary_bounds,
    div_bounds,
    mul_bounds,
    neg_bounds,
    pow_bounds,
    sub_bounds,
)

# Sampling
from src.core.math.sampling import (
    GaussianSampler,
    generate_samples,
    operate_samples,
    range_std_dev,
)

__all__ = [
    # Numerical Safeguards: Constants
    "EPS_DISPLAY_ZERO",
    "EPS_MONEY_ROUNDING",
    "INF",
    "NAN",
    # Numerical Safeguards: Functions
    "clamp_index",
    "finite_values",
    "is_valid_float",
    "nan_max",
    "nan_min",
    "normalize_zero",
    "round_money",
    "safe_divide",
    "safe_pow",
    # Interval: Types
    "ARITHMETIC_OPERATORS",
    "Bounds",
    # Interval: Functions
    "add_bounds",
    "apply_operator",
    "binary_bounds",
    "div_bounds",
    "mul_bounds",
    "neg_bounds",
    "pow_bounds",
    "sub_bounds",
    # Sampling
    "GaussianSampler",
    "generate_samples",
    "operate_samples",
    "range_std_dev",
]
