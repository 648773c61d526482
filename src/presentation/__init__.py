"""
Presentation helpers: quantiles, number formatting, text histogram and summaries.

Shared by the plain and currency pipelines for final display.
"""

from src.presentation.formatting import (
    format_currency_amount,
    format_number,
    format_scalar_amount,
)
from src.presentation.histogram import generate_text_histogram
from src.presentation.quantiles import calculate_sample_mean, get_quantiles
from src.presentation.summary import summarize_result

__all__ = [
    "format_number",
    "format_currency_amount",
    "format_scalar_amount",
    "get_quantiles",
    "calculate_sample_mean",
    "generate_text_histogram",
    "summarize_result",
]
