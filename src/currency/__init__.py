"""
Currency pipeline: lexer, parser, rate graph, step-by-step reduction
and the uncertainty-propagating evaluator.
"""

from src.currency.evaluator import (
    evaluate_currency_expression_with_steps,
    looks_like_currency_expression,
)
from src.currency.lexer import (
    find_top_level_to,
    format_token_sequence,
    lex_currency_expression,
)
from src.currency.parser import CurrencyExpressionParser, parse_currency_expression_tokens
from src.currency.rates import RateGraph, build_rate_graph, get_currency_rate
from src.currency.reduction import (
    convert_literal_currency,
    evaluate_binary_literal,
    evaluate_unary_literal,
    format_currency_ast,
    reduce_one_layer,
    replace_base_node,
)
from src.currency.uncertainty import (
    combine_quantities,
    convert_quantity,
    evaluate_with_uncertainty,
)

__all__ = [
    # Lexer
    "lex_currency_expression",
    "find_top_level_to",
    "format_token_sequence",
    # Parser
    "CurrencyExpressionParser",
    "parse_currency_expression_tokens",
    # Rates
    "RateGraph",
    "build_rate_graph",
    "get_currency_rate",
    # Reduction
    "convert_literal_currency",
    "evaluate_unary_literal",
    "evaluate_binary_literal",
    "reduce_one_layer",
    "replace_base_node",
    "format_currency_ast",
    # Uncertainty
    "convert_quantity",
    "combine_quantities",
    "evaluate_with_uncertainty",
    # Evaluator
    "looks_like_currency_expression",
    "evaluate_currency_expression_with_steps",
]
