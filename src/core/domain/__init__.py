"""
Domain models and value objects.

Contains tokens, uncertain values, the currency expression tree and result models.
"""

from src.core.domain.nodes import (
    ATOM_PRECEDENCE,
    BINARY_PRECEDENCE,
    UNARY_PRECEDENCE,
    BaseNode,
    BinaryNode,
    CurrencyNode,
    LiteralNode,
    UnaryNode,
    node_precedence,
)
from src.core.domain.results import CurrencyResult, EvaluationWithSteps, Quantiles
from src.core.domain.tokens import (
    NEG,
    OPERATOR_CHARS,
    CurrencyToken,
    CurrencyTokenType,
    PlainToken,
    is_number_token,
)
from src.core.domain.values import Money, Quantity, Scalar, UncertainValue, ValueKind

__all__ = [
    # Tokens
    "NEG",
    "OPERATOR_CHARS",
    "PlainToken",
    "CurrencyToken",
    "CurrencyTokenType",
    "is_number_token",
    # Values
    "UncertainValue",
    "ValueKind",
    "Scalar",
    "Money",
    "Quantity",
    # Expression tree
    "ATOM_PRECEDENCE",
    "BINARY_PRECEDENCE",
    "UNARY_PRECEDENCE",
    "LiteralNode",
    "BaseNode",
    "UnaryNode",
    "BinaryNode",
    "CurrencyNode",
    "node_precedence",
    # Results
    "CurrencyResult",
    "EvaluationWithSteps",
    "Quantiles",
]
