"""
Plain calculator pipeline: tokenizer, shunting-yard and RPN evaluator,
plus the unified entry points.
"""

from src.calculator.expression import evaluate_expression, evaluate_expression_with_steps
from src.calculator.rpn_evaluator import evaluate_rpn
from src.calculator.shunting_yard import shunting_yard
from src.calculator.tokenizer import tokenize

__all__ = [
    "tokenize",
    "shunting_yard",
    "evaluate_rpn",
    "evaluate_expression",
    "evaluate_expression_with_steps",
]
