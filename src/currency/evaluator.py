"""
Currency Evaluator — Оркестрация currency-выражения с шагами упрощения

Протокол:
1. lex → поиск top-level "to" → решение, currency ли это выражение
2. левая часть парсится в AST; tail после "to <ccy>" — в AST с BaseNode
3. пошаговая редукция левой части до литерала (каждый шаг → строка)
4. конвертация в целевую валюту; tail редуцируется с подставленным значением
5. если в выражении есть '~' — отдельный uncertainty-проход по исходному AST

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Не-currency выражение → None (вызывающий переключается на plain pipeline)
2. display всегда берётся из точной редукции, даже если есть выборка
3. Каждый шаг редукции либо меняет дерево, либо это ошибка
"""

import logging
from typing import Mapping, Optional, Sequence

from src.core.config import BASE_CURRENCY_TOKEN, DEFAULT_SAMPLES
from src.core.domain.nodes import CurrencyNode, LiteralNode
from src.core.domain.results import CurrencyResult, EvaluationWithSteps
from src.core.domain.tokens import CurrencyToken, CurrencyTokenType
from src.core.domain.values import ValueKind
from src.core.errors import ExpressionSyntaxError, SimplificationError
from src.core.math.sampling import GaussianSampler
from src.currency.lexer import (
    find_top_level_to,
    format_token_sequence,
    lex_currency_expression,
)
from src.currency.parser import parse_currency_expression_tokens
from src.currency.rates import RateGraph, build_rate_graph
from src.currency.reduction import (
    convert_literal_currency,
    format_currency_ast,
    reduce_one_layer,
    replace_base_node,
)
from src.currency.uncertainty import convert_quantity, evaluate_with_uncertainty
from src.presentation.formatting import format_currency_amount, format_number

logger = logging.getLogger(__name__)

BASE_TOKEN: CurrencyToken = CurrencyToken(
    type=CurrencyTokenType.IDENTIFIER, raw=BASE_CURRENCY_TOKEN, value=BASE_CURRENCY_TOKEN
)


# =============================================================================
# DETECTION
# =============================================================================


def _followed_by_currency(tokens: Sequence[CurrencyToken], index: int) -> bool:
    return index + 1 < len(tokens) and tokens[index + 1].is_currency_identifier(
        BASE_CURRENCY_TOKEN
    )


def looks_like_currency_expression(tokens: Sequence[CurrencyToken]) -> bool:
    """
    Currency-выражение: есть top-level "to", money-токен,
    число или ')' сразу перед идентификатором валюты.
    """
    if find_top_level_to(tokens) >= 0:
        return True
    for index, token in enumerate(tokens):
        if token.type == CurrencyTokenType.MONEY:
            return True
        if token.type == CurrencyTokenType.NUMBER or token.is_operator(")"):
            if _followed_by_currency(tokens, index):
                return True
    return False


# =============================================================================
# REDUCTION LOOP
# =============================================================================


def _reduce_to_literal(
    node: CurrencyNode,
    rates: RateGraph,
    steps: list[str],
    suffix: str,
    error_message: str,
) -> CurrencyNode:
    while not isinstance(node, LiteralNode):
        node, changed = reduce_one_layer(node, rates)
        if not changed:
            raise SimplificationError(error_message)
        steps.append(_with_suffix(format_currency_ast(node), suffix))
    return node


def _with_suffix(text: str, suffix: str) -> str:
    return f"{text} {suffix}" if suffix else text


# =============================================================================
# EVALUATOR
# =============================================================================


def evaluate_currency_expression_with_steps(
    expression: str,
    sample_count: int = DEFAULT_SAMPLES,
    currency_rates: Optional[Mapping[str, Mapping[str, float]]] = None,
    sampler: Optional[GaussianSampler] = None,
) -> Optional[EvaluationWithSteps]:
    """
    Вычисление currency-выражения с шагами упрощения.

    Args:
        expression: Текст выражения ("(60~115)pln to eur * 2")
        sample_count: Размер выборки для '~'
        currency_rates: Пользовательские курсы (перекрывают встроенные)
        sampler: Источник гауссовых значений

    Returns:
        EvaluationWithSteps или None, если выражение не currency

    Raises:
        ExpressionSyntaxError: Ошибки лексера/парсера, нет выражения или валюты у "to"
        OperandTypeError: Недопустимые комбинации kind
        MissingExchangeRateError: Нет пути конвертации
        SimplificationError: Редукция застряла
        jsonschema.ValidationError: Некорректные currency_rates
    """
    tokens = lex_currency_expression(expression)
    if not looks_like_currency_expression(tokens):
        logger.debug("Not a currency expression: %r", expression)
        return None

    to_index = find_top_level_to(tokens)
    has_range = any(token.is_operator("~") for token in tokens)
    rates = build_rate_graph(currency_rates)

    left_tokens = tokens[:to_index] if to_index >= 0 else tokens
    if not left_tokens:
        raise ExpressionSyntaxError("Missing expression before currency conversion")

    target_currency: Optional[str] = None
    tail_tokens: list[CurrencyToken] = []
    tail_ast: Optional[CurrencyNode] = None
    if to_index >= 0:
        target = tokens[to_index + 1] if to_index + 1 < len(tokens) else None
        if target is None or target.type != CurrencyTokenType.IDENTIFIER:
            raise ExpressionSyntaxError("Expected target currency after 'to'")
        target_currency = target.value
        tail_tokens = tokens[to_index + 2:]
        if tail_tokens:
            tail_ast = parse_currency_expression_tokens(
                [BASE_TOKEN, *tail_tokens], allow_base_token=True
            )

    left_ast = parse_currency_expression_tokens(left_tokens)

    suffix = ""
    if target_currency is not None:
        suffix = f"to {target_currency}"
        if tail_tokens:
            suffix += f" {format_token_sequence(tail_tokens)}"

    steps = [_with_suffix(format_currency_ast(left_ast), suffix)]
    final_node = _reduce_to_literal(
        left_ast, rates, steps, suffix, "Unable to simplify expression"
    )

    if target_currency is not None:
        final_node = convert_literal_currency(final_node, target_currency, rates)
        if tail_ast is not None:
            final_node = replace_base_node(tail_ast, final_node)
            steps.append(format_currency_ast(final_node))
            final_node = _reduce_to_literal(
                final_node, rates, steps, "", "Unable to simplify post-conversion expression"
            )
        else:
            steps.append(format_currency_ast(final_node))

    if not isinstance(final_node, LiteralNode):
        raise SimplificationError("Expression did not simplify to a single value")

    sampled = None
    if has_range:
        sampler = sampler or GaussianSampler()
        sampled = evaluate_with_uncertainty(left_ast, rates, sample_count, sampler)
        if target_currency is not None:
            sampled = convert_quantity(sampled, target_currency, rates)
            if tail_ast is not None:
                sampled = evaluate_with_uncertainty(
                    tail_ast, rates, sample_count, sampler, base_value=sampled
                )

    currency = final_node.currency if final_node.kind == ValueKind.MONEY else None
    if currency is not None:
        display = f"{format_currency_amount(final_node.value, fixed_decimals=True)}{currency}"
    else:
        display = format_number(final_node.value)

    if sampled is not None:
        result = CurrencyResult(
            mean=sampled.mean,
            min=sampled.min,
            max=sampled.max,
            samples=sampled.samples,
            currency=currency,
            display=display,
        )
    else:
        value = final_node.value
        result = CurrencyResult(
            mean=value, min=value, max=value, samples=None, currency=currency, display=display
        )

    logger.debug(
        "Currency expression reduced in %d steps (currency=%s, sampled=%s)",
        len(steps),
        currency,
        sampled is not None,
    )
    return EvaluationWithSteps(
        is_currency_expression=True, currency=currency, steps=tuple(steps), result=result
    )
