"""
Reduction — Пошаговое упрощение currency AST над точными литералами

Каждый шаг reduce_one_layer сворачивает самый глубокий слой узлов,
у которых все дети уже литералы. Результат каждого шага форматируется
для отображения пользователю.

Правила операторов (kind = scalar | money):
- '~':   scalar~scalar → scalar (середина диапазона)
- '+ -': scalar±scalar → scalar; money±money → money в валюте левого
         (правый конвертируется, итог округляется до 2 знаков)
- '*':   scalar*scalar → scalar; money*scalar, scalar*money → money
- '/':   scalar/scalar → scalar; money/scalar → money; money/money → scalar
- '^':   scalar^scalar → scalar; money^scalar → money

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любое money-значение после операции округлено до 2 знаков
2. Деление на 0 даёт NaN, а не исключение
3. Остальные комбинации kind → OperandTypeError
"""

from typing import Optional

from src.core.config import BASE_CURRENCY_TOKEN
from src.core.domain.nodes import (
    UNARY_PRECEDENCE,
    BaseNode,
    BinaryNode,
    CurrencyNode,
    LiteralNode,
    UnaryNode,
    node_precedence,
)
from src.core.domain.values import ValueKind
from src.core.errors import OperandTypeError
from src.core.math.numerical_safeguards import round_money, safe_divide, safe_pow
from src.currency.rates import RateGraph, get_currency_rate
from src.presentation.formatting import format_currency_amount, format_scalar_amount

SCALAR = ValueKind.SCALAR
MONEY = ValueKind.MONEY


# =============================================================================
# LITERAL OPERATIONS
# =============================================================================


def convert_literal_currency(
    literal: LiteralNode, target_currency: str, rates: RateGraph
) -> LiteralNode:
    """
    Конвертация money-литерала в target_currency.

    Raises:
        OperandTypeError: Литерал scalar
        MissingExchangeRateError: Нет пути конвертации
    """
    if literal.kind != MONEY:
        raise OperandTypeError(f"Cannot convert scalar value to {target_currency}")
    target = target_currency.lower()
    if literal.currency == target:
        return LiteralNode.money(literal.value, target)
    rate = get_currency_rate(literal.currency, target, rates)
    return LiteralNode.money(round_money(literal.value * rate), target)


def evaluate_unary_literal(node: UnaryNode) -> LiteralNode:
    """Унарный минус над литералом."""
    if node.operator != "-":
        raise OperandTypeError(f"Unsupported unary operator '{node.operator}'")
    operand = node.operand
    if not isinstance(operand, LiteralNode):
        raise OperandTypeError("Unary operator requires literal operand")
    if operand.kind == MONEY:
        return LiteralNode.money(round_money(-operand.value), operand.currency)
    return LiteralNode.scalar(-operand.value)


def evaluate_binary_literal(node: BinaryNode, rates: RateGraph) -> LiteralNode:
    """
    Бинарная операция над двумя литералами.

    Raises:
        OperandTypeError: Недопустимая комбинация kind или неизвестный оператор
        MissingExchangeRateError: money±money без пути конвертации
    """
    left, right, op = node.left, node.right, node.operator
    if not isinstance(left, LiteralNode) or not isinstance(right, LiteralNode):
        raise OperandTypeError(f"Operator '{op}' requires literal operands")
    kinds = (left.kind, right.kind)

    if op == "~":
        if kinds != (SCALAR, SCALAR):
            raise OperandTypeError("Range operator '~' supports scalar values only")
        return LiteralNode.scalar((left.value + right.value) / 2)

    if op in ("+", "-"):
        sign = 1.0 if op == "+" else -1.0
        if kinds == (SCALAR, SCALAR):
            return LiteralNode.scalar(left.value + sign * right.value)
        if kinds == (MONEY, MONEY):
            converted = convert_literal_currency(right, left.currency, rates)
            return LiteralNode.money(
                round_money(left.value + sign * converted.value), left.currency
            )
        verb = "add" if op == "+" else "subtract"
        raise OperandTypeError(f"Cannot {verb} scalar and currency values")

    if op == "*":
        if kinds == (SCALAR, SCALAR):
            return LiteralNode.scalar(left.value * right.value)
        if kinds == (MONEY, SCALAR):
            return LiteralNode.money(round_money(left.value * right.value), left.currency)
        if kinds == (SCALAR, MONEY):
            return LiteralNode.money(round_money(left.value * right.value), right.currency)
        raise OperandTypeError("Multiplying two currency values is not supported")

    if op == "/":
        quotient = safe_divide(left.value, right.value)
        if kinds == (SCALAR, SCALAR) or kinds == (MONEY, MONEY):
            return LiteralNode.scalar(quotient)
        if kinds == (MONEY, SCALAR):
            return LiteralNode.money(round_money(quotient), left.currency)
        raise OperandTypeError("Cannot divide scalar by a currency value")

    if op == "^":
        power = safe_pow(left.value, right.value)
        if kinds == (SCALAR, SCALAR):
            return LiteralNode.scalar(power)
        if kinds == (MONEY, SCALAR):
            return LiteralNode.money(round_money(power), left.currency)
        raise OperandTypeError("Power is supported for scalar^scalar or money^scalar only")

    raise OperandTypeError(f"Unsupported operator '{op}'")


# =============================================================================
# TREE REDUCTION
# =============================================================================


def reduce_one_layer(node: CurrencyNode, rates: RateGraph) -> tuple[CurrencyNode, bool]:
    """
    Один шаг упрощения.

    Если какой-либо ребёнок изменился — возвращается перестроенный узел
    (сам узел на этом шаге не сворачивается). Иначе, если все дети —
    литералы, узел сворачивается в литерал.

    Returns:
        (новый узел, был ли прогресс)
    """
    if isinstance(node, (LiteralNode, BaseNode)):
        return node, False

    if isinstance(node, UnaryNode):
        operand, changed = reduce_one_layer(node.operand, rates)
        rebuilt = UnaryNode(node.operator, operand)
        if changed:
            return rebuilt, True
        if isinstance(operand, LiteralNode):
            return evaluate_unary_literal(rebuilt), True
        return rebuilt, False

    left, left_changed = reduce_one_layer(node.left, rates)
    right, right_changed = reduce_one_layer(node.right, rates)
    rebuilt = BinaryNode(node.operator, left, right)
    if left_changed or right_changed:
        return rebuilt, True
    if isinstance(left, LiteralNode) and isinstance(right, LiteralNode):
        return evaluate_binary_literal(rebuilt, rates), True
    return rebuilt, False


def replace_base_node(node: CurrencyNode, replacement: CurrencyNode) -> CurrencyNode:
    """Подстановка replacement вместо каждого BaseNode."""
    if isinstance(node, BaseNode):
        return replacement
    if isinstance(node, LiteralNode):
        return node
    if isinstance(node, UnaryNode):
        return UnaryNode(node.operator, replace_base_node(node.operand, replacement))
    return BinaryNode(
        node.operator,
        replace_base_node(node.left, replacement),
        replace_base_node(node.right, replacement),
    )


# =============================================================================
# FORMATTING
# =============================================================================


def format_literal(node: LiteralNode) -> str:
    if node.kind == MONEY:
        return f"{format_currency_amount(node.value)}{node.currency}"
    return format_scalar_amount(node.value)


def format_currency_ast(
    node: CurrencyNode,
    parent_precedence: int = 0,
    is_right_child: bool = False,
    parent_operator: Optional[str] = None,
) -> str:
    """
    Текст AST с минимально необходимыми скобками.

    Examples:
        >>> format_currency_ast(BinaryNode("*", BinaryNode("+", LiteralNode(1), LiteralNode(2)), LiteralNode(3)))
        '(1 + 2) * 3'
    """
    if isinstance(node, LiteralNode):
        return format_literal(node)
    if isinstance(node, BaseNode):
        return BASE_CURRENCY_TOKEN

    precedence = node_precedence(node)

    if isinstance(node, UnaryNode):
        operand_text = format_currency_ast(node.operand, 0, True, node.operator)
        if node_precedence(node.operand) < UNARY_PRECEDENCE:
            operand_text = f"({operand_text})"
        rendered = f"-{operand_text}"
        return f"({rendered})" if precedence < parent_precedence else rendered

    op = node.operator

    left_text = format_currency_ast(node.left, 0, False, op)
    left_precedence = node_precedence(node.left)
    if left_precedence < precedence or (op == "^" and left_precedence == precedence):
        left_text = f"({left_text})"

    right_text = format_currency_ast(node.right, 0, True, op)
    right_precedence = node_precedence(node.right)
    if right_precedence < precedence or (
        right_precedence == precedence and op in ("-", "/", "^")
    ):
        right_text = f"({right_text})"

    rendered = f"{left_text} {op} {right_text}"
    if precedence < parent_precedence or (
        is_right_child and parent_operator == "^" and precedence == parent_precedence
    ):
        rendered = f"({rendered})"
    return rendered
