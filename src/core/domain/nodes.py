"""
AST — Дерево currency-выражения

Закрытый набор узлов: Literal | Base | Unary | Binary.
Узлы immutable; редукция и подстановка base создают новые деревья.

Base — placeholder для tail-выражения после "to <currency>":
при вычислении заменяется уже сконвертированным значением.
"""

from dataclasses import dataclass
from typing import Final, Optional, Union

from src.core.domain.values import ValueKind

# =============================================================================
# PRECEDENCE
# =============================================================================

BINARY_PRECEDENCE: Final[dict[str, int]] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
    "~": 4,
}

UNARY_PRECEDENCE: Final[int] = 5

# Литералы и base никогда не требуют скобок
ATOM_PRECEDENCE: Final[int] = 99


# =============================================================================
# NODES
# =============================================================================


@dataclass(frozen=True)
class LiteralNode:
    """Точное значение: scalar (currency=None) или money."""

    value: float
    currency: Optional[str] = None

    def __post_init__(self) -> None:
        if self.currency is not None:
            object.__setattr__(self, "currency", self.currency.lower())

    @property
    def kind(self) -> ValueKind:
        return ValueKind.MONEY if self.currency is not None else ValueKind.SCALAR

    @classmethod
    def scalar(cls, value: float) -> "LiteralNode":
        return cls(value)

    @classmethod
    def money(cls, value: float, currency: str) -> "LiteralNode":
        return cls(value, currency)


@dataclass(frozen=True)
class BaseNode:
    """Placeholder для значения, вычисленного до "to <currency>"."""


@dataclass(frozen=True)
class UnaryNode:
    operator: str
    operand: "CurrencyNode"


@dataclass(frozen=True)
class BinaryNode:
    operator: str
    left: "CurrencyNode"
    right: "CurrencyNode"


CurrencyNode = Union[LiteralNode, BaseNode, UnaryNode, BinaryNode]


def node_precedence(node: CurrencyNode) -> int:
    """Приоритет узла для расстановки скобок при форматировании."""
    if isinstance(node, UnaryNode):
        return UNARY_PRECEDENCE
    if isinstance(node, BinaryNode):
        return BINARY_PRECEDENCE.get(node.operator, ATOM_PRECEDENCE)
    return ATOM_PRECEDENCE
