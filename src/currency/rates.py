"""
Rates — Граф курсов валют и поиск пути конвертации

rates[from][to] = сколько единиц `to` стоит одна единица `from`.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ключи графа всегда lowercase
2. Граф симметричен: для каждого rates[a][b] есть rates[b][a] = 1 / rates[a][b]
3. Пользовательские курсы перекрывают встроенные
4. Курс валюты к самой себе всегда 1
"""

import logging
import math
from collections import deque
from typing import Mapping, Optional

from src.core.config import DEFAULT_CURRENCY_RATES
from src.core.contracts.validators import validate_currency_rates
from src.core.errors import MissingExchangeRateError

logger = logging.getLogger(__name__)

RateGraph = dict[str, dict[str, float]]


# =============================================================================
# GRAPH CONSTRUCTION
# =============================================================================


def _add_rates(graph: RateGraph, rates: Mapping[str, Mapping[str, float]]) -> None:
    for from_currency, targets in rates.items():
        row = graph.setdefault(from_currency.lower(), {})
        for to_currency, rate in targets.items():
            if not math.isfinite(rate) or rate <= 0:
                logger.debug("Skipping rate %s->%s: %r", from_currency, to_currency, rate)
                continue
            row[to_currency.lower()] = float(rate)


def build_rate_graph(
    custom_rates: Optional[Mapping[str, Mapping[str, float]]] = None,
) -> RateGraph:
    """
    Сборка графа курсов: встроенные + пользовательские + обратные рёбра.

    Args:
        custom_rates: Курсы от вызывающего (перекрывают встроенные)

    Returns:
        Симметричный граф с lowercase ключами

    Raises:
        jsonschema.ValidationError: custom_rates не object-of-objects
            положительных чисел

    Examples:
        >>> graph = build_rate_graph({"USD": {"PLN": 4.0}})
        >>> graph["pln"]["usd"]
        0.25
    """
    graph: RateGraph = {}
    _add_rates(graph, DEFAULT_CURRENCY_RATES)
    if custom_rates:
        validate_currency_rates(custom_rates)
        _add_rates(graph, custom_rates)

    # Обратные рёбра; прямые (заданные явно) уже есть в графе
    for from_currency, targets in list(graph.items()):
        for to_currency, rate in list(targets.items()):
            graph.setdefault(to_currency, {})[from_currency] = 1.0 / rate

    return graph


# =============================================================================
# RATE LOOKUP
# =============================================================================


def get_currency_rate(from_currency: str, to_currency: str, rates: RateGraph) -> float:
    """
    Курс from → to.

    Порядок поиска: совпадение валют → прямое ребро → обратное ребро →
    BFS по графу с перемножением курсов (первый найденный путь).

    Raises:
        MissingExchangeRateError: Путь не найден
    """
    source = from_currency.lower()
    target = to_currency.lower()
    if source == target:
        return 1.0

    direct = rates.get(source, {}).get(target)
    if direct is not None:
        logger.debug("Resolved %s->%s via direct rate", source, target)
        return direct

    reverse = rates.get(target, {}).get(source)
    if reverse is not None:
        logger.debug("Resolved %s->%s via reciprocal rate", source, target)
        return 1.0 / reverse

    visited = {source}
    queue: deque[tuple[str, float]] = deque([(source, 1.0)])
    while queue:
        currency, cumulative = queue.popleft()
        for neighbor, rate in rates.get(currency, {}).items():
            if neighbor in visited:
                continue
            if neighbor == target:
                logger.debug("Resolved %s->%s via path search", source, target)
                return cumulative * rate
            visited.add(neighbor)
            queue.append((neighbor, cumulative * rate))

    raise MissingExchangeRateError(from_currency, to_currency)
