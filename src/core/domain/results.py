"""
Results — Модели результатов для вызывающих слоёв (UI/CLI)

Immutable Pydantic модели. Соответствуют схеме evaluation_result.json.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from src.core.domain.values import UncertainValue


# =============================================================================
# CURRENCY RESULT
# =============================================================================


class CurrencyResult(UncertainValue):
    """
    Итог currency-выражения.

    mean/min/max/samples берутся из uncertainty-прохода (если был '~'),
    иначе из точной редукции; display — всегда из точной редукции.
    """

    currency: Optional[str] = Field(
        default=None, description="Lowercase код валюты или None для scalar"
    )
    display: str = Field(..., description="'<amount><currency>' или число")

    @field_validator("currency")
    @classmethod
    def validate_currency_lowercase(cls, v: Optional[str]) -> Optional[str]:
        """Код валюты хранится в lowercase."""
        if v is not None and v != v.lower():
            raise ValueError(f"currency must be lowercase, got {v!r}")
        return v


# =============================================================================
# EVALUATION WITH STEPS
# =============================================================================


class EvaluationWithSteps(BaseModel):
    """
    Ответ evaluate_expression_with_steps.

    Для plain-выражений: is_currency_expression=False, currency=None, steps=[].
    result=None для пустого выражения.
    """

    is_currency_expression: bool = Field(..., description="Был ли выбран currency pipeline")
    currency: Optional[str] = Field(default=None, description="Валюта итога")
    steps: tuple[str, ...] = Field(default=(), description="Шаги упрощения для отображения")
    result: Union[CurrencyResult, UncertainValue, None] = Field(
        default=None, description="Итоговое значение"
    )

    model_config = {"frozen": True}

    def to_contract(self) -> dict[str, Any]:
        """
        Словарь для проверки по evaluation_result.json.

        Tuples разворачиваются в lists (JSON array), NaN/Inf остаются float.
        """
        data = self.model_dump(mode="python")
        data["steps"] = list(data["steps"])
        result = data["result"]
        if result is not None and result["samples"] is not None:
            result["samples"] = list(result["samples"])
        return data


# =============================================================================
# QUANTILES
# =============================================================================


class Quantiles(BaseModel):
    """5-й и 95-й перцентили выборки (NaN, если валидных сэмплов нет)."""

    p05: float
    p95: float

    model_config = {"frozen": True}
