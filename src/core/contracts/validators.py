"""
JSON Schema Contract Validators

Модуль для валидации данных на границе с внешними коллабораторами
согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- currency_rates.json (вход: курсы валют от вызывающего)
- evaluation_result.json (выход: результат evaluate_expression_with_steps)
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'currency_rates')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика (схемы read-only, кэш безопасен между вызовами)
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class CurrencyRatesValidator(ContractValidator):
    """Валидатор для currency_rates контракта."""

    def __init__(self):
        super().__init__("currency_rates")


class EvaluationResultValidator(ContractValidator):
    """Валидатор для evaluation_result контракта."""

    def __init__(self):
        super().__init__("evaluation_result")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_currency_rates(data: Mapping[str, Mapping[str, float]]) -> None:
    """
    Валидация курсов валют от вызывающего.

    Raises:
        ValidationError: Если структура не object-of-objects положительных чисел
    """
    # jsonschema проверяет "object" через dict, поэтому Mapping приводим явно
    if isinstance(data, Mapping):
        data = {
            key: dict(targets) if isinstance(targets, Mapping) else targets
            for key, targets in data.items()
        }
    CurrencyRatesValidator().validate(data)


def validate_evaluation_result(data: Dict[str, Any]) -> None:
    """
    Валидация результата evaluate_expression_with_steps.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    EvaluationResultValidator().validate(data)
