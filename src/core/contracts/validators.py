"""
JSON Schema Contract Validators

Модуль для валидации JSON-представлений BigInt и BigComplex согласно
формальным JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы:
- big_int.json      {"sign": ..., "magnitude_hex": ...}
- big_complex.json  {"real": <big_int>, "imag": <big_int>}

Каноничность (ноль ⇔ пустой hex, нет ведущего байта 00) проверяется на
уровне схемы, поэтому load_* гарантированно строят каноническое значение.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from src.core.math.big_complex import BigComplex
from src.core.math.big_int import BigInt


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта — 4 уровня вверх от этого файла
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла (с кэшированием).

        Args:
            schema_name: Имя схемы без расширения (например, 'big_int')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


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

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации (ValidationError)."""
        return self.validator.iter_errors(data)


class BigIntValidator(ContractValidator):
    """Валидатор для big_int контракта."""

    def __init__(self):
        super().__init__("big_int")


class BigComplexValidator(ContractValidator):
    """Валидатор для big_complex контракта."""

    def __init__(self):
        super().__init__("big_complex")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_big_int(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют big_int.json
    """
    BigIntValidator().validate(data)


def validate_big_complex(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют big_complex.json
    """
    BigComplexValidator().validate(data)


def load_big_int(data: Dict[str, Any]) -> BigInt:
    """
    Валидация payload и построение BigInt.

    Raises:
        ValidationError: Если payload не соответствует контракту
    """
    validate_big_int(data)
    return BigInt.from_payload(data)


def load_big_complex(data: Dict[str, Any]) -> BigComplex:
    """
    Валидация payload и построение BigComplex через pydantic model_validate.

    Raises:
        ValidationError: Если payload не соответствует контракту
    """
    validate_big_complex(data)
    return BigComplex.model_validate(data)


def dump_big_int(value: BigInt) -> Dict[str, str]:
    """Сериализация BigInt в payload с проверкой по контракту."""
    payload = value.to_payload()
    validate_big_int(payload)
    return payload


def dump_big_complex(value: BigComplex) -> Dict[str, Any]:
    """Сериализация BigComplex (pydantic model_dump) с проверкой по контракту."""
    payload = value.model_dump(mode="json")
    validate_big_complex(payload)
    return payload
