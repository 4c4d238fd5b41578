"""
Contract Validation Module

Модуль для валидации JSON-представлений BigInt / BigComplex.
"""

from .validators import (
    BigComplexValidator,
    BigIntValidator,
    ContractValidator,
    SchemaLoader,
    dump_big_complex,
    dump_big_int,
    load_big_complex,
    load_big_int,
    validate_big_complex,
    validate_big_int,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BigIntValidator",
    "BigComplexValidator",
    # Functions
    "validate_big_int",
    "validate_big_complex",
    "load_big_int",
    "load_big_complex",
    "dump_big_int",
    "dump_big_complex",
]
