"""
Core math modules

Точная целочисленная арифметика произвольной точности и комплексный слой
над ней. Все значения неизменяемы и безопасны для разделения между потоками.
"""

# Magnitude — цифровые векторы (представление модуля)
from src.core.math.magnitude import (
    DECIMAL_CHUNK_DIGITS,
    DIGIT_BASE,
    DIGIT_SHIFT,
    KARATSUBA_CUTOFF,
)

# Errors
from src.core.math.errors import (
    BigNumError,
    DivisionByZero,
    NegativeExponentError,
)

# Integer Engine
from src.core.math.big_int import BigInt, Sign

# Complex Layer
from src.core.math.big_complex import (
    EXP_APPROX_MAX_TERMS,
    POLAR_ANGLE_CODES,
    BigComplex,
)

__all__ = [
    # Magnitude — Constants
    "DECIMAL_CHUNK_DIGITS",
    "DIGIT_BASE",
    "DIGIT_SHIFT",
    "KARATSUBA_CUTOFF",
    # Errors
    "BigNumError",
    "DivisionByZero",
    "NegativeExponentError",
    # Integer Engine
    "BigInt",
    "Sign",
    # Complex Layer — Constants
    "EXP_APPROX_MAX_TERMS",
    "POLAR_ANGLE_CODES",
    # Complex Layer — Types
    "BigComplex",
]
