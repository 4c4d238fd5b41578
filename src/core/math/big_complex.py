"""
BigComplex — комплексные числа над BigInt (гауссовы целые)

Комплексное число real + imag·i, где обе компоненты — BigInt. Никакого
собственного представления у слоя нет: каждая операция раскладывается в
операции BigInt.

- Арифметика: +, -, *, / (деление через сопряжённое с усекающим делением
  компонент — в общем случае С ПОТЕРЕЙ точности)
- Производные величины: conjugate, magnitude_squared / norm, magnitude,
  distance_to
- Геометрия: arg_quadrant, rotate_90/180/270, from_polar (только 4 оси)
- Приближения: nth_root, ln_approx, exp_approx (ограниченные, см. ниже)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Модель неизменяема (frozen pydantic model)
2. «Чисто вещественное» и «с нулевой мнимой частью» — одно и то же
   представление; is_real / is_imaginary вычисляются, а не хранятся
3. Деление на нулевое комплексное число → DivisionByZero (перехватываемое)

ИЗВЕСТНЫЕ ОГРАНИЧЕНИЯ (поведение зафиксировано и не обобщается):
- nth_root решает только n=0, n=1, нулевой вход и n=2 для вещественных;
  во всех остальных случаях возвращает заглушку [1 + 0i], которая НЕ является
  корнем
- ln_approx для положительных вещественных считает число делений пополам до
  значения <= 1 (это ~log2, а не натуральный логарифм); для остальных
  ненулевых входов возвращает заглушку 0 + 1i
- exp_approx суммирует не более EXP_APPROX_MAX_TERMS членов целочисленного
  ряда Тейлора для вещественных; для невещественных — заглушка 1 + 1i
"""

import logging
from typing import Any, Final, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from src.core.math.big_int import BigInt
from src.core.math.errors import DivisionByZero, NegativeExponentError

logger = logging.getLogger(__name__)


# =============================================================================
# ПАРАМЕТРЫ ПРИБЛИЖЕНИЙ
# =============================================================================

# Максимальное число членов ряда Тейлора в exp_approx
EXP_APPROX_MAX_TERMS: Final[int] = 10

# Коды углов from_polar: 0 → 0°, 1 → 90°, 2 → 180°, 3 → 270° (по модулю 4)
POLAR_ANGLE_CODES: Final[int] = 4


Scalar = Union[BigInt, int]


# =============================================================================
# BIGCOMPLEX MODEL
# =============================================================================


class BigComplex(BaseModel):
    """
    Неизменяемое комплексное число с компонентами BigInt.

    Допускает позиционное и именованное конструирование; компоненты
    принимаются как BigInt, native int, десятичная строка или payload dict
    контракта big_int.

    Examples:
        >>> z = BigComplex(3, 4)
        >>> str(z), str(z.conjugate()), str(z.rotate_90())
        ('3+4i', '3-4i', '-4+3i')
        >>> BigComplex(1, 1).pow(4) == BigComplex(-4, 0)
        True
    """

    real: BigInt = Field(default_factory=BigInt.zero, description="Вещественная часть")
    imag: BigInt = Field(default_factory=BigInt.zero, description="Мнимая часть")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, real: Any = 0, imag: Any = 0) -> None:
        super().__init__(real=real, imag=imag)

    @field_validator("real", "imag", mode="before")
    @classmethod
    def coerce_component(cls, v: Any) -> Any:
        """Приведение компоненты к BigInt (int / str / payload dict)."""
        if isinstance(v, BigInt):
            return v
        if isinstance(v, bool):
            raise ValueError("bool is not a valid complex component")
        if isinstance(v, int):
            return BigInt(v)
        if isinstance(v, str):
            parsed = BigInt.parse(v)
            if parsed is None:
                raise ValueError(f"invalid decimal component: {v!r}")
            return parsed
        if isinstance(v, dict):
            return BigInt.from_payload(v)
        return v

    @field_serializer("real", "imag")
    def serialize_component(self, v: BigInt) -> dict[str, str]:
        return v.to_payload()

    @classmethod
    def _of(cls, real: BigInt, imag: BigInt) -> "BigComplex":
        """Сборка из готовых BigInt без повторной валидации."""
        return cls.model_construct(real=real, imag=imag)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_ints(cls, real: int, imag: int) -> "BigComplex":
        return cls._of(BigInt(real), BigInt(imag))

    @classmethod
    def zero(cls) -> "BigComplex":
        return cls._of(BigInt.zero(), BigInt.zero())

    @classmethod
    def one(cls) -> "BigComplex":
        return cls._of(BigInt.one(), BigInt.zero())

    @classmethod
    def i(cls) -> "BigComplex":
        return cls._of(BigInt.zero(), BigInt.one())

    @classmethod
    def from_polar(cls, r: Scalar, theta_code: int) -> "BigComplex":
        """
        Полярная форма только для осевых углов.

        Args:
            r: Модуль
            theta_code: Код угла (берётся по модулю 4): 0=0°, 1=90°, 2=180°, 3=270°

        Examples:
            >>> str(BigComplex.from_polar(BigInt(5), 1))
            '5i'
            >>> str(BigComplex.from_polar(BigInt(5), 6))
            '-5'
        """
        r = _to_big_int(r)
        code = theta_code % POLAR_ANGLE_CODES
        if code == 0:
            return cls._of(r, BigInt.zero())
        if code == 1:
            return cls._of(BigInt.zero(), r)
        if code == 2:
            return cls._of(-r, BigInt.zero())
        return cls._of(BigInt.zero(), -r)

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.real.is_zero() and self.imag.is_zero()

    def is_real(self) -> bool:
        return self.imag.is_zero()

    def is_imaginary(self) -> bool:
        return self.real.is_zero()

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "BigComplex":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return BigComplex._of(self.real + other.real, self.imag + other.imag)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "BigComplex":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return BigComplex._of(self.real - other.real, self.imag - other.imag)

    def __rsub__(self, other: Any) -> "BigComplex":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __mul__(self, other: Any) -> "BigComplex":
        """(a+bi)(c+di) = (ac - bd) + (ad + bc)i"""
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        a, b = self.real, self.imag
        c, d = other.real, other.imag
        return BigComplex._of(a * c - b * d, a * d + b * c)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> "BigComplex":
        """
        Деление через сопряжённое:

            (a+bi)/(c+di) = ((ac + bd) + (bc - ad)i) / (c² + d²)

        Обе компоненты делятся на c² + d² усекающим делением BigInt, поэтому
        результат в общем случае приближённый.

        Raises:
            DivisionByZero: Если делитель — нулевое комплексное число
        """
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented

        a, b = self.real, self.imag
        c, d = other.real, other.imag
        denominator = c * c + d * d
        if denominator.is_zero():
            raise DivisionByZero("division by zero complex number")

        return BigComplex._of((a * c + b * d) // denominator, (b * c - a * d) // denominator)

    def __rtruediv__(self, other: Any) -> "BigComplex":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other / self

    def __neg__(self) -> "BigComplex":
        return BigComplex._of(-self.real, -self.imag)

    def __pos__(self) -> "BigComplex":
        return self

    def __pow__(self, exponent: Scalar) -> "BigComplex":
        return self.pow(exponent)

    def pow(self, exponent: Scalar) -> "BigComplex":
        """
        Возведение в неотрицательную степень (exponentiation by squaring).

        pow(0) == 1 + 0i.

        Raises:
            NegativeExponentError: Если exponent < 0
        """
        exponent = _to_big_int(exponent)
        if exponent.is_negative():
            raise NegativeExponentError(f"exponent must be non-negative, got {exponent}")

        result = BigComplex.one()
        base = self
        remaining = exponent
        while not remaining.is_zero():
            remaining, bit = remaining.divmod(2)
            if not bit.is_zero():
                result = result * base
            if not remaining.is_zero():
                base = base * base
        return result

    # -------------------------------------------------------------------------
    # Покомпонентные операции
    # -------------------------------------------------------------------------

    def scale(self, factor: Scalar) -> "BigComplex":
        factor = _to_big_int(factor)
        return BigComplex._of(self.real * factor, self.imag * factor)

    def add_real(self, value: Scalar) -> "BigComplex":
        return BigComplex._of(self.real + _to_big_int(value), self.imag)

    def add_imag(self, value: Scalar) -> "BigComplex":
        return BigComplex._of(self.real, self.imag + _to_big_int(value))

    def div_exact(self, divisor: Scalar) -> Optional["BigComplex"]:
        """
        Точное покомпонентное деление на целое.

        В отличие от оператора `/`, не теряет точность: если хотя бы одна
        компонента не делится нацело (или divisor == 0), возвращает None.
        """
        divisor = _to_big_int(divisor)
        if divisor.is_zero():
            return None

        real_q, real_r = self.real.divmod(divisor)
        imag_q, imag_r = self.imag.divmod(divisor)
        if not real_r.is_zero() or not imag_r.is_zero():
            return None
        return BigComplex._of(real_q, imag_q)

    # -------------------------------------------------------------------------
    # Производные величины
    # -------------------------------------------------------------------------

    def conjugate(self) -> "BigComplex":
        return BigComplex._of(self.real, -self.imag)

    def magnitude_squared(self) -> BigInt:
        """real² + imag² (точно)."""
        return self.real * self.real + self.imag * self.imag

    def norm(self) -> BigInt:
        return self.magnitude_squared()

    def magnitude(self) -> BigInt:
        """floor(sqrt(real² + imag²)); точно для пифагоровых троек."""
        root = self.magnitude_squared().isqrt()
        return root if root is not None else BigInt.zero()

    def distance_to(self, other: "BigComplex") -> BigInt:
        """Квадрат евклидова расстояния |self - other|²."""
        return (self - _require(other)).magnitude_squared()

    # -------------------------------------------------------------------------
    # Геометрия
    # -------------------------------------------------------------------------

    def arg_quadrant(self) -> Optional[int]:
        """
        Квадрант по знакам (real > 0, imag > 0).

        (+,+) → 0, (-,+) → 1, (-,-) → 2, (+,-) → 3; ноль → None.
        Нулевая компонента считается «не положительной»: точки на осях
        попадают в квадрант 1 (+imag), 2 (-real, -imag) или 3 (+real).
        """
        if self.is_zero():
            return None

        real_positive = self.real.is_positive()
        imag_positive = self.imag.is_positive()
        if real_positive and imag_positive:
            return 0
        if imag_positive:
            return 1
        if real_positive:
            return 3
        return 2

    def rotate_90(self) -> "BigComplex":
        """Умножение на i: (a+bi)·i = -b + ai"""
        return BigComplex._of(-self.imag, self.real)

    def rotate_180(self) -> "BigComplex":
        """Умножение на -1: -a - bi"""
        return BigComplex._of(-self.real, -self.imag)

    def rotate_270(self) -> "BigComplex":
        """Умножение на -i: (a+bi)·(-i) = b - ai"""
        return BigComplex._of(self.imag, -self.real)

    # -------------------------------------------------------------------------
    # Приближённые функции
    # -------------------------------------------------------------------------

    def nth_root(self, n: int) -> list["BigComplex"]:
        """
        Корни n-й степени (ограниченная реализация).

        - n == 0 → []
        - self == 0 → [0]
        - n == 1 → [self]
        - n == 2, self > 0 вещественное → [isqrt(self), -isqrt(self)]
        - n == 2, self < 0 вещественное → [isqrt(|self|)·i, -isqrt(|self|)·i]
        - иначе → [1 + 0i] (заглушка, НЕ корень)

        Для вещественных, не являющихся точными квадратами, используется
        floor(sqrt), т.е. корни приближённые.
        """
        if n == 0:
            return []
        if self.is_zero():
            return [BigComplex.zero()]
        if n == 1:
            return [self]

        if n == 2 and self.is_real():
            root = self.real.abs().isqrt()
            if self.real.is_positive():
                return [BigComplex._of(root, BigInt.zero()), BigComplex._of(-root, BigInt.zero())]
            return [BigComplex._of(BigInt.zero(), root), BigComplex._of(BigInt.zero(), -root)]

        logger.debug("nth_root(%d) of %s has no exact solver, returning placeholder", n, self)
        return [BigComplex.one()]

    def ln_approx(self) -> Optional["BigComplex"]:
        """
        Грубое целочисленное «логарифмическое» приближение.

        - 0 → None
        - 1 → 0
        - положительное вещественное x → количество делений пополам до x <= 1
          (≈ log2, не натуральный логарифм)
        - всё остальное → 0 + 1i (заглушка)
        """
        if self.is_zero():
            return None

        if self.is_real() and self.real.is_positive():
            if self.real == BigInt.one():
                return BigComplex.zero()

            steps = 0
            value = self.real
            while value > BigInt.one():
                value = value // 2
                steps += 1
            return BigComplex._of(BigInt(steps), BigInt.zero())

        logger.debug("ln_approx of %s is outside the positive reals, returning placeholder", self)
        return BigComplex.i()

    def exp_approx(self, max_terms: int = EXP_APPROX_MAX_TERMS) -> "BigComplex":
        """
        Усечённый целочисленный ряд Тейлора для e**x.

        term_k = term_{k-1} * x / k (деление усекающее), сумма 1 + Σ term_k.
        Останавливается после max_terms членов или как только
        |term|² < 1 (член обнулился).

        - 0 → 1 + 0i
        - невещественный вход → 1 + 1i (заглушка)

        Examples:
            >>> str(BigComplex(2, 0).exp_approx())  # 1 + 2 + 2 + 1 + 0
            '6'
        """
        if self.is_zero():
            return BigComplex.one()

        if not self.is_real():
            logger.debug("exp_approx of non-real %s, returning placeholder", self)
            return BigComplex._of(BigInt.one(), BigInt.one())

        result = BigComplex.one()
        term = BigComplex.one()
        for k in range(1, max_terms + 1):
            term = term * self / BigComplex.from_ints(k, 0)
            result = result + term
            if term.magnitude_squared() < BigInt.one():
                break
        return result

    # -------------------------------------------------------------------------
    # Отображение
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """
        Каноническая текстовая форма:
            0, 7, -7, i, -i, 5i, -5i, 3+4i, 3-4i
        """
        if self.is_zero():
            return "0"
        if self.is_real():
            return str(self.real)
        if self.is_imaginary():
            if self.imag == BigInt.one():
                return "i"
            if self.imag == -BigInt.one():
                return "-i"
            return f"{self.imag}i"

        sign = "+" if self.imag.is_positive() else ""
        return f"{self.real}{sign}{self.imag}i"

    def __repr__(self) -> str:
        return f"BigComplex({self.real}, {self.imag})"


# =============================================================================
# HELPERS
# =============================================================================


def _to_big_int(value: Any) -> BigInt:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt(value)
    raise TypeError(f"expected BigInt or int, got {type(value).__name__}")


def _coerce(value: Any):
    """BigComplex как есть; BigInt / int трактуются как вещественные числа."""
    if isinstance(value, BigComplex):
        return value
    if isinstance(value, BigInt) or (isinstance(value, int) and not isinstance(value, bool)):
        return BigComplex._of(_to_big_int(value), BigInt.zero())
    return NotImplemented


def _require(value: Any) -> BigComplex:
    result = _coerce(value)
    if result is NotImplemented:
        raise TypeError(f"expected BigComplex, got {type(value).__name__}")
    return result
