"""
BigInt — целое число произвольной точности (sign-magnitude)

Модуль реализует неизменяемое целое произвольной точности поверх
самостоятельного цифрового представления (src.core.math.magnitude):
- Конструирование из native int, десятичной строки, (sign, big-endian bytes)
- Арифметика: +, -, *, усекающее деление и остаток, возведение в степень
- Полный порядок и точное равенство
- Теория чисел: isqrt, gcd/lcm, mod_pow, mod_inv, factorial, is_prime, next_prime
- Битовые операции над модулем: bit_length, count_ones, trailing_zeros,
  is_power_of_two, next_power_of_two

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ноль имеет единственное представление: Sign.ZERO и пустой модуль
2. Ненулевое значение имеет канонический модуль без старших нулевых цифр
3. Равенство значений == равенство представлений
4. Значения неизменяемы: каждая операция возвращает новый BigInt
5. Деление усекающее: q округляется к нулю, остаток имеет знак делимого,
   dividend == divisor * q + r для любого divisor != 0

ВАЖНО: `/`, `//` и `%` используют усекающую семантику (как C/Rust), а не
floor-семантику встроенного int: BigInt(-7) // 2 == -3, BigInt(-7) % 2 == -1.

Тест простоты (is_prime) — детерминированное пробное деление O(sqrt(n)).
Это осознанное ограничение: результат точен для любых входов, но метод
непригоден для чисел криптографического масштаба.
"""

import logging
from enum import Enum
from typing import Optional, Union

from src.core.math import magnitude
from src.core.math.errors import DivisionByZero, NegativeExponentError

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class Sign(str, Enum):
    """Знак целого числа"""

    NEGATIVE = "negative"
    ZERO = "zero"
    POSITIVE = "positive"


_SIGN_RANK = {Sign.NEGATIVE: -1, Sign.ZERO: 0, Sign.POSITIVE: 1}


def _flip(sign: Sign) -> Sign:
    if sign is Sign.POSITIVE:
        return Sign.NEGATIVE
    if sign is Sign.NEGATIVE:
        return Sign.POSITIVE
    return Sign.ZERO


# =============================================================================
# BIGINT
# =============================================================================


IntLike = Union["BigInt", int]


class BigInt:
    """
    Неизменяемое целое произвольной точности.

    Examples:
        >>> a = BigInt.parse("123456789012345678901234567890")
        >>> str(a + BigInt(987654321))
        '123456789012345679888888889211'
        >>> BigInt(10).factorial() == BigInt(3628800)
        True
        >>> BigInt(-7) // BigInt(2), BigInt(-7) % BigInt(2)
        (BigInt(-3), BigInt(-1))
    """

    __slots__ = ("_sign", "_digits")

    _sign: Sign
    _digits: magnitude.Digits

    def __init__(self, value: int = 0) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"BigInt expects a native int, got {type(value).__name__}")

        if value == 0:
            sign = Sign.ZERO
        elif value < 0:
            sign = Sign.NEGATIVE
        else:
            sign = Sign.POSITIVE
        object.__setattr__(self, "_sign", sign)
        object.__setattr__(self, "_digits", magnitude.from_native(abs(value)))

    @classmethod
    def _make(cls, sign: Sign, digits: magnitude.Digits) -> "BigInt":
        """Сборка из уже канонического модуля; пустой модуль всегда даёт ноль."""
        obj = object.__new__(cls)
        object.__setattr__(obj, "_sign", sign if digits else Sign.ZERO)
        object.__setattr__(obj, "_digits", digits)
        return obj

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("BigInt is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("BigInt is immutable")

    def __reduce__(self):
        return (BigInt.parse_or_raise, (str(self),))

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "BigInt":
        return _ZERO

    @classmethod
    def one(cls) -> "BigInt":
        return _ONE

    @classmethod
    def parse(cls, text: str) -> Optional["BigInt"]:
        """
        Разбор десятичной строки.

        Допускается необязательный ведущий '-', далее только цифры 0-9.
        Пустая строка, одиночный '-' и любые другие символы (включая '+',
        пробелы и '_') дают None.

        Examples:
            >>> BigInt.parse("-0042")
            BigInt(-42)
            >>> BigInt.parse("12a") is None
            True
        """
        if not isinstance(text, str):
            return None

        negative = text.startswith("-")
        body = text[1:] if negative else text
        # str.isdigit() пропускает не-ASCII цифры, поэтому проверяем явно
        if not body or any(ch not in "0123456789" for ch in body):
            return None

        digits = magnitude.from_decimal(body)
        return cls._make(Sign.NEGATIVE if negative else Sign.POSITIVE, digits)

    from_string = parse

    @classmethod
    def parse_or_raise(cls, text: str) -> "BigInt":
        """
        Разбор десятичной строки с исключением вместо None.

        Raises:
            ValueError: Если строка не является корректной десятичной записью
        """
        value = cls.parse(text)
        if value is None:
            raise ValueError(f"invalid decimal integer literal: {text!r}")
        return value

    @classmethod
    def from_bytes_be(cls, sign: Sign, data: bytes) -> "BigInt":
        """
        Импорт модуля из big-endian буфера с явным знаком.

        Sign.ZERO или нулевой модуль всегда дают канонический ноль.
        """
        sign = Sign(sign)
        if sign is Sign.ZERO:
            return _ZERO
        return cls._make(sign, magnitude.from_bytes_be(bytes(data)))

    @classmethod
    def from_payload(cls, payload: dict) -> "BigInt":
        """
        Обратная конверсия to_payload().

        Raises:
            ValueError: Если знак неизвестен, hex некорректен или payload
                не каноничен (ноль с непустым модулем, ведущий байт 00)
        """
        try:
            sign = Sign(payload["sign"])
            data = bytes.fromhex(payload["magnitude_hex"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed BigInt payload: {payload!r}") from e

        if (sign is Sign.ZERO) != (len(data) == 0):
            raise ValueError(f"sign {sign.value!r} does not match magnitude in payload")
        if data[:1] == b"\x00":
            raise ValueError("magnitude_hex must not carry leading zero bytes")
        return cls.from_bytes_be(sign, data)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> Sign:
        return self._sign

    def is_zero(self) -> bool:
        return self._sign is Sign.ZERO

    def is_positive(self) -> bool:
        return self._sign is Sign.POSITIVE

    def is_negative(self) -> bool:
        return self._sign is Sign.NEGATIVE

    def abs(self) -> "BigInt":
        if self._sign is Sign.NEGATIVE:
            return BigInt._make(Sign.POSITIVE, self._digits)
        return self

    def to_bytes_be(self) -> tuple[Sign, bytes]:
        """
        Экспорт (sign, big-endian bytes) без ведущих нулевых байт.

        Round-trip: BigInt.from_bytes_be(*x.to_bytes_be()) == x
        """
        return self._sign, magnitude.to_bytes_be(self._digits)

    def to_payload(self) -> dict[str, str]:
        """JSON-совместимое представление (контракт big_int.json)."""
        sign, data = self.to_bytes_be()
        return {"sign": sign.value, "magnitude_hex": data.hex()}

    def to_int(self) -> int:
        value = magnitude.to_native(self._digits)
        return -value if self._sign is Sign.NEGATIVE else value

    __int__ = to_int

    def __bool__(self) -> bool:
        return self._sign is not Sign.ZERO

    def __str__(self) -> str:
        text = magnitude.to_decimal(self._digits)
        return "-" + text if self._sign is Sign.NEGATIVE else text

    def __repr__(self) -> str:
        return f"BigInt({self})"

    def __hash__(self) -> int:
        # Совпадает с hash(int), т.к. BigInt(n) == n
        return hash(self.to_int())

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def _cmp(self, other: "BigInt") -> int:
        rank_a = _SIGN_RANK[self._sign]
        rank_b = _SIGN_RANK[other._sign]
        if rank_a != rank_b:
            return -1 if rank_a < rank_b else 1
        result = magnitude.compare(self._digits, other._digits)
        return -result if self._sign is Sign.NEGATIVE else result

    def __eq__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._sign is other._sign and self._digits == other._digits

    def __lt__(self, other: IntLike) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._cmp(other) < 0

    def __le__(self, other: IntLike) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._cmp(other) <= 0

    def __gt__(self, other: IntLike) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._cmp(other) > 0

    def __ge__(self, other: IntLike) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._cmp(other) >= 0

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __neg__(self) -> "BigInt":
        return BigInt._make(_flip(self._sign), self._digits)

    def __pos__(self) -> "BigInt":
        return self

    def __abs__(self) -> "BigInt":
        return self.abs()

    def __add__(self, other: IntLike) -> "BigInt":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented

        if other._sign is Sign.ZERO:
            return self
        if self._sign is Sign.ZERO:
            return other
        if self._sign is other._sign:
            return BigInt._make(self._sign, magnitude.add(self._digits, other._digits))

        # Разные знаки: вычитаем меньший модуль из большего
        order = magnitude.compare(self._digits, other._digits)
        if order == 0:
            return _ZERO
        if order > 0:
            return BigInt._make(self._sign, magnitude.sub(self._digits, other._digits))
        return BigInt._make(other._sign, magnitude.sub(other._digits, self._digits))

    __radd__ = __add__

    def __sub__(self, other: IntLike) -> "BigInt":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: int) -> "BigInt":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __mul__(self, other: IntLike) -> "BigInt":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented

        if self._sign is Sign.ZERO or other._sign is Sign.ZERO:
            return _ZERO
        sign = Sign.POSITIVE if self._sign is other._sign else Sign.NEGATIVE
        return BigInt._make(sign, magnitude.mul(self._digits, other._digits))

    __rmul__ = __mul__

    def divmod(self, other: IntLike) -> tuple["BigInt", "BigInt"]:
        """
        Усекающее деление с остатком.

        Returns:
            (quotient, remainder): quotient округлён к нулю, remainder имеет
            знак делимого (или равен нулю); self == other * q + r

        Raises:
            DivisionByZero: Если other == 0
        """
        other = _coerce(other)
        if other is NotImplemented:
            raise TypeError(f"unsupported divisor type: {type(other).__name__}")
        if other._sign is Sign.ZERO:
            raise DivisionByZero("integer division or remainder by zero")

        q_digits, r_digits = magnitude.divmod_digits(self._digits, other._digits)
        q_sign = Sign.POSITIVE if self._sign is other._sign else Sign.NEGATIVE
        return BigInt._make(q_sign, q_digits), BigInt._make(self._sign, r_digits)

    def __divmod__(self, other: IntLike) -> tuple["BigInt", "BigInt"]:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.divmod(other)

    def __rdivmod__(self, other: int) -> tuple["BigInt", "BigInt"]:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divmod(self)

    def __floordiv__(self, other: IntLike) -> "BigInt":
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.divmod(other)[0]

    __truediv__ = __floordiv__

    def __rfloordiv__(self, other: int) -> "BigInt":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divmod(self)[0]

    __rtruediv__ = __rfloordiv__

    def __mod__(self, other: IntLike) -> "BigInt":
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.divmod(other)[1]

    def __rmod__(self, other: int) -> "BigInt":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divmod(self)[1]

    def __pow__(self, exponent: IntLike, modulus: Optional[IntLike] = None) -> "BigInt":
        if modulus is not None:
            return self.mod_pow(exponent, modulus)
        return self.pow(exponent)

    # -------------------------------------------------------------------------
    # Степени и корни
    # -------------------------------------------------------------------------

    def pow(self, exponent: IntLike) -> "BigInt":
        """
        Возведение в неотрицательную степень (exponentiation by squaring).

        O(log exponent) умножений. pow(0) == 1 для любого основания, включая 0.

        Raises:
            NegativeExponentError: Если exponent < 0
        """
        exponent = _require(exponent, "exponent")
        if exponent.is_negative():
            raise NegativeExponentError(f"exponent must be non-negative, got {exponent}")

        result = _ONE
        base = self
        bits = list(magnitude.iter_bits(exponent._digits))
        for index, bit in enumerate(bits):
            if bit:
                result = result * base
            if index + 1 < len(bits):
                base = base * base
        return result

    def isqrt(self) -> Optional["BigInt"]:
        """
        Целочисленный квадратный корень floor(sqrt(self)).

        Бинарный поиск на [0, self]: инвариант low <= floor(sqrt) <= high.
        При точном совпадении mid*mid == self возвращается mid, иначе high.

        Returns:
            r такое, что r*r <= self < (r+1)*(r+1); None для отрицательного self

        Examples:
            >>> BigInt(144).isqrt(), BigInt(145).isqrt()
            (BigInt(12), BigInt(12))
            >>> BigInt(-4).isqrt() is None
            True
        """
        if self.is_negative():
            return None

        low = _ZERO
        high = self
        while low <= high:
            # low и high неотрицательны, поэтому усечение совпадает с floor
            mid = BigInt._make(Sign.POSITIVE, magnitude.halve((low + high)._digits))
            square = mid * mid
            order = square._cmp(self)
            if order == 0:
                return mid
            if order < 0:
                low = mid + _ONE
            else:
                high = mid - _ONE
        return high

    sqrt = isqrt

    # -------------------------------------------------------------------------
    # Теория чисел
    # -------------------------------------------------------------------------

    def gcd(self, other: IntLike) -> "BigInt":
        """
        Наибольший общий делитель (алгоритм Евклида), всегда >= 0.

        gcd(0, 0) == 0.
        """
        a = self.abs()
        b = _require(other, "other").abs()
        while not b.is_zero():
            a, b = b, a % b
        return a

    def lcm(self, other: IntLike) -> "BigInt":
        """
        Наименьшее общее кратное, всегда >= 0; lcm(a, 0) == 0.

        Для ненулевых a, b: gcd(a, b) * lcm(a, b) == abs(a * b).
        """
        other = _require(other, "other")
        if self.is_zero() or other.is_zero():
            return _ZERO
        return (self.abs() // self.gcd(other)) * other.abs()

    def _mod_floor(self, modulus: "BigInt") -> "BigInt":
        """Остаток в [0, modulus) для положительного modulus."""
        rem = self % modulus
        return rem + modulus if rem.is_negative() else rem

    def mod_pow(self, exponent: IntLike, modulus: IntLike) -> "BigInt":
        """
        self**exponent mod modulus через repeated squaring с редукцией после
        каждого умножения: промежуточные значения не превышают modulus**2.

        Returns:
            Результат в [0, modulus) для modulus > 0, в (modulus, 0] для modulus < 0

        Raises:
            NegativeExponentError: Если exponent < 0
            DivisionByZero: Если modulus == 0

        Examples:
            >>> BigInt(7).mod_pow(3, 11)
            BigInt(2)
        """
        exponent = _require(exponent, "exponent")
        modulus = _require(modulus, "modulus")
        if exponent.is_negative():
            raise NegativeExponentError(f"exponent must be non-negative, got {exponent}")
        if modulus.is_zero():
            raise DivisionByZero("mod_pow with zero modulus")

        m = modulus.abs()
        result = _ONE._mod_floor(m)
        base = self._mod_floor(m)
        for bit in magnitude.iter_bits(exponent._digits):
            if bit:
                result = (result * base) % m
            base = (base * base) % m

        if modulus.is_negative() and not result.is_zero():
            result = result + modulus
        return result

    def mod_inv(self, modulus: IntLike) -> Optional["BigInt"]:
        """
        Обратный элемент по модулю (расширенный алгоритм Евклида).

        Returns:
            x такое, что self * x ≡ 1 (mod modulus); None если
            gcd(self, modulus) != 1. Диапазон результата как у mod_pow.

        Raises:
            DivisionByZero: Если modulus == 0

        Examples:
            >>> BigInt(3).mod_inv(11)
            BigInt(4)
            >>> BigInt(6).mod_inv(9) is None
            True
        """
        modulus = _require(modulus, "modulus")
        if modulus.is_zero():
            raise DivisionByZero("mod_inv with zero modulus")

        m = modulus.abs()
        old_r, r = self._mod_floor(m), m
        old_s, s = _ONE, _ZERO
        while not r.is_zero():
            q = old_r // r
            old_r, r = r, old_r - q * r
            old_s, s = s, old_s - q * s

        if old_r != _ONE:
            return None

        result = old_s._mod_floor(m)
        if modulus.is_negative() and not result.is_zero():
            result = result + modulus
        return result

    def factorial(self) -> Optional["BigInt"]:
        """
        n! итеративным накоплением 1 * 2 * ... * n.

        Returns:
            n! для n >= 0 (0! == 1); None для отрицательного self
        """
        if self.is_negative():
            return None

        logger.debug("factorial: accumulating %s factors", self)
        result = _ONE
        current = _ONE
        while current <= self:
            result = result * current
            current = current + _ONE
        return result

    def is_prime(self) -> bool:
        """
        Детерминированный тест простоты пробным делением.

        - self <= 1 → False
        - self == 2 → True
        - чётные > 2 → False
        - иначе делим на все нечётные 3..isqrt(self)

        Стоимость O(sqrt(n)) делений; вероятностные тесты намеренно не
        используются.
        """
        if self <= _ONE:
            return False
        if self == _TWO:
            return True
        if not magnitude.is_odd(self._digits):
            return False

        limit = self.isqrt()
        candidate = _THREE
        while candidate <= limit:
            if (self % candidate).is_zero():
                return False
            candidate = candidate + _TWO
        return True

    def next_prime(self) -> "BigInt":
        """
        Наименьшее простое, строго большее self; для self <= 2 возвращает 2.

        Поиск идёт по нечётным кандидатам с шагом 2.
        """
        if self <= _TWO:
            return _TWO

        candidate = self + (_TWO if magnitude.is_odd(self._digits) else _ONE)
        steps = 0
        while not candidate.is_prime():
            candidate = candidate + _TWO
            steps += 1
        logger.debug("next_prime(%s) = %s after %d skipped candidates", self, candidate, steps)
        return candidate

    # -------------------------------------------------------------------------
    # Битовые операции (по модулю, знак игнорируется)
    # -------------------------------------------------------------------------

    def bit_length(self) -> int:
        """Позиция старшего единичного бита модуля плюс один; 0 для нуля."""
        return magnitude.bit_length(self._digits)

    def count_ones(self) -> int:
        """
        Количество единичных бит модуля.

        Для отрицательных чисел всегда 0 (это НЕ two's-complement popcount).
        """
        if self.is_negative():
            return 0
        return magnitude.popcount_bytes(magnitude.to_bytes_be(self._digits))

    def trailing_zeros(self) -> Optional[int]:
        """Количество младших нулевых бит модуля; None для нуля."""
        if self.is_zero():
            return None
        return magnitude.trailing_zero_bits(self._digits)

    def is_power_of_two(self) -> bool:
        return self.is_positive() and self.count_ones() == 1

    def next_power_of_two(self) -> "BigInt":
        """
        Наименьшая степень двойки >= self.

        self <= 1 → 1; степень двойки → сама; иначе 2**bit_length(self).
        """
        if self <= _ONE:
            return _ONE
        if self.is_power_of_two():
            return self
        return BigInt._make(Sign.POSITIVE, magnitude.power_of_two(self.bit_length()))


# =============================================================================
# HELPERS
# =============================================================================


def _coerce(value: object):
    """BigInt как есть, native int → BigInt, остальное → NotImplemented."""
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt(value)
    return NotImplemented


def _require(value: object, name: str) -> BigInt:
    result = _coerce(value)
    if result is NotImplemented:
        raise TypeError(f"{name} must be BigInt or int, got {type(value).__name__}")
    return result


_ZERO = BigInt(0)
_ONE = BigInt(1)
_TWO = BigInt(2)
_THREE = BigInt(3)
