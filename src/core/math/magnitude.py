"""
Magnitude — беззнаковые цифровые векторы произвольной точности

Самостоятельное представление модуля (абсолютного значения) целого числа:
- Неизменяемый tuple цифр в системе счисления 2**DIGIT_SHIFT, little-endian
- Сложение, вычитание, сравнение
- Умножение: schoolbook, Karatsuba выше KARATSUBA_CUTOFF цифр
- Деление с остатком: на одну цифру и Knuth algorithm D (TAOCP Vol. 2, 4.3.1)
- Конверсии: big-endian bytes, десятичная строка, native int
- Битовые утилиты: bit_length, popcount, trailing zeros, итерация битов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ноль представлен пустым tuple ()
2. Старшая цифра ненулевого модуля всегда != 0 (каноническая форма)
3. Каждая цифра лежит в [0, DIGIT_BASE)
4. Функции модуля не мутируют аргументы и всегда возвращают канонический tuple
"""

from typing import Final, Iterator

# =============================================================================
# ПАРАМЕТРЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Ширина цифры в битах (как SHIFT в CPython longobject)
DIGIT_SHIFT: Final[int] = 30

# Основание системы счисления цифр
DIGIT_BASE: Final[int] = 1 << DIGIT_SHIFT

# Маска младших DIGIT_SHIFT бит
DIGIT_MASK: Final[int] = DIGIT_BASE - 1

# Порог (в цифрах меньшего операнда) переключения на Karatsuba
KARATSUBA_CUTOFF: Final[int] = 70

# Десятичная конверсия ведётся блоками по 10**9 (9 десятичных знаков на блок)
DECIMAL_CHUNK_DIGITS: Final[int] = 9
DECIMAL_CHUNK: Final[int] = 10**DECIMAL_CHUNK_DIGITS

Digits = tuple[int, ...]

ZERO: Final[Digits] = ()
ONE: Final[Digits] = (1,)


# =============================================================================
# КАНОНИЗАЦИЯ И КОНВЕРСИИ
# =============================================================================


def normalize(digits: list[int] | Digits) -> Digits:
    """Отбрасывает старшие нулевые цифры и возвращает канонический tuple."""
    size = len(digits)
    while size and digits[size - 1] == 0:
        size -= 1
    return tuple(digits[:size])


def from_native(value: int) -> Digits:
    """
    Конверсия неотрицательного native int в цифровой вектор.

    Raises:
        ValueError: Если value < 0
    """
    if value < 0:
        raise ValueError(f"magnitude must be non-negative, got {value}")

    digits = []
    while value:
        digits.append(value & DIGIT_MASK)
        value >>= DIGIT_SHIFT
    return tuple(digits)


def to_native(digits: Digits) -> int:
    """Обратная конверсия цифрового вектора в native int."""
    value = 0
    for digit in reversed(digits):
        value = (value << DIGIT_SHIFT) | digit
    return value


def from_bytes_be(data: bytes) -> Digits:
    """
    Импорт модуля из big-endian буфера байт.

    Ведущие нулевые байты допускаются и отбрасываются при канонизации.
    """
    digits = []
    acc = 0
    nbits = 0
    for byte in reversed(data):
        acc |= byte << nbits
        nbits += 8
        if nbits >= DIGIT_SHIFT:
            digits.append(acc & DIGIT_MASK)
            acc >>= DIGIT_SHIFT
            nbits -= DIGIT_SHIFT
    if acc:
        digits.append(acc)
    return normalize(digits)


def to_bytes_be(digits: Digits) -> bytes:
    """
    Экспорт модуля в big-endian буфер без ведущих нулевых байт.

    Для нуля возвращается пустой буфер b"".
    """
    out = bytearray()
    acc = 0
    nbits = 0
    for digit in digits:
        acc |= digit << nbits
        nbits += DIGIT_SHIFT
        while nbits >= 8:
            out.append(acc & 0xFF)
            acc >>= 8
            nbits -= 8
    while acc:
        out.append(acc & 0xFF)
        acc >>= 8

    # out собран little-endian: срезаем старшие нули и разворачиваем
    while out and out[-1] == 0:
        out.pop()
    out.reverse()
    return bytes(out)


def from_decimal(text: str) -> Digits:
    """
    Разбор строки десятичных цифр (без знака) блоками по DECIMAL_CHUNK_DIGITS.

    Вызывающий код отвечает за то, что text непуст и содержит только 0-9.
    """
    digits: Digits = ZERO
    head = len(text) % DECIMAL_CHUNK_DIGITS or DECIMAL_CHUNK_DIGITS
    start = 0
    end = head
    while start < len(text):
        chunk = text[start:end]
        digits = mul_add_small(digits, 10 ** len(chunk), int(chunk))
        start = end
        end += DECIMAL_CHUNK_DIGITS
    return digits


def to_decimal(digits: Digits) -> str:
    """
    Каноническая десятичная запись модуля.

    Examples:
        >>> to_decimal(())
        '0'
        >>> to_decimal(from_native(1234567890123))
        '1234567890123'
    """
    if not digits:
        return "0"

    chunks = []
    while digits:
        digits, rem = divmod_small(digits, DECIMAL_CHUNK)
        chunks.append(rem)

    parts = [str(chunks[-1])]
    parts.extend(str(chunk).zfill(DECIMAL_CHUNK_DIGITS) for chunk in reversed(chunks[:-1]))
    return "".join(parts)


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare(a: Digits, b: Digits) -> int:
    """
    Сравнение модулей.

    Returns:
        -1 если a < b, 0 если a == b, +1 если a > b
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    i = len(a) - 1
    while i >= 0 and a[i] == b[i]:
        i -= 1
    if i < 0:
        return 0
    return -1 if a[i] < b[i] else 1


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def add(a: Digits, b: Digits) -> Digits:
    """Сумма модулей |a| + |b|."""
    if len(a) < len(b):
        a, b = b, a

    result = []
    carry = 0
    for i, digit in enumerate(a):
        carry += digit
        if i < len(b):
            carry += b[i]
        result.append(carry & DIGIT_MASK)
        carry >>= DIGIT_SHIFT
    if carry:
        result.append(carry)
    return tuple(result)


def sub(a: Digits, b: Digits) -> Digits:
    """
    Разность модулей |a| - |b|.

    Raises:
        ValueError: Если a < b (результат был бы отрицательным)
    """
    if compare(a, b) < 0:
        raise ValueError("magnitude subtraction underflow: a < b")

    result = []
    borrow = 0
    for i, digit in enumerate(a):
        borrow = digit - borrow
        if i < len(b):
            borrow -= b[i]
        result.append(borrow & DIGIT_MASK)
        # Арифметический сдвиг отрицательного числа даёт -1 (заём)
        borrow = -(borrow >> DIGIT_SHIFT)
    return normalize(result)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul_add_small(a: Digits, factor: int, extra: int = 0) -> Digits:
    """Вычисляет |a| * factor + extra для 0 <= factor, extra < DIGIT_BASE**2."""
    result = []
    carry = extra
    for digit in a:
        carry += digit * factor
        result.append(carry & DIGIT_MASK)
        carry >>= DIGIT_SHIFT
    while carry:
        result.append(carry & DIGIT_MASK)
        carry >>= DIGIT_SHIFT
    return normalize(result)


def _school_mul(a: Digits, b: Digits) -> Digits:
    result = [0] * (len(a) + len(b))
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        carry = 0
        k = i
        for bj in b:
            carry += result[k] + ai * bj
            result[k] = carry & DIGIT_MASK
            carry >>= DIGIT_SHIFT
            k += 1
        # result[i + len(b)] ещё не затронут предыдущими строками
        result[k] = carry
    return normalize(result)


def _shift_digits(a: Digits, count: int) -> Digits:
    if not a:
        return ZERO
    return (0,) * count + a


def _karatsuba(a: Digits, b: Digits, cutoff: int) -> Digits:
    """
    Karatsuba: (ah*X + al)(bh*X + bl) через три умножения половинного размера.

        z2 = ah*bh, z0 = al*bl
        z1 = (ah + al)(bh + bl) - z2 - z0
        result = z2*X^2 + z1*X + z0
    """
    half = max(len(a), len(b)) // 2

    a_lo, a_hi = normalize(a[:half]), a[half:]
    b_lo, b_hi = normalize(b[:half]), b[half:]

    z0 = mul(a_lo, b_lo, cutoff)
    z2 = mul(a_hi, b_hi, cutoff)
    z1 = sub(sub(mul(add(a_lo, a_hi), add(b_lo, b_hi), cutoff), z0), z2)

    return add(add(_shift_digits(z2, 2 * half), _shift_digits(z1, half)), z0)


def mul(a: Digits, b: Digits, cutoff: int = KARATSUBA_CUTOFF) -> Digits:
    """
    Произведение модулей |a| * |b|.

    Schoolbook O(n*m) для коротких операндов, Karatsuba O(n^1.585) если
    меньший операнд содержит не менее cutoff цифр.
    """
    if cutoff < 4:
        raise ValueError(f"karatsuba cutoff must be >= 4, got {cutoff}")
    if not a or not b:
        return ZERO
    if min(len(a), len(b)) < cutoff:
        return _school_mul(a, b)
    return _karatsuba(a, b, cutoff)


# =============================================================================
# ДЕЛЕНИЕ С ОСТАТКОМ
# =============================================================================


def divmod_small(a: Digits, divisor: int) -> tuple[Digits, int]:
    """
    Деление модуля на одну цифру 0 < divisor < DIGIT_BASE.

    Returns:
        (quotient, remainder) где remainder — native int
    """
    if not 0 < divisor < DIGIT_BASE:
        raise ValueError(f"single-digit divisor out of range: {divisor}")

    quotient = [0] * len(a)
    rem = 0
    for i in range(len(a) - 1, -1, -1):
        rem = (rem << DIGIT_SHIFT) | a[i]
        q = rem // divisor
        quotient[i] = q
        rem -= q * divisor
    return normalize(quotient), rem


def _lshift_bits(a: Digits, shift: int) -> list[int]:
    """Сдвиг влево на 0 <= shift < DIGIT_SHIFT бит; длина результата len(a) + 1."""
    out = []
    carry = 0
    for digit in a:
        acc = (digit << shift) | carry
        out.append(acc & DIGIT_MASK)
        carry = acc >> DIGIT_SHIFT
    out.append(carry)
    return out


def _rshift_bits(a: list[int], shift: int) -> Digits:
    out = [0] * len(a)
    carry = 0
    mask = (1 << shift) - 1
    for i in range(len(a) - 1, -1, -1):
        acc = (carry << DIGIT_SHIFT) | a[i]
        carry = acc & mask
        out[i] = acc >> shift
    return normalize(out)


def _knuth_divmod(a: Digits, b: Digits) -> tuple[Digits, Digits]:
    """
    Knuth algorithm D для len(b) >= 2 и a >= b.

    Нормализация: делитель сдвигается так, чтобы старшая цифра была
    >= DIGIT_BASE / 2; тогда оценка цифры частного ошибается не более чем на 2.
    """
    size_w = len(b)
    shift = DIGIT_SHIFT - b[-1].bit_length()

    w = _lshift_bits(b, shift)
    w.pop()  # старший перенос равен 0 после нормализации
    v = _lshift_bits(a, shift)

    k = len(v) - size_w
    quotient = [0] * k

    wm1 = w[-1]
    wm2 = w[-2]

    for j in range(k - 1, -1, -1):
        vtop = v[j + size_w]

        # Оценка цифры частного по двум старшим цифрам
        vv = (vtop << DIGIT_SHIFT) | v[j + size_w - 1]
        q = vv // wm1
        r = vv - q * wm1
        while q >= DIGIT_BASE or wm2 * q > ((r << DIGIT_SHIFT) | v[j + size_w - 2]):
            q -= 1
            r += wm1
            if r >= DIGIT_BASE:
                break

        # v[j : j + size_w + 1] -= q * w
        zhi = 0
        for i in range(size_w):
            z = v[j + i] + zhi - q * w[i]
            v[j + i] = z & DIGIT_MASK
            zhi = z >> DIGIT_SHIFT
        top = vtop + zhi

        # Редкий случай: q переоценено на 1, добавляем делитель обратно
        if top < 0:
            carry = 0
            for i in range(size_w):
                carry += v[j + i] + w[i]
                v[j + i] = carry & DIGIT_MASK
                carry >>= DIGIT_SHIFT
            top += carry
            q -= 1

        v[j + size_w] = top
        quotient[j] = q

    remainder = _rshift_bits(v[:size_w], shift)
    return normalize(quotient), remainder


def divmod_digits(a: Digits, b: Digits) -> tuple[Digits, Digits]:
    """
    Деление модулей с остатком: |a| = |b| * q + r, 0 <= r < |b|.

    Raises:
        ZeroDivisionError: Если b == 0
    """
    if not b:
        raise ZeroDivisionError("magnitude division by zero")

    if compare(a, b) < 0:
        return ZERO, a
    if len(b) == 1:
        quotient, rem = divmod_small(a, b[0])
        return quotient, from_native(rem)
    return _knuth_divmod(a, b)


# =============================================================================
# БИТОВЫЕ УТИЛИТЫ
# =============================================================================


def bit_length(a: Digits) -> int:
    """Позиция старшего единичного бита плюс один; 0 для нуля."""
    if not a:
        return 0
    return (len(a) - 1) * DIGIT_SHIFT + a[-1].bit_length()


def is_odd(a: Digits) -> bool:
    return bool(a) and (a[0] & 1) == 1


def iter_bits(a: Digits) -> Iterator[int]:
    """Итерация битов модуля от младшего к старшему (ровно bit_length(a) бит)."""
    total = bit_length(a)
    for index in range(total):
        yield (a[index // DIGIT_SHIFT] >> (index % DIGIT_SHIFT)) & 1


def halve(a: Digits) -> Digits:
    """Целочисленное деление модуля на 2."""
    return _rshift_bits(list(a), 1) if a else ZERO


def power_of_two(exponent: int) -> Digits:
    """Модуль 2**exponent."""
    whole, rest = divmod(exponent, DIGIT_SHIFT)
    return (0,) * whole + (1 << rest,)


def popcount_bytes(data: bytes) -> int:
    """Количество единичных бит в буфере байт."""
    return sum(bin(byte).count("1") for byte in data)


def trailing_zero_bits(a: Digits) -> int:
    """
    Количество младших нулевых бит ненулевого модуля.

    Raises:
        ValueError: Если a == 0
    """
    if not a:
        raise ValueError("trailing zeros are undefined for zero")

    zeros = 0
    for digit in a:
        if digit == 0:
            zeros += DIGIT_SHIFT
            continue
        return zeros + (digit & -digit).bit_length() - 1
    return zeros
