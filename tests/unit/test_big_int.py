"""
Тесты для BigInt — целое произвольной точности

Проверяемые инварианты:
1. Каноническое представление и round-trip (decimal, bytes, payload)
2. Знаковая арифметика и усекающее деление: a == b*q + r
3. Полный порядок, согласованный с математическим значением
4. Теория чисел: isqrt, gcd/lcm, mod_pow, mod_inv, factorial, is_prime
5. Битовые операции над модулем
6. Неизменяемость и хэшируемость
"""

import copy
import random

import pytest

from src.core.math import BigInt, DivisionByZero, NegativeExponentError, Sign


@pytest.fixture
def rng():
    return random.Random(42)


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    """Оракул усекающего деления на встроенных int."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - b * q


def _is_prime_oracle(n: int) -> bool:
    if n < 2:
        return False
    d = 2
    while d * d <= n:
        if n % d == 0:
            return False
        d += 1
    return True


# =============================================================================
# ТЕСТЫ: Конструирование и конверсии
# =============================================================================


class TestConstruction:
    """Конструирование из native int, строки, bytes"""

    def test_from_native(self):
        assert str(BigInt(42)) == "42"
        assert str(BigInt(-987654321)) == "-987654321"
        assert str(BigInt()) == "0"

    def test_rejects_non_int(self):
        """float, bool и str не являются native int"""
        with pytest.raises(TypeError):
            BigInt(1.5)
        with pytest.raises(TypeError):
            BigInt(True)
        with pytest.raises(TypeError):
            BigInt("12")

    def test_sign(self):
        assert BigInt(5).sign is Sign.POSITIVE
        assert BigInt(-5).sign is Sign.NEGATIVE
        assert BigInt(0).sign is Sign.ZERO

    def test_zero_and_one(self):
        assert BigInt.zero() == BigInt(0)
        assert BigInt.one() == BigInt(1)

    def test_to_int(self):
        assert BigInt(-(10**30)).to_int() == -(10**30)
        assert int(BigInt(7)) == 7

    def test_repr(self):
        assert repr(BigInt(-42)) == "BigInt(-42)"


class TestParse:
    """Разбор десятичной строки"""

    @pytest.mark.parametrize(
        "text",
        ["0", "7", "-7", "12345678901234567890", "-987654321", "1" + "0" * 100],
    )
    def test_canonical_roundtrip(self, text):
        """format(parse(s)) == s для канонической записи"""
        value = BigInt.parse(text)
        assert value is not None
        assert str(value) == text

    def test_leading_zeros_and_negative_zero(self):
        """Неканоническая запись нормализуется"""
        assert str(BigInt.parse("-0042")) == "-42"
        assert BigInt.parse("-0") == BigInt(0)
        assert str(BigInt.parse("-0")) == "0"
        assert BigInt.parse("000") == BigInt(0)

    @pytest.mark.parametrize(
        "text",
        ["", "-", "+5", "12a", " 12", "12 ", "1_000", "--1", "1-2", "٣", "0x10"],
    )
    def test_parse_failure(self, text):
        """Любой посторонний символ → None"""
        assert BigInt.parse(text) is None

    def test_non_string_input(self):
        assert BigInt.parse(123) is None

    def test_from_string_alias(self):
        assert BigInt.from_string("-15") == BigInt(-15)

    def test_parse_or_raise(self):
        assert BigInt.parse_or_raise("99") == BigInt(99)
        with pytest.raises(ValueError, match="invalid decimal"):
            BigInt.parse_or_raise("9x9")


class TestBytesRoundTrip:
    """(sign, bytes) → BigInt → (sign, bytes)"""

    def test_known_values(self):
        assert BigInt(-256).to_bytes_be() == (Sign.NEGATIVE, b"\x01\x00")
        assert BigInt(255).to_bytes_be() == (Sign.POSITIVE, b"\xff")
        assert BigInt(0).to_bytes_be() == (Sign.ZERO, b"")

    def test_zero_forms(self):
        """Нулевой знак или пустой модуль дают канонический ноль"""
        assert BigInt.from_bytes_be(Sign.ZERO, b"\x05") == BigInt(0)
        assert BigInt.from_bytes_be(Sign.POSITIVE, b"") == BigInt(0)
        assert BigInt.from_bytes_be(Sign.NEGATIVE, b"\x00\x00").sign is Sign.ZERO

    def test_sign_as_string(self):
        assert BigInt.from_bytes_be("negative", b"\x01") == BigInt(-1)

    def test_roundtrip(self, rng):
        for _ in range(40):
            value = rng.getrandbits(rng.randint(1, 600)) * rng.choice([-1, 1])
            x = BigInt(value)
            assert BigInt.from_bytes_be(*x.to_bytes_be()) == x


class TestPayload:
    """JSON-совместимое представление"""

    def test_to_payload(self):
        assert BigInt(-255).to_payload() == {"sign": "negative", "magnitude_hex": "ff"}
        assert BigInt(0).to_payload() == {"sign": "zero", "magnitude_hex": ""}

    def test_roundtrip(self):
        for value in [0, 1, -1, 256, -(10**40)]:
            x = BigInt(value)
            assert BigInt.from_payload(x.to_payload()) == x

    @pytest.mark.parametrize(
        "payload",
        [
            {"sign": "zero", "magnitude_hex": "01"},
            {"sign": "positive", "magnitude_hex": ""},
            {"sign": "positive", "magnitude_hex": "0001"},
            {"sign": "bogus", "magnitude_hex": "01"},
            {"sign": "positive", "magnitude_hex": "zz"},
            {"sign": "positive"},
            {"sign": "positive", "magnitude_hex": 5},
        ],
    )
    def test_malformed_payload(self, payload):
        with pytest.raises(ValueError):
            BigInt.from_payload(payload)


# =============================================================================
# ТЕСТЫ: Арифметика
# =============================================================================


class TestArithmetic:
    """Сложение, вычитание, умножение"""

    def test_basic(self):
        a, b = BigInt(15), BigInt(25)
        assert a + b == BigInt(40)
        assert b - a == BigInt(10)
        assert a - b == BigInt(-10)
        assert a * b == BigInt(375)
        assert b / a == BigInt(1)

    def test_large_sum_scenario(self):
        """123456789012345678901234567890 + 987654321"""
        a = BigInt.parse("123456789012345678901234567890")
        b = BigInt.parse("987654321")
        assert str(a + b) == "123456789012345679888888889211"

    def test_sign_rules(self):
        assert BigInt(-3) * BigInt(-4) == BigInt(12)
        assert BigInt(-3) * BigInt(4) == BigInt(-12)
        assert BigInt(-3) + BigInt(3) == BigInt(0)
        assert (BigInt(-3) + BigInt(3)).sign is Sign.ZERO
        assert BigInt(-10) + BigInt(3) == BigInt(-7)
        assert BigInt(0) * BigInt(-5) == BigInt(0)

    def test_negation(self):
        assert -BigInt(5) == BigInt(-5)
        assert -BigInt(0) == BigInt(0)
        assert (-BigInt(0)).sign is Sign.ZERO
        assert abs(BigInt(-9)) == BigInt(9)
        assert BigInt(-9).abs() == BigInt(9)

    def test_mixed_with_native_int(self):
        assert BigInt(5) + 3 == BigInt(8)
        assert 3 + BigInt(5) == BigInt(8)
        assert 10 - BigInt(4) == BigInt(6)
        assert 2 * BigInt(21) == BigInt(42)

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            BigInt(1) + 1.5

    def test_matches_oracle(self, rng):
        for _ in range(100):
            a = rng.getrandbits(rng.randint(1, 300)) * rng.choice([-1, 1])
            b = rng.getrandbits(rng.randint(1, 300)) * rng.choice([-1, 1])
            assert (BigInt(a) + BigInt(b)).to_int() == a + b
            assert (BigInt(a) - BigInt(b)).to_int() == a - b
            assert (BigInt(a) * BigInt(b)).to_int() == a * b


class TestTruncatingDivision:
    """Усекающее деление: q к нулю, r со знаком делимого"""

    @pytest.mark.parametrize(
        "a, b, q, r",
        [
            (7, 2, 3, 1),
            (-7, 2, -3, -1),
            (7, -2, -3, 1),
            (-7, -2, 3, -1),
            (6, 3, 2, 0),
            (-6, 3, -2, 0),
            (1, 5, 0, 1),
            (-1, 5, 0, -1),
        ],
    )
    def test_sign_table(self, a, b, q, r):
        assert BigInt(a) // BigInt(b) == BigInt(q)
        assert BigInt(a) / BigInt(b) == BigInt(q)
        assert BigInt(a) % BigInt(b) == BigInt(r)
        assert divmod(BigInt(a), BigInt(b)) == (BigInt(q), BigInt(r))

    def test_division_identity(self, rng):
        """dividend == divisor * quotient + remainder"""
        for _ in range(100):
            a = rng.getrandbits(rng.randint(1, 500)) * rng.choice([-1, 1])
            b = (rng.getrandbits(rng.randint(1, 250)) | 1) * rng.choice([-1, 1])
            q, r = BigInt(a).divmod(BigInt(b))
            assert (q.to_int(), r.to_int()) == _trunc_divmod(a, b)
            assert BigInt(b) * q + r == BigInt(a)
            assert r.is_zero() or r.sign is BigInt(a).sign

    def test_division_by_zero(self):
        """Деление на ноль — типизированная ошибка"""
        with pytest.raises(DivisionByZero):
            BigInt(1) // BigInt(0)
        with pytest.raises(DivisionByZero):
            BigInt(1) % 0
        with pytest.raises(ZeroDivisionError):
            BigInt(1) / 0

    def test_reflected_division(self):
        assert 7 // BigInt(2) == BigInt(3)
        assert -7 % BigInt(2) == BigInt(-1)
        assert divmod(-7, BigInt(2)) == (BigInt(-3), BigInt(-1))


class TestOrdering:
    """Полный порядок"""

    def test_basic(self):
        a, b = BigInt(100), BigInt(200)
        assert a < b
        assert b > a
        assert a == a
        assert a != b

    def test_signs(self):
        assert BigInt(-5) < BigInt(0) < BigInt(5)
        assert BigInt(-100) < BigInt(-5)
        assert BigInt(-(10**30)) < BigInt(-(10**29))

    def test_against_native_int(self):
        assert BigInt(5) == 5
        assert BigInt(5) <= 5
        assert BigInt(5) > -5
        assert BigInt(5) != "5"

    def test_sorting_matches_oracle(self, rng):
        values = [rng.getrandbits(rng.randint(1, 100)) * rng.choice([-1, 1]) for _ in range(60)]
        ordered = sorted(BigInt(v) for v in values)
        assert [x.to_int() for x in ordered] == sorted(values)


class TestImmutability:
    """Неизменяемость и хэширование"""

    def test_setattr_forbidden(self):
        x = BigInt(5)
        with pytest.raises(AttributeError):
            x._digits = (1,)
        with pytest.raises(AttributeError):
            x.foo = 1

    def test_operations_return_new_values(self):
        x = BigInt(5)
        y = x + 1
        assert x == BigInt(5)
        assert y == BigInt(6)

    def test_hash_consistent_with_int(self):
        assert hash(BigInt(5)) == hash(5)
        assert hash(BigInt(-(10**40))) == hash(-(10**40))
        table = {BigInt(7): "seven"}
        assert table[BigInt.parse("7")] == "seven"
        assert table[7] == "seven"

    def test_copy(self):
        x = BigInt(-(10**25))
        assert copy.copy(x) == x
        assert copy.deepcopy(x) == x


# =============================================================================
# ТЕСТЫ: Степени и корни
# =============================================================================


class TestPow:
    """Exponentiation by squaring"""

    def test_small(self):
        assert BigInt(3).pow(4) == BigInt(81)
        assert BigInt(2).pow(10) == BigInt(1024)
        assert BigInt(-2).pow(3) == BigInt(-8)
        assert BigInt(-2).pow(4) == BigInt(16)

    def test_zero_exponent(self):
        """pow(0) == 1 для любого основания, включая 0"""
        assert BigInt(0).pow(0) == BigInt(1)
        assert BigInt(-7).pow(0) == BigInt(1)
        assert BigInt(0).pow(5) == BigInt(0)

    def test_large(self):
        assert str(BigInt(2).pow(100)) == "1267650600228229401496703205376"
        assert BigInt(10).pow(BigInt(50)) == BigInt.parse("1" + "0" * 50)

    def test_operator(self):
        assert BigInt(2) ** 10 == BigInt(1024)
        assert pow(BigInt(7), 3, 11) == BigInt(2)

    def test_negative_exponent(self):
        with pytest.raises(NegativeExponentError):
            BigInt(2).pow(-1)
        with pytest.raises(ValueError):
            BigInt(2) ** -3


class TestIsqrt:
    """Floor square root через бинарный поиск"""

    @pytest.mark.parametrize(
        "n, root",
        [(0, 0), (1, 1), (2, 1), (3, 1), (4, 2), (15, 3), (16, 4), (144, 12), (145, 12)],
    )
    def test_small(self, n, root):
        assert BigInt(n).isqrt() == BigInt(root)

    def test_negative(self):
        assert BigInt(-4).isqrt() is None
        assert BigInt(-1).sqrt() is None

    def test_large_perfect_square(self):
        n = BigInt(10).pow(40)
        assert n.isqrt() == BigInt(10).pow(20)
        assert (n - 1).isqrt() == BigInt(10).pow(20) - 1

    def test_floor_property(self, rng):
        """r*r <= n < (r+1)*(r+1)"""
        for _ in range(40):
            n = BigInt(rng.getrandbits(rng.randint(1, 200)))
            r = n.isqrt()
            assert r * r <= n < (r + 1) * (r + 1)


# =============================================================================
# ТЕСТЫ: Теория чисел
# =============================================================================


class TestGcdLcm:
    """НОД и НОК"""

    def test_basic(self):
        assert BigInt(12).gcd(BigInt(18)) == BigInt(6)
        assert BigInt(12).lcm(BigInt(18)) == BigInt(36)

    def test_signs_and_zero(self):
        assert BigInt(-12).gcd(18) == BigInt(6)
        assert BigInt(12).gcd(-18) == BigInt(6)
        assert BigInt(0).gcd(0) == BigInt(0)
        assert BigInt(0).gcd(-5) == BigInt(5)
        assert BigInt(0).lcm(5) == BigInt(0)
        assert BigInt(-4).lcm(6) == BigInt(12)

    def test_invariants(self, rng):
        """gcd >= 0, gcd | a, gcd | b, gcd * lcm == |a*b|"""
        for _ in range(50):
            a = BigInt((rng.getrandbits(80) | 1) * rng.choice([-1, 1]))
            b = BigInt((rng.getrandbits(60) | 1) * rng.choice([-1, 1])) * BigInt(rng.randint(1, 1000))
            g = a.gcd(b)
            assert g >= 0
            assert (a % g).is_zero() and (b % g).is_zero()
            assert g * a.lcm(b) == (a * b).abs()


class TestModPow:
    """Модульное возведение в степень"""

    def test_known_values(self):
        assert BigInt(7).mod_pow(BigInt(3), BigInt(11)) == BigInt(2)
        assert BigInt(2).mod_pow(10, 1000) == BigInt(24)
        assert BigInt(5).mod_pow(0, 7) == BigInt(1)
        assert BigInt(5).mod_pow(0, 1) == BigInt(0)

    def test_negative_base(self):
        """Результат в [0, modulus) и для отрицательного основания"""
        assert BigInt(-2).mod_pow(3, 5) == BigInt(2)

    def test_negative_modulus(self):
        """Для modulus < 0 результат в (modulus, 0]"""
        assert BigInt(3).mod_pow(2, -7) == BigInt(-5)
        assert BigInt(7).mod_pow(1, -7) == BigInt(0)

    def test_errors(self):
        with pytest.raises(DivisionByZero):
            BigInt(3).mod_pow(2, 0)
        with pytest.raises(NegativeExponentError):
            BigInt(3).mod_pow(-1, 7)

    def test_matches_repeated_multiplication(self, rng):
        for _ in range(30):
            a = BigInt(rng.randint(-10**12, 10**12))
            m = BigInt(rng.randint(2, 10**9))
            e = rng.randint(0, 12)
            expected = BigInt(1)
            for _ in range(e):
                expected = expected * a
            expected = expected % m
            if expected.is_negative():
                expected = expected + m
            result = a.mod_pow(e, m)
            assert result == expected
            assert BigInt(0) <= result < m

    def test_large_exponent(self):
        """Ферма: a^(p-1) ≡ 1 (mod p) для простого p"""
        p = BigInt.parse("1000000007")
        assert BigInt(123456789).mod_pow(p - 1, p) == BigInt(1)


class TestModInv:
    """Обратный элемент по модулю"""

    def test_known_values(self):
        assert BigInt(3).mod_inv(BigInt(11)) == BigInt(4)
        assert BigInt(-3).mod_inv(11) == BigInt(7)
        assert BigInt(3).mod_inv(-11) == BigInt(-7)

    def test_not_coprime(self):
        assert BigInt(6).mod_inv(9) is None
        assert BigInt(0).mod_inv(7) is None

    def test_modulus_one(self):
        assert BigInt(5).mod_inv(1) == BigInt(0)

    def test_zero_modulus(self):
        with pytest.raises(DivisionByZero):
            BigInt(3).mod_inv(0)

    def test_inverse_property(self, rng):
        m = BigInt.parse("1000000007")
        for _ in range(30):
            a = BigInt(rng.randint(1, 10**18))
            x = a.mod_inv(m)
            assert x is not None
            assert ((a * x) % m) == BigInt(1)
            assert BigInt(0) <= x < m


class TestFactorial:
    """n! итеративно"""

    @pytest.mark.parametrize(
        "n, expected",
        [(0, "1"), (1, "1"), (5, "120"), (10, "3628800"), (20, "2432902008176640000")],
    )
    def test_known_values(self, n, expected):
        assert str(BigInt(n).factorial()) == expected

    def test_negative(self):
        assert BigInt(-5).factorial() is None

    def test_recurrence(self):
        """factorial(n) == n * factorial(n - 1)"""
        for n in range(1, 40):
            assert BigInt(n).factorial() == BigInt(n) * BigInt(n - 1).factorial()


class TestPrimality:
    """Пробное деление и next_prime"""

    def test_small_values(self):
        primes = {2, 3, 5, 7, 11, 97, 101}
        for n in [-7, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 97, 100, 101, 121]:
            assert BigInt(n).is_prime() == (n in primes)

    def test_agrees_with_brute_force(self):
        """Совпадение с полным перебором для 0 <= n <= 10000"""
        for n in range(0, 10001):
            assert BigInt(n).is_prime() == _is_prime_oracle(n), n

    def test_larger_values(self):
        p = BigInt.parse("1000000007")
        assert p.is_prime()
        assert not (p * 3).is_prime()
        # 2^31 - 1 — простое Мерсенна
        assert BigInt(2**31 - 1).is_prime()

    @pytest.mark.parametrize(
        "n, expected",
        [(-5, 2), (0, 2), (1, 2), (2, 2), (3, 5), (4, 5), (10, 11), (14, 17), (17, 19), (97, 101)],
    )
    def test_next_prime(self, n, expected):
        assert BigInt(n).next_prime() == BigInt(expected)


# =============================================================================
# ТЕСТЫ: Битовые операции
# =============================================================================


class TestBitOperations:
    """bit_length, count_ones, trailing_zeros, степени двойки"""

    @pytest.mark.parametrize("n, bits", [(0, 0), (1, 1), (2, 2), (7, 3), (8, 4), (255, 8), (-255, 8)])
    def test_bit_length(self, n, bits):
        assert BigInt(n).bit_length() == bits

    @pytest.mark.parametrize("n, ones", [(0, 0), (1, 1), (3, 2), (7, 3), (15, 4), (255, 8), (-5, 0)])
    def test_count_ones(self, n, ones):
        """Для отрицательных count_ones == 0 (не two's complement)"""
        assert BigInt(n).count_ones() == ones

    @pytest.mark.parametrize("n, zeros", [(1, 0), (2, 1), (4, 2), (8, 3), (12, 2), (-12, 2)])
    def test_trailing_zeros(self, n, zeros):
        assert BigInt(n).trailing_zeros() == zeros

    def test_trailing_zeros_of_zero(self):
        assert BigInt(0).trailing_zeros() is None

    def test_trailing_zeros_large(self):
        assert BigInt(2).pow(100).trailing_zeros() == 100

    def test_is_power_of_two(self):
        for n in [1, 2, 4, 8, 16, 2**40]:
            assert BigInt(n).is_power_of_two()
        for n in [0, 3, 5, 255, -4]:
            assert not BigInt(n).is_power_of_two()

    @pytest.mark.parametrize(
        "n, expected",
        [(-10, 1), (0, 1), (1, 1), (2, 2), (3, 4), (5, 8), (9, 16), (15, 16), (255, 256), (256, 256)],
    )
    def test_next_power_of_two(self, n, expected):
        assert BigInt(n).next_power_of_two() == BigInt(expected)

    def test_scenario_255(self):
        n = BigInt(255)
        assert n.bit_length() == 8
        assert n.count_ones() == 8
        assert n.is_power_of_two() is False
        assert n.next_power_of_two() == BigInt(256)


# =============================================================================
# ТЕСТЫ: Алгебраические свойства
# =============================================================================


class TestAlgebraicProperties:
    """(a + b) - b == a; a * 1 == a; a + (-a) == 0"""

    def test_properties(self, rng):
        one = BigInt.one()
        zero = BigInt.zero()
        for _ in range(60):
            a = BigInt(rng.getrandbits(rng.randint(1, 400)) * rng.choice([-1, 1]))
            b = BigInt(rng.getrandbits(rng.randint(1, 400)) * rng.choice([-1, 1]))
            assert (a + b) - b == a
            assert a * one == a
            assert a + (-a) == zero
