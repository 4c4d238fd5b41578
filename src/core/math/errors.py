"""
Arithmetic Errors — типизированные исключения точной арифметики

Все остальные «невозможные» результаты (разбор строки, корень из
отрицательного, факториал отрицательного, отсутствие обратного по модулю)
возвращаются как None и исключениями не являются.
"""


class BigNumError(ArithmeticError):
    """Базовое исключение для BigInt / BigComplex."""

    pass


class DivisionByZero(BigNumError, ZeroDivisionError):
    """
    Деление на ноль.

    Возникает при:
    1. Целочисленном делении / остатке на BigInt(0)
    2. mod_pow / mod_inv с нулевым модулем
    3. Делении BigComplex на нулевое комплексное число

    Наследует ZeroDivisionError, поэтому перехватывается стандартным
    `except ZeroDivisionError`.
    """

    pass


class NegativeExponentError(BigNumError, ValueError):
    """Отрицательный показатель степени в pow / mod_pow."""

    pass
