"""
Exact integer and rational helpers.

Python ints never overflow, so the work here is mostly about refusing
anything that is not exactly integral (floats, bools) and making the
rounding direction of every division explicit.
"""
import operator
from fractions import Fraction
from numbers import Rational

from .errors import InvalidArgument

FLOOR = 'floor'
CEIL = 'ceil'


def as_exact(value, name='value'):
    '''
    Coerce an integral value to int, rejecting anything inexact.

    Floats are refused even when integral: past 2**53 they no longer hold
    the rank they were made from.
    '''

    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be an integer, got bool {value!r}")

    try:
        # int, numpy integers and anything else implementing __index__
        return operator.index(value)
    except TypeError:
        pass

    if isinstance(value, Rational) and value.denominator == 1:
        return int(value.numerator)

    raise InvalidArgument(f"{name} must be an integer, got {value!r}")


def add(a, b):
    return as_exact(a, 'a') + as_exact(b, 'b')


def subtract(a, b):
    return as_exact(a, 'a') - as_exact(b, 'b')


def multiply(a, b):
    return as_exact(a, 'a') * as_exact(b, 'b')


def floor_div(a, b):
    a, b = as_exact(a, 'a'), as_exact(b, 'b')
    if b == 0:
        raise InvalidArgument("division by zero")
    return a // b


def ceil_div(a, b):
    a, b = as_exact(a, 'a'), as_exact(b, 'b')
    if b == 0:
        raise InvalidArgument("division by zero")
    return -(-a // b)


def mul_div(a, b, c, rounding=FLOOR):
    """
    Compute a * b / c with a single rounding step at the end.

    The product is formed first so no precision is lost to an early
    truncation; rounding is either 'floor' or 'ceil'.
    """
    if rounding == FLOOR:
        return floor_div(multiply(a, b), c)
    elif rounding == CEIL:
        return ceil_div(multiply(a, b), c)
    raise InvalidArgument(f"rounding must be {FLOOR!r} or {CEIL!r}, got {rounding!r}")


def ratio(a, b):
    a, b = as_exact(a, 'a'), as_exact(b, 'b')
    if b == 0:
        raise InvalidArgument("division by zero")
    return Fraction(a, b)


def compare(a, b):
    """Three-way comparison: -1, 0 or 1"""
    a, b = as_exact(a, 'a'), as_exact(b, 'b')
    return (a > b) - (a < b)
