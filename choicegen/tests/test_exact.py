import unittest
from fractions import Fraction

import numpy as np

from ..errors import InvalidArgument
from ..exact import (as_exact, add, subtract, multiply, floor_div, ceil_div,
                     mul_div, ratio, compare)


class TestExact(unittest.TestCase):
    big = 10 ** 30 + 7

    def test_as_exact(self):
        self.assertEqual(as_exact(5), 5)
        self.assertEqual(as_exact(np.int64(5)), 5)
        self.assertEqual(as_exact(Fraction(10, 2)), 5)
        for bad in (True, 4.0, np.float64(4.0), float(2 ** 53 + 1), 4.5, Fraction(1, 3), '4', None):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidArgument):
                    as_exact(bad)

    def test_arithmetic_past_1e30(self):
        self.assertEqual(add(self.big, self.big), 2 * self.big)
        self.assertEqual(subtract(self.big, 7), 10 ** 30)
        self.assertEqual(multiply(self.big, self.big), self.big ** 2)

    def test_division_rounding(self):
        self.assertEqual(floor_div(7, 2), 3)
        self.assertEqual(ceil_div(7, 2), 4)
        self.assertEqual(ceil_div(8, 2), 4)
        self.assertEqual(ceil_div(self.big, 10 ** 30), 2)
        with self.assertRaises(InvalidArgument):
            floor_div(1, 0)
        with self.assertRaises(InvalidArgument):
            ceil_div(1, 0)

    def test_mul_div(self):
        total = 1333133340000
        self.assertEqual(mul_div(total, 1, 3), total // 3)
        self.assertEqual(mul_div(10, 1, 3), 3)
        self.assertEqual(mul_div(10, 1, 3, rounding='ceil'), 4)
        # divide-then-multiply would give 0 here
        self.assertEqual(mul_div(2, 3, 5), 1)
        with self.assertRaises(InvalidArgument):
            mul_div(1, 1, 1, rounding='nearest')

    def test_ratio_and_compare(self):
        self.assertEqual(ratio(6, 4), Fraction(3, 2))
        self.assertEqual(compare(self.big, self.big + 1), -1)
        self.assertEqual(compare(self.big, self.big), 0)
        self.assertEqual(compare(self.big + 1, self.big), 1)


if __name__ == '__main__':
    unittest.main()
