import unittest

from exprlang.lang.error import InternalError
from exprlang.syntax.values import Char, Int, Int8, Int16, Int32, Int64, Null, String


class DataValueTestCase(unittest.TestCase):

    def test_operators(self):
        cases = [
            (Int32(2) + Int32(3), Int32(5)),
            (Int64(2) - Int64(5), Int64(-3)),
            (Int16(-4) * Int16(8), Int16(-32)),
            (Int8(7) / Int8(2), Int8(3)),
            (Int64(-7) / Int64(2), Int64(-3)),
            (Int32(7) / Int32(-2), Int32(-3)),
            (Int8(127) + Int8(0), Int8(127)),
            (String("foo") + String("bar"), String("foobar")),
        ]
        for result, expected in cases:
            self.assertEqual(expected, result)

    def test_should_raise(self):
        should_raise = [
            (Int32(1), Int64(1), "+"),
            (Int32(1), String("a"), "+"),
            (String("a"), Int32(1), "+"),
            (String("a"), String("b"), "-"),
            (String("a"), String("b"), "*"),
            (String("a"), String("b"), "/"),
            (Char("a"), Char("b"), "+"),
            (Null(), Null(), "+"),
            (Int16(1), Int16(0), "/"),
            (Int32(0), Int32(0), "/"),
            (Int8(127), Int8(1), "+"),
            (Int8(-128), Int8(1), "-"),
            (Int16(256), Int16(256), "*"),
            (Int32(-2147483648), Int32(-1), "/"),
        ]
        ops = {
            "+": lambda a, b: a + b,
            "-": lambda a, b: a - b,
            "*": lambda a, b: a * b,
            "/": lambda a, b: a / b,
        }
        for left, right, op in should_raise:
            self.assertRaises(InternalError, ops[op], left, right)

    def test_internal(self):
        try:
            Int32(1) / Int32(0)
        except InternalError as error:
            self.assertTrue(error.internal)
            self.assertIn("division by zero", error.msg)
        else:
            self.fail("division by zero did not raise")

    def test_int_needs_width(self):
        self.assertRaises(TypeError, Int, 1)
        self.assertRaises(TypeError, Int.in_range, 1)
        self.assertTrue(Int16.in_range(-32768))
        self.assertFalse(Int16.in_range(32768))

    def test_equality(self):
        self.assertEqual(Int32(1), Int32(1))
        self.assertNotEqual(Int32(1), Int64(1))
        self.assertNotEqual(Char("a"), String("a"))
        self.assertEqual(Null(), Null())
        self.assertEqual(len({Int8(1), Int8(1), Int16(1)}), 2)

    def test_str(self):
        cases = {Int32(-5): "-5", String("a b"): "a b", Char("x"): "x", Null(): "null"}
        for case, expected in cases.items():
            self.assertEqual(expected, str(case))
        self.assertEqual("Int16(3)", repr(Int16(3)))
        self.assertEqual("Null()", repr(Null()))


if __name__ == '__main__':
    unittest.main()
