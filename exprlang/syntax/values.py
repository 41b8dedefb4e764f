"""Runtime values produced by evaluating an exprlang syntax tree.

DataValue operators (+, -, *, /) are strict: they only combine two values of the same variant, and anything else (a
type mismatch, division by zero, or overflow of the variant's width) raises an InternalError. Tree evaluation in
parser.py does not go through these operators and reports the same situations as an absent result instead.
"""

from abc import ABC

from exprlang.lang.error import InternalError


class DataValue(ABC):
    """Superclass of all runtime values. Two DataValues are equal only if they are the same variant and hold the same
    Python value.
    """

    def __init__(self, value):
        self.value = value
        self._cls = type(self).__name__

    def _unsupported(self, op, other):
        raise InternalError(f"unsupported {op} operation for {self._cls} and {type(other).__name__}")

    def __add__(self, other):
        self._unsupported("addition", other)

    def __sub__(self, other):
        self._unsupported("subtraction", other)

    def __mul__(self, other):
        self._unsupported("multiplication", other)

    def __truediv__(self, other):
        self._unsupported("division", other)

    def __repr__(self):
        return f"{self._cls}({self.value!r})"

    def __str__(self):
        return str(self.value)

    def __eq__(self, other):
        return type(other) is type(self) and other.value == self.value

    def __hash__(self):
        return hash((self._cls, self.value))


class Int(DataValue):
    """Signed integer of fixed width. Subclasses only set BITS."""
    BITS = 0

    def __init__(self, value):
        if not type(self).BITS:
            raise TypeError(f"{type(self).__name__} has no width, use Int64, Int32, Int16 or Int8")
        super().__init__(value)

    @classmethod
    def in_range(cls, value):
        """Whether or not value fits in this variant's width."""
        if not cls.BITS:
            raise TypeError(f"{cls.__name__} has no width, use Int64, Int32, Int16 or Int8")
        bound = 1 << (cls.BITS - 1)
        return -bound <= value < bound

    @staticmethod
    def truncdiv(a, b):
        """Integer division rounding toward zero. b must be nonzero."""
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient

    def _checked(self, op, other, compute):
        if type(other) is not type(self):
            self._unsupported(op, other)
        result = compute(self.value, other.value)
        if not type(self).in_range(result):
            raise InternalError(f"attempt to perform {op} with overflow ({self._cls})")
        return type(self)(result)

    def __add__(self, other):
        return self._checked("addition", other, lambda a, b: a + b)

    def __sub__(self, other):
        return self._checked("subtraction", other, lambda a, b: a - b)

    def __mul__(self, other):
        return self._checked("multiplication", other, lambda a, b: a * b)

    def __truediv__(self, other):
        if type(other) is not type(self):
            self._unsupported("division", other)
        if other.value == 0:
            raise InternalError("division by zero")
        return self._checked("division", other, Int.truncdiv)


class Int64(Int):
    BITS = 64


class Int32(Int):
    BITS = 32


class Int16(Int):
    BITS = 16


class Int8(Int):
    BITS = 8


class String(DataValue):
    """Text without its surrounding quotes. Only addition (concatenation) is supported."""

    def __add__(self, other):
        if type(other) is not String:
            self._unsupported("addition", other)
        return String(self.value + other.value)


class Char(DataValue):
    """A single character."""


class Null(DataValue):
    """Result of a statement (variable definition or assignment)."""

    def __init__(self):
        super().__init__(None)

    def __repr__(self):
        return "Null()"

    def __str__(self):
        return "null"
