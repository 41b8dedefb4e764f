import io
import unittest
from contextlib import redirect_stdout

from exprlang.lang.error import ErrorHandler, GenericException, InternalError


class ErrorHandlerTestCase(unittest.TestCase):

    def test_non_fatal(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False):
                raise GenericException("'{}' could not be parsed", "(1 + 2")
        self.assertIn("error: ", out.getvalue())
        self.assertIn("could not be parsed", out.getvalue())

    def test_fatal(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as context:
            with ErrorHandler():
                raise GenericException("bad input")
        self.assertEqual(1, context.exception.code)

    def test_internal(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False):
                raise InternalError("expected '{}', found '{}'", ["=", "a"])
        self.assertIn("[internal] ", out.getvalue())

    def test_unknown_error(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(ValueError):
            with ErrorHandler(fatal=False):
                raise ValueError("boom")
        self.assertIn("unknown error", out.getvalue())

    def test_recursion(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False):
                raise RecursionError()
        self.assertIn("nested too deeply", out.getvalue())

    def test_traceback(self):
        out = io.StringIO()
        handler = ErrorHandler(fatal=False)
        handler.register_file("a.expr")
        handler.register_line("a.expr", "1 +", 3)
        with redirect_stdout(out):
            handler.throw(GenericException("'{}' could not be parsed", "1 +"))
        self.assertIn("line 3", out.getvalue())
        self.assertEqual({"a.expr": (None, None)}, handler.traceback)

    def test_diagnose(self):
        error = GenericException("'{}' has trailing input", "1 2", start=2)
        lines = ErrorHandler.diagnose(error).splitlines()
        self.assertEqual(2, len(lines))
        self.assertIn("^", lines[1])
        self.assertTrue(lines[1].startswith("    "))


if __name__ == '__main__':
    unittest.main()
