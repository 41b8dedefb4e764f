import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from exprlang.main import TEST_INPUT, main, parse_args


class MainTestCase(unittest.TestCase):

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return out.getvalue()

    def test_parse_args(self):
        args = parse_args(["-e", "1 + 2", "--ast"])
        self.assertEqual("1 + 2", args.expr)
        self.assertTrue(args.ast)
        self.assertFalse(args.test)
        self.assertIsNone(args.file)

    def test_expr(self):
        self.assertEqual("3\n", self.run_main("-e", "1 + 2"))
        self.assertEqual("ab\n", self.run_main("--expr", "\"a\" + \"b\""))
        self.assertEqual("null\n", self.run_main("-e", "a = 5"))

    def test_long_expr(self):
        self.assertEqual("1000\n", self.run_main("-e", "1" + " + 1" * 999))

    def test_fixed_input(self):
        self.assertEqual("(3 + 5) * (2 + 4)", TEST_INPUT)
        self.assertEqual("48\n", self.run_main("-t"))

    def test_ast(self):
        output = self.run_main("-e", "let a = 1", "--ast")
        self.assertTrue(output.startswith("VariableDefinition('a', None, nodes=["))
        self.assertTrue(output.endswith("null\n"))

    def test_failure_exits(self):
        for case in ["(1 + 2", "1 / 0"]:
            with self.assertRaises(SystemExit) as context:
                self.run_main("-e", case)
            self.assertEqual(1, context.exception.code, case)

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "program.expr")
            with open(path, "w") as file:
                file.write("0b101\n0o17 + 0x1A\n")

            self.assertEqual("5\n41\n", self.run_main(path))


if __name__ == '__main__':
    unittest.main()
