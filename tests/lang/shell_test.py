import io
import unittest
from contextlib import redirect_stdout

from exprlang.lang.error import ErrorHandler
from exprlang.lang.session import Session
from exprlang.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def onecmd(self, line):
        out = io.StringIO()
        with redirect_stdout(out):
            stop = self.shell.onecmd(line)
        return stop, out.getvalue()

    def test_default(self):
        self.assertEqual((None, "13\n"), self.onecmd("3 + 5 * 2"))
        self.assertEqual((None, "null\n"), self.onecmd("let a = 1"))
        self.assertEqual((None, "null\n"), self.onecmd("a = 5"))

    def test_line_continuation(self):
        self.assertEqual((None, ""), self.onecmd("(1 +"))
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.assertEqual((None, "3\n"), self.onecmd("2)"))
        self.assertEqual(Shell.prompt, self.shell.prompt)

    def test_errors_do_not_exit(self):
        __, output = self.onecmd("1 / 0")
        self.assertIn("could not be evaluated", output)

        __, output = self.onecmd("(1 + 2))")
        self.assertIn("warning: ", output)
        self.assertTrue(output.endswith("3\n"))

        self.assertEqual((None, "2\n"), self.onecmd("1 + 1"))

    def test_exit(self):
        self.assertTrue(self.onecmd("exit")[0])
        self.assertTrue(self.onecmd("EOF")[0])


if __name__ == '__main__':
    unittest.main()
