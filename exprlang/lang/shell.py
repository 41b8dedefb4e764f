"""Handles interactive/command-line mode for the exprlang interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """exprlang interpreter shell."""
    intro = "exprlang interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Parses and evaluates an arbitrary exprlang statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}", self.line_num, False)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line:
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the exprlang interpreter!\n\n"
              "exprlang evaluates integer and string arithmetic with the usual precedence: \n"
              "'*' and '/' bind tighter than '+' and '-', and parentheses group. Integers \n"
              "may be written in decimal, binary (0b101), octal (0o17) or hex (0x1A).\n\n"
              "Try it out by typing '(3 + 5) * (2 + 4)'. Statements such as 'let a = 1' \n"
              "and 'a = 5' are parsed, but evaluate to 'null' and bind nothing.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
