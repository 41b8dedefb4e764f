"""Session control for the exprlang language. Feeds statements to the parser and evaluates them, either in
command-line mode or file interpretation mode.
"""

import logging

from exprlang.lang.error import GenericException
from exprlang.syntax.parser import Parser

logger = logging.getLogger(__name__)


class Session:
    """Governs an exprlang session: parsed statements waiting to be run, and the values they produced."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode

        self.to_exec = {}   # dict of line num: (statement, syntax tree) to evaluate
        self.results = []   # DataValues produced by run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = Session.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's statements), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev.
        """
        line = line.strip()
        if exprs is not None:
            if line and not add_to_prev:
                exprs.append((line, line_num))
            elif add_to_prev:
                prev, prev_num = exprs.pop()
                line = f"{prev} {line}".strip()
                exprs.append((line, prev_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Parses expr and queues it for evaluation. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        parser = Parser(expr)
        tree = parser.expr()
        if tree is None:
            raise GenericException("'{}' could not be parsed", expr)

        if not parser.at_end:
            start, __ = parser.lexer.span
            self.error_handler.warn("'{}' has trailing input that was not parsed", expr, start=start)

        logger.debug("parsed '%s':\n%s", expr, tree.display())
        self.to_exec[line_num] = (expr, tree)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued statements in order, appending their values to self.results. Will raise any
        errors that are encountered.
        """
        for line_num, (expr, tree) in sorted(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                value = tree.eval()
            finally:
                del self.to_exec[line_num]

            if value is None:
                raise GenericException("'{}' could not be evaluated", expr)

            logger.info("%s => %r", expr, value)
            self.results.append(value)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
