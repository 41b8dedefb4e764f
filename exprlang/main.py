"""Runs exprlang files, single expressions, or the interactive shell. Also uses the error handling context manager.
Called from the exprlang console script.
"""

import argparse
import logging

from exprlang.lang.error import ErrorHandler
from exprlang.lang.session import Session
from exprlang.lang.shell import Shell

TEST_INPUT = "(3 + 5) * (2 + 4)"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="exprlang", description="exprlang expression interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-e", "--expr", help="evaluate a single expression")
    parser.add_argument("-t", "--test", action="store_true", help=f"evaluate the fixed input '{TEST_INPUT}'")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree of each statement")
    parser.add_argument("-v", "--verbose", action="store_true", help="log parser and evaluator diagnostics")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs exprlang interpreter. Called from the exprlang console script."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with ErrorHandler() as error_handler:
        if args.expr is not None or args.test:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
            error_handler.fatal = True

            expr = args.expr if args.expr is not None else TEST_INPUT
            sess.add(expr, 1)
            if args.ast:
                print(sess.to_exec[1][1].display())
            sess.run()

            for value in sess.results:
                print(value)

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            if args.ast:
                for __, tree in sess.to_exec.values():
                    print(tree.display())
            sess.run()

            for value in sess.results:
                print(value)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
