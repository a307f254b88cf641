"""Uses the pcalc interpreter to evaluate files of expressions, a single expression, or run in interactive mode. Also
uses error handling context manager. Called from the pcalc console script.
"""

import argparse
import sys

from pcalc.lang.error import ErrorHandler
from pcalc.lang.session import Session
from pcalc.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="pcalc", description="Evaluate arithmetic expressions.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("file", help="file of expressions, one per line (if empty, goes to interactive mode)",
                        nargs="?")
    source.add_argument("-c", "--command", metavar="EXPR", help="evaluate EXPR, print the result and exit")
    return parser


def main(argv=None):
    """Runs pcalc interpreter. Called from pcalc console script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.command is not None:
            sess = Session(error_handler, Session.ARG_FILE, echo=True)
            sess.add(args.command, 1)

        elif args.file is not None:
            sess = Session(error_handler, args.file, echo=True)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return

        sess.run()


if __name__ == "__main__":
    sys.exit(main())
