"""Runs minilang source files, or starts minilang in command-line mode. Also uses the error handling context manager.
Called from the minilang console script or with `python -m minilang`.
"""

import argparse

from minilang.lang.error import ErrorHandler
from minilang.lang.session import Session
from minilang.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="minilang", description="Interpreter for the minilang scripting language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree of every statement instead of "
                                                           "running the file")
    parser.add_argument("--legacy-strings", action="store_true", help="read string literals that match a variable "
                                                                      "name as that variable (with a warning)")
    return parser


def main(argv=None):
    """Runs minilang interpreter. Called from minilang executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, legacy_strings=args.legacy_strings)
            if args.ast:
                for statement in sess.statements:
                    print(statement.display())
            else:
                sess.run()

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, legacy_strings=args.legacy_strings)
            Shell(sess).cmdloop()
