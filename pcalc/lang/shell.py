"""Handles interactive mode for pcalc. Uses cmd as backend."""

import cmd

from pcalc.lang.error import GenericException


class Shell(cmd.Cmd):
    """Arithmetic expression shell."""
    intro = ("Pratt calculator :: Python backend\n"
             "Type '?' or 'help' for more information.")
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Evaluates arbitrary expression."""
        self.line_num += 1
        self.sess.add(line, self.line_num)
        self.sess.run()

        while self.sess.results:
            print(self.sess.pop(), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the pcalc interpreter!\n\n"
              "Type an arithmetic expression and press enter to evaluate it. Supported operators:\n"
              "    +  addition (or unary plus)\n"
              "    -  subtraction (or negation)\n"
              "    *  multiplication\n"
              "    /  division\n"
              "    ^  exponentiation (right-associative, binds tighter than negation: -2^2 = -4)\n"
              "    !  factorial (postfix)\n"
              "as well as parentheses for grouping. Each line is evaluated on its own.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            with self.sess.error_handler:
                raise GenericException("unrecognized token: '{}'", arg, diagnosis=False)
            return False
        return True
