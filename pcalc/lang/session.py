"""Session control for pcalc. Feeds lines from a file, the command line or the interactive shell through the
interpreter and collects their formatted results.

Every line is evaluated on its own: nothing computed on one line is visible to another.
"""

from pcalc.interpreter import calculate
from pcalc.lang.error import GenericException
from pcalc.lang.numerical import is_exact
from pcalc.lang.syntax import format_number


class Session:
    """Governs a pcalc session: a queue of expressions to evaluate and the results they produced."""
    SH_FILE = "<in>"       # interactive shell filename
    ARG_FILE = "<string>"  # -c/--command filename
    COMMENT = "#"

    def __init__(self, error_handler, path, cmd_line=False, echo=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in interactive mode
        self.echo = echo          # whether results are printed as soon as they are computed

        self.to_exec = {}  # dict of line num: expr to evaluate
        self.results = []  # formatted results, in line order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path not in (Session.SH_FILE, Session.ARG_FILE):
            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        self.add(line, line_num + 1)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif path == Session.SH_FILE and not cmd_line:
            raise GenericException("'{}' is a reserved filename", path, diagnosis=False)

    @staticmethod
    def preprocess_line(line):
        """Strips comments and surrounding whitespace from line."""
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]
        return line.strip()

    def add(self, line, line_num):
        """Queues line for evaluation. Blank and comment-only lines are ignored. Evaluation is delayed until run is
        called.
        """
        expr = Session.preprocess_line(line)
        if expr:
            self.to_exec[line_num] = expr

    def run(self):
        """Evaluates every queued expression in line order, appending results to self.results. In interactive mode an
        error is printed and the remaining expressions still run; otherwise the first error is fatal. With echo, each
        result is printed (and popped) before the next expression runs.
        """
        for line_num, expr in sorted(self.to_exec.items()):
            with self.error_handler:
                self.error_handler.register_line(self.path, expr, line_num)
                try:
                    self.results.append(self.evaluate(expr))
                finally:
                    del self.to_exec[line_num]
                if self.echo:
                    print(self.pop())
                self.error_handler.remove_line(self.path)  # error was not raised

    def evaluate(self, expr):
        """Returns formatted value of expr, warning if it is an integer too large to be exact."""
        value = calculate(expr)
        if value.is_integer() and not is_exact(value):
            self.error_handler.warn("'{}' may not be exact: integers above 2^53 lose precision", format_number(value),
                                    start=0, end=len(expr))
        return format_number(value)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
