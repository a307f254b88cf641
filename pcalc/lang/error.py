"""Error handling for pcalc. Every failure in the lexer, parser or evaluator is a GenericException subclass: if another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Taxonomy:

```
GenericException
 ├── LexError        UnexpectedCharacter, InvalidNumber
 ├── ParseError      EmptyInput, UnexpectedToken, UnclosedParen, TrailingInput, NestingTooDeep
 └── EvalError       DivisionByZero, DomainError, EvaluationTooDeep
```
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a pcalc error/warning. start and end are
    character offsets into the evaluated line delimiting the offending part of it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = str(exprs[0])  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else start + len(self.expr)

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class LexError(GenericException):
    """Raised while splitting text into tokens."""


class UnexpectedCharacter(LexError):

    def __init__(self, char, position):
        super().__init__("unexpected character '{}'", char, start=position, end=position + len(char))
        self.char = char
        self.position = position


class InvalidNumber(LexError):

    def __init__(self, literal, position):
        super().__init__("'{}' is not a valid number", literal, start=position)
        self.literal = literal
        self.position = position


class ParseError(GenericException):
    """Raised while building a syntax tree from tokens."""


class EmptyInput(ParseError):

    def __init__(self):
        super().__init__("expression cannot be empty", diagnosis=False)


class UnexpectedToken(ParseError):

    def __init__(self, token):
        if token.is_eof:
            super().__init__("unexpected end of expression", start=token.position, end=token.position + 1)
        else:
            super().__init__("unexpected token '{}'", token.text, start=token.position, end=token.end)
        self.token = token


class UnclosedParen(ParseError):

    def __init__(self, paren, found):
        super().__init__("'{}' was never closed", paren.text, start=paren.position, end=paren.end)
        self.paren = paren
        self.found = found


class TrailingInput(ParseError):

    def __init__(self, token):
        super().__init__("unexpected trailing input starting at '{}'", token.text, start=token.position,
                         end=token.end)
        self.token = token


class NestingTooDeep(ParseError):

    def __init__(self):
        super().__init__("expression is nested too deeply", diagnosis=False)


class EvalError(GenericException):
    """Raised while walking a syntax tree."""


class DivisionByZero(EvalError):

    def __init__(self, node):
        start, end = node.span
        super().__init__("division by zero", start=start, end=end, diagnosis=end > start)
        self.node = node


class DomainError(EvalError):

    def __init__(self, reason, node):
        start, end = node.span
        super().__init__(reason, start=start, end=end, diagnosis=end > start)
        self.reason = reason
        self.node = node


class EvaluationTooDeep(EvalError):

    def __init__(self, node):
        start, end = node.span
        super().__init__("expression is too long to evaluate", start=start, end=end, diagnosis=False)
        self.node = node


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print custom pcalc errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, out=None):
        self.fatal = fatal
        self.out = out if out is not None else sys.stdout
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to evaluating line."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after line evaluates successfully."""
        self.traceback[path] = (None, None)

    def current_line(self):
        """Returns the innermost registered line, or None."""
        for line, __ in reversed(list(self.traceback.values())):
            if line is not None:
                return line
        return None

    @staticmethod
    def diagnose(error, line, warning=False):
        """Returns offending part of line (delimited by error.start and error.end) highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        start = min(error.start, len(line))
        end = max(error.end, start + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _print(self, text):
        print(text, file=self.out)

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                location = f"{file}:{line_num}:{error.start + 1}: "

        warning_msg = colored(location, attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        self._print(warning_msg)

        line = self.current_line()
        if not error.internal and line and error.diagnosis:
            self._print(ErrorHandler.diagnose(error, line, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line is not None and line_num is not None:
                error_msg += f"  File '{file}', line {line_num}:\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        line = self.current_line()
        if not error.internal and line and error.diagnosis:
            self._print(ErrorHandler.diagnose(error, line))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
