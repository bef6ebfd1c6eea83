"""
Exception types raised while turning SVG path data into polylines.

Errors raised while handling a single ``d`` attribute derive from
``PathError`` and only abort that path element. ``ScannerError`` means the
surrounding XML could not be read and aborts the whole document.
``ToleranceError`` is raised before any input is read.
"""


class ParseError(ValueError):
    """Base class for all parse failures."""

    kind = "parse"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PathError(ParseError):
    """A single path element could not be interpreted."""


class LexicalError(PathError):
    """Malformed operand or command sequence inside a ``d`` value."""

    kind = "lexical"

    def __init__(self, message: str, position: int = -1):
        if position >= 0:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class InvalidStateError(PathError):
    """A positional command appeared without a usable current point."""

    kind = "state"


class UnsupportedCommandError(PathError):
    """A path command that is recognized but not implemented (arcs, shorthand)."""

    kind = "unsupported"

    def __init__(self, command: str):
        super().__init__(f"Unsupported path command: {command!r}")
        self.command = command


class ScannerError(ParseError):
    """The SVG document itself could not be scanned."""

    kind = "scanner"


class ToleranceError(ParseError):
    """A tolerance argument is out of range; nothing was parsed."""

    kind = "tolerance"
