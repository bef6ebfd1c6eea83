"""
Lexer for the SVG path data grammar (the ``d`` attribute).

Turns path data text into a lazy sequence of typed path commands. Supported
commands are M, L, H, V, C, Q and Z in absolute (uppercase) and relative
(lowercase) form. Any other command letter is reported as ``Unsupported``
so the caller can decide what to do with it.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Union

from .errors import LexicalError


@dataclass(frozen=True)
class MoveTo:
    is_absolute: bool
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    is_absolute: bool
    x: float
    y: float


@dataclass(frozen=True)
class HorizontalLineTo:
    is_absolute: bool
    x: float


@dataclass(frozen=True)
class VerticalLineTo:
    is_absolute: bool
    y: float


@dataclass(frozen=True)
class CubicCurveTo:
    is_absolute: bool
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float


@dataclass(frozen=True)
class QuadraticCurveTo:
    is_absolute: bool
    x1: float
    y1: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    is_absolute: bool


@dataclass(frozen=True)
class Unsupported:
    """A command letter this lexer does not implement, e.g. ``A`` or ``S``."""

    kind: str


PathCommand = Union[
    MoveTo,
    LineTo,
    HorizontalLineTo,
    VerticalLineTo,
    CubicCurveTo,
    QuadraticCurveTo,
    ClosePath,
    Unsupported,
]

# Number of operands each command consumes per group
ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "Q": 4, "Z": 0}

# Numbers are tried before command letters so the exponent in "1e5" is not
# mistaken for a command.
_TOKEN_RE = re.compile(
    r"""
    (?P<number>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<command>[A-Za-z])
    |(?P<separator>[\s,]+)
    |(?P<invalid>.)
    """,
    re.VERBOSE | re.DOTALL,
)


def _build(letter: str, operands: List[float]) -> PathCommand:
    """Create the command for one complete operand group."""
    absolute = letter.isupper()
    upper = letter.upper()
    if upper == "M":
        return MoveTo(absolute, *operands)
    if upper == "L":
        return LineTo(absolute, *operands)
    if upper == "H":
        return HorizontalLineTo(absolute, *operands)
    if upper == "V":
        return VerticalLineTo(absolute, *operands)
    if upper == "C":
        return CubicCurveTo(absolute, *operands)
    return QuadraticCurveTo(absolute, *operands)


def tokenize_path(d: str) -> Iterator[PathCommand]:
    """
    Lex SVG path data into path commands.

    Repeated operand groups repeat the previous command; extra coordinate
    pairs after a MoveTo are implicit LineTo commands of the same case.

    Args:
        d: SVG path data string

    Yields:
        One command per operand group (or per ``Z``/unsupported letter)

    Raises:
        LexicalError: at the first malformed token; nothing further is yielded
    """
    command = None
    operands: List[float] = []
    awaiting_operands = False
    skipping = False

    for match in _TOKEN_RE.finditer(d):
        kind = match.lastgroup
        text = match.group()

        if kind == "separator":
            continue

        if kind == "invalid":
            raise LexicalError(f"Unexpected character {text!r}", match.start())

        if kind == "command":
            if operands:
                raise LexicalError(f"Incomplete operands for command {command!r}", match.start())
            if awaiting_operands:
                raise LexicalError(f"Missing operands for command {command!r}", match.start())

            command = text
            upper = text.upper()
            if upper not in ARITY:
                # Operands of unknown commands are skipped up to the next letter
                skipping = True
                yield Unsupported(text)
            elif upper == "Z":
                skipping = False
                yield ClosePath(text == "Z")
            else:
                skipping = False
                awaiting_operands = True
            continue

        # It's a number
        if skipping:
            continue
        if command is None:
            raise LexicalError("Path data must start with a command", match.start())
        arity = ARITY[command.upper()]
        if arity == 0:
            raise LexicalError(f"Unexpected operand {text!r} after {command!r}", match.start())

        operands.append(float(text))
        awaiting_operands = False
        if len(operands) == arity:
            yield _build(command, operands)
            operands = []
            if command == "M":
                command = "L"
            elif command == "m":
                command = "l"

    if operands:
        raise LexicalError(f"Incomplete operands for command {command!r}", len(d))
    if awaiting_operands:
        raise LexicalError(f"Missing operands for command {command!r}", len(d))
