"""
Subpath accumulator: turns a stream of path commands into polylines.

``CurrentLine`` tracks the current point and the polyline being drawn. A
MoveTo commits the polyline in progress and starts a new one, so one path
element can produce several polylines.
"""

import logging
from typing import List, Optional

from .config import DEFAULT_FLATTENING_TOLERANCE
from .errors import InvalidStateError, ToleranceError, UnsupportedCommandError
from .flatten import flatten_cubic, flatten_quadratic
from .geometry import CoordinatePair, Polyline
from .path_lexer import (
    ClosePath,
    CubicCurveTo,
    HorizontalLineTo,
    LineTo,
    MoveTo,
    PathCommand,
    QuadraticCurveTo,
    Unsupported,
    VerticalLineTo,
)

logger = logging.getLogger(__name__)


def check_tolerances(flattening_tolerance: float, prefilter_tolerance: Optional[float]) -> None:
    """
    Reject tolerances the accumulator cannot work with.

    The flattening tolerance must be positive. A prefilter tolerance of None
    or 0 disables the filter; any other value must be positive.

    Raises:
        ToleranceError: if either value is out of range
    """
    if not flattening_tolerance > 0:
        raise ToleranceError(f"Flattening tolerance must be positive, got {flattening_tolerance!r}")
    if prefilter_tolerance is not None and not prefilter_tolerance >= 0:
        raise ToleranceError(f"Prefilter tolerance must not be negative, got {prefilter_tolerance!r}")


class CurrentLine:
    """
    Polyline buffer for one path element.

    Attributes:
        line: points of the polyline in progress
        prev_end: where the previous polyline ended; relative MoveTo commands
            resolve against it when the buffer is empty
        current: the current point in absolute coordinates
    """

    def __init__(self, flattening_tolerance: float = DEFAULT_FLATTENING_TOLERANCE,
                 prefilter_tolerance: Optional[float] = None):
        check_tolerances(flattening_tolerance, prefilter_tolerance)
        self.flattening_tolerance = flattening_tolerance
        # 0 disables the filter like None does
        self.prefilter_tolerance = prefilter_tolerance or None
        self.line: Polyline = []
        self.prev_end: Optional[CoordinatePair] = None
        self.current: Optional[CoordinatePair] = None

    def is_valid(self) -> bool:
        """A polyline is only valid if it has more than one point."""
        return len(self.line) > 1

    def last_x(self) -> Optional[float]:
        return self.current.x if self.current is not None else None

    def last_y(self) -> Optional[float]:
        return self.current.y if self.current is not None else None

    def resolve(self, is_absolute: bool, x: float, y: float) -> CoordinatePair:
        """
        Turn command operands into an absolute point.

        Relative operands resolve against the current point, then against
        ``prev_end``; with neither they are taken as absolute.
        """
        if is_absolute:
            return CoordinatePair(x, y)
        base = self.current if self.current is not None else self.prev_end
        if base is None:
            return CoordinatePair(x, y)
        return CoordinatePair(base.x + x, base.y + y)

    def add(self, point: CoordinatePair) -> bool:
        """
        Move the current point and append it to the buffer.

        With a prefilter tolerance set, a point whose x and y deltas from the
        last appended point are both within it is not appended. Returns
        whether the point was appended.
        """
        self.current = point
        tolerance = self.prefilter_tolerance
        if tolerance is not None and self.line:
            last = self.line[-1]
            if abs(point.x - last.x) <= tolerance and abs(point.y - last.y) <= tolerance:
                return False
        self.line.append(point)
        return True

    def close(self) -> None:
        """Close the line by appending its first point."""
        if len(self.line) < 2:
            raise InvalidStateError("Invalid state: cannot close a line with <2 points")
        first = self.line[0]
        self.line.append(first)
        self.current = first
        self.prev_end = first

    def commit(self) -> Polyline:
        """Return the polyline in progress and start over with an empty buffer."""
        finished = self.line
        if self.current is not None:
            self.prev_end = self.current
        self.line = []
        self.current = None
        return finished

    def apply(self, command: PathCommand, lines: List[Polyline]) -> None:
        """
        Apply one path command, appending any polyline it completes to ``lines``.

        Raises:
            InvalidStateError: positional command without a current point, or
                ClosePath on fewer than two points
            UnsupportedCommandError: for ``Unsupported`` commands
        """
        if isinstance(command, MoveTo):
            target = self.resolve(command.is_absolute, command.x, command.y)
            if self.is_valid():
                lines.append(self.commit())
            # A lone point left over from a previous MoveTo is discarded
            self.line = [target]
            self.current = target

        elif isinstance(command, LineTo):
            self.add(self.resolve(command.is_absolute, command.x, command.y))

        elif isinstance(command, HorizontalLineTo):
            y = self.last_y()
            if y is None:
                raise InvalidStateError("Invalid state: HorizontalLineTo on empty CurrentLine")
            x = command.x if command.is_absolute else self.current.x + command.x
            self.add(CoordinatePair(x, y))

        elif isinstance(command, VerticalLineTo):
            x = self.last_x()
            if x is None:
                raise InvalidStateError("Invalid state: VerticalLineTo on empty CurrentLine")
            y = command.y if command.is_absolute else self.current.y + command.y
            self.add(CoordinatePair(x, y))

        elif isinstance(command, CubicCurveTo):
            start = self.current
            if start is None:
                raise InvalidStateError("Invalid state: CurveTo on empty CurrentLine")
            ctrl1 = self.resolve(command.is_absolute, command.x1, command.y1)
            ctrl2 = self.resolve(command.is_absolute, command.x2, command.y2)
            end = self.resolve(command.is_absolute, command.x, command.y)
            for point in flatten_cubic(start, ctrl1, ctrl2, end, self.flattening_tolerance):
                self.add(point)

        elif isinstance(command, QuadraticCurveTo):
            start = self.current
            if start is None:
                raise InvalidStateError("Invalid state: Quadratic on empty CurrentLine")
            ctrl = self.resolve(command.is_absolute, command.x1, command.y1)
            end = self.resolve(command.is_absolute, command.x, command.y)
            for point in flatten_quadratic(start, ctrl, end, self.flattening_tolerance):
                self.add(point)

        elif isinstance(command, ClosePath):
            self.close()

        elif isinstance(command, Unsupported):
            raise UnsupportedCommandError(command.kind)

        else:
            raise TypeError(f"Not a path command: {command!r}")

        logger.debug("  %s -> current point %s", command, self.current)
