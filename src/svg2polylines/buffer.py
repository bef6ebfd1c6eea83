"""
Contiguous storage of a polyline list for handing results to native code.

All coordinates live in one ``array('d')`` of interleaved x/y values, with an
``(offset, length)`` entry per polyline, offsets and lengths counted in
points. The buffer object owns the memory; ``release()`` drops it once and
further access raises ``ValueError``.
"""

from array import array
from typing import Iterator, List, Sequence, Tuple

from .geometry import CoordinatePair, Polyline, PointLike


class PolylineBuffer:
    """Owned handle over a flattened list of polylines."""

    def __init__(self, polylines: Sequence[Sequence[PointLike]]):
        self._coords = array('d')
        self._spans: List[Tuple[int, int]] = []
        for polyline in polylines:
            self._spans.append((len(self._coords) // 2, len(polyline)))
            for x, y in polyline:
                self._coords.append(x)
                self._coords.append(y)
        self._released = False

    def _check(self) -> None:
        if self._released:
            raise ValueError("PolylineBuffer has been released")

    @property
    def coords(self) -> memoryview:
        """Read-only view of the interleaved x/y doubles."""
        self._check()
        return memoryview(self._coords).toreadonly()

    @property
    def spans(self) -> List[Tuple[int, int]]:
        """``(offset, length)`` of each polyline, in points."""
        self._check()
        return list(self._spans)

    @property
    def released(self) -> bool:
        return self._released

    def __len__(self) -> int:
        self._check()
        return len(self._spans)

    def __getitem__(self, index: int) -> Polyline:
        self._check()
        offset, length = self._spans[index]
        data = self._coords[2 * offset:2 * (offset + length)]
        return [CoordinatePair(data[i], data[i + 1]) for i in range(0, len(data), 2)]

    def __iter__(self) -> Iterator[Polyline]:
        for index in range(len(self)):
            yield self[index]

    def release(self) -> None:
        """Free the coordinate storage. Safe to call more than once."""
        if self._released:
            return
        self._coords = array('d')
        self._spans = []
        self._released = True

    def __enter__(self) -> "PolylineBuffer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()
