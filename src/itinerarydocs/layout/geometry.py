"""Backend-neutral vector paths.

Rounded rectangles are built as an explicit path of straight edges and
cubic Bezier corners, so any backend that can replay move/line/curve
segments draws the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

# Control-point distance for a cubic Bezier approximating a quarter circle
KAPPA = 0.5522847498


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CurveTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathSegment = Union[MoveTo, LineTo, CurveTo, ClosePath]


@dataclass(frozen=True)
class VectorPath:
    segments: tuple[PathSegment, ...]

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)


def clamp_radius(requested: float, width: float, height: float) -> float:
    """Clamp a corner radius to ``[0, min(width, height) / 2]``."""
    return max(0.0, min(requested, min(width, height) / 2))


def rounded_rect_path(x: float, y: float, width: float, height: float, radius: float) -> VectorPath:
    """Closed path for a rectangle with quarter-circle corners.

    ``(x, y)`` is the bottom-left corner. The path runs counter-clockwise
    from the start of the bottom edge: four straight edges, each followed
    by one Bezier corner.
    """
    r = clamp_radius(radius, width, height)
    k = r * KAPPA
    right = x + width
    top = y + height
    return VectorPath((
        MoveTo(x + r, y),
        LineTo(right - r, y),
        CurveTo(right - r + k, y, right, y + r - k, right, y + r),
        LineTo(right, top - r),
        CurveTo(right, top - r + k, right - r + k, top, right - r, top),
        LineTo(x + r, top),
        CurveTo(x + r - k, top, x, top - r + k, x, top - r),
        LineTo(x, y + r),
        CurveTo(x, y + r - k, x + r - k, y, x + r, y),
        ClosePath(),
    ))
