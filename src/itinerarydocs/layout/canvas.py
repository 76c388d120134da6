"""A fixed-size drawing surface that records draw commands.

Coordinates use the PDF convention: origin at the bottom-left corner, Y
growing upwards. A ``Page`` never renders anything itself; the recorded
commands are replayed by a backend (see
:mod:`itinerarydocs.generators.renderer`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, TypeVar, Union

from .geometry import VectorPath, rounded_rect_path

RGB = tuple[int, int, int]


class Align(str, Enum):
    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# Draw commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RectCommand:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    line_width: float = 1.0


@dataclass(frozen=True)
class TextCommand:
    """A single, pre-wrapped line of text.

    ``max_width`` is only an alignment hint: with ``Align.RIGHT`` the text
    ends at ``x + max_width``. Text is never re-wrapped.
    """
    x: float
    y: float
    text: str
    font_name: str
    size: float
    color: RGB
    max_width: Optional[float] = None
    align: Align = Align.LEFT


@dataclass(frozen=True)
class LineCommand:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    line_width: float = 1.0


@dataclass(frozen=True)
class ImageCommand:
    image: Any
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PathCommand:
    path: VectorPath
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    line_width: float = 1.0


DrawCommand = Union[RectCommand, TextCommand, LineCommand, ImageCommand, PathCommand]
C = TypeVar("C")


class SealedPageError(RuntimeError):
    """Raised when drawing on a page that has been sealed."""


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

class Page:
    """One physical page: a size plus an ordered list of draw commands."""

    def __init__(
        self,
        number: int,
        width: float,
        height: float,
        commands: Iterable[DrawCommand] = (),
    ) -> None:
        self.number = number
        self.width = width
        self.height = height
        self._commands: list[DrawCommand] = list(commands)
        self._sealed = False

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"<Page {self.number} {len(self._commands)} commands ({state})>"

    # -- State -----------------------------------------------------------

    @property
    def commands(self) -> tuple[DrawCommand, ...]:
        return tuple(self._commands)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> "Page":
        self._sealed = True
        return self

    def copy(self) -> "Page":
        """An open copy holding the same commands."""
        return Page(self.number, self.width, self.height, self._commands)

    def _record(self, command: DrawCommand) -> None:
        if self._sealed:
            raise SealedPageError(f"page {self.number} is sealed")
        self._commands.append(command)

    # -- Primitives ------------------------------------------------------

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        line_width: float = 1.0,
    ) -> None:
        self._record(RectCommand(x, y, width, height, fill, stroke, line_width))

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        font_name: str,
        size: float,
        color: RGB,
        max_width: Optional[float] = None,
        align: Align = Align.LEFT,
    ) -> None:
        if not text:
            return
        self._record(TextCommand(x, y, text, font_name, size, color, max_width, align))

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: RGB,
        line_width: float = 1.0,
    ) -> None:
        self._record(LineCommand(x1, y1, x2, y2, color, line_width))

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        self._record(ImageCommand(image, x, y, width, height))

    def draw_path(
        self,
        path: VectorPath,
        *,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        line_width: float = 1.0,
    ) -> None:
        self._record(PathCommand(path, fill, stroke, line_width))

    def draw_rounded_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        *,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        line_width: float = 1.0,
    ) -> None:
        """Rounded rectangle, recorded as a generic vector path."""
        path = rounded_rect_path(x, y, width, height, radius)
        self.draw_path(path, fill=fill, stroke=stroke, line_width=line_width)

    # -- Inspection ------------------------------------------------------

    def commands_of(self, kind: type[C]) -> list[C]:
        return [c for c in self._commands if isinstance(c, kind)]

    def texts(self) -> list[str]:
        return [c.text for c in self.commands_of(TextCommand)]
