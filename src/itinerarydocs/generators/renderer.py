"""Replay recorded pages onto a ReportLab canvas and serialise to bytes."""

from __future__ import annotations

import io
from typing import Sequence

from reportlab.lib import colors
from reportlab.pdfgen import canvas as rl_canvas

from .. import __version__
from ..layout.canvas import (
    Align,
    DrawCommand,
    ImageCommand,
    LineCommand,
    Page,
    PathCommand,
    RectCommand,
    TextCommand,
)
from ..layout.geometry import ClosePath, CurveTo, LineTo, MoveTo, VectorPath


def _rgb(t: tuple) -> colors.Color:
    return colors.Color(t[0] / 255, t[1] / 255, t[2] / 255)


class ReportLabRenderer:
    """Turns a sequence of :class:`Page` values into PDF bytes."""

    creator = f"itinerarydocs {__version__}"

    def render(
        self,
        pages: Sequence[Page],
        *,
        title: str = "",
        author: str = "",
        subject: str = "",
    ) -> bytes:
        if not pages:
            raise ValueError("cannot serialise a document without pages")

        buffer = io.BytesIO()
        first = pages[0]
        pdf = rl_canvas.Canvas(buffer, pagesize=(first.width, first.height), pageCompression=1)
        pdf.setTitle(title)
        pdf.setAuthor(author)
        pdf.setSubject(subject)
        pdf.setCreator(self.creator)

        for page in pages:
            pdf.setPageSize((page.width, page.height))
            pdf.saveState()
            for command in page.commands:
                self._replay(pdf, command)
            pdf.restoreState()
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _replay(self, pdf: rl_canvas.Canvas, command: DrawCommand) -> None:
        if isinstance(command, RectCommand):
            self._rect(pdf, command)
        elif isinstance(command, TextCommand):
            self._text(pdf, command)
        elif isinstance(command, LineCommand):
            pdf.setStrokeColor(_rgb(command.color))
            pdf.setLineWidth(command.line_width)
            pdf.line(command.x1, command.y1, command.x2, command.y2)
        elif isinstance(command, ImageCommand):
            pdf.drawImage(
                command.image, command.x, command.y,
                width=command.width, height=command.height, mask="auto",
            )
        elif isinstance(command, PathCommand):
            self._path(pdf, command)
        else:
            raise TypeError(f"unknown draw command: {type(command).__name__}")

    @staticmethod
    def _rect(pdf: rl_canvas.Canvas, cmd: RectCommand) -> None:
        if cmd.fill is None and cmd.stroke is None:
            return
        if cmd.fill is not None:
            pdf.setFillColor(_rgb(cmd.fill))
        if cmd.stroke is not None:
            pdf.setStrokeColor(_rgb(cmd.stroke))
            pdf.setLineWidth(cmd.line_width)
        pdf.rect(
            cmd.x, cmd.y, cmd.width, cmd.height,
            fill=int(cmd.fill is not None), stroke=int(cmd.stroke is not None),
        )

    @staticmethod
    def _text(pdf: rl_canvas.Canvas, cmd: TextCommand) -> None:
        pdf.setFont(cmd.font_name, cmd.size)
        pdf.setFillColor(_rgb(cmd.color))
        if cmd.align is Align.RIGHT and cmd.max_width is not None:
            pdf.drawRightString(cmd.x + cmd.max_width, cmd.y, cmd.text)
        else:
            pdf.drawString(cmd.x, cmd.y, cmd.text)

    @staticmethod
    def _path(pdf: rl_canvas.Canvas, cmd: PathCommand) -> None:
        if cmd.fill is None and cmd.stroke is None:
            return
        path = pdf.beginPath()
        _trace(path, cmd.path)
        if cmd.fill is not None:
            pdf.setFillColor(_rgb(cmd.fill))
        if cmd.stroke is not None:
            pdf.setStrokeColor(_rgb(cmd.stroke))
            pdf.setLineWidth(cmd.line_width)
        pdf.drawPath(path, fill=int(cmd.fill is not None), stroke=int(cmd.stroke is not None))


def _trace(path, vector: VectorPath) -> None:
    for seg in vector:
        if isinstance(seg, MoveTo):
            path.moveTo(seg.x, seg.y)
        elif isinstance(seg, LineTo):
            path.lineTo(seg.x, seg.y)
        elif isinstance(seg, CurveTo):
            path.curveTo(seg.x1, seg.y1, seg.x2, seg.y2, seg.x, seg.y)
        elif isinstance(seg, ClosePath):
            path.close()
