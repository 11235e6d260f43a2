"""QPainter backend for time control draw commands.

Executes the toolkit-neutral commands produced by TimeControl.render() and
measures text with the same fonts, so layout and painting agree.
"""
import logging

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen

from config_manager import config
from enums import LineCap, TextAnchor
from render_commands import (
    ArcCommand,
    CircleCommand,
    DrawCommand,
    LineCommand,
    RectCommand,
    TextCommand,
)

logger = logging.getLogger(__name__)

_CAP_STYLES = {
    LineCap.BUTT: Qt.PenCapStyle.FlatCap,
    LineCap.ROUND: Qt.PenCapStyle.RoundCap,
}


def make_font(font_size: float, font_key: str = "primary") -> QFont:
    """Create a font from the configured family at a pixel size."""
    font = QFont(config.get_font(font_key))
    font.setPixelSize(max(1, round(font_size)))
    return font


def measure_text(text: str, font_size: float) -> float:
    """Width of `text` in the primary font; used as the TimeControl measurer."""
    return QFontMetricsF(make_font(font_size)).horizontalAdvance(text)


def _make_pen(color: str, width: float, cap: LineCap = LineCap.BUTT) -> QPen:
    pen = QPen(QColor(color))
    pen.setWidthF(width)
    pen.setCapStyle(_CAP_STYLES[cap])
    return pen


def _text_offset_y(metrics: QFontMetricsF, anchor: TextAnchor) -> float:
    """Offset from the anchor point to the text baseline."""
    if anchor == TextAnchor.TOP:
        return metrics.ascent()
    if anchor == TextAnchor.CENTER:
        return (metrics.ascent() - metrics.descent()) * 0.5
    if anchor == TextAnchor.BOTTOM:
        return -metrics.descent()
    return 0.0


def _paint_line(painter: QPainter, cmd: LineCommand) -> None:
    painter.setPen(_make_pen(cmd.color, cmd.width, cmd.cap))
    painter.drawLine(QPointF(*cmd.start), QPointF(*cmd.end))


def _paint_text(painter: QPainter, cmd: TextCommand) -> None:
    font = make_font(cmd.font_size, cmd.font)
    metrics = QFontMetricsF(font)
    offset_x = -metrics.horizontalAdvance(cmd.text) * 0.5 if cmd.centered else 0.0

    painter.save()
    painter.setFont(font)
    painter.setPen(QColor(cmd.color))
    painter.translate(cmd.x, cmd.y)
    if cmd.rotation:
        painter.rotate(cmd.rotation)
    painter.drawText(QPointF(offset_x, _text_offset_y(metrics, cmd.anchor)), cmd.text)
    painter.restore()


def _paint_arc(painter: QPainter, cmd: ArcCommand) -> None:
    painter.save()
    painter.translate(*cmd.center)
    if cmd.rotation:
        painter.rotate(cmd.rotation)
    painter.setPen(_make_pen(cmd.color, cmd.width, cmd.cap))
    painter.setBrush(Qt.BrushStyle.NoBrush)
    rect = QRectF(-cmd.radius_x, -cmd.radius_y, cmd.radius_x * 2, cmd.radius_y * 2)
    # QPainter takes arc angles in 1/16th of a degree
    painter.drawArc(rect, round(cmd.start_angle * 16), round(cmd.sweep_length * 16))
    painter.restore()


def _paint_circle(painter: QPainter, cmd: CircleCommand) -> None:
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QBrush(QColor(cmd.color)))
    painter.drawEllipse(QPointF(*cmd.center), cmd.radius, cmd.radius)


def _paint_rect(painter: QPainter, cmd: RectCommand) -> None:
    if cmd.stroke is not None and cmd.stroke_width > 0:
        painter.setPen(_make_pen(cmd.stroke, cmd.stroke_width))
    else:
        painter.setPen(Qt.PenStyle.NoPen)
    if cmd.fill is not None:
        painter.setBrush(QBrush(QColor(cmd.fill)))
    else:
        painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.drawRect(QRectF(cmd.x, cmd.y, cmd.width, cmd.height))


def paint_commands(painter: QPainter, commands: list[DrawCommand]) -> None:
    """Execute draw commands in order on an active painter."""
    for cmd in commands:
        if isinstance(cmd, LineCommand):
            _paint_line(painter, cmd)
        elif isinstance(cmd, TextCommand):
            _paint_text(painter, cmd)
        elif isinstance(cmd, ArcCommand):
            _paint_arc(painter, cmd)
        elif isinstance(cmd, CircleCommand):
            _paint_circle(painter, cmd)
        elif isinstance(cmd, RectCommand):
            _paint_rect(painter, cmd)
        else:
            logger.warning("Unknown draw command %r", cmd)
