"""
Draw commands produced by the time control renderer.

Rendering is a pure function of control state: the renderer returns a list
of these immutable commands and the host (see ui.qt_painter) executes them
on its own canvas. All coordinates are widget coordinates.
"""

import logging
from dataclasses import dataclass

from custom_types import ColorHex, Point
from enums import LineCap, TextAnchor

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class LineCommand:
    """Straight stroked line."""
    start: Point
    end: Point
    color: ColorHex
    width: float
    cap: LineCap = LineCap.BUTT


@dataclass(frozen=True)
class TextCommand:
    """Filled single-line text.

    `x` is the left edge unless `centered` is set, in which case it is the
    horizontal center. `anchor` says what `y` refers to. `rotation` turns the
    text about (x, y), clockwise in degrees.
    """
    text: str
    x: float
    y: float
    font_size: float
    color: ColorHex
    font: str = "primary"
    anchor: TextAnchor = TextAnchor.TOP
    centered: bool = False
    rotation: float = 0.0


@dataclass(frozen=True)
class ArcCommand:
    """Stroked open elliptical arc.

    Angles use the arc convention (0 at three o'clock, counter-clockwise
    positive). The arc is drawn after rotating by `rotation` degrees
    (clockwise positive) about `center`.
    """
    center: Point
    radius_x: float
    radius_y: float
    start_angle: float
    sweep_length: float
    color: ColorHex
    width: float
    cap: LineCap = LineCap.BUTT
    rotation: float = 0.0


@dataclass(frozen=True)
class CircleCommand:
    """Filled circle."""
    center: Point
    radius: float
    color: ColorHex


@dataclass(frozen=True)
class RectCommand:
    """Axis-aligned rectangle, filled and/or stroked."""
    x: float
    y: float
    width: float
    height: float
    fill: ColorHex | None = None
    stroke: ColorHex | None = None
    stroke_width: float = 0.0


DrawCommand = LineCommand | TextCommand | ArcCommand | CircleCommand | RectCommand


def with_alpha(color: ColorHex, alpha: float) -> ColorHex:
    """Return `color` ("#RRGGBB" or "#AARRGGBB") with its opacity set to `alpha`.

    The result uses the "#AARRGGBB" form understood by QColor.
    """
    value = color.lstrip("#")
    if len(value) == 8:
        value = value[2:]
    if len(value) != 6:
        raise ValueError(f"Unsupported color format: {color}")
    alpha_byte = max(0, min(255, round(alpha * 255)))
    return f"#{alpha_byte:02x}{value.lower()}"


def normalize_color(color: ColorHex, default: ColorHex) -> ColorHex:
    """Return `color` in lowercase "#rrggbb" or "#aarrggbb" form.

    "#RGB" is expanded to "#rrggbb". Anything else that is not a hex color
    (color names included) is logged and replaced by `default`.
    """
    if isinstance(color, str) and color.startswith("#"):
        value = color[1:]
        if value and set(value) <= _HEX_DIGITS:
            if len(value) == 3:
                value = "".join(digit * 2 for digit in value)
            if len(value) in (6, 8):
                return f"#{value.lower()}"
    logger.warning("Unsupported color %r, using %s", color, default)
    return default
