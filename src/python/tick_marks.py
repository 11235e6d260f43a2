"""Tick-mark ring drawn around the dial.

96 ticks, one per 15 minutes. Every fourth tick is an hour mark: longer,
brighter and labeled with its hour. The ring is laid out inside a square
canvas whose top-left corner sits at `origin`.
"""
import math
import logging

import numpy as np

from custom_types import AngleArray, ColorHex, Point
from enums import LineCap, TextAnchor, TickLabelOrientation
from render_commands import DrawCommand, LineCommand, TextCommand, with_alpha

logger = logging.getLogger(__name__)

TICK_COUNT = 96
TICKS_PER_HOUR = 4
TICK_START_ANGLE = 180.0
TICK_ANGLE_STEP = 3.75
MAJOR_TICK_ALPHA = 0.5
MINOR_TICK_ALPHA = 0.25

# Radii as fractions of the canvas size
MAJOR_INNER_RADIUS = 0.465
MINOR_INNER_RADIUS = 0.478
OUTER_RADIUS = 0.5
LABEL_RADIUS = 0.42
LINE_WIDTH = 0.005


def tick_angles() -> AngleArray:
    """Angles of all ticks, in degrees, relative to the start angle."""
    return -TICK_ANGLE_STEP * np.arange(TICK_COUNT, dtype=np.float64)


def tick_label(index: int) -> str:
    """Hour label for the tick at `index`."""
    return "0" if index == 0 else str(index // TICKS_PER_HOUR)


def rotate_for_text(start_angle: float, angle: float, orientation: TickLabelOrientation) -> float:
    """Rotation in degrees (clockwise) to apply to a tick label.

    Horizontal labels are never rotated. Orthogonal labels point along the
    radius and tangent labels follow the ring; both flip by 180 degrees on
    the lower half so they never read upside down.
    """
    if orientation == TickLabelOrientation.ORTHOGONAL:
        base = math.fmod(360 - start_angle - angle, 360)
        if 90 < base < 270:
            return math.fmod(180 - start_angle - angle, 360)
        return base
    if orientation == TickLabelOrientation.TANGENT:
        base = math.fmod(360 - start_angle - angle - 90, 360)
        if 90 < base < 270:
            return math.fmod(90 - start_angle - angle, 360)
        return math.fmod(270 - start_angle - angle, 360)
    return 0.0


def draw_tick_marks(
    canvas_size: float,
    text_color: ColorHex,
    font_size: float,
    origin: Point = (0.0, 0.0),
    orientation: TickLabelOrientation = TickLabelOrientation.HORIZONTAL
) -> list[DrawCommand]:
    """Build the draw commands for the tick-mark ring.

    Args:
        canvas_size: Edge length of the square tick canvas
        text_color: Base color; ticks use it at fixed opacities
        font_size: Hour label font size
        origin: Top-left corner of the canvas in widget coordinates
        orientation: Hour label orientation

    Returns:
        96 line commands interleaved with 24 hour-label text commands.
    """
    commands: list[DrawCommand] = []
    if canvas_size <= 0:
        logger.debug("Skipping tick marks for empty canvas")
        return commands

    major_color = with_alpha(text_color, MAJOR_TICK_ALPHA)
    minor_color = with_alpha(text_color, MINOR_TICK_ALPHA)
    line_width = canvas_size * LINE_WIDTH

    center_x = origin[0] + canvas_size * 0.5
    center_y = origin[1] + canvas_size * 0.5

    angles = tick_angles()
    radians = np.radians(angles + TICK_START_ANGLE)
    sin_values = np.sin(radians)
    cos_values = np.cos(radians)

    def ring_point(i: int, fraction: float) -> Point:
        radius = canvas_size * fraction
        return (
            float(center_x + radius * sin_values[i]),
            float(center_y + radius * cos_values[i]),
        )

    for i in range(TICK_COUNT):
        outer_point = ring_point(i, OUTER_RADIUS)
        if i % TICKS_PER_HOUR == 0:
            commands.append(LineCommand(
                ring_point(i, MAJOR_INNER_RADIUS), outer_point, major_color, line_width, LineCap.BUTT))
            text_x, text_y = ring_point(i, LABEL_RADIUS)
            commands.append(TextCommand(
                text=tick_label(i),
                x=text_x,
                y=text_y,
                font_size=font_size,
                color=major_color,
                font="light",
                anchor=TextAnchor.CENTER,
                centered=True,
                rotation=rotate_for_text(TICK_START_ANGLE, float(angles[i]), orientation),
            ))
        else:
            commands.append(LineCommand(
                ring_point(i, MINOR_INNER_RADIUS), outer_point, minor_color, line_width, LineCap.BUTT))

    return commands
