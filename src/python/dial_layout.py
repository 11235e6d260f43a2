"""
Proportional layout of the time control.

Every element's position and size is a fixed fraction of the content width
or height. The fractions live in LAYOUT_RATIOS, keyed by element, and must be
kept exactly as they are for the control to look right at its single
505/400 aspect ratio.
"""

import logging
import math
from dataclasses import dataclass

from custom_types import Point, TextMeasurer

logger = logging.getLogger(__name__)

PREFERRED_WIDTH = 400.0
PREFERRED_HEIGHT = 505.0
MINIMUM_WIDTH = 40.0
MINIMUM_HEIGHT = 50.0
MAXIMUM_WIDTH = 1024.0
MAXIMUM_HEIGHT = 1024.0
ASPECT_RATIO = PREFERRED_HEIGHT / PREFERRED_WIDTH

# Fractions of the content width unless the key ends in "_y_of_height"
LAYOUT_RATIOS: dict[str, float] = {
    "icon_size": 0.04725,
    "icon_y": 0.022,
    "label_font": 0.05,
    "label_x": 0.065,
    "label_y": 0.0125,
    "time_font": 0.12,
    "time_x": 0.05,
    "time_y": 0.0825,
    "duration_number_font": 0.11,
    "duration_unit_font": 0.05,
    "duration_spacing": 0.0125,
    "duration_default_x": 0.306,
    "duration_y_of_height": 0.54,
    "canvas_size": 0.75,
    "canvas_y_of_height": 0.30693069,
    "tick_label_font": 0.04,
    "arc_stroke": 0.115,
    "arc_radius": 0.4425,
    "handle_radius": 0.0525,
    "handle_icon_offset": 0.6,  # fraction of the icon size
    "center_x": 0.5,
    "center_y_of_height": 0.6039604,
}


@dataclass(frozen=True)
class DialLayout:
    """Geometry that depends only on the content bounds."""
    width: float
    height: float
    center: Point
    arc_radius: float
    arc_stroke_width: float
    handle_radius: float
    icon_size: float
    label_font_size: float
    time_font_size: float
    duration_number_font_size: float
    duration_unit_font_size: float
    duration_spacing: float
    duration_y: float
    tick_font_size: float
    canvas_size: float
    canvas_origin: Point


@dataclass(frozen=True)
class DialTexts:
    """The strings shown by the control."""
    start_label: str
    stop_label: str
    start_time: str
    stop_time: str
    hours: str
    hour_unit: str
    minutes: str
    minute_unit: str


@dataclass(frozen=True)
class TextPlacement:
    """Positions of the text elements; depends on the measured text widths."""
    start_icon: Point
    start_label: Point
    start_time: Point
    stop_icon: Point
    stop_label: Point
    stop_time: Point
    duration_x: float
    duration_width: float
    hours_x: float
    hour_unit_x: float
    minutes_x: float
    minute_unit_x: float
    duration_baseline: float


def estimate_text_width(text: str, font_size: float) -> float:
    """Rough text width for hosts without font metrics."""
    return len(text) * font_size * 0.55


def clamp_bounds(width: float, height: float) -> tuple[float, float]:
    """Clamp bounds to the allowed range and shrink to the fixed aspect ratio.

    The aspect ratio is applied after clamping, so it wins where both
    constraints cannot hold at once.
    """
    requested = (width, height)
    width = min(max(width, MINIMUM_WIDTH), MAXIMUM_WIDTH)
    height = min(max(height, MINIMUM_HEIGHT), MAXIMUM_HEIGHT)

    if math.isclose(ASPECT_RATIO * width, height):
        return width, height
    if ASPECT_RATIO * width > height:
        width = height / ASPECT_RATIO
    else:
        height = ASPECT_RATIO * width
    logger.debug("Bounds %.1fx%.1f clamped to %.1fx%.1f", requested[0], requested[1], width, height)
    return width, height


def compute_layout(width: float, height: float) -> DialLayout:
    """Proportional element geometry for content of the given size."""
    r = LAYOUT_RATIOS
    canvas_size = width * r["canvas_size"]
    return DialLayout(
        width=width,
        height=height,
        center=(width * r["center_x"], height * r["center_y_of_height"]),
        arc_radius=width * r["arc_radius"],
        arc_stroke_width=width * r["arc_stroke"],
        handle_radius=width * r["handle_radius"],
        icon_size=width * r["icon_size"],
        label_font_size=width * r["label_font"],
        time_font_size=width * r["time_font"],
        duration_number_font_size=width * r["duration_number_font"],
        duration_unit_font_size=width * r["duration_unit_font"],
        duration_spacing=width * r["duration_spacing"],
        duration_y=height * r["duration_y_of_height"],
        tick_font_size=width * r["tick_label_font"],
        canvas_size=canvas_size,
        canvas_origin=((width - canvas_size) * 0.5, height * r["canvas_y_of_height"]),
    )


def place_texts(layout: DialLayout, texts: DialTexts, measure_text: TextMeasurer) -> TextPlacement:
    """Position header texts, icons and the duration row.

    The start column is anchored to the left edge and the stop column to the
    right edge. The duration row (hours, unit, minutes, unit) is centered
    horizontally; its items share a baseline one number-font-size below the
    row top.
    """
    r = LAYOUT_RATIOS
    width = layout.width

    stop_label_width = measure_text(texts.stop_label, layout.label_font_size)
    stop_time_width = measure_text(texts.stop_time, layout.time_font_size)

    hours_width = measure_text(texts.hours, layout.duration_number_font_size)
    hour_unit_width = measure_text(texts.hour_unit, layout.duration_unit_font_size)
    minutes_width = measure_text(texts.minutes, layout.duration_number_font_size)
    minute_unit_width = measure_text(texts.minute_unit, layout.duration_unit_font_size)

    # Items are separated by the spacing; the hour unit and the minutes also
    # carry one extra spacing-sized margin between them.
    spacing = layout.duration_spacing
    margin = spacing
    text_width = hours_width + hour_unit_width + minutes_width + minute_unit_width
    duration_width = text_width + 3 * spacing + 2 * margin
    if text_width == 0:
        duration_x = width * r["duration_default_x"]
    else:
        duration_x = (width - duration_width) * 0.5

    hours_x = duration_x
    hour_unit_x = hours_x + hours_width + spacing
    minutes_x = hour_unit_x + hour_unit_width + margin + spacing + margin
    minute_unit_x = minutes_x + minutes_width + spacing

    return TextPlacement(
        start_icon=(0.0, width * r["icon_y"]),
        start_label=(width * r["label_x"], width * r["label_y"]),
        start_time=(width * r["time_x"], width * r["time_y"]),
        stop_icon=(width - stop_label_width - width * r["label_x"], width * r["icon_y"]),
        stop_label=(width - stop_label_width, width * r["label_y"]),
        stop_time=(width - stop_time_width - width * r["time_x"], width * r["time_y"]),
        duration_x=duration_x,
        duration_width=duration_width,
        hours_x=hours_x,
        hour_unit_x=hour_unit_x,
        minutes_x=minutes_x,
        minute_unit_x=minute_unit_x,
        duration_baseline=layout.duration_y + layout.duration_number_font_size,
    )


def handle_icon_origin(handle_center: Point, handle_radius: float, icon_size: float) -> Point:
    """Top-left corner of the icon drawn on a handle."""
    offset = icon_size * LAYOUT_RATIOS["handle_icon_offset"]
    return (
        handle_center[0] - handle_radius + offset,
        handle_center[1] - handle_radius + offset,
    )
