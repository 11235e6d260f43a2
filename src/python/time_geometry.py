"""
Geometry engine for the time control dial.

Maps pointer positions to dial angles and angles to times of day, and maps
times of day back to handle positions and bar arc parameters.

Angles follow screen conventions: 0 degrees points right of the dial center
and angles grow clockwise (y axis points down). Midnight sits at the top of
the dial, so a pointer angle of 0 corresponds to 06:00.
"""

import math
import logging
from datetime import time

from custom_types import Point

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
ANGLE_STEP = 360.0 / SECONDS_PER_DAY  # degrees per second of the day
DIAL_OFFSET_SECONDS = 21600           # pointer angle 0 is 06:00
BAR_ROTATION = -90.0                  # base rotation of the bar arc about the dial center
HANDLE_ROTATION = -180.0              # base rotation of the handle coordinate system
MIN_POINTER_RADIUS = 1e-6


def seconds_of_day(value: time) -> int:
    """Whole seconds since midnight for a time of day (sub-second part dropped)."""
    return value.hour * 3600 + value.minute * 60 + value.second


def time_from_seconds(seconds: int) -> time:
    """Build a time of day from seconds since midnight, wrapping into one day."""
    seconds = int(seconds) % SECONDS_PER_DAY
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return time(hours, minutes, secs)


def pointer_to_angle(
    x: float,
    y: float,
    center_x: float,
    center_y: float,
    min_radius: float = MIN_POINTER_RADIUS
) -> float | None:
    """Convert a pointer position into a dial angle.

    Args:
        x: Pointer x in widget coordinates
        y: Pointer y in widget coordinates
        center_x: Dial center x
        center_y: Dial center y
        min_radius: Pointer distances below this produce no angle

    Returns:
        Angle in degrees in [0, 360), or None when the pointer sits on the
        dial center and no direction can be derived.
    """
    delta_x = x - center_x
    delta_y = y - center_y
    radius = math.sqrt(delta_x * delta_x + delta_y * delta_y)
    if radius < min_radius:
        logger.debug("Pointer at dial center (%.3f, %.3f), no angle", x, y)
        return None

    nx = delta_x / radius
    ny = delta_y / radius
    theta = math.degrees(math.atan2(ny, nx))
    if theta < 0.0:
        theta += 360.0
    # atan2 can return -0.0 or a value that rounds up to 360.0 after the shift
    if theta >= 360.0:
        theta -= 360.0
    return theta


def angle_to_time_of_day(theta: float) -> int:
    """Convert a dial angle into seconds since midnight."""
    angle = math.fmod(-theta, 360.0)
    seconds = round(abs(angle) / ANGLE_STEP)
    return (seconds + DIAL_OFFSET_SECONDS) % SECONDS_PER_DAY


def time_of_day_to_angle(seconds: int) -> float:
    """Convert seconds since midnight into the dial angle a pointer would have."""
    return ((seconds - DIAL_OFFSET_SECONDS) % SECONDS_PER_DAY) * ANGLE_STEP


def rotate_point(point: Point, pivot: Point, degrees: float) -> Point:
    """Rotate a point about a pivot; positive degrees turn clockwise on screen."""
    radians = math.radians(degrees)
    cos_value = math.cos(radians)
    sin_value = math.sin(radians)
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    return (
        pivot[0] + dx * cos_value - dy * sin_value,
        pivot[1] + dx * sin_value + dy * cos_value,
    )


def handle_position_for_angle(
    theta: float,
    center: Point,
    radius_x: float,
    radius_y: float
) -> Point:
    """Place a handle on the dial at a pointer angle.

    The position is computed in the handle coordinate system, whose angle is
    offset by -90 degrees, then brought into widget coordinates through the
    handle system's own -180 degree rotation about the dial center.
    """
    handle_angle = math.radians(-theta - 90.0)
    local = (
        center[0] + radius_x * math.sin(handle_angle),
        center[1] + radius_y * math.cos(handle_angle),
    )
    return rotate_point(local, center, HANDLE_ROTATION)


def time_of_day_to_handle_position(
    seconds: int,
    center: Point,
    radius_x: float,
    radius_y: float
) -> Point:
    """Widget position of a handle showing the given time of day."""
    return handle_position_for_angle(time_of_day_to_angle(seconds), center, radius_x, radius_y)


def compute_duration(start: int, stop: int) -> int:
    """Forward distance in seconds from start to stop, wrapping through midnight."""
    start_seconds = start - SECONDS_PER_DAY if start > stop else start
    return abs(stop - start_seconds)


def bar_arc(start: int, stop: int) -> tuple[float, float]:
    """Start angle and sweep length of the bar arc, before its base rotation.

    Both values use the arc convention of counter-clockwise positive angles,
    so the negative sweep runs clockwise from start to stop.
    """
    start_seconds = start - SECONDS_PER_DAY if start > stop else start
    delta_seconds = abs(stop - start_seconds)
    return -start_seconds * ANGLE_STEP, -delta_seconds * ANGLE_STEP


def format_time_of_day(seconds: int) -> str:
    """Format seconds since midnight as HH:mm."""
    value = time_from_seconds(seconds)
    return f"{value.hour:02d}:{value.minute:02d}"


def format_duration(seconds: int) -> tuple[str, str]:
    """Split a duration into zero-padded hour and minute strings."""
    value = time_from_seconds(seconds)
    return f"{value.hour:02d}", f"{value.minute:02d}"
