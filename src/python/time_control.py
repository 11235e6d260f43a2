"""
TimeControl: layout and render engine of the time control dial.

Keeps the geometry of every element in sync with the control state:
- Resizes clamp the bounds, recompute the proportional layout, re-place
  both handles and redraw the tick ring
- Handle drags turn pointer positions into times of day
- Time changes update the bar arc, the time and duration texts and the
  dragged handle

The engine never touches a GUI toolkit. `render()` returns a list of draw
commands in content coordinates; the host translates them by
`content_origin` and executes them.
"""

import logging
import math
from typing import Any

from config_manager import config
from custom_types import Point, TextMeasurer
from dial_layout import (
    PREFERRED_HEIGHT,
    PREFERRED_WIDTH,
    DialLayout,
    DialTexts,
    TextPlacement,
    clamp_bounds,
    compute_layout,
    estimate_text_width,
    handle_icon_origin,
    place_texts,
)
from enums import HandleType, LineCap, TextAnchor, TickLabelOrientation
from render_commands import ArcCommand, CircleCommand, DrawCommand, RectCommand, TextCommand
from tick_marks import draw_tick_marks
from time_control_state import COLOR_PROPERTIES, TimeControlObserver, TimeControlState
from time_geometry import (
    BAR_ROTATION,
    MIN_POINTER_RADIUS,
    angle_to_time_of_day,
    bar_arc,
    format_duration,
    format_time_of_day,
    handle_position_for_angle,
    pointer_to_angle,
    time_from_seconds,
    time_of_day_to_handle_position,
)

logger = logging.getLogger(__name__)


def _orientation_from_config(value: Any) -> TickLabelOrientation:
    try:
        return TickLabelOrientation(value)
    except ValueError:
        logger.warning("Unknown tick label orientation %r, using horizontal", value)
        return TickLabelOrientation.HORIZONTAL


class TimeControl(TimeControlObserver):
    """Circular start/stop time picker, independent of any GUI toolkit.

    Attributes:
        state: Observable times and colors
        width, height: Content size after clamping to the aspect ratio
        host_width, host_height: Size last reported by the host
        content_origin: Offset that centers the content in the host
        mouse_scale_x, mouse_scale_y: Content to host size ratio
        layout: Bounds-dependent geometry
        placement: Text-dependent positions
        handle_positions: Center of each handle
        bar_start_angle, bar_sweep_length: Bar arc parameters
        tick_marks: Draw commands of the tick ring
    """

    def __init__(
        self,
        state: TimeControlState | None = None,
        measure_text: TextMeasurer | None = None,
        cfg: Any = None
    ) -> None:
        """Initialize the control at its preferred size.

        Args:
            state: State to display; a config-seeded state is created if None
            measure_text: Text width measurer; a font-less estimate if None
            cfg: ConfigManager to read strings and settings from
        """
        self._cfg = cfg if cfg is not None else config
        self.state = state if state is not None else TimeControlState.from_config(self._cfg)
        self.measure_text = measure_text or estimate_text_width

        settings = self._cfg.get_time_control_config()
        self.tick_label_orientation = _orientation_from_config(
            settings.get("tickLabelOrientation", TickLabelOrientation.HORIZONTAL))
        self.min_pointer_radius = float(settings.get("minPointerRadius", MIN_POINTER_RADIUS))
        self.border_width = float(settings.get("borderWidth", 0.0))
        self.border_color = self._cfg.get_color("border", "#00000000")

        self.start_label = self._cfg.get_string("timeControl", "start", "Start")
        self.stop_label = self._cfg.get_string("timeControl", "stop", "Stop")
        self.hour_unit = self._cfg.get_string("timeControl", "hourUnit", "h")
        self.minute_unit = self._cfg.get_string("timeControl", "minuteUnit", "m")

        self.host_width = PREFERRED_WIDTH
        self.host_height = PREFERRED_HEIGHT
        self.width = PREFERRED_WIDTH
        self.height = PREFERRED_HEIGHT
        self.content_origin: Point = (0.0, 0.0)
        self.mouse_scale_x = 1.0
        self.mouse_scale_y = 1.0

        self.layout: DialLayout = compute_layout(self.width, self.height)
        self.handle_positions: dict[HandleType, Point] = {}
        self.tick_marks: list[DrawCommand] = []
        self.bar_start_angle = 0.0
        self.bar_sweep_length = 0.0
        self.texts = self._build_texts()
        self.placement: TextPlacement = place_texts(self.layout, self.texts, self.measure_text)

        self.state.add_observer(self)
        self.on_resize(PREFERRED_WIDTH, PREFERRED_HEIGHT)
        self._update_bar()

    # Public API methods

    @property
    def duration_text(self) -> tuple[str, str]:
        """Hour and minute strings of the displayed duration."""
        return self.texts.hours, self.texts.minutes

    def map_pointer(self, x: float, y: float) -> Point:
        """Convert host coordinates to content coordinates.

        The content is drawn centered in the host at `content_origin`.
        """
        return x - self.content_origin[0], y - self.content_origin[1]

    def on_resize(self, host_width: float, host_height: float) -> None:
        """Recompute all geometry for new host bounds.

        Times are never changed by a resize; only their pixel positions are.
        """
        self.host_width = host_width
        self.host_height = host_height
        if host_width <= 0 or host_height <= 0:
            logger.debug("Ignoring resize to empty bounds %sx%s", host_width, host_height)
            return

        self.width, self.height = clamp_bounds(host_width, host_height)
        self.content_origin = ((host_width - self.width) * 0.5, (host_height - self.height) * 0.5)

        self.mouse_scale_x = self.width / host_width
        self.mouse_scale_y = self.height / host_height

        self.layout = compute_layout(self.width, self.height)
        self.placement = place_texts(self.layout, self.texts, self.measure_text)
        self.draw_tick_marks()
        for handle in HandleType:
            self._place_handle(handle)

        logger.debug("Relayout for host %.1fx%.1f -> content %.1fx%.1f",
                     host_width, host_height, self.width, self.height)

    def on_handle_drag(self, handle: HandleType, x: float, y: float) -> bool:
        """Move a handle towards a pointer position and update its time.

        Args:
            handle: Which handle is dragged
            x: Pointer x in host coordinates
            y: Pointer y in host coordinates

        Returns:
            False when the pointer sits on the dial center and nothing moved.
        """
        px, py = self.map_pointer(x, y)
        center = self.layout.center
        theta = pointer_to_angle(px, py, center[0], center[1], self.min_pointer_radius)
        if theta is None:
            return False

        radius = self.layout.arc_radius
        self.handle_positions[handle] = handle_position_for_angle(theta, center, radius, radius)
        seconds = angle_to_time_of_day(theta)
        if handle == HandleType.START:
            self.state.start_time = time_from_seconds(seconds)
        else:
            self.state.stop_time = time_from_seconds(seconds)
        return True

    def on_time_changed(self, handle: HandleType) -> None:
        """Refresh bar, texts and the given handle after a time change."""
        self._update_bar()
        self._place_handle(handle)

    def hit_test(self, x: float, y: float) -> HandleType | None:
        """Return the handle under a pointer in host coordinates, if any."""
        px, py = self.map_pointer(x, y)
        # Stop is drawn above start, so it wins where they overlap
        for handle in (HandleType.STOP, HandleType.START):
            hx, hy = self.handle_positions[handle]
            if math.hypot(px - hx, py - hy) <= self.layout.handle_radius:
                return handle
        return None

    def draw_tick_marks(self) -> None:
        """Rebuild the tick ring for the current canvas size and text color."""
        self.tick_marks = draw_tick_marks(
            self.layout.canvas_size,
            self.state.text_color,
            self.layout.tick_font_size,
            self.layout.canvas_origin,
            self.tick_label_orientation,
        )

    # Observer

    def on_property_changed(self, name: str, value: Any) -> None:
        if name == "start_time":
            self.on_time_changed(HandleType.START)
        elif name == "stop_time":
            self.on_time_changed(HandleType.STOP)
        elif name == "background_color":
            logger.debug("Background color changed to %s", value)
        elif name in COLOR_PROPERTIES:
            self.on_resize(self.host_width, self.host_height)

    # Internal updates

    def _build_texts(self) -> DialTexts:
        hours, minutes = format_duration(self.state.duration_seconds)
        return DialTexts(
            start_label=self.start_label,
            stop_label=self.stop_label,
            start_time=format_time_of_day(self.state.start_seconds),
            stop_time=format_time_of_day(self.state.stop_seconds),
            hours=hours,
            hour_unit=self.hour_unit,
            minutes=minutes,
            minute_unit=self.minute_unit,
        )

    def _update_bar(self) -> None:
        self.bar_start_angle, self.bar_sweep_length = bar_arc(
            self.state.start_seconds, self.state.stop_seconds)
        self.texts = self._build_texts()
        self.placement = place_texts(self.layout, self.texts, self.measure_text)

    def _place_handle(self, handle: HandleType) -> None:
        seconds = self.state.start_seconds if handle == HandleType.START else self.state.stop_seconds
        radius = self.layout.arc_radius
        self.handle_positions[handle] = time_of_day_to_handle_position(
            seconds, self.layout.center, radius, radius)

    # Rendering

    def render(self) -> list[DrawCommand]:
        """Draw commands for the whole control, back to front."""
        layout = self.layout
        placement = self.placement
        texts = self.texts
        state = self.state
        commands: list[DrawCommand] = []

        border_width = self.border_width / PREFERRED_WIDTH * min(self.width, self.height)
        commands.append(RectCommand(
            0.0, 0.0, self.width, self.height,
            fill=state.background_color,
            stroke=self.border_color if border_width > 0 else None,
            stroke_width=border_width,
        ))

        icon = layout.icon_size
        for origin in (placement.start_icon, placement.stop_icon):
            commands.append(RectCommand(origin[0], origin[1], icon, icon, fill=state.bar_color))

        for text, position, size in (
            (texts.start_label, placement.start_label, layout.label_font_size),
            (texts.start_time, placement.start_time, layout.time_font_size),
            (texts.stop_label, placement.stop_label, layout.label_font_size),
            (texts.stop_time, placement.stop_time, layout.time_font_size),
        ):
            commands.append(TextCommand(text, position[0], position[1], size, state.text_color))

        baseline = placement.duration_baseline
        for text, x, size in (
            (texts.hours, placement.hours_x, layout.duration_number_font_size),
            (texts.hour_unit, placement.hour_unit_x, layout.duration_unit_font_size),
            (texts.minutes, placement.minutes_x, layout.duration_number_font_size),
            (texts.minute_unit, placement.minute_unit_x, layout.duration_unit_font_size),
        ):
            commands.append(TextCommand(text, x, baseline, size, state.text_color,
                                        anchor=TextAnchor.BASELINE))

        commands.extend(self.tick_marks)

        radius = layout.arc_radius
        commands.append(ArcCommand(
            layout.center, radius, radius, 0.0, 360.0,
            state.bar_background_color, layout.arc_stroke_width, LineCap.BUTT,
        ))
        commands.append(ArcCommand(
            layout.center, radius, radius, self.bar_start_angle, self.bar_sweep_length,
            state.bar_color, layout.arc_stroke_width, LineCap.ROUND, BAR_ROTATION,
        ))

        for handle in HandleType:
            commands.append(CircleCommand(
                self.handle_positions[handle], layout.handle_radius, state.bar_background_color))
        for handle in HandleType:
            x, y = handle_icon_origin(self.handle_positions[handle], layout.handle_radius, icon)
            commands.append(RectCommand(x, y, icon, icon, fill=state.bar_color))

        return commands
