"""
Tests for the TimeControl layout/render engine.

Covers resize handling, handle dragging, time change updates and the
rendered command list.
"""
import math
import pytest
from datetime import time, timedelta

from conftest import fixed_width_measurer
from config_manager import ConfigManager
from enums import HandleType, LineCap, TickLabelOrientation
from render_commands import ArcCommand, CircleCommand, LineCommand, RectCommand, TextCommand, with_alpha
from time_control import TimeControl
from time_geometry import ANGLE_STEP


class TestResize:
    """Bounds changes and proportional geometry."""

    def test_preferred_size_geometry(self, control):
        assert (control.width, control.height) == (400, 505)
        assert control.layout.center == pytest.approx((200.0, 305.0), abs=1e-4)
        assert control.layout.arc_radius == pytest.approx(177.0)
        assert control.content_origin == (0.0, 0.0)
        assert (control.mouse_scale_x, control.mouse_scale_y) == (1.0, 1.0)

    def test_wide_host_centers_content(self, control):
        control.on_resize(800, 505)
        assert (control.width, control.height) == pytest.approx((400, 505))
        assert control.content_origin == pytest.approx((200.0, 0.0))
        assert control.mouse_scale_x == pytest.approx(0.5)
        assert control.mouse_scale_y == pytest.approx(1.0)

    def test_resize_keeps_times_and_moves_handles(self, control, state):
        state.start_time = time(6, 0)
        control.on_resize(800, 1010)

        assert state.start_time == time(6, 0)
        assert control.layout.arc_radius == pytest.approx(354.0)
        assert control.handle_positions[HandleType.START] == pytest.approx(
            (400.0 + 354.0, 610.0), abs=1e-3)

    def test_resize_clamps_to_maximum(self, control):
        control.on_resize(4000, 4000)
        assert control.height == 1024
        assert control.width * 505 / 400 == pytest.approx(1024)

    def test_empty_bounds_are_ignored(self, control):
        control.on_resize(0, 300)
        assert (control.width, control.height) == (400, 505)

    def test_resize_redraws_tick_marks(self, control):
        control.on_resize(800, 1010)
        lines = [c for c in control.tick_marks if isinstance(c, LineCommand)]
        assert len(lines) == 96
        assert lines[0].width == pytest.approx(600 * 0.005)


class TestTimeChanges:
    """Duration, bar arc and text updates."""

    def test_fifteen_hour_interval(self, control, state):
        state.start_time = time(0, 0)
        state.stop_time = time(15, 0)

        assert state.duration == timedelta(hours=15)
        assert control.bar_start_angle == pytest.approx(0.0)
        assert control.bar_sweep_length == pytest.approx(-15 * 3600 * ANGLE_STEP)
        assert control.bar_sweep_length == pytest.approx(-225.0)
        assert control.duration_text == ("15", "00")
        assert control.texts.start_time == "00:00"
        assert control.texts.stop_time == "15:00"

    def test_stop_handle_follows_stop_time(self, control, state):
        state.stop_time = time(15, 0)
        x, y = control.handle_positions[HandleType.STOP]
        # 15:00 sits 135 degrees clockwise from the right of the center
        assert x == pytest.approx(200 + 177 * math.cos(math.radians(135)), abs=1e-3)
        assert y == pytest.approx(305 + 177 * math.sin(math.radians(135)), abs=1e-3)

    def test_duration_row_recenters(self, control, state):
        state.stop_time = time(15, 0)
        placement = control.placement
        assert placement.duration_x == pytest.approx((400 - placement.duration_width) * 0.5)

    def test_overnight_interval_texts(self, control, state):
        state.start_time = time(22, 15)
        state.stop_time = time(6, 45)
        assert control.duration_text == ("08", "30")
        assert control.bar_sweep_length == pytest.approx(-8.5 * 15)


class TestHandleDrag:
    """Pointer drags turning into times."""

    @pytest.mark.parametrize("offset,expected", [
        ((177.0, 0.0), time(6, 0)),
        ((0.0, 177.0), time(12, 0)),
        ((-177.0, 0.0), time(18, 0)),
        ((0.0, -177.0), time(0, 0)),
        ((60.0, 60.0), time(9, 0)),
    ])
    def test_drag_sets_stop_time(self, control, state, offset, expected):
        assert control.on_handle_drag(HandleType.STOP, 200 + offset[0], 305 + offset[1])
        assert state.stop_time == expected

    def test_drag_places_handle_on_pointer_ray(self, control):
        control.on_handle_drag(HandleType.START, 200 + 10, 305 + 10)
        x, y = control.handle_positions[HandleType.START]
        assert x - 200 == pytest.approx(y - 305, abs=1e-2)
        assert math.hypot(x - 200, y - 305) == pytest.approx(177.0)

    def test_drag_at_center_is_skipped(self, control, state):
        state.start_time = time(3, 0)
        before = dict(control.handle_positions)
        center_x, center_y = control.layout.center
        assert not control.on_handle_drag(HandleType.START, center_x, center_y)
        assert state.start_time == time(3, 0)
        assert control.handle_positions == before

    def test_drag_in_wide_host_follows_cursor(self, control, state):
        control.on_resize(800, 505)
        # Dial center is at (400, 305) in host coordinates
        assert control.on_handle_drag(HandleType.STOP, 400 + 100, 305 - 100)
        assert state.stop_time == time(3, 0)

        x, y = control.handle_positions[HandleType.STOP]
        assert x - 200 == pytest.approx(305 - y, abs=1e-2)
        assert math.hypot(x - 200, y - 305) == pytest.approx(177.0)

    def test_drag_in_tall_host_follows_cursor(self, control, state):
        control.on_resize(400, 1010)
        assert control.content_origin == pytest.approx((0.0, 252.5))
        assert control.on_handle_drag(HandleType.START, 200 - 100, 557.5 + 100)
        assert state.start_time == time(15, 0)

    def test_drag_updates_duration(self, control, state):
        control.on_handle_drag(HandleType.STOP, 200 - 177, 305)
        assert state.duration == timedelta(hours=18)
        assert control.duration_text == ("18", "00")


class TestHitTest:

    def test_hit_on_handle(self, control, state):
        state.stop_time = time(6, 0)
        assert control.hit_test(377.0, 305.0) == HandleType.STOP
        assert control.hit_test(200.0, 305.0 - 177.0 + 5) == HandleType.START

    def test_miss(self, control):
        assert control.hit_test(10.0, 10.0) is None

    def test_hit_in_wide_host(self, control, state):
        state.start_time = time(6, 0)
        state.stop_time = time(3, 0)
        control.on_resize(800, 505)
        assert control.hit_test(577.0, 305.0) == HandleType.START

        x, y = control.handle_positions[HandleType.STOP]
        origin_x, origin_y = control.content_origin
        assert control.hit_test(x + origin_x, y + origin_y) == HandleType.STOP
        assert control.hit_test(x, y) is None

    def test_stop_wins_when_overlapping(self, control):
        # Both handles start at midnight
        assert control.hit_test(200.0, 128.0) == HandleType.STOP


class TestStyleChanges:

    def test_text_color_redraws_ticks(self, control, state):
        state.text_color = "#ff0000"
        lines = [c for c in control.tick_marks if isinstance(c, LineCommand)]
        assert lines[0].color == with_alpha("#ff0000", 0.5)

    def test_short_and_named_text_colors_do_not_raise(self, control, state):
        state.text_color = "#0f0"
        lines = [c for c in control.tick_marks if isinstance(c, LineCommand)]
        assert lines[0].color == with_alpha("#00ff00", 0.5)

        state.text_color = "white"
        assert state.text_color == "#00ff00"
        assert control.render()

    def test_background_color_is_rendered(self, control, state):
        state.background_color = "#123456"
        background = control.render()[0]
        assert isinstance(background, RectCommand)
        assert background.fill == "#123456"


class TestRender:

    def test_command_inventory(self, control, state):
        state.stop_time = time(15, 0)
        commands = control.render()

        assert len([c for c in commands if isinstance(c, LineCommand)]) == 96
        assert len([c for c in commands if isinstance(c, TextCommand)]) == 4 + 4 + 24
        assert len([c for c in commands if isinstance(c, CircleCommand)]) == 2
        assert len([c for c in commands if isinstance(c, RectCommand)]) == 1 + 2 + 2

        background_arc, bar = [c for c in commands if isinstance(c, ArcCommand)]
        assert background_arc.sweep_length == 360.0
        assert background_arc.cap == LineCap.BUTT
        assert background_arc.color == state.bar_background_color
        assert bar.rotation == -90.0
        assert bar.cap == LineCap.ROUND
        assert bar.sweep_length == pytest.approx(-225.0)
        assert bar.width == pytest.approx(46.0)
        assert bar.color == state.bar_color

    def test_texts_come_from_config(self, control):
        texts = [c.text for c in control.render() if isinstance(c, TextCommand)][:8]
        assert texts == ["Begin", "00:00", "End", "00:00", "00", "h", "00", "m"]

    def test_handles_draw_above_bar(self, control):
        commands = control.render()
        last_arc = max(i for i, c in enumerate(commands) if isinstance(c, ArcCommand))
        first_circle = min(i for i, c in enumerate(commands) if isinstance(c, CircleCommand))
        assert first_circle > last_arc

    def test_border_scales_with_size(self, test_config_file, state):
        cfg = ConfigManager(cfg_path=test_config_file, exit_on_error=False)
        cfg.ui["timeControl"]["borderWidth"] = 4
        control = TimeControl(state=state, measure_text=fixed_width_measurer, cfg=cfg)
        background = control.render()[0]
        assert background.stroke_width == pytest.approx(4.0)


def test_unknown_orientation_falls_back(test_config_file, state):
    cfg = ConfigManager(cfg_path=test_config_file, exit_on_error=False)
    cfg.ui["timeControl"]["tickLabelOrientation"] = "diagonal"
    control = TimeControl(state=state, measure_text=fixed_width_measurer, cfg=cfg)
    assert control.tick_label_orientation == TickLabelOrientation.HORIZONTAL
