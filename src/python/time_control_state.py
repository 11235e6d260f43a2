"""
Observable state of the time control.

Holds the two times of day, the style colors and the derived duration.
Every setter notifies registered observers when the value actually changes;
duration is recomputed whenever start or stop time changes and is never set
from outside.
"""

import logging
from abc import ABC, abstractmethod
from datetime import time, timedelta
from typing import Any

from custom_types import ColorHex
from render_commands import normalize_color
from time_geometry import compute_duration, seconds_of_day

logger = logging.getLogger(__name__)

DEFAULT_BAR_COLOR = "#ffb500"
DEFAULT_BAR_BACKGROUND_COLOR = "#171717"
DEFAULT_BACKGROUND_COLOR = "#0d0d0d"
DEFAULT_TEXT_COLOR = "#ffffff"

COLOR_PROPERTIES = ("bar_color", "bar_background_color", "background_color", "text_color")


class TimeControlObserver(ABC):
    """Abstract base class for time control property observers."""

    @abstractmethod
    def on_property_changed(self, name: str, value: Any) -> None:
        """Called after the property `name` changed to `value`."""
        pass


def parse_time(text: str, default: time = time(0, 0)) -> time:
    """Parse an "HH:MM" or "HH:MM:SS" string, falling back to `default`."""
    try:
        return time.fromisoformat(text)
    except (TypeError, ValueError):
        logger.warning("Invalid time of day %r, using %s", text, default.isoformat())
        return default


class TimeControlState:
    """Start/stop times, colors and derived duration with change notification."""

    _start_time: time
    _stop_time: time
    _duration: timedelta
    _colors: dict[str, ColorHex]
    _observers: list[TimeControlObserver]

    def __init__(
        self,
        start_time: time = time(0, 0),
        stop_time: time = time(0, 0),
        bar_color: ColorHex = DEFAULT_BAR_COLOR,
        bar_background_color: ColorHex = DEFAULT_BAR_BACKGROUND_COLOR,
        background_color: ColorHex = DEFAULT_BACKGROUND_COLOR,
        text_color: ColorHex = DEFAULT_TEXT_COLOR
    ) -> None:
        self._start_time = start_time.replace(microsecond=0)
        self._stop_time = stop_time.replace(microsecond=0)
        self._duration = self._compute_duration()
        self._colors = {
            "bar_color": normalize_color(bar_color, DEFAULT_BAR_COLOR),
            "bar_background_color": normalize_color(bar_background_color, DEFAULT_BAR_BACKGROUND_COLOR),
            "background_color": normalize_color(background_color, DEFAULT_BACKGROUND_COLOR),
            "text_color": normalize_color(text_color, DEFAULT_TEXT_COLOR),
        }
        self._observers = []

    @classmethod
    def from_config(cls, cfg: Any) -> "TimeControlState":
        """Create a state seeded from the palette and time control settings."""
        settings = cfg.get_time_control_config()
        return cls(
            start_time=parse_time(settings.get("startTime", "00:00")),
            stop_time=parse_time(settings.get("stopTime", "00:00")),
            bar_color=cfg.get_color("bar", DEFAULT_BAR_COLOR),
            bar_background_color=cfg.get_color("barBackground", DEFAULT_BAR_BACKGROUND_COLOR),
            background_color=cfg.get_color("background", DEFAULT_BACKGROUND_COLOR),
            text_color=cfg.get_color("text", DEFAULT_TEXT_COLOR),
        )

    # Observers

    def add_observer(self, observer: TimeControlObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: TimeControlObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, name: str, value: Any) -> None:
        for observer in list(self._observers):
            observer.on_property_changed(name, value)

    # Times

    @property
    def start_time(self) -> time:
        return self._start_time

    @start_time.setter
    def start_time(self, value: time) -> None:
        self._set_time("start_time", value)

    @property
    def stop_time(self) -> time:
        return self._stop_time

    @stop_time.setter
    def stop_time(self, value: time) -> None:
        self._set_time("stop_time", value)

    @property
    def start_seconds(self) -> int:
        return seconds_of_day(self._start_time)

    @property
    def stop_seconds(self) -> int:
        return seconds_of_day(self._stop_time)

    @property
    def duration(self) -> timedelta:
        """Forward time from start to stop; read-only."""
        return self._duration

    @property
    def duration_seconds(self) -> int:
        return int(self._duration.total_seconds())

    def _compute_duration(self) -> timedelta:
        return timedelta(seconds=compute_duration(
            seconds_of_day(self._start_time), seconds_of_day(self._stop_time)))

    def _set_time(self, name: str, value: time) -> None:
        value = value.replace(microsecond=0)
        if getattr(self, f"_{name}") == value:
            return
        setattr(self, f"_{name}", value)

        old_duration = self._duration
        self._duration = self._compute_duration()
        self._notify(name, value)
        if self._duration != old_duration:
            self._notify("duration", self._duration)

    # Colors

    @property
    def bar_color(self) -> ColorHex:
        return self._colors["bar_color"]

    @bar_color.setter
    def bar_color(self, value: ColorHex) -> None:
        self._set_color("bar_color", value)

    @property
    def bar_background_color(self) -> ColorHex:
        return self._colors["bar_background_color"]

    @bar_background_color.setter
    def bar_background_color(self, value: ColorHex) -> None:
        self._set_color("bar_background_color", value)

    @property
    def background_color(self) -> ColorHex:
        return self._colors["background_color"]

    @background_color.setter
    def background_color(self, value: ColorHex) -> None:
        self._set_color("background_color", value)

    @property
    def text_color(self) -> ColorHex:
        return self._colors["text_color"]

    @text_color.setter
    def text_color(self, value: ColorHex) -> None:
        self._set_color("text_color", value)

    def _set_color(self, name: str, value: ColorHex) -> None:
        value = normalize_color(value, self._colors[name])
        if self._colors[name] == value:
            return
        self._colors[name] = value
        self._notify(name, value)
