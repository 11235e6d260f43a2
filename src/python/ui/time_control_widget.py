"""PyQt6 host widget for the time control dial.

Wraps a TimeControl engine: forwards resizes and handle drags to it, paints
its draw commands and re-emits state changes as Qt signals.
"""
import logging
from datetime import time, timedelta
from typing import Any

from PyQt6.QtCore import QSize, Qt, pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from custom_types import ColorHex, PropertyChangedCallback
from dial_layout import (
    ASPECT_RATIO,
    MAXIMUM_HEIGHT,
    MAXIMUM_WIDTH,
    MINIMUM_HEIGHT,
    MINIMUM_WIDTH,
    PREFERRED_HEIGHT,
    PREFERRED_WIDTH,
)
from enums import HandleType
from time_control import TimeControl
from time_control_state import COLOR_PROPERTIES, TimeControlObserver, TimeControlState
from ui.qt_painter import measure_text, paint_commands

logger = logging.getLogger(__name__)


class _StateBridge(TimeControlObserver):
    """Forwards state notifications to the widget."""

    def __init__(self, callback: PropertyChangedCallback) -> None:
        self._callback = callback

    def on_property_changed(self, name: str, value: Any) -> None:
        self._callback(name, value)


class TimeControlWidget(QWidget):
    """Circular start/stop time picker.

    Drag the handles around the dial to set the start and stop time; the
    elapsed time between them is shown in the middle.

    Signals:
        start_time_changed: Emitted with the new start time (datetime.time)
        stop_time_changed: Emitted with the new stop time (datetime.time)
        duration_changed: Emitted with the new duration (datetime.timedelta)
        color_changed: Emitted with (property name, color) on any color change
    """

    # Signals
    start_time_changed = pyqtSignal(object)
    stop_time_changed = pyqtSignal(object)
    duration_changed = pyqtSignal(object)
    color_changed = pyqtSignal(str, str)

    def __init__(self, parent: QWidget | None = None, state: TimeControlState | None = None) -> None:
        """Initialize the widget.

        Args:
            parent: Parent widget
            state: State to display; a config-seeded state is created if None
        """
        super().__init__(parent)
        self.control = TimeControl(state=state, measure_text=measure_text)
        self._bridge = _StateBridge(self._on_state_changed)
        self.control.state.add_observer(self._bridge)
        self._dragging: HandleType | None = None

        self.setMinimumSize(int(MINIMUM_WIDTH), int(MINIMUM_HEIGHT))
        self.setMaximumSize(int(MAXIMUM_WIDTH), int(MAXIMUM_HEIGHT))
        policy = QSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Preferred)
        policy.setHeightForWidth(True)
        self.setSizePolicy(policy)

    # Public API methods

    @property
    def state(self) -> TimeControlState:
        return self.control.state

    @property
    def start_time(self) -> time:
        return self.state.start_time

    @start_time.setter
    def start_time(self, value: time) -> None:
        self.state.start_time = value

    @property
    def stop_time(self) -> time:
        return self.state.stop_time

    @stop_time.setter
    def stop_time(self, value: time) -> None:
        self.state.stop_time = value

    @property
    def duration(self) -> timedelta:
        return self.state.duration

    @property
    def bar_color(self) -> ColorHex:
        return self.state.bar_color

    @bar_color.setter
    def bar_color(self, value: ColorHex) -> None:
        self.state.bar_color = value

    @property
    def bar_background_color(self) -> ColorHex:
        return self.state.bar_background_color

    @bar_background_color.setter
    def bar_background_color(self, value: ColorHex) -> None:
        self.state.bar_background_color = value

    @property
    def background_color(self) -> ColorHex:
        return self.state.background_color

    @background_color.setter
    def background_color(self, value: ColorHex) -> None:
        self.state.background_color = value

    @property
    def text_color(self) -> ColorHex:
        return self.state.text_color

    @text_color.setter
    def text_color(self, value: ColorHex) -> None:
        self.state.text_color = value

    def is_dragging(self) -> bool:
        """Check if a handle is currently being dragged."""
        return self._dragging is not None

    # Size hints

    def sizeHint(self) -> QSize:
        return QSize(int(PREFERRED_WIDTH), int(PREFERRED_HEIGHT))

    def minimumSizeHint(self) -> QSize:
        return QSize(int(MINIMUM_WIDTH), int(MINIMUM_HEIGHT))

    def hasHeightForWidth(self) -> bool:
        return True

    def heightForWidth(self, width: int) -> int:
        return round(width * ASPECT_RATIO)

    # Qt events

    def resizeEvent(self, event):
        """Relayout the dial for the new widget size."""
        size = event.size()
        self.control.on_resize(size.width(), size.height())
        super().resizeEvent(event)

    def mousePressEvent(self, event):
        """Start dragging when a handle is pressed."""
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        pos = event.position()
        handle = self.control.hit_test(pos.x(), pos.y())
        if handle is None:
            event.ignore()
            return
        self._dragging = handle
        logger.debug("Handle %s: drag started", handle)
        event.accept()

    def mouseMoveEvent(self, event):
        """Move the dragged handle with the pointer."""
        if self._dragging is None:
            event.ignore()
            return
        pos = event.position()
        self.control.on_handle_drag(self._dragging, pos.x(), pos.y())
        self.update()
        event.accept()

    def mouseReleaseEvent(self, event):
        """Finish a handle drag."""
        if event.button() == Qt.MouseButton.LeftButton and self._dragging is not None:
            logger.debug("Handle %s: drag finished", self._dragging)
            self._dragging = None
            event.accept()
        else:
            event.ignore()

    def paintEvent(self, event):
        """Paint the dial from the engine's draw commands."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.translate(*self.control.content_origin)
        paint_commands(painter, self.control.render())
        painter.end()

    # Signal handlers

    def _on_state_changed(self, name: str, value: Any) -> None:
        if name == "start_time":
            self.start_time_changed.emit(value)
        elif name == "stop_time":
            self.stop_time_changed.emit(value)
        elif name == "duration":
            self.duration_changed.emit(value)
        elif name in COLOR_PROPERTIES:
            self.color_changed.emit(name, value)
        self.update()
