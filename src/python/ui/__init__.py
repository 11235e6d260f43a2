"""UI components package for the time control."""

from ui.time_control_widget import TimeControlWidget

__all__ = [
    "TimeControlWidget",
]
