"""
Type definitions for the time control.

This module defines common types, aliases, and TypedDict structures
used throughout the time control codebase.
"""

from typing import Any, Callable, TypedDict

import numpy as np
import numpy.typing as npt

# NumPy array type aliases
AngleArray = npt.NDArray[np.float64]  # Tick angles in degrees


# Configuration TypedDict definitions
class TimeControlConfig(TypedDict, total=False):
    """Time control section of the UI configuration."""
    startTime: str
    stopTime: str
    tickLabelOrientation: str
    borderWidth: float
    minPointerRadius: float


# Type aliases for common values
Point = tuple[float, float]    # (x, y) in widget coordinates
ColorHex = str                 # Color in hex format like "#RRGGBB" or "#AARRGGBB"

# Callback type aliases
TextMeasurer = Callable[[str, float], float]   # (text, font_size) -> width
PropertyChangedCallback = Callable[[str, Any], None]
