"""
Enumerations for the time control using Python 3.11+ StrEnum.

This module defines string-based enumerations for the constants used
throughout the control, providing type safety and IDE autocomplete support.
"""

from enum import StrEnum


class HandleType(StrEnum):
    """The two draggable handles on the dial.

    Attributes:
        START: Handle that sets the start time
        STOP: Handle that sets the stop time
    """
    START = "start"
    STOP = "stop"


class TickLabelOrientation(StrEnum):
    """How hour labels on the tick ring are rotated.

    Attributes:
        ORTHOGONAL: Labels point towards the dial center
        HORIZONTAL: Labels stay upright
        TANGENT: Labels follow the ring
    """
    ORTHOGONAL = "orthogonal"
    HORIZONTAL = "horizontal"
    TANGENT = "tangent"


class TextAnchor(StrEnum):
    """Vertical origin of a text draw command.

    Attributes:
        TOP: y is the top of the text box
        CENTER: y is the vertical center of the text box
        BASELINE: y is the text baseline
        BOTTOM: y is the bottom of the text box
    """
    TOP = "top"
    CENTER = "center"
    BASELINE = "baseline"
    BOTTOM = "bottom"


class LineCap(StrEnum):
    """Stroke end style for lines and arcs.

    Attributes:
        BUTT: Square end flush with the endpoint
        ROUND: Rounded end
    """
    BUTT = "butt"
    ROUND = "round"
