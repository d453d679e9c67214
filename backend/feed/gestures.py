from enum import Enum

SWIPE_THRESHOLD = 50


class SwipeDirection(str, Enum):
    ADVANCE = "advance"
    RETREAT = "retreat"
    NONE = "none"


def classify_swipe(start_y: float, end_y: float, threshold: float = SWIPE_THRESHOLD) -> SwipeDirection:
    """
    Map a vertical touch gesture to a navigation step.
    Moving the finger up by more than `threshold` pixels advances,
    moving it down retreats; anything shorter is ignored.
    """
    diff = start_y - end_y
    if abs(diff) <= threshold:
        return SwipeDirection.NONE
    return SwipeDirection.ADVANCE if diff > 0 else SwipeDirection.RETREAT
