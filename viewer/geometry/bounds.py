from typing import Sequence
from viewer.domain.models import BoundingBox, LaneSegment
from viewer.domain.errors import EmptyGeometry

def compute_bounds(lanes: Sequence[LaneSegment]) -> BoundingBox:
    """Tightest axis-aligned box around every lane endpoint.

    Raises EmptyGeometry when there are no lanes; callers should skip
    refitting until the service reports at least one lane.
    """
    if not lanes:
        raise EmptyGeometry("no lanes to frame")

    first = lanes[0]
    min_x = max_x = first.startx
    min_y = max_y = first.starty

    for lane in lanes:
        for x, y in lane.endpoints():
            if x < min_x: min_x = x
            elif x > max_x: max_x = x
            if y < min_y: min_y = y
            elif y > max_y: max_y = y

    return BoundingBox(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)

def is_degenerate(box: BoundingBox) -> bool:
    return box.width <= 0 or box.height <= 0
