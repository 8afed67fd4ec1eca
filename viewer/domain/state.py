from typing import Optional
from pydantic import BaseModel, ConfigDict
from viewer.domain.models import Snapshot, ViewportTransform

class Frame(BaseModel):
    model_config = ConfigDict(frozen=True)

    sequence: int
    snapshot: Snapshot
    transform: ViewportTransform

class FrameCell:
    """Holds the frame currently on screen. Writers swap the whole Frame at once."""

    def __init__(self):
        self._frame: Optional[Frame] = None

    @property
    def frame(self) -> Optional[Frame]:
        return self._frame

    def swap(self, frame: Frame) -> bool:
        # Results from cycles issued before the displayed one are stale
        current = self._frame
        if current is not None and frame.sequence < current.sequence:
            return False
        self._frame = frame
        return True
