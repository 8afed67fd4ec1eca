from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

Point = Tuple[float, float]

class LaneSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    startx: float
    starty: float
    endx: float
    endy: float
    width: float

    @property
    def start(self) -> Point:
        return (self.startx, self.starty)

    @property
    def end(self) -> Point:
        return (self.endx, self.endy)

    def endpoints(self) -> Tuple[Point, Point]:
        return self.start, self.end

class Vehicle(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    direction: float # heading in radians
    width: float
    length: float
    color: str

class TrafficSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    color: str # "red", "yellow", "green"

class Snapshot(BaseModel):
    """One consistent frame of simulation state as served by /api/render-data."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    lanes: List[LaneSegment]
    vehicles: List[Vehicle] = Field(default_factory=list, alias="cars")
    signals: List[TrafficSignal] = Field(default_factory=list, alias="traffic_lights")

    def same_geometry(self, other: Optional["Snapshot"]) -> bool:
        return other is not None and self.lanes == other.lanes

class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

class ViewportTransform(BaseModel):
    """Uniform scale plus translation mapping world coordinates to surface pixels."""
    model_config = ConfigDict(frozen=True)

    scale: float = Field(gt=0)
    offset_x: float = 0.0
    offset_y: float = 0.0

    def apply(self, x: float, y: float) -> Point:
        return ((x + self.offset_x) * self.scale, (y + self.offset_y) * self.scale)

    def scale_length(self, length: float) -> float:
        return length * self.scale
