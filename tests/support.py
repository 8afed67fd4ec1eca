import math
import json
import requests
from typing import List, Tuple
from viewer.rendering.surface import Surface

class RecordingSurface(Surface):
    """Surface double that records draw calls in order."""

    def __init__(self, width: int = 200, height: int = 100):
        self._width = width
        self._height = height
        self.calls: List[Tuple] = []
        self.presented = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def resize(self, width: int, height: int):
        self._width = width
        self._height = height

    def clear(self):
        self.calls.append(("clear",))

    def stroke_line(self, start, end, width, color):
        self.calls.append(("line", start, end, width, color))

    def fill_rect(self, center, width, height, angle, color):
        self.calls.append(("rect", center, width, height, angle, color))

    def present(self):
        self.presented += 1

    def kinds(self) -> List[str]:
        return [c[0] for c in self.calls]

    def reset(self):
        self.calls = []

def make_response(status=200, payload=None, body=None):
    response = requests.Response()
    response.status_code = status
    if body is None:
        body = json.dumps(payload).encode() if payload is not None else b""
    response._content = body
    return response

def box_corners(box):
    return [(box.min_x, box.min_y), (box.max_x, box.min_y), (box.max_x, box.max_y), (box.min_x, box.max_y)]

def box_contains(box, x, y):
    return box.min_x <= x <= box.max_x and box.min_y <= y <= box.max_y

def screen_distance(transform, a, b):
    ax, ay = transform.apply(*a)
    bx, by = transform.apply(*b)
    return math.hypot(bx - ax, by - ay)
