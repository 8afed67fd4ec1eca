import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, List
import pygame

from viewer.domain.models import Point
from viewer.domain import config

logger = logging.getLogger(__name__)

def rotated_rect_corners(center: Point, width: float, height: float, angle: float) -> List[Point]:
    """Corners of a width x height rectangle centred on `center`, rotated by `angle` radians.

    Uses the screen convention (y grows downwards), so a positive angle turns
    clockwise on screen. With angle 0 `width` spans x and `height` spans y.
    """
    cx, cy = center
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    hw, hh = width / 2.0, height / 2.0
    corners = []
    for lx, ly in ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)):
        corners.append((cx + lx * cos_a - ly * sin_a, cy + lx * sin_a + ly * cos_a))
    return corners

class Surface(ABC):
    """Pixel canvas the scene is drawn onto."""

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def clear(self):
        pass

    @abstractmethod
    def stroke_line(self, start: Point, end: Point, width: float, color: str):
        pass

    @abstractmethod
    def fill_rect(self, center: Point, width: float, height: float, angle: float, color: str):
        pass

    def present(self):
        pass

class PygameSurface(Surface):
    def __init__(self, screen: pygame.Surface, background: str = config.BACKGROUND_COLOR):
        self.screen = screen
        self.background = background
        self._colors: Dict[str, pygame.Color] = {}

    @property
    def width(self) -> int:
        return self.screen.get_width()

    @property
    def height(self) -> int:
        return self.screen.get_height()

    def _color(self, name: str) -> pygame.Color:
        color = self._colors.get(name)
        if color is None:
            try:
                color = pygame.Color(name)
            except ValueError:
                logger.warning("Unknown color %r, drawing as %s", name, config.FALLBACK_COLOR)
                color = pygame.Color(config.FALLBACK_COLOR)
            self._colors[name] = color
        return color

    def clear(self):
        self.screen.fill(self._color(self.background))

    def stroke_line(self, start: Point, end: Point, width: float, color: str):
        # Tiny geometry can scale a lane wider than any window; pygame needs a C int
        max_width = 2 * max(self.width, self.height, 1)
        pygame.draw.line(self.screen, self._color(color), start, end, int(max(1, min(round(width), max_width))))

    def fill_rect(self, center: Point, width: float, height: float, angle: float, color: str):
        pygame.draw.polygon(self.screen, self._color(color), rotated_rect_corners(center, width, height, angle))

    def present(self):
        # Offscreen surfaces (tests, screenshots) have nothing to flip
        if self.screen is pygame.display.get_surface():
            pygame.display.flip()

    def resize(self, width: int, height: int):
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
