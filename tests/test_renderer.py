import math
import unittest
import pygame

from viewer.domain import config
from viewer.domain.models import Snapshot, ViewportTransform
from viewer.rendering.renderer import SceneRenderer
from viewer.rendering.surface import PygameSurface, rotated_rect_corners
from support import RecordingSurface

def make_snapshot(cars=None, lights=None):
    return Snapshot.model_validate({
        "lanes": [{"startx": 0, "starty": 50, "endx": 200, "endy": 50, "width": 20}],
        "cars": cars if cars is not None else [
            {"x": 100, "y": 50, "direction": 0.0, "width": 6, "length": 10, "color": "blue"},
        ],
        "traffic_lights": lights if lights is not None else [],
    })

class TestSceneRenderer(unittest.TestCase):
    def setUp(self):
        self.renderer = SceneRenderer()
        self.identity = ViewportTransform(scale=1.0)

    def test_draw_order(self):
        snapshot = make_snapshot(lights=[{"x": 100, "y": 50, "color": "red"}])
        surface = RecordingSurface()
        self.renderer.render(snapshot, self.identity, surface)

        self.assertEqual(surface.kinds(), ["clear", "line", "rect", "rect"])
        self.assertEqual(surface.calls[2][-1], "blue")
        self.assertEqual(surface.calls[3][-1], "red")
        # render leaves presenting to the caller
        self.assertEqual(surface.presented, 0)

    def test_entities_are_scaled(self):
        snapshot = make_snapshot()
        surface = RecordingSurface()
        self.renderer.render(snapshot, ViewportTransform(scale=2.0, offset_x=-10, offset_y=0), surface)

        _, start, end, width, color = surface.calls[1]
        self.assertEqual((start, end, width, color), ((-20.0, 100.0), (380.0, 100.0), 40.0, config.LANE_COLOR))

        _, center, w, h, angle, color = surface.calls[2]
        self.assertEqual((center, w, h, angle, color), ((180.0, 100.0), 12.0, 20.0, 0.0, "blue"))

    def test_signal_size_from_first_vehicle(self):
        snapshot = make_snapshot(
            cars=[
                {"x": 0, "y": 0, "direction": 1.0, "width": 2, "length": 4, "color": "blue"},
                {"x": 5, "y": 5, "direction": 0.0, "width": 9, "length": 9, "color": "green"},
            ],
            lights=[{"x": 10, "y": 10, "color": "yellow"}],
        )
        surface = RecordingSurface()
        self.renderer.render(snapshot, ViewportTransform(scale=3.0), surface)

        _, center, w, h, angle, color = surface.calls[-1]
        self.assertEqual((center, w, h, angle, color), ((30.0, 30.0), 12.0, 24.0, 0.0, "yellow"))

    def test_signal_size_without_vehicles(self):
        snapshot = make_snapshot(cars=[], lights=[{"x": 10, "y": 10, "color": "green"}])
        surface = RecordingSurface()
        self.renderer.render(snapshot, ViewportTransform(scale=3.0), surface)

        _, _, w, h, _, _ = surface.calls[-1]
        self.assertEqual((w, h), (6.0, 6.0))

    def test_pixels_layer_signal_over_vehicle_over_lane(self):
        screen = pygame.Surface((200, 100))
        surface = PygameSurface(screen)

        self.renderer.render(make_snapshot(), self.identity, surface)
        self.assertEqual(screen.get_at((20, 50)), pygame.Color(config.LANE_COLOR))
        self.assertEqual(screen.get_at((100, 50)), pygame.Color("blue"))
        self.assertEqual(screen.get_at((100, 5)), pygame.Color(config.BACKGROUND_COLOR))

        self.renderer.render(make_snapshot(lights=[{"x": 100, "y": 50, "color": "red"}]), self.identity, surface)
        self.assertEqual(screen.get_at((100, 50)), pygame.Color("red"))
        self.assertEqual(screen.get_at((20, 50)), pygame.Color(config.LANE_COLOR))

    def test_unknown_color_uses_fallback(self):
        screen = pygame.Surface((200, 100))
        surface = PygameSurface(screen)
        snapshot = make_snapshot(cars=[
            {"x": 100, "y": 50, "direction": 0.0, "width": 6, "length": 10, "color": "not-a-color"},
        ])
        with self.assertLogs("viewer.rendering.surface", level="WARNING"):
            self.renderer.render(snapshot, self.identity, surface)
        self.assertEqual(screen.get_at((100, 50)), pygame.Color(config.FALLBACK_COLOR))

    def test_lane_width_is_clamped_to_surface(self):
        screen = pygame.Surface((200, 100))
        surface = PygameSurface(screen)
        snapshot = Snapshot.model_validate({
            "lanes": [{"startx": 0, "starty": 2.5e-10, "endx": 1e-9, "endy": 2.5e-10, "width": 2}],
        })
        self.renderer.render(snapshot, ViewportTransform(scale=2e11), surface)
        self.assertEqual(screen.get_at((100, 5)), pygame.Color(config.LANE_COLOR))
        self.assertEqual(screen.get_at((100, 95)), pygame.Color(config.LANE_COLOR))

class TestRotatedRectCorners(unittest.TestCase):
    def test_axis_aligned(self):
        corners = rotated_rect_corners((10, 20), 4, 8, 0.0)
        self.assertEqual(corners, [(8, 16), (12, 16), (12, 24), (8, 24)])

    def test_quarter_turn_swaps_extents(self):
        corners = rotated_rect_corners((0, 0), 4, 8, math.pi / 2)
        xs = [x for x, _ in corners]
        ys = [y for _, y in corners]
        self.assertAlmostEqual(max(xs) - min(xs), 8)
        self.assertAlmostEqual(max(ys) - min(ys), 4)

if __name__ == '__main__':
    unittest.main()
