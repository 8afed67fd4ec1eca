from viewer.domain.models import Snapshot, ViewportTransform
from viewer.domain import config
from viewer.rendering.surface import Surface

class SceneRenderer:
    """Clears the surface and draws lanes, then vehicles, then signals.

    Later layers occlude earlier ones so vehicles and signals are never hidden
    under road geometry. Holds no per-frame state.
    """

    def __init__(self, lane_color: str = config.LANE_COLOR):
        self.lane_color = lane_color

    def render(self, snapshot: Snapshot, transform: ViewportTransform, surface: Surface):
        surface.clear()
        self._draw_lanes(snapshot, transform, surface)
        self._draw_vehicles(snapshot, transform, surface)
        self._draw_signals(snapshot, transform, surface)

    def _draw_lanes(self, snapshot: Snapshot, transform: ViewportTransform, surface: Surface):
        for lane in snapshot.lanes:
            surface.stroke_line(
                transform.apply(lane.startx, lane.starty),
                transform.apply(lane.endx, lane.endy),
                transform.scale_length(lane.width),
                self.lane_color,
            )

    def _draw_vehicles(self, snapshot: Snapshot, transform: ViewportTransform, surface: Surface):
        for car in snapshot.vehicles:
            surface.fill_rect(
                transform.apply(car.x, car.y),
                transform.scale_length(car.width),
                transform.scale_length(car.length),
                car.direction,
                car.color,
            )

    def _draw_signals(self, snapshot: Snapshot, transform: ViewportTransform, surface: Surface):
        if not snapshot.signals:
            return
        ref_width = ref_length = config.SIGNAL_REFERENCE_SIZE
        if snapshot.vehicles:
            ref = snapshot.vehicles[0]
            ref_width = ref.width or config.SIGNAL_REFERENCE_SIZE
            ref_length = ref.length or config.SIGNAL_REFERENCE_SIZE

        light_width = transform.scale_length(ref_width * config.SIGNAL_SIZE_FACTOR)
        light_height = transform.scale_length(ref_length * config.SIGNAL_SIZE_FACTOR)
        for light in snapshot.signals:
            surface.fill_rect(transform.apply(light.x, light.y), light_width, light_height, 0.0, light.color)
