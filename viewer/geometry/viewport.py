import logging
from typing import Optional
from viewer.domain.models import BoundingBox, ViewportTransform
from viewer.geometry.bounds import is_degenerate

logger = logging.getLogger(__name__)

def _axis_scale(pixels: float, extent: float) -> Optional[float]:
    if extent <= 0:
        return None
    return pixels / extent

def fit_viewport(box: BoundingBox, surface_width: float, surface_height: float) -> ViewportTransform:
    """Uniform scale and offset that fit `box` inside the surface.

    The world origin is shifted to the box's min corner, then scaled by the
    binding axis. An axis with zero extent adds no constraint; with both axes
    degenerate the scale is 1.
    """
    if surface_width <= 0 or surface_height <= 0:
        raise ValueError(f"surface must have a positive size, got {surface_width}x{surface_height}")

    candidates = [
        s for s in (_axis_scale(surface_width, box.width), _axis_scale(surface_height, box.height))
        if s is not None
    ]
    if is_degenerate(box):
        logger.debug("Degenerate bounds %s, fitting on %d axis", box, len(candidates))
    scale = min(candidates) if candidates else 1.0

    return ViewportTransform(scale=scale, offset_x=-box.min_x, offset_y=-box.min_y)
