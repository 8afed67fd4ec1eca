import asyncio
import logging
from typing import Optional, Set

from viewer.client.fetcher import SnapshotFetcher
from viewer.domain.config import ViewerConfig
from viewer.domain.errors import EmptyGeometry
from viewer.domain.models import Snapshot, ViewportTransform
from viewer.domain.state import Frame, FrameCell
from viewer.geometry.bounds import compute_bounds
from viewer.geometry.viewport import fit_viewport
from viewer.rendering.renderer import SceneRenderer
from viewer.rendering.surface import Surface

logger = logging.getLogger(__name__)

class RefreshLoopController:
    """Drives advance + fetch + redraw on a fixed interval and refits on resize.

    Everything runs on one asyncio loop. Each timer tick starts its own cycle
    task, so a slow service lets cycles overlap; a result issued before the
    frame already on screen is dropped instead of replacing it.
    """

    def __init__(
        self,
        config: ViewerConfig,
        surface: Surface,
        fetcher: Optional[SnapshotFetcher] = None,
        renderer: Optional[SceneRenderer] = None,
    ):
        self.config = config
        self.surface = surface
        self.fetcher = fetcher or SnapshotFetcher(config)
        self.renderer = renderer or SceneRenderer()
        self.cell = FrameCell()
        self._sequence = 0
        self._timer_task: Optional[asyncio.Task] = None
        self._cycles: Set[asyncio.Task] = set()
        self._closed = False
        self._stopped = asyncio.Event()

    @property
    def frame(self) -> Optional[Frame]:
        return self.cell.frame

    @property
    def running(self) -> bool:
        return self._timer_task is not None and not self._closed

    def start(self):
        if self._closed:
            raise RuntimeError("controller has been stopped")
        if self._timer_task is None:
            self._timer_task = asyncio.create_task(self._run_timer())

    async def run_forever(self):
        self.start()
        await self._stopped.wait()

    async def _run_timer(self):
        dt = self.config.poll_interval
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while not self._closed:
            task = asyncio.create_task(self.tick())
            self._cycles.add(task)
            task.add_done_callback(self._cycles.discard)

            # Absolute deadlines keep the cadence from drifting
            next_tick += dt
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    async def tick(self):
        """One refresh cycle: advance, fetch, refit if needed, redraw."""
        self._sequence += 1
        sequence = self._sequence
        try:
            snapshot = await self.fetcher.refresh()
            if snapshot is None or self._closed:
                return
            self._apply(sequence, snapshot)
        except Exception:
            logger.exception("Refresh cycle %d failed", sequence)

    def _apply(self, sequence: int, snapshot: Snapshot):
        current = self.cell.frame
        if current is not None and sequence < current.sequence:
            logger.debug("Dropping snapshot %d, frame %d already shown", sequence, current.sequence)
            return

        if current is not None and snapshot.same_geometry(current.snapshot):
            transform = current.transform
        else:
            transform = self._fit(snapshot)
            if transform is None:
                if current is None:
                    return
                transform = current.transform

        frame = Frame(sequence=sequence, snapshot=snapshot, transform=transform)
        if self.cell.swap(frame):
            self._redraw(frame)

    def _fit(self, snapshot: Snapshot) -> Optional[ViewportTransform]:
        try:
            box = compute_bounds(snapshot.lanes)
            return fit_viewport(box, self.surface.width, self.surface.height)
        except EmptyGeometry:
            logger.warning("Snapshot has no lanes, keeping previous viewport")
        except ValueError as e:
            logger.warning("Cannot fit viewport: %s", e)
        return None

    def on_resize(self):
        """Refit the last known snapshot to the surface's new size and redraw."""
        frame = self.cell.frame
        if self._closed or frame is None:
            return
        try:
            transform = self._fit(frame.snapshot)
            if transform is None:
                return
            resized = frame.model_copy(update={"transform": transform})
            if self.cell.swap(resized):
                self._redraw(resized)
        except Exception:
            logger.exception("Redraw after resize to %dx%d failed", self.surface.width, self.surface.height)

    def _redraw(self, frame: Frame):
        self.renderer.render(frame.snapshot, frame.transform, self.surface)
        self.surface.present()

    def stop(self):
        if self._closed:
            return
        self._closed = True
        if self._timer_task is not None:
            self._timer_task.cancel()
        for task in list(self._cycles):
            task.cancel()
        self._cycles.clear()
        self.fetcher.close()
        self._stopped.set()
        logger.info("Refresh loop stopped after %d cycles", self._sequence)
