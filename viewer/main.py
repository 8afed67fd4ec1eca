import asyncio
import logging
import os
import pygame

from viewer.domain import config
from viewer.domain.config import ViewerConfig
from viewer.kernel.refresh_loop import RefreshLoopController
from viewer.rendering.surface import PygameSurface

logger = logging.getLogger(__name__)

async def run_viewer(viewer_config: ViewerConfig):
    """Opens the window and pumps its events until it is closed."""
    pygame.init()
    screen = pygame.display.set_mode((config.WINDOW_WIDTH, config.WINDOW_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(config.WINDOW_TITLE)
    surface = PygameSurface(screen)
    surface.clear()
    surface.present()

    controller = RefreshLoopController(viewer_config, surface)
    controller.start()
    try:
        while controller.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    controller.stop()
                elif event.type == pygame.VIDEORESIZE:
                    surface.resize(event.w, event.h)
                    controller.on_resize()
            await asyncio.sleep(config.FRAME_PUMP_INTERVAL)
    finally:
        controller.stop()
        pygame.quit()

def main():
    logging.basicConfig(
        level=os.environ.get(config.ENV_LOG_LEVEL, "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    viewer_config = ViewerConfig.from_env()
    logger.info(
        "Polling %s every %d ms (advance: %s)",
        viewer_config.snapshot_url, viewer_config.poll_interval_ms, viewer_config.advance_url,
    )
    try:
        asyncio.run(run_viewer(viewer_config))
    except KeyboardInterrupt:
        pass

if __name__ == "__main__":
    main()
