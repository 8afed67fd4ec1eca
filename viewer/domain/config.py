# Viewer Configuration
import os
from pydantic import BaseModel, Field

# Simulation Service
DEFAULT_BASE_URL = "http://localhost:5005"
RENDER_DATA_PATH = "/api/render-data"
UPDATE_SIMULATION_PATH = "/api/simulation/update"
REQUEST_TIMEOUT = 2.0        # Seconds per HTTP request

# Refresh Loop
POLL_INTERVAL_MS = 100       # ~10 FPS

# Window
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
WINDOW_TITLE = "Traffic Viewer"
FRAME_PUMP_INTERVAL = 1.0 / 60.0  # Seconds between window event polls

# Colors
BACKGROUND_COLOR = "white"
LANE_COLOR = "gray"
FALLBACK_COLOR = "magenta"   # Used when the service sends an unknown color name

# Signals are sized from the first vehicle in the snapshot
SIGNAL_SIZE_FACTOR = 2.0
SIGNAL_REFERENCE_SIZE = 1.0  # World units, when there are no vehicles

# Environment overrides
ENV_SNAPSHOT_URL = "TRAFFIC_VIEWER_SNAPSHOT_URL"
ENV_ADVANCE_URL = "TRAFFIC_VIEWER_ADVANCE_URL"
ENV_POLL_INTERVAL_MS = "TRAFFIC_VIEWER_POLL_INTERVAL_MS"
ENV_LOG_LEVEL = "TRAFFIC_VIEWER_LOG_LEVEL"

class ViewerConfig(BaseModel):
    snapshot_url: str = DEFAULT_BASE_URL + RENDER_DATA_PATH
    advance_url: str = DEFAULT_BASE_URL + UPDATE_SIMULATION_PATH
    poll_interval_ms: int = Field(default=POLL_INTERVAL_MS, gt=0)
    request_timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)

    @property
    def poll_interval(self) -> float:
        return self.poll_interval_ms / 1000.0

    @classmethod
    def from_env(cls) -> "ViewerConfig":
        overrides = {}
        if os.environ.get(ENV_SNAPSHOT_URL):
            overrides["snapshot_url"] = os.environ[ENV_SNAPSHOT_URL]
        if os.environ.get(ENV_ADVANCE_URL):
            overrides["advance_url"] = os.environ[ENV_ADVANCE_URL]
        if os.environ.get(ENV_POLL_INTERVAL_MS):
            overrides["poll_interval_ms"] = int(os.environ[ENV_POLL_INTERVAL_MS])
        return cls(**overrides)
