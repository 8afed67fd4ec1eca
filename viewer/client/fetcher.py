import asyncio
import logging
from typing import Any, Optional, Set
import requests
from pydantic import ValidationError

from viewer.domain.config import ViewerConfig
from viewer.domain.models import Snapshot
from viewer.domain.errors import NetworkFailure, ParseFailure

logger = logging.getLogger(__name__)

class SnapshotFetcher:
    """Talks to the simulation service: advance one step, pull the render data.

    The blocking calls run on worker threads through the async wrappers so the
    refresh loop keeps its cadence while requests are in flight.
    """

    def __init__(self, config: ViewerConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self._advance_tasks: Set[asyncio.Task] = set()

    def _request(self, method: str, url: str) -> requests.Response:
        try:
            response = self.session.request(method, url, timeout=self.config.request_timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise NetworkFailure(url, f"HTTP {e.response.status_code}") from e
        except requests.RequestException as e:
            raise NetworkFailure(url, str(e)) from e
        return response

    def advance(self) -> Any:
        response = self._request("POST", self.config.advance_url)
        if not response.content:
            return None
        try:
            result = response.json()
        except ValueError:
            # The step happened; an unreadable body is only informational
            result = response.text
        logger.debug("Simulation updated: %s", result)
        return result

    def fetch_snapshot(self) -> Snapshot:
        url = self.config.snapshot_url
        response = self._request("GET", url)
        try:
            payload = response.json()
        except ValueError as e:
            raise ParseFailure(f"{url}: response is not JSON") from e
        try:
            return Snapshot.model_validate(payload)
        except ValidationError as e:
            raise ParseFailure(f"{url}: {e.error_count()} invalid field(s)\n{e}") from e

    async def fetch_snapshot_async(self) -> Snapshot:
        return await asyncio.to_thread(self.fetch_snapshot)

    async def _advance_logged(self, pending: asyncio.Future):
        try:
            await pending
        except NetworkFailure as e:
            logger.error("Error updating simulation: %s", e)

    def request_advance(self) -> asyncio.Task:
        """Fire-and-forget step request. Failures are logged, never raised."""
        # Handed to the executor now so the step is issued ahead of the fetch
        pending = asyncio.get_running_loop().run_in_executor(None, self.advance)
        task = asyncio.create_task(self._advance_logged(pending))
        self._advance_tasks.add(task)
        task.add_done_callback(self._advance_tasks.discard)
        return task

    async def refresh(self) -> Optional[Snapshot]:
        """One refresh cycle. Returns None when the snapshot could not be fetched."""
        # Not transactional: the service may or may not have applied the step yet
        self.request_advance()
        try:
            return await self.fetch_snapshot_async()
        except (NetworkFailure, ParseFailure) as e:
            logger.error("Error fetching render data: %s", e)
            return None

    def close(self):
        for task in list(self._advance_tasks):
            task.cancel()
        self._advance_tasks.clear()
        self.session.close()
