"""QThread worker for running the async YamahaClient in a Qt application.

Qt widgets must run in the main thread, but the YamahaClient uses asyncio.
This worker runs the asyncio event loop in a background thread and bridges
results to the main thread via Qt signals.
"""

import asyncio
import logging
from collections.abc import Mapping
from contextlib import suppress

from PySide6.QtCore import QThread, Signal

from yamactrl.api.client import (
    YamahaClient,
    dialogue_level_params,
    tone_control_params,
    toggle_params,
    volume_params,
)
from yamactrl.api.errors import YamahaError
from yamactrl.api.protocol import (
    DIALOGUE_LEVEL_ENDPOINT,
    SUBWOOFER_ENDPOINT,
    TONE_CONTROL_ENDPOINT,
    VOLUME_ENDPOINT,
)
from yamactrl.models.status import Toggle

logger = logging.getLogger(__name__)


class DeviceWorker(QThread):
    """Background thread worker for the receiver HTTP client.

    Runs the async YamahaClient in a QThread so the main Qt thread stays
    responsive. Results are emitted as Qt signals, which Qt delivers on the
    thread that owns the receiving object (normally the UI thread).

    Commands are serialized per endpoint. While one request for an endpoint
    is in flight, newer parameters for that endpoint replace any queued
    ones, so a burst of slider moves ends with the last value sent last.

    Example:
        worker = DeviceWorker("192.168.1.86")
        worker.status_received.connect(lambda status: print(status.volume))
        worker.error_occurred.connect(lambda msg, ctx: print(f"{ctx}: {msg}"))
        worker.start()
    """

    # Data signals
    status_received = Signal(object)  # DeviceStatus
    status_failed = Signal(str)  # message

    # Command completion signals
    command_succeeded = Signal(str, object)  # endpoint, params
    command_failed = Signal(str, object, str)  # endpoint, params, message

    # Error signal
    error_occurred = Signal(str, str)  # message, context

    def __init__(
        self,
        host: str,
        timeout: float = 5.0,
        client: YamahaClient | None = None,
        fetch_on_start: bool = True,
    ) -> None:
        """Initialize the worker.

        Args:
            host: Device hostname or IP.
            timeout: HTTP timeout in seconds.
            client: Client to use instead of creating one.
            fetch_on_start: Fetch the status as soon as the loop runs.
        """
        super().__init__()
        self._host = host
        self._client = client or YamahaClient(host, timeout)
        self._fetch_on_start = fetch_on_start
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stopped: asyncio.Event | None = None
        self._should_run = True

        # Per-endpoint command queues, only touched on the loop thread
        self._queued: dict[str, tuple[dict[str, str], str]] = {}
        self._draining: set[str] = set()

    @property
    def host(self) -> str:
        """Return device host."""
        return self._host

    @property
    def client(self) -> YamahaClient:
        """Return the underlying client."""
        return self._client

    @property
    def is_running(self) -> bool:
        """Return True while the event loop is accepting requests."""
        return self._loop is not None and self._loop.is_running()

    def stop(self) -> None:
        """Signal the worker to stop (called from main thread)."""
        self._should_run = False
        loop = self._loop
        if loop and self._stopped:
            # Loop may close between the check and the call during shutdown
            with suppress(RuntimeError):
                loop.call_soon_threadsafe(self._stopped.set)

    def request_status(self, context: str = "Menu refresh") -> None:
        """Request a status fetch.

        Thread-safe call from main thread.

        Args:
            context: Description used when reporting a failure.
        """
        if self._loop and self._loop.is_running():
            asyncio.run_coroutine_threadsafe(self._fetch_status(context), self._loop)
        else:
            logger.debug("Status request ignored: worker not running")

    def send_command(self, endpoint: str, params: Mapping[str, str], context: str) -> None:
        """Queue a command for an endpoint.

        Thread-safe call from main thread.

        Args:
            endpoint: Endpoint name, e.g. ``setVolume``.
            params: Query parameters.
            context: Description used when reporting a failure.
        """
        if self._loop and self._loop.is_running():
            asyncio.run_coroutine_threadsafe(
                self._enqueue(endpoint, dict(params), context),
                self._loop,
            )
        else:
            logger.debug("Command %s ignored: worker not running", endpoint)

    def set_volume(self, volume: int) -> None:
        """Set master volume."""
        self.send_command(VOLUME_ENDPOINT, volume_params(volume), "Failed to set volume")

    def set_bass(self, volume: int) -> None:
        """Set subwoofer volume offset."""
        self.send_command(SUBWOOFER_ENDPOINT, volume_params(volume), "Failed to set bass")

    def set_tone_control(self, bass: int, treble: int) -> None:
        """Set manual bass and treble."""
        self.send_command(
            TONE_CONTROL_ENDPOINT,
            tone_control_params(bass, treble),
            "Failed to update tone control",
        )

    def set_dialogue_level(self, level: int) -> None:
        """Set dialogue lift level."""
        self.send_command(
            DIALOGUE_LEVEL_ENDPOINT,
            dialogue_level_params(level),
            "Failed to set dialogue level",
        )

    def set_toggle(self, toggle: Toggle, state: bool) -> None:
        """Enable or disable a toggle."""
        self.send_command(toggle.endpoint, toggle_params(state), f"Failed to toggle {toggle.label}")

    def run(self) -> None:
        """Run the worker thread (entry point)."""
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._stopped = asyncio.Event()
        self._loop = loop

        try:
            if self._should_run:
                loop.run_until_complete(self._serve())
        finally:
            self._loop = None
            self._cancel_pending(loop)
            loop.run_until_complete(loop.shutdown_default_executor())
            loop.close()

    async def _serve(self) -> None:
        """Keep the loop alive until stop() is called."""
        if self._fetch_on_start:
            await self._fetch_status("Initial status fetch")
        if self._stopped is not None:
            await self._stopped.wait()

    @staticmethod
    def _cancel_pending(loop: asyncio.AbstractEventLoop) -> None:
        """Cancel requests still in flight at shutdown."""
        pending = asyncio.all_tasks(loop)
        if not pending:
            return
        logger.debug("Cancelling %d pending request(s)", len(pending))
        for task in pending:
            task.cancel()
        loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))

    async def _fetch_status(self, context: str) -> None:
        """Fetch device status and emit signal."""
        try:
            status = await self._client.fetch_status()
        except YamahaError as e:
            self.status_failed.emit(str(e))
            self.error_occurred.emit(str(e), context)
            return
        except Exception as e:
            logger.exception("Unexpected error fetching status")
            self.status_failed.emit(str(e))
            self.error_occurred.emit(str(e), context)
            return
        self.status_received.emit(status)

    async def _enqueue(self, endpoint: str, params: dict[str, str], context: str) -> None:
        """Queue parameters for an endpoint and drain its queue if idle."""
        if endpoint in self._queued:
            logger.debug("%s %s superseded by %s", endpoint, self._queued[endpoint][0], params)
        self._queued[endpoint] = (params, context)

        # Another call is already draining this endpoint and will pick it up
        if endpoint in self._draining:
            return

        self._draining.add(endpoint)
        try:
            while endpoint in self._queued:
                next_params, next_context = self._queued.pop(endpoint)
                await self._send(endpoint, next_params, next_context)
        finally:
            self._draining.discard(endpoint)

    async def _send(self, endpoint: str, params: dict[str, str], context: str) -> None:
        """Send one command and emit its outcome."""
        try:
            await self._client.send_command(endpoint, params)
        except YamahaError as e:
            self.command_failed.emit(endpoint, params, str(e))
            self.error_occurred.emit(str(e), context)
            return
        except Exception as e:
            logger.exception("Unexpected error sending %s", endpoint)
            self.command_failed.emit(endpoint, params, str(e))
            self.error_occurred.emit(str(e), context)
            return
        logger.debug("%s %s done", endpoint, params)
        self.command_succeeded.emit(endpoint, params)
