"""
Frontend service runtime.

The controller (the thread driving ``ServiceRuntime``) binds the listener,
probes the database once, then hands serving to a processor thread and waits
for SIGINT or SIGTERM. On the first signal it sets a one-shot stop event and
blocks until the processor reports that every in-flight request is done.
Nothing is ever killed.
"""

import asyncio
import logging
import signal
import socket
import threading
from typing import Callable, Dict, Iterable, Optional

from hcpfrontend.frontend.config import Settings
from hcpfrontend.frontend.constants import LifecycleState
from hcpfrontend.frontend.database import DatabaseClient
from hcpfrontend.frontend.frontend import Frontend
from hcpfrontend.ocm.base import ClusterServiceClientSpec

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)
LISTEN_BACKLOG = 2048


class ServiceRuntime:
    def __init__(
        self,
        *,
        settings: Settings,
        cs_client: ClusterServiceClientSpec,
        db_client: Optional[DatabaseClient] = None,
        frontend_factory: Callable[..., Frontend] = Frontend,
        signals: Iterable[signal.Signals] = TERMINATION_SIGNALS,
    ):
        self.settings = settings
        self.cs_client = cs_client
        self.db_client = db_client
        self.frontend_factory = frontend_factory
        self.signals = tuple(signals)

        self.state = LifecycleState.CREATED
        self.listener: Optional[socket.socket] = None
        self.frontend: Optional[Frontend] = None
        self.received_signal: Optional[signal.Signals] = None

        self._signal_received = threading.Event()
        # Close-only: set once by the controller, read by the processor.
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._previous_handlers: Dict[signal.Signals, object] = {}

    def _require(self, state: LifecycleState):
        if self.state != state:
            raise RuntimeError(
                f"runtime is {self.state.value}, expected {state.value}"
            )

    def _advance(self, expected: LifecycleState):
        self._require(expected)
        self.state = expected.next_state()
        logger.debug(f"Frontend runtime {expected.value} -> {self.state.value}")

    # -------------------------------------------------
    # CREATED -> LISTENING
    # -------------------------------------------------
    def listen(self) -> socket.socket:
        """Bind the inbound listener. Failure to bind is fatal and re-raised."""
        self._require(LifecycleState.CREATED)

        host, port = self.settings.host, self.settings.port
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
            sock.listen(LISTEN_BACKLOG)
        except OSError as e:
            sock.close()
            logger.error(f"Failed to listen on {host}:{port}: {e}")
            raise

        self.listener = sock
        self._advance(LifecycleState.CREATED)
        return sock

    # -------------------------------------------------
    # LISTENING -> RUNNING
    # -------------------------------------------------
    def probe_database(self):
        """Check database access once. The outcome is logged, never raised."""
        if self.db_client is None:
            logger.warning("No database client configured, skipping DB access test")
            return

        logger.info("Testing DB Access")
        try:
            result = asyncio.run(self.db_client.db_connection_test())
        except Exception as e:
            logger.error(f"Database test failed to fetch properties: {e}")
        else:
            logger.info(f"Database check completed - {result}")

    def install_signal_handlers(self):
        for sig in self.signals:
            self._previous_handlers[sig] = signal.signal(sig, self.handle_signal)

    def restore_signal_handlers(self):
        for sig, handler in self._previous_handlers.items():
            signal.signal(sig, handler)
        self._previous_handlers.clear()

    def start(self):
        self._require(LifecycleState.LISTENING)

        self.probe_database()
        self.install_signal_handlers()

        self.frontend = self.frontend_factory(
            listener=self.listener,
            cs_client=self.cs_client,
            db_client=self.db_client,
            settings=self.settings,
        )
        self._thread = threading.Thread(
            target=self.frontend.run,
            args=(self._stop,),
            name="frontend-processor",
        )
        self._thread.start()
        self._advance(LifecycleState.LISTENING)

    # -------------------------------------------------
    # RUNNING -> DRAINING
    # -------------------------------------------------
    def handle_signal(self, signum, frame=None):
        # Only the first signal counts; later ones are already covered.
        if self._signal_received.is_set():
            return
        self.received_signal = signal.Signals(signum)
        self._signal_received.set()

    def wait_for_signal(self, poll_interval: float = 0.5) -> Optional[signal.Signals]:
        """
        Block until a termination signal has been received.

        Returns None instead if the processor thread exits on its own, for
        example because the server failed to start.
        """
        while not self._signal_received.wait(poll_interval):
            if self._thread is not None and not self._thread.is_alive():
                logger.error("Frontend processor exited without a stop signal")
                return None
        return self.received_signal

    def shutdown(self):
        """Tell the processor to stop. Must be called exactly once."""
        self._advance(LifecycleState.RUNNING)
        logger.info("Draining frontend")
        self._stop.set()

    # -------------------------------------------------
    # DRAINING -> STOPPED
    # -------------------------------------------------
    def join(self):
        """Block until the processor has observed the stop signal and returned."""
        self._require(LifecycleState.DRAINING)

        self.frontend.join()
        self._thread.join()
        self.restore_signal_handlers()
        if self.listener is not None:
            self.listener.close()

        self._advance(LifecycleState.DRAINING)

    def run(self):
        """
        Run the full lifecycle, returning once the frontend has stopped.

        Raises RuntimeError after draining if the processor stopped by itself.
        """
        self.listen()
        self.start()

        sig = self.wait_for_signal()
        if sig is not None:
            logger.info(f"caught {sig.name} signal")

        self.shutdown()
        self.join()
        if sig is None:
            raise RuntimeError("frontend processor exited unexpectedly")
