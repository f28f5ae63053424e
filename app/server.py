# =============================================================================
# app/server.py - Process Entry Point
# =============================================================================
# Runs the API under uvicorn with a deadline-based shutdown drain:
#
#   SIGTERM/SIGINT -> stop accepting connections
#                  -> wait up to SHUTDOWN_GRACE_SECONDS for in-flight requests
#                  -> cancel whatever is left
#
# Exit codes: 0 when the drain finished in time, 1 when the deadline expired.
#
# Usage:
#   thats-whatsupp-backend
#   python -m app.server
# =============================================================================

import contextlib
import logging
import signal
import sys
import threading
import time
from collections.abc import Iterator
from types import FrameType

import uvicorn

from app.config import get_settings

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class DrainingServer(uvicorn.Server):
    """
    uvicorn server that reports whether its shutdown drain timed out.

    Signals are handled without being re-raised after shutdown, so the
    process exit code reflects the drain outcome.
    """

    def __init__(self, config: uvicorn.Config):
        super().__init__(config)
        self.drain_expired = False

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        if threading.current_thread() is not threading.main_thread():
            yield
            return

        original = {sig: signal.signal(sig, self.handle_exit) for sig in SHUTDOWN_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in original.items():
                signal.signal(sig, handler)

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        if not self.should_exit:
            logger.info(f"{signal.Signals(sig).name} received. Shutting down...")
        super().handle_exit(sig, frame)

    async def shutdown(self, sockets=None) -> None:
        grace = self.config.timeout_graceful_shutdown
        started = time.monotonic()

        await super().shutdown(sockets=sockets)

        if grace is not None and time.monotonic() - started >= grace:
            self.drain_expired = True
            logger.error(f"Shutdown drain exceeded {grace}s; remaining requests were cancelled")


def main() -> int:
    """Serve the API until a shutdown signal arrives."""
    settings = get_settings()

    config = uvicorn.Config(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        proxy_headers=True,
        forwarded_allow_ips="*",
        timeout_graceful_shutdown=settings.SHUTDOWN_GRACE_SECONDS,
        log_level="debug" if settings.DEBUG else "info",
    )
    server = DrainingServer(config)
    server.run()

    return 1 if server.drain_expired else 0


if __name__ == "__main__":
    sys.exit(main())
