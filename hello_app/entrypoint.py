from __future__ import annotations

import logging
import signal
import sys
import threading
from typing import Callable, List, Optional

from uvicorn.logging import TRACE_LOG_LEVEL

from .config import ServerConfig, load
from .main import create_app
from .server import BootstrapError, serve

logger = logging.getLogger(__name__)

LOG_FORMAT = 'time="%(asctime)s" level=%(levelname)s msg="%(message)s"'
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class TextFormatter(logging.Formatter):
    """key=value lines with lowercase levels and a quoted, escaped message."""

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = record.levelname.lower()
        record.msg = record.getMessage().replace("\\", "\\\\").replace('"', '\\"')
        record.args = None
        return super().format(record)


def configure_logging(stream=None) -> None:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(TextFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.basicConfig(level=TRACE_LOG_LEVEL, handlers=[handler], force=True)


def run(
    stop: Optional[threading.Event] = None,
    config: Optional[ServerConfig] = None,
    serve_fn: Callable[..., None] = serve,
) -> int:
    """Start the listener thread and block until ``stop`` is set.

    Returns 1 when the listener failed, 0 when stopped from outside.
    """
    logger.info("Starting server")
    if config is None:
        config = load()
    if stop is None:
        stop = threading.Event()
    app = create_app(config)
    failures: List[BootstrapError] = []

    def listen() -> None:
        try:
            serve_fn(config.port, app, cert_file=config.tls_cert_file, key_file=config.tls_key_file)
        except BootstrapError as exc:
            failures.append(exc)
        finally:
            stop.set()

    threading.Thread(target=listen, name="listener", daemon=True).start()
    stop.wait()
    return 1 if failures else 0


def main() -> None:
    configure_logging()
    stop = threading.Event()

    def _interrupt(signum, frame) -> None:
        logger.info("received %s", signal.Signals(signum).name)
        stop.set()

    signal.signal(signal.SIGINT, _interrupt)
    signal.signal(signal.SIGTERM, _interrupt)
    sys.exit(run(stop))


if __name__ == "__main__":
    main()
