from __future__ import annotations

import logging
import os
from typing import Any, Callable

import uvicorn

from .config import TLS_CERT_FILE, TLS_KEY_FILE

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"


class BootstrapError(RuntimeError):
    """The server could not be started or stopped serving."""


class StartupError(BootstrapError):
    pass


class ServeError(BootstrapError):
    pass


def has_tls_materials(cert_file: str) -> bool:
    """Return whether ``cert_file`` exists.

    Only a missing file means "no TLS"; any other ``OSError`` (permission
    denied and so on) is raised to the caller.
    """
    try:
        os.stat(cert_file)
    except FileNotFoundError:
        return False
    return True


def serve(
    port: str,
    app: Any,
    cert_file: str = TLS_CERT_FILE,
    key_file: str = TLS_KEY_FILE,
    tls_available: Callable[[str], bool] = has_tls_materials,
    runner: Callable[..., Any] = uvicorn.run,
) -> None:
    """Listen on ``port``, over TLS when the certificate is present.

    Blocks while the server runs. Every failure is fatal and surfaces as a
    ``BootstrapError``; there is no retry.
    """
    logger.info("serving on %s", port)
    try:
        use_tls = tls_available(cert_file)
    except OSError as exc:
        logger.critical("failed to start serving: %s", exc)
        raise StartupError(f"failed to start serving: {exc}") from exc

    options = {}
    if use_tls:
        options = {"ssl_certfile": cert_file, "ssl_keyfile": key_file}
    try:
        if not (port.isascii() and port.isdigit()):
            raise ValueError(f"invalid port {port!r}")
        runner(app, host=HOST, port=int(port), log_config=None, **options)
    except SystemExit as exc:
        # uvicorn exits instead of raising when it cannot bind
        logger.critical("ListenAndServe: server exited with status %s", exc.code)
        raise ServeError(f"ListenAndServe: server exited with status {exc.code}") from exc
    except Exception as exc:
        logger.critical("ListenAndServe: %s", exc)
        raise ServeError(f"ListenAndServe: {exc}") from exc
