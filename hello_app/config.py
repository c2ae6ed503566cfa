from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_RESPONSE = "Hello OpenTelemetry!"
DEFAULT_PORT = "8080"
TLS_CERT_FILE = "/etc/tls-config/tls.crt"
TLS_KEY_FILE = "/etc/tls-config/tls.key"


class ServerConfig(BaseModel):
    """Settings read once at startup."""

    model_config = ConfigDict(frozen=True)

    response: str = DEFAULT_RESPONSE
    port: str = DEFAULT_PORT
    tls_cert_file: str = TLS_CERT_FILE
    tls_key_file: str = TLS_KEY_FILE

    @field_validator("response", mode="before")
    @classmethod
    def _default_response(cls, value: Optional[str]) -> str:
        return value or DEFAULT_RESPONSE

    @field_validator("port", mode="before")
    @classmethod
    def _default_port(cls, value: Optional[str]) -> str:
        return value or DEFAULT_PORT


def load(environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Build a ``ServerConfig`` from ``RESPONSE`` and ``PORT``.

    Unset and empty variables fall back to the defaults, so this never fails.
    """
    env = os.environ if environ is None else environ
    return ServerConfig(response=env.get("RESPONSE"), port=env.get("PORT"))
