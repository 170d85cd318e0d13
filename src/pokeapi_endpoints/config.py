from __future__ import annotations

from dataclasses import dataclass

import os


DEFAULT_BASE_URI = "https://pokeapi.co/api/v2"


@dataclass(frozen=True)
class AppConfig:
    base_uri: str
    timeout_seconds: float
    connect_timeout_seconds: float
    log_level: str

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            base_uri=os.getenv("POKEAPI_BASE_URI", DEFAULT_BASE_URI).rstrip("/"),
            timeout_seconds=float(os.getenv("POKEAPI_TIMEOUT_SECONDS", "10.0")),
            connect_timeout_seconds=float(os.getenv("POKEAPI_CONNECT_TIMEOUT_SECONDS", "3.0")),
            log_level=os.getenv("POKEAPI_LOG_LEVEL", "WARNING").upper(),
        )
