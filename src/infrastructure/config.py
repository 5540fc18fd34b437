from __future__ import annotations

import os
from dataclasses import dataclass


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    default_quality: int
    batch_workers: int
    max_batch_size: int
    max_dimension: int

    @property
    def cors_origins(self) -> list[str]:
        if self.env in ("development", "staging"):
            return [
                "http://localhost:3000",
                "http://localhost:3001",
                "http://localhost:5173",  # Vite default
                "http://127.0.0.1:3000",
                "http://127.0.0.1:3001",
                "http://127.0.0.1:5173",
            ]
        return ["*"]


def get_settings() -> Settings:
    """Read settings from the environment. Not cached so tests can monkeypatch env."""
    return Settings(
        env=os.getenv("ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        default_quality=_int_env("PIXELFORGE_DEFAULT_QUALITY", 85),
        batch_workers=max(1, _int_env("PIXELFORGE_BATCH_WORKERS", 1)),
        max_batch_size=max(1, _int_env("PIXELFORGE_MAX_BATCH_SIZE", 100)),
        max_dimension=max(1, _int_env("PIXELFORGE_MAX_DIMENSION", 10000)),
    )
