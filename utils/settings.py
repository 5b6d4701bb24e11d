"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_BYTES = 50 * 1024 * 1024
VALID_MODES = ("development", "production")


@dataclass(frozen=True)
class AppSettings:
    """Server settings.

    Attributes:
        database_url: Connection string for the spouses database.
        port: TCP port the server listens on.
        mode: "development" exposes error details; "production" serves the
            built frontend and hides them.
        max_body_bytes: Largest request body accepted, in bytes.
        public_dir: Directory holding built frontend assets.
    """

    database_url: str
    port: int = DEFAULT_PORT
    mode: str = "development"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    public_dir: Path = BASE_DIR / "public"

    @property
    def is_development(self) -> bool:
        return self.mode == "development"

    @property
    def is_production(self) -> bool:
        return self.mode == "production"

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from the environment, reading `.env` if present.

        Raises:
            RuntimeError: If DATABASE_URL is missing or a value is malformed.
        """
        load_dotenv()

        database_url = os.getenv("DATABASE_URL")
        if database_url is None or not database_url.strip():
            raise RuntimeError(
                "DATABASE_URL must be set. Did you forget to provision a database?"
            )

        mode = (os.getenv("APP_ENV") or "development").strip().lower()
        if mode not in VALID_MODES:
            raise RuntimeError(
                f"APP_ENV={mode!r} is not supported; use 'development' or 'production'."
            )

        public_dir = os.getenv("PUBLIC_DIR")

        return cls(
            database_url=database_url.strip(),
            port=_int_env("PORT", DEFAULT_PORT),
            mode=mode,
            max_body_bytes=_int_env("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
            public_dir=Path(public_dir).expanduser() if public_dir else BASE_DIR / "public",
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name}={raw!r} is not a valid integer") from exc
