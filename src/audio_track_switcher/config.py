"""Runtime configuration for worker invocation."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

WORKER_BASENAME = "audio-track-backend"
DEFAULT_PROGRESS_EVENT = "progress-update"
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def resolve_worker_path(app_dir: Path, os_name: str | None = None) -> Path:
    """Return the platform-specific worker binary path inside ``app_dir``."""

    current_os_name = os_name or os.name
    name = f"{WORKER_BASENAME}.exe" if current_os_name == "nt" else WORKER_BASENAME
    return app_dir / name


def _default_app_dir() -> Path:
    entrypoint = sys.argv[0] if sys.argv and sys.argv[0] else "."
    return Path(entrypoint).resolve().parent


@dataclass(slots=True)
class WorkerSettings:
    """Where the worker executable lives."""

    executable_path: Path | None = None
    app_dir: Path = field(default_factory=_default_app_dir)


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    worker: WorkerSettings = field(default_factory=WorkerSettings)
    log_level: str = "WARNING"
    progress_event: str = DEFAULT_PROGRESS_EVENT

    @classmethod
    def from_env(cls, worker_path: Path | None = None) -> Settings:
        """Load settings from environment; an explicit ``worker_path`` wins."""

        env_worker_path = os.getenv("AUDIO_TRACK_WORKER_PATH", "").strip()
        env_app_dir = os.getenv("AUDIO_TRACK_APP_DIR", "").strip()
        return cls(
            worker=WorkerSettings(
                executable_path=worker_path or (Path(env_worker_path) if env_worker_path else None),
                app_dir=Path(env_app_dir) if env_app_dir else _default_app_dir(),
            ),
            log_level=os.getenv("AUDIO_TRACK_LOG_LEVEL", "WARNING").strip().upper(),
            progress_event=os.getenv("AUDIO_TRACK_PROGRESS_EVENT", DEFAULT_PROGRESS_EVENT).strip(),
        )

    @property
    def worker_path(self) -> Path:
        if self.worker.executable_path is not None:
            return self.worker.executable_path
        return resolve_worker_path(self.worker.app_dir)

    def validate(self) -> None:
        """Raise configuration error for unusable values."""

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid AUDIO_TRACK_LOG_LEVEL: {self.log_level!r}. "
                f"Expected one of: {', '.join(sorted(_LOG_LEVELS))}.",
            )
        if not self.progress_event:
            raise ValueError("AUDIO_TRACK_PROGRESS_EVENT must not be empty.")

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
