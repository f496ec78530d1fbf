from __future__ import annotations

from pathlib import Path

import allure
import pytest

from audio_track_switcher.config import Settings, WorkerSettings, resolve_worker_path

pytestmark = [
    allure.epic("Audio Tracks"),
    allure.feature("Configuration"),
]


def test_resolve_worker_path_is_platform_specific(tmp_path: Path) -> None:
    assert resolve_worker_path(tmp_path, os_name="posix") == tmp_path / "audio-track-backend"
    assert resolve_worker_path(tmp_path, os_name="nt") == tmp_path / "audio-track-backend.exe"


def test_worker_path_prefers_explicit_executable(tmp_path: Path) -> None:
    explicit = tmp_path / "custom-worker"
    settings = Settings(worker=WorkerSettings(executable_path=explicit, app_dir=tmp_path / "app"))

    assert settings.worker_path == explicit


def test_worker_path_falls_back_to_app_dir(tmp_path: Path) -> None:
    settings = Settings(worker=WorkerSettings(app_dir=tmp_path))

    assert settings.worker_path == resolve_worker_path(tmp_path)


def test_from_env_reads_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AUDIO_TRACK_WORKER_PATH", str(tmp_path / "w"))
    monkeypatch.setenv("AUDIO_TRACK_APP_DIR", str(tmp_path / "app"))
    monkeypatch.setenv("AUDIO_TRACK_LOG_LEVEL", "debug")
    monkeypatch.setenv("AUDIO_TRACK_PROGRESS_EVENT", "remux-progress")

    settings = Settings.from_env()

    assert settings.worker.executable_path == tmp_path / "w"
    assert settings.worker.app_dir == tmp_path / "app"
    assert settings.log_level == "DEBUG"
    assert settings.progress_event == "remux-progress"
    settings.validate()


def test_from_env_explicit_worker_path_wins(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AUDIO_TRACK_WORKER_PATH", str(tmp_path / "env-worker"))

    settings = Settings.from_env(worker_path=tmp_path / "cli-worker")

    assert settings.worker_path == tmp_path / "cli-worker"


def test_from_env_defaults(monkeypatch) -> None:
    for name in (
        "AUDIO_TRACK_WORKER_PATH",
        "AUDIO_TRACK_APP_DIR",
        "AUDIO_TRACK_LOG_LEVEL",
        "AUDIO_TRACK_PROGRESS_EVENT",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.worker.executable_path is None
    assert settings.worker_path.name in {"audio-track-backend", "audio-track-backend.exe"}
    assert settings.log_level == "WARNING"
    assert settings.progress_event == "progress-update"


def test_validate_rejects_unknown_log_level() -> None:
    with pytest.raises(ValueError, match="AUDIO_TRACK_LOG_LEVEL"):
        Settings(log_level="LOUD").validate()


def test_validate_rejects_empty_progress_event() -> None:
    with pytest.raises(ValueError, match="AUDIO_TRACK_PROGRESS_EVENT"):
        Settings(progress_event="").validate()
