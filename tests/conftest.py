"""Shared test fixtures."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest
from helpers import FakePopen

from audio_track_switcher.worker import WorkerProcess, WorkerRequest
from audio_track_switcher.worker.echo_worker import SCRIPT_ENV

_SHIM_TEMPLATE = """#!{python}
import sys

from audio_track_switcher.worker.echo_worker import main

sys.exit(main())
"""


FakeWorkerFactory = Callable[..., WorkerProcess]


@pytest.fixture()
def fake_worker() -> FakeWorkerFactory:
    """Build a ``WorkerProcess`` backed by in-memory pipes."""

    def _build(
        stdout_lines: list[str] | None = None,
        *,
        raw_stdout: bytes | None = None,
        stderr: str = "",
        exit_code: int = 0,
    ) -> WorkerProcess:
        if raw_stdout is None:
            raw_stdout = "".join(f"{line}\n" for line in stdout_lines or []).encode("utf-8")
        fake = FakePopen(raw_stdout, stderr.encode("utf-8"), exit_code)
        return WorkerProcess(
            request=WorkerRequest.switch_track("in.mkv", 1, "out.mkv"),
            process=fake,  # type: ignore[arg-type]
            stdout=fake.stdout,
            stderr=fake.stderr,
        )

    return _build


@pytest.fixture()
def echo_worker_path(tmp_path: Path) -> Path:
    """Executable shim that runs the local echo worker."""

    if sys.platform == "win32":
        pytest.skip("Shebang shims are POSIX-only")
    shim = tmp_path / "bin" / "audio-track-backend"
    shim.parent.mkdir(parents=True, exist_ok=True)
    shim.write_text(_SHIM_TEMPLATE.format(python=sys.executable), "utf-8")
    shim.chmod(0o755)
    return shim


@pytest.fixture()
def echo_script(tmp_path: Path, monkeypatch) -> Callable[..., Path]:
    """Make the echo worker replay a scripted stdout/stderr/exit code."""

    def _write(stdout_lines: list[str], *, stderr: str = "", exit_code: int = 0) -> Path:
        path = tmp_path / "echo_script.json"
        path.write_text(
            json.dumps({"stdout": stdout_lines, "stderr": stderr, "exit_code": exit_code}),
            "utf-8",
        )
        monkeypatch.setenv(SCRIPT_ENV, str(path))
        return path

    return _write
