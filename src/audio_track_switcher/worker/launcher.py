"""Subprocess launcher for the media worker executable."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from audio_track_switcher.worker.errors import LaunchError
from audio_track_switcher.worker.models import WorkerRequest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WorkerProcess:
    """Live worker process with captured output streams."""

    request: WorkerRequest
    process: subprocess.Popen[bytes]
    stdout: IO[bytes]
    stderr: IO[bytes]

    @property
    def pid(self) -> int:
        return self.process.pid

    def wait(self) -> int:
        return self.process.wait()

    def communicate(self) -> tuple[bytes, bytes]:
        return self.process.communicate()


class WorkerLauncher:
    """Start the worker executable with a verb and positional arguments."""

    def __init__(self, executable: str | Path) -> None:
        self.executable = Path(executable)

    def launch(self, request: WorkerRequest) -> WorkerProcess:
        """Spawn the worker with stdout and stderr piped back to the caller."""

        argv = request.to_argv(self.executable)
        try:
            process = subprocess.Popen(  # noqa: S603
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as error:
            raise LaunchError(f"Worker executable not found: {self.executable}") from error
        except PermissionError as error:
            raise LaunchError(f"Worker executable is not executable: {self.executable}") from error
        except OSError as error:
            raise LaunchError(f"Failed to execute worker {self.executable}: {error}") from error

        if process.stdout is None or process.stderr is None:
            process.kill()
            process.wait()
            raise LaunchError(f"Worker output streams were not captured: {self.executable}")

        logger.info(
            "Worker started: command=%s pid=%s executable=%s",
            request.command.value,
            process.pid,
            self.executable,
        )
        return WorkerProcess(
            request=request,
            process=process,
            stdout=process.stdout,
            stderr=process.stderr,
        )
