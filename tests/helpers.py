"""Fake process and envelope builders shared by the test modules."""

from __future__ import annotations

import io
import json


class FakePopen:
    """In-memory stand-in for ``subprocess.Popen`` with binary pipes."""

    def __init__(self, stdout: bytes, stderr: bytes = b"", exit_code: int = 0) -> None:
        self.pid = 4242
        self.stdout = io.BytesIO(stdout)
        self.stderr = io.BytesIO(stderr)
        self.returncode: int | None = None
        self.wait_calls = 0
        self._exit_code = exit_code

    def wait(self) -> int:
        self.wait_calls += 1
        self.returncode = self._exit_code
        return self._exit_code

    def communicate(self) -> tuple[bytes, bytes]:
        out = self.stdout.read()
        err = self.stderr.read()
        self.returncode = self._exit_code
        return out, err


def envelope(success: bool, message: str | None = None, data: object = None) -> str:
    payload: dict[str, object] = {"success": success}
    if message is not None:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    return json.dumps(payload)


def progress_line(value: object) -> str:
    return envelope(True, "progress", {"progress": value})
