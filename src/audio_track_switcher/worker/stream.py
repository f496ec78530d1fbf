"""Consume worker output and resolve one terminal outcome per invocation.

Two modes exist. ``get-tracks`` writes a single JSON envelope and is decoded
once the worker has exited. ``switch-track`` is long-running, so the worker
writes newline-delimited envelopes: progress updates are forwarded to the
observer as they arrive, and the last non-progress envelope becomes the result
once the process has actually terminated.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import IO, Any, Protocol

from audio_track_switcher.worker.contracts import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_SUCCESS_MESSAGE,
    VideoInfo,
    WorkerMessage,
    parse_message_line,
    read_envelope,
    read_video_info,
)
from audio_track_switcher.worker.errors import (
    DeliveryError,
    ProcessError,
    ProtocolError,
    WorkerError,
    WorkerInvocationError,
)
from audio_track_switcher.worker.models import WorkerRequest

logger = logging.getLogger(__name__)

ProgressObserver = Callable[[Any], None]


class StreamState(str, Enum):
    """Lifecycle of one streaming invocation."""

    STARTED = "started"
    READING_OUTPUT = "reading_output"
    OUTPUT_CLOSED = "output_closed"
    EXITED = "exited"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class WorkerHandle(Protocol):
    """Subset of ``WorkerProcess`` the processor relies on."""

    request: WorkerRequest

    @property
    def pid(self) -> int: ...

    @property
    def stdout(self) -> IO[bytes]: ...

    @property
    def stderr(self) -> IO[bytes]: ...

    def wait(self) -> int: ...

    def communicate(self) -> tuple[bytes, bytes]: ...


def resolve_outcome(final: WorkerMessage | None, exit_code: int, stderr_text: str) -> str:
    """Map exit status and the last final envelope to a success message or an error."""

    if exit_code != 0:
        raise ProcessError(exit_code, stderr_text)
    if final is None:
        raise ProtocolError("No final response received")
    if not final.success:
        raise WorkerError(final.message or DEFAULT_ERROR_MESSAGE)
    return final.message or DEFAULT_SUCCESS_MESSAGE


class ResponseStreamProcessor:
    """Reads a worker's output streams; sole owner of them for the invocation."""

    def collect_video_info(self, worker: WorkerHandle) -> VideoInfo:
        """Run ``get-tracks`` to completion and decode its single envelope."""

        stdout, _stderr = worker.communicate()
        exit_code = worker.wait()
        logger.debug("Worker pid=%s exited with status %s", worker.pid, exit_code)

        response = read_envelope(stdout.decode("utf-8", errors="replace"))
        if not response.success:
            raise WorkerError(response.message or DEFAULT_ERROR_MESSAGE)
        return read_video_info(response.data)

    def consume(self, worker: WorkerHandle, on_progress: ProgressObserver | None = None) -> str:
        """Stream ``switch-track`` output, emitting progress, and return the final message."""

        stderr_chunks: list[bytes] = []
        drain = threading.Thread(
            target=_drain_stream,
            args=(worker.stderr, stderr_chunks),
            daemon=True,
            name=f"worker-stderr-{worker.pid}",
        )
        drain.start()
        self._transition(worker, StreamState.STARTED)

        final: WorkerMessage | None = None
        delivery_failure: Exception | None = None
        self._transition(worker, StreamState.READING_OUTPUT)
        try:
            for raw_line in iter(worker.stdout.readline, b""):
                message = parse_message_line(raw_line.decode("utf-8", errors="replace"))
                if message is None:
                    logger.debug("Skipping non-envelope worker output: %r", raw_line[:200])
                    continue
                if not message.is_progress:
                    final = message
                    continue
                if on_progress is None or delivery_failure is not None:
                    continue
                try:
                    on_progress(message.progress)
                except Exception as error:  # noqa: BLE001
                    logger.warning("Progress delivery failed for pid=%s: %s", worker.pid, error)
                    delivery_failure = error
        finally:
            worker.stdout.close()
            self._transition(worker, StreamState.OUTPUT_CLOSED)
            exit_code = worker.wait()
            drain.join()
            self._transition(worker, StreamState.EXITED)
        stderr_text = b"".join(stderr_chunks).decode("utf-8", errors="replace")

        try:
            if delivery_failure is not None:
                raise DeliveryError(
                    f"Failed to emit progress event: {delivery_failure}",
                ) from delivery_failure
            result = resolve_outcome(final, exit_code, stderr_text)
        except WorkerInvocationError as error:
            self._transition(worker, StreamState.FAILED, detail=error.kind.value)
            raise
        self._transition(worker, StreamState.SUCCEEDED)
        return result

    @staticmethod
    def _transition(worker: WorkerHandle, state: StreamState, detail: str = "") -> None:
        logger.debug("Worker pid=%s state=%s %s", worker.pid, state.value, detail)


def _drain_stream(stream: IO[bytes], sink: list[bytes]) -> None:
    try:
        sink.append(stream.read())
    finally:
        stream.close()
