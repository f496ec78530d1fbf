"""Use-case services exposed to the presentation layer."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterator
from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from audio_track_switcher.config import Settings
from audio_track_switcher.events import PROGRESS_EVENT, EventEmitter
from audio_track_switcher.worker import (
    ResponseStreamProcessor,
    VideoInfo,
    WorkerLauncher,
    WorkerRequest,
)
from audio_track_switcher.worker.stream import ProgressObserver

logger = logging.getLogger(__name__)

_SENTINEL = object()


@dataclass(slots=True)
class SwitchJob:
    """Background ``switch-track`` invocation: progress channel plus outcome future."""

    request: WorkerRequest
    progress: queue.Queue[Any] = field(default_factory=queue.Queue)
    result: Future[str] = field(default_factory=Future)

    def iter_progress(self) -> Iterator[Any]:
        """Yield progress values in worker order until the job resolves."""

        while True:
            item = self.progress.get()
            if item is _SENTINEL:
                return
            yield item

    def wait(self, timeout: float | None = None) -> str:
        return self.result.result(timeout=timeout)


class AudioTrackService:
    """Inspect audio tracks and switch the default one through the worker."""

    def __init__(
        self,
        launcher: WorkerLauncher,
        *,
        processor: ResponseStreamProcessor | None = None,
        emitter: EventEmitter | None = None,
        progress_event: str = PROGRESS_EVENT,
    ) -> None:
        self._launcher = launcher
        self._processor = processor or ResponseStreamProcessor()
        self._emitter = emitter or EventEmitter()
        self._progress_event = progress_event

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        emitter: EventEmitter | None = None,
    ) -> AudioTrackService:
        return cls(
            WorkerLauncher(settings.worker_path),
            emitter=emitter,
            progress_event=settings.progress_event,
        )

    @property
    def emitter(self) -> EventEmitter:
        return self._emitter

    def get_audio_tracks(self, video_path: str | Path) -> VideoInfo:
        """Probe ``video_path`` and return its audio tracks."""

        worker = self._launcher.launch(WorkerRequest.get_tracks(video_path))
        info = self._processor.collect_video_info(worker)
        logger.info("Found %d audio tracks in %s", len(info.audio_tracks), video_path)
        return info

    def switch_audio_track(
        self,
        input_path: str | Path,
        track_index: int,
        output_path: str | Path,
        *,
        on_progress: ProgressObserver | None = None,
    ) -> str:
        """Remux ``input_path`` with ``track_index`` as default audio, streaming progress.

        Progress goes to ``on_progress`` when given, otherwise to the emitter's
        progress event.
        """

        request = WorkerRequest.switch_track(input_path, track_index, output_path)
        return self._run_switch(request, on_progress or self._emitter.observer(self._progress_event))

    def submit_switch(
        self,
        input_path: str | Path,
        track_index: int,
        output_path: str | Path,
    ) -> SwitchJob:
        """Run ``switch_audio_track`` on its own thread and return the job handle."""

        job = SwitchJob(request=WorkerRequest.switch_track(input_path, track_index, output_path))

        def _run() -> None:
            try:
                job.result.set_result(self._run_switch(job.request, job.progress.put))
            except Exception as exc:  # noqa: BLE001
                job.result.set_exception(exc)
            finally:
                job.progress.put(_SENTINEL)

        threading.Thread(target=_run, daemon=True, name="switch-track").start()
        return job

    def _run_switch(self, request: WorkerRequest, observer: ProgressObserver) -> str:
        worker = self._launcher.launch(request)
        message = self._processor.consume(worker, observer)
        logger.info(
            "Switched default audio track: %s (%s)",
            " ".join(request.args),
            message,
        )
        return message
