"""Controllers for audio track CLI commands."""

from __future__ import annotations

import json
import numbers
from collections.abc import Iterator
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from audio_track_switcher.config import Settings
from audio_track_switcher.services import AudioTrackService


@dataclass(slots=True)
class TracksCommand:
    """CLI input for audio track listing."""

    video_path: Path
    worker_path: Path | None = None
    as_json: bool = False
    settings: Settings | None = None


@dataclass(slots=True)
class SwitchCommand:
    """CLI input for default audio track switching."""

    input_path: Path
    track_index: int
    output_path: Path
    worker_path: Path | None = None
    settings: Settings | None = None


class AudioTrackCliController:
    """Coordinates worker invocations for CLI operations."""

    def list_tracks(self, command: TracksCommand) -> list[str]:
        service = _service(command.settings, command.worker_path)
        info = service.get_audio_tracks(command.video_path)
        if command.as_json:
            return [json.dumps(info.to_dict(), ensure_ascii=False, indent=2)]

        lines = [f"File: {info.file_path}", f"Audio tracks: {len(info.audio_tracks)}"]
        for track in info.audio_tracks:
            language = track.language or "und"
            title = f" {track.title}" if track.title else ""
            lines.append(f"  #{track.index} {language} {track.codec}{title}")
        return lines

    def switch_track(self, command: SwitchCommand) -> Iterator[str]:
        """Run the switch, yielding real-time progress lines and the final message."""

        service = _service(command.settings, command.worker_path)
        job = service.submit_switch(
            command.input_path,
            command.track_index,
            command.output_path,
        )
        for value in job.iter_progress():
            yield _format_progress(value)
        yield job.wait()


def _service(settings: Settings | None, worker_path: Path | None) -> AudioTrackService:
    settings = settings or Settings.from_env()
    if worker_path is not None:
        settings = replace(settings, worker=replace(settings.worker, executable_path=worker_path))
    return AudioTrackService.from_settings(settings)


def _format_progress(value: Any) -> str:
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return f"Progress: {float(value):.1f}%"
    return f"Progress: {json.dumps(value, ensure_ascii=False)}"
