"""JSON envelope contracts spoken by the worker on standard output."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from audio_track_switcher.worker.errors import ProtocolError

PROGRESS_MESSAGE = "progress"
DEFAULT_ERROR_MESSAGE = "Unknown error"
DEFAULT_SUCCESS_MESSAGE = "Success"


@dataclass(slots=True)
class WorkerMessage:
    """One ``{success, message, data}`` envelope."""

    success: bool
    message: str | None = None
    data: Any | None = None

    @property
    def is_progress(self) -> bool:
        return (
            self.message == PROGRESS_MESSAGE
            and isinstance(self.data, dict)
            and "progress" in self.data
        )

    @property
    def progress(self) -> Any:
        """Raw ``data.progress`` value of a progress message."""

        if not self.is_progress:
            raise ValueError("Not a progress message")
        return self.data["progress"]


@dataclass(slots=True)
class AudioTrack:
    """One audio stream as reported by the worker."""

    index: int
    language: str
    title: str
    codec: str


@dataclass(slots=True)
class VideoInfo:
    """Decoded ``get-tracks`` payload."""

    file_path: str
    audio_tracks: list[AudioTrack] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Render the worker wire shape."""

        return {
            "filePath": self.file_path,
            "audioTracks": [
                {
                    "index": track.index,
                    "language": track.language,
                    "title": track.title,
                    "codec": track.codec,
                }
                for track in self.audio_tracks
            ],
        }


def parse_message(raw: Any) -> WorkerMessage:
    """Validate a decoded JSON value as an envelope."""

    if not isinstance(raw, dict):
        raise ProtocolError("Worker response must be a JSON object")
    success = raw.get("success")
    message = raw.get("message")
    if not isinstance(success, bool):
        raise ProtocolError("Worker response field 'success' must be a boolean")
    if message is not None and not isinstance(message, str):
        raise ProtocolError("Worker response field 'message' must be a string when provided")
    return WorkerMessage(success=success, message=message, data=raw.get("data"))


def parse_message_line(line: str) -> WorkerMessage | None:
    """Decode one output line, returning ``None`` for anything that is not an envelope."""

    stripped = line.strip()
    if not stripped:
        return None
    try:
        return parse_message(json.loads(stripped))
    except (json.JSONDecodeError, ProtocolError):
        return None


def read_envelope(text: str) -> WorkerMessage:
    """Decode the whole worker output as a single envelope."""

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as error:
        raise ProtocolError(f"Failed to parse response: {error}") from error
    return parse_message(raw)


def read_video_info(data: Any) -> VideoInfo:
    """Decode the ``data`` field of a successful ``get-tracks`` response."""

    if not isinstance(data, dict):
        raise ProtocolError("Failed to parse video info: data must be an object")
    file_path = data.get("filePath")
    raw_tracks = data.get("audioTracks")
    if not isinstance(file_path, str):
        raise ProtocolError("Failed to parse video info: filePath must be a string")
    if not isinstance(raw_tracks, list):
        raise ProtocolError("Failed to parse video info: audioTracks must be an array")

    tracks: list[AudioTrack] = []
    for item in raw_tracks:
        if not isinstance(item, dict):
            raise ProtocolError("Failed to parse video info: audio track must be an object")
        index = item.get("index")
        # bool is an int subclass; the wire format only allows real integers.
        if not isinstance(index, int) or isinstance(index, bool):
            raise ProtocolError("Failed to parse video info: track index must be an integer")
        values: dict[str, str] = {}
        for field_name in ("language", "title", "codec"):
            value = item.get(field_name)
            if not isinstance(value, str):
                raise ProtocolError(
                    f"Failed to parse video info: track {field_name} must be a string",
                )
            values[field_name] = value
        tracks.append(AudioTrack(index=index, **values))
    return VideoInfo(file_path=file_path, audio_tracks=tracks)
