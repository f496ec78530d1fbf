"""Local stand-in worker speaking the envelope protocol, for demos and integration tests."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any

from audio_track_switcher.worker.contracts import AudioTrack, VideoInfo
from audio_track_switcher.worker.models import WorkerCommand

SCRIPT_ENV = "AUDIO_TRACK_ECHO_SCRIPT"
_PROGRESS_STEPS = (0.0, 25.0, 50.0, 75.0, 100.0)


def main(argv: list[str] | None = None) -> int:
    """Dispatch one worker verb; a replay script overrides the built-in behavior."""

    args = list(sys.argv[1:] if argv is None else argv)
    script_path = os.getenv(SCRIPT_ENV, "").strip()
    if script_path:
        return _replay_script(Path(script_path))

    if not args:
        _print_error("No command specified")
        return 0

    command, rest = args[0], args[1:]
    if command == WorkerCommand.GET_TRACKS.value:
        if not rest:
            _print_error("Video path not specified")
            return 0
        info = VideoInfo(
            file_path=rest[0],
            audio_tracks=[AudioTrack(index=1, language="eng", title="Stereo", codec="aac")],
        )
        _print_success("Audio tracks retrieved successfully", info.to_dict())
        return 0

    if command == WorkerCommand.SWITCH_TRACK.value:
        if len(rest) < 3:
            _print_error("Usage: switch-track <input_path> <track_index> <output_path>")
            return 0
        output_path = rest[2]
        for percent in _PROGRESS_STEPS:
            _print_envelope(success=True, message="progress", data={"progress": percent})
        _print_success("Audio track switched successfully", {"outputPath": output_path})
        return 0

    _print_error(f"Unknown command: {command}")
    return 0


def _replay_script(path: Path) -> int:
    script = json.loads(path.read_text("utf-8"))
    for line in script.get("stdout", []):
        sys.stdout.write(line + "\n")
        sys.stdout.flush()
    stderr_text = script.get("stderr", "")
    if stderr_text:
        sys.stderr.write(stderr_text)
        sys.stderr.flush()
    return int(script.get("exit_code", 0))


def _print_success(message: str, data: Any) -> None:
    _print_envelope(success=True, message=message, data=data)


def _print_error(message: str) -> None:
    _print_envelope(success=False, message=message)


def _print_envelope(*, success: bool, message: str, data: Any | None = None) -> None:
    payload: dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        payload["data"] = data
    sys.stdout.write(json.dumps(payload) + "\n")
    sys.stdout.flush()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
