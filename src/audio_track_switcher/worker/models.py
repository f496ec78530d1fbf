"""Requests sent to the external media worker."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class WorkerCommand(str, Enum):
    """Verbs understood by the worker executable."""

    GET_TRACKS = "get-tracks"
    SWITCH_TRACK = "switch-track"


@dataclass(frozen=True, slots=True)
class WorkerRequest:
    """One worker invocation: verb plus ordered positional arguments."""

    command: WorkerCommand
    args: tuple[str, ...] = ()

    @classmethod
    def get_tracks(cls, video_path: str | Path) -> WorkerRequest:
        return cls(command=WorkerCommand.GET_TRACKS, args=(str(video_path),))

    @classmethod
    def switch_track(
        cls,
        input_path: str | Path,
        track_index: int,
        output_path: str | Path,
    ) -> WorkerRequest:
        return cls(
            command=WorkerCommand.SWITCH_TRACK,
            args=(str(input_path), str(int(track_index)), str(output_path)),
        )

    def to_argv(self, executable: str | Path) -> list[str]:
        """Render the full argv for ``subprocess``."""

        return [str(executable), self.command.value, *self.args]
