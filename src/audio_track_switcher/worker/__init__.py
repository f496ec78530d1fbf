"""Worker process launching and output protocol."""

from audio_track_switcher.worker.contracts import (
    AudioTrack,
    VideoInfo,
    WorkerMessage,
)
from audio_track_switcher.worker.errors import (
    DeliveryError,
    FailureKind,
    LaunchError,
    ProcessError,
    ProtocolError,
    WorkerError,
    WorkerInvocationError,
)
from audio_track_switcher.worker.launcher import WorkerLauncher, WorkerProcess
from audio_track_switcher.worker.models import WorkerCommand, WorkerRequest
from audio_track_switcher.worker.stream import ResponseStreamProcessor, StreamState

__all__ = [
    "AudioTrack",
    "DeliveryError",
    "FailureKind",
    "LaunchError",
    "ProcessError",
    "ProtocolError",
    "ResponseStreamProcessor",
    "StreamState",
    "VideoInfo",
    "WorkerCommand",
    "WorkerError",
    "WorkerInvocationError",
    "WorkerLauncher",
    "WorkerMessage",
    "WorkerProcess",
    "WorkerRequest",
]
