"""Failure taxonomy for one worker invocation."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Which stage of the invocation failed."""

    LAUNCH = "launch"
    PROTOCOL = "protocol"
    PROCESS = "process"
    WORKER = "worker"
    DELIVERY = "delivery"


class WorkerInvocationError(RuntimeError):
    """Terminal failure of a worker invocation."""

    kind: FailureKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class LaunchError(WorkerInvocationError):
    """Worker executable is missing, not executable, or failed to start."""

    kind = FailureKind.LAUNCH


class ProtocolError(WorkerInvocationError):
    """Worker output does not match the envelope protocol."""

    kind = FailureKind.PROTOCOL


class ProcessError(WorkerInvocationError):
    """Worker exited with a non-success status."""

    kind = FailureKind.PROCESS

    def __init__(self, exit_code: int, stderr: str) -> None:
        super().__init__(f"Worker exited with status {exit_code}: {stderr}")
        self.exit_code = exit_code
        self.stderr = stderr


class WorkerError(WorkerInvocationError):
    """Worker reported ``success: false`` in its final message."""

    kind = FailureKind.WORKER


class DeliveryError(WorkerInvocationError):
    """Progress observer could not be notified."""

    kind = FailureKind.DELIVERY
