from dataclasses import dataclass
from enum import StrEnum

from panser.core.errors import PanserError


class PipelineState(StrEnum):
    idle = "idle"
    running = "running"
    completed = "completed"
    failed = "failed"


@dataclass
class RunOutcome:
    """
    Terminal result of a Pipeline run.

    Produced once both the reader and the writer tasks have stopped.
    """
    state: PipelineState

    error: PanserError | None = None
    """
    First error recorded by either side, None when the run completed.
    """

    frames_read: int = 0
    frames_written: int = 0

    @property
    def exit_code(self) -> int:
        if self.error is None:
            return 0
        return self.error.code


class ErrorCell:
    """
    Write-once holder for the first error of a run.

    Both pipeline tasks may report a failure; only the first one is kept so
    a consequential error never overwrites its cause.
    """
    def __init__(self) -> None:
        self._error: PanserError | None = None

    @property
    def error(self) -> PanserError | None:
        return self._error

    def record(self, error: PanserError) -> bool:
        if self._error is not None:
            return False
        self._error = error
        return True
