"""Result of a single chunk run."""

from __future__ import annotations

from dataclasses import dataclass

from chunk_runner.checkpoint.models import CheckpointRecord, CheckpointStatus
from chunk_runner.errors import ChunkFailedError


@dataclass
class RunResult:
    """What a run did and where it stopped.

    A failed run carries its :class:`ChunkFailedError` in ``error`` so the
    caller decides whether to raise it or hand the checkpoint to a handler.
    """

    checkpoint: CheckpointRecord
    chunks_processed: int = 0
    attempts: int = 0
    error: ChunkFailedError | None = None

    @property
    def status(self) -> CheckpointStatus:
        return self.checkpoint.status

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> RunResult:
        if self.error is not None:
            raise self.error
        return self
