"""Data model for persisted chunk progress."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from chunk_runner.errors import CheckpointFormatError


class CheckpointStatus(str, Enum):
    INIT = "init"
    RUNNING = "running"
    FAILED = "fail"
    FINISHED = "finish"


@dataclass(frozen=True)
class CheckpointRecord:
    """Durable progress of one job: its status and the next chunk to run."""

    job_id: str
    status: CheckpointStatus = CheckpointStatus.INIT
    chunk_position: int = 0

    @classmethod
    def initial(cls, job_id: str) -> CheckpointRecord:
        return cls(job_id=job_id)

    @property
    def is_finished(self) -> bool:
        return self.status is CheckpointStatus.FINISHED

    def with_status(self, status: CheckpointStatus) -> CheckpointRecord:
        return replace(self, status=status)

    def advanced(self) -> CheckpointRecord:
        """Return a copy pointing at the following chunk."""
        return replace(self, chunk_position=self.chunk_position + 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "job_id": self.job_id,
            "status": self.status.value,
            "chunk_position": self.chunk_position,
        }

    @classmethod
    def from_dict(cls, d: Any) -> CheckpointRecord:
        if not isinstance(d, dict):
            raise CheckpointFormatError(
                f"Expected a mapping, got {type(d).__name__}"
            )
        # Older checkpoint files name the identifier "chunk_id"
        job_id = d.get("job_id", d.get("chunk_id"))
        if not isinstance(job_id, str) or not job_id:
            raise CheckpointFormatError("Missing or empty job_id")

        try:
            status = CheckpointStatus(d.get("status", CheckpointStatus.INIT.value))
        except ValueError as exc:
            raise CheckpointFormatError(f"Unknown status: {d.get('status')!r}") from exc

        position = d.get("chunk_position", 0)
        # Older checkpoint files store the position as a numeric string
        if isinstance(position, str) and position.isascii() and position.isdigit():
            position = int(position)
        if isinstance(position, bool) or not isinstance(position, int):
            raise CheckpointFormatError(f"Invalid chunk_position: {position!r}")
        if position < 0:
            raise CheckpointFormatError(f"Negative chunk_position: {position}")

        return cls(job_id=job_id, status=status, chunk_position=position)
