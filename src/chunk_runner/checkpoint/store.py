"""Checkpoint persistence backends.

A store maps a job id to a :class:`CheckpointRecord`.  Loading never fails:
a missing, truncated or otherwise unreadable record degrades to a fresh
``init`` record so the job restarts from the first chunk instead of crashing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import orjson

from chunk_runner.checkpoint.models import CheckpointRecord
from chunk_runner.errors import CheckpointFormatError

logger = logging.getLogger(__name__)


@runtime_checkable
class CheckpointStore(Protocol):
    """Protocol that all checkpoint backends must implement."""

    def load(self, job_id: str) -> CheckpointRecord:
        """Return the stored record, or an initial one if none is usable."""
        ...

    def save(self, record: CheckpointRecord) -> None:
        """Persist *record* under its own job id."""
        ...

    def delete(self, job_id: str) -> bool:
        """Remove the stored record. Returns True if one existed."""
        ...


class JsonFileCheckpointStore:
    """One pretty-printed JSON file per job inside *work_dir*."""

    def __init__(self, work_dir: Path | str) -> None:
        self.work_dir = Path(work_dir)

    def path_for(self, job_id: str) -> Path:
        return self.work_dir / f"{job_id}.json"

    def load(self, job_id: str) -> CheckpointRecord:
        path = self.path_for(job_id)
        if not path.exists():
            return CheckpointRecord.initial(job_id)

        try:
            raw = orjson.loads(path.read_bytes())
            record = CheckpointRecord.from_dict(raw)
        except (OSError, orjson.JSONDecodeError, CheckpointFormatError) as exc:
            logger.warning(
                "Unreadable checkpoint %s (%s), starting job %s from scratch",
                path,
                exc,
                job_id,
            )
            return CheckpointRecord.initial(job_id)

        if record.job_id != job_id:
            logger.warning(
                "Checkpoint %s belongs to job %s, not %s; ignoring it",
                path,
                record.job_id,
                job_id,
            )
            return CheckpointRecord.initial(job_id)
        return record

    def save(self, record: CheckpointRecord) -> None:
        path = self.path_for(record.job_id)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write atomically by using a temp file
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(
            orjson.dumps(record.to_dict(), option=orjson.OPT_INDENT_2)
        )
        tmp_path.replace(path)

    def delete(self, job_id: str) -> bool:
        path = self.path_for(job_id)
        if not path.exists():
            return False
        path.unlink()
        return True


class InMemoryCheckpointStore:
    """Dict-backed store; records do not outlive the process."""

    def __init__(self) -> None:
        self._records: dict[str, CheckpointRecord] = {}

    def load(self, job_id: str) -> CheckpointRecord:
        return self._records.get(job_id, CheckpointRecord.initial(job_id))

    def save(self, record: CheckpointRecord) -> None:
        self._records[record.job_id] = record

    def delete(self, job_id: str) -> bool:
        return self._records.pop(job_id, None) is not None
