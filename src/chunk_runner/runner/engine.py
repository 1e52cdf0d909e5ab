"""Resumable, retrying chunk runner.

The runner walks a dataset chunk by chunk, calling a processing function on
each slice.  Progress is written to a :class:`CheckpointStore` after every
completed chunk so that a new runner with the same job id and the same
dataset picks up at the first unfinished chunk.

Status flow::

    init/running/fail --start--> running --all chunks done--> finish
                                    |
                                    +--retries exhausted--> fail

A ``finish`` checkpoint is terminal: later runs only fire ``on_finish``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from chunk_runner.checkpoint.models import CheckpointRecord, CheckpointStatus
from chunk_runner.checkpoint.store import CheckpointStore, JsonFileCheckpointStore
from chunk_runner.config.schema import JobConfig
from chunk_runner.errors import ChunkFailedError, ConfigurationError
from chunk_runner.runner.chunking import chunk_slice, total_chunks
from chunk_runner.runner.outcome import RunResult

logger = logging.getLogger(__name__)

ProcessFn = Callable[[list[Any], CheckpointRecord], bool]
CheckpointHook = Callable[[CheckpointRecord], None]
FinishHook = Callable[[], None]


class ChunkRunner:
    """Processes *data* in consecutive chunks, persisting progress."""

    def __init__(
        self,
        job_id: str,
        data: Sequence[Any],
        process: ProcessFn,
        *,
        store: CheckpointStore,
        chunk_size: int = 100,
        delay: float = 0.0,
        max_retries: int = 0,
        unwrap: bool = False,
        except_message: str | None = None,
        on_chunk_done: CheckpointHook | None = None,
        on_finish: FinishHook | None = None,
        on_fail: CheckpointHook | None = None,
    ) -> None:
        if not job_id:
            raise ConfigurationError("job_id must not be empty")
        if process is None:
            raise ConfigurationError("A processing function is required")
        if chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        if delay < 0:
            raise ConfigurationError(f"delay must be non-negative, got {delay}")
        if max_retries < 0:
            raise ConfigurationError(
                f"max_retries must be non-negative, got {max_retries}"
            )

        self.job_id = job_id
        self.data = data
        self.process = process
        self.store = store
        self.chunk_size = chunk_size
        self.delay = delay
        self.max_retries = max_retries
        self.unwrap = unwrap
        self.except_message = except_message
        self.on_chunk_done = on_chunk_done
        self.on_finish = on_finish
        self.on_fail = on_fail
        self._checkpoint = store.load(job_id)

    @classmethod
    def from_config(
        cls,
        cfg: JobConfig,
        data: Sequence[Any],
        process: ProcessFn,
        store: CheckpointStore | None = None,
        **hooks: Any,
    ) -> ChunkRunner:
        """Build a runner from a :class:`JobConfig`.

        Without an explicit *store*, checkpoints go to ``cfg.work_dir``.
        """
        return cls(
            cfg.job_id,
            data,
            process,
            store=store or JsonFileCheckpointStore(cfg.work_dir),
            chunk_size=cfg.runner.chunk_size,
            delay=cfg.runner.delay,
            max_retries=cfg.runner.max_retries,
            unwrap=cfg.runner.unwrap,
            except_message=cfg.runner.except_message,
            **hooks,
        )

    @property
    def checkpoint(self) -> CheckpointRecord:
        return self._checkpoint

    @property
    def total_chunks(self) -> int:
        return total_chunks(len(self.data), self.chunk_size)

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def start(self) -> RunResult:
        """Run, then surface a failure by raising or via ``on_fail``."""
        result = self.run()
        if result.error is None:
            return result
        if self.unwrap:
            raise result.error
        self._trigger(self.on_fail, result.checkpoint)
        return result

    def run(self) -> RunResult:
        """Drive the chunk loop and report how it ended."""
        self._checkpoint = self.store.load(self.job_id)

        if self._checkpoint.is_finished or len(self.data) == 0:
            logger.info(
                "Job %s has nothing to do (status=%s, records=%d)",
                self.job_id,
                self._checkpoint.status.value,
                len(self.data),
            )
            self._trigger(self.on_finish)
            return RunResult(checkpoint=self._checkpoint)

        n_chunks = self.total_chunks
        if self._checkpoint.chunk_position > 0:
            logger.info(
                "Resuming job %s at chunk %d/%d",
                self.job_id,
                self._checkpoint.chunk_position,
                n_chunks,
            )
        self._persist(self._checkpoint.with_status(CheckpointStatus.RUNNING))
        result = RunResult(checkpoint=self._checkpoint)

        while True:
            position = self._checkpoint.chunk_position
            records = chunk_slice(self.data, position, self.chunk_size)
            if position >= n_chunks or not records:
                self._persist(self._checkpoint.with_status(CheckpointStatus.FINISHED))
                logger.info(
                    "Job %s finished: %d chunks processed this run",
                    self.job_id,
                    result.chunks_processed,
                )
                result.checkpoint = self._checkpoint
                self._trigger(self.on_finish)
                return result

            if not self._process_chunk(position, records, result):
                self._persist(self._checkpoint.with_status(CheckpointStatus.FAILED))
                result.checkpoint = self._checkpoint
                result.error = ChunkFailedError(position, self.except_message)
                logger.error(
                    "Job %s failed at chunk %d after %d attempts",
                    self.job_id,
                    position,
                    self.max_retries + 1,
                )
                return result

            self._trigger(self.on_chunk_done, self._checkpoint)
            self._persist(self._checkpoint.advanced())
            result.chunks_processed += 1
            result.checkpoint = self._checkpoint
            if self._checkpoint.chunk_position < n_chunks:
                self._sleep()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _process_chunk(
        self, position: int, records: list[Any], result: RunResult
    ) -> bool:
        """Try one chunk up to ``max_retries + 1`` times."""
        attempt = 0
        while attempt <= self.max_retries:
            result.attempts += 1
            if self.process(records, self._checkpoint):
                logger.debug(
                    "Chunk %d of job %s done (%d records, attempt %d)",
                    position,
                    self.job_id,
                    len(records),
                    attempt + 1,
                )
                return True
            attempt += 1
            if attempt <= self.max_retries:
                logger.warning(
                    "Chunk %d of job %s attempt %d/%d failed, retrying",
                    position,
                    self.job_id,
                    attempt,
                    self.max_retries + 1,
                )
                self._sleep()
        return False

    def _persist(self, record: CheckpointRecord) -> None:
        self.store.save(record)
        self._checkpoint = record

    def _sleep(self) -> None:
        if self.delay > 0:
            time.sleep(self.delay)

    @staticmethod
    def _trigger(callback: Callable[..., None] | None, *args: Any) -> None:
        if callback is not None:
            callback(*args)
