"""CLI handler for the run subcommand."""

from __future__ import annotations

import logging

import typer

from chunk_runner.checkpoint.models import CheckpointRecord
from chunk_runner.config.loader import load_config
from chunk_runner.errors import ConfigurationError
from chunk_runner.ingest.records import load_records
from chunk_runner.runner.engine import ChunkRunner
from chunk_runner.utils.imports import resolve_callable
from chunk_runner.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def run_job(config_path: str, unwrap_override: bool | None) -> None:
    cfg = load_config(config_path)
    setup_logging(cfg.log_level, cfg.log_file)

    if unwrap_override is not None:
        cfg.runner.unwrap = unwrap_override
    if cfg.source is None:
        raise ConfigurationError(f"{config_path}: no 'source' configured")
    if cfg.processor is None:
        raise ConfigurationError(f"{config_path}: no 'processor' configured")

    process = resolve_callable(cfg.processor)
    records = load_records(cfg.source)

    def on_chunk_done(checkpoint: CheckpointRecord) -> None:
        logger.info(
            "  Chunk %d/%d done", checkpoint.chunk_position + 1, runner.total_chunks
        )

    def on_finish() -> None:
        logger.info("Job %s complete", cfg.job_id)

    def on_fail(checkpoint: CheckpointRecord) -> None:
        logger.error(
            "Job %s stopped at chunk %d; rerun to retry it",
            checkpoint.job_id,
            checkpoint.chunk_position,
        )

    runner = ChunkRunner.from_config(
        cfg,
        records,
        process,
        on_chunk_done=on_chunk_done,
        on_finish=on_finish,
        on_fail=on_fail,
    )
    logger.info(
        "Running job %s: %d records in %d chunks of %d",
        cfg.job_id,
        len(records),
        runner.total_chunks,
        cfg.runner.chunk_size,
    )
    result = runner.start()
    if result.failed:
        raise typer.Exit(code=1)
