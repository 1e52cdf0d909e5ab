"""CLI handlers for inspecting and resetting checkpoints."""

from __future__ import annotations

import orjson
import typer

from chunk_runner.checkpoint.store import JsonFileCheckpointStore


def show_status(job_id: str, work_dir: str) -> None:
    store = JsonFileCheckpointStore(work_dir)
    record = store.load(job_id)
    typer.echo(orjson.dumps(record.to_dict(), option=orjson.OPT_INDENT_2).decode())


def reset_checkpoint(job_id: str, work_dir: str) -> None:
    store = JsonFileCheckpointStore(work_dir)
    if store.delete(job_id):
        typer.echo(f"Removed checkpoint {store.path_for(job_id)}")
    else:
        typer.echo(f"No checkpoint for job {job_id}")
