"""Main Typer application with run/status/reset subcommands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="chunk-runner",
    help="Resumable chunked batch processing with file-based checkpoints.",
    no_args_is_help=True,
)


@app.command()
def run(
    config: str = typer.Option(..., "--config", "-c", help="Path to job config YAML"),
    unwrap: bool | None = typer.Option(
        None, "--unwrap/--no-unwrap", help="Override whether a failed chunk raises"
    ),
) -> None:
    """Process the configured dataset chunk by chunk, resuming if possible."""
    from .run_cmd import run_job

    run_job(config, unwrap)


@app.command()
def status(
    job_id: str = typer.Option(..., "--job-id", "-j", help="Job identifier"),
    work_dir: str = typer.Option(
        "runtime/chunks", "--work-dir", "-w", help="Checkpoint directory"
    ),
) -> None:
    """Print the stored checkpoint of a job as JSON."""
    from .checkpoint_cmd import show_status

    show_status(job_id, work_dir)


@app.command()
def reset(
    job_id: str = typer.Option(..., "--job-id", "-j", help="Job identifier"),
    work_dir: str = typer.Option(
        "runtime/chunks", "--work-dir", "-w", help="Checkpoint directory"
    ),
) -> None:
    """Delete the stored checkpoint so the job starts over."""
    from .checkpoint_cmd import reset_checkpoint

    reset_checkpoint(job_id, work_dir)


if __name__ == "__main__":
    app()
