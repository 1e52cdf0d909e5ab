"""Pydantic v2 configuration models for chunk runs."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class DataFormat(str, Enum):
    JSON = "json"
    NDJSON = "ndjson"
    CSV = "csv"
    TSV = "tsv"
    LINES = "lines"


class DataSourceDef(BaseModel):
    """Where the records of a job come from."""

    path: Path
    format: DataFormat = DataFormat.JSON
    encoding: str = "utf-8"
    delimiter: str | None = None


class RunnerConfig(BaseModel):
    chunk_size: int = Field(default=100, ge=1)
    delay: float = Field(default=0.0, ge=0)
    max_retries: int = Field(default=0, ge=0)
    unwrap: bool = False
    except_message: str | None = None


class JobConfig(BaseModel):
    """Top-level job configuration."""

    job_id: str = Field(min_length=1)
    work_dir: Path = Path("runtime/chunks")
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    source: DataSourceDef | None = None
    processor: str | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
