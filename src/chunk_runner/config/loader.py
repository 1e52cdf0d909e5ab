"""Load and validate job configuration from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from .schema import JobConfig


def load_config(path: Path | str) -> JobConfig:
    """Read a YAML file and return a validated JobConfig.

    Relative ``work_dir``, ``source.path`` and ``log_file`` values are resolved
    against the directory holding the YAML file.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        raw = {}
    cfg = JobConfig.model_validate(raw)

    base = path.parent
    if not cfg.work_dir.is_absolute():
        cfg.work_dir = base / cfg.work_dir
    if cfg.source is not None and not cfg.source.path.is_absolute():
        cfg.source.path = base / cfg.source.path
    if cfg.log_file is not None and not cfg.log_file.is_absolute():
        cfg.log_file = base / cfg.log_file
    return cfg
