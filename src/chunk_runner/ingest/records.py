"""Read a job's dataset from disk into an ordered list of records."""

from __future__ import annotations

import csv
import logging
from typing import Any

import orjson

from chunk_runner.config.schema import DataFormat, DataSourceDef
from chunk_runner.errors import DataSourceError

logger = logging.getLogger(__name__)

_DEFAULT_DELIMITERS = {DataFormat.CSV: ",", DataFormat.TSV: "\t"}


def load_records(source: DataSourceDef) -> list[Any]:
    """Load every record of *source*, preserving file order.

    Record order must be identical across runs of the same job, otherwise
    resumed chunk positions would select different records.
    """
    if not source.path.exists():
        raise DataSourceError(f"Data file not found: {source.path}")

    try:
        if source.format == DataFormat.JSON:
            records = _load_json(source)
        elif source.format == DataFormat.NDJSON:
            records = _load_ndjson(source)
        elif source.format in _DEFAULT_DELIMITERS:
            records = _load_delimited(source)
        else:
            records = _load_lines(source)
    except (OSError, UnicodeDecodeError, orjson.JSONDecodeError, csv.Error) as exc:
        raise DataSourceError(f"Cannot read {source.path}: {exc}") from exc

    logger.info("Loaded %d records from %s", len(records), source.path)
    return records


def _load_json(source: DataSourceDef) -> list[Any]:
    data = orjson.loads(source.path.read_bytes())
    if not isinstance(data, list):
        raise DataSourceError(
            f"{source.path}: expected a JSON array, got {type(data).__name__}"
        )
    return data


def _load_ndjson(source: DataSourceDef) -> list[Any]:
    records = []
    with source.path.open("rb") as fh:
        for line in fh:
            line = line.strip()
            if line:
                records.append(orjson.loads(line))
    return records


def _load_delimited(source: DataSourceDef) -> list[dict[str, str]]:
    delimiter = source.delimiter or _DEFAULT_DELIMITERS[source.format]
    with source.path.open("r", encoding=source.encoding, newline="") as fh:
        return list(csv.DictReader(fh, delimiter=delimiter))


def _load_lines(source: DataSourceDef) -> list[str]:
    text = source.path.read_text(encoding=source.encoding)
    return [line for line in text.splitlines() if line.strip()]
