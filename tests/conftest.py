"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from chunk_runner.checkpoint.store import JsonFileCheckpointStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def config_path() -> Path:
    return FIXTURES_DIR / "config_test.yaml"


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    return tmp_path / "runtime" / "chunks"


@pytest.fixture
def store(work_dir: Path) -> JsonFileCheckpointStore:
    return JsonFileCheckpointStore(work_dir)


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record requested delays instead of sleeping."""
    slept: list[float] = []
    monkeypatch.setattr("chunk_runner.runner.engine.time.sleep", slept.append)
    return slept
