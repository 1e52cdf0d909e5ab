"""Exception hierarchy for chunk runs."""

from __future__ import annotations


class ChunkRunnerError(Exception):
    """Base class for all chunk runner errors."""


class ConfigurationError(ChunkRunnerError):
    """Raised when a runner is built with invalid settings."""


class CheckpointFormatError(ChunkRunnerError):
    """Raised when a persisted checkpoint mapping is malformed."""


class DataSourceError(ChunkRunnerError):
    """Raised when a dataset file cannot be read."""


class ChunkFailedError(ChunkRunnerError):
    """A chunk exhausted its retry budget."""

    def __init__(self, position: int, message: str | None = None) -> None:
        self.position = position
        self.message = message or f"Failed at chunk #{position}"
        super().__init__(self.message)
