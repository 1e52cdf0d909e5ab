"""Chunk arithmetic over an ordered dataset."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def total_chunks(n_records: int, chunk_size: int) -> int:
    """Number of chunks needed to cover *n_records*."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return math.ceil(n_records / chunk_size)


def chunk_bounds(position: int, chunk_size: int, n_records: int) -> tuple[int, int]:
    """Half-open index range ``[start, end)`` covered by chunk *position*.

    Positions past the end give an empty range.
    """
    start = min(position * chunk_size, n_records)
    end = min(start + chunk_size, n_records)
    return start, end


def chunk_slice(data: Sequence[T], position: int, chunk_size: int) -> list[T]:
    start, end = chunk_bounds(position, chunk_size, len(data))
    return list(data[start:end])
