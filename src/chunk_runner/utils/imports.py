"""Resolve ``"package.module:attribute"`` references."""

from __future__ import annotations

import importlib
from typing import Any

from chunk_runner.errors import ConfigurationError


def resolve_callable(reference: str) -> Any:
    """Import the object named by *reference* and check it is callable."""
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(
            f"Expected 'module:function', got {reference!r}"
        )
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import {module_name!r}: {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigurationError(
                f"{module_name!r} has no attribute {attr_path!r}"
            ) from exc

    if not callable(obj):
        raise ConfigurationError(f"{reference!r} is not callable")
    return obj
