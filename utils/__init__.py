"""Shared helpers: exceptions, validation, logging, money arithmetic and export.

Submodules are imported lazily so that importing ``utils.exceptions`` does not
pull in the logging setup or the Excel writer.
"""

from importlib import import_module
from types import ModuleType
from typing import Any

__all__ = [
    "helpers",
    "decorators",
    "exceptions",
    "sanitizers",
    "data_handling",
    "math",
    "system",
    "validation",
]


def __getattr__(name: str) -> ModuleType | Any:  # pragma: no cover - passthrough
    """Dynamically import submodules on first access."""
    if name in __all__:
        return import_module(f"{__name__}.{name}")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
