"""Tool execution helpers."""

from .runner import run_handler

__all__ = ["run_handler"]
