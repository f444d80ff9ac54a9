"""Pydantic models mapped onto binary layouts."""

from __future__ import annotations

from .base import StructMessage

__all__ = [
    "StructMessage",
]
