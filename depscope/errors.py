"""Errors raised by dependency analysis."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """The project record is structurally invalid and cannot be analyzed."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
