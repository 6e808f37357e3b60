# savepoint/errors.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SaveFileError(ValueError):
    """Import payload rejected as a whole; nothing was applied."""

    message: str

    def __str__(self) -> str:
        return self.message
