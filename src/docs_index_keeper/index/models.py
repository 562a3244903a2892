"""Typed models for index rows and sync outcomes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class IndexRow:
    """One entry in the documentation index table."""

    title: str
    path: str
    purpose: str | None = None

    @property
    def display_purpose(self) -> str:
        """Purpose cell text, falling back to the title."""
        return self.purpose if self.purpose is not None else self.title


@dataclass(slots=True, frozen=True)
class UpdateResult:
    """Outcome of one ``update`` pass."""

    updated: bool
    added: tuple[IndexRow, ...] = ()


@dataclass(slots=True, frozen=True)
class AddResult:
    """Outcome of adding a single path."""

    added: bool
    path: str
    row: IndexRow | None = None


class AddRejectedError(Exception):
    """Raised when a single-path add cannot proceed."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
