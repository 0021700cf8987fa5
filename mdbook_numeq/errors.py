"""Exception types raised by the equation numbering pipeline.

Every failure mode is deterministic for a given input, so none of these
errors is retried: the CLI logs the message and exits with status 1, leaving
the book untouched.
"""

from __future__ import annotations

import dataclasses as dc


class NumeqError(Exception):
    """Base class for errors that abort a numbering run."""


class InvalidConfigurationError(NumeqError, ValueError):
    """Raised when ``preprocessor.numeq`` options are malformed."""


@dc.dataclass(frozen=True, slots=True)
class OccurrenceSite:
    """Where a labeled equation was found.

    Attributes
    ----------
    display : str
        Number rendered for the equation (for example ``"3.2.1"``).
    location : str or None
        Source path of the chapter, when the host provides one.
    path : tuple[int, ...]
        Section number of the chapter; empty for unnumbered chapters.
    """

    display: str
    location: str | None
    path: tuple[int, ...]

    def describe(self) -> str:
        """Return a short human readable description of the site."""
        section = ".".join(str(part) for part in self.path) or "unnumbered"
        where = self.location or "<unknown chapter>"
        return f"eq. {self.display} in {where} (section {section})"


class DuplicateLabelError(NumeqError):
    """Raised when two equations declare the same label."""

    def __init__(
        self, label: str, first: OccurrenceSite, second: OccurrenceSite
    ) -> None:
        self.label = label
        self.first = first
        self.second = second
        super().__init__(
            f"Label '{label}' is defined twice: {first.describe()} and "
            f"{second.describe()}"
        )


class ChapterPathError(NumeqError, ValueError):
    """Raised when a chapter path would leave the output directory."""


class UnresolvedLabelError(NumeqError):
    """Raised when an equation reference names an undefined label."""

    def __init__(
        self, label: str, path: tuple[int, ...], location: str | None
    ) -> None:
        self.label = label
        self.path = path
        self.location = location
        section = ".".join(str(part) for part in path) or "unnumbered"
        where = location or "<unknown chapter>"
        super().__init__(
            f"Unknown equation reference '{label}' in {where} (section {section})"
        )


__all__ = [
    "ChapterPathError",
    "DuplicateLabelError",
    "InvalidConfigurationError",
    "NumeqError",
    "OccurrenceSite",
    "UnresolvedLabelError",
]
