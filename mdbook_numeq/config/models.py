"""Typed dataclasses describing the numbering configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class NumberingPolicy:
    """Effective numbering options for one run.

    Attributes
    ----------
    global_numbering : bool
        Keep a single counter for the whole book. Ignored once ``depth``
        is positive; see :attr:`counts_globally`.
    prefix : bool
        Prefix equation numbers with the (possibly truncated) section number.
    depth : int
        Number of section-number components used for scoping and prefixes;
        ``0`` keeps the full section number.
    """

    global_numbering: bool = False
    prefix: bool = False
    depth: int = 0

    @property
    def counts_globally(self) -> bool:
        """Return ``True`` when one counter spans the book.

        A positive ``depth`` resets counters per prefix, so ``global_numbering``
        only applies at depth ``0``.
        """
        return self.global_numbering and self.depth <= 0


@dc.dataclass(frozen=True, slots=True)
class BookConfig:
    """Book layout and numbering options read from ``book.toml``."""

    root: Path
    src_dir: Path
    policy: NumberingPolicy
    title: str | None = None

    @property
    def summary_path(self) -> Path:
        """Return the path to the book's ``SUMMARY.md``."""
        return self.src_dir / "SUMMARY.md"


__all__ = ["BookConfig", "NumberingPolicy"]
