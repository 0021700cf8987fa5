"""Shared dataclasses used by both numbering phases."""

from __future__ import annotations

import dataclasses as dc

from mdbook_numeq.book import HierarchicalPath  # noqa: TC001 - dataclass field type


@dc.dataclass(frozen=True, slots=True)
class ScopeKey:
    """Key of the counter an occurrence increments.

    Attributes
    ----------
    components : tuple[int, ...]
        Section-number components the scope covers (truncated or padded when
        a depth is configured). Empty for the global scope and for unnumbered
        chapters.
    chapter : str or None
        Source location of an unnumbered chapter, which keeps a counter of
        its own; ``None`` otherwise.
    """

    components: HierarchicalPath = ()
    chapter: str | None = None

    @property
    def is_global(self) -> bool:
        """Return ``True`` for the single book-wide scope."""
        return not self.components and self.chapter is None


GLOBAL_SCOPE = ScopeKey()


@dc.dataclass(frozen=True, slots=True)
class LabelInfo:
    """What a reference needs to know about a labeled equation.

    Attributes
    ----------
    display : str
        The equation's number exactly as rendered in its tag.
    anchor : str
        Anchor token emitted next to the tag.
    location : str or None
        Source path of the defining chapter.
    path : tuple[int, ...]
        Section number of the defining chapter.
    """

    display: str
    anchor: str
    location: str | None
    path: HierarchicalPath = ()


@dc.dataclass(frozen=True, slots=True)
class Occurrence:
    """One numbering marker after it has been assigned a number."""

    scope: ScopeKey
    value: int
    display: str
    anchor: str
    label: str | None = None
    location: str | None = None


__all__ = ["GLOBAL_SCOPE", "LabelInfo", "Occurrence", "ScopeKey"]
