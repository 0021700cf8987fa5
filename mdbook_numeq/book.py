r"""Chapter tree model and the document-order section flattener.

Hosts describe a book as nested :class:`Chapter` nodes. The numbering engine
never walks that tree directly: it consumes :class:`SectionFlattener`, which
yields one :class:`FlatSection` per chapter with source text in depth-first,
pre-order order.

Example
-------
>>> from mdbook_numeq.book import Chapter, SectionFlattener
>>> intro = Chapter("Intro", "a", number=(1,), path="intro.md")
>>> intro.sub_items.append(Chapter("Detail", "b", number=(1, 1), path="detail.md"))
>>> [entry.path for entry in SectionFlattener([intro])]
[(1,), (1, 1)]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

HierarchicalPath = tuple[int, ...]


@dc.dataclass(slots=True, eq=False)
class Chapter:
    """One node of the host's chapter tree.

    Attributes
    ----------
    name : str
        Chapter title.
    content : str
        Raw Markdown; rewritten in place once a numbering run succeeds.
    number : tuple[int, ...] or None
        Section number assigned by the host; ``None`` for prefix and suffix
        chapters.
    path : str or None
        Source path relative to the book's ``src`` directory; ``None`` marks a
        draft chapter that has no file yet.
    sub_items : list[Chapter]
        Ordered child chapters.
    """

    name: str
    content: str = ""
    number: HierarchicalPath | None = None
    path: str | None = None
    sub_items: list[Chapter] = dc.field(default_factory=list)

    @property
    def is_draft(self) -> bool:
        """Return ``True`` when the chapter has no source file."""
        return self.path is None


@dc.dataclass(frozen=True, slots=True)
class FlatSection:
    """A chapter's hierarchical path paired with its raw text."""

    path: HierarchicalPath
    text: str
    location: str | None
    chapter: Chapter = dc.field(repr=False, compare=False)


class SectionFlattener:
    """Restartable document-order view over a chapter tree.

    Each call to :meth:`__iter__` starts a fresh walk, so the same flattener
    can feed both numbering phases. Draft chapters contribute no entry but
    their children are still visited.
    """

    def __init__(self, chapters: cabc.Sequence[Chapter]) -> None:
        self._chapters = chapters

    def __iter__(self) -> cabc.Iterator[FlatSection]:
        return self._walk(self._chapters)

    def _walk(self, chapters: cabc.Iterable[Chapter]) -> cabc.Iterator[FlatSection]:
        for chapter in chapters:
            if not chapter.is_draft:
                yield FlatSection(
                    path=tuple(chapter.number or ()),
                    text=chapter.content,
                    location=chapter.path,
                    chapter=chapter,
                )
            yield from self._walk(chapter.sub_items)


def iter_chapters(chapters: cabc.Iterable[Chapter]) -> cabc.Iterator[Chapter]:
    """Yield every chapter, drafts included, in depth-first pre-order."""
    for chapter in chapters:
        yield chapter
        yield from iter_chapters(chapter.sub_items)


__all__ = [
    "Chapter",
    "FlatSection",
    "HierarchicalPath",
    "SectionFlattener",
    "iter_chapters",
]
