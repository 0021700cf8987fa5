r"""Parse an mdBook ``SUMMARY.md`` into a numbered chapter tree.

The standalone ``number`` command runs without mdBook, so it rebuilds the
chapter tree the way mdBook would: list items are numbered chapters nested by
indentation, bare links are unnumbered prefix or suffix chapters, and links
with an empty target are drafts.

Example
-------
>>> from mdbook_numeq.summary_parser import parse_summary
>>> chapters = parse_summary("# Summary\n\n- [Groups](groups.md)\n  - [Rings](rings.md)\n")
>>> chapters[0].sub_items[0].number
(1, 1)
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from mdbook_numeq.book import Chapter, iter_chapters

if typ.TYPE_CHECKING:
    from mdbook_numeq.config import BookConfig

TITLE_PATTERN = re.compile(r"^#\s+(.*)$")
SEPARATOR_PATTERN = re.compile(r"^\s*-{3,}\s*$")
LINK_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)(?P<marker>[-*+]\s+)?"
    r"\[(?P<name>(?:\\.|[^\]])*)\]\((?P<target>[^)]*)\)\s*$"
)
TAB_WIDTH = 4


@dc.dataclass(slots=True)
class _OpenItem:
    """A numbered chapter that may still receive nested children."""

    indent: int
    chapter: Chapter


def _indent_width(indent: str) -> int:
    return sum(TAB_WIDTH if char == "\t" else 1 for char in indent)


def _clean_name(text: str) -> str:
    """Return a cleaned chapter name, removing escapes and whitespace."""
    return re.sub(r"\\(.)", r"\1", text).strip()


def parse_summary(summary_text: str) -> list[Chapter]:
    """Split ``SUMMARY.md`` into top-level chapters with nested sub-items.

    Parameters
    ----------
    summary_text : str
        Raw contents of ``SUMMARY.md``.

    Returns
    -------
    list[Chapter]
        Top-level chapters in document order. Numbered chapters carry their
        section number; content is left empty for the caller to load.
    """
    chapters: list[Chapter] = []
    open_items: list[_OpenItem] = []
    top_level_count = 0

    for line in summary_text.splitlines():
        if not line.strip() or SEPARATOR_PATTERN.match(line):
            continue
        if TITLE_PATTERN.match(line):
            # book title or part title; neither affects numbering
            open_items.clear()
            continue
        match = LINK_PATTERN.match(line)
        if not match:
            continue

        target = match.group("target").strip()
        chapter = Chapter(name=_clean_name(match.group("name")), path=target or None)

        if not match.group("marker"):
            open_items.clear()
            chapters.append(chapter)
            continue

        indent = _indent_width(match.group("indent"))
        while open_items and open_items[-1].indent >= indent:
            open_items.pop()
        if open_items:
            parent = open_items[-1].chapter
            chapter.number = (*(parent.number or ()), len(parent.sub_items) + 1)
            parent.sub_items.append(chapter)
        else:
            top_level_count += 1
            chapter.number = (top_level_count,)
            chapters.append(chapter)
        open_items.append(_OpenItem(indent=indent, chapter=chapter))

    return chapters


def load_book(config: BookConfig) -> list[Chapter]:
    """Parse the book's ``SUMMARY.md`` and read every chapter's Markdown.

    Raises
    ------
    FileNotFoundError
        If ``SUMMARY.md`` or a referenced chapter file does not exist.
    """
    summary_path = config.summary_path
    if not summary_path.exists():
        msg = f"Summary file '{summary_path}' not found."
        raise FileNotFoundError(msg)
    chapters = parse_summary(summary_path.read_text(encoding="utf-8"))
    for chapter in iter_chapters(chapters):
        if chapter.path is None:
            continue
        source = config.src_dir / chapter.path
        if not source.exists():
            msg = f"Chapter file '{source}' listed in {summary_path.name} not found."
            raise FileNotFoundError(msg)
        chapter.content = source.read_text(encoding="utf-8")
    return chapters


__all__ = ["load_book", "parse_summary"]
