"""mdBook preprocessor protocol: decode the book, number it, encode it back.

mdBook invokes a preprocessor with a JSON array ``[context, book]`` on stdin
and expects the (possibly modified) book as JSON on stdout. The book is kept as
the raw decoded mapping so fields this package does not know about survive the
round trip untouched; only each chapter's ``content`` is replaced.

Example
-------
>>> import msgspec.json
>>> payload = msgspec.json.encode([
...     {"root": "/book", "config": {}, "renderer": "html", "mdbook_version": "0.4.40"},
...     {"sections": [], "__non_exhaustive": None},
... ])
>>> context, book = parse_input(payload)
>>> NumEqPreprocessor(context).run(book)["sections"]
[]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import typing as typ

import msgspec
import msgspec.json

from mdbook_numeq._constants import NAME, SUPPORTED_MDBOOK_SERIES, UNSUPPORTED_RENDERER
from mdbook_numeq.book import Chapter
from mdbook_numeq.config import numeq_table, policy_from_mapping
from mdbook_numeq.errors import NumeqError
from mdbook_numeq.numbering import number_equations

if typ.TYPE_CHECKING:
    from mdbook_numeq.config import NumberingPolicy
    from mdbook_numeq.numbering import NumberingReport

logger = logging.getLogger(__name__)

Book = dict[str, typ.Any]

_VERSION_SERIES = re.compile(r"^\s*v?(\d+)\.(\d+)")


class PreprocessorContext(msgspec.Struct):
    """Context mdBook sends alongside the book."""

    root: str = ""
    config: dict[str, typ.Any] = msgspec.field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""


class BookFormatError(NumeqError, ValueError):
    """Raised when stdin does not hold an mdBook ``[context, book]`` payload."""


@dc.dataclass(slots=True)
class ChapterBinding:
    """Pair a decoded chapter mapping with the :class:`Chapter` built from it."""

    raw: dict[str, typ.Any]
    chapter: Chapter


def parse_input(data: bytes | str) -> tuple[PreprocessorContext, Book]:
    """Decode the ``[context, book]`` array mdBook writes to stdin.

    Raises
    ------
    BookFormatError
        If the payload is not valid JSON or not a two-element array.
    """
    try:
        payload = msgspec.json.decode(data)
    except msgspec.DecodeError as exc:
        msg = f"Unable to decode mdBook input: {exc}"
        raise BookFormatError(msg) from exc
    if not isinstance(payload, list) or len(payload) != 2:
        msg = "mdBook input must be a JSON array of [context, book]."
        raise BookFormatError(msg)
    raw_context, book = payload
    if not isinstance(book, dict):
        msg = "The book element of the mdBook input must be an object."
        raise BookFormatError(msg)
    try:
        context = msgspec.convert(raw_context, PreprocessorContext)
    except msgspec.ValidationError as exc:
        msg = f"Invalid preprocessor context: {exc}"
        raise BookFormatError(msg) from exc
    return context, book


def encode_book(book: Book) -> bytes:
    """Encode the processed book for mdBook."""
    return msgspec.json.encode(book)


def book_items(book: Book) -> list[typ.Any]:
    """Return the top-level items of a book across mdBook versions.

    mdBook 0.4 names the list ``sections``; 0.5 renamed it to ``items``.
    """
    for key in ("sections", "items"):
        items = book.get(key)
        if isinstance(items, list):
            return items
    return []


def chapters_from_book(book: Book) -> tuple[list[Chapter], list[ChapterBinding]]:
    """Convert the book's items into a :class:`Chapter` tree.

    Separators and part titles are skipped; they carry no text.

    Returns
    -------
    tuple[list[Chapter], list[ChapterBinding]]
        Top-level chapters and the bindings needed to write rewritten content
        back into the raw book.
    """
    bindings: list[ChapterBinding] = []
    chapters = _convert_items(book_items(book), bindings)
    return chapters, bindings


def _convert_items(
    items: cabc.Iterable[typ.Any], bindings: list[ChapterBinding]
) -> list[Chapter]:
    chapters: list[Chapter] = []
    for item in items:
        match item:
            case {"Chapter": dict() as raw}:
                chapter = Chapter(
                    name=str(raw.get("name", "")),
                    content=str(raw.get("content") or ""),
                    number=_section_number(raw.get("number")),
                    path=raw.get("path"),
                )
                bindings.append(ChapterBinding(raw=raw, chapter=chapter))
                chapter.sub_items = _convert_items(raw.get("sub_items") or [], bindings)
                chapters.append(chapter)
            case _:
                continue
    return chapters


def _section_number(value: object) -> tuple[int, ...] | None:
    if not isinstance(value, list) or not value:
        return None
    return tuple(int(part) for part in value)


def check_mdbook_version(version: str) -> bool:
    """Warn when mdBook's version is outside the supported release series."""
    match = _VERSION_SERIES.match(version or "")
    series = f"{match.group(1)}.{match.group(2)}" if match else None
    if series in SUPPORTED_MDBOOK_SERIES:
        return True
    logger.warning(
        "The %s preprocessor supports mdBook %s, but is being called from "
        "version %s",
        NAME,
        " / ".join(f"{supported}.x" for supported in SUPPORTED_MDBOOK_SERIES),
        version or "<unknown>",
    )
    return False


class NumEqPreprocessor:
    """Number centered equations of an mdBook book."""

    name = NAME

    def __init__(self, context: PreprocessorContext | None = None) -> None:
        """Read the ``[preprocessor.numeq]`` options from the context.

        Raises
        ------
        InvalidConfigurationError
            If the options are malformed.
        """
        config = context.config if context is not None else {}
        self.policy: NumberingPolicy = policy_from_mapping(numeq_table(config))
        self.last_report: NumberingReport | None = None

    def supports_renderer(self, renderer: str) -> bool:
        """Return whether the preprocessor can run for ``renderer``."""
        return renderer != UNSUPPORTED_RENDERER

    def run(self, book: Book) -> Book:
        """Rewrite every chapter's content in ``book`` and return it.

        The book is left untouched when numbering fails.
        """
        chapters, bindings = chapters_from_book(book)
        self.last_report = number_equations(chapters, self.policy)
        for binding in bindings:
            if not binding.chapter.is_draft:
                binding.raw["content"] = binding.chapter.content
        return book


__all__ = [
    "Book",
    "BookFormatError",
    "ChapterBinding",
    "NumEqPreprocessor",
    "PreprocessorContext",
    "book_items",
    "chapters_from_book",
    "check_mdbook_version",
    "encode_book",
    "parse_input",
]
