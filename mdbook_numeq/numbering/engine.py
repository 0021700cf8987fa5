"""Two-phase orchestration of equation numbering and cross-references.

:func:`number_equations` numbers every occurrence marker of the whole book
before it resolves a single reference, so references may point forward. The
rewritten text is only written back to the chapters once both phases have
succeeded; any error leaves the tree exactly as it was.

Example
-------
>>> from mdbook_numeq.book import Chapter
>>> from mdbook_numeq.config import resolve_policy
>>> chapter = Chapter("One", "{{numeq}}{e} see {{eqref: e}}", number=(1,), path="one.md")
>>> report = number_equations([chapter], resolve_policy(prefix=True))
>>> chapter.content
'\\\\htmlId{e}{} \\\\tag{1.1} see [(1.1)](#e)'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from mdbook_numeq.book import SectionFlattener

from .references import ReferenceResolver
from .scanner import MarkerRewriter

if typ.TYPE_CHECKING:
    from mdbook_numeq.book import Chapter, FlatSection
    from mdbook_numeq.config import NumberingPolicy

    from .labels import ResolvedLabels
    from .models import Occurrence

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class NumberingReport:
    """Summary of a completed run.

    Attributes
    ----------
    sections : int
        Number of chapters processed (drafts excluded).
    occurrences : tuple[Occurrence, ...]
        Every numbered equation in document order.
    labels : ResolvedLabels
        Label table used to resolve references.
    references : int
        Number of reference markers replaced.
    """

    sections: int
    occurrences: tuple[Occurrence, ...]
    labels: ResolvedLabels
    references: int


def number_sections(
    sections: cabc.Iterable[FlatSection], policy: NumberingPolicy
) -> tuple[list[FlatSection], ResolvedLabels, list[Occurrence]]:
    """Run the numbering phase over ``sections`` in document order.

    Returns the sections carrying their numbered text, the frozen label table
    and the occurrences that were numbered.
    """
    rewriter = MarkerRewriter(policy)
    numbered = [
        dc.replace(section, text=rewriter.rewrite(section)) for section in sections
    ]
    return numbered, rewriter.registry.freeze(), rewriter.occurrences


def resolve_sections(
    sections: cabc.Iterable[FlatSection], labels: ResolvedLabels
) -> tuple[list[FlatSection], int]:
    """Run the reference phase; return the linked sections and reference count."""
    resolver = ReferenceResolver(labels)
    linked = [dc.replace(section, text=resolver.resolve(section)) for section in sections]
    return linked, resolver.resolved


def number_equations(
    chapters: cabc.Sequence[Chapter], policy: NumberingPolicy
) -> NumberingReport:
    """Number equations and resolve references across a chapter tree.

    Parameters
    ----------
    chapters : Sequence[Chapter]
        Top-level chapters of the book; nested chapters are reached through
        ``sub_items``.
    policy : NumberingPolicy
        Effective numbering policy for the run.

    Returns
    -------
    NumberingReport
        Counts and label table of the completed run.

    Raises
    ------
    DuplicateLabelError
        If two equations share a label. No chapter is modified.
    UnresolvedLabelError
        If a reference names an undefined label. No chapter is modified.
    """
    flattener = SectionFlattener(chapters)
    numbered, labels, occurrences = number_sections(flattener, policy)
    linked, references = resolve_sections(numbered, labels)

    for section in linked:
        section.chapter.content = section.text

    logger.info(
        "numbered %d equation(s) in %d chapter(s); resolved %d reference(s)",
        len(occurrences),
        len(linked),
        references,
    )
    return NumberingReport(
        sections=len(linked),
        occurrences=tuple(occurrences),
        labels=labels,
        references=references,
    )


__all__ = ["NumberingReport", "number_equations", "number_sections", "resolve_sections"]
