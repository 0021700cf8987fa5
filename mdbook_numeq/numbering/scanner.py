r"""Rewrite equation markers into numbered tags (numbering phase).

Markers are matched literally anywhere in a chapter's text:

* ``{{numeq}}`` numbers an equation;
* ``{{numeq}}{label}`` or ``{{numeq}{label}}`` numbers it and records
  ``label`` so ``{{eqref: label}}`` can point at it later.

Each marker becomes ``\htmlId{anchor}{} \tag{number}``, which KaTeX and
MathJax turn into an addressable, numbered display equation. Anything that
only resembles a marker is left untouched.
"""

from __future__ import annotations

import logging
import re
import typing as typ

from mdbook_numeq._constants import TAG_TEMPLATE

from .anchors import AnchorAllocator, label_anchor, scope_anchor
from .counters import CounterTable, render_display, scope_key
from .labels import LabelRegistry
from .models import LabelInfo, Occurrence

if typ.TYPE_CHECKING:
    from mdbook_numeq.book import FlatSection
    from mdbook_numeq.config import NumberingPolicy

logger = logging.getLogger(__name__)

OCCURRENCE_PATTERN = re.compile(
    r"\{\{numeq\}(?:\{(?P<inner>[^{}\n]*)\}\}|\}(?:\{(?P<label>.*?)\})?)"
)


class MarkerRewriter:
    """Number every occurrence marker of a run, section by section.

    One rewriter owns the counters, label registry and anchor allocator of a
    single run; feed it every section in document order, then call
    :meth:`LabelRegistry.freeze` on :attr:`registry`.
    """

    def __init__(
        self,
        policy: NumberingPolicy,
        *,
        counters: CounterTable | None = None,
        registry: LabelRegistry | None = None,
        anchors: AnchorAllocator | None = None,
    ) -> None:
        """Initialize a rewriter for one numbering run.

        Parameters
        ----------
        policy : NumberingPolicy
            Effective numbering policy.
        counters : CounterTable, optional
            Counter table to mutate; a fresh one is created when omitted.
        registry : LabelRegistry, optional
            Registry receiving labels; a fresh one is created when omitted.
        anchors : AnchorAllocator, optional
            Allocator guaranteeing anchor uniqueness across the run.
        """
        self.policy = policy
        self.counters = counters if counters is not None else CounterTable()
        self.registry = registry if registry is not None else LabelRegistry()
        self.anchors = anchors if anchors is not None else AnchorAllocator()
        self.occurrences: list[Occurrence] = []

    def rewrite(self, section: FlatSection) -> str:
        """Return ``section.text`` with every occurrence marker numbered.

        Raises
        ------
        DuplicateLabelError
            If a label in this section was already registered.
        """

        def _replace(match: re.Match[str]) -> str:
            raw_label = match.group("label")
            if raw_label is None:
                raw_label = match.group("inner")
            label = (raw_label or "").strip() or None
            occurrence = self._number(section, label)
            return TAG_TEMPLATE.format(
                anchor=occurrence.anchor, display=occurrence.display
            )

        return OCCURRENCE_PATTERN.sub(_replace, section.text)

    def _number(self, section: FlatSection, label: str | None) -> Occurrence:
        key = scope_key(section.path, self.policy, section.location)
        value = self.counters.next_value(key)
        display = render_display(section.path, value, self.policy)
        base = label_anchor(label) if label else scope_anchor(key, value)
        anchor = self.anchors.claim(base)
        if label:
            self.registry.register(
                label,
                LabelInfo(
                    display=display,
                    anchor=anchor,
                    location=section.location,
                    path=section.path,
                ),
            )
        occurrence = Occurrence(
            scope=key,
            value=value,
            display=display,
            anchor=anchor,
            label=label,
            location=section.location,
        )
        self.occurrences.append(occurrence)
        logger.debug("eq. %s -> #%s in %s", display, anchor, section.location)
        return occurrence


__all__ = ["OCCURRENCE_PATTERN", "MarkerRewriter"]
