"""Resolve ``{{eqref: label}}`` markers into Markdown links (reference phase)."""

from __future__ import annotations

import logging
import posixpath
import re
import typing as typ

from mdbook_numeq._constants import LINK_TEMPLATE
from mdbook_numeq.errors import UnresolvedLabelError

if typ.TYPE_CHECKING:
    from mdbook_numeq.book import FlatSection

    from .labels import ResolvedLabels

logger = logging.getLogger(__name__)

REFERENCE_PATTERN = re.compile(r"\{\{eqref:\s*(?P<label>.*?)\}\}")


def relative_link(source: str | None, target: str | None) -> str:
    """Return the link from chapter ``source`` to chapter file ``target``.

    The result is relative to the directory holding ``source``; it is empty
    when both chapters are the same file or when either location is unknown.

    Examples
    --------
    >>> relative_link("crypto/groups.md", "intro.md")
    '../intro.md'
    >>> relative_link("intro.md", "intro.md")
    ''
    """
    if not source or not target:
        return ""
    source = source.replace("\\", "/")
    target = target.replace("\\", "/")
    if source == target:
        return ""
    base_dir = posixpath.dirname(source) or "."
    return posixpath.relpath(target, base_dir)


class ReferenceResolver:
    """Replace reference markers using a frozen label table."""

    def __init__(self, labels: ResolvedLabels) -> None:
        self.labels = labels
        self.resolved = 0

    def resolve(self, section: FlatSection) -> str:
        """Return ``section.text`` with every reference marker linked.

        Raises
        ------
        UnresolvedLabelError
            If a marker names a label no equation defines.
        """

        def _replace(match: re.Match[str]) -> str:
            label = match.group("label").strip()
            info = self.labels.get(label)
            if info is None:
                raise UnresolvedLabelError(label, section.path, section.location)
            self.resolved += 1
            href = relative_link(section.location, info.location)
            logger.debug("ref %s -> %s#%s", label, href, info.anchor)
            return LINK_TEMPLATE.format(
                display=info.display, href=href, anchor=info.anchor
            )

        return REFERENCE_PATTERN.sub(_replace, section.text)


__all__ = ["REFERENCE_PATTERN", "ReferenceResolver", "relative_link"]
