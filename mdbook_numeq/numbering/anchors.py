"""Derive renderer-addressable anchor tokens for numbered equations."""

from __future__ import annotations

import re
import typing as typ

from mdbook_numeq._constants import AUTO_ANCHOR_PREFIX, GLOBAL_SCOPE_SLUG

if typ.TYPE_CHECKING:
    from .models import ScopeKey

# characters that would break an HTML id or the \htmlId{...} argument
_ILLEGAL_ANCHOR_CHARS = re.compile(r"[\s{}\\]+")
_NON_SLUG_CHARS = re.compile(r"[^A-Za-z0-9]+")


def label_anchor(label: str) -> str:
    """Return the anchor token for a user-supplied label."""
    token = _ILLEGAL_ANCHOR_CHARS.sub("-", label.strip()).strip("-")
    return token or AUTO_ANCHOR_PREFIX


def scope_anchor(key: ScopeKey, value: int) -> str:
    """Return the anchor token for an unlabeled equation.

    Examples
    --------
    >>> from mdbook_numeq.numbering.models import ScopeKey
    >>> scope_anchor(ScopeKey(components=(3, 2)), 1)
    'numeq-3-2-1'
    """
    if key.components:
        scope = "-".join(str(part) for part in key.components)
    elif key.chapter is not None:
        scope = _NON_SLUG_CHARS.sub("-", key.chapter).strip("-") or "chapter"
    else:
        scope = GLOBAL_SCOPE_SLUG
    return f"{AUTO_ANCHOR_PREFIX}-{scope}-{value}"


class AnchorAllocator:
    """Hand out anchor tokens that are unique within one run."""

    def __init__(self) -> None:
        self._used: set[str] = set()

    def claim(self, base: str) -> str:
        """Reserve ``base``, appending numeric suffixes when it is taken."""
        candidate = base
        suffix = 2
        while candidate in self._used:
            candidate = f"{base}-{suffix}"
            suffix += 1
        self._used.add(candidate)
        return candidate


__all__ = ["AnchorAllocator", "label_anchor", "scope_anchor"]
