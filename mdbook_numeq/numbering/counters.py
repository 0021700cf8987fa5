"""Scope keys, sequential counters and display strings.

The counter engine turns a section's hierarchical path into the key of the
counter it increments, and the counter value into the number shown in the
equation tag. Counters are never reset: two sections only "restart" numbering
when they map to different scope keys.

Examples
--------
>>> from mdbook_numeq.config import resolve_policy
>>> policy = resolve_policy(prefix=True, depth=3)
>>> counters = CounterTable()
>>> key = scope_key((3,), policy)
>>> render_display((3,), counters.next_value(key), policy)
'3.0.0.1'
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import GLOBAL_SCOPE, ScopeKey

if typ.TYPE_CHECKING:
    from mdbook_numeq.book import HierarchicalPath
    from mdbook_numeq.config import NumberingPolicy


def fit_to_depth(path: HierarchicalPath, depth: int) -> HierarchicalPath:
    """Truncate ``path`` to ``depth`` components or right-pad it with zeros.

    A ``depth`` of ``0`` returns ``path`` unchanged.
    """
    if depth <= 0:
        return path
    if len(path) >= depth:
        return path[:depth]
    return path + (0,) * (depth - len(path))


def scope_key(
    path: HierarchicalPath, policy: NumberingPolicy, location: str | None = None
) -> ScopeKey:
    """Return the counter scope for a section.

    Parameters
    ----------
    path : tuple[int, ...]
        Section number; empty for unnumbered chapters.
    policy : NumberingPolicy
        Effective numbering policy.
    location : str, optional
        Source path of the section; identifies the counter of an unnumbered
        chapter.

    Returns
    -------
    ScopeKey
        ``GLOBAL_SCOPE`` under global numbering at depth ``0``, the
        depth-fitted path when a depth is configured, the full path otherwise.
    """
    if policy.counts_globally:
        return GLOBAL_SCOPE
    if not path:
        return ScopeKey(chapter=location or "")
    return ScopeKey(components=fit_to_depth(path, policy.depth))


def render_display(path: HierarchicalPath, value: int, policy: NumberingPolicy) -> str:
    """Format the number shown for the ``value``-th equation of a scope.

    Unnumbered chapters have no prefix to show, so they always render the
    bare value.
    """
    if not policy.prefix or not path:
        return str(value)
    prefix = fit_to_depth(path, policy.depth)
    return ".".join(str(part) for part in (*prefix, value))


class CounterTable:
    """Per-scope occurrence counters for a single numbering run."""

    def __init__(self) -> None:
        self._values: dict[ScopeKey, int] = {}

    def next_value(self, key: ScopeKey) -> int:
        """Increment the counter for ``key`` and return its new value."""
        value = self._values.get(key, 0) + 1
        self._values[key] = value
        return value

    def current(self, key: ScopeKey) -> int:
        """Return the last value handed out for ``key`` (``0`` if none)."""
        return self._values.get(key, 0)

    def snapshot(self) -> cabc.Mapping[ScopeKey, int]:
        """Return a copy of every counter's current value."""
        return dict(self._values)

    def __len__(self) -> int:
        return len(self._values)


__all__ = ["CounterTable", "fit_to_depth", "render_display", "scope_key"]
