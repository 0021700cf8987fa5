"""Label registry filled by the numbering phase and frozen for references.

:class:`ReferenceResolver` only accepts :class:`ResolvedLabels`, and the only
way to obtain one is :meth:`LabelRegistry.freeze`, so references can never be
resolved against a registry that is still being written.
"""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ

from mdbook_numeq.errors import DuplicateLabelError, OccurrenceSite

if typ.TYPE_CHECKING:
    from .models import LabelInfo


class LabelRegistry:
    """Mutable label table owned by a single numbering run."""

    def __init__(self) -> None:
        self._labels: dict[str, LabelInfo] = {}
        self._frozen: ResolvedLabels | None = None

    def register(self, label: str, info: LabelInfo) -> None:
        """Record ``label``; raise :class:`DuplicateLabelError` if it exists."""
        if self._frozen is not None:
            msg = "Cannot register labels after the registry has been frozen."
            raise RuntimeError(msg)
        existing = self._labels.get(label)
        if existing is not None:
            raise DuplicateLabelError(
                label,
                first=OccurrenceSite(existing.display, existing.location, existing.path),
                second=OccurrenceSite(info.display, info.location, info.path),
            )
        self._labels[label] = info

    def __contains__(self, label: object) -> bool:
        return label in self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def freeze(self) -> ResolvedLabels:
        """Close the registry and return its read-only view."""
        if self._frozen is None:
            self._frozen = ResolvedLabels(_seal=_SEAL, labels=self._labels)
        return self._frozen


_SEAL = object()


class ResolvedLabels(cabc.Mapping[str, "LabelInfo"]):
    """Read-only label table available once every occurrence is numbered."""

    def __init__(self, *, _seal: object, labels: cabc.Mapping[str, LabelInfo]) -> None:
        if _seal is not _SEAL:
            msg = "ResolvedLabels is created by LabelRegistry.freeze()."
            raise TypeError(msg)
        self._labels = types.MappingProxyType(dict(labels))

    def __getitem__(self, label: str) -> LabelInfo:
        return self._labels[label]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"ResolvedLabels({dict(self._labels)!r})"


__all__ = ["LabelRegistry", "ResolvedLabels"]
