"""Equation numbering and cross-reference resolution.

The numbering phase (:class:`MarkerRewriter`) assigns each ``{{numeq}}``
marker a number from its scope's counter and records labels; the reference
phase (:class:`ReferenceResolver`) links ``{{eqref: label}}`` markers using the
frozen label table. :func:`number_equations` runs both over a chapter tree.
"""

from .counters import CounterTable, fit_to_depth, render_display, scope_key
from .engine import NumberingReport, number_equations
from .labels import LabelRegistry, ResolvedLabels
from .models import GLOBAL_SCOPE, LabelInfo, Occurrence, ScopeKey
from .references import ReferenceResolver, relative_link
from .scanner import MarkerRewriter

__all__ = [
    "GLOBAL_SCOPE",
    "CounterTable",
    "LabelInfo",
    "LabelRegistry",
    "MarkerRewriter",
    "NumberingReport",
    "Occurrence",
    "ReferenceResolver",
    "ResolvedLabels",
    "ScopeKey",
    "fit_to_depth",
    "number_equations",
    "relative_link",
    "render_display",
    "scope_key",
]
