"""Number centered equations in mdBook books and resolve references to them.

This package implements the ``mdbook-numeq`` preprocessor. Equations marked
with ``{{numeq}}`` receive sequential numbers scoped by their chapter's
section number, and ``{{eqref: label}}`` markers become links to labeled
equations anywhere in the book.

Exports
-------
- ``app``: Cyclopts application behind the console script.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``NumEqPreprocessor``: mdBook adapter working on the decoded book JSON.
- ``number_equations``: Engine entry point working on a :class:`Chapter` tree.

Examples
--------
>>> from mdbook_numeq import Chapter, number_equations, resolve_policy
>>> chapter = Chapter("Groups", "{{numeq}}", number=(1, 2), path="groups.md")
>>> _ = number_equations([chapter], resolve_policy(prefix=True))
>>> chapter.content
'\\\\htmlId{numeq-1-2-1}{} \\\\tag{1.2.1}'
"""

from __future__ import annotations

from .book import Chapter
from .cli import app, main
from .config import NumberingPolicy, resolve_policy
from .errors import (
    DuplicateLabelError,
    InvalidConfigurationError,
    NumeqError,
    UnresolvedLabelError,
)
from .mdbook import NumEqPreprocessor
from .numbering import number_equations

__all__ = [
    "Chapter",
    "DuplicateLabelError",
    "InvalidConfigurationError",
    "NumEqPreprocessor",
    "NumberingPolicy",
    "NumeqError",
    "UnresolvedLabelError",
    "app",
    "main",
    "number_equations",
    "resolve_policy",
]
