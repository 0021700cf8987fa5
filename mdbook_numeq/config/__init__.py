"""Resolve numbering options for mdbook-numeq runs.

Options come either from the ``[preprocessor.numeq]`` table mdBook forwards in
the preprocessor context, or from ``book.toml`` when the standalone ``number``
command runs outside mdBook. Both paths funnel through :func:`resolve_policy`,
which validates types and applies the one normalization rule: a positive
``depth`` switches ``global`` numbering off.

Examples
--------
>>> from mdbook_numeq.config import policy_from_mapping
>>> policy_from_mapping({"prefix": True, "depth": 1})
NumberingPolicy(global_numbering=False, prefix=True, depth=1)
"""

from .loader import load_book_config, numeq_table, policy_from_mapping, resolve_policy
from .models import BookConfig, NumberingPolicy

__all__ = [
    "BookConfig",
    "NumberingPolicy",
    "load_book_config",
    "numeq_table",
    "policy_from_mapping",
    "resolve_policy",
]
