"""Resolve numbering options and load ``book.toml`` into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from mdbook_numeq._constants import CONFIG_TABLE
from mdbook_numeq.errors import InvalidConfigurationError

from .models import BookConfig, NumberingPolicy

logger = logging.getLogger(__name__)

DEFAULT_SRC_DIR = "src"


def resolve_policy(
    *, global_numbering: object = False, prefix: object = False, depth: object = 0
) -> NumberingPolicy:
    """Validate raw option values and return the effective policy.

    Parameters
    ----------
    global_numbering : bool, optional
        Raw ``global`` option. Defaults to ``False``.
    prefix : bool, optional
        Raw ``prefix`` option. Defaults to ``False``.
    depth : int, optional
        Raw ``depth`` option; must be a non-negative integer. Defaults to ``0``.

    Returns
    -------
    NumberingPolicy
        Policy with ``global_numbering`` forced to ``False`` whenever
        ``depth`` is positive.

    Raises
    ------
    InvalidConfigurationError
        If an option has the wrong type or ``depth`` is negative.

    Examples
    --------
    >>> resolve_policy(global_numbering=True, depth=2)
    NumberingPolicy(global_numbering=False, prefix=False, depth=2)
    """
    _require_bool("global", global_numbering)
    _require_bool("prefix", prefix)
    # bool is an int subclass; ``depth = true`` is a typo, not a depth of one
    if isinstance(depth, bool) or not isinstance(depth, int):
        msg = f"Option 'depth' must be a non-negative integer, got {depth!r}."
        raise InvalidConfigurationError(msg)
    if depth < 0:
        msg = f"Option 'depth' must be a non-negative integer, got {depth}."
        raise InvalidConfigurationError(msg)

    effective_global = bool(global_numbering)
    if depth > 0 and effective_global:
        logger.debug("depth=%d resets counters per prefix; ignoring global=true", depth)
        effective_global = False
    return NumberingPolicy(
        global_numbering=effective_global, prefix=bool(prefix), depth=int(depth)
    )


def policy_from_mapping(table: cabc.Mapping[str, typ.Any] | None) -> NumberingPolicy:
    """Build a policy from a ``[preprocessor.numeq]`` table.

    Keys other than ``global``, ``prefix`` and ``depth`` (such as ``command``
    or ``renderers``) belong to mdBook and are ignored.
    """
    if table is None:
        return resolve_policy()
    if not isinstance(table, cabc.Mapping):
        msg = "The [preprocessor.numeq] configuration must be a table."
        raise InvalidConfigurationError(msg)
    return resolve_policy(
        global_numbering=table.get("global", False),
        prefix=table.get("prefix", False),
        depth=table.get("depth", 0),
    )


def numeq_table(config: cabc.Mapping[str, typ.Any]) -> typ.Any:  # noqa: ANN401
    """Return the raw ``preprocessor.numeq`` entry of an mdBook config."""
    section: typ.Any = config
    for key in CONFIG_TABLE:
        if not isinstance(section, cabc.Mapping):
            return None
        section = section.get(key)
    return section


def load_book_config(book_dir: Path) -> BookConfig:
    """Load ``book.toml`` from a book directory.

    Parameters
    ----------
    book_dir : Path
        Directory containing ``book.toml``.

    Returns
    -------
    BookConfig
        Source directory, optional title and the resolved numbering policy.

    Raises
    ------
    FileNotFoundError
        If ``book.toml`` does not exist.
    InvalidConfigurationError
        If the TOML cannot be parsed or the numbering options are invalid.
    """
    path = book_dir / "book.toml"
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    try:
        document = tomlkit.parse(path.read_text(encoding="utf-8"))
    except TOMLKitError as exc:
        msg = f"Unable to parse '{path}': {exc}"
        raise InvalidConfigurationError(msg) from exc
    raw: dict[str, typ.Any] = document.unwrap()

    book_section = raw.get("book") or {}
    if not isinstance(book_section, dict):
        msg = f"The [book] entry of '{path}' must be a table."
        raise InvalidConfigurationError(msg)
    src_dir = book_dir / str(book_section.get("src", DEFAULT_SRC_DIR))
    title = book_section.get("title")

    return BookConfig(
        root=book_dir,
        src_dir=src_dir,
        policy=policy_from_mapping(numeq_table(raw)),
        title=str(title) if title is not None else None,
    )


def _require_bool(name: str, value: object) -> None:
    if not isinstance(value, bool):
        msg = f"Option '{name}' must be a boolean, got {value!r}."
        raise InvalidConfigurationError(msg)


__all__ = ["load_book_config", "numeq_table", "policy_from_mapping", "resolve_policy"]
