"""Unit tests for numbering policy resolution and ``book.toml`` loading.

These tests cover :func:`resolve_policy` (type validation and the rule that a
positive ``depth`` switches global numbering off), the mapping front-end used
for mdBook's ``[preprocessor.numeq]`` table, and :func:`load_book_config`.

Usage
-----
Run ``pytest tests/test_config.py -v``. Only pytest's built-in ``tmp_path``
and ``caplog`` fixtures are required.
"""

from __future__ import annotations

import logging
import typing as typ
from textwrap import dedent

import pytest

from mdbook_numeq.config import (
    NumberingPolicy,
    load_book_config,
    policy_from_mapping,
    resolve_policy,
)
from mdbook_numeq.errors import InvalidConfigurationError

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_defaults_produce_plain_per_chapter_numbering() -> None:
    """Every option defaults to off."""
    policy = resolve_policy()
    assert policy == NumberingPolicy(global_numbering=False, prefix=False, depth=0), (
        f"expected default policy, got {policy!r}"
    )


def test_positive_depth_forces_global_off(caplog: pytest.LogCaptureFixture) -> None:
    """Depth-based prefixes reset per prefix, so global numbering is dropped."""
    caplog.set_level(logging.DEBUG, logger="mdbook_numeq.config.loader")
    policy = resolve_policy(global_numbering=True, prefix=True, depth=2)
    assert policy.global_numbering is False, "expected depth > 0 to disable global"
    assert policy.prefix is True, "expected prefix to be preserved"
    assert policy.depth == 2, f"expected depth 2, got {policy.depth}"
    assert "ignoring global=true" in caplog.text, (
        "expected a debug line recording the global override"
    )


def test_global_survives_without_depth() -> None:
    """Global numbering is kept when no depth is configured."""
    policy = resolve_policy(global_numbering=True)
    assert policy.global_numbering is True, "expected global numbering to stay on"


@pytest.mark.parametrize(
    ("kwargs", "fragment"),
    [
        ({"depth": -1}, "'depth'"),
        ({"depth": True}, "'depth'"),
        ({"depth": "2"}, "'depth'"),
        ({"depth": 1.5}, "'depth'"),
        ({"prefix": "yes"}, "'prefix'"),
        ({"global_numbering": 1}, "'global'"),
    ],
)
def test_invalid_values_are_rejected(kwargs: dict[str, object], fragment: str) -> None:
    """Malformed option values raise before any text is processed."""
    with pytest.raises(InvalidConfigurationError, match=fragment):
        resolve_policy(**kwargs)  # type: ignore[arg-type]


def test_policy_from_mapping_ignores_mdbook_keys() -> None:
    """Keys owned by mdBook itself do not affect the policy."""
    policy = policy_from_mapping(
        {"command": "mdbook-numeq", "renderers": ["html"], "prefix": True, "global": True}
    )
    assert policy == NumberingPolicy(global_numbering=True, prefix=True, depth=0), (
        f"unexpected policy {policy!r}"
    )


def test_policy_from_mapping_accepts_missing_table() -> None:
    """A book without a ``[preprocessor.numeq]`` table uses the defaults."""
    assert policy_from_mapping(None) == NumberingPolicy(), (
        "expected defaults when no table is configured"
    )


def test_policy_from_mapping_rejects_non_table() -> None:
    """``preprocessor.numeq`` must be a table."""
    with pytest.raises(InvalidConfigurationError):
        policy_from_mapping("prefix")  # type: ignore[arg-type]


def test_load_book_config_reads_numeq_table(tmp_path: Path) -> None:
    """``book.toml`` provides the source directory and numbering options."""
    (tmp_path / "book.toml").write_text(
        dedent(
            """
            [book]
            title = "Algebra"
            src = "content"

            [preprocessor.numeq]
            command = "mdbook-numeq"
            prefix = true
            depth = 2
            global = true
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    config = load_book_config(tmp_path)
    assert config.src_dir == tmp_path / "content", (
        f"expected src dir 'content', got {config.src_dir}"
    )
    assert config.title == "Algebra", f"expected title 'Algebra', got {config.title!r}"
    assert config.policy == NumberingPolicy(
        global_numbering=False, prefix=True, depth=2
    ), f"unexpected policy {config.policy!r}"
    assert config.summary_path == tmp_path / "content" / "SUMMARY.md", (
        "expected SUMMARY.md inside the source directory"
    )


def test_load_book_config_defaults_src(tmp_path: Path) -> None:
    """Without ``book.src`` the source directory is ``src``."""
    (tmp_path / "book.toml").write_text('[book]\ntitle = "T"\n', encoding="utf-8")
    config = load_book_config(tmp_path)
    assert config.src_dir == tmp_path / "src", f"unexpected src dir {config.src_dir}"
    assert config.policy == NumberingPolicy(), "expected default policy"


def test_load_book_config_missing_file(tmp_path: Path) -> None:
    """A directory without ``book.toml`` is reported clearly."""
    with pytest.raises(FileNotFoundError, match="book.toml"):
        load_book_config(tmp_path)


def test_load_book_config_malformed_toml(tmp_path: Path) -> None:
    """Unparsable TOML is an invalid configuration."""
    (tmp_path / "book.toml").write_text("[book\ntitle = \n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError, match="Unable to parse"):
        load_book_config(tmp_path)


def test_load_book_config_invalid_depth(tmp_path: Path) -> None:
    """Option validation also applies to ``book.toml``."""
    (tmp_path / "book.toml").write_text(
        "[preprocessor.numeq]\ndepth = -3\n", encoding="utf-8"
    )
    with pytest.raises(InvalidConfigurationError, match="non-negative"):
        load_book_config(tmp_path)
