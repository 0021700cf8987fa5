"""Unit tests for occurrence markers and the numbering phase rewriter."""

from __future__ import annotations

import pytest

from mdbook_numeq.book import Chapter, FlatSection
from mdbook_numeq.config import resolve_policy
from mdbook_numeq.errors import DuplicateLabelError
from mdbook_numeq.numbering import LabelInfo, MarkerRewriter

GROUPS_PATH = "crypto/groups.md"


def _section(
    text: str, path: tuple[int, ...] = (1, 2), location: str | None = GROUPS_PATH
) -> FlatSection:
    return FlatSection(path=path, text=text, location=location, chapter=Chapter("c"))


def test_bare_marker_without_prefix() -> None:
    """An unlabeled marker becomes an anchored tag with the bare number."""
    rewriter = MarkerRewriter(resolve_policy())
    output = rewriter.rewrite(_section(r"$$ x = 1 {{numeq}} $$"))
    assert output == r"$$ x = 1 \htmlId{numeq-1-2-1}{} \tag{1} $$", (
        f"unexpected rewrite {output!r}"
    )
    assert len(rewriter.registry) == 0, "expected no labels to be registered"


def test_bare_marker_with_prefix() -> None:
    """With prefixes enabled the section number precedes the counter."""
    rewriter = MarkerRewriter(resolve_policy(prefix=True))
    output = rewriter.rewrite(_section("{{numeq}}"))
    assert output == r"\htmlId{numeq-1-2-1}{} \tag{1.2.1}", (
        f"unexpected rewrite {output!r}"
    )


@pytest.mark.parametrize("marker", ["{{numeq}}{eq:test}", "{{numeq}{eq:test}}"])
def test_labeled_marker_registers_label(marker: str) -> None:
    """Both labeled forms anchor the tag on the label and record it."""
    rewriter = MarkerRewriter(resolve_policy(prefix=True))
    output = rewriter.rewrite(_section(marker))
    assert output == r"\htmlId{eq:test}{} \tag{1.2.1}", f"unexpected rewrite {output!r}"
    registry = rewriter.registry.freeze()
    assert registry["eq:test"] == LabelInfo(
        display="1.2.1", anchor="eq:test", location=GROUPS_PATH, path=(1, 2)
    ), f"unexpected label info {registry['eq:test']!r}"


def test_markers_are_numbered_left_to_right() -> None:
    """Successive markers in one section receive successive numbers."""
    rewriter = MarkerRewriter(resolve_policy(prefix=True))
    output = rewriter.rewrite(_section("a {{numeq}} b {{numeq}}{second} c {{numeq}}"))
    assert output == (
        r"a \htmlId{numeq-1-2-1}{} \tag{1.2.1} "
        r"b \htmlId{second}{} \tag{1.2.2} "
        r"c \htmlId{numeq-1-2-3}{} \tag{1.2.3}"
    ), f"unexpected rewrite {output!r}"
    values = [occurrence.value for occurrence in rewriter.occurrences]
    assert values == [1, 2, 3], f"expected values 1..3, got {values}"


@pytest.mark.parametrize(
    "text",
    ["{{numeq}", "{{ numeq }}", "{numeq}", "{{numeq }}", "{{NUMEQ}}", "numeq"],
)
def test_unrecognized_markers_pass_through(text: str) -> None:
    """Text that merely resembles a marker is left untouched."""
    rewriter = MarkerRewriter(resolve_policy())
    assert rewriter.rewrite(_section(text)) == text, f"expected {text!r} unchanged"
    assert rewriter.occurrences == [], "expected no occurrences"


def test_empty_label_counts_as_unlabeled() -> None:
    """``{{numeq}}{}`` numbers the equation without registering a label."""
    rewriter = MarkerRewriter(resolve_policy())
    output = rewriter.rewrite(_section("{{numeq}}{ }", path=(1,)))
    assert output == r"\htmlId{numeq-1-1}{} \tag{1}", f"unexpected rewrite {output!r}"
    assert len(rewriter.registry) == 0, "expected no labels to be registered"


def test_label_with_spaces_gets_legal_anchor() -> None:
    """Whitespace in a label is replaced in the anchor, not in the label."""
    rewriter = MarkerRewriter(resolve_policy())
    output = rewriter.rewrite(_section("{{numeq}}{ energy balance }", path=(2,)))
    assert output == r"\htmlId{energy-balance}{} \tag{1}", (
        f"unexpected rewrite {output!r}"
    )
    assert "energy balance" in rewriter.registry, "expected the stripped label"


def test_anchor_collisions_receive_suffixes() -> None:
    """A label equal to an earlier automatic anchor is suffixed to stay unique."""
    rewriter = MarkerRewriter(resolve_policy())
    output = rewriter.rewrite(_section("{{numeq}} {{numeq}}{numeq-1-1}", path=(1,)))
    assert output == r"\htmlId{numeq-1-1}{} \tag{1} \htmlId{numeq-1-1-2}{} \tag{2}", (
        f"unexpected rewrite {output!r}"
    )
    info = rewriter.registry.freeze()["numeq-1-1"]
    assert info.anchor == "numeq-1-1-2", f"expected suffixed anchor, got {info.anchor}"


def test_duplicate_label_reports_both_sites() -> None:
    """Defining a label twice is fatal and names both occurrences."""
    rewriter = MarkerRewriter(resolve_policy(prefix=True))
    rewriter.rewrite(_section("{{numeq}}{dup}", path=(1,), location="one.md"))
    with pytest.raises(DuplicateLabelError) as excinfo:
        rewriter.rewrite(_section("{{numeq}}{dup}", path=(2, 1), location="two.md"))
    error = excinfo.value
    assert error.label == "dup", f"expected label 'dup', got {error.label!r}"
    assert error.first.location == "one.md", "expected the first location"
    assert error.second.location == "two.md", "expected the second location"
    assert "eq. 1.1 in one.md" in str(error), f"unexpected message {error}"
    assert "eq. 2.1.1 in two.md" in str(error), f"unexpected message {error}"


def test_shared_counters_across_sections() -> None:
    """One rewriter carries counters from section to section."""
    rewriter = MarkerRewriter(resolve_policy(prefix=True, depth=1))
    first = rewriter.rewrite(_section("{{numeq}}", path=(3,), location="a.md"))
    second = rewriter.rewrite(_section("{{numeq}}", path=(3, 1), location="b.md"))
    assert first.endswith(r"\tag{3.1}"), f"unexpected first rewrite {first!r}"
    assert second.endswith(r"\tag{3.2}"), f"unexpected second rewrite {second!r}"
