"""Tests for the line diff engine."""

from __future__ import annotations

import random

import pytest

from models.diff import DiffKind, DiffLine
from services.line_diff import (
    DEFAULT_EMPTY_PLACEHOLDER,
    DEFAULT_FALLBACK_NOTICE,
    DEFAULT_MAX_CELLS,
    LineDiffEngine,
    compute_line_diff,
    is_fallback,
    reconstruct_current,
    reconstruct_historical,
    render,
    render_text,
    split_lines,
    summarize,
)

U = DiffKind.UNCHANGED
R = DiffKind.REMOVED
A = DiffKind.ADDED


def pairs(lines: list[DiffLine]) -> list[tuple[DiffKind, str]]:
    return [(line.kind, line.text) for line in lines]


def rejoin(text: str) -> str:
    return "\n".join(split_lines(text))


def random_text(rng: random.Random) -> str:
    return "".join(rng.choice("ab\n") for _ in range(rng.randint(0, 12)))


def lcs_length(left: list[str], right: list[str]) -> int:
    previous = [0] * (len(right) + 1)
    for item in left:
        current = [0]
        for j, other in enumerate(right):
            current.append(previous[j] + 1 if item == other else max(previous[j + 1], current[j]))
        previous = current
    return previous[-1]


SAMPLE_PAIRS = [
    ("", ""),
    ("", "a\nb"),
    ("a\nb", ""),
    ("one\ntwo\nthree", "one\ntwo-edited\nthree\nfour"),
    ("a\nb", "b\na"),
    ("a\nb\nc\nd\ne", "x\nb\ny\nd\nz\nq"),
    ("same\n\nblank lines\n", "same\nblank lines\n\n"),
    ("line\r\nwindows\rmac", "line\nwindows\nmac\nunix"),
    ("a\na\na\nb", "b\na\na\na"),
]


# --- Splitting ---


class TestSplitLines:
    def test_empty_string_has_no_lines(self):
        assert split_lines("") == []

    def test_single_line_without_newline(self):
        assert split_lines("hello") == ["hello"]

    def test_trailing_newline_yields_trailing_empty_line(self):
        assert split_lines("a\n") == ["a", ""]

    def test_lone_newline_is_two_empty_lines(self):
        assert split_lines("\n") == ["", ""]

    def test_keeps_empty_lines_between(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]

    def test_crlf_is_one_boundary(self):
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_unicode_line_separator_is_not_a_boundary(self):
        assert split_lines("a\u2028b") == ["a\u2028b"]


# --- Identity and empty cases ---


class TestIdentity:
    @pytest.mark.parametrize("text", ["a", "a\nb\nc", "a\n", "\n\n", "x\r\ny"])
    def test_identical_texts_are_all_unchanged(self, text):
        result = compute_line_diff(text, text)
        assert pairs(result) == [(U, line) for line in split_lines(text)]
        assert not any(line.synthetic for line in result)

    def test_line_ending_style_alone_is_not_a_difference(self):
        result = compute_line_diff("a\r\nb", "a\nb")
        assert pairs(result) == [(U, "a"), (U, "b")]

    def test_both_empty_yields_placeholder(self):
        result = compute_line_diff("", "")
        assert len(result) == 1
        assert result[0].kind == U
        assert result[0].text == DEFAULT_EMPTY_PLACEHOLDER
        assert result[0].synthetic
        assert not is_fallback(result)

    def test_placeholder_is_configurable(self):
        engine = LineDiffEngine(empty_placeholder="(empty scene)")
        assert engine.compute_line_diff("", "")[0].text == "(empty scene)"

    def test_empty_historical_is_all_added(self):
        assert pairs(compute_line_diff("", "a\nb")) == [(A, "a"), (A, "b")]

    def test_empty_current_is_all_removed(self):
        assert pairs(compute_line_diff("a\nb", "")) == [(R, "a"), (R, "b")]


# --- Detailed alignment ---


class TestDetailedAlignment:
    def test_edit_and_append(self):
        result = compute_line_diff("one\ntwo\nthree", "one\ntwo-edited\nthree\nfour")
        assert pairs(result) == [
            (U, "one"),
            (R, "two"),
            (A, "two-edited"),
            (U, "three"),
            (A, "four"),
        ]

    def test_reorder_is_remove_then_add(self):
        result = compute_line_diff("a\nb", "b\na")
        assert pairs(result) == [(R, "a"), (U, "b"), (A, "a")]

    def test_tie_prefers_removal_first(self):
        result = compute_line_diff("old", "new")
        assert pairs(result) == [(R, "old"), (A, "new")]

    def test_insert_in_middle(self):
        result = compute_line_diff("a\nc", "a\nb\nc")
        assert pairs(result) == [(U, "a"), (A, "b"), (U, "c")]

    def test_delete_in_middle(self):
        result = compute_line_diff("a\nb\nc", "a\nc")
        assert pairs(result) == [(U, "a"), (R, "b"), (U, "c")]

    def test_trailing_newline_added(self):
        result = compute_line_diff("a", "a\n")
        assert pairs(result) == [(U, "a"), (A, "")]

    def test_unchanged_count_is_lcs_length(self):
        result = compute_line_diff("a\nb\nc\nd\ne", "x\nb\ny\nd\nz\nq")
        assert [line.text for line in result if line.kind == U] == ["b", "d"]


# --- Properties ---


class TestProperties:
    @pytest.mark.parametrize("historical,current", SAMPLE_PAIRS)
    def test_reconstruction(self, historical, current):
        result = compute_line_diff(historical, current)
        assert reconstruct_historical(result) == rejoin(historical)
        assert reconstruct_current(result) == rejoin(current)

    @pytest.mark.parametrize("historical,current", SAMPLE_PAIRS)
    def test_swapping_inputs_swaps_counts(self, historical, current):
        forward = summarize(compute_line_diff(historical, current))
        backward = summarize(compute_line_diff(current, historical))
        assert forward.additions == backward.removals
        assert forward.removals == backward.additions

    def test_random_texts_reconstruct_with_minimal_edits(self):
        rng = random.Random(20261016)
        for _ in range(500):
            historical = random_text(rng)
            current = random_text(rng)
            result = compute_line_diff(historical, current)

            assert reconstruct_historical(result) == rejoin(historical)
            assert reconstruct_current(result) == rejoin(current)

            unchanged = [line for line in result if line.kind == U and not line.synthetic]
            assert len(unchanged) == lcs_length(split_lines(historical), split_lines(current))

            forward = summarize(result)
            backward = summarize(compute_line_diff(current, historical))
            assert (forward.additions, forward.removals) == (backward.removals, backward.additions)

    def test_lines_are_immutable(self):
        line = compute_line_diff("a", "b")[0]
        with pytest.raises(Exception):
            line.text = "changed"


# --- Size guard ---


class TestFallback:
    def test_oversized_input_takes_coarse_path(self, capsys):
        engine = LineDiffEngine(max_cells=10)
        historical = "a\nb\nc\nd"
        current = "a\nx\nc"

        result = engine.compute_line_diff(historical, current)

        assert result[0].kind == U
        assert result[0].synthetic
        assert result[0].text == engine.fallback_notice
        assert pairs(result[1:]) == [
            (R, "a"),
            (R, "b"),
            (R, "c"),
            (R, "d"),
            (A, "a"),
            (A, "x"),
            (A, "c"),
        ]
        assert is_fallback(result)
        assert reconstruct_historical(result) == historical
        assert reconstruct_current(result) == current
        assert "[LineDiffEngine] Skipping detailed comparison" in capsys.readouterr().out

    def test_exactly_at_ceiling_uses_detailed_path(self):
        engine = LineDiffEngine(max_cells=12)
        result = engine.compute_line_diff("a\nb\nc\nd", "a\nx\nc")
        assert not is_fallback(result)
        assert pairs(result) == [(U, "a"), (R, "b"), (A, "x"), (U, "c"), (R, "d")]

    def test_one_side_empty_never_falls_back(self):
        engine = LineDiffEngine(max_cells=1)
        result = engine.compute_line_diff("", "a\nb\nc")
        assert pairs(result) == [(A, "a"), (A, "b"), (A, "c")]

    def test_identical_oversized_input_skips_guard(self):
        engine = LineDiffEngine(max_cells=1)
        result = engine.compute_line_diff("a\nb", "a\nb")
        assert pairs(result) == [(U, "a"), (U, "b")]

    def test_fallback_counts(self):
        engine = LineDiffEngine(max_cells=1)
        summary = summarize(engine.compute_line_diff("a\nb", "a\nc"))
        assert (summary.additions, summary.removals) == (2, 2)

    def test_non_positive_ceiling_rejected(self):
        with pytest.raises(ValueError):
            LineDiffEngine(max_cells=0)

    def test_from_config(self):
        engine = LineDiffEngine.from_config(
            {"diff": {"maxCells": 50, "emptyPlaceholder": "-", "fallbackNotice": "skipped"}}
        )
        assert engine.max_cells == 50
        assert engine.empty_placeholder == "-"
        assert engine.fallback_notice == "skipped"

    def test_from_config_defaults(self):
        assert LineDiffEngine.from_config({}).max_cells == DEFAULT_MAX_CELLS

    @pytest.mark.parametrize(
        "config",
        [
            {"diff": None},
            {"diff": "fast"},
            {"diff": {"maxCells": 0}},
            {"diff": {"maxCells": "lots"}},
            {"diff": {"maxCells": 2.5}},
            {"diff": {"maxCells": True}},
        ],
    )
    def test_from_config_ignores_invalid_ceiling(self, config, capsys):
        engine = LineDiffEngine.from_config(config)
        assert engine.max_cells == DEFAULT_MAX_CELLS
        assert engine.empty_placeholder == DEFAULT_EMPTY_PLACEHOLDER
        if isinstance(config["diff"], dict):
            assert "[LineDiffEngine] Invalid maxCells" in capsys.readouterr().out

    def test_from_config_ignores_non_string_texts(self):
        engine = LineDiffEngine.from_config({"diff": {"emptyPlaceholder": None, "fallbackNotice": 3}})
        assert engine.empty_placeholder == DEFAULT_EMPTY_PLACEHOLDER
        assert engine.fallback_notice == DEFAULT_FALLBACK_NOTICE


# --- Summary and rendering ---


class TestSummaryAndRender:
    def test_summary_counts(self):
        summary = summarize(compute_line_diff("one\ntwo\nthree", "one\ntwo-edited\nthree\nfour"))
        assert summary.additions == 2
        assert summary.removals == 1
        assert summary.label == "+2 / -1"

    def test_summary_no_differences(self):
        summary = summarize(compute_line_diff("a\nb", "a\nb"))
        assert (summary.additions, summary.removals) == (0, 0)
        assert summary.label == "No differences"

    def test_summary_ignores_placeholder(self):
        assert summarize(compute_line_diff("", "")).label == "No differences"

    def test_render_prefixes_and_styles(self):
        rendered = render(compute_line_diff("a\nb", "a\nc"))
        assert [(line.prefix, line.text, line.style) for line in rendered] == [
            ("  ", "a", "secondary"),
            ("- ", "b", "red"),
            ("+ ", "c", "green"),
        ]

    def test_render_text(self):
        text = render_text(compute_line_diff("one\ntwo\nthree", "one\ntwo-edited\nthree\nfour"))
        assert text == "  one\n- two\n+ two-edited\n  three\n+ four"
