"""Tests for selector parsing and stage selection."""

import pytest

from gwaudit.audit.diagnostics import Severity
from gwaudit.audit.selection import (
    Mode,
    SelectionIntent,
    compute_stage_selection,
    parse_mode,
    resolve_selectors,
    stage_in_scope,
)


class TestResolveSelectors:
    """Test parsing of selector tokens."""

    def test_whole_gateway_selector(self):
        """Test that a bare id selects every stage."""
        intent, diagnostics = resolve_selectors(["abc"])
        assert intent.all_stages == {"abc"}
        assert intent.stages == {}
        assert diagnostics == []

    def test_stage_selectors_accumulate(self):
        """Test that stage selectors for one id are collected in order."""
        intent, diagnostics = resolve_selectors(["abc/prod", "abc/dev", "xyz/prod"])
        assert intent.stages == {"abc": ["prod", "dev"], "xyz": ["prod"]}
        assert intent.all_stages == set()
        assert diagnostics == []

    def test_whole_gateway_drops_earlier_stage_selectors(self):
        """Test that a later bare id removes stage selectors for that id."""
        intent, _ = resolve_selectors(["abc/prod", "abc/dev", "abc"])
        assert intent.all_stages == {"abc"}
        assert "abc" not in intent.stages

    def test_stage_selector_after_whole_gateway_is_ignored(self):
        """Test that a stage selector is a no-op once the id is fully selected."""
        intent, _ = resolve_selectors(["abc", "abc/prod"])
        assert intent.all_stages == {"abc"}
        assert intent.stages == {}

    @pytest.mark.parametrize("token", ["abc/prod/extra", "a//b", "", "abc/", "/prod"])
    def test_malformed_tokens(self, token):
        """Test that malformed tokens yield one error and no selection."""
        intent, diagnostics = resolve_selectors([token])
        assert len(diagnostics) == 1
        assert diagnostics[0].severity is Severity.ERROR
        assert token in diagnostics[0].message
        assert intent.all_stages == set()
        assert intent.stages == {}

    def test_malformed_tokens_do_not_stop_parsing(self):
        """Test that parsing continues past malformed tokens."""
        intent, diagnostics = resolve_selectors(["a/b/c", "abc", "x/y/z", "def/prod"])
        assert len(diagnostics) == 2
        assert intent.all_stages == {"abc"}
        assert intent.stages == {"def": ["prod"]}

    def test_intent_keeps_ids_in_one_collection(self):
        """Test that no id is both fully and partially selected."""
        intent, _ = resolve_selectors(["a/1", "b", "a", "b/2", "c/3", "a/4"])
        assert not intent.all_stages & set(intent.stages)


class TestComputeStageSelection:
    """Test per-family stage selection."""

    def test_include_selects_named_gateways(self):
        """Test include mode keeps only named gateways."""
        intent, _ = resolve_selectors(["A"])
        selection = compute_stage_selection(intent, ["A", "B"], Mode.INCLUDE)
        assert selection == {"A": []}

    def test_exclude_selects_unnamed_gateways(self):
        """Test exclude mode keeps only gateways that were not named."""
        intent, _ = resolve_selectors(["A"])
        selection = compute_stage_selection(intent, ["A", "B"], Mode.EXCLUDE)
        assert selection == {"B": []}

    @pytest.mark.parametrize("mode", [Mode.INCLUDE, Mode.EXCLUDE])
    def test_stage_selectors_always_kept(self, mode):
        """Test gateways named with stages are kept in both modes."""
        intent, _ = resolve_selectors(["A/prod"])
        selection = compute_stage_selection(intent, ["A"], mode)
        assert selection == {"A": ["prod"]}

    def test_unknown_ids_are_ignored(self):
        """Test selectors for ids missing from the catalog select nothing."""
        intent, _ = resolve_selectors(["missing", "gone/prod"])
        selection = compute_stage_selection(intent, ["A"], Mode.INCLUDE)
        assert selection == {}

    def test_exclude_with_empty_intent_selects_everything(self):
        """Test exclude mode with no selectors audits the whole catalog."""
        selection = compute_stage_selection(SelectionIntent(), ["A", "B"], Mode.EXCLUDE)
        assert selection == {"A": [], "B": []}


class TestStageInScope:
    """Test the stage-level filter."""

    def test_empty_selection_keeps_all(self):
        """Test that an empty selection keeps every stage."""
        assert stage_in_scope([], "dev", Mode.INCLUDE)
        assert stage_in_scope([], "dev", Mode.EXCLUDE)

    def test_include_keeps_named_stage_only(self):
        """Test include mode inspects only named stages."""
        assert stage_in_scope(["prod"], "prod", Mode.INCLUDE)
        assert not stage_in_scope(["prod"], "dev", Mode.INCLUDE)

    def test_exclude_skips_named_stage(self):
        """Test exclude mode skips named stages and keeps the rest."""
        assert not stage_in_scope(["prod"], "prod", Mode.EXCLUDE)
        assert stage_in_scope(["prod"], "dev", Mode.EXCLUDE)


class TestParseMode:
    """Test mode parsing."""

    def test_defaults_to_include(self):
        """Test that a missing mode means include."""
        assert parse_mode(None) is Mode.INCLUDE

    def test_case_insensitive(self):
        """Test that modes are matched case-insensitively."""
        assert parse_mode("EXCLUDE") is Mode.EXCLUDE

    def test_rejects_unknown_mode(self):
        """Test that unknown modes raise."""
        with pytest.raises(ValueError, match="Invalid mode"):
            parse_mode("ignore")
