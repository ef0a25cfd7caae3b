"""Tests for the palette model and selection guards."""

import dataclasses

import pytest

from goto_palette.models import SessionMeta, Skill, SkillMetadata, SourceConfig, WorkspaceOption
from goto_palette.palette import (
    SETTINGS_PAGES,
    build_palette_model,
    can_select_visible_root_session,
    can_select_workspace,
    find_skill,
    find_source,
    get_setting_prompt,
    normalize_max_results,
)


def session(id: str, **overrides) -> SessionMeta:
    return SessionMeta(id=id, workspace_id="ws-1", **overrides)


def source(name: str, slug: str, type: str = "mcp") -> SourceConfig:
    return SourceConfig(slug=slug, name=name, type=type)


def skill(name: str, slug: str) -> Skill:
    return Skill(slug=slug, metadata=SkillMetadata(name=name))


class TestBuildPaletteModel:
    """Tests for building grouped results."""

    @pytest.fixture
    def inputs(self):
        return dict(
            sessions={
                "s2": session("s2", last_message_at=10, name="Two"),
                "s1": session("s1", last_message_at=20, name="One"),
                "hidden": session("hidden", hidden=True, last_message_at=99),
            },
            sources=[source("Zulu", "zulu"), source("Alpha", "alpha")],
            skills=[skill("Zeta", "zeta"), skill("Beta", "beta")],
            workspaces=[WorkspaceOption("w2", "Zulu"), WorkspaceOption("w1", "Alpha")],
            active_workspace_id="w1",
        )

    def test_deterministic_grouped_results_with_limit(self, inputs):
        """Test each group is sorted and capped to one entry."""
        model = build_palette_model(**inputs, max_results_per_group=1)

        assert [s.id for s in model.sessions] == ["s1"]
        assert [s.slug for s in model.sources] == ["alpha"]
        assert [s.slug for s in model.skills] == ["beta"]
        assert [w.id for w in model.workspaces] == ["w1"]
        assert model.has_any_results

    def test_default_cap_is_five(self, inputs):
        """Test an unset cap falls back to five per group."""
        inputs["workspaces"] = [WorkspaceOption(f"w{i}", f"W{i}") for i in range(9)]
        model = build_palette_model(**inputs)
        assert len(model.workspaces) == 5

    def test_zero_cap_has_no_results(self, inputs):
        """Test a zero cap empties every group."""
        model = build_palette_model(**inputs, max_results_per_group=0)
        assert model.sessions == model.sources == model.skills == model.workspaces == ()
        assert not model.has_any_results

    def test_negative_cap_clamps_to_zero(self, inputs):
        """Test a negative cap behaves like zero."""
        model = build_palette_model(**inputs, max_results_per_group=-4)
        assert not model.has_any_results

    def test_empty_inputs(self):
        """Test empty snapshots produce an empty model."""
        model = build_palette_model({}, [], [], [], None)
        assert not model.has_any_results

    def test_any_single_group_counts_as_results(self):
        """Test one non-empty group is enough for has_any_results."""
        model = build_palette_model({}, [], [], [WorkspaceOption("w1", "Only")], None)
        assert model.has_any_results

    def test_active_workspace_does_not_filter(self, inputs):
        """Test all workspaces are listed regardless of the active one."""
        model = build_palette_model(**inputs)
        assert [w.id for w in model.workspaces] == ["w1", "w2"]

    def test_model_is_immutable(self, inputs):
        """Test the computed model cannot be modified."""
        model = build_palette_model(**inputs)
        assert isinstance(model.sessions, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            model.has_any_results = False

    def test_cap_law(self, inputs):
        """Test every group has min(cap, available) entries."""
        for cap in range(0, 4):
            model = build_palette_model(**inputs, max_results_per_group=cap)
            assert len(model.sessions) == min(cap, 2)
            assert len(model.sources) == min(cap, 2)
            assert len(model.skills) == min(cap, 2)
            assert len(model.workspaces) == min(cap, 2)

    def test_mixed_case_names_order_alphabetically(self):
        """Test a lowercase name still ranks ahead of a later uppercase one."""
        model = build_palette_model(
            {},
            [source("Zulu", "zulu"), source("alpha", "alpha")],
            [skill("Zeta", "zeta"), skill("beta", "beta")],
            [WorkspaceOption("w2", "Zulu"), WorkspaceOption("w1", "alpha")],
            max_results_per_group=1,
        )
        assert [s.slug for s in model.sources] == ["alpha"]
        assert [s.slug for s in model.skills] == ["beta"]
        assert [w.id for w in model.workspaces] == ["w1"]


class TestNormalizeMaxResults:
    """Tests for cap normalization."""

    def test_none_uses_default(self):
        assert normalize_max_results(None) == 5

    def test_clamps_negative(self):
        assert normalize_max_results(-1) == 0

    def test_keeps_positive(self):
        assert normalize_max_results(12) == 12

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "many"])
    def test_unconvertible_uses_default(self, value):
        """Test caps int() cannot handle fall back to the default."""
        assert normalize_max_results(value) == 5

    def test_infinite_cap_builds_model(self):
        """Test building a model with an infinite cap does not raise."""
        model = build_palette_model({}, [SourceConfig(slug="a", name="A")], [], [], max_results_per_group=float("inf"))
        assert [s.slug for s in model.sources] == ["a"]


class TestSettingPrompt:
    """Tests for settings prompts."""

    def test_known_setting(self):
        """Test a recognized id returns its phrase."""
        assert get_setting_prompt("appearance") == "Show me my appearance settings"
        assert get_setting_prompt("ai") == "Show me my AI configuration"
        assert get_setting_prompt("shortcuts") == "Show me my keyboard shortcuts"

    def test_unknown_setting_fallback(self):
        """Test an unknown id uses the generic phrase."""
        assert get_setting_prompt("unknown-key") == "Show me my unknown-key settings"
        assert get_setting_prompt("custom") == "Show me my custom settings"

    def test_settings_pages_cover_known_ids(self):
        """Test the registry lists exactly the recognized settings ids."""
        assert [p.id for p in SETTINGS_PAGES] == [
            "app", "ai", "appearance", "workspace", "permissions",
            "labels", "input", "preferences", "shortcuts",
        ]
        assert get_setting_prompt("preferences") == "Show me my preferences"


class TestSelectionGuards:
    """Tests for selection-time revalidation."""

    @pytest.fixture
    def sessions(self):
        return {
            "ok": session("ok"),
            "archived": session("archived", is_archived=True),
            "hidden": session("hidden", hidden=True),
            "child": session("child", parent_session_id="ok"),
        }

    def test_guards_selection_to_visible_root_sessions(self, sessions):
        """Test only visible root sessions can be selected."""
        assert can_select_visible_root_session(sessions, "ok")
        assert not can_select_visible_root_session(sessions, "archived")
        assert not can_select_visible_root_session(sessions, "hidden")
        assert not can_select_visible_root_session(sessions, "child")
        assert not can_select_visible_root_session(sessions, "missing")

    def test_stale_model_selection_rejected(self, sessions):
        """Test a session shown earlier is rejected once it is archived."""
        model = build_palette_model(sessions, [], [], [], None)
        assert [s.id for s in model.sessions] == ["ok"]

        updated = dict(sessions, ok=session("ok", is_archived=True))
        assert not can_select_visible_root_session(updated, model.sessions[0].id)

    def test_workspace_guard(self):
        """Test workspace selection requires presence in the current list."""
        workspaces = [WorkspaceOption("w1", "Alpha")]
        assert can_select_workspace(workspaces, "w1")
        assert not can_select_workspace(workspaces, "w2")
        assert not can_select_workspace([], "w1")


class TestLookups:
    """Tests for lookups by slug."""

    def test_find_source(self):
        """Test a source is found by slug and misses return None."""
        sources = [source("Alpha", "alpha"), source("Beta", "beta")]
        assert find_source(sources, "beta").name == "Beta"
        assert find_source(sources, "gamma") is None

    def test_find_skill(self):
        """Test a skill is found by slug and misses return None."""
        skills = [skill("Zeta", "zeta")]
        assert find_skill(skills, "zeta").metadata.name == "Zeta"
        assert find_skill(skills, "nope") is None
