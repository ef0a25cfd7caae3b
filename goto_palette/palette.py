"""Go-to-anything palette model.

Composes session visibility and per-group ranking into one read-model per
render, and provides the guards callers re-check before acting on a
selection. Nothing here fetches data, mutates its inputs or navigates.
"""

import logging
from typing import Iterable, Mapping, Optional

from .models import (
    PaletteModel,
    SessionMeta,
    SettingsPage,
    Skill,
    SourceConfig,
    WorkspaceOption,
)
from .ranking import DEFAULT_MAX_RESULTS_PER_GROUP, rank_skills, rank_sources, rank_workspaces
from .visibility import get_visible_root_sessions, is_visible_root_session

logger = logging.getLogger(__name__)

SETTINGS_PAGES: tuple[SettingsPage, ...] = (
    SettingsPage("app", "App", "Notifications, updates and general behavior"),
    SettingsPage("ai", "AI", "Model, connections and thinking level"),
    SettingsPage("appearance", "Appearance", "Theme, colors and font"),
    SettingsPage("workspace", "Workspace", "Workspace name, icon and working directory"),
    SettingsPage("permissions", "Permissions", "Permission mode and allowed tools"),
    SettingsPage("labels", "Labels", "Session labels and colors"),
    SettingsPage("input", "Input", "Send key, spell check and auto capitalisation"),
    SettingsPage("preferences", "Preferences", "Your name, timezone and language"),
    SettingsPage("shortcuts", "Shortcuts", "Keyboard shortcuts"),
)

_SETTING_PROMPTS = {
    "app": "Show me my app settings",
    "ai": "Show me my AI configuration",
    "appearance": "Show me my appearance settings",
    "workspace": "Show me my workspace settings",
    "permissions": "Show me my permission settings",
    "labels": "Show me my label settings",
    "input": "Show me my input settings",
    "preferences": "Show me my preferences",
    "shortcuts": "Show me my keyboard shortcuts",
}


def normalize_max_results(max_results_per_group: Optional[int]) -> int:
    """Missing caps fall back to the default, anything else clamps at zero.

    Values int() cannot convert, such as inf or nan, also fall back to
    the default.
    """
    if max_results_per_group is None:
        return DEFAULT_MAX_RESULTS_PER_GROUP
    try:
        cap = max(0, int(max_results_per_group))
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring invalid max results per group %r", max_results_per_group)
        return DEFAULT_MAX_RESULTS_PER_GROUP
    if cap != max_results_per_group:
        logger.debug("Clamped max results per group from %r to %d", max_results_per_group, cap)
    return cap


def build_palette_model(
    sessions: Mapping[str, SessionMeta],
    sources: Iterable[SourceConfig],
    skills: Iterable[Skill],
    workspaces: Iterable[WorkspaceOption],
    active_workspace_id: Optional[str] = None,
    max_results_per_group: Optional[int] = None,
) -> PaletteModel:
    """Build the grouped palette results for one render.

    Args:
        sessions: Session snapshot keyed by session id.
        sources: Source snapshot. Built-in sources are excluded.
        skills: Skill snapshot.
        workspaces: Workspace snapshot. All workspaces are listed.
        active_workspace_id: Accepted for callers; marking the active
            workspace happens when entries are rendered.
        max_results_per_group: Cap applied to every group (default 5).
    """
    cap = normalize_max_results(max_results_per_group)

    visible_sessions = tuple(get_visible_root_sessions(sessions, cap))
    visible_sources = tuple(rank_sources(sources, cap))
    visible_skills = tuple(rank_skills(skills, cap))
    visible_workspaces = tuple(rank_workspaces(workspaces, cap))

    return PaletteModel(
        sessions=visible_sessions,
        sources=visible_sources,
        skills=visible_skills,
        workspaces=visible_workspaces,
        has_any_results=bool(visible_sessions or visible_sources or visible_skills or visible_workspaces),
    )


def get_setting_prompt(setting_id: str) -> str:
    """Chat prompt that opens the given settings page."""
    return _SETTING_PROMPTS.get(setting_id) or f"Show me my {setting_id} settings"


def can_select_visible_root_session(sessions: Mapping[str, SessionMeta], session_id: str) -> bool:
    """Re-check a session selection against the current snapshot."""
    session = sessions.get(session_id)
    if session is None or not is_visible_root_session(session):
        logger.debug("Rejected selection of session %s", session_id)
        return False
    return True


def can_select_workspace(workspaces: Iterable[WorkspaceOption], workspace_id: str) -> bool:
    """Re-check a workspace selection against the current workspace list."""
    if any(w.id == workspace_id for w in workspaces):
        return True
    logger.debug("Rejected selection of workspace %s", workspace_id)
    return False


def find_source(sources: Iterable[SourceConfig], slug: str) -> Optional[SourceConfig]:
    return next((s for s in sources if s.slug == slug), None)


def find_skill(skills: Iterable[Skill], slug: str) -> Optional[Skill]:
    return next((s for s in skills if s.slug == slug), None)
