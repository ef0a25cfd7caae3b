"""Flatten a palette model into selectable rows."""

from datetime import datetime
from typing import Iterable, Optional

from .models import PaletteEntry, PaletteModel
from .palette import SETTINGS_PAGES
from .timefmt import format_relative_time

# Group order as rendered, with headings
GROUP_HEADINGS = {
    "session": "Sessions",
    "source": "Sources",
    "skill": "Skills",
    "setting": "Settings",
    "workspace": "Workspaces",
    "action": "Actions",
}

# (key, label, extra search terms)
ACTIONS = (
    ("new-session", "New Session", ""),
    ("toggle-theme", "Toggle Dark Mode", ""),
    ("logout", "Logout", "Sign Out"),
)


def build_palette_entries(
    model: PaletteModel,
    active_workspace_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[PaletteEntry, ...]:
    """Rows for every group, in display order.

    Settings and actions are static and always present, so the result is
    never empty even when ``model.has_any_results`` is false.
    """
    entries: list[PaletteEntry] = []

    for session in model.sessions:
        detail = format_relative_time(session.last_message_at, now) if session.last_message_at else ""
        entries.append(PaletteEntry(
            group="session",
            key=session.id,
            label=session.name or session.preview or "Untitled",
            detail=detail,
            search_value=f"session:{session.name or ''}{session.preview or ''}{session.id}",
        ))

    for source in model.sources:
        entries.append(PaletteEntry(
            group="source",
            key=source.slug,
            label=source.name,
            detail=source.type,
            search_value=f"source:{source.name}{source.type}",
        ))

    for skill in model.skills:
        entries.append(PaletteEntry(
            group="skill",
            key=skill.slug,
            label=skill.metadata.name,
            search_value=f"skill:{skill.metadata.name}{skill.slug}",
        ))

    for page in SETTINGS_PAGES:
        entries.append(PaletteEntry(
            group="setting",
            key=page.id,
            label=page.label,
            detail=page.description,
            search_value=f"setting:{page.label}{page.description}",
        ))

    for workspace in model.workspaces:
        entries.append(PaletteEntry(
            group="workspace",
            key=workspace.id,
            label=workspace.name,
            search_value=f"workspace:{workspace.name}{workspace.id}",
            is_active=workspace.id == active_workspace_id,
        ))

    for key, label, terms in ACTIONS:
        entries.append(PaletteEntry(
            group="action",
            key=key,
            label=label,
            search_value=f"action:{label} {terms}".rstrip(),
        ))

    return tuple(entries)


def filter_palette_entries(entries: Iterable[PaletteEntry], query: str) -> tuple[PaletteEntry, ...]:
    """Keep entries whose search text contains the query, in their original order."""
    needle = (query or "").strip().lower()
    if not needle:
        return tuple(entries)
    return tuple(e for e in entries if needle in e.search_value.lower())
