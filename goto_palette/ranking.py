"""Sort and cap logic shared by the named palette groups."""

import locale
from typing import Callable, Iterable, Optional, TypeVar

from .models import Skill, SourceConfig, WorkspaceOption

T = TypeVar("T")

DEFAULT_MAX_RESULTS_PER_GROUP = 5


def name_sort_key(name: Optional[str]) -> tuple[str, str]:
    """Locale-aware collation key. Missing names sort as the empty string.

    Case is ignored at the primary level so "alpha" sorts before "Zulu"
    whatever the process locale; case only orders otherwise equal names.
    """
    name = name or ""
    return (locale.strxfrm(name.casefold()), locale.strxfrm(name))


def rank_group(
    items: Iterable[T],
    name_of: Callable[[T], Optional[str]],
    limit: int,
    include: Optional[Callable[[T], bool]] = None,
) -> list[T]:
    """Filter, sort ascending by name and cap a group of entities.

    Python's sort is stable, so entries with equal names keep their input
    order. There is no secondary key.
    """
    if include is not None:
        items = (item for item in items if include(item))
    ranked = sorted(items, key=lambda item: name_sort_key(name_of(item)))
    return ranked[:max(0, limit)]


def rank_sources(sources: Iterable[SourceConfig], limit: int = DEFAULT_MAX_RESULTS_PER_GROUP) -> list[SourceConfig]:
    """Non-builtin sources by name."""
    return rank_group(sources, lambda s: s.name, limit, include=lambda s: not s.is_builtin)


def rank_skills(skills: Iterable[Skill], limit: int = DEFAULT_MAX_RESULTS_PER_GROUP) -> list[Skill]:
    return rank_group(skills, lambda s: s.metadata.name, limit)


def rank_workspaces(
    workspaces: Iterable[WorkspaceOption], limit: int = DEFAULT_MAX_RESULTS_PER_GROUP
) -> list[WorkspaceOption]:
    return rank_group(workspaces, lambda w: w.name, limit)
