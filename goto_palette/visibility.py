"""Which sessions are eligible for display and selection."""

from collections.abc import Mapping
from typing import Iterable, Optional, Union

from .models import SessionMeta


def is_visible_root_session(session: SessionMeta) -> bool:
    """A root session that is neither hidden nor archived."""
    return not session.hidden and not session.is_archived and not session.parent_session_id


def _session_sort_key(session: SessionMeta) -> tuple[int, str]:
    # Newest first, then id ascending so equal timestamps never depend on input order
    return (-(session.last_message_at or 0), session.id)


def get_visible_root_sessions(
    sessions: Union[Mapping[str, SessionMeta], Iterable[SessionMeta]],
    limit: Optional[int] = None,
) -> list[SessionMeta]:
    """Return visible root sessions, newest first.

    Args:
        sessions: Sessions keyed by id, or any iterable of sessions.
        limit: Maximum number of sessions to return. Negative values clamp to zero.
    """
    values = sessions.values() if isinstance(sessions, Mapping) else sessions
    visible = sorted(
        (s for s in values if is_visible_root_session(s)),
        key=_session_sort_key,
    )
    if limit is not None:
        return visible[:max(0, limit)]
    return visible
