"""Go-to-anything command palette model and side panel view rules."""

__version__ = "0.1.0"

from .artifacts import get_artifact_identity
from .palette import (
    build_palette_model,
    can_select_visible_root_session,
    can_select_workspace,
    get_setting_prompt,
)
from .panel import next_view_mode_after_artifact_change
from .visibility import get_visible_root_sessions, is_visible_root_session

__all__ = [
    "build_palette_model",
    "can_select_visible_root_session",
    "can_select_workspace",
    "get_artifact_identity",
    "get_setting_prompt",
    "get_visible_root_sessions",
    "is_visible_root_session",
    "next_view_mode_after_artifact_change",
]
