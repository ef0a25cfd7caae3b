"""View mode rules for the contextual side panel."""

from typing import Literal, Optional

from .artifacts import (
    Artifact,
    ContentPreviewArtifact,
    MultiFieldConfigArtifact,
    SessionMetaArtifact,
    SettingsPreviewArtifact,
    SkillArtifact,
    SourceArtifact,
    get_artifact_identity,
)

ViewMode = Literal["preview", "code"]

PREVIEW: ViewMode = "preview"
CODE: ViewMode = "code"

_CONTENT_TYPE_LABELS = {
    "html": "HTML",
    "mermaid": "Diagram",
    "pdf": "PDF",
}

_CODE_TOGGLE_CONTENT_TYPES = frozenset({"html", "mermaid"})


def get_artifact_title(artifact: Artifact) -> str:
    if isinstance(artifact, SourceArtifact):
        return "Source"
    if isinstance(artifact, SkillArtifact):
        return "Skill"
    if isinstance(artifact, SessionMetaArtifact):
        return "Session"
    if isinstance(artifact, SettingsPreviewArtifact):
        return "Settings"
    if isinstance(artifact, (MultiFieldConfigArtifact, ContentPreviewArtifact)):
        return artifact.title
    raise TypeError(f"Not an artifact: {artifact!r}")


def get_artifact_type_label(artifact: Artifact) -> Optional[str]:
    """Badge text for content previews, None for every other kind."""
    if not isinstance(artifact, ContentPreviewArtifact):
        return None
    return _CONTENT_TYPE_LABELS.get(artifact.content_type)


def should_show_code_toggle(artifact: Artifact) -> bool:
    """Only HTML and diagram previews have a source view worth toggling to."""
    return isinstance(artifact, ContentPreviewArtifact) and artifact.content_type in _CODE_TOGGLE_CONTENT_TYPES


def next_view_mode_after_artifact_change(
    previous_artifact: Optional[Artifact],
    next_artifact: Artifact,
    current_view_mode: ViewMode,
) -> ViewMode:
    """Keep the mode for the same artifact, open anything else in preview."""
    if get_artifact_identity(previous_artifact) == get_artifact_identity(next_artifact):
        return current_view_mode
    return PREVIEW


def toggle_view_mode(artifact: Optional[Artifact], current_view_mode: ViewMode) -> ViewMode:
    """Flip between preview and code where the artifact offers a toggle."""
    if artifact is None or not should_show_code_toggle(artifact):
        return current_view_mode
    return PREVIEW if current_view_mode == CODE else CODE
