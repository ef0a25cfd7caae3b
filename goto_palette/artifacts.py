"""Artifacts shown in the contextual side panel.

Each variant is a frozen record tagged with a ``kind``. ``Artifact`` is the
closed union of all variants; every function that switches over it handles
each variant explicitly.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

NO_ARTIFACT_IDENTITY = "__none__"

ContentType = Literal["html", "mermaid", "pdf"]


@dataclass(frozen=True)
class ConfigField:
    key: str
    label: str
    type: Literal["text", "select", "toggle"] = "text"
    value: Any = None
    options: tuple[tuple[str, str], ...] = ()  # (label, value)


@dataclass(frozen=True)
class SourceArtifact:
    source_slug: str
    kind: Literal["source"] = field(default="source", init=False)


@dataclass(frozen=True)
class SkillArtifact:
    skill_slug: str
    kind: Literal["skill"] = field(default="skill", init=False)


@dataclass(frozen=True)
class SessionMetaArtifact:
    session_id: str
    kind: Literal["session-meta"] = field(default="session-meta", init=False)


@dataclass(frozen=True)
class SettingsPreviewArtifact:
    setting_key: str
    current_value: Any = None
    new_value: Any = None
    kind: Literal["settings-preview"] = field(default="settings-preview", init=False)


@dataclass(frozen=True)
class MultiFieldConfigArtifact:
    title: str
    fields: tuple[ConfigField, ...] = ()
    kind: Literal["multi-field-config"] = field(default="multi-field-config", init=False)


@dataclass(frozen=True)
class ContentPreviewArtifact:
    content_type: ContentType
    title: str
    code: str = ""
    kind: Literal["content-preview"] = field(default="content-preview", init=False)


Artifact = Union[
    SourceArtifact,
    SkillArtifact,
    SessionMetaArtifact,
    SettingsPreviewArtifact,
    MultiFieldConfigArtifact,
    ContentPreviewArtifact,
]


def get_artifact_identity(artifact: Optional[Artifact]) -> str:
    """Stable key naming which logical artifact this is.

    Equal keys mean the same artifact even when other payload differs.
    Content previews fold in the code length so replaced content with the
    same title counts as a new artifact.
    """
    if artifact is None:
        return NO_ARTIFACT_IDENTITY
    if isinstance(artifact, SourceArtifact):
        return f"{artifact.kind}:{artifact.source_slug}"
    if isinstance(artifact, SkillArtifact):
        return f"{artifact.kind}:{artifact.skill_slug}"
    if isinstance(artifact, SessionMetaArtifact):
        return f"{artifact.kind}:{artifact.session_id}"
    if isinstance(artifact, SettingsPreviewArtifact):
        return f"{artifact.kind}:{artifact.setting_key}"
    if isinstance(artifact, MultiFieldConfigArtifact):
        return f"{artifact.kind}:{artifact.title}"
    if isinstance(artifact, ContentPreviewArtifact):
        return f"{artifact.kind}:{artifact.content_type}:{artifact.title}:{len(artifact.code)}"
    raise TypeError(f"Not an artifact: {artifact!r}")
