"""Entity snapshots and read-models for the command palette."""

from dataclasses import dataclass, field
from typing import Optional

from .artifacts import Artifact


# Human-readable labels for source types
SOURCE_TYPE_LABELS = {
    "mcp": "MCP",
    "api": "API",
    "local": "Local",
    "gmail": "Gmail",
}

# Human-readable labels for where a skill was loaded from
SKILL_SOURCE_LABELS = {
    "global": "Global",
    "workspace": "Workspace",
    "project": "Project",
}


@dataclass
class SessionMeta:
    """Metadata for a single chat session."""

    # Identity
    id: str
    workspace_id: str = ""

    # Content
    name: Optional[str] = None
    preview: Optional[str] = None

    # Timing (epoch millis)
    last_message_at: Optional[int] = None

    # Visibility
    hidden: bool = False
    is_archived: bool = False

    # Hierarchy
    parent_session_id: Optional[str] = None


@dataclass
class SourceConfig:
    """A connected data source (MCP server, API, local folder, mailbox)."""

    slug: str
    name: str = ""
    type: str = "mcp"  # mcp, api, local, gmail
    enabled: bool = True
    is_builtin: bool = False

    @property
    def type_label(self) -> str:
        return SOURCE_TYPE_LABELS.get(self.type, self.type)


@dataclass
class SkillMetadata:
    name: str = ""
    description: str = ""
    globs: list[str] = field(default_factory=list)
    always_allow: list[str] = field(default_factory=list)
    required_sources: list[str] = field(default_factory=list)


@dataclass
class Skill:
    """A loaded skill and its provenance."""

    slug: str
    metadata: SkillMetadata = field(default_factory=SkillMetadata)
    source: str = "global"  # global, workspace, project

    @property
    def source_label(self) -> str:
        return SKILL_SOURCE_LABELS.get(self.source, self.source)


@dataclass
class WorkspaceOption:
    id: str
    name: str = ""


@dataclass(frozen=True)
class SettingsPage:
    """A static settings page offered in the palette."""

    id: str
    label: str
    description: str


@dataclass(frozen=True)
class PaletteModel:
    """Grouped, capped results for one palette render."""

    sessions: tuple[SessionMeta, ...] = ()
    sources: tuple[SourceConfig, ...] = ()
    skills: tuple[Skill, ...] = ()
    workspaces: tuple[WorkspaceOption, ...] = ()
    has_any_results: bool = False


@dataclass(frozen=True)
class PaletteEntry:
    """A single selectable row in the palette list."""

    group: str  # "session", "source", "skill", "setting", "workspace", "action"
    key: str
    label: str
    detail: str = ""
    search_value: str = ""
    is_active: bool = False


@dataclass
class Snapshot:
    """Everything the palette needs for one computation."""

    sessions: dict[str, SessionMeta] = field(default_factory=dict)
    sources: list[SourceConfig] = field(default_factory=list)
    skills: list[Skill] = field(default_factory=list)
    workspaces: list[WorkspaceOption] = field(default_factory=list)
    active_workspace_id: Optional[str] = None
    artifact: Optional[Artifact] = None  # opened in the side panel on start
