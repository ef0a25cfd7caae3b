"""UI widgets for the palette TUI."""

from datetime import datetime
from typing import Optional

from rich.syntax import Syntax
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import ScrollableContainer
from textual.widgets import ListItem, Static

from ..artifacts import (
    Artifact,
    ConfigField,
    ContentPreviewArtifact,
    MultiFieldConfigArtifact,
    SessionMetaArtifact,
    SettingsPreviewArtifact,
    SkillArtifact,
    SourceArtifact,
)
from ..entries import GROUP_HEADINGS
from ..models import PaletteEntry, Snapshot
from ..palette import find_skill, find_source
from ..panel import CODE, ViewMode, get_artifact_title, get_artifact_type_label, should_show_code_toggle

# Syntax lexers for the code view
_LEXERS = {
    "html": "html",
    "mermaid": "text",
}


def truncate(text: str, max_len: int = 100) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def format_config_field(config_field: ConfigField) -> Text:
    """One config field as label, value and type, followed by its choices for select fields."""
    text = Text()
    text.append(f"{config_field.label}: ", style="bold")
    text.append(f"{config_field.value!r}", style="white")
    text.append(f"  ({config_field.type})\n", style="dim")
    for label, value in config_field.options:
        selected = value == config_field.value
        text.append("    ● " if selected else "    ○ ", style="green" if selected else "dim")
        text.append(label or value, style="bold" if selected else "")
        if label and value != label:
            text.append(f"  {value}", style="dim")
        text.append("\n")
    return text


class PaletteEntryItem(ListItem):
    """List item for one palette row."""

    def __init__(self, entry: PaletteEntry):
        super().__init__()
        self.entry = entry
        self._static: Optional[Static] = None

    def compose(self) -> ComposeResult:
        self._static = Static(self._build_text(100))
        yield self._static

    def on_resize(self, event) -> None:
        """Update text when resized."""
        if self._static:
            self._static.update(self._build_text(self.size.width))

    def _build_text(self, width: int) -> Text:
        """Build the display text based on available width."""
        heading = GROUP_HEADINGS.get(self.entry.group, self.entry.group)

        text = Text()
        text.append(f"{heading[:10]:<10}", style="cyan")
        text.append(" │ ", style="dim")

        prefix_width = 17  # heading(10) + sep(3) + padding(4)
        if self.entry.is_active:
            text.append("✓ ", style="green bold")
            prefix_width += 2

        detail = self.entry.detail
        detail_width = min(len(detail), max(0, width // 3))
        label_width = max(10, width - prefix_width - detail_width - 3)
        label = (self.entry.label or "").replace("\n", " ").strip()
        text.append(truncate(label, label_width), style="bold white")

        if detail_width:
            text.append(" │ ", style="dim")
            text.append(truncate(detail, detail_width), style="dim")

        return text


class ContextPanel(ScrollableContainer, can_focus=True):
    """Scrollable side panel showing the active artifact."""

    def __init__(self, id: str = None):
        super().__init__(id=id)
        self.artifact: Optional[Artifact] = None

    def update(self, content) -> None:
        """Replace all content."""
        for child in list(self.children):
            child.remove()
        self.mount(Static(content, markup=False))

    def show_artifact(self, artifact: Artifact, view_mode: ViewMode, snapshot: Snapshot):
        """Render an artifact in the given view mode."""
        self.artifact = artifact

        text = Text()
        text.append(f"━━━ {get_artifact_title(artifact)} ━━━", style="bold cyan")
        type_label = get_artifact_type_label(artifact)
        if type_label:
            text.append(f"  [{type_label}]", style="yellow bold")
        text.append("\n\n")

        if isinstance(artifact, ContentPreviewArtifact) and view_mode == CODE and should_show_code_toggle(artifact):
            self.update(text)
            lexer = _LEXERS.get(artifact.content_type, "text")
            self.mount(Static(Syntax(artifact.code, lexer, line_numbers=True, word_wrap=True)))
            return

        if isinstance(artifact, SourceArtifact):
            self._describe_source(text, artifact, snapshot)
        elif isinstance(artifact, SkillArtifact):
            self._describe_skill(text, artifact, snapshot)
        elif isinstance(artifact, SessionMetaArtifact):
            self._describe_session(text, artifact, snapshot)
        elif isinstance(artifact, SettingsPreviewArtifact):
            text.append("Setting: ", style="bold")
            text.append(f"{artifact.setting_key}\n")
            text.append("Current: ", style="bold")
            text.append(f"{artifact.current_value!r}\n", style="dim")
            text.append("New: ", style="bold")
            text.append(f"{artifact.new_value!r}\n", style="green")
        elif isinstance(artifact, MultiFieldConfigArtifact):
            for config_field in artifact.fields:
                text.append_text(format_config_field(config_field))
        elif isinstance(artifact, ContentPreviewArtifact):
            text.append(f"{len(artifact.code)} characters\n", style="dim")
            if should_show_code_toggle(artifact):
                text.append("\nPress ", style="dim")
                text.append("Ctrl+T", style="bold")
                text.append(" to view source", style="dim")

        self.update(text)

    def _describe_source(self, text: Text, artifact: SourceArtifact, snapshot: Snapshot):
        source = find_source(snapshot.sources, artifact.source_slug)
        if source is None:
            text.append("Source not found\n", style="dim")
            return
        text.append("Name: ", style="bold")
        text.append(f"{source.name}\n")
        text.append("Type: ", style="bold")
        text.append(f"{source.type_label}\n", style="yellow")
        text.append("Status: ", style="bold")
        if source.enabled:
            text.append("Enabled\n", style="green")
        else:
            text.append("Disabled\n", style="red")
        text.append("Slug: ", style="bold")
        text.append(f"{source.slug}\n", style="dim")

    def _describe_skill(self, text: Text, artifact: SkillArtifact, snapshot: Snapshot):
        skill = find_skill(snapshot.skills, artifact.skill_slug)
        if skill is None:
            text.append("Skill not found\n", style="dim")
            return
        text.append(f"{skill.metadata.name}\n", style="bold white")
        text.append("Source: ", style="bold")
        text.append(f"{skill.source_label}\n", style="cyan")
        if skill.metadata.description:
            text.append(f"\n{skill.metadata.description}\n")
        if skill.metadata.required_sources:
            text.append("\nRequires: ", style="bold")
            text.append(", ".join(skill.metadata.required_sources) + "\n", style="yellow")
        if skill.metadata.globs:
            text.append("Globs: ", style="bold")
            text.append(", ".join(skill.metadata.globs) + "\n", style="dim")

    def _describe_session(self, text: Text, artifact: SessionMetaArtifact, snapshot: Snapshot):
        session = snapshot.sessions.get(artifact.session_id)
        if session is None:
            text.append("Session not found\n", style="dim")
            return
        text.append("Name: ", style="bold")
        text.append(f"{truncate(session.name or session.preview or 'Untitled', 60)}\n")
        text.append("Last message: ", style="bold")
        if session.last_message_at:
            stamp = datetime.fromtimestamp(session.last_message_at / 1000)
            text.append(f"{stamp.strftime('%Y-%m-%d %H:%M:%S')}\n")
        else:
            text.append("Unknown\n", style="dim")
        text.append("Session ID: ", style="bold")
        text.append(f"{session.id}\n", style="dim")

    def clear_display(self):
        """Clear the display."""
        self.artifact = None
        self.update(Text("Select a source, skill or session to view details", style="dim"))
