"""Go-to-anything palette TUI application."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, ListView, Static

from .artifacts import Artifact, SessionMetaArtifact, SkillArtifact, SourceArtifact
from .entries import build_palette_entries, filter_palette_entries
from .models import PaletteEntry, Snapshot
from .palette import (
    build_palette_model,
    can_select_visible_root_session,
    can_select_workspace,
    get_setting_prompt,
)
from .panel import PREVIEW, ViewMode, next_view_mode_after_artifact_change, should_show_code_toggle, toggle_view_mode
from .ui import APP_CSS, ContextPanel, PaletteEntryItem


class PaletteBrowser(App):
    """Command palette over sessions, sources, skills, settings and workspaces.

    Exits with the chat prompt to send (for settings and new sessions) or
    None when the user quits.
    """

    CSS = APP_CSS

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("escape", "clear_search", "Clear"),
        Binding("ctrl+t", "toggle_view", "Preview/Code", priority=True),
        Binding("ctrl+w", "close_panel", "Close Panel"),
        Binding("down", "focus_list", "List", show=False),
    ]

    def __init__(self, snapshot: Snapshot, max_results_per_group: Optional[int] = None):
        super().__init__()
        self.snapshot = snapshot
        self.max_results_per_group = max_results_per_group
        self.active_workspace_id = snapshot.active_workspace_id

        self._query = ""
        self._entries: tuple[PaletteEntry, ...] = ()

        # Context panel state
        self.artifact: Optional[Artifact] = None
        self.view_mode: ViewMode = PREVIEW

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Input(placeholder="Search sessions, sources, settings...", id="search-input")
        with Horizontal(id="main-container"):
            with Vertical(id="list-container"):
                yield Static("[bold]Go to[/] [dim](Enter to select)[/]", classes="list-header")
                yield ListView(id="entry-list")
            with Vertical(id="panel-container"):
                yield ContextPanel(id="context-panel")
        yield Footer()

    def on_mount(self):
        self.title = "Go to Anything"
        self._refresh_entries()
        if self.snapshot.artifact is not None:
            self._set_artifact(self.snapshot.artifact)
        else:
            self.query_one("#context-panel", ContextPanel).clear_display()
        self.query_one("#search-input", Input).focus()

    @on(Input.Changed, "#search-input")
    def _on_search_changed(self, event: Input.Changed):
        self._query = event.value
        self._refresh_entries()

    @on(Input.Submitted, "#search-input")
    def _on_search_submitted(self, event: Input.Submitted):
        if self._entries:
            self._activate(self._entries[0])

    @on(ListView.Selected, "#entry-list")
    def _on_entry_selected(self, event: ListView.Selected):
        if isinstance(event.item, PaletteEntryItem):
            self._activate(event.item.entry)

    def _refresh_entries(self):
        """Recompute the model from the current snapshot and repopulate the list."""
        model = build_palette_model(
            self.snapshot.sessions,
            self.snapshot.sources,
            self.snapshot.skills,
            self.snapshot.workspaces,
            self.active_workspace_id,
            self.max_results_per_group,
        )
        entries = build_palette_entries(model, self.active_workspace_id)
        self._entries = filter_palette_entries(entries, self._query)

        entry_list = self.query_one("#entry-list", ListView)
        entry_list.clear()
        for entry in self._entries:
            entry_list.append(PaletteEntryItem(entry))
        if not self._entries:
            self.sub_title = "No results found."
        else:
            self.sub_title = f"{len(self._entries)} results"

    def _activate(self, entry: PaletteEntry):
        """Act on a selected entry after re-checking it against the snapshot."""
        if entry.group == "session":
            if not can_select_visible_root_session(self.snapshot.sessions, entry.key):
                self.notify("That session is no longer available", severity="warning")
                return
            self._set_artifact(SessionMetaArtifact(entry.key))
        elif entry.group == "source":
            self._set_artifact(SourceArtifact(entry.key))
        elif entry.group == "skill":
            self._set_artifact(SkillArtifact(entry.key))
        elif entry.group == "setting":
            self.exit(get_setting_prompt(entry.key))
        elif entry.group == "workspace":
            if not can_select_workspace(self.snapshot.workspaces, entry.key):
                self.notify("That workspace is no longer available", severity="warning")
                return
            self.active_workspace_id = entry.key
            self.notify(f"Switched to {entry.label}")
            self._refresh_entries()
        elif entry.group == "action":
            self._run_action(entry.key)
        else:
            logger.warning("Unknown palette group %s", entry.group)

    def _run_action(self, key: str):
        if key == "new-session":
            self.exit("")
        elif key == "toggle-theme":
            self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"
        elif key == "logout":
            self.exit(None)

    def _set_artifact(self, artifact: Artifact):
        """Show an artifact, keeping the view mode only if it is the same artifact."""
        self.view_mode = next_view_mode_after_artifact_change(self.artifact, artifact, self.view_mode)
        self.artifact = artifact
        self._render_panel()

    def _render_panel(self):
        panel = self.query_one("#context-panel", ContextPanel)
        if self.artifact is None:
            panel.clear_display()
        else:
            panel.show_artifact(self.artifact, self.view_mode, self.snapshot)

    def action_toggle_view(self):
        if self.artifact is None or not should_show_code_toggle(self.artifact):
            return
        self.view_mode = toggle_view_mode(self.artifact, self.view_mode)
        self._render_panel()

    def action_close_panel(self):
        self.artifact = None
        self._render_panel()

    def action_clear_search(self):
        search = self.query_one("#search-input", Input)
        if search.value:
            search.value = ""
        search.focus()

    def action_focus_list(self):
        self.query_one("#entry-list", ListView).focus()
