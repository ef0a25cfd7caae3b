"""CSS styles for the palette TUI."""

APP_CSS = """
#search-input {
    height: 3;
    border: solid $warning;
    padding: 0 1;
}

#main-container {
    height: 1fr;
}

#list-container {
    width: 55%;
    height: 100%;
    border: solid $primary;
}

#panel-container {
    width: 45%;
    height: 100%;
    border: solid $secondary;
    padding: 1;
}

#entry-list {
    height: 1fr;
}

.list-header {
    height: auto;
    background: $surface;
    padding: 0 1;
    text-style: bold;
    color: $primary;
}

#context-panel {
    height: 100%;
    overflow-y: auto;
    scrollbar-gutter: stable;
}

#context-panel:focus {
    border: solid $success;
}

PaletteEntryItem {
    height: 1;
    padding: 0 1;
}

PaletteEntryItem:hover {
    background: $surface-lighten-1;
}

ListView:focus > ListItem.-active {
    background: $primary-darken-1;
}

ListView.-has-focus > ListItem.-active {
    background: $primary;
}

Footer {
    background: $surface;
}
"""
