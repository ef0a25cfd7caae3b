"""Load palette input snapshots from JSON files.

The document looks like::

    {
      "sessions": [{"id": "s1", "name": "One", "lastMessageAt": 20}],
      "sources": [{"slug": "alpha", "name": "Alpha", "type": "mcp"}],
      "skills": [{"slug": "beta", "metadata": {"name": "Beta"}}],
      "workspaces": [{"id": "w1", "name": "Alpha"}],
      "activeWorkspaceId": "w1",
      "artifact": {"kind": "content-preview", "contentType": "html", "title": "Page", "code": "<p/>"}
    }

``artifact`` is optional and opens in the side panel on start.

Keys may be camelCase or snake_case.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from .artifacts import (
    Artifact,
    ConfigField,
    ContentPreviewArtifact,
    MultiFieldConfigArtifact,
    SessionMetaArtifact,
    SettingsPreviewArtifact,
    SkillArtifact,
    SourceArtifact,
)
from .models import SessionMeta, Skill, SkillMetadata, Snapshot, SourceConfig, WorkspaceOption

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or is malformed."""


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _normalize(record: Any, kind: str) -> dict:
    if not isinstance(record, dict):
        raise SnapshotError(f"Expected an object in {kind}, got {type(record).__name__}")
    return {_snake(k): v for k, v in record.items()}


def _records(data: dict, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotError(f"Expected a list for '{key}', got {type(value).__name__}")
    return value


def _require(data: dict, key: str, kind: str) -> str:
    value = data.get(key)
    if not value:
        raise SnapshotError(f"{kind} entry is missing '{key}'")
    if not isinstance(value, str):
        raise SnapshotError(f"{kind} '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(data: dict, key: str, kind: str, default=None):
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise SnapshotError(f"{kind} '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_int(data: dict, key: str, kind: str):
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass but never a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise SnapshotError(f"{kind} '{key}' must be an integer, got {type(value).__name__}")
    return value


def _str_list(data: dict, key: str, kind: str) -> list[str]:
    values = _records(data, key)
    if not all(isinstance(v, str) for v in values):
        raise SnapshotError(f"{kind} '{key}' must be a list of strings")
    return list(values)


def parse_session(record: Any) -> SessionMeta:
    data = _normalize(record, "sessions")
    return SessionMeta(
        id=_require(data, "id", "Session"),
        workspace_id=_optional_str(data, "workspace_id", "Session", ""),
        name=_optional_str(data, "name", "Session"),
        preview=_optional_str(data, "preview", "Session"),
        last_message_at=_optional_int(data, "last_message_at", "Session"),
        hidden=bool(data.get("hidden", False)),
        is_archived=bool(data.get("is_archived", False)),
        parent_session_id=_optional_str(data, "parent_session_id", "Session"),
    )


def parse_source(record: Any) -> SourceConfig:
    data = _normalize(record, "sources")
    # Sources may come wrapped as {"config": {...}, "isBuiltin": true}
    config = _normalize(data["config"], "sources") if "config" in data else data
    return SourceConfig(
        slug=_require(config, "slug", "Source"),
        name=_optional_str(config, "name", "Source", ""),
        type=_optional_str(config, "type", "Source") or "mcp",
        enabled=bool(config.get("enabled", True)),
        is_builtin=bool(data.get("is_builtin", config.get("is_builtin", False))),
    )


def parse_skill(record: Any) -> Skill:
    data = _normalize(record, "skills")
    meta = _normalize(data.get("metadata") or {}, "skills")
    return Skill(
        slug=_require(data, "slug", "Skill"),
        metadata=SkillMetadata(
            name=_optional_str(meta, "name", "Skill", ""),
            description=_optional_str(meta, "description", "Skill", ""),
            globs=_str_list(meta, "globs", "Skill"),
            always_allow=_str_list(meta, "always_allow", "Skill"),
            required_sources=_str_list(meta, "required_sources", "Skill"),
        ),
        source=_optional_str(data, "source", "Skill") or "global",
    )


def parse_workspace(record: Any) -> WorkspaceOption:
    data = _normalize(record, "workspaces")
    return WorkspaceOption(
        id=_require(data, "id", "Workspace"),
        name=_optional_str(data, "name", "Workspace", ""),
    )


def parse_config_field(record: Any) -> ConfigField:
    data = _normalize(record, "fields")
    key = _require(data, "key", "Field")
    field_type = _optional_str(data, "type", "Field") or "text"
    if field_type not in ("text", "select", "toggle"):
        raise SnapshotError(f"Unsupported field type: {field_type!r}")

    options = []
    for option in _records(data, "options"):
        option = _normalize(option, "options")
        options.append((
            _optional_str(option, "label", "Option", ""),
            _optional_str(option, "value", "Option", ""),
        ))

    return ConfigField(
        key=key,
        label=_optional_str(data, "label", "Field") or key,
        type=field_type,
        value=data.get("value"),
        options=tuple(options),
    )


def parse_artifact(record: Any) -> Artifact:
    data = _normalize(record, "artifact")
    kind = data.get("kind")
    if kind == "source":
        return SourceArtifact(_require(data, "source_slug", "Source artifact"))
    if kind == "skill":
        return SkillArtifact(_require(data, "skill_slug", "Skill artifact"))
    if kind == "session-meta":
        return SessionMetaArtifact(_require(data, "session_id", "Session artifact"))
    if kind == "settings-preview":
        return SettingsPreviewArtifact(
            setting_key=_require(data, "setting_key", "Settings artifact"),
            current_value=data.get("current_value"),
            new_value=data.get("new_value"),
        )
    if kind == "multi-field-config":
        return MultiFieldConfigArtifact(
            title=_optional_str(data, "title", "Config artifact", ""),
            fields=tuple(parse_config_field(f) for f in _records(data, "fields")),
        )
    if kind == "content-preview":
        content_type = data.get("content_type")
        if content_type not in ("html", "mermaid", "pdf"):
            raise SnapshotError(f"Unsupported content type: {content_type!r}")
        return ContentPreviewArtifact(
            content_type=content_type,
            title=_optional_str(data, "title", "Content artifact", ""),
            code=_optional_str(data, "code", "Content artifact", ""),
        )
    raise SnapshotError(f"Unknown artifact kind: {kind!r}")


def parse_snapshot(document: Any) -> Snapshot:
    """Build a Snapshot from an already-decoded JSON document."""
    data = _normalize(document, "snapshot")

    sessions: dict[str, SessionMeta] = {}
    for record in _records(data, "sessions"):
        session = parse_session(record)
        if session.id in sessions:
            logger.warning("Duplicate session id %s in snapshot, keeping the last one", session.id)
        sessions[session.id] = session

    return Snapshot(
        sessions=sessions,
        sources=[parse_source(r) for r in _records(data, "sources")],
        skills=[parse_skill(r) for r in _records(data, "skills")],
        workspaces=[parse_workspace(r) for r in _records(data, "workspaces")],
        active_workspace_id=_optional_str(data, "active_workspace_id", "Snapshot"),
        artifact=parse_artifact(data["artifact"]) if data.get("artifact") else None,
    )


def load_snapshot(path: Path) -> Snapshot:
    """Read and parse a snapshot file."""
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SnapshotError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise SnapshotError(f"Cannot read {path}: {e}") from e

    snapshot = parse_snapshot(document)
    logger.debug(
        "Loaded snapshot %s: %d sessions, %d sources, %d skills, %d workspaces",
        path, len(snapshot.sessions), len(snapshot.sources), len(snapshot.skills), len(snapshot.workspaces),
    )
    return snapshot
