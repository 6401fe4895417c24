"""
Session file codec.

.yoom-session.md is a readable summary followed by one JSON block that
holds the full session. Only the JSON block is read back; the summary
is rebuilt from it on every save, so hand edits above the block are
harmless and a save of a loaded session reproduces the file exactly.
"""

import json
import logging
import re

from yoom.lib.constants import SESSION_DATA_MARKER
from yoom.session.models import FeatureStatus, YoomSession

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    FeatureStatus.COMPLETED: "✅",
    FeatureStatus.IN_PROGRESS: "🔄",
    FeatureStatus.PENDING: "⏳",
}

# The marker line followed by the fence. JSON strings never hold a raw
# newline, so this sequence cannot appear inside the data block itself.
_DATA_BLOCK_START = re.compile(r"^" + re.escape(SESSION_DATA_MARKER) + r"\n```json\n", re.MULTILINE)


def render_session_markdown(session: YoomSession) -> str:
    """Render the full file content for a session."""
    lines: list[str] = []

    lines.append("# Yoom Session")
    lines.append("")
    lines.append(f"> Created: {session.created_at}")
    lines.append(f"> Last Activity: {session.last_activity_at}")
    lines.append("")

    config = session.config
    lines.append("## Configuration")
    lines.append("")
    lines.append(f"- **Project Type**: {config.project_type}")
    lines.append(f"- **Framework**: {config.framework}")
    lines.append(f"- **Mode**: {config.mode}")
    lines.append(f"- **Scope**: {config.scope}")
    lines.append(f"- **Agents**: {', '.join(config.agents)}")
    if config.workflow != "standard":
        lines.append(f"- **Workflow**: {config.workflow}")
    lines.append("")

    if session.discovery is not None:
        discovery = session.discovery
        lines.append("## Discovery Results")
        lines.append("")
        lines.append(f"- **Purpose**: {discovery.purpose}")
        lines.append(f"- **Tech Stack**: {', '.join(discovery.tech_stack)}")
        if discovery.constraints:
            lines.append(f"- **Constraints**: {', '.join(discovery.constraints)}")
        if discovery.requirements:
            lines.append("- **Requirements**:")
            for req in discovery.requirements:
                lines.append(f"  - {req}")
        lines.append("")

    lines.append("## Features")
    lines.append("")
    if not session.features:
        lines.append("_No features defined yet._")
        lines.append("")
    for index, feature in enumerate(session.features):
        marker = ""
        if index == session.current_feature_index:
            marker = " 👈 CURRENT" if feature.started else " 👈 NEXT (not started)"

        lines.append(f"### {index + 1}. {feature.name}{marker}")
        lines.append("")
        lines.append(f"{STATUS_ICONS[feature.status]} **Status**: {feature.status.value}")
        if feature.current_step is not None:
            lines.append(f"📍 **Current Step**: {feature.current_step.value}")
        if feature.description:
            lines.append(f"📝 {feature.description}")
        lines.append("")

        if feature.completed_steps or feature.current_step is not None:
            lines.append("**Progress**:")
            for step in config.steps:
                if step in feature.completed_steps:
                    icon = "✅"
                elif step == feature.current_step:
                    icon = "🔄"
                else:
                    icon = "⬜"
                lines.append(f"- {icon} {step.value}")
            lines.append("")

        if feature.notes:
            lines.append("**Notes**:")
            for note in feature.notes:
                lines.append(f"- {note}")
            lines.append("")

    if session.notes:
        lines.append("## Session Notes")
        lines.append("")
        for note in session.notes:
            lines.append(f"- {note}")
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append(SESSION_DATA_MARKER)
    lines.append("```json")
    lines.append(json.dumps(session.to_dict(), indent=2, ensure_ascii=False))
    lines.append("```")

    return "\n".join(lines) + "\n"


def extract_session_data(content: str) -> dict | None:
    """Decode the authoritative JSON block from file content.

    Uses the last marker line that opens a JSON fence, so a marker or
    fenced JSON typed into a description or note is never mistaken for
    session data. Returns None if no block exists or it is not valid JSON.
    """
    starts = list(_DATA_BLOCK_START.finditer(content))
    if not starts:
        return None
    body_at = starts[-1].end()
    end = content.find("\n```", body_at)
    if end == -1:
        return None

    try:
        data = json.loads(content[body_at:end])
    except json.JSONDecodeError as e:
        logger.warning(f"[SESSION] Session data block is not valid JSON: {e}")
        return None
    return data if isinstance(data, dict) else None
