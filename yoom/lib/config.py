"""
Project configuration.

Loads yoom.yaml from the project root. Every key is optional; a missing
file gives an empty config and the caller falls back to detection and
built-in defaults. Precedence is CLI flag > yoom.yaml > detection.

    framework: nextjs        # skip detection
    mode: full               # full | custom
    scope: frontend
    agents: [yoom-bot, tester]
    workflow: extended       # standard | extended
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from yoom.lib.constants import PROJECT_CONFIG_FILE, VALID_MODES, VALID_WORKFLOWS

logger = logging.getLogger(__name__)


@dataclass
class YoomProjectConfig:
    """Project defaults from yoom.yaml."""
    framework: Optional[str] = None
    mode: Optional[str] = None
    scope: Optional[str] = None
    agents: Optional[list[str]] = None
    workflow: Optional[str] = None


def _choice(data: dict, key: str, allowed: tuple[str, ...], path: Path) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if value not in allowed:
        logger.warning(f"Ignoring {key}={value!r} in {path}: expected one of {list(allowed)}")
        return None
    return value


def load_project_config(project_dir: Optional[Path]) -> YoomProjectConfig:
    """Load yoom.yaml and return YoomProjectConfig.

    If project_dir is None or the file doesn't exist, returns defaults.
    """
    if project_dir is None:
        return YoomProjectConfig()

    config_path = Path(project_dir) / PROJECT_CONFIG_FILE
    if not config_path.exists():
        return YoomProjectConfig()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise TypeError("top level must be a mapping")
        agents = data.get("agents")
        return YoomProjectConfig(
            framework=str(data["framework"]) if data.get("framework") else None,
            mode=_choice(data, "mode", VALID_MODES, config_path),
            scope=str(data["scope"]) if data.get("scope") else None,
            agents=[str(a) for a in agents] if isinstance(agents, list) else None,
            workflow=_choice(data, "workflow", VALID_WORKFLOWS, config_path),
        )
    except (yaml.YAMLError, TypeError) as e:
        logger.warning(f"Failed to parse {config_path}: {e}")
        return YoomProjectConfig()
