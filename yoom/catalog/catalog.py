"""
Builtin skill and agent catalog.

Metadata only: names, descriptions and the model/tool hints hosts need
to list or display skills and agents. Prompt bodies are not part of
the catalog.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

SKILLS_FILE = "skills.yaml"
AGENTS_FILE = "agents.yaml"


class CatalogError(Exception):
    """Packaged catalog data is missing or malformed."""


@dataclass(frozen=True)
class Skill:
    name: str
    description: str


@dataclass(frozen=True)
class AgentInfo:
    """Metadata for one builtin agent."""
    name: str
    description: str
    alias: Optional[str] = None
    category: Optional[str] = None  # specialist, reviewer, utility, orchestration
    cost: Optional[str] = None  # FREE, CHEAP, EXPENSIVE
    model: Optional[str] = None
    tools: tuple[str, ...] = ()


@dataclass(frozen=True)
class BuiltinCatalog:
    """Immutable lookup of builtin skills and agents."""
    skills: Mapping[str, Skill]
    agents: Mapping[str, AgentInfo]

    def skill(self, name: str) -> Skill | None:
        """Look up a skill by name, ignoring case."""
        return self.skills.get(name.lower())

    def skill_names(self) -> list[str]:
        return list(self.skills)

    def agent(self, name: str) -> AgentInfo | None:
        return self.agents.get(name)

    def agent_names(self) -> list[str]:
        return list(self.agents)

    def display_name(self, agent_id: str) -> str:
        """Alias for an agent id, or the id itself if unknown."""
        info = self.agents.get(agent_id)
        if info is None or not info.alias:
            return agent_id
        return info.alias


def _get_data_dir() -> Path:
    return Path(__file__).parent / "data"


def _read_entries(path: Path, key: str) -> list[dict]:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from None
    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        raise CatalogError(f"{path} must contain a '{key}' list")
    return data[key]


def load_catalog(data_dir: Path | None = None) -> BuiltinCatalog:
    """Build a BuiltinCatalog from a catalog data directory.

    Raises:
        CatalogError: If a file is missing or malformed, or a name repeats.
    """
    data_dir = data_dir or _get_data_dir()

    skills: dict[str, Skill] = {}
    for entry in _read_entries(data_dir / SKILLS_FILE, "skills"):
        try:
            skill = Skill(name=str(entry["name"]), description=str(entry["description"]))
        except (KeyError, TypeError) as e:
            raise CatalogError(f"Bad skill entry: {entry!r} ({e})") from None
        key = skill.name.lower()
        if key in skills:
            raise CatalogError(f"Duplicate skill '{skill.name}'")
        skills[key] = skill

    agents: dict[str, AgentInfo] = {}
    for entry in _read_entries(data_dir / AGENTS_FILE, "agents"):
        try:
            info = AgentInfo(
                name=str(entry["name"]),
                description=str(entry["description"]),
                alias=entry.get("alias"),
                category=entry.get("category"),
                cost=entry.get("cost"),
                model=entry.get("model"),
                tools=tuple(entry.get("tools") or ()),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise CatalogError(f"Bad agent entry: {entry!r} ({e})") from None
        if info.name in agents:
            raise CatalogError(f"Duplicate agent '{info.name}'")
        agents[info.name] = info

    logger.debug(f"[CATALOG] Loaded {len(skills)} skills and {len(agents)} agents from {data_dir}")
    return BuiltinCatalog(skills=MappingProxyType(skills), agents=MappingProxyType(agents))


@lru_cache(maxsize=1)
def default_catalog() -> BuiltinCatalog:
    """Catalog built from the packaged data, loaded once per process."""
    return load_catalog()
