"""
Rule registry.

Loads the packaged framework rule data (rules/data/*.yaml) into an
immutable RuleRegistry. The registry is built explicitly and handed to
the detector and composer, so tests can run side by side with
different registries.

DATA FILES
==========

common.yaml carries the framework-agnostic rule text, the common
deduction catalog and the deduction families used by the extended
review catalog. Every other file describes one framework:

    name: nextjs               # must be a Framework value
    display_name: Next.js
    detection: [next.config.js, ...]
    rules: |
      ...
    deductions:
      - {code: NEXT-1, description: ..., points: 8, category: framework}
    agents:
      default: [yoom-bot, ...]
      full: [yoom-bot, ...]
    testing:                   # optional
      framework: playwright
      command: npx playwright test
      directory: e2e
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from yoom.rules.types import (
    AgentRoster,
    Deduction,
    DeductionFamily,
    Framework,
    FrameworkConfig,
    TestDescriptor,
    parse_framework,
)

logger = logging.getLogger(__name__)

COMMON_FILE = "common.yaml"


class RegistryError(Exception):
    """Packaged rule data is missing or inconsistent."""


@dataclass(frozen=True)
class RuleRegistry:
    """Immutable lookup of framework configs plus the common rule set."""
    common_rules: str
    common_deductions: tuple[Deduction, ...]
    families: tuple[DeductionFamily, ...]
    frameworks: Mapping[Framework, FrameworkConfig]

    def get(self, name: str | Framework | None) -> FrameworkConfig | None:
        """Look up a framework config by enum or name. Unknown names give None."""
        if isinstance(name, Framework):
            return self.frameworks.get(name)
        fw = parse_framework(name)
        if fw is None:
            return None
        return self.frameworks.get(fw)

    def __contains__(self, name) -> bool:
        return self.get(name) is not None

    def names(self) -> list[str]:
        """Framework names in enum order."""
        return [fw.value for fw in Framework if fw in self.frameworks]

    def configs(self) -> list[FrameworkConfig]:
        return [self.frameworks[fw] for fw in Framework if fw in self.frameworks]


def _get_data_dir() -> Path:
    """Get path to the packaged rule data."""
    return Path(__file__).parent / "data"


def _read_yaml(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise RegistryError(f"Invalid YAML in {path}: {e}") from None
    if not isinstance(data, dict):
        raise RegistryError(f"{path} must contain a mapping")
    return data


def _parse_deductions(entries: list | None, source: str) -> tuple[Deduction, ...]:
    deductions = []
    for entry in entries or []:
        try:
            deductions.append(Deduction(
                code=str(entry["code"]),
                description=str(entry["description"]),
                points=int(entry["points"]),
                category=str(entry["category"]),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise RegistryError(f"Bad deduction entry in {source}: {entry!r} ({e})") from None
    return tuple(deductions)


def _check_unique_codes(deductions: tuple[Deduction, ...], source: str) -> None:
    seen: set[str] = set()
    for d in deductions:
        if d.code in seen:
            raise RegistryError(f"Duplicate deduction code '{d.code}' in {source}")
        seen.add(d.code)


def _parse_framework_config(data: dict, source: str) -> FrameworkConfig:
    fw = parse_framework(data.get("name"))
    if fw is None:
        raise RegistryError(f"Unknown framework name {data.get('name')!r} in {source}")

    agents = data.get("agents") or {}
    testing = data.get("testing")
    try:
        return FrameworkConfig(
            name=fw,
            display_name=str(data.get("display_name", fw.value)),
            detection=tuple(data.get("detection") or ()),
            rules=str(data.get("rules", "")),
            deductions=_parse_deductions(data.get("deductions"), source),
            agents=AgentRoster(
                default=tuple(agents.get("default") or ()),
                full=tuple(agents.get("full") or ()),
            ),
            testing=TestDescriptor(
                framework=str(testing["framework"]),
                command=str(testing["command"]),
                directory=str(testing["directory"]),
            ) if testing else None,
        )
    except (KeyError, TypeError) as e:
        raise RegistryError(f"Bad framework config in {source}: {e}") from None


def load_registry(data_dir: Path | None = None) -> RuleRegistry:
    """Build a RuleRegistry from a rule data directory.

    Args:
        data_dir: Directory holding common.yaml and one YAML file per
            framework. Defaults to the packaged data.

    Raises:
        RegistryError: If a file is missing or malformed, a Framework member
            has no config, or deduction codes collide.
    """
    data_dir = data_dir or _get_data_dir()
    common_path = data_dir / COMMON_FILE
    if not common_path.exists():
        raise RegistryError(f"Common rules not found: {common_path}")

    common = _read_yaml(common_path)
    common_deductions = _parse_deductions(common.get("deductions"), str(common_path))
    _check_unique_codes(common_deductions, str(common_path))

    families = []
    for fam in common.get("families") or []:
        families.append(DeductionFamily(
            name=str(fam["name"]),
            deductions=_parse_deductions(fam.get("deductions"), f"{common_path} ({fam['name']})"),
            frameworks=tuple(fam.get("frameworks") or ()),
            always=bool(fam.get("always", False)),
        ))

    frameworks: dict[Framework, FrameworkConfig] = {}
    for path in sorted(data_dir.glob("*.yaml")):
        if path.name == COMMON_FILE:
            continue
        config = _parse_framework_config(_read_yaml(path), str(path))
        if config.name in frameworks:
            raise RegistryError(f"Framework '{config.name.value}' defined twice ({path})")
        # Common codes come first in every combined catalog
        _check_unique_codes(common_deductions + config.deductions, str(path))
        frameworks[config.name] = config

    missing = [fw.value for fw in Framework if fw not in frameworks]
    if missing:
        raise RegistryError(f"No rule data for frameworks: {missing}")

    logger.debug(f"[RULES] Loaded {len(frameworks)} frameworks from {data_dir}")
    return RuleRegistry(
        common_rules=str(common.get("rules", "")),
        common_deductions=common_deductions,
        families=tuple(families),
        frameworks=MappingProxyType(frameworks),
    )


@lru_cache(maxsize=1)
def default_registry() -> RuleRegistry:
    """Registry built from the packaged data, loaded once per process."""
    return load_registry()


def get_framework_config(name: str, registry: RuleRegistry | None = None) -> FrameworkConfig | None:
    """Look up a framework config by name. Returns None if unknown."""
    return (registry if registry is not None else default_registry()).get(name)
