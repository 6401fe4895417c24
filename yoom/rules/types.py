"""
Data types for framework rules.

All types here are frozen: a FrameworkConfig is built once from the
packaged rule data and then shared by the detector and the composer.
"""

from dataclasses import dataclass, field
from enum import Enum


class Framework(str, Enum):
    """Supported framework identifiers.

    Values match the `name` key of each file under rules/data.
    """

    TAURI = "tauri"
    ELECTRON = "electron"
    NEXTJS = "nextjs"
    LARAVEL = "laravel"
    RAILS = "rails"
    FASTAPI = "fastapi"
    AUTOMATION = "automation"


def parse_framework(name: str | None) -> Framework | None:
    """Parse a framework name into the enum.

    Returns None for None or unknown names.
    """
    if name is None:
        return None
    for fw in Framework:
        if fw.value == name:
            return fw
    return None


@dataclass(frozen=True)
class Deduction:
    """One scored rule violation in a review catalog."""
    code: str  # e.g. "PURE-1", "NEXT-3"
    description: str
    points: int
    category: str  # purity, unidirectional, declarative, debugging, structure, framework, ...


@dataclass(frozen=True)
class TestDescriptor:
    """How a framework's tests are run."""
    __test__ = False  # not a pytest class

    framework: str  # e.g. "playwright"
    command: str
    directory: str


@dataclass(frozen=True)
class AgentRoster:
    """Agent identifiers for the two session modes."""
    default: tuple[str, ...]
    full: tuple[str, ...]


@dataclass(frozen=True)
class FrameworkConfig:
    """Static configuration for one supported framework."""
    name: Framework
    display_name: str
    detection: tuple[str, ...]  # Marker paths relative to project root
    rules: str  # Rule text injected into prompts
    deductions: tuple[Deduction, ...]
    agents: AgentRoster
    testing: TestDescriptor | None = None


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one detection call. Never persisted."""
    framework: FrameworkConfig | None
    confidence: float  # 0.0, 0.8 or 1.0
    matched_markers: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.framework is not None


@dataclass(frozen=True)
class CombinedRules:
    """Common + framework rules and the active agent roster for a session."""
    common: str
    framework: str
    deductions: tuple[Deduction, ...]
    agents: tuple[str, ...]

    @property
    def total_points(self) -> int:
        """Maximum deduction weight, the denominator of the 0-100 review score."""
        return sum(d.points for d in self.deductions)


@dataclass(frozen=True)
class DeductionFamily:
    """A group of review deductions shared by several frameworks."""
    name: str
    deductions: tuple[Deduction, ...]
    frameworks: tuple[str, ...] = ()
    always: bool = False

    def applies_to(self, framework_name: str) -> bool:
        return self.always or framework_name in self.frameworks


@dataclass(frozen=True)
class FrameworkOption:
    """Selectable framework entry for prompts and CLI listings."""
    name: str
    display_name: str
    description: str = field(default="")
