"""
Data models for Yoom sessions.

Attributes are snake_case; to_dict()/from_dict() map them to the
camelCase keys of the JSON block stored in .yoom-session.md. Optional
keys are omitted when absent so that a loaded session saves back to
the same bytes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from yoom.lib.constants import DEFAULT_SCOPE, SESSION_VERSION


class FeatureStep(str, Enum):
    """One stage of the per-feature development sequence."""

    DESIGN = "DESIGN"
    DEVELOP = "DEVELOP"
    REVIEW = "REVIEW"
    TEST = "TEST"
    REFACTOR = "REFACTOR"
    DOCUMENT = "DOCUMENT"
    COMMIT = "COMMIT"


class FeatureStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


STANDARD_STEPS: tuple[FeatureStep, ...] = (
    FeatureStep.DEVELOP,
    FeatureStep.REVIEW,
    FeatureStep.TEST,
    FeatureStep.REFACTOR,
    FeatureStep.DOCUMENT,
    FeatureStep.COMMIT,
)

EXTENDED_STEPS: tuple[FeatureStep, ...] = (FeatureStep.DESIGN,) + STANDARD_STEPS

WORKFLOW_STEPS: dict[str, tuple[FeatureStep, ...]] = {
    "standard": STANDARD_STEPS,
    "extended": EXTENDED_STEPS,
}

STEP_DESCRIPTIONS: dict[FeatureStep, str] = {
    FeatureStep.DESIGN: "Designing interfaces and structure",
    FeatureStep.DEVELOP: "Implementing feature code",
    FeatureStep.REVIEW: "Code review and evaluation",
    FeatureStep.TEST: "Writing and running tests",
    FeatureStep.REFACTOR: "Converting to declarative patterns",
    FeatureStep.DOCUMENT: "Creating documentation",
    FeatureStep.COMMIT: "Creating git commit",
}


def steps_for_workflow(workflow: str) -> tuple[FeatureStep, ...]:
    """Step sequence for a workflow name (unknown names use the standard one)."""
    return WORKFLOW_STEPS.get(workflow, STANDARD_STEPS)


def next_step(
    current: FeatureStep,
    steps: tuple[FeatureStep, ...] = STANDARD_STEPS,
    completed: list[FeatureStep] | None = None,
) -> FeatureStep | None:
    """Step after `current` in the sequence, or None after the last one.

    Steps already in `completed` are passed over.
    """
    if current not in steps:
        return None
    done = set(completed or ())
    for step in steps[steps.index(current) + 1:]:
        if step not in done:
            return step
    return None


def step_description(step: FeatureStep) -> str:
    return STEP_DESCRIPTIONS[step]


@dataclass
class DiscoveryResult:
    """Answers gathered in the initial interview."""
    purpose: str  # production, portfolio, learning
    tech_stack: list[str] = field(default_factory=list)
    constraints: list[str] = field(default_factory=list)
    requirements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "purpose": self.purpose,
            "techStack": list(self.tech_stack),
            "constraints": list(self.constraints),
            "requirements": list(self.requirements),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DiscoveryResult":
        return cls(
            purpose=data["purpose"],
            tech_stack=list(data.get("techStack", [])),
            constraints=list(data.get("constraints", [])),
            requirements=list(data.get("requirements", [])),
        )


@dataclass
class YoomFeature:
    """One planned unit of work, tracked through the step sequence."""
    name: str
    description: str
    status: FeatureStatus = FeatureStatus.PENDING
    current_step: Optional[FeatureStep] = None
    completed_steps: list[FeatureStep] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    # True once the feature has been begun; being the current feature
    # does not make it started.
    started: bool = False

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "started": self.started,
        }
        if self.current_step is not None:
            data["currentStep"] = self.current_step.value
        data["completedSteps"] = [s.value for s in self.completed_steps]
        data["notes"] = list(self.notes)
        data["createdAt"] = self.created_at
        data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "YoomFeature":
        status = FeatureStatus(data["status"])
        current = data.get("currentStep")
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            status=status,
            current_step=FeatureStep(current) if current else None,
            completed_steps=[FeatureStep(s) for s in data.get("completedSteps", [])],
            notes=list(data.get("notes", [])),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
            # Files written before the flag existed: anything past pending was started
            started=data.get("started", status != FeatureStatus.PENDING),
        )


@dataclass
class SessionConfig:
    """Choices made when the session was created."""
    project_type: str  # new, existing
    framework: str
    mode: str  # full, custom
    agents: list[str] = field(default_factory=list)
    scope: str = DEFAULT_SCOPE  # all, backend, frontend or a path
    workflow: str = "standard"  # standard, extended

    @property
    def steps(self) -> tuple[FeatureStep, ...]:
        return steps_for_workflow(self.workflow)

    def to_dict(self) -> dict:
        data = {
            "projectType": self.project_type,
            "framework": self.framework,
            "mode": self.mode,
            "agents": list(self.agents),
            "scope": self.scope,
        }
        if self.workflow != "standard":
            data["workflow"] = self.workflow
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SessionConfig":
        return cls(
            project_type=data["projectType"],
            framework=data["framework"],
            mode=data["mode"],
            agents=list(data.get("agents", [])),
            scope=data.get("scope", DEFAULT_SCOPE),
            workflow=data.get("workflow", "standard"),
        )


@dataclass
class YoomSession:
    """Root aggregate persisted in .yoom-session.md."""
    created_at: str
    last_activity_at: str
    config: SessionConfig
    features: list[YoomFeature] = field(default_factory=list)
    current_feature_index: int = -1
    notes: list[str] = field(default_factory=list)
    discovery: Optional[DiscoveryResult] = None
    version: str = SESSION_VERSION

    @property
    def current_feature(self) -> Optional[YoomFeature]:
        if 0 <= self.current_feature_index < len(self.features):
            return self.features[self.current_feature_index]
        return None

    def count(self, status: FeatureStatus) -> int:
        return sum(1 for f in self.features if f.status == status)

    def to_dict(self) -> dict:
        data = {
            "version": self.version,
            "createdAt": self.created_at,
            "lastActivityAt": self.last_activity_at,
            "config": self.config.to_dict(),
        }
        if self.discovery is not None:
            data["discovery"] = self.discovery.to_dict()
        data["features"] = [f.to_dict() for f in self.features]
        data["currentFeatureIndex"] = self.current_feature_index
        data["notes"] = list(self.notes)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "YoomSession":
        discovery = data.get("discovery")
        return cls(
            version=data["version"],
            created_at=data["createdAt"],
            last_activity_at=data["lastActivityAt"],
            config=SessionConfig.from_dict(data["config"]),
            discovery=DiscoveryResult.from_dict(discovery) if discovery else None,
            features=[YoomFeature.from_dict(f) for f in data.get("features", [])],
            current_feature_index=int(data.get("currentFeatureIndex", -1)),
            notes=list(data.get("notes", [])),
        )
