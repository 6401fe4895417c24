"""
Yoom session state operations.

Every operation takes the project directory, loads the session from
disk, mutates it and saves it back. If there is no session, mutating
operations return None without writing anything; they never create a
session implicitly. Concurrent writers are not coordinated: the last
save wins.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from yoom.lib.constants import (
    DEFAULT_SCOPE,
    SESSION_VERSION,
    VALID_MODES,
    VALID_PROJECT_TYPES,
    VALID_WORKFLOWS,
)
from yoom.lib.timeutil import now_iso
from yoom.rules.compose import resolve_agents
from yoom.rules.registry import RuleRegistry
from yoom.session.fsm import FeatureLifecycle
from yoom.session.models import (
    DiscoveryResult,
    FeatureStatus,
    FeatureStep,
    SessionConfig,
    YoomFeature,
    YoomSession,
)
from yoom.session.store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class CreateSessionOptions:
    """Choices for a new session. agents/scope default from the framework."""
    project_type: str
    framework: str
    mode: str
    agents: Optional[list[str]] = None
    scope: Optional[str] = None
    workflow: str = "standard"


@dataclass
class NewFeature:
    name: str
    description: str = ""


@dataclass
class FeatureEdit:
    """Editable feature fields. Status and steps move only through the lifecycle."""
    name: Optional[str] = None
    description: Optional[str] = None
    add_note: Optional[str] = None


@dataclass
class SessionUpdate:
    """A batch of changes applied by update_session, in field order."""
    add_feature: Optional[NewFeature] = None
    update_feature_index: Optional[int] = None
    feature_update: Optional[FeatureEdit] = None
    set_current_feature: Optional[int] = None
    add_note: Optional[str] = None
    discovery: Optional[DiscoveryResult] = None


@dataclass
class StepResult:
    """Outcome of complete_current_step."""
    session: YoomSession
    next_step: Optional[FeatureStep]
    feature_completed: bool = False


def get_session_file_path(cwd: Path | str) -> Path:
    return SessionStore(cwd).path


def has_existing_session(cwd: Path | str) -> bool:
    """Check if a session file exists in the directory."""
    return SessionStore(cwd).exists()


def load_session(cwd: Path | str) -> YoomSession | None:
    """Load the session, or None if absent or unreadable as session data."""
    return SessionStore(cwd).load()


def save_session(cwd: Path | str, session: YoomSession) -> None:
    SessionStore(cwd).save(session)


def delete_session(cwd: Path | str) -> bool:
    """Delete the session file if present."""
    return SessionStore(cwd).delete()


def create_session(
    cwd: Path | str,
    options: CreateSessionOptions,
    registry: RuleRegistry | None = None,
) -> YoomSession:
    """Create and save a new session, replacing any existing one.

    Raises:
        ValueError: If project_type, mode or workflow is not a known value.
    """
    if options.project_type not in VALID_PROJECT_TYPES:
        raise ValueError(f"Unknown project type: {options.project_type}")
    if options.mode not in VALID_MODES:
        raise ValueError(f"Unknown mode: {options.mode}")
    if options.workflow not in VALID_WORKFLOWS:
        raise ValueError(f"Unknown workflow: {options.workflow}")

    store = SessionStore(cwd)
    if store.exists():
        logger.info(f"[SESSION] Replacing existing session in {store.path}")

    agents = options.agents
    if agents is None:
        agents = list(resolve_agents(options.framework, options.mode, registry))

    now = now_iso()
    session = YoomSession(
        version=SESSION_VERSION,
        created_at=now,
        last_activity_at=now,
        config=SessionConfig(
            project_type=options.project_type,
            framework=options.framework,
            mode=options.mode,
            agents=list(agents),
            scope=options.scope or DEFAULT_SCOPE,
            workflow=options.workflow,
        ),
    )

    store.save(session)
    logger.info(f"[SESSION] Created {options.framework}/{options.mode} session in {store.path}")
    return session


def _check_index(index: int, size: int, what: str, allow_none_selected: bool = False) -> None:
    low = -1 if allow_none_selected else 0
    if not low <= index < size:
        raise ValueError(f"{what} {index} out of range (features: {size})")


def update_session(cwd: Path | str, updates: SessionUpdate) -> YoomSession | None:
    """Apply a batch of updates and save.

    Returns None if there is no session.

    Raises:
        ValueError: If an index is out of range. Checked before anything
            is changed or written.
    """
    store = SessionStore(cwd)
    session = store.load()
    if session is None:
        return None

    size = len(session.features) + (1 if updates.add_feature else 0)
    if updates.feature_update is not None:
        if updates.update_feature_index is None:
            raise ValueError("feature_update requires update_feature_index")
        _check_index(updates.update_feature_index, size, "Feature index")
    if updates.set_current_feature is not None:
        _check_index(updates.set_current_feature, size, "Current feature index", allow_none_selected=True)

    now = now_iso()
    session.last_activity_at = now

    if updates.add_feature is not None:
        session.features.append(YoomFeature(
            name=updates.add_feature.name,
            description=updates.add_feature.description,
            created_at=now,
            updated_at=now,
        ))
        # First feature becomes current but is not started
        if len(session.features) == 1:
            session.current_feature_index = 0

    if updates.feature_update is not None:
        feature = session.features[updates.update_feature_index]
        edit = updates.feature_update
        if edit.name is not None:
            feature.name = edit.name
        if edit.description is not None:
            feature.description = edit.description
        if edit.add_note:
            feature.notes.append(edit.add_note)
        feature.updated_at = now

    if updates.set_current_feature is not None:
        session.current_feature_index = updates.set_current_feature

    if updates.add_note:
        session.notes.append(f"[{now}] {updates.add_note}")

    if updates.discovery is not None:
        session.discovery = updates.discovery

    store.save(session)
    return session


def complete_current_step(cwd: Path | str) -> StepResult | None:
    """Mark the current feature's step done and move to the next one.

    Returns None (nothing written) if there is no session, no current
    feature, or the current feature has no current step.
    """
    store = SessionStore(cwd)
    session = store.load()
    if session is None:
        return None

    feature = session.current_feature
    if feature is None or feature.status != FeatureStatus.IN_PROGRESS or feature.current_step is None:
        logger.info("[SESSION] Nothing to advance: no current step")
        return None

    now = now_iso()
    lifecycle = FeatureLifecycle(feature, session.config.steps, clock=lambda: now)
    upcoming = lifecycle.advance_step()
    session.last_activity_at = now

    store.save(session)
    return StepResult(session=session, next_step=upcoming, feature_completed=upcoming is None)


def _next_pending_index(session: YoomSession) -> int | None:
    current = session.current_feature
    # The current feature may have been selected but never begun
    if current is not None and current.status == FeatureStatus.PENDING and not current.started:
        return session.current_feature_index
    for index in range(session.current_feature_index + 1, len(session.features)):
        if session.features[index].status == FeatureStatus.PENDING:
            return index
    return None


def start_next_feature(cwd: Path | str) -> YoomSession | None:
    """Begin the next pending feature.

    The current feature is begun if it was selected but never started;
    otherwise the first pending feature after it. Returns None (nothing
    written) if there is no session or no pending feature remains.
    """
    store = SessionStore(cwd)
    session = store.load()
    if session is None:
        return None

    index = _next_pending_index(session)
    if index is None:
        logger.info("[SESSION] No pending features remain")
        return None

    now = now_iso()
    session.current_feature_index = index
    session.last_activity_at = now
    FeatureLifecycle(session.features[index], session.config.steps, clock=lambda: now).begin()

    store.save(session)
    return session


def session_summary(session: YoomSession, catalog=None) -> str:
    """Short plain-text digest of a session.

    Args:
        session: Session to summarize
        catalog: Optional BuiltinCatalog used to show agent display names
    """
    config = session.config
    lines = [
        f"Framework: {config.framework}",
        f"Mode: {config.mode}",
    ]

    if catalog is not None and config.agents:
        names = ", ".join(catalog.display_name(a) for a in config.agents)
        lines.append(f"Agents: {len(config.agents)} ({names})")
    else:
        lines.append(f"Agents: {len(config.agents)}")

    completed = session.count(FeatureStatus.COMPLETED)
    pending = session.count(FeatureStatus.PENDING)
    lines.append(f"Features: {completed}/{len(session.features)} completed")

    current = session.current_feature
    if current is not None and current.status == FeatureStatus.IN_PROGRESS:
        step = current.current_step.value if current.current_step else "-"
        lines.append(f"Current: {current.name} ({step})")
    elif current is not None and not current.started:
        lines.append(f"Next: {current.name} (not started)")

    if pending > 0:
        lines.append(f"Pending: {pending} features")

    return "\n".join(lines)
