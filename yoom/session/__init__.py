"""
Yoom session.

Tracks features through the development steps and persists the whole
session as .yoom-session.md in the project directory.
"""

from yoom.session.models import (
    EXTENDED_STEPS,
    STANDARD_STEPS,
    DiscoveryResult,
    FeatureStatus,
    FeatureStep,
    SessionConfig,
    YoomFeature,
    YoomSession,
    next_step,
    step_description,
    steps_for_workflow,
)
from yoom.session.fsm import FeatureLifecycle, StepError
from yoom.session.store import SessionStore
from yoom.session.state import (
    CreateSessionOptions,
    FeatureEdit,
    NewFeature,
    SessionUpdate,
    StepResult,
    complete_current_step,
    create_session,
    delete_session,
    get_session_file_path,
    has_existing_session,
    load_session,
    save_session,
    session_summary,
    start_next_feature,
    update_session,
)

__all__ = [
    "EXTENDED_STEPS",
    "STANDARD_STEPS",
    "DiscoveryResult",
    "FeatureStatus",
    "FeatureStep",
    "SessionConfig",
    "YoomFeature",
    "YoomSession",
    "next_step",
    "step_description",
    "steps_for_workflow",
    "FeatureLifecycle",
    "StepError",
    "SessionStore",
    "CreateSessionOptions",
    "FeatureEdit",
    "NewFeature",
    "SessionUpdate",
    "StepResult",
    "complete_current_step",
    "create_session",
    "delete_session",
    "get_session_file_path",
    "has_existing_session",
    "load_session",
    "save_session",
    "session_summary",
    "start_next_feature",
    "update_session",
]
