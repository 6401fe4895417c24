"""Feature lifecycle state machine using transitions library.

Each feature moves pending -> in_progress -> completed. While in
progress its step cursor walks the session's step sequence; advancing
past the last step finishes the feature. completed is terminal.

Usage:
    from yoom.session.fsm import FeatureLifecycle

    lifecycle = FeatureLifecycle(feature, steps)
    lifecycle.begin()           # pending -> in_progress, cursor on first step
    lifecycle.advance_step()    # DEVELOP -> REVIEW ... COMMIT -> completed
"""

import logging
from typing import Callable

from transitions import Machine

from yoom.lib.timeutil import now_iso
from yoom.session.models import (
    STANDARD_STEPS,
    FeatureStatus,
    FeatureStep,
    YoomFeature,
    next_step,
)

logger = logging.getLogger(__name__)


# State values must match FeatureStatus enum
STATES = [s.value for s in FeatureStatus]

# Each trigger becomes a method on the lifecycle
TRANSITIONS = [
    {"trigger": "begin", "source": "pending", "dest": "in_progress", "after": "_enter_first_step"},
    {"trigger": "finish", "source": "in_progress", "dest": "completed", "after": "_clear_step"},
]


class StepError(Exception):
    """Raised when there is no current step to advance."""

    def __init__(self, feature_name: str, status: str):
        self.feature_name = feature_name
        self.status = status
        super().__init__(f"Feature '{feature_name}' has no current step (status: {status})")


class FeatureLifecycle:
    """State machine for one feature's status and step cursor.

    Wraps the transitions library with feature-specific logic:
    - Takes its initial state from the feature's status
    - Writes state changes back onto the feature
    - Logs all transitions
    """

    def __init__(
        self,
        feature: YoomFeature,
        steps: tuple[FeatureStep, ...] = STANDARD_STEPS,
        clock: Callable[[], str] = now_iso,
    ):
        """Initialize the lifecycle for a feature.

        Args:
            feature: Feature to drive; mutated in place
            steps: Step sequence for the owning session
            clock: Timestamp source for updatedAt
        """
        self.feature = feature
        self.steps = steps
        self.clock = clock

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial=feature.status.value,
            auto_transitions=False,  # Only explicit transitions
            send_event=True,  # Pass EventData to callbacks
            after_state_change="on_state_change",
        )

    def _enter_first_step(self, event) -> None:
        self.feature.started = True
        self.feature.current_step = self.steps[0]

    def _clear_step(self, event) -> None:
        self.feature.current_step = None

    def on_state_change(self, event) -> None:
        """Callback after any state transition.

        Syncs the feature status and logs the transition.
        """
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        self.feature.status = FeatureStatus(to_state)
        self.feature.updated_at = self.clock()
        logger.info(f"[FSM] {self.feature.name}: {from_state} -> {to_state} ({trigger})")

    def advance_step(self) -> FeatureStep | None:
        """Complete the current step and move the cursor.

        Returns:
            The new current step, or None if the feature just completed.

        Raises:
            StepError: If the feature has no current step.
        """
        feature = self.feature
        current = feature.current_step
        if current is None or self.state != FeatureStatus.IN_PROGRESS.value:
            raise StepError(feature.name, feature.status.value)

        if current not in feature.completed_steps:
            feature.completed_steps.append(current)
        feature.updated_at = self.clock()

        upcoming = next_step(current, self.steps, feature.completed_steps)
        if upcoming is not None:
            logger.info(f"[FSM] {feature.name}: step {current.value} -> {upcoming.value}")
            feature.current_step = upcoming
        else:
            self.finish()
        return upcoming
