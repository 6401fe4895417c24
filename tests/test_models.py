"""Tests for yoom.session.models module."""

import pytest

from yoom.lib.constants import SESSION_VERSION
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


def make_session(**overrides) -> YoomSession:
    defaults = dict(
        created_at="2026-01-01T00:00:00.000Z",
        last_activity_at="2026-01-01T00:00:00.000Z",
        config=SessionConfig(project_type="new", framework="nextjs", mode="full", agents=["yoom-bot"]),
    )
    defaults.update(overrides)
    return YoomSession(**defaults)


class TestSteps:

    def test_standard_sequence(self):
        assert [s.value for s in STANDARD_STEPS] == [
            "DEVELOP", "REVIEW", "TEST", "REFACTOR", "DOCUMENT", "COMMIT",
        ]

    def test_extended_starts_with_design(self):
        assert EXTENDED_STEPS[0] is FeatureStep.DESIGN
        assert EXTENDED_STEPS[1:] == STANDARD_STEPS

    def test_steps_for_workflow(self):
        assert steps_for_workflow("standard") == STANDARD_STEPS
        assert steps_for_workflow("extended") == EXTENDED_STEPS
        assert steps_for_workflow("bogus") == STANDARD_STEPS

    def test_next_step(self):
        assert next_step(FeatureStep.DEVELOP) is FeatureStep.REVIEW
        assert next_step(FeatureStep.DOCUMENT) is FeatureStep.COMMIT

    def test_next_step_after_last(self):
        assert next_step(FeatureStep.COMMIT) is None

    def test_next_step_not_in_sequence(self):
        assert next_step(FeatureStep.DESIGN, STANDARD_STEPS) is None

    def test_next_step_skips_completed(self):
        completed = [FeatureStep.DEVELOP, FeatureStep.REVIEW, FeatureStep.TEST]
        assert next_step(FeatureStep.DEVELOP, STANDARD_STEPS, completed) is FeatureStep.REFACTOR

    def test_every_step_has_description(self):
        for step in FeatureStep:
            assert step_description(step)
        assert step_description(FeatureStep.COMMIT) == "Creating git commit"


class TestFeatureSerialization:

    def test_pending_feature_keys(self):
        feature = YoomFeature(name="Auth", description="Login", created_at="t0", updated_at="t0")
        data = feature.to_dict()
        assert data == {
            "name": "Auth",
            "description": "Login",
            "status": "pending",
            "started": False,
            "completedSteps": [],
            "notes": [],
            "createdAt": "t0",
            "updatedAt": "t0",
        }

    def test_current_step_written_when_set(self):
        feature = YoomFeature(
            name="Auth", description="", status=FeatureStatus.IN_PROGRESS,
            current_step=FeatureStep.REVIEW, completed_steps=[FeatureStep.DEVELOP], started=True,
        )
        data = feature.to_dict()
        assert data["currentStep"] == "REVIEW"
        assert data["completedSteps"] == ["DEVELOP"]

    def test_from_dict(self):
        feature = YoomFeature.from_dict({
            "name": "Auth",
            "description": "Login",
            "status": "in_progress",
            "started": True,
            "currentStep": "TEST",
            "completedSteps": ["DEVELOP", "REVIEW"],
            "notes": ["n"],
            "createdAt": "t0",
            "updatedAt": "t1",
        })
        assert feature.status is FeatureStatus.IN_PROGRESS
        assert feature.current_step is FeatureStep.TEST
        assert feature.completed_steps == [FeatureStep.DEVELOP, FeatureStep.REVIEW]
        assert feature.updated_at == "t1"

    @pytest.mark.parametrize("status,started", [
        ("pending", False),
        ("in_progress", True),
        ("completed", True),
    ])
    def test_started_derived_for_legacy_files(self, status, started):
        feature = YoomFeature.from_dict({"name": "x", "status": status})
        assert feature.started is started


class TestSessionConfig:

    def test_standard_workflow_not_written(self):
        config = SessionConfig(project_type="new", framework="rails", mode="custom", agents=[])
        assert "workflow" not in config.to_dict()
        assert config.steps == STANDARD_STEPS

    def test_extended_workflow_round_trip(self):
        config = SessionConfig(project_type="new", framework="rails", mode="custom", workflow="extended")
        data = config.to_dict()
        assert data["workflow"] == "extended"
        assert SessionConfig.from_dict(data).steps == EXTENDED_STEPS

    def test_scope_defaults_to_all(self):
        config = SessionConfig.from_dict({"projectType": "new", "framework": "x", "mode": "full"})
        assert config.scope == "all"
        assert config.agents == []


class TestYoomSession:

    def test_fresh_session(self):
        session = make_session()
        assert session.version == SESSION_VERSION
        assert session.features == []
        assert session.current_feature_index == -1
        assert session.current_feature is None

    def test_key_order(self):
        session = make_session(discovery=DiscoveryResult(purpose="learning"))
        assert list(session.to_dict()) == [
            "version", "createdAt", "lastActivityAt", "config", "discovery",
            "features", "currentFeatureIndex", "notes",
        ]

    def test_discovery_omitted_when_absent(self):
        assert "discovery" not in make_session().to_dict()

    def test_current_feature(self):
        session = make_session(features=[YoomFeature(name="a", description=""), YoomFeature(name="b", description="")])
        session.current_feature_index = 1
        assert session.current_feature.name == "b"
        session.current_feature_index = 5
        assert session.current_feature is None

    def test_count(self):
        session = make_session(features=[
            YoomFeature(name="a", description="", status=FeatureStatus.COMPLETED),
            YoomFeature(name="b", description=""),
            YoomFeature(name="c", description=""),
        ])
        assert session.count(FeatureStatus.PENDING) == 2
        assert session.count(FeatureStatus.COMPLETED) == 1
        assert session.count(FeatureStatus.IN_PROGRESS) == 0

    def test_dict_round_trip(self):
        session = make_session(
            features=[YoomFeature(name="a", description="d", created_at="t", updated_at="t")],
            current_feature_index=0,
            notes=["[t] hi"],
            discovery=DiscoveryResult(purpose="production", tech_stack=["ts"], requirements=["r1"]),
        )
        assert YoomSession.from_dict(session.to_dict()) == session
