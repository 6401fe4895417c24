"""Tests for yoom.lib.config module."""

import pytest
from pathlib import Path

from yoom.lib.config import YoomProjectConfig, load_project_config


class TestLoadProjectConfig:

    def test_no_project_dir(self):
        assert load_project_config(None) == YoomProjectConfig()

    def test_missing_file(self, tmp_path):
        assert load_project_config(tmp_path) == YoomProjectConfig()

    def test_full_file(self, tmp_path):
        (tmp_path / "yoom.yaml").write_text(
            "framework: rails\n"
            "mode: custom\n"
            "scope: backend\n"
            "agents: [yoom-bot, tester]\n"
            "workflow: extended\n"
        )
        config = load_project_config(tmp_path)
        assert config.framework == "rails"
        assert config.mode == "custom"
        assert config.scope == "backend"
        assert config.agents == ["yoom-bot", "tester"]
        assert config.workflow == "extended"

    def test_empty_file(self, tmp_path):
        (tmp_path / "yoom.yaml").write_text("")
        assert load_project_config(tmp_path) == YoomProjectConfig()

    def test_invalid_yaml_defaults_with_warning(self, tmp_path, caplog):
        (tmp_path / "yoom.yaml").write_text("framework: [unclosed\n")
        assert load_project_config(tmp_path) == YoomProjectConfig()
        assert "Failed to parse" in caplog.text

    def test_non_mapping_defaults_with_warning(self, tmp_path, caplog):
        (tmp_path / "yoom.yaml").write_text("- rails\n")
        assert load_project_config(tmp_path) == YoomProjectConfig()
        assert "Failed to parse" in caplog.text

    def test_unknown_mode_ignored_with_warning(self, tmp_path, caplog):
        (tmp_path / "yoom.yaml").write_text("framework: nextjs\nmode: turbo\n")
        config = load_project_config(tmp_path)
        assert config.framework == "nextjs"
        assert config.mode is None
        assert "Ignoring mode='turbo'" in caplog.text

    def test_unknown_workflow_ignored(self, tmp_path):
        (tmp_path / "yoom.yaml").write_text("workflow: waterfall\n")
        assert load_project_config(tmp_path).workflow is None

    def test_accepts_string_path(self, tmp_path):
        (tmp_path / "yoom.yaml").write_text("scope: frontend\n")
        assert load_project_config(str(tmp_path)).scope == "frontend"
