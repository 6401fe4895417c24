"""Tests for yoom.catalog module."""

import pytest

from yoom.catalog import CatalogError, default_catalog, load_catalog
from yoom.lib.constants import FALLBACK_DEFAULT_AGENTS, FALLBACK_FULL_AGENTS
from yoom.rules.registry import default_registry


class TestBuiltinCatalog:

    def test_skills(self):
        catalog = default_catalog()
        assert catalog.skill_names() == [
            "orchestrator", "yoom-ai", "ralph-loop", "frontend-ui-ux", "git-master", "ultrawork", "yoom",
        ]

    def test_skill_lookup_ignores_case(self):
        skill = default_catalog().skill("Git-Master")
        assert skill.name == "git-master"
        assert "atomic commits" in skill.description

    def test_unknown_skill(self):
        assert default_catalog().skill("nope") is None

    def test_agent_metadata(self):
        info = default_catalog().agent("code-reviewer")
        assert info.alias == "CodeReviewer"
        assert info.model == "opus"
        assert info.cost == "EXPENSIVE"
        assert info.tools == ("Read", "Grep", "Glob")

    def test_display_name(self):
        catalog = default_catalog()
        assert catalog.display_name("git-committer") == "GitCommitter"
        assert catalog.display_name("someone-else") == "someone-else"

    def test_every_roster_agent_is_known(self):
        catalog = default_catalog()
        names = set(FALLBACK_FULL_AGENTS) | set(FALLBACK_DEFAULT_AGENTS)
        for config in default_registry().configs():
            names |= set(config.agents.default) | set(config.agents.full)
        missing = sorted(n for n in names if catalog.agent(n) is None)
        assert missing == []


class TestLoadCatalog:

    def write(self, data_dir, skills="skills:\n  - {name: a, description: A}\n",
              agents="agents:\n  - {name: x, description: X}\n"):
        data_dir.mkdir(parents=True, exist_ok=True)
        (data_dir / "skills.yaml").write_text(skills)
        (data_dir / "agents.yaml").write_text(agents)

    def test_minimal(self, tmp_path):
        self.write(tmp_path)
        catalog = load_catalog(tmp_path)
        assert catalog.skill_names() == ["a"]
        info = catalog.agent("x")
        assert info.alias is None
        assert info.tools == ()
        assert catalog.display_name("x") == "x"

    def test_missing_file(self, tmp_path):
        self.write(tmp_path)
        (tmp_path / "agents.yaml").unlink()
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path)

    def test_duplicate_skill_differing_case(self, tmp_path):
        self.write(tmp_path, skills="skills:\n  - {name: a, description: A}\n  - {name: A, description: B}\n")
        with pytest.raises(CatalogError, match="Duplicate skill"):
            load_catalog(tmp_path)

    def test_duplicate_agent(self, tmp_path):
        self.write(tmp_path, agents="agents:\n  - {name: x, description: X}\n  - {name: x, description: Y}\n")
        with pytest.raises(CatalogError, match="Duplicate agent"):
            load_catalog(tmp_path)

    def test_entry_missing_description(self, tmp_path):
        self.write(tmp_path, agents="agents:\n  - {name: x}\n")
        with pytest.raises(CatalogError, match="Bad agent entry"):
            load_catalog(tmp_path)

    def test_wrong_shape(self, tmp_path):
        self.write(tmp_path, skills="skills: nope\n")
        with pytest.raises(CatalogError, match="'skills' list"):
            load_catalog(tmp_path)
