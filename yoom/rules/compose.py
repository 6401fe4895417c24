"""
Rule composition.

Merges the common rules with a framework's rules into one bundle for
prompt injection, and resolves the agent roster for a session mode.
Everything here is a pure query over a RuleRegistry.
"""

import logging

from yoom.lib.constants import FALLBACK_DEFAULT_AGENTS, FALLBACK_FULL_AGENTS
from yoom.rules.registry import RuleRegistry, default_registry, get_framework_config
from yoom.rules.types import CombinedRules, Deduction, FrameworkConfig, FrameworkOption

logger = logging.getLogger(__name__)

PROMPT_HEADER = "# Yoom AI Coding Rules\n"
PROMPT_SEPARATOR = "\n---\n"
AGENTS_HEADER = "## Active Agents\n"


def fallback_agents(full_mode: bool) -> tuple[str, ...]:
    """Roster used when no framework config applies."""
    return FALLBACK_FULL_AGENTS if full_mode else FALLBACK_DEFAULT_AGENTS


class RuleComposer:
    """Builds rule bundles and agent rosters from a registry."""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def combine(
        self,
        framework: FrameworkConfig | None,
        agents: list[str] | tuple[str, ...] | None = None,
        full_mode: bool = True,
    ) -> CombinedRules:
        """Combine common and framework-specific rules.

        Args:
            framework: Framework config, or None for common rules only
            agents: Explicit roster; always wins when given (even if empty)
            full_mode: Use the framework's full roster instead of its default one

        Returns:
            CombinedRules with common deductions first, then the framework's.
        """
        deductions = self.registry.common_deductions
        if framework is not None:
            deductions = deductions + framework.deductions

        if agents is not None:
            active = tuple(agents)
        elif framework is not None:
            active = framework.agents.full if full_mode else framework.agents.default
        else:
            active = fallback_agents(full_mode)

        return CombinedRules(
            common=self.registry.common_rules,
            framework=framework.rules if framework is not None else "",
            deductions=deductions,
            agents=active,
        )

    def resolve_agents(self, framework_name: str | None, mode: str) -> tuple[str, ...]:
        """Resolve the roster for a framework name and session mode.

        Unknown framework names fall back to the minimal roster.
        """
        config = self.registry.get(framework_name)
        if config is None and framework_name:
            logger.warning(f"[RULES] Unknown framework '{framework_name}', using fallback agents")
        return self.combine(config, None, full_mode=(mode == "full")).agents

    def total_points(self, framework: FrameworkConfig | None) -> int:
        """Total deduction weight for the common catalog plus a framework's."""
        total = sum(d.points for d in self.registry.common_deductions)
        if framework is not None:
            total += sum(d.points for d in framework.deductions)
        return total

    def review_deductions(self, framework_name: str) -> tuple[Deduction, ...]:
        """Extended code-review catalog for a framework name.

        Common deductions, then every family that applies to the name, in
        family order (typescript, react, backend, security, testing, workflow).
        """
        deductions = list(self.registry.common_deductions)
        for family in self.registry.families:
            if family.applies_to(framework_name):
                deductions.extend(family.deductions)
        return tuple(deductions)

    def options(self) -> list[FrameworkOption]:
        """Selectable frameworks with a short description each."""
        return [
            FrameworkOption(
                name=config.name.value,
                display_name=config.display_name,
                description=f"{len(config.agents.default)} default agents, {len(config.deductions)} review rules",
            )
            for config in self.registry.configs()
        ]


def format_rules_for_prompt(rules: CombinedRules) -> str:
    """Render combined rules as the text injected into a system prompt.

    Output depends only on `rules`, so identical inputs give identical text.
    """
    sections = [PROMPT_HEADER, rules.common]

    if rules.framework:
        sections.append(PROMPT_SEPARATOR)
        sections.append(rules.framework)

    sections.append(PROMPT_SEPARATOR)
    sections.append(AGENTS_HEADER)
    sections.append("\n".join(f"- {agent}" for agent in rules.agents))

    return "\n".join(sections)


def _composer(registry: RuleRegistry | None) -> RuleComposer:
    return RuleComposer(registry if registry is not None else default_registry())


def combine_rules(
    framework: FrameworkConfig | None,
    agents: list[str] | tuple[str, ...] | None = None,
    full_mode: bool = True,
    registry: RuleRegistry | None = None,
) -> CombinedRules:
    """Combine common and framework rules (see RuleComposer.combine)."""
    return _composer(registry).combine(framework, agents, full_mode)


def resolve_agents(framework_name: str | None, mode: str, registry: RuleRegistry | None = None) -> tuple[str, ...]:
    """Resolve the agent roster for a framework name and mode."""
    return _composer(registry).resolve_agents(framework_name, mode)


def total_deduction_points(framework: FrameworkConfig | None, registry: RuleRegistry | None = None) -> int:
    """Sum of points over the common catalog plus the framework's catalog."""
    return _composer(registry).total_points(framework)


def review_deductions(framework_name: str, registry: RuleRegistry | None = None) -> tuple[Deduction, ...]:
    """Extended code-review catalog for a framework name."""
    return _composer(registry).review_deductions(framework_name)


def framework_options(registry: RuleRegistry | None = None) -> list[FrameworkOption]:
    """All registered frameworks as selectable options."""
    return _composer(registry).options()
