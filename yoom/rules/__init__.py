"""
Framework rules.

Detects a project's framework and composes the coding rules, review
deductions and agent roster that apply to it.
"""

from yoom.rules.types import (
    AgentRoster,
    CombinedRules,
    Deduction,
    DetectionResult,
    Framework,
    FrameworkConfig,
    FrameworkOption,
    TestDescriptor,
)
from yoom.rules.registry import (
    RegistryError,
    RuleRegistry,
    default_registry,
    get_framework_config,
    load_registry,
)
from yoom.rules.detect import DETECTION_ORDER, FrameworkDetector, detect_framework
from yoom.rules.compose import (
    RuleComposer,
    combine_rules,
    format_rules_for_prompt,
    framework_options,
    resolve_agents,
    review_deductions,
    total_deduction_points,
)

__all__ = [
    "AgentRoster",
    "CombinedRules",
    "Deduction",
    "DetectionResult",
    "Framework",
    "FrameworkConfig",
    "FrameworkOption",
    "TestDescriptor",
    "RegistryError",
    "RuleRegistry",
    "default_registry",
    "get_framework_config",
    "load_registry",
    "DETECTION_ORDER",
    "FrameworkDetector",
    "detect_framework",
    "RuleComposer",
    "combine_rules",
    "format_rules_for_prompt",
    "framework_options",
    "resolve_agents",
    "review_deductions",
    "total_deduction_points",
]
