"""
yoom detect / yoom frameworks - Identify the project framework.
"""

from pathlib import Path

from yoom.lib.config import YoomProjectConfig
from yoom.rules import detect_framework, framework_options, get_framework_config
from yoom.rules.types import FrameworkConfig


def resolve_framework(
    name: str | None,
    root: Path,
    project_config: YoomProjectConfig,
) -> tuple[FrameworkConfig | None, str]:
    """Pick the framework for a command.

    An explicit name wins, then yoom.yaml, then detection.

    Returns:
        (config, source) where source is "flag", "yoom.yaml" or "detected".
        config is None if nothing matched.

    Raises:
        ValueError: If an explicit or configured name is not a known framework.
    """
    for candidate, source in ((name, "flag"), (project_config.framework, "yoom.yaml")):
        if candidate:
            config = get_framework_config(candidate)
            if config is None:
                raise ValueError(f"Unknown framework '{candidate}' ({source})")
            return config, source

    return detect_framework(root).framework, "detected"


def cmd_detect(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Detect the framework of the project root."""
    result = detect_framework(root)

    if not result.found:
        print(f"No supported framework detected in {root}")
        return 1

    print(f"Framework:   {result.framework.name.value} ({result.framework.display_name})")
    print(f"Confidence:  {result.confidence:.1f}")
    print(f"Markers:     {', '.join(result.matched_markers) or '-'}")
    if project_config.framework and project_config.framework != result.framework.name.value:
        print(f"Note: yoom.yaml selects '{project_config.framework}'")
    return 0


def cmd_frameworks(args, root: Path, project_config: YoomProjectConfig) -> int:
    """List supported frameworks."""
    print("Frameworks")
    print("-" * 60)
    for option in framework_options():
        print(f"  {option.name:<12} {option.display_name:<24} {option.description}")
    return 0
