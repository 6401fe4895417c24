"""
yoom rules - Print the composed rule prompt or the review catalog.
"""

from pathlib import Path

from yoom.lib.config import YoomProjectConfig
from yoom.commands.detect import resolve_framework
from yoom.rules import (
    combine_rules,
    format_rules_for_prompt,
    review_deductions,
    total_deduction_points,
)


def cmd_rules(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Print rules for the selected or detected framework."""
    try:
        framework, source = resolve_framework(args.framework, root, project_config)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 2

    mode = args.mode or project_config.mode or "full"

    if args.review:
        if framework is None:
            print("ERROR: --review needs a framework (use --framework or yoom.yaml)")
            return 2
        deductions = review_deductions(framework.name.value)
        print(f"Review catalog: {framework.display_name} ({source})")
        print("-" * 60)
        for d in deductions:
            print(f"  {d.code:<10} -{d.points:<3} {d.category:<14} {d.description}")
        print()
        print(f"Total: {sum(d.points for d in deductions)} points")
        return 0

    agents = None
    if args.agents is not None:
        agents = [a.strip() for a in args.agents.split(",") if a.strip()]
    elif project_config.agents is not None:
        agents = project_config.agents

    rules = combine_rules(framework, agents=agents, full_mode=(mode == "full"))
    print(format_rules_for_prompt(rules))
    print()
    print(f"<!-- framework: {framework.name.value if framework else 'none'} ({source}), "
          f"max deductions: {total_deduction_points(framework)} -->")
    return 0
