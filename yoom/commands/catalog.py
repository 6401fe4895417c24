"""
yoom skills / yoom agents - Browse builtin skills and agents.
"""

from pathlib import Path

from yoom.catalog import default_catalog
from yoom.lib.config import YoomProjectConfig


def cmd_skills(args, root: Path, project_config: YoomProjectConfig) -> int:
    """List skills, or show one."""
    catalog = default_catalog()

    if args.name:
        skill = catalog.skill(args.name)
        if skill is None:
            print(f"ERROR: Skill '{args.name}' not found")
            return 1
        print(f"{skill.name}: {skill.description}")
        return 0

    print("Skills")
    print("-" * 60)
    for name in catalog.skill_names():
        skill = catalog.skill(name)
        print(f"  {skill.name:<16} {skill.description}")
    return 0


def cmd_agents(args, root: Path, project_config: YoomProjectConfig) -> int:
    """List agents, or show one."""
    catalog = default_catalog()

    if args.name:
        info = catalog.agent(args.name)
        if info is None:
            print(f"ERROR: Agent '{args.name}' not found")
            return 1
        print(f"Agent:       {info.name} ({catalog.display_name(info.name)})")
        print(f"Model:       {info.model or '-'}")
        print(f"Category:    {info.category or '-'}")
        print(f"Cost:        {info.cost or '-'}")
        print(f"Tools:       {', '.join(info.tools) or '-'}")
        print()
        print(info.description)
        return 0

    print("Agents")
    print("-" * 60)
    for name in catalog.agent_names():
        info = catalog.agent(name)
        print(f"  {info.name:<22} {info.model or '-':<8} {info.description[:60]}")
    return 0
