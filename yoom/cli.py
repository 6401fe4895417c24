#!/usr/bin/env python3
"""Yoom CLI entrypoint."""

import sys
import logging
import argparse
from pathlib import Path

from yoom.lib.config import load_project_config
from yoom.lib.constants import VALID_MODES, VALID_PROJECT_TYPES, VALID_WORKFLOWS
from yoom.commands import catalog as cmd_catalog_module
from yoom.commands import detect as cmd_detect_module
from yoom.commands import rules as cmd_rules_module
from yoom.commands import session as cmd_session_module


def get_project_root(args) -> Path:
    """Project root from --root, or the current directory."""
    return Path(args.root).resolve() if args.root else Path.cwd()


def _dispatch(handler):
    """Wrap a command handler with root and yoom.yaml resolution."""
    def run(args):
        root = get_project_root(args)
        if not root.is_dir():
            print(f"ERROR: Project root '{root}' is not a directory")
            return 2
        return handler(args, root, load_project_config(root))
    return run


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='yoom', description='Yoom workflow session and framework rules')
    parser.add_argument('--root', '-r', help='Project root (default: current directory)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # yoom detect
    p_detect = subparsers.add_parser('detect', help='Detect project framework')
    p_detect.set_defaults(func=_dispatch(cmd_detect_module.cmd_detect))

    # yoom frameworks
    p_frameworks = subparsers.add_parser('frameworks', help='List supported frameworks')
    p_frameworks.set_defaults(func=_dispatch(cmd_detect_module.cmd_frameworks))

    # yoom rules
    p_rules = subparsers.add_parser('rules', help='Print composed rules for prompt injection')
    p_rules.add_argument('--framework', '-f', help='Framework name (detected if not specified)')
    p_rules.add_argument('--agents', '-a', help='Comma-separated agent roster (overrides mode)')
    p_rules.add_argument('--mode', '-m', choices=list(VALID_MODES), help='Session mode (default: full)')
    p_rules.add_argument('--review', action='store_true', help='Print the extended review catalog instead')
    p_rules.set_defaults(func=_dispatch(cmd_rules_module.cmd_rules))

    # yoom skills
    p_skills = subparsers.add_parser('skills', help='List builtin skills')
    p_skills.add_argument('name', nargs='?', help='Skill name to show')
    p_skills.set_defaults(func=_dispatch(cmd_catalog_module.cmd_skills))

    # yoom agents
    p_agents = subparsers.add_parser('agents', help='List builtin agents')
    p_agents.add_argument('name', nargs='?', help='Agent name to show')
    p_agents.set_defaults(func=_dispatch(cmd_catalog_module.cmd_agents))

    # yoom session
    p_session = subparsers.add_parser('session', help='Manage the workflow session')
    p_session.set_defaults(func=_dispatch(cmd_session_module.cmd_session_status))
    session_sub = p_session.add_subparsers(dest='session_cmd')

    # yoom session status
    p_status = session_sub.add_parser('status', help='Show session summary')
    p_status.set_defaults(func=_dispatch(cmd_session_module.cmd_session_status))

    # yoom session show
    p_show = session_sub.add_parser('show', help='Print the session document')
    p_show.set_defaults(func=_dispatch(cmd_session_module.cmd_session_show))

    # yoom session new
    p_new = session_sub.add_parser('new', help='Create a session')
    p_new.add_argument('--type', '-t', choices=list(VALID_PROJECT_TYPES), default='existing',
                       help='Project type (default: existing)')
    p_new.add_argument('--framework', '-f', help='Framework name (yoom.yaml or detection if not specified)')
    p_new.add_argument('--mode', '-m', choices=list(VALID_MODES), help='Session mode (default: full)')
    p_new.add_argument('--agents', '-a', help='Comma-separated agent roster')
    p_new.add_argument('--scope', '-s', help='all, backend, frontend or a path (default: all)')
    p_new.add_argument('--workflow', '-w', choices=list(VALID_WORKFLOWS),
                       help='standard, or extended to start each feature with DESIGN')
    p_new.add_argument('--force', action='store_true', help='Replace an existing session')
    p_new.set_defaults(func=_dispatch(cmd_session_module.cmd_session_new))

    # yoom session add
    p_add = session_sub.add_parser('add', help='Add a feature')
    p_add.add_argument('name', help='Feature name')
    p_add.add_argument('--description', '-d', help='Feature description')
    p_add.set_defaults(func=_dispatch(cmd_session_module.cmd_session_add))

    # yoom session edit
    p_edit = session_sub.add_parser('edit', help='Edit a feature')
    p_edit.add_argument('index', type=int, help='Feature number (1-based)')
    p_edit.add_argument('--name', '-n', help='New name')
    p_edit.add_argument('--description', '-d', help='New description')
    p_edit.add_argument('--note', help='Note to append to the feature')
    p_edit.set_defaults(func=_dispatch(cmd_session_module.cmd_session_edit))

    # yoom session use
    p_use = session_sub.add_parser('use', help='Select the current feature')
    p_use.add_argument('index', type=int, nargs='?', help='Feature number (1-based)')
    p_use.add_argument('--clear', action='store_true', help='Clear the current feature')
    p_use.set_defaults(func=_dispatch(cmd_session_module.cmd_session_use))

    # yoom session note
    p_note = session_sub.add_parser('note', help='Add a session note')
    p_note.add_argument('text', help='Note text')
    p_note.set_defaults(func=_dispatch(cmd_session_module.cmd_session_note))

    # yoom session discovery
    p_discovery = session_sub.add_parser('discovery', help='Record discovery results')
    p_discovery.add_argument('--purpose', '-p', required=True, help='production, portfolio, learning, ...')
    p_discovery.add_argument('--tech-stack', help='Comma-separated technologies')
    p_discovery.add_argument('--constraints', help='Comma-separated constraints')
    p_discovery.add_argument('--requirement', action='append', help='Requirement (repeatable)')
    p_discovery.set_defaults(func=_dispatch(cmd_session_module.cmd_session_discovery))

    # yoom session step
    p_step = session_sub.add_parser('step', help='Complete the current step')
    p_step.set_defaults(func=_dispatch(cmd_session_module.cmd_session_step))

    # yoom session next
    p_next = session_sub.add_parser('next', help='Start the next pending feature')
    p_next.set_defaults(func=_dispatch(cmd_session_module.cmd_session_next))

    # yoom session delete
    p_delete = session_sub.add_parser('delete', help='Delete the session file')
    p_delete.add_argument('--confirm', action='store_true', help='Confirm deletion')
    p_delete.set_defaults(func=_dispatch(cmd_session_module.cmd_session_delete))

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
