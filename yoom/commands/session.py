"""
yoom session - Manage the .yoom-session.md workflow session.

Feature indexes on the command line are 1-based, matching the numbering
in the session file.
"""

from pathlib import Path

from yoom.catalog import default_catalog
from yoom.lib.config import YoomProjectConfig
from yoom.lib.constants import DEFAULT_SCOPE
from yoom.rules import detect_framework
from yoom.session import (
    CreateSessionOptions,
    DiscoveryResult,
    FeatureEdit,
    FeatureStatus,
    NewFeature,
    SessionUpdate,
    complete_current_step,
    create_session,
    delete_session,
    get_session_file_path,
    has_existing_session,
    load_session,
    session_summary,
    start_next_feature,
    step_description,
    update_session,
)
from yoom.session.markdown import render_session_markdown


UNKNOWN_FRAMEWORK = "unknown"

NO_SESSION = "No session. Use 'yoom session new' to start one."


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_or_report(root: Path):
    session = load_session(root)
    if session is None:
        if has_existing_session(root):
            print(f"ERROR: {get_session_file_path(root)} has no readable session data")
        else:
            print(NO_SESSION)
    return session


def cmd_session_status(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Print a short summary of the session."""
    session = _load_or_report(root)
    if session is None:
        return 1

    print(session_summary(session, default_catalog()))
    current = session.current_feature
    if current is not None and current.current_step is not None:
        print(f"Step: {current.current_step.value} - {step_description(current.current_step)}")
    return 0


def cmd_session_show(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Print the full session document."""
    session = _load_or_report(root)
    if session is None:
        return 1
    print(render_session_markdown(session), end="")
    return 0


def cmd_session_new(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Create a session, seeding framework and agents from flags, yoom.yaml or detection."""
    if has_existing_session(root) and not args.force:
        print(f"ERROR: Session already exists at {get_session_file_path(root)}")
        print("  Use --force to replace it.")
        return 2

    framework = args.framework or project_config.framework
    if not framework:
        detected = detect_framework(root)
        framework = detected.framework.name.value if detected.found else UNKNOWN_FRAMEWORK

    agents = _split_list(args.agents) if args.agents is not None else project_config.agents

    options = CreateSessionOptions(
        project_type=args.type,
        framework=framework,
        mode=args.mode or project_config.mode or "full",
        agents=agents,
        scope=args.scope or project_config.scope or DEFAULT_SCOPE,
        workflow=args.workflow or project_config.workflow or "standard",
    )

    try:
        session = create_session(root, options)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 2

    print(f"Created session: {get_session_file_path(root)}")
    print(session_summary(session, default_catalog()))
    return 0


def _apply(root: Path, updates: SessionUpdate):
    try:
        session = update_session(root, updates)
    except ValueError as e:
        print(f"ERROR: {e}")
        return None, 2
    if session is None:
        print(NO_SESSION)
        return None, 1
    return session, 0


def cmd_session_add(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Append a feature."""
    session, code = _apply(root, SessionUpdate(
        add_feature=NewFeature(name=args.name, description=args.description or ""),
    ))
    if session is None:
        return code
    print(f"Added feature {len(session.features)}: {args.name}")
    return 0


def cmd_session_edit(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Edit a feature's name or description, or add a note to it."""
    if args.name is None and args.description is None and args.note is None:
        print("ERROR: Nothing to change. Use --name, --description or --note.")
        return 2

    session, code = _apply(root, SessionUpdate(
        update_feature_index=args.index - 1,
        feature_update=FeatureEdit(name=args.name, description=args.description, add_note=args.note),
    ))
    if session is None:
        return code
    print(f"Updated feature {args.index}: {session.features[args.index - 1].name}")
    return 0


def cmd_session_use(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Select the current feature (without starting it)."""
    if args.clear:
        index = -1
    elif args.index is None:
        print("ERROR: Give a feature number or --clear")
        return 2
    elif args.index < 1:
        print(f"ERROR: Feature number must be 1 or more, got {args.index}")
        return 2
    else:
        index = args.index - 1

    session, code = _apply(root, SessionUpdate(set_current_feature=index))
    if session is None:
        return code

    current = session.current_feature
    if current is None:
        print("Cleared current feature.")
    else:
        print(f"Current feature: {args.index}. {current.name} ({current.status.value})")
    return 0


def cmd_session_note(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Append a timestamped session note."""
    session, code = _apply(root, SessionUpdate(add_note=args.text))
    if session is None:
        return code
    print(f"Noted: {session.notes[-1]}")
    return 0


def cmd_session_discovery(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Record discovery results, replacing any earlier ones."""
    discovery = DiscoveryResult(
        purpose=args.purpose,
        tech_stack=_split_list(args.tech_stack),
        constraints=_split_list(args.constraints),
        requirements=list(args.requirement or []),
    )
    session, code = _apply(root, SessionUpdate(discovery=discovery))
    if session is None:
        return code
    print(f"Discovery recorded: {discovery.purpose}")
    return 0


def cmd_session_step(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Complete the current step of the current feature."""
    if _load_or_report(root) is None:
        return 1

    result = complete_current_step(root)
    if result is None:
        print("No current step. Use 'yoom session next' to start a feature.")
        return 1

    feature = result.session.current_feature
    if result.feature_completed:
        print(f"Feature completed: {feature.name}")
        pending = result.session.count(FeatureStatus.PENDING)
        if pending:
            print(f"  {pending} pending. Use 'yoom session next' to continue.")
    else:
        print(f"{feature.name}: now {result.next_step.value} - {step_description(result.next_step)}")
    return 0


def cmd_session_next(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Start the next pending feature."""
    if _load_or_report(root) is None:
        return 1

    session = start_next_feature(root)
    if session is None:
        print("No pending features.")
        return 1

    feature = session.current_feature
    print(f"Started feature {session.current_feature_index + 1}: {feature.name}")
    print(f"  Step: {feature.current_step.value} - {step_description(feature.current_step)}")
    return 0


def cmd_session_delete(args, root: Path, project_config: YoomProjectConfig) -> int:
    """Delete the session file."""
    if not args.confirm:
        print("ERROR: Deleting the session requires --confirm")
        return 2

    if not delete_session(root):
        print(NO_SESSION)
        return 1
    print(f"Deleted {get_session_file_path(root)}")
    return 0
