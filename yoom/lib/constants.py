"""Shared constants for yoom."""

# Session file kept in the project working directory
SESSION_FILE = ".yoom-session.md"

# Current session format version (semver, major bump = incompatible)
SESSION_VERSION = "1.0.0"

# Marker preceding the authoritative JSON block in the session file
SESSION_DATA_MARKER = "<!-- Session Data (DO NOT EDIT) -->"

# Optional per-project configuration file
PROJECT_CONFIG_FILE = "yoom.yaml"

VALID_MODES = ("full", "custom")
VALID_PROJECT_TYPES = ("new", "existing")
VALID_WORKFLOWS = ("standard", "extended")
DEFAULT_SCOPE = "all"

# Rosters used when no framework config applies
FALLBACK_FULL_AGENTS = ("yoom-bot", "code-reviewer", "tester", "git-committer")
FALLBACK_DEFAULT_AGENTS = ("yoom-bot",)
