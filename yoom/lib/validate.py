"""
Session schema checks.

The session data block is checked against schemas/session.schema.json
both when it is read back and before it is written. Every violation is
collected, not just the first, so a hand-edited file can be fixed in
one pass.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator

SESSION_SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "session.schema.json"


class SessionSchemaError(Exception):
    """Session data does not match the session schema.

    Attributes:
        problems: (path, message) pairs, path "(root)" for top-level keys
    """

    def __init__(self, problems: list[tuple[str, str]], context: str = ""):
        self.problems = problems
        detail = "; ".join(f"{path}: {message}" for path, message in problems)
        super().__init__(f"{context}{detail}")

    @property
    def paths(self) -> list[str]:
        return [path for path, _ in self.problems]


@lru_cache(maxsize=1)
def session_validator() -> Draft7Validator:
    """Build the validator once; the schema ships with the package."""
    schema = json.loads(SESSION_SCHEMA_PATH.read_text(encoding="utf-8"))
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def session_problems(data: Any) -> list[tuple[str, str]]:
    """All schema violations in data, ordered by path."""
    problems = []
    for error in session_validator().iter_errors(data):
        path = ".".join(str(p) for p in error.absolute_path) or "(root)"
        problems.append((path, error.message))
    return sorted(problems)


def check_session(data: Any) -> None:
    """
    Raises:
        SessionSchemaError: If data is not a valid session block
    """
    problems = session_problems(data)
    if problems:
        raise SessionSchemaError(problems)


def check_session_before_write(data: Any, filepath: Path) -> None:
    """Like check_session, but names the file that would have been written."""
    problems = session_problems(data)
    if problems:
        raise SessionSchemaError(problems, f"Refusing to write invalid session to {filepath}: ")
