"""Session file storage.

SessionStore is the handle for one project directory's session file.
Reading follows three outcomes:
- no file, or a file whose data block is missing, corrupt, fails the
  schema or comes from a newer major version: None
- I/O failure (permissions, disk): OSError propagates
- otherwise: the decoded YoomSession
"""

import logging
from pathlib import Path

from yoom.lib.constants import SESSION_FILE, SESSION_VERSION
from yoom.lib.validate import SessionSchemaError, check_session, check_session_before_write
from yoom.session.markdown import extract_session_data, render_session_markdown
from yoom.session.models import YoomSession

logger = logging.getLogger(__name__)


def _major(version: str) -> int:
    try:
        return int(version.split(".", 1)[0])
    except ValueError:
        return -1


SUPPORTED_MAJOR = _major(SESSION_VERSION)


class SessionStore:
    """Reads and writes .yoom-session.md in one directory."""

    def __init__(self, cwd: Path | str, filename: str = SESSION_FILE):
        self.cwd = Path(cwd)
        self.path = self.cwd / filename

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> YoomSession | None:
        """Load the session, or None if there is no usable one."""
        if not self.path.exists():
            return None

        try:
            content = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"[SESSION] {self.path} is not valid UTF-8: {e}")
            return None

        data = extract_session_data(content)
        if data is None:
            logger.warning(f"[SESSION] No session data block in {self.path}")
            return None

        try:
            check_session(data)
        except SessionSchemaError as e:
            logger.warning(f"[SESSION] Ignoring invalid session in {self.path}: {e}")
            return None

        if _major(data["version"]) > SUPPORTED_MAJOR:
            logger.warning(
                f"[SESSION] {self.path} has version {data['version']}, "
                f"newer than supported {SESSION_VERSION}"
            )
            return None

        return YoomSession.from_dict(data)

    def save(self, session: YoomSession) -> None:
        """Write the session, replacing the whole file.

        Raises:
            SessionSchemaError: If the session does not match the schema
            OSError: If the file cannot be written
        """
        check_session_before_write(session.to_dict(), self.path)
        self.path.write_text(render_session_markdown(session), encoding="utf-8")
        logger.debug(f"[SESSION] Saved {self.path}")

    def delete(self) -> bool:
        """Delete the session file. Returns True if a file was removed."""
        if not self.path.exists():
            return False
        self.path.unlink()
        logger.info(f"[SESSION] Deleted {self.path}")
        return True
