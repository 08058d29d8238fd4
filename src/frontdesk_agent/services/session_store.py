"""Session store — durable per-conversation state backed by a JSON file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from frontdesk_agent.models.session import Session

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory session map keyed by conversation id, mirrored to disk.

    Every mutation rewrites the whole file.  The in-memory map is the source
    of truth for the running process; a failed write is logged and picked up
    by the next successful one.

    Writes are synchronous and happen while the router holds the
    conversation lock, so a slow disk delays the event loop.  The file stays
    a few kilobytes at a small office's volume; move ``persist`` to
    ``asyncio.to_thread`` if that ever changes.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._sessions: dict[str, Session] = {}

    def load(self) -> None:
        """Replace the in-memory map with the contents of the session file.

        Never raises: a missing, unreadable or malformed file starts the
        process with no sessions.
        """
        self._sessions = {}
        try:
            if not self.path.exists():
                logger.info("No session file at %s, starting empty", self.path)
                return
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError):
            # RecursionError: pathologically nested JSON
            logger.exception("Could not read session file %s, starting empty", self.path)
            return

        if not isinstance(raw, dict):
            logger.warning("Session file %s is not a mapping, starting empty", self.path)
            return

        for conversation_id, record in raw.items():
            session = Session.from_dict(record)
            if session is None:
                logger.warning("Dropping invalid session for %s: %r", conversation_id, record)
                continue
            self._sessions[conversation_id] = session

        logger.info("Loaded %d session(s) from %s", len(self._sessions), self.path)

    def get(self, conversation_id: str) -> Session | None:
        return self._sessions.get(conversation_id)

    def put(self, conversation_id: str, session: Session) -> None:
        self._sessions[conversation_id] = session
        self.persist()

    def remove(self, conversation_id: str) -> None:
        if self._sessions.pop(conversation_id, None) is not None:
            logger.info("Session removed for %s", conversation_id)
        self.persist()

    def persist(self) -> bool:
        """Write the full map to disk; returns ``False`` if the write failed."""
        payload = {cid: session.to_dict() for cid, session in self._sessions.items()}
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
            )
            os.replace(tmp_path, self.path)
        except OSError:
            logger.exception("Failed to save sessions to %s", self.path)
            return False
        return True

    def snapshot(self) -> dict[str, Session]:
        """Copy of the current map (useful for tests and monitoring)."""
        return dict(self._sessions)

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    @property
    def active_count(self) -> int:
        """Number of active sessions (useful for monitoring)."""
        return len(self._sessions)
