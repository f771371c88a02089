"""
Local cache of the active identity, so a restart does not force the senior
to enter the PIN again. No expiry and no rotation.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..schemas.auth import CachedSession, SeniorSession, SessionRole

logger = logging.getLogger(__name__)


class SessionCache:
    def __init__(self, path: str):
        self.path = Path(path)
        self.state = CachedSession()

    @property
    def mode(self) -> Optional[SessionRole]:
        return self.state.mode

    @property
    def senior(self) -> Optional[SeniorSession]:
        return self.state.senior

    def load(self) -> CachedSession:
        if not self.path.exists():
            self.state = CachedSession()
            return self.state
        try:
            self.state = CachedSession.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (ValidationError, ValueError):
            logger.warning("Discarding unreadable session cache at %s", self.path)
            self.path.unlink(missing_ok=True)
            self.state = CachedSession()
        return self.state

    def _persist(self) -> None:
        if self.state.mode is None and self.state.senior is None:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.state.model_dump_json(), encoding="utf-8")

    def start_senior(self, session: SeniorSession, guardian_signed_in: bool = False) -> CachedSession:
        self.state = CachedSession(
            mode=SessionRole.senior,
            guardian_id=session.guardian_id,
            guardian_signed_in=guardian_signed_in,
            senior=session,
        )
        self._persist()
        return self.state

    def start_guardian(self, guardian_id: str) -> CachedSession:
        self.state = CachedSession(mode=SessionRole.guardian, guardian_id=guardian_id, guardian_signed_in=True)
        self._persist()
        return self.state

    def set_role(self, role: SessionRole) -> CachedSession:
        if self.state.senior is not None:
            self.state.senior = self.state.senior.model_copy(update={"role": role})
            self._persist()
        return self.state

    def exit_senior_mode(self) -> CachedSession:
        """Back to the guardian who handed over the device, or signed out for a PIN-only session."""
        if not (self.state.guardian_signed_in and self.state.guardian_id):
            self.clear()
            return self.state
        return self.start_guardian(self.state.guardian_id)

    def clear(self) -> None:
        self.state = CachedSession()
        self.path.unlink(missing_ok=True)
