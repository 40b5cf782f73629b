"""Per-connection Gateway session facts used for resume."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SessionState:
    session_id: str | None = None
    resume_url: str | None = None
    last_sequence: int | None = None
    should_resume: bool = False

    def can_resume(self) -> bool:
        return self.should_resume and self.session_id is not None

    def invalidate(self) -> None:
        self.session_id = None
        self.resume_url = None
        self.last_sequence = None
        self.should_resume = False


__all__ = ["SessionState"]
