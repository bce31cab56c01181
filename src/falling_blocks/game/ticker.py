from __future__ import annotations

from typing import Optional

from .session import GameSession


class GravityTimer:
    """Polled gravity source feeding TICK commands to a session.

    The timer only runs while the session is RUNNING. Pausing or ending the
    game drops the pending deadline; a restart (new ``generation``) re-arms it
    so a tick scheduled against the previous game never fires. After
    ``cancel()`` it stays silent until ``rearm()`` is called.
    """

    def __init__(self, interval_ms: int = 1000) -> None:
        self.interval_ms = int(interval_ms)
        self._deadline: Optional[int] = None
        self._generation: Optional[int] = None
        self._cancelled = False

    @property
    def armed(self) -> bool:
        return self._deadline is not None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._deadline = None
        self._generation = None
        self._cancelled = True

    def rearm(self) -> None:
        self._cancelled = False

    def poll(self, session: GameSession, now_ms: int) -> bool:
        if self._cancelled:
            return False
        if not session.is_running:
            self._deadline = None
            return False
        if self._deadline is None or self._generation != session.generation:
            self._deadline = now_ms + self.interval_ms
            self._generation = session.generation
            return False
        if now_ms >= self._deadline:
            self._deadline = now_ms + self.interval_ms
            return True
        return False
