"""
Domain Exceptions

Errors raised when a caller drives a call session incorrectly.
Timer callbacks never raise these; they no-op instead.
"""


class SafeCallError(Exception):
    """Base exception for the SafeCall engine."""


class SessionNotActiveError(SafeCallError):
    """
    Operation requires an active call.

    Raised for user-driven operations on a session that has not
    started yet or has already ended.
    """

    def __init__(self, session_id: str, state: str) -> None:
        self.session_id = session_id
        self.state = state
        super().__init__(f"Session {session_id} is not active (state={state})")


class InvalidTransitionError(SafeCallError):
    """Lifecycle transition not allowed from the current state."""

    def __init__(self, session_id: str, current: str, target: str) -> None:
        self.session_id = session_id
        self.current = current
        self.target = target
        super().__init__(
            f"Session {session_id} cannot move from {current} to {target}"
        )
