# focusquest/errors.py


class StatsError(Exception):
    """Base class for errors raised by the statistics backend."""


class SessionNotFoundError(StatsError):
    def __init__(self, session_id: int):
        super().__init__(f"Session with id {session_id} not found")
        self.session_id = session_id


class SessionNotActiveError(StatsError):
    def __init__(self, session_id: int, status: str):
        super().__init__(
            f"Session {session_id} is not active (current status: {status})"
        )
        self.session_id = session_id
        self.status = status


class StatsConflictError(StatsError):
    """The stats row could neither be created nor found for update."""

    def __init__(self, user_id: int, category: str):
        super().__init__(
            f"Stats row for user {user_id} category {category} "
            f"conflicted on insert but could not be locked"
        )
        self.user_id = user_id
        self.category = category
