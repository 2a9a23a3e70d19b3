"""Errors raised by the time tracking services."""


class TimerError(ValueError):
    """Base class for failures reported back to the user."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class StoreQueryFailed(TimerError):
    """A store call failed; the store's own message is passed through."""

    def __init__(self, action: str, detail: str):
        self.action = action
        self.detail = detail
        super().__init__(f"Error {action}: {detail}")


class AlreadyActive(TimerError):
    default_message = "You already have an active timer. Stop it before starting a new one."


class NoActiveEntry(TimerError):
    default_message = "No active timer found."


class NoEntryFound(TimerError):
    default_message = "Could not find a time entry to add a note to."


class InvalidDuration(TimerError):
    default_message = "Please enter a valid duration."


class ProjectNotFound(TimerError):
    default_message = "Project not found."
