"""
Exceptions raised by the Timer Board core.
"""


class TimerViewError(Exception):
    """Base class for errors reported to the user of a timer view."""

    def __init__(self, message: str, user_visible: bool = True) -> None:
        super().__init__(message)
        self.user_visible = user_visible


class NoTimerAtCursorError(TimerViewError):
    """A command needing a timer was invoked with no timer under the cursor."""

    def __init__(self, command: str = "") -> None:
        message = "No timer at point"
        if command:
            message = f"{message}: cannot {command}"
        super().__init__(message)
        self.command = command


class InvalidDurationError(TimerViewError):
    """The user entered a duration that cannot be parsed."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid duration: {text!r}")
        self.text = text


class InvalidTransitionError(TimerViewError):
    """A view was moved between lifecycle phases in an unsupported order."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move timer view from {current} to {target}",
            user_visible=False,
        )
        self.current = current
        self.target = target
