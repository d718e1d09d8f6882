from typing import Iterable, Optional


class ConsoleError(Exception):
    """Base class for errors raised by the console's form and gateway layers."""


class MissingRequiredField(ConsoleError):
    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class NoServiceSelected(ConsoleError):
    def __init__(self):
        super().__init__("Please select at least one service.")


class NetworkFailure(ConsoleError):
    """A backend or auth provider call was rejected or could not be made."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class MalformedRecord(ConsoleError):
    """Persisted data could not be decoded. Always recovered where it is raised."""


class DuplicateSubmission(ConsoleError):
    def __init__(self, phase: str):
        self.phase = phase
        super().__init__(f"Form already {phase}")


class InvalidCredentials(ConsoleError):
    pass


class AdminOnly(ConsoleError):
    def __init__(self):
        super().__init__("Only the admin account can log in here.")
