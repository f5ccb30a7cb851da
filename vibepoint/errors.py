"""
Error taxonomy shared by the core services and the HTTP layer.

Every error carries the status code of its HTTP equivalent so the server can
translate it without a lookup table.
"""


class VibepointError(Exception):
    """Base class for errors surfaced to callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(VibepointError):
    """No identity could be resolved for the request."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InvalidConfirmation(VibepointError):
    """The deletion confirmation phrase did not match exactly."""

    status_code = 400


class StorageFailure(VibepointError):
    """A read or write against the entry store failed."""

    status_code = 500
