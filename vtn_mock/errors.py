"""Error taxonomy shared by the stores, the synthesizer and the dispatch engine.

The HTTP layer maps each class onto a status code; nothing here knows
about responses.
"""


class VTNError(Exception):
    """Base class for errors raised by the VTN core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(VTNError):
    """Missing or mismatched credential."""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class ValidationError(VTNError):
    """Structurally invalid input (missing id, non-positive parameters, bad body)."""

    status_code = 400


class NotFoundError(VTNError):
    status_code = 404


class ConflictError(VTNError):
    """Body id does not match the id addressed by the caller."""

    status_code = 400


class ConfigurationError(VTNError):
    """A setting needed by the requested operation is missing."""

    status_code = 500
