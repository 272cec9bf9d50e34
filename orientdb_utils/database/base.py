"""
Exception hierarchy for the OrientDB utilities.

Argument errors subclass ValueError so callers that already guard on
ValueError keep working. Errors raised by the OrientDB server process or
the operating system are not wrapped.
"""


class OrientDBUtilError(Exception):
    """Base class for all errors raised by this package."""
    pass


class MissingArgumentError(OrientDBUtilError, ValueError):
    """Raised when a required argument is None."""
    pass


class InvalidFormatError(OrientDBUtilError, ValueError):
    """Raised when an argument is present but cannot be parsed."""
    pass


class ServerConfigurationError(OrientDBUtilError):
    """Raised when an embedded server cannot be started with what it was given."""
    pass


class DatabaseConnectionError(OrientDBUtilError):
    """Raised when the server process exits before reporting activation."""

    def __init__(self, message: str, exit_code=None):
        super().__init__(message)
        self.exit_code = exit_code


def require_not_none(value, message: str):
    """
    Return value unchanged, raising MissingArgumentError when it is None.

    Args:
        value: The value to check
        message: Error message used when value is None

    Returns:
        The value that was passed in

    Raises:
        MissingArgumentError: If value is None
    """
    if value is None:
        raise MissingArgumentError(message)
    return value
