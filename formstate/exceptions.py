"""Exception types raised by formstate."""

from typing import Any


class FormStateError(Exception):
    """Base class for formstate errors."""

    pass


class ConfigError(FormStateError):
    """Raised when a settings file cannot be loaded."""

    pass


class TransportError(FormStateError):
    """Raised by a transport when a request fails.

    `response` is set when the server answered (e.g. a 422 with a
    validation payload) and is None for network-level failures.
    """

    def __init__(self, message: str, response: Any = None) -> None:
        self.response = response
        super().__init__(message)
