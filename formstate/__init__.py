"""formstate: form field binding and submission state for HTTP backends."""

__version__ = "0.1.0"

from formstate.config import (
    FormSettings,
    configure,
    get_settings,
    get_transport,
    load_settings,
    reset_settings,
    set_transport,
)
from formstate.errors import ErrorSet
from formstate.exceptions import (
    ConfigError,
    FormStateError,
    TransportError,
)
from formstate.fields import FieldContainer
from formstate.form import Form
from formstate.routing import resolve_route
from formstate.submission import build_request, extract_errors
from formstate.transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "__version__",
    # Forms
    "ErrorSet",
    "FieldContainer",
    "Form",
    # Submission
    "build_request",
    "extract_errors",
    "resolve_route",
    # Transport
    "RequestsTransport",
    "Transport",
    "TransportResponse",
    # Settings
    "FormSettings",
    "configure",
    "get_settings",
    "get_transport",
    "load_settings",
    "reset_settings",
    "set_transport",
    # Exceptions
    "ConfigError",
    "FormStateError",
    "TransportError",
]
