"""Request building and error extraction for form submissions.

These are the pure halves of `Form.submit`: deciding where the field
payload goes in the outgoing request, and turning a failed response into
a field -> message(s) mapping.
"""

from collections.abc import Mapping
from typing import Any

# Methods whose payload travels in the query string
QUERY_METHODS = ("get", "head")


def payload_slot(method: str) -> str:
    """Return the request option that carries the payload for a method."""
    return "params" if method.lower() in QUERY_METHODS else "data"


def build_request(
    method: str,
    url: str,
    data: Mapping[str, Any],
    config: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build transport request options from field data and a config.

    Values already present in the config's payload slot take precedence
    over the field data for the same keys. A payload that is not a mapping
    (a raw string body, a list) replaces the field data entirely. The given
    config is not modified.

    Args:
        method: HTTP method, any case.
        url: Resolved request URL.
        data: Field data (usually `Form.data()`).
        config: Extra request options (`params`, `data`, `headers`, ...).

    Returns:
        Keyword options for `Transport.request`, including `method` and `url`.
    """
    options = dict(config or {})
    slot = payload_slot(method)
    payload = options.get(slot)
    if payload is None or isinstance(payload, Mapping):
        options[slot] = {**data, **(payload or {})}
    return {"url": url, "method": method, **options}


def _present(value: Any) -> bool:
    # Containers count as present even when empty
    return isinstance(value, (Mapping, list, tuple)) or bool(value)


def response_body(response: Any) -> Any:
    """Return the parsed body of a transport response."""
    return getattr(response, "data", None)


def extract_errors(response: Any, default_message: str) -> dict[str, Any]:
    """Normalize a failed response body into a field -> message(s) mapping.

    The first matching rule wins:

    1. Missing or non-object body -> ``{"error": default_message}``
    2. Body with ``errors`` -> a copy of that mapping
    3. Body with ``message`` -> ``{"error": message}``
    4. Anything else -> a copy of the body

    Args:
        response: The response carried by the failure.
        default_message: Message used when the body is unusable.

    Returns:
        The normalized error mapping. Never raises.
    """
    body = response_body(response)

    if not isinstance(body, Mapping):
        return {"error": default_message}

    if _present(body.get("errors")):
        errors = body["errors"]
        if not isinstance(errors, Mapping):
            return {"error": default_message}
        return dict(errors)

    if _present(body.get("message")):
        return {"error": body["message"]}

    return dict(body)
