"""Named route lookup and `{param}` placeholder substitution."""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote

# Escaped URI delimiters (# $ & + , / : ; = ? @) stay encoded when a template
# is decoded
_RESERVED_ESCAPE = re.compile(r"(%(?:2[346BCFbcf]|3[ABDFabdf]|40))")


def decode_template(template: str) -> str:
    """Percent-decode a URL template, keeping escaped delimiters encoded.

    `%7B` becomes `{` but `%2F` stays `%2F`, so an encoded slash never turns
    into a path separator. Multi-byte UTF-8 escapes are decoded as one
    character.
    """
    parts = _RESERVED_ESCAPE.split(template)
    # Odd indexes hold the captured reserved escapes
    return "".join(part if i % 2 else unquote(part) for i, part in enumerate(parts))


def resolve_route(
    name: str,
    parameters: Any = None,
    routes: Mapping[str, str] | None = None,
) -> str:
    """Translate a route name (or a literal URL) into a URL.

    Args:
        name: A key of `routes`, or a URL that is used as is.
        parameters: Mapping of placeholder values. A scalar is taken as
            the value of `{id}`.
        routes: Route name -> URL template table.

    Returns:
        The URL with every known `{key}` replaced. Placeholders with no
        matching parameter are left in place.
    """
    url = name
    if routes and name in routes:
        url = decode_template(routes[name])

    if parameters is None:
        parameters = {}
    elif not isinstance(parameters, Mapping):
        parameters = {"id": parameters}

    for key, value in parameters.items():
        url = url.replace(f"{{{key}}}", str(value))

    return url
