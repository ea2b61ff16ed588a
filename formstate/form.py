"""Form: a field container that submits itself over HTTP.

Typical use from UI code:

    form = Form({"name": "", "email": ""})
    form["email"] = "jane@example.com"
    try:
        await form.post("users.store")
    except TransportError:
        form.errors.first("email")

`submit()` drives the busy/successful flags and fills `errors` from the
failed response. Overlapping submissions on the same form are not
serialized: the one that completes last decides the final state.
"""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any

from formstate.config import get_settings, get_transport
from formstate.fields import FieldContainer
from formstate.routing import resolve_route
from formstate.submission import build_request, extract_errors
from formstate.transport import Transport

logger = logging.getLogger(__name__)


async def _dispatch(transport: Transport, options: dict[str, Any]) -> Any:
    options = dict(options)
    method = options.pop("method")
    url = options.pop("url")

    if inspect.iscoroutinefunction(transport.request):
        return await transport.request(method, url, **options)
    return await asyncio.to_thread(transport.request, method, url, **options)


class Form(FieldContainer):
    """Field container with HTTP submission and error reconciliation."""

    def route(self, name: str, parameters: Any = None) -> str:
        """Resolve a route name (or literal URL) against the configured routes."""
        return resolve_route(name, parameters, get_settings().routes)

    def get(self, url: str, config: Mapping[str, Any] | None = None, **kwargs: Any):
        """Submit the form via a GET request."""
        return self.submit("get", url, config, **kwargs)

    def post(self, url: str, config: Mapping[str, Any] | None = None, **kwargs: Any):
        """Submit the form via a POST request."""
        return self.submit("post", url, config, **kwargs)

    def patch(self, url: str, config: Mapping[str, Any] | None = None, **kwargs: Any):
        """Submit the form via a PATCH request."""
        return self.submit("patch", url, config, **kwargs)

    def put(self, url: str, config: Mapping[str, Any] | None = None, **kwargs: Any):
        """Submit the form via a PUT request."""
        return self.submit("put", url, config, **kwargs)

    def delete(self, url: str, config: Mapping[str, Any] | None = None, **kwargs: Any):
        """Submit the form via a DELETE request."""
        return self.submit("delete", url, config, **kwargs)

    async def submit(
        self,
        method: str,
        url: str,
        config: Mapping[str, Any] | None = None,
        *,
        parameters: Any = None,
        transport: Transport | None = None,
    ) -> Any:
        """Submit the form data.

        For GET and HEAD the data goes into the query string (`params`),
        otherwise into the body (`data`). Values already in the config's
        `params`/`data` win over field values with the same key.

        Args:
            method: HTTP method, any case.
            url: Route name or URL.
            config: Extra request options passed to the transport.
            parameters: Values for `{placeholders}` in the route.
            transport: Transport for this call (default: the configured one).

        Returns:
            The transport response.

        Raises:
            Exception: Whatever the transport raised, after `errors` has
                been filled from the attached response (if any).
        """
        self.start_processing()

        settings = get_settings()
        try:
            transport = transport or get_transport()
            options = build_request(method, self.route(url, parameters), self.data(), config)

            logger.debug("Submitting %s %s", method.upper(), options["url"])
            response = await _dispatch(transport, options)
        except Exception as error:
            self.handle_errors(error, settings.error_message)
            raise

        self.finish_processing()
        return response

    def handle_errors(self, error: BaseException, default_message: str | None = None) -> None:
        """Leave the busy state and record the errors carried by a failure."""
        self.busy = False

        response = getattr(error, "response", None)
        if response is None:
            logger.warning("Submission failed without a response: %s", error)
            return

        if default_message is None:
            default_message = get_settings().error_message
        self.errors.set(extract_errors(response, default_message))
        logger.info("Submission failed with errors for: %s", ", ".join(self.errors))

    def on_field_interaction(self, field_name: str | None) -> None:
        """Clear the errors of a field the user is editing."""
        if field_name:
            self.errors.clear(field_name)
