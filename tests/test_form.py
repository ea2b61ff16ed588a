"""Tests for Form submission and error reconciliation."""

import asyncio

import pytest

from formstate import config
from formstate.exceptions import TransportError
from formstate.form import Form
from formstate.transport import TransportResponse


@pytest.fixture
def form() -> Form:
    """Create a form with two fields."""
    return Form({"name": "", "email": "jane@example.com"})


class TestSubmitSuccess:
    """Tests for successful submissions."""

    def test_post_sends_body(self, form: Form, transport) -> None:
        """Test POST places field data in the body."""
        response = asyncio.run(form.post("/api/users"))

        assert response.status == 200
        assert transport.last["method"] == "post"
        assert transport.last["url"] == "/api/users"
        assert transport.last["data"] == {"name": "", "email": "jane@example.com"}
        assert "params" not in transport.last

    def test_get_sends_params(self, form: Form, transport) -> None:
        """Test GET places field data in the query string."""
        asyncio.run(form.get("/api/users"))

        assert transport.last["params"] == {"name": "", "email": "jane@example.com"}
        assert "data" not in transport.last

    def test_submit_method_case_insensitive(self, form: Form, transport) -> None:
        """Test the method is matched regardless of case."""
        asyncio.run(form.submit("GET", "/api/users", {}))

        assert "params" in transport.last

    @pytest.mark.parametrize("verb", ["put", "patch", "delete"])
    def test_wrappers(self, form: Form, transport, verb: str) -> None:
        """Test every wrapper fixes its method."""
        asyncio.run(getattr(form, verb)("/api/users/1"))

        assert transport.last["method"] == verb
        assert "data" in transport.last

    def test_flags_after_success(self, form: Form, transport) -> None:
        """Test a success leaves the form successful and idle."""
        form.errors.set({"name": "Required."})

        asyncio.run(form.post("/api/users"))

        assert form.busy is False
        assert form.successful is True
        assert not form.errors.has_any()

    def test_config_overlay(self, form: Form, transport) -> None:
        """Test config data wins over field values and is passed along."""
        config_options = {"data": {"name": "Override"}, "headers": {"X-Token": "t"}}

        asyncio.run(form.post("/api/users", config_options))

        assert transport.last["data"] == {"name": "Override", "email": "jane@example.com"}
        assert transport.last["headers"] == {"X-Token": "t"}
        assert config_options == {"data": {"name": "Override"}, "headers": {"X-Token": "t"}}

    def test_named_route(self, form: Form, transport) -> None:
        """Test route names resolve through the configured table."""
        config.configure(routes={"users.update": "/api/users/{id}"})

        asyncio.run(form.put("users.update", parameters={"id": 4}))

        assert transport.last["url"] == "/api/users/4"

    def test_busy_while_in_flight(self, form: Form) -> None:
        """Test busy is set while the transport runs."""
        seen = {}

        class Recording:
            def request(self, method, url, **options):
                seen["busy"] = form.busy
                seen["successful"] = form.successful
                return TransportResponse(status=204)

        asyncio.run(form.post("/api/users", transport=Recording()))

        assert seen == {"busy": True, "successful": False}

    def test_async_transport(self, form: Form) -> None:
        """Test coroutine transports are awaited."""

        class AsyncTransport:
            async def request(self, method, url, **options):
                await asyncio.sleep(0)
                return TransportResponse(status=201, data=options["data"])

        response = asyncio.run(form.post("/api/users", transport=AsyncTransport()))

        assert response.status == 201
        assert response.data == form.data()

    def test_payload_is_a_snapshot(self, form: Form) -> None:
        """Test the transport cannot mutate the form through the payload."""

        class Mutating:
            def request(self, method, url, **options):
                options["data"]["name"] = "Changed"
                return TransportResponse(status=200)

        asyncio.run(form.post("/api/users", transport=Mutating()))

        assert form["name"] == ""


class TestSubmitFailure:
    """Tests for failed submissions."""

    def test_validation_errors(self, form: Form, make_failing_transport) -> None:
        """Test a response with errors fills the error set and re-raises."""
        transport = make_failing_transport({"errors": {"name": "required"}})

        with pytest.raises(TransportError):
            asyncio.run(form.post("/api/users", transport=transport))

        assert form.busy is False
        assert form.successful is False
        assert form.errors.has("name")
        assert form.errors.first("name") == "required"

    def test_original_error_reraised(self, form: Form, make_failing_transport) -> None:
        """Test the exception raised is the transport's own."""
        transport = make_failing_transport({"message": "Not authorized"}, status=403)

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(form.post("/api/users", transport=transport))

        assert exc_info.value is transport.error
        assert form.errors.first("error") == "Not authorized"

    def test_default_message(self, form: Form, make_failing_transport) -> None:
        """Test a non-object body yields the configured default message."""
        config.configure(error_message="Try again later.")
        transport = make_failing_transport("<html>Server Error</html>", status=500)

        with pytest.raises(TransportError):
            asyncio.run(form.post("/api/users", transport=transport))

        assert form.errors.all() == {"error": "Try again later."}

    def test_network_failure_keeps_errors_empty(self, form: Form, transport_class) -> None:
        """Test a failure without a response synthesizes no error."""
        transport = transport_class(error=TransportError("connection refused"))

        with pytest.raises(TransportError):
            asyncio.run(form.post("/api/users", transport=transport))

        assert form.busy is False
        assert form.successful is False
        assert not form.errors.has_any()

    def test_other_exceptions_propagate(self, form: Form) -> None:
        """Test unexpected transport exceptions still clear busy."""

        class Broken:
            def request(self, method, url, **options):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            asyncio.run(form.post("/api/users", transport=Broken()))

        assert form.busy is False
        assert not form.errors.has_any()

    def test_bad_request_options_clear_busy(self, form: Form, transport) -> None:
        """Test a failure while building the request still clears busy."""
        with pytest.raises(ValueError):
            asyncio.run(form.post("/api/users", ["not-options"]))

        assert form.busy is False
        assert form.successful is False
        assert transport.calls == []

    def test_raw_body_config(self, form: Form, transport) -> None:
        """Test a non-mapping body in the config is sent as is."""
        asyncio.run(form.post("/api/users", {"data": "raw-body"}))

        assert transport.last["data"] == "raw-body"
        assert form.busy is False
        assert form.successful is True

    def test_resubmit_clears_errors(self, form: Form, make_failing_transport, transport) -> None:
        """Test a later submission starts from a clean error set."""
        with pytest.raises(TransportError):
            asyncio.run(
                form.post(
                    "/api/users",
                    transport=make_failing_transport({"errors": {"name": "required"}}),
                )
            )

        asyncio.run(form.post("/api/users"))

        assert form.successful is True
        assert not form.errors.has_any()


class TestFieldInteraction:
    """Tests for clearing one field's errors."""

    def test_clears_only_that_field(self, form: Form, make_failing_transport) -> None:
        """Test other fields keep their errors."""
        transport = make_failing_transport(
            {"errors": {"name": "required", "email": "taken"}}
        )
        with pytest.raises(TransportError):
            asyncio.run(form.post("/api/users", transport=transport))

        form.on_field_interaction("name")

        assert not form.errors.has("name")
        assert form.errors.first("email") == "taken"

    def test_ignores_empty_name(self, form: Form) -> None:
        """Test an input without a name clears nothing."""
        form.errors.set({"name": "required"})

        form.on_field_interaction("")
        form.on_field_interaction(None)

        assert form.errors.has("name")


class TestOverlappingSubmissions:
    """Tests for two submissions in flight on the same form."""

    def test_last_completion_wins(self, form: Form) -> None:
        """Test the submission finishing last decides the final state."""

        class Delayed:
            def __init__(self, delay: float, body=None) -> None:
                self.delay = delay
                self.body = body

            async def request(self, method, url, **options):
                await asyncio.sleep(self.delay)
                if self.body is not None:
                    raise TransportError(
                        "HTTP 422", response=TransportResponse(status=422, data=self.body)
                    )
                return TransportResponse(status=200)

        async def run() -> None:
            failing = form.post("/a", transport=Delayed(0.01, {"errors": {"name": "required"}}))
            succeeding = form.post("/b", transport=Delayed(0.05))
            await asyncio.gather(failing, succeeding, return_exceptions=True)

        asyncio.run(run())

        assert form.busy is False
        assert form.successful is True
        assert form.errors.has("name")


class TestRoute:
    """Tests for Form.route."""

    def test_uses_configured_routes(self) -> None:
        """Test routes come from the process-wide settings."""
        config.configure(routes={"users.show": "/api/users/{id}"})

        assert Form().route("users.show", 9) == "/api/users/9"
