"""Tests for request dispatch on Server: envelopes, capability gating and error normalization."""

import pytest
from pydantic import ValidationError

from mcp_dispatch import (
    Configuration,
    ErrorKind,
    HandlerError,
    Method,
    MissingRequiredCapabilityError,
    Prompt,
    Resource,
    ResourceTemplate,
    Server,
    ServerCapabilities,
    Tool,
)


class TestInitialize:
    def test_initialize_result(self, server: Server):
        assert server.dispatch("initialize", {}) == {
            "protocolVersion": "2024-11-05",
            "capabilities": {
                "tools": {"listChanged": True},
                "prompts": {"listChanged": True},
                "resources": {"listChanged": True},
            },
            "serverInfo": {"name": "test-server", "version": "1.2.3"},
        }

    def test_initialize_uses_configured_protocol_version_and_instructions(self):
        server = Server(
            configuration=Configuration(protocol_version="2025-03-26"),
            instructions="Be nice",
            capabilities={"tools": {}},
        )

        result = server.dispatch(Method.INITIALIZE)

        assert result["protocolVersion"] == "2025-03-26"
        assert result["capabilities"] == {"tools": {}}
        assert result["serverInfo"] == {"name": "model_context_protocol", "version": "0.1.0"}
        assert result["instructions"] == "Be nice"

    def test_ping(self, server: Server):
        assert server.dispatch("ping") == {}


class TestListEnvelopes:
    def test_tools_list(self, server: Server):
        server.add_tool(Tool.from_function(lambda: "ok", name="echo", description="Echo"))

        assert server.dispatch("tools/list") == {
            "tools": [{"name": "echo", "description": "Echo", "inputSchema": {"type": "object", "properties": {}}}]
        }

    def test_prompts_list(self, server: Server):
        server.add_prompt(Prompt.from_function(lambda arguments: "hi", name="hello", description="Say hi"))

        assert server.dispatch("prompts/list") == {
            "prompts": [{"name": "hello", "description": "Say hi", "arguments": []}]
        }

    def test_resources_and_templates_list(self):
        server = Server(
            resources=[Resource(uri="file:///a.txt", name="a")],
            resource_templates=[ResourceTemplate(uri_template="file:///{name}", name="files")],
        )

        assert server.dispatch("resources/list") == {"resources": [{"uri": "file:///a.txt", "name": "a"}]}
        assert server.dispatch("resources/templates/list") == {
            "resourceTemplates": [{"uriTemplate": "file:///{name}", "name": "files"}]
        }

    def test_resources_read_defaults_to_no_content(self, server: Server, instrumentation):
        assert server.dispatch("resources/read", {"uri": "file:///a.txt"}) == {"contents": []}
        assert instrumentation.last["method"] == "resources/read"
        assert instrumentation.last["resource_uri"] == "file:///a.txt"

    def test_overridden_list_handler_is_still_wrapped(self, server: Server):
        @server.list_tools()
        def list_tools(params):
            return [{"name": "virtual"}]

        assert server.dispatch("tools/list") == {"tools": [{"name": "virtual"}]}

    def test_other_results_are_returned_raw(self, server: Server):
        server.define_custom_method("sum", lambda params: params["a"] + params["b"])

        assert server.dispatch("sum", {"a": 1, "b": 2}) == 3


class TestUnknownMethods:
    def test_unknown_method_returns_none(self, server: Server, instrumentation, reporter):
        assert server.dispatch("made/up", {"x": 1}) is None
        assert server.resolve("made/up") is None

        assert instrumentation.last["method"] == "unsupported_method"
        assert reporter.reports == []

    def test_no_op_methods_return_none(self):
        server = Server(
            capabilities={"resources": {"subscribe": True}, "completions": {}, "logging": {}},
        )

        for method in ("resources/subscribe", "resources/unsubscribe", "completion/complete", "logging/setLevel"):
            assert server.has_handler(method)
            assert server.dispatch(method, {}) is None


class TestCapabilityGate:
    def test_missing_capability_raises_before_handler_runs(self, reporter, instrumentation):
        server = Server(
            configuration=Configuration(exception_reporter=reporter, instrumentation_callback=instrumentation),
            capabilities={"prompts": {}},
        )
        called = []
        server.list_tools()(lambda params: called.append(params))

        with pytest.raises(MissingRequiredCapabilityError) as exc_info:
            server.dispatch("tools/list")

        assert exc_info.value.capability == "tools"
        assert called == []
        assert reporter.reports == []
        assert instrumentation.calls == []

    def test_default_capabilities_do_not_include_logging(self, server: Server):
        with pytest.raises(MissingRequiredCapabilityError):
            server.dispatch("logging/setLevel", {"level": "info"})

    def test_custom_methods_need_no_capability(self):
        server = Server(capabilities={})
        server.define_custom_method("custom/echo", lambda params: params)

        assert server.dispatch("custom/echo", {"a": 1}) == {"a": 1}

    def test_capabilities_are_read_only(self, server: Server):
        with pytest.raises(AttributeError):
            server.capabilities = ServerCapabilities()  # type: ignore[misc]
        with pytest.raises(ValidationError):
            server.capabilities.tools = None  # type: ignore[misc]

    def test_nested_capability_flags_are_read_only(self, server: Server):
        server.capabilities.tools["listChanged"] = False  # type: ignore[index]
        server.capabilities.feature("prompts")["listChanged"] = False

        capabilities = server.dispatch("initialize")["capabilities"]
        assert capabilities["tools"] == {"listChanged": True}
        assert capabilities["prompts"] == {"listChanged": True}

    def test_caller_capabilities_are_copied(self, configuration: Configuration):
        declared = ServerCapabilities(resources={"subscribe": True})
        server = Server(configuration=configuration, capabilities=declared)

        declared.resources["subscribe"] = False  # type: ignore[index]

        assert server.dispatch("resources/subscribe", {"uri": "file:///a"}) is None


class TestErrorNormalization:
    def test_handler_error_is_reraised_unchanged(self, server: Server, reporter, instrumentation):
        error = HandlerError("quota exceeded", {"a": 1}, error_type="quota_exceeded")

        def failing(params):
            raise error

        server.define_custom_method("custom/fail", failing)

        with pytest.raises(HandlerError) as exc_info:
            server.dispatch("custom/fail", {"a": 1})

        assert exc_info.value is error
        assert reporter.reports == [(error, {"request": {"a": 1}})]
        assert instrumentation.last["error"] == "quota_exceeded"

    def test_other_errors_become_internal_errors(self, server: Server, reporter, instrumentation):
        cause = ZeroDivisionError("division by zero")

        def failing(params):
            raise cause

        server.define_custom_method("custom/divide", failing)

        with pytest.raises(HandlerError) as exc_info:
            server.dispatch("custom/divide", {"n": 0})

        error = exc_info.value
        assert str(error) == "Internal error handling custom/divide request"
        assert error.error_type is ErrorKind.INTERNAL_ERROR
        assert error.original_error is cause
        assert error.__cause__ is cause
        assert error.request == {"n": 0}
        # the reporter sees the original exception, once
        assert reporter.reports == [(cause, {"request": {"n": 0}})]
        assert instrumentation.last["error"] == "internal_error"

    def test_missing_params_are_passed_as_empty_dict(self, server: Server):
        received = []
        server.define_custom_method("custom/params", lambda params: received.append(params))

        server.dispatch("custom/params")

        assert received == [{}]

    def test_successful_call_is_instrumented(self, server: Server, instrumentation):
        server.dispatch("ping")

        assert instrumentation.last["method"] == "ping"
        assert "error" not in instrumentation.last
        assert instrumentation.last["duration"] >= 0
