import logging

import pytest

from mcp_dispatch.tools import Tool, ToolManager


def make_tool(name: str, result: str = "ok") -> Tool:
    return Tool.from_function(lambda: result, name=name)


class TestToolManager:
    def test_add_and_get(self):
        manager = ToolManager()
        tool = manager.add_tool(make_tool("echo"))

        assert manager.get_tool("echo") is tool
        assert manager.get_tool("missing") is None
        assert "echo" in manager
        assert len(manager) == 1

    def test_initial_tools_keep_registration_order(self):
        manager = ToolManager(tools=[make_tool("b"), make_tool("a")])

        assert [tool.name for tool in manager.list_tools()] == ["b", "a"]

    def test_duplicate_name_replaces_earlier_tool(self, caplog: pytest.LogCaptureFixture):
        manager = ToolManager()
        manager.add_tool(make_tool("echo", "first"))

        with caplog.at_level(logging.WARNING):
            replacement = manager.add_tool(make_tool("echo", "second"))

        assert manager.get_tool("echo") is replacement
        assert len(manager) == 1
        assert "Tool already exists, replacing it: echo" in caplog.text

    def test_duplicate_warning_can_be_disabled(self, caplog: pytest.LogCaptureFixture):
        manager = ToolManager(warn_on_duplicate_tools=False)
        manager.add_tool(make_tool("echo"))

        with caplog.at_level(logging.WARNING):
            manager.add_tool(make_tool("echo"))

        assert "already exists" not in caplog.text
