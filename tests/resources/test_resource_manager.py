import logging

import pytest

from mcp_dispatch import Resource, ResourceTemplate
from mcp_dispatch.resources import ResourceManager


class TestResource:
    def test_name_defaults_to_uri(self):
        resource = Resource(uri="file:///docs/readme.md")

        assert resource.name == "file:///docs/readme.md"

    def test_to_dict_uses_wire_names(self):
        resource = Resource(uri="file:///docs/readme.md", name="readme", mime_type="text/markdown")

        assert resource.to_dict() == {
            "uri": "file:///docs/readme.md",
            "name": "readme",
            "mimeType": "text/markdown",
        }

    def test_template_to_dict(self):
        template = ResourceTemplate(uri_template="file:///logs/{date}.log", name="daily-log", description="Logs")

        assert template.to_dict() == {
            "uriTemplate": "file:///logs/{date}.log",
            "name": "daily-log",
            "description": "Logs",
        }


class TestResourceManager:
    def test_add_and_get_by_uri(self):
        resource = Resource(uri="file:///a.txt", name="a")
        manager = ResourceManager(resources=[resource])

        assert manager.get_resource("file:///a.txt") is resource
        assert manager.get_resource(resource.uri) is resource
        assert manager.get_resource("file:///b.txt") is None

    def test_duplicate_uri_replaces_earlier_resource(self, caplog: pytest.LogCaptureFixture):
        manager = ResourceManager()
        manager.add_resource(Resource(uri="file:///a.txt", name="old"))

        with caplog.at_level(logging.WARNING):
            manager.add_resource(Resource(uri="file:///a.txt", name="new"))

        assert [resource.name for resource in manager.list_resources()] == ["new"]
        assert "Resource already exists, replacing it: file:///a.txt" in caplog.text

    def test_duplicate_template_replaces_earlier_template(self):
        manager = ResourceManager(
            templates=[
                ResourceTemplate(uri_template="file:///{path}", name="old"),
                ResourceTemplate(uri_template="file:///{path}", name="new"),
            ]
        )

        assert [template.name for template in manager.list_templates()] == ["new"]
