"""Resource manager functionality."""

from pydantic import AnyUrl

from mcp_dispatch.resources.base import Resource, ResourceTemplate
from mcp_dispatch.utilities.logging import get_logger

logger = get_logger(__name__)


class ResourceManager:
    """Registry of resources keyed by URI and templates keyed by URI template.

    A resource or template registered under an existing key replaces the
    earlier one.
    """

    def __init__(
        self,
        warn_on_duplicate_resources: bool = True,
        *,
        resources: list[Resource] | None = None,
        templates: list[ResourceTemplate] | None = None,
    ):
        self._resources: dict[str, Resource] = {}
        self._templates: dict[str, ResourceTemplate] = {}
        self.warn_on_duplicate_resources = warn_on_duplicate_resources
        for resource in resources or []:
            self.add_resource(resource)
        for template in templates or []:
            self.add_template(template)

    def add_resource(self, resource: Resource) -> Resource:
        """Add a resource to the manager.

        Args:
            resource: A Resource instance to add

        Returns:
            The added resource.
        """
        logger.debug(
            "Adding resource",
            extra={"uri": resource.key, "resource_name": resource.name},
        )
        if resource.key in self._resources and self.warn_on_duplicate_resources:
            logger.warning(f"Resource already exists, replacing it: {resource.uri}")
        self._resources[resource.key] = resource
        return resource

    def add_template(self, template: ResourceTemplate) -> ResourceTemplate:
        if template.uri_template in self._templates and self.warn_on_duplicate_resources:
            logger.warning(f"Resource template already exists, replacing it: {template.uri_template}")
        self._templates[template.uri_template] = template
        return template

    def get_resource(self, uri: AnyUrl | str) -> Resource | None:
        """Get a concrete resource by URI."""
        return self._resources.get(str(uri))

    def list_resources(self) -> list[Resource]:
        return list(self._resources.values())

    def list_templates(self) -> list[ResourceTemplate]:
        return list(self._templates.values())
