from .base import Resource, ResourceTemplate
from .resource_manager import ResourceManager

__all__ = ["Resource", "ResourceTemplate", "ResourceManager"]
