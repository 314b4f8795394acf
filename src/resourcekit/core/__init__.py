"""
Resource building blocks.
"""

from .resource import Resource, ResourceMeta, ResourceType

__all__ = ["Resource", "ResourceMeta", "ResourceType"]
