"""
WordPress entity models.

Posts and tags arrive in two shapes: the REST API (``/wp-json/wp/v2``) uses
``id``/``slug``, the XML-RPC API uses ``post_id``/``post_name``.
"""

import logging
from typing import Any

from pydantic import Field

from .base import ApiModel

logger = logging.getLogger(__name__)


class CustomField(ApiModel):
    """A key/value metadata entry attached to a post."""

    id: str | None = None
    key: str
    value: Any = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "CustomField":
        field_id = data.get("id")
        return cls(
            id=str(field_id) if field_id is not None else None,
            key=str(data.get("key", "")),
            value=data.get("value"),
        )


def _custom_fields(data: dict[str, Any]) -> list[CustomField]:
    return [CustomField.from_api_response(f) for f in data.get("custom_fields") or []]


def _to_int(value: Any) -> int | None:
    if value in (None, ""):
        return None
    return int(value)


class WordPressPost(ApiModel):
    """
    Model representing a WordPress post of any post type.
    """

    id: int | None = None
    slug: str | None = None
    title: str | None = None
    status: str | None = None
    custom_fields: list[CustomField] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_rest(cls, data: dict[str, Any]) -> "WordPressPost":
        """
        Create a WordPressPost from a REST API record.

        Args:
            data: The post record as returned by ``GET /wp-json/wp/v2/{type}``

        Returns:
            A WordPressPost instance
        """
        title = data.get("title")
        if isinstance(title, dict):
            title = title.get("rendered")

        return cls(
            id=_to_int(data.get("id")),
            slug=data.get("slug"),
            title=title,
            status=data.get("status"),
            custom_fields=_custom_fields(data),
            raw=data,
        )

    @classmethod
    def from_xmlrpc(cls, data: dict[str, Any]) -> "WordPressPost":
        """
        Create a WordPressPost from an XML-RPC ``wp.getPosts`` record.

        Args:
            data: The post struct

        Returns:
            A WordPressPost instance
        """
        return cls(
            id=_to_int(data.get("post_id")),
            slug=data.get("post_name"),
            title=data.get("post_title"),
            status=data.get("post_status"),
            custom_fields=_custom_fields(data),
            raw=data,
        )

    def custom_field_id(self, key: str) -> str | None:
        """Return the remote id of the custom field stored under ``key``, if any."""
        for field in self.custom_fields:
            if field.key == key:
                return field.id
        return None


class WordPressTag(ApiModel):
    """Model representing a WordPress ``post_tag`` term."""

    id: int | None = None
    name: str
    slug: str | None = None

    @classmethod
    def from_rest(cls, data: dict[str, Any]) -> "WordPressTag":
        return cls(
            id=_to_int(data.get("id")),
            name=str(data.get("name", "")),
            slug=data.get("slug"),
        )
