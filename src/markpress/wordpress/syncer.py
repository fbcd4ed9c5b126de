"""
Synchronizes rendered documents to WordPress posts.

The remote post inventory is fetched once, when the syncer is constructed.
``sync`` then creates or updates one post per document, matched by slug, and
optionally deletes posts that no document produced.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from ..models import WordPressPost, WordPressTag
from ..rendering import Document, Renderer, Rendering
from .config import WordPressConfig
from .constants import (
    ATTRIBUTES_FIELD,
    DEFAULT_POST_STATUS,
    TAGS_RESOURCE,
)
from .rest import WordPressRestClient
from .xmlrpc_client import WordPressXmlRpcClient

logger = logging.getLogger("markpress.wordpress")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SyncOptions:
    """Options shared by both syncers."""

    filter: Callable[[Document], bool] = lambda document: True
    delete_not_found: bool = False
    generate_tags: bool = False
    post_status: str = DEFAULT_POST_STATUS
    logger: logging.Logger | None = None
    dry_run: bool = False
    clock: Callable[[], datetime] = _utc_now


@dataclass
class SyncResult:
    """Slugs touched by one ``sync`` run."""

    synced: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # document paths

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "synced": self.synced,
            "created": self.created,
            "updated": self.updated,
            "deleted": self.deleted,
            "skipped": self.skipped,
        }


class BaseSyncer(ABC):
    """Reconciliation loop shared by the REST and XML-RPC syncers."""

    def __init__(
        self,
        post_type: str,
        renderer: Renderer | None = None,
        options: SyncOptions | None = None,
    ) -> None:
        self.post_type = post_type
        self.renderer = renderer or Renderer()
        self.options = options or SyncOptions()
        self.logger = self.options.logger or logger

        self.posts_by_slug: dict[str, WordPressPost] = {}
        for post in self._fetch_posts():
            if post.slug:
                self.posts_by_slug[post.slug] = post
        self.logger.info(f"Got {len(self.posts_by_slug)} {post_type} from the database")

        self.tags_by_name: dict[str, WordPressTag] = {}
        if self.options.generate_tags:
            for tag in self._fetch_tags():
                self.tags_by_name[tag.name.lower()] = tag
            self.logger.info(f"Got {len(self.tags_by_name)} tags from the database")

    @abstractmethod
    def _fetch_posts(self) -> list[WordPressPost]:
        """Fetch every remote post of ``self.post_type``."""

    def _fetch_tags(self) -> list[WordPressTag]:
        return []

    @abstractmethod
    def _build_payload(
        self, rendering: Rendering, slug: str, custom_fields: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Build the transport-specific post body."""

    @abstractmethod
    def _create_post(self, payload: dict[str, Any]) -> None: ...

    @abstractmethod
    def _update_post(self, post: WordPressPost, payload: dict[str, Any]) -> None: ...

    @abstractmethod
    def _delete_post(self, post: WordPressPost) -> None: ...

    def _ensure_tags(self, tags: list[str]) -> None:
        """Make sure every tag exists remotely before the payload references it."""

    def sync(
        self, paths: Iterable[str], custom_fields: dict[str, Any] | None = None
    ) -> SyncResult:
        """
        Synchronize documents to WordPress.

        Args:
            paths: Paths of the documents, processed in order
            custom_fields: Extra custom fields stored on every post

        Returns:
            The SyncResult for this run

        Raises:
            RenderError: If a document cannot be rendered
            WordPressApiError: If any remote call fails; the run stops there
        """
        result = SyncResult()

        for path in paths:
            slug = self.sync_file_path(path, custom_fields, result)
            if slug is None:
                result.skipped.append(path)

        if self.options.delete_not_found:
            synced = set(result.synced)
            for slug, post in self.posts_by_slug.items():
                if slug in synced:
                    continue
                self.logger.info(f"Deleting missing post_name: {slug} (post #{post.id})")
                self.logger.debug(f"Post to delete: {post.to_simplified_dict()}")
                if not self.options.dry_run:
                    self._delete_post(post)
                result.deleted.append(slug)

        return result

    def sync_file_path(
        self,
        path: str,
        custom_fields: dict[str, Any] | None = None,
        result: SyncResult | None = None,
    ) -> str | None:
        """
        Create or update the post for one document.

        Returns:
            The document's slug, or None if the document was skipped
        """
        rendering = self.renderer.render(path)

        if not self.options.filter(rendering.document):
            self.logger.info(f"Skipping {path}: rejected by filter")
            return None

        slug = rendering.attribute_value("slug")
        if not slug:
            self.logger.warning(f"Could not post due to no slug for: {path}")
            return None

        self.logger.info(f"Syncing to WordPress: {rendering.title} (slug: {slug})")

        existing = self.posts_by_slug.get(slug)
        fields = self._custom_fields(rendering, custom_fields or {}, existing)

        if self.options.generate_tags:
            self._ensure_tags(rendering.tags)

        payload = self._build_payload(rendering, slug, fields)

        if existing:
            self.logger.info(f"Editing post #{existing.id} ({slug})")
            if not self.options.dry_run:
                self._update_post(existing, payload)
            if result is not None:
                result.updated.append(slug)
        else:
            self.logger.info(f"Making a new post for '{rendering.title}'")
            if not self.options.dry_run:
                self._create_post(payload)
            if result is not None:
                result.created.append(slug)

        if result is not None:
            result.synced.append(slug)
        return slug

    def _custom_fields(
        self,
        rendering: Rendering,
        custom_fields: dict[str, Any],
        existing: WordPressPost | None,
    ) -> list[dict[str, Any]]:
        """Merge caller fields with the attribute snapshot, reusing remote field ids."""
        merged = dict(custom_fields)
        merged[ATTRIBUTES_FIELD] = json.dumps(
            rendering.document.attributes, default=str, sort_keys=True
        )

        fields = []
        for key, value in merged.items():
            entry: dict[str, Any] = {"key": key, "value": value}
            if existing and (field_id := existing.custom_field_id(key)):
                entry["id"] = field_id
            fields.append(entry)
        return fields


class WordPressHttpSyncer(BaseSyncer):
    """Syncs through the REST API; tags are created and referenced by id."""

    def __init__(
        self,
        config: WordPressConfig | None,
        post_type: str,
        renderer: Renderer | None = None,
        options: SyncOptions | None = None,
        client: WordPressRestClient | None = None,
    ) -> None:
        self.client = client or WordPressRestClient(config)
        super().__init__(post_type, renderer, options)

    def _fetch_posts(self) -> list[WordPressPost]:
        return [WordPressPost.from_rest(p) for p in self.client.find_all(self.post_type)]

    def _fetch_tags(self) -> list[WordPressTag]:
        return [WordPressTag.from_rest(t) for t in self.client.find_all(TAGS_RESOURCE)]

    def _ensure_tags(self, tags: list[str]) -> None:
        missing = []
        for tag in tags:
            if tag.lower() not in self.tags_by_name and tag not in missing:
                missing.append(tag)
        if not missing:
            return

        self.logger.info(f"Found missing tags: {missing}")
        if self.options.dry_run:
            return

        for tag in missing:
            if tag.lower() in self.tags_by_name:
                continue
            response = self.client.create(
                TAGS_RESOURCE, {"name": tag, "slug": tag.lower()}
            )
            self.tags_by_name[tag.lower()] = WordPressTag.from_rest(response)

    def _build_payload(
        self, rendering: Rendering, slug: str, custom_fields: list[dict[str, Any]]
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "date": self.options.clock().isoformat(timespec="seconds"),
            "slug": slug,
            "title": rendering.title,
            "content": rendering.html,
            "status": self.options.post_status,
            "meta": {f["key"]: f["value"] for f in custom_fields},
        }

        if self.options.generate_tags:
            self.logger.debug(f"Adding tags to post body: {rendering.tags}")
            payload["tags"] = [
                self.tags_by_name[tag.lower()].id
                for tag in rendering.tags
                if tag.lower() in self.tags_by_name
            ]

        return payload

    def _create_post(self, payload: dict[str, Any]) -> None:
        self.client.create(self.post_type, payload)

    def _update_post(self, post: WordPressPost, payload: dict[str, Any]) -> None:
        self.client.update(self.post_type, post.id, payload)

    def _delete_post(self, post: WordPressPost) -> None:
        self.client.delete(self.post_type, post.id)


class WordPressSyncer(BaseSyncer):
    """Syncs through XML-RPC; tags are sent by name and resolved by WordPress."""

    def __init__(
        self,
        config: WordPressConfig | None,
        post_type: str,
        renderer: Renderer | None = None,
        options: SyncOptions | None = None,
        client: WordPressXmlRpcClient | None = None,
    ) -> None:
        self.client = client or WordPressXmlRpcClient(config)
        super().__init__(post_type, renderer, options)

    def _fetch_posts(self) -> list[WordPressPost]:
        return [
            WordPressPost.from_xmlrpc(p) for p in self.client.get_posts(self.post_type)
        ]

    def _build_payload(
        self, rendering: Rendering, slug: str, custom_fields: list[dict[str, Any]]
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "post_type": self.post_type,
            # A day in the past so the post is never scheduled in the site's timezone
            "post_date": self.options.clock() - timedelta(days=1),
            "post_content": rendering.html,
            "post_title": rendering.title,
            "post_name": slug,
            "post_status": self.options.post_status,
            "custom_fields": custom_fields,
        }

        if self.options.generate_tags:
            payload["terms_names"] = {"post_tag": list(rendering.tags)}

        return payload

    def _create_post(self, payload: dict[str, Any]) -> None:
        self.client.new_post(payload)

    def _update_post(self, post: WordPressPost, payload: dict[str, Any]) -> None:
        self.logger.debug(f"Custom fields for post #{post.id}: {payload['custom_fields']}")
        self.client.edit_post(post.id, payload)

    def _delete_post(self, post: WordPressPost) -> None:
        self.client.delete_post(post.id)
