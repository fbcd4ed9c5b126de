"""Client for the WordPress REST API (``/wp-json/wp/v2``)."""

import logging
from typing import Any

from requests import Response, Session

from ..utils.decorators import handle_wordpress_api_errors
from ..utils.logging import mask_sensitive
from .config import WordPressConfig
from .constants import (
    DEFAULT_PER_PAGE,
    POST_LIST_PARAMS,
    TAGS_RESOURCE,
    TOTAL_PAGES_HEADER,
)

logger = logging.getLogger("markpress.wordpress")


class WordPressRestClient:
    """Thin wrapper over a requests Session bound to one WordPress site."""

    config: WordPressConfig
    session: Session

    def __init__(self, config: WordPressConfig | None = None) -> None:
        """Initialize the REST client.

        Args:
            config: Optional configuration object (will use env vars if not provided)

        Raises:
            ValueError: If configuration is invalid or required credentials are missing
        """
        self.config = config or WordPressConfig.from_env()
        self.base_url = self.config.rest_url

        self.session = Session()
        self.session.auth = (self.config.username, self.config.password)
        self.session.verify = self.config.ssl_verify
        self.session.headers.update({"Accept": "application/json"})

        logger.debug(
            f"Initialized WordPress REST client. URL: {self.base_url}, "
            f"Username: {self.config.username}, "
            f"Password (masked): {mask_sensitive(self.config.password)}"
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Response:
        url = self._url(path)
        logger.debug(f"Sending {method} request to {url}")
        response = self.session.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    @handle_wordpress_api_errors("WordPress REST API")
    def find_all(self, resource: str, per_page: int = DEFAULT_PER_PAGE) -> list[dict[str, Any]]:
        """Fetch every record of ``resource``, following the total-pages header.

        Post type collections are queried with ``status=any`` in the edit
        context so drafts and scheduled posts are included.

        Args:
            resource: Collection name, e.g. ``posts``, ``pages`` or ``tags``
            per_page: Page size

        Returns:
            All records, in server order
        """
        records: list[dict[str, Any]] = []
        query = {} if resource == TAGS_RESOURCE else dict(POST_LIST_PARAMS)
        page = 1
        while True:
            response = self._request(
                "GET", resource, params={**query, "per_page": per_page, "page": page}
            )
            records.extend(response.json())

            total_pages = int(response.headers.get(TOTAL_PAGES_HEADER, 0) or 0)
            if total_pages <= page:
                return records
            page += 1

    @handle_wordpress_api_errors("WordPress REST API")
    def create(self, resource: str, data: dict[str, Any]) -> dict[str, Any]:
        """``POST /{resource}``"""
        return self._request("POST", resource, json=data).json()

    @handle_wordpress_api_errors("WordPress REST API")
    def update(self, resource: str, record_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """``POST /{resource}/{id}``"""
        return self._request("POST", f"{resource}/{record_id}", json=data).json()

    @handle_wordpress_api_errors("WordPress REST API")
    def delete(self, resource: str, record_id: int) -> dict[str, Any]:
        """``DELETE /{resource}/{id}``; WordPress moves the record to the trash."""
        response = self._request("DELETE", f"{resource}/{record_id}")
        if response.text:
            return response.json()
        return {}

    def close(self) -> None:
        """Close HTTP session."""
        self.session.close()

    def __enter__(self) -> "WordPressRestClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
