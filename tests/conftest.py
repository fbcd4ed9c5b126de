"""Shared pytest fixtures for markpress tests."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import yaml

from markpress.wordpress import WordPressConfig

FIXED_NOW = datetime(2024, 5, 17, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def write_document(tmp_path: Path):
    """Return a helper that writes a Markdown document with front matter."""

    def _write(
        name: str,
        attributes: dict[str, Any] | None = None,
        body: str = "# Title\n\nSome content.\n",
    ) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        text = body
        if attributes is not None:
            front_matter = yaml.safe_dump(attributes, default_flow_style=False)
            text = f"---\n{front_matter}---\n{body}"
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def wordpress_config() -> WordPressConfig:
    """Create a WordPressConfig instance for tests."""
    return WordPressConfig(
        url="https://blog.example.com/",
        username="editor",
        password="abcd efgh ijkl mnop",
        ssl_verify=True,
        blog_id=1,
    )


@pytest.fixture
def fixed_clock():
    """A clock that always returns the same instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()


def rest_post(post_id: int, slug: str, **overrides: Any) -> dict[str, Any]:
    """A post record as returned by the REST API."""
    record = {
        "id": post_id,
        "slug": slug,
        "status": "publish",
        "title": {"rendered": slug.replace("-", " ").title()},
        "content": {"rendered": "<p>Existing</p>"},
    }
    record.update(overrides)
    return record


def xmlrpc_post(post_id: int, slug: str, **overrides: Any) -> dict[str, Any]:
    """A post struct as returned by wp.getPosts."""
    record = {
        "post_id": str(post_id),
        "post_name": slug,
        "post_title": slug.replace("-", " ").title(),
        "post_status": "publish",
        "custom_fields": [],
    }
    record.update(overrides)
    return record


@pytest.fixture
def rest_post_factory():
    return rest_post


@pytest.fixture
def xmlrpc_post_factory():
    return xmlrpc_post
