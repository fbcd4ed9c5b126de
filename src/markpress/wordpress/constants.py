"""Constants for the WordPress integration."""

from typing import Final

# Environment variable names
ENV_WORDPRESS_URL: Final[str] = "WORDPRESS_URL"
ENV_WORDPRESS_USERNAME: Final[str] = "WORDPRESS_USERNAME"
ENV_WORDPRESS_PASSWORD: Final[str] = "WORDPRESS_PASSWORD"
ENV_WORDPRESS_SSL_VERIFY: Final[str] = "WORDPRESS_SSL_VERIFY"
ENV_WORDPRESS_BLOG_ID: Final[str] = "WORDPRESS_BLOG_ID"
ENV_WORDPRESS_POST_TYPE: Final[str] = "WORDPRESS_POST_TYPE"
ENV_MARKPRESS_DRY_RUN: Final[str] = "MARKPRESS_DRY_RUN"

# API endpoints
REST_API_PATH: Final[str] = "/wp-json/wp/v2"
XMLRPC_PATH: Final[str] = "/xmlrpc.php"
TOTAL_PAGES_HEADER: Final[str] = "X-WP-TotalPages"
TAGS_RESOURCE: Final[str] = "tags"
# Post collections only list published posts unless asked for every status
POST_LIST_PARAMS: Final[dict[str, str]] = {"status": "any", "context": "edit"}

# Default values
DEFAULT_BLOG_ID: Final[int] = 1
DEFAULT_PER_PAGE: Final[int] = 100
DEFAULT_POST_STATUS: Final[str] = "draft"
DEFAULT_REST_POST_TYPE: Final[str] = "posts"
DEFAULT_XMLRPC_POST_TYPE: Final[str] = "post"

# Custom field holding a JSON snapshot of the document attributes
ATTRIBUTES_FIELD: Final[str] = "document_attributes"
