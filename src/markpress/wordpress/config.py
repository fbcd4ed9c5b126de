"""Configuration module for the WordPress clients."""

import os
from dataclasses import dataclass

from ..utils.env import is_env_ssl_verify
from .constants import (
    DEFAULT_BLOG_ID,
    ENV_WORDPRESS_BLOG_ID,
    ENV_WORDPRESS_PASSWORD,
    ENV_WORDPRESS_SSL_VERIFY,
    ENV_WORDPRESS_URL,
    ENV_WORDPRESS_USERNAME,
    REST_API_PATH,
    XMLRPC_PATH,
)


@dataclass
class WordPressConfig:
    """WordPress API configuration."""

    url: str  # Site URL, e.g. https://blog.example.com
    username: str
    password: str  # Account or application password
    ssl_verify: bool = True
    blog_id: int = DEFAULT_BLOG_ID  # Only used by XML-RPC

    def __post_init__(self) -> None:
        self.url = self.url.rstrip("/")

    @property
    def rest_url(self) -> str:
        return f"{self.url}{REST_API_PATH}"

    @property
    def xmlrpc_url(self) -> str:
        return f"{self.url}{XMLRPC_PATH}"

    @classmethod
    def from_env(cls) -> "WordPressConfig":
        """Create configuration from environment variables.

        Returns:
            WordPressConfig with values from environment variables

        Raises:
            ValueError: If any required environment variable is missing
        """
        url = os.getenv(ENV_WORDPRESS_URL)
        if not url:
            raise ValueError(f"Missing required {ENV_WORDPRESS_URL} environment variable")

        username = os.getenv(ENV_WORDPRESS_USERNAME)
        password = os.getenv(ENV_WORDPRESS_PASSWORD)
        if not (username and password):
            raise ValueError(
                f"WordPress authentication requires {ENV_WORDPRESS_USERNAME} "
                f"and {ENV_WORDPRESS_PASSWORD}"
            )

        blog_id = os.getenv(ENV_WORDPRESS_BLOG_ID, str(DEFAULT_BLOG_ID))
        try:
            blog_id = int(blog_id)
        except ValueError as e:
            raise ValueError(f"{ENV_WORDPRESS_BLOG_ID} must be an integer") from e

        return cls(
            url=url,
            username=username,
            password=password,
            ssl_verify=is_env_ssl_verify(ENV_WORDPRESS_SSL_VERIFY),
            blog_id=blog_id,
        )
