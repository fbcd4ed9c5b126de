"""
YAML front matter parsing.

A document may open with a ``---`` fenced YAML mapping; its keys are the
document attributes (``slug``, ``tags``, ``public``, ...).
"""

import logging
import re
from typing import Any

import yaml

logger = logging.getLogger("markpress.rendering")

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontmatterError(ValueError):
    """Raised when the front matter block is not a valid YAML mapping."""


class FrontmatterParser:
    """Parses YAML front matter from markup documents."""

    def parse(self, content: str) -> tuple[dict[str, Any], str]:
        """Extract front matter and return (attributes, remaining_content).

        Raises:
            FrontmatterError: If the block is not valid YAML or not a mapping
        """
        match = FRONTMATTER_PATTERN.match(content)
        if not match:
            return {}, content

        try:
            attributes = yaml.safe_load(match.group(1)) or {}
        except yaml.YAMLError as e:
            raise FrontmatterError(f"Invalid YAML front matter: {e}") from e

        if not isinstance(attributes, dict):
            raise FrontmatterError(
                f"Front matter must be a mapping, got {type(attributes).__name__}"
            )

        logger.debug(f"Parsed front matter keys: {list(attributes)}")
        return {str(k): v for k, v in attributes.items()}, content[match.end() :]
