"""Markdown rendering: front matter, HTML conversion, attributes and tags."""

from .frontmatter import FrontmatterError, FrontmatterParser
from .renderer import Document, Renderer, Rendering

__all__ = [
    "Document",
    "FrontmatterError",
    "FrontmatterParser",
    "Renderer",
    "Rendering",
]
