"""
Markup rendering.

Loads a Markdown document with YAML front matter, converts it to HTML with
Python-Markdown and derives the attributes and tags used when publishing it.
"""

import logging
import os
import re
import warnings
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import markdown

from ..exceptions import RenderError
from .extensions import (
    ENGINE_LOGGER,
    HeadingSequenceExtension,
    IncludeExtension,
    TitleExtension,
)
from .frontmatter import FrontmatterError, FrontmatterParser

DEFAULT_MARKDOWN_OPTIONS: dict[str, Any] = {"extensions": ["extra"]}
DEFAULT_IGNORED_WARNINGS = (r"out of sequence",)

LIST_SEPARATOR = re.compile(r"\s*,\s*")


@dataclass
class Document:
    """A parsed source document, as seen by filter predicates."""

    path: str
    source: str
    body: str
    attributes: dict[str, Any] = field(default_factory=dict)
    heading: str | None = None  # first level-1 heading, known once converted

    @property
    def title(self) -> str:
        """The ``title`` attribute, else the first level-1 heading, else the file name."""
        if self.attributes.get("title") is not None:
            return str(self.attributes["title"])

        if self.heading:
            return self.heading

        return os.path.splitext(os.path.basename(self.path))[0]


class Rendering:
    """
    The result of rendering one document.

    ``html``, ``document`` and ``attributes`` are fixed at construction;
    ``tags`` and ``title`` may be reassigned by callers before publishing.
    """

    def __init__(self, html: str, document: Document, attributes: dict[str, str]):
        self._html = html
        self._document = document
        self._attributes = attributes
        self.title: str = document.title
        self.tags: list[str] = []

    @property
    def html(self) -> str:
        return self._html

    @property
    def document(self) -> Document:
        return self._document

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    def attribute_value(self, name: str, default: str | None = None) -> str | None:
        return self._attributes.get(name, default)

    def list_attribute_value(
        self, name: str, default: Iterable[str] = ()
    ) -> list[str]:
        """Split a comma-separated attribute (or YAML list) into its items."""
        if name not in self._document.attributes:
            return list(default)

        value = self._document.attributes[name]
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item).strip() for item in value if str(item).strip()]
        return [item for item in LIST_SEPARATOR.split(str(value).strip()) if item]

    def attribute_exists(self, name: str) -> bool:
        return name in self._document.attributes

    def __repr__(self) -> str:
        return f"Rendering(title={self.title!r}, path={self._document.path!r}, tags={self.tags!r})"


def _attribute_string(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


class _DiagnosticHandler(logging.Handler):
    def __init__(self, messages: list[str]) -> None:
        super().__init__(logging.WARNING)
        self.messages = messages

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@contextmanager
def capture_diagnostics() -> Iterator[list[str]]:
    """Collect conversion-engine warnings instead of letting them reach stderr."""
    messages: list[str] = []
    handler = _DiagnosticHandler(messages)
    engine_logger = logging.getLogger(ENGINE_LOGGER)
    propagate = engine_logger.propagate

    engine_logger.addHandler(handler)
    engine_logger.propagate = False
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            yield messages
        messages.extend(str(w.message) for w in caught)
    finally:
        engine_logger.removeHandler(handler)
        engine_logger.propagate = propagate


class Renderer:
    """
    Converts Markdown documents into Renderings.

    Args:
        markdown_options: Passed to ``markdown.Markdown`` (``extensions``,
            ``extension_configs``, ``output_format``, ...)
        before_conversion: Called with the raw document text; its return value
            is what gets parsed
        after_conversion: Called with the converted HTML; its return value is
            what gets published
        tag_transform: Called with the finished Rendering; its return value
            replaces the tag list
        ignored_warnings: Regular expressions for conversion warnings that are
            dropped instead of logged
        logger: Logger receiving conversion warnings
    """

    def __init__(
        self,
        markdown_options: dict[str, Any] | None = None,
        before_conversion: Callable[[str], str] | None = None,
        after_conversion: Callable[[str], str] | None = None,
        tag_transform: Callable[[Rendering], list[str]] | None = None,
        ignored_warnings: Iterable[str] = DEFAULT_IGNORED_WARNINGS,
        logger: logging.Logger | None = None,
    ) -> None:
        self.markdown_options = dict(
            DEFAULT_MARKDOWN_OPTIONS if markdown_options is None else markdown_options
        )
        self.before_conversion = before_conversion
        self.after_conversion = after_conversion
        self.tag_transform = tag_transform
        self.ignored_warnings = [re.compile(p) for p in ignored_warnings]
        self.logger = logger or logging.getLogger("markpress.rendering")
        self.frontmatter_parser = FrontmatterParser()

    def load_document(self, path: str) -> Document:
        """
        Read a document and split off its front matter, without converting it.

        Raises:
            RenderError: If the file cannot be read or its front matter is invalid
        """
        try:
            with open(path, encoding="utf-8") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise RenderError(f"Cannot read document {path}: {e}", path=path) from e

        if self.before_conversion:
            source = self.before_conversion(source)

        try:
            attributes, body = self.frontmatter_parser.parse(source)
        except FrontmatterError as e:
            raise RenderError(f"{path}: {e}", path=path) from e

        return Document(path=path, source=source, body=body, attributes=attributes)

    def render(self, path: str) -> Rendering:
        """
        Render a document to HTML and derive its attributes and tags.

        Args:
            path: Path to the Markdown document

        Returns:
            The Rendering

        Raises:
            RenderError: If the file cannot be read or the conversion fails
        """
        document = self.load_document(path)
        base_path = os.path.dirname(os.path.abspath(path))

        with capture_diagnostics() as diagnostics:
            html, document.heading = self._convert(document, base_path)
        self._report(path, diagnostics)

        if self.after_conversion:
            html = self.after_conversion(html)

        attributes = {
            key: _attribute_string(value)
            for key, value in document.attributes.items()
            if value is not None
        }

        rendering = Rendering(html, document, attributes)
        rendering.tags = rendering.list_attribute_value("tags")
        if rendering.attribute_exists("public"):
            rendering.tags.append("public")
        if rendering.attribute_exists("private"):
            rendering.tags.append("private")

        if self.tag_transform:
            rendering.tags = list(self.tag_transform(rendering))

        return rendering

    def _convert(self, document: Document, base_path: str) -> tuple[str, str | None]:
        options = dict(self.markdown_options)
        extensions = list(options.pop("extensions", []))
        extensions.append(IncludeExtension(base_path=base_path))
        extensions.append(HeadingSequenceExtension())
        extensions.append(TitleExtension())

        try:
            md = markdown.Markdown(extensions=extensions, **options)
            html = md.convert(document.body)
        except Exception as e:
            raise RenderError(
                f"Failed to convert {document.path}: {e}", path=document.path
            ) from e

        return html, md.document_title

    def _report(self, path: str, diagnostics: list[str]) -> None:
        for message in diagnostics:
            for line in message.splitlines():
                if not line.strip():
                    continue
                if any(pattern.search(line) for pattern in self.ignored_warnings):
                    continue
                self.logger.warning(f"{path}: {line}")
