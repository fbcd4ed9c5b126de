"""
Python-Markdown extensions used by the renderer.

Both extensions report problems through the ``MARKDOWN`` logger, which the
renderer captures and filters while converting.
"""

import logging
import os
import re
import xml.etree.ElementTree as etree

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

ENGINE_LOGGER = "MARKDOWN"

INCLUDE_PATTERN = re.compile(r"^\s*\{!\s*(?P<path>[^!]+?)\s*!\}\s*$")
HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}

logger = logging.getLogger(ENGINE_LOGGER)


class IncludePreprocessor(Preprocessor):
    """Replaces ``{! path !}`` lines with the contents of the referenced file."""

    def __init__(self, md: Markdown, base_path: str, encoding: str) -> None:
        super().__init__(md)
        self.base_path = base_path
        self.encoding = encoding

    def run(self, lines: list[str]) -> list[str]:
        return self._expand(lines, self.base_path, set())

    def _expand(self, lines: list[str], base_path: str, seen: set[str]) -> list[str]:
        result: list[str] = []
        for line in lines:
            match = INCLUDE_PATTERN.match(line)
            if not match:
                result.append(line)
                continue

            path = os.path.normpath(os.path.join(base_path, match.group("path")))
            if path in seen:
                logger.warning(f"include cycle detected: {path}")
                continue

            try:
                with open(path, encoding=self.encoding) as f:
                    included = f.read().splitlines()
            except OSError as e:
                logger.warning(f"include file not found: {path} ({e.strerror})")
                continue

            result.extend(
                self._expand(included, os.path.dirname(path), seen | {path})
            )
        return result


class HeadingSequenceTreeprocessor(Treeprocessor):
    """Warns when a heading skips a level relative to the previous heading."""

    def run(self, root: etree.Element) -> None:
        previous = 0
        for element in root.iter():
            level = HEADING_TAGS.get(element.tag)
            if level is None:
                continue
            if level > previous + 1:
                logger.warning(
                    f"section title out of sequence: expected level {previous + 1}, "
                    f"got level {level}"
                )
            previous = level


class TitleTreeprocessor(Treeprocessor):
    """Stores the text of the first level-1 heading on ``md.document_title``."""

    def run(self, root: etree.Element) -> None:
        self.md.document_title = None
        for element in root.iter("h1"):
            text = "".join(element.itertext()).strip()
            if text:
                self.md.document_title = text
                return


class IncludeExtension(Extension):
    """Resolve ``{! path !}`` includes relative to the document directory."""

    def __init__(self, **kwargs) -> None:
        self.config = {
            "base_path": [".", "Directory that include paths are relative to"],
            "encoding": ["utf-8", "Encoding of included files"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        md.preprocessors.register(
            IncludePreprocessor(
                md, self.getConfig("base_path"), self.getConfig("encoding")
            ),
            "markpress_include",
            105,
        )


class HeadingSequenceExtension(Extension):
    """Report headings that skip levels."""

    def extendMarkdown(self, md: Markdown) -> None:
        md.treeprocessors.register(
            HeadingSequenceTreeprocessor(md), "markpress_heading_sequence", 5
        )


class TitleExtension(Extension):
    """Record the first level-1 heading of the converted document."""

    def extendMarkdown(self, md: Markdown) -> None:
        md.document_title = None
        # After "unescape" (priority 0) so backslash escapes are resolved
        md.treeprocessors.register(TitleTreeprocessor(md), "markpress_title", -1)
