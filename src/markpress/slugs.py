"""
Slug validation.

A slug is the natural key used to match local documents to WordPress posts,
so every document's ``slug`` attribute is checked against a set of named
rules before a sync run starts.
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import NamedTuple

from .exceptions import SlugValidationError
from .rendering import Renderer

logger = logging.getLogger("markpress.slugs")

NO_SLUG = "No slug"


class SlugRule(NamedTuple):
    """A human-readable rule description and the predicate that enforces it."""

    description: str
    check: Callable[[str], bool]


class SlugViolation(NamedTuple):
    path: str
    slug: str | None
    violations: list[str]


DEFAULT_SLUG_RULES: tuple[SlugRule, ...] = (
    SlugRule("Cannot start with `-` or `_`", lambda slug: slug[:1] not in ("-", "_")),
    SlugRule("Cannot end with `-` or `_`", lambda slug: slug[-1:] not in ("-", "_")),
    SlugRule("Cannot have multiple `-` in a row", lambda slug: "--" not in slug),
    SlugRule(
        "Must only contain lowercase letters, numbers, hyphens, and underscores",
        lambda slug: re.fullmatch(r"[a-z0-9_-]+", slug) is not None,
    ),
)

SlugRules = Iterable[SlugRule] | Mapping[str, Callable[[str], bool]]


def _as_rules(rules: SlugRules) -> list[SlugRule]:
    if isinstance(rules, Mapping):
        return [SlugRule(desc, check) for desc, check in rules.items()]
    return [SlugRule(*rule) for rule in rules]


def slug_valid(slug: str | None, rules: SlugRules = DEFAULT_SLUG_RULES) -> bool:
    """Return True if ``slug`` is present and satisfies every rule."""
    return slug is not None and all(rule.check(slug) for rule in _as_rules(rules))


def violated_slug_rules(
    slug: str | None, rules: SlugRules = DEFAULT_SLUG_RULES
) -> list[str]:
    """Return the descriptions of every rule ``slug`` fails, in rule order."""
    if slug is None:
        return [NO_SLUG]

    return [rule.description for rule in _as_rules(rules) if not rule.check(slug)]


def verify_slugs(
    paths: Iterable[str],
    rules: SlugRules = DEFAULT_SLUG_RULES,
    renderer: Renderer | None = None,
) -> None:
    """
    Check the ``slug`` attribute of every document before syncing.

    Every violation is logged before a single error is raised.

    Args:
        paths: Paths of the documents to check
        rules: Rules to apply; defaults to DEFAULT_SLUG_RULES
        renderer: Renderer used to read front matter; defaults to a new Renderer

    Raises:
        SlugValidationError: If any document has a missing or invalid slug
        RenderError: If a document cannot be read
    """
    renderer = renderer or Renderer()
    rules = _as_rules(rules)
    found: list[SlugViolation] = []

    for path in paths:
        document = renderer.load_document(path)
        slug = document.attributes.get("slug")
        slug = str(slug) if slug is not None else None

        if not slug_valid(slug, rules):
            found.append(SlugViolation(path, slug, violated_slug_rules(slug, rules)))

    if not found:
        return

    for violation in found:
        logger.warning(
            f"The document {violation.path} has the slug {violation.slug!r} "
            f"which is invalid because: {'; '.join(violation.violations)}"
        )

    raise SlugValidationError(
        f"Invalid slugs in {len(found)} document(s). Cannot continue", found
    )


__all__ = [
    "DEFAULT_SLUG_RULES",
    "NO_SLUG",
    "SlugRule",
    "SlugViolation",
    "slug_valid",
    "verify_slugs",
    "violated_slug_rules",
]
