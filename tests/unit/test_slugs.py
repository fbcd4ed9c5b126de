"""Tests for slug validation."""

import pytest

from markpress.exceptions import RenderError, SlugValidationError
from markpress.slugs import (
    DEFAULT_SLUG_RULES,
    NO_SLUG,
    SlugRule,
    slug_valid,
    verify_slugs,
    violated_slug_rules,
)


class TestSlugRules:
    """Checks against the default rule set."""

    @pytest.mark.parametrize(
        "slug",
        ["my-post", "my_post", "post-2024", "a", "snake_case-and-kebab"],
    )
    def test_valid_slugs(self, slug):
        assert slug_valid(slug)
        assert violated_slug_rules(slug) == []

    def test_leading_hyphen(self):
        assert violated_slug_rules("-bad") == ["Cannot start with `-` or `_`"]

    def test_trailing_underscore(self):
        assert violated_slug_rules("bad_") == ["Cannot end with `-` or `_`"]

    def test_consecutive_hyphens(self):
        assert violated_slug_rules("bad--slug") == ["Cannot have multiple `-` in a row"]

    def test_uppercase(self):
        assert violated_slug_rules("Bad") == [
            "Must only contain lowercase letters, numbers, hyphens, and underscores"
        ]

    def test_multiple_violations_in_rule_order(self):
        assert violated_slug_rules("-Bad--") == [
            "Cannot start with `-` or `_`",
            "Cannot end with `-` or `_`",
            "Cannot have multiple `-` in a row",
            "Must only contain lowercase letters, numbers, hyphens, and underscores",
        ]

    def test_missing_slug(self):
        assert not slug_valid(None)
        assert violated_slug_rules(None) == [NO_SLUG]

    def test_empty_slug_is_invalid(self):
        assert not slug_valid("")
        assert (
            "Must only contain lowercase letters, numbers, hyphens, and underscores"
            in violated_slug_rules("")
        )

    def test_custom_rules_as_mapping(self):
        rules = {"Must be short": lambda slug: len(slug) <= 5}

        assert slug_valid("short", rules)
        assert violated_slug_rules("much-too-long", rules) == ["Must be short"]

    def test_custom_rules_as_pairs(self):
        rules = [("No digits", lambda slug: not any(c.isdigit() for c in slug))]

        assert violated_slug_rules("post-1", rules) == ["No digits"]

    def test_default_rules_are_named(self):
        assert all(isinstance(rule, SlugRule) for rule in DEFAULT_SLUG_RULES)
        assert len(DEFAULT_SLUG_RULES) == 4


class TestVerifySlugs:
    """Pre-flight checks over a set of documents."""

    def test_all_valid(self, write_document):
        paths = [
            write_document("a.md", {"slug": "first-post"}),
            write_document("b.md", {"slug": "second-post"}),
        ]

        assert verify_slugs(paths) is None

    def test_reports_every_violation(self, write_document):
        good = write_document("good.md", {"slug": "fine"})
        bad = write_document("bad.md", {"slug": "-bad"})
        missing = write_document("missing.md", {"title": "No slug here"})

        with pytest.raises(SlugValidationError) as exc_info:
            verify_slugs([good, bad, missing])

        violations = exc_info.value.violations
        assert [v.path for v in violations] == [bad, missing]
        assert violations[0].slug == "-bad"
        assert violations[0].violations == ["Cannot start with `-` or `_`"]
        assert violations[1].slug is None
        assert violations[1].violations == [NO_SLUG]
        assert "2 document(s)" in str(exc_info.value)

    def test_numeric_slug_is_checked_as_text(self, write_document):
        path = write_document("num.md", {"slug": 2024})

        verify_slugs([path])

    def test_custom_rules(self, write_document):
        path = write_document("a.md", {"slug": "fine"})

        with pytest.raises(SlugValidationError):
            verify_slugs([path], {"Must contain a digit": lambda s: any(c.isdigit() for c in s)})

    def test_unreadable_document(self, tmp_path):
        with pytest.raises(RenderError):
            verify_slugs([str(tmp_path / "nope.md")])
