"""
Unit tests for task request body validation.

Tests required/optional fields, title length boundaries (after trimming),
strict boolean checks, and that all violations are collected.
"""

import copy

import pytest

from tasklist.core.tasks import Violation, validate_create, validate_update


def _fields(violations: list[Violation]) -> list[str]:
    return [v.field for v in violations]


class TestValidateCreate:
    """Test rules for POST bodies."""

    def test_valid_body(self):
        """Test that a complete body passes."""
        assert validate_create({"title": "Buy milk", "completed": False}) == []

    @pytest.mark.parametrize(
        "length, ok",
        [(0, False), (1, True), (200, True), (201, False)],
    )
    def test_title_length_boundaries(self, length, ok):
        """Test title lengths 0, 1, 200 and 201."""
        violations = validate_create({"title": "x" * length, "completed": False})
        assert (violations == []) is ok

    def test_title_length_counts_trimmed_text(self):
        """Test that surrounding whitespace does not count."""
        padded = "   " + "x" * 200 + "   "
        assert validate_create({"title": padded, "completed": False}) == []

    def test_whitespace_only_title_rejected(self):
        """Test that a blank title is treated as empty."""
        violations = validate_create({"title": "   ", "completed": True})
        assert violations == [Violation(field="title", message="Title is required")]

    def test_over_length_message(self):
        """Test the message for a title that is too long."""
        violations = validate_create({"title": "x" * 201, "completed": True})
        assert violations[0].message == "Title must be between 1 and 200 characters"

    @pytest.mark.parametrize("title", [None, 42, True, ["a"], {"a": 1}])
    def test_non_string_title_rejected(self, title):
        """Test that the title must be a JSON string."""
        violations = validate_create({"title": title, "completed": False})
        assert violations == [Violation(field="title", message="Title must be a string")]

    @pytest.mark.parametrize("completed", ["false", "true", 0, 1, None, "", [], {}])
    def test_non_boolean_completed_rejected(self, completed):
        """Test that boolean-like strings and numbers are not coerced."""
        violations = validate_create({"title": "ok", "completed": completed})
        assert violations == [
            Violation(field="completed", message="completed must be a boolean")
        ]

    def test_missing_fields_all_reported(self):
        """Test that every violation is collected, in field order."""
        violations = validate_create({})
        assert violations == [
            Violation(field="title", message="Title is required"),
            Violation(field="completed", message="completed is required"),
        ]

    def test_both_invalid_reported_together(self):
        """Test that checks do not stop at the first failing field."""
        assert _fields(validate_create({"title": "", "completed": "no"})) == [
            "title",
            "completed",
        ]

    def test_none_body_is_empty_object(self):
        """Test that a missing body reports both required fields."""
        assert _fields(validate_create(None)) == ["title", "completed"]

    @pytest.mark.parametrize("body", [[], ["title"], "text", 3, True])
    def test_non_object_body(self, body):
        """Test that a non-object JSON body is a single violation."""
        assert validate_create(body) == [
            Violation(field="body", message="Request body must be a JSON object")
        ]

    def test_extra_fields_ignored(self):
        """Test that unknown fields such as id are not validated."""
        assert validate_create({"title": "a", "completed": True, "id": "bogus"}) == []

    def test_does_not_mutate_input(self):
        """Test that validation leaves the body untouched."""
        body = {"title": "  padded  ", "completed": "false"}
        snapshot = copy.deepcopy(body)
        validate_create(body)
        assert body == snapshot


class TestValidateUpdate:
    """Test rules for PUT bodies."""

    def test_empty_body_is_valid(self):
        """Test that every field is optional."""
        assert validate_update({}) == []
        assert validate_update(None) == []

    def test_completed_only(self):
        """Test a patch with only completed."""
        assert validate_update({"completed": True}) == []

    def test_title_only(self):
        """Test a patch with only a title."""
        assert validate_update({"title": "New title"}) == []

    @pytest.mark.parametrize(
        "length, ok",
        [(0, False), (1, True), (200, True), (201, False)],
    )
    def test_present_title_follows_create_rules(self, length, ok):
        """Test the same boundaries apply when title is present."""
        assert (validate_update({"title": "x" * length}) == []) is ok

    def test_present_completed_must_be_boolean(self):
        """Test that a string boolean is rejected on update too."""
        assert _fields(validate_update({"completed": "true"})) == ["completed"]

    def test_explicit_null_title_rejected(self):
        """Test that null is not a way to skip a present field."""
        assert _fields(validate_update({"title": None})) == ["title"]

    def test_non_object_body(self):
        """Test that a JSON array is rejected."""
        assert _fields(validate_update([1, 2])) == ["body"]
