"""Tests for orcid_profile.navigate module."""

import pytest

from orcid_profile.navigate import dig

DOCUMENT = {
    "person": {
        "emails": {"email": [{"email": "first@example.org"}, {"email": "second@example.org"}]},
        "name": {"given-names": {"value": "John"}, "credit-name": None},
    },
}


def test_dig_mapping_path():
    assert dig(DOCUMENT, "person", "name", "given-names", "value") == "John"


def test_dig_sequence_index():
    assert dig(DOCUMENT, "person", "emails", "email", 1, "email") == "second@example.org"


def test_dig_negative_index():
    assert dig(DOCUMENT, "person", "emails", "email", -1, "email") == "second@example.org"


def test_dig_empty_path_returns_document():
    assert dig(DOCUMENT) is DOCUMENT


@pytest.mark.parametrize("path", [
    ("missing",),
    ("person", "missing", "value"),
    ("person", "name", "credit-name", "value"),    # explicit null
    ("person", "emails", "email", 5),              # out of range
    ("person", "emails", 0),                       # index into mapping
    ("person", "emails", "email", "email"),        # key into sequence
    ("person", "name", "given-names", "value", 0),  # strings are not sequences
])
def test_dig_returns_none_on_missing_or_mismatched(path):
    assert dig(DOCUMENT, *path) is None


def test_dig_none_document():
    assert dig(None, "person") is None


def test_dig_scalar_document():
    assert dig(42, "person") is None
