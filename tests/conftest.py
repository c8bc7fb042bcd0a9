"""Shared pytest fixtures for orcid_profile tests."""

import copy
import logging
from unittest.mock import Mock

import pytest

from orcid_profile.config import Config

TEST_ORCID = "0000-0000-0000-0000"


def _value(text):
    return {"value": text}


V12_COMPLETE = {
    "message-version": "1.2",
    "orcid-profile": {
        "orcid-identifier": {
            "uri": "http://sandbox.orcid.org/0000-0000-0000-0000",
            "path": TEST_ORCID,
            "host": "sandbox.orcid.org",
        },
        "orcid-bio": {
            "personal-details": {
                "given-names": _value("Test"),
                "family-name": _value("User"),
                "credit-name": None,
            },
            "biography": _value("Researcher at a test institution."),
            "contact-details": {
                "email": [
                    {
                        "value": "testuser@gmail.com",
                        "primary": True,
                        "current": True,
                        "verified": True,
                        "visibility": "LIMITED",
                    },
                    {
                        "value": "test.user@example.edu",
                        "primary": False,
                        "current": True,
                        "verified": False,
                        "visibility": "LIMITED",
                    },
                ],
                "address": {"country": _value("US")},
            },
        },
        "type": "USER",
    },
}

V12_BASIC = {
    "message-version": "1.2",
    "orcid-profile": {
        "orcid-identifier": {"path": TEST_ORCID},
        "orcid-bio": {
            "personal-details": {
                "given-names": _value("Test"),
                "family-name": _value("User"),
            },
        },
        "type": "USER",
    },
}

V20_COMPLETE = {
    "orcid-identifier": {
        "uri": "http://orcid.org/0000-0000-0000-0000",
        "path": TEST_ORCID,
        "host": "orcid.org",
    },
    "person": {
        "name": {
            "given-names": _value("John"),
            "family-name": _value("Smith"),
            "credit-name": _value("J. Smith"),
            "visibility": "PUBLIC",
        },
        "emails": {
            "email": [
                {
                    "email": "john_smith@genericurl.com",
                    "primary": True,
                    "verified": True,
                    "visibility": "LIMITED",
                },
                {
                    "email": "jsmith@example.org",
                    "primary": False,
                    "verified": True,
                    "visibility": "LIMITED",
                },
            ],
            "path": "/0000-0000-0000-0000/email",
        },
        "biography": {"content": "Researcher.", "visibility": "PUBLIC"},
    },
    "activities-summary": {"works": {"group": []}},
    "path": "/0000-0000-0000-0000",
}

V20_BASIC = {
    "orcid-identifier": {"path": TEST_ORCID},
    "person": {
        "name": {
            "given-names": _value("John"),
            "family-name": _value("Smith"),
        },
        "emails": {"email": [], "path": "/0000-0000-0000-0000/email"},
    },
    "path": "/0000-0000-0000-0000",
}


@pytest.fixture
def v12_complete():
    return copy.deepcopy(V12_COMPLETE)


@pytest.fixture
def v12_basic():
    return copy.deepcopy(V12_BASIC)


@pytest.fixture
def v20_complete():
    return copy.deepcopy(V20_COMPLETE)


@pytest.fixture
def v20_basic():
    return copy.deepcopy(V20_BASIC)


@pytest.fixture
def make_session():
    """Factory for a mock Session returning a given document."""
    def _make(document, orcid_id=TEST_ORCID, token="test-token"):
        session = Mock()
        session.get_identifier.return_value = orcid_id
        session.fetch_profile.return_value = document
        session.get_access_token.return_value = token
        session.resolve_write_endpoint.side_effect = (
            lambda scope, version, identifier:
                f"https://api.sandbox.orcid.org/v{version}/{identifier}/{scope}"
        )
        return session
    return _make


@pytest.fixture
def sandbox_config(monkeypatch):
    """Config for the sandbox member API, isolated from the environment."""
    for name in ("ORCID_ENVIRONMENT", "ORCID_API_LEVEL", "ORCID_API_VERSION", "ORCID_API_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    config = Config()
    config._config["api"]["environment"] = "sandbox"
    config._config["api"]["write_timeout"] = 15
    return config


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging() during a test."""
    yield
    logger = logging.getLogger("orcid_profile")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
