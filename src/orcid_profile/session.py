"""Authenticated ORCID session: the collaborator ProfileAccessor reads through."""

import json
import logging
import re
from typing import Any, Protocol

import requests

from orcid_profile import VALID_API_VERSIONS, ApiVersion
from orcid_profile.config import Config, get_config
from orcid_profile.errors import NotAuthenticatedError, UpstreamFetchError

# Module logger
logger = logging.getLogger("orcid_profile.session")

# SECURITY: ORCID ID format validation; the iD is interpolated into URLs
_ORCID_ID_PATTERN = re.compile(r'^\d{4}-\d{4}-\d{4}-\d{3}[0-9X]$')

# Write scopes are endpoint paths such as "work", "funding" or "orcid-works"
_SCOPE_PATTERN = re.compile(r'^[a-z][a-z0-9-]*(/[a-z0-9-]+)?$')

# Read endpoint per API version
PROFILE_ENDPOINTS = {
    ApiVersion.V1_2: "orcid-profile",
    ApiVersion.V2_0: "record",
}


class Session(Protocol):
    """What ProfileAccessor needs from an authenticated ORCID context."""

    def get_identifier(self) -> str: ...

    def fetch_profile(self, identifier: str | None = None, api_version: str | None = None) -> dict: ...

    def resolve_write_endpoint(self, scope: str, api_version: str, identifier: str) -> str: ...

    def get_access_token(self) -> str: ...


def validate_orcid_id(orcid_id: str) -> bool:
    """Validate ORCID ID format.

    ORCID IDs must match the pattern: XXXX-XXXX-XXXX-XXXX where X is a digit,
    and the last character can be a digit or 'X'.

    Args:
        orcid_id: The ORCID ID to validate

    Returns:
        True if valid format, False otherwise
    """
    if not orcid_id or not isinstance(orcid_id, str):
        return False
    return _ORCID_ID_PATTERN.match(orcid_id) is not None


def validate_scope(scope: str) -> bool:
    """Check that a write scope is a plain endpoint path (no traversal)."""
    if not scope or not isinstance(scope, str):
        return False
    return _SCOPE_PATTERN.match(scope) is not None


class OAuthSession:
    """Session backed by an already-issued ORCID access token.

    The authorization-code exchange happens elsewhere; this class only
    carries its result (the iD and bearer token) and talks to the API.
    """

    def __init__(
        self,
        orcid_id: str | None,
        access_token: str | None,
        config: Config | None = None,
        http: Any = None,
    ):
        """Initialize session.

        Args:
            orcid_id: ORCID iD the token was issued for
            access_token: Bearer token
            config: Configuration (default: get_config())
            http: requests-compatible client (default: a new requests.Session)
        """
        self.orcid_id = orcid_id
        self.access_token = access_token
        self.config = config or get_config()
        # Only a client created here is closed by close()
        self._owns_http = http is None
        self.http = http or requests.Session()

    def close(self) -> None:
        """Close the HTTP client if this session created it."""
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "OAuthSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @classmethod
    def from_token_response(cls, data: dict, config: Config | None = None, http: Any = None) -> "OAuthSession":
        """Build a session from ORCID's /oauth/token JSON response."""
        if data.get("name"):
            logger.debug(f"Token issued to {data['name']}")
        return cls(data.get("orcid"), data.get("access_token"), config=config, http=http)

    def get_identifier(self) -> str:
        if not self.orcid_id:
            raise NotAuthenticatedError("No ORCID iD is associated with this session")
        if not validate_orcid_id(self.orcid_id):
            raise ValueError(f"Invalid ORCID ID format: {self.orcid_id}")
        return self.orcid_id

    def get_access_token(self) -> str:
        if not self.access_token:
            raise NotAuthenticatedError("No access token is associated with this session")
        return self.access_token

    def api_url(self, api_version: str, identifier: str, endpoint: str) -> str:
        """Build https://{host}/v{version}/{identifier}/{endpoint}."""
        if api_version not in VALID_API_VERSIONS:
            raise ValueError(f"Unsupported ORCID API version: {api_version}")
        if not validate_orcid_id(identifier):
            raise ValueError(f"Invalid ORCID ID format: {identifier}")
        return f"https://{self.config.api_host}/v{api_version}/{identifier}/{endpoint}"

    def resolve_write_endpoint(self, scope: str, api_version: str, identifier: str) -> str:
        """Resolve the URL a scoped update is PUT to.

        Args:
            scope: Endpoint path granted by the token's scope, e.g. "work"
            api_version: "1.2" or "2.0"
            identifier: ORCID iD of the profile being written

        Returns:
            Absolute endpoint URL

        Raises:
            ValueError: scope, version or iD is not acceptable
        """
        if not validate_scope(scope):
            raise ValueError(f"Invalid write scope: {scope!r}")
        return self.api_url(str(api_version), identifier, scope)

    def fetch_profile(self, identifier: str | None = None, api_version: str | None = None) -> dict:
        """Fetch the raw profile document.

        Without arguments this is the legacy v1.2 call for the session's
        own iD.

        Raises:
            UpstreamFetchError: network failure, non-200 status or invalid JSON
        """
        identifier = identifier or self.get_identifier()
        api_version = ApiVersion(api_version or ApiVersion.V1_2)

        url = self.api_url(api_version, identifier, PROFILE_ENDPOINTS[api_version])
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.get_access_token()}",
        }

        logger.info(f"Fetching ORCID v{api_version} profile for {identifier}...")
        try:
            response = self.http.get(url, headers=headers, timeout=self.config.api_timeout)
        except requests.RequestException as e:
            logger.warning(f"Network error fetching ORCID profile for {identifier}: {type(e).__name__}: {e}")
            raise UpstreamFetchError(f"Network error fetching {identifier}: {e}") from e

        if response.status_code != 200:
            logger.warning(f"ORCID API returned {response.status_code} for {identifier}")
            raise UpstreamFetchError(f"ORCID API returned {response.status_code} for {identifier}")

        try:
            document = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"Failed to parse JSON response for {identifier}: {e}")
            raise UpstreamFetchError(f"Invalid JSON in ORCID response for {identifier}") from e

        logger.info(f"Successfully fetched profile for {identifier}")
        return document
