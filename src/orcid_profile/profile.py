"""Version-independent access to an ORCID researcher profile.

ORCID served two incompatible JSON shapes for the same data:

    v1.2  {"orcid-profile": {"orcid-bio": {"personal-details": ..., "contact-details": ...}}}
    v2.0  {"person": {"name": ..., "emails": ...}}

ProfileAccessor hides the difference. Each version is described by a
ProfileSchema holding its field paths; the accessor looks the schema up
once at construction and never branches on the version afterwards.
"""

import logging
import re
import tempfile
from dataclasses import dataclass
from typing import Any

import requests

from orcid_profile import ApiVersion
from orcid_profile.config import Config, get_config
from orcid_profile.errors import MalformedProfileError, UpstreamFetchError
from orcid_profile.navigate import dig
from orcid_profile.schema import OrcidBio, Person
from orcid_profile.session import Session

# Module logger
logger = logging.getLogger("orcid_profile.profile")

ORCID_XML_CONTENT_TYPE = "application/vnd.orcid+xml"

_BACKSLASH_ESCAPE = re.compile(r'\\(.?)', re.DOTALL)


@dataclass(frozen=True)
class ProfileSchema:
    """Where one API version keeps the fields ProfileAccessor exposes.

    Paths are relative to the raw profile (after unwrapping).
    """

    version: ApiVersion
    legacy_fetch: bool           # fetch_profile() called without arguments
    wrapper_key: str | None      # key the whole document is nested under
    person_key: str | None       # "person" subtree (v2.0 only)
    bio_key: str | None          # "orcid-bio" subtree (v1.2 only)
    email_path: tuple
    name_path: tuple

    @property
    def section_key(self) -> str:
        return self.person_key or self.bio_key


SCHEMAS = {
    ApiVersion.V1_2: ProfileSchema(
        version=ApiVersion.V1_2,
        legacy_fetch=True,
        wrapper_key="orcid-profile",
        person_key=None,
        bio_key="orcid-bio",
        email_path=("contact-details", "email", 0, "value"),
        name_path=("personal-details",),
    ),
    ApiVersion.V2_0: ProfileSchema(
        version=ApiVersion.V2_0,
        legacy_fetch=False,
        wrapper_key=None,
        person_key="person",
        bio_key=None,
        email_path=("emails", "email", 0, "email"),
        name_path=("name",),
    ),
}


def check_schemas(schemas: dict) -> None:
    """Raise RuntimeError unless every ApiVersion has a schema with exactly one section key."""
    missing = set(ApiVersion) - set(schemas)
    if missing:
        raise RuntimeError(f"No ProfileSchema for API version(s): {sorted(v.value for v in missing)}")
    for version, schema in schemas.items():
        if (schema.person_key is None) == (schema.bio_key is None):
            raise RuntimeError(f"ProfileSchema for v{version} needs exactly one of person_key and bio_key")


check_schemas(SCHEMAS)


def unescape_backslashes(text: str) -> str:
    """Remove one layer of backslash escaping.

    A backslash followed by any character yields that character, except
    that "\\0" yields NUL. A trailing lone backslash is dropped.
    """
    def _replace(match: re.Match) -> str:
        char = match.group(1)
        return "\x00" if char == "0" else char

    return _BACKSLASH_ESCAPE.sub(_replace, text)


@dataclass(frozen=True)
class SaveResult:
    """Outcome of ProfileAccessor.save().

    Success and failure are distinct cases, so an empty response body
    on success is still a success. Check ``ok`` before using ``body``.
    """

    ok: bool
    status_code: int | None = None
    body: str | None = None
    reason: str | None = None

    @classmethod
    def success(cls, status_code: int, body: str) -> "SaveResult":
        return cls(ok=True, status_code=status_code, body=body)

    @classmethod
    def failure(cls, reason: str, status_code: int | None = None, body: str | None = None) -> "SaveResult":
        return cls(ok=False, status_code=status_code, body=body, reason=reason)


class ProfileAccessor:
    """Read accessors and one write operation over a single ORCID profile.

    Meant to be short-lived: build one per request, use it from one
    caller, then drop it. The raw profile is fetched on first use and
    cached for the life of the instance.

    Example:
        >>> profile = ProfileAccessor(session, ApiVersion.V1_2)
        >>> profile.full_name()
        'Test User'
    """

    def __init__(
        self,
        session: Session,
        api_version: ApiVersion | str = ApiVersion.V2_0,
        config: Config | None = None,
    ):
        """Initialize accessor. Performs no I/O.

        Args:
            session: Authenticated session collaborator
            api_version: ApiVersion or its string value ("1.2", "2.0")
            config: Configuration for save() timeouts (default: get_config() on first save)

        Raises:
            ValueError: api_version is not a supported version
        """
        self._session = session
        self._api_version = ApiVersion(api_version)
        self._schema = SCHEMAS[self._api_version]
        self._config = config
        self._raw: dict | None = None

    @property
    def api_version(self) -> ApiVersion:
        return self._api_version

    def identifier(self) -> str:
        """Return the ORCID iD exactly as the session reports it."""
        return self._session.get_identifier()

    def raw_profile(self) -> dict:
        """Return the raw profile document, fetching it on first call.

        Raises:
            UpstreamFetchError: the session could not retrieve the document
            MalformedProfileError: the document lacks its version's wrapper
        """
        if self._raw is not None:
            return self._raw

        schema = self._schema
        fetch_args = () if schema.legacy_fetch else (self.identifier(), schema.version.value)
        try:
            document = self._session.fetch_profile(*fetch_args)
        except UpstreamFetchError:
            raise
        except Exception as e:
            logger.warning(f"Failed to fetch ORCID v{schema.version} profile: {type(e).__name__}: {e}")
            raise UpstreamFetchError(f"Failed to fetch ORCID v{schema.version} profile: {e}") from e

        if schema.wrapper_key is not None:
            document = dig(document, schema.wrapper_key)
            if document is None:
                logger.error(f"ORCID v{schema.version} response has no '{schema.wrapper_key}' key")
                raise MalformedProfileError(
                    f"ORCID v{schema.version} response has no '{schema.wrapper_key}' key"
                )

        if not isinstance(document, dict):
            logger.error(f"ORCID v{schema.version} profile is a {type(document).__name__}, not an object")
            raise MalformedProfileError(
                f"ORCID v{schema.version} profile is a {type(document).__name__}, not an object"
            )

        self._raw = document
        return self._raw

    def bio(self) -> OrcidBio | None:
        """Return the v1.2 "orcid-bio" subtree; None for other versions."""
        if self._schema.bio_key is None:
            return None
        return self.raw_profile().get(self._schema.bio_key)

    def person(self) -> Person | None:
        """Return the v2.0 "person" subtree; None for other versions."""
        if self._schema.person_key is None:
            return None
        return self.raw_profile().get(self._schema.person_key)

    def _section(self) -> Any:
        return self.raw_profile().get(self._schema.section_key)

    def email(self) -> str | None:
        """Return the first email address on the profile, or None.

        Researchers often hide contact details, so any missing link in
        the path is a normal outcome, not an error.
        """
        email = dig(self._section(), *self._schema.email_path)
        return email if isinstance(email, str) else None

    def full_name(self) -> str:
        """Return "<given names> <family name>".

        Raises:
            MalformedProfileError: either part of the name is missing
        """
        details = dig(self._section(), *self._schema.name_path)
        given = dig(details, "given-names", "value")
        family = dig(details, "family-name", "value")

        if not isinstance(given, str) or not isinstance(family, str):
            missing = [
                label for label, value in (("given-names", given), ("family-name", family))
                if not isinstance(value, str)
            ]
            logger.error(f"ORCID v{self._schema.version} profile is missing {', '.join(missing)}")
            raise MalformedProfileError(
                f"ORCID v{self._schema.version} profile is missing {', '.join(missing)}"
            )

        return f"{given} {family}"

    def save(self, scope: str, xml: str, unescape: bool = False) -> SaveResult:
        """PUT an ORCID XML message to the endpoint for ``scope``.

        Not idempotent: some scopes append instead of replacing.

        Args:
            scope: Endpoint path the token is authorized for, e.g. "work"
            xml: ORCID XML message
            unescape: Strip one layer of backslash escaping from ``xml`` first

        Returns:
            SaveResult; a transport failure or non-2xx status is a failed
            result, never an exception

        Raises:
            NotAuthenticatedError: the session has no iD or token
        """
        identifier = self.identifier()
        endpoint = self._session.resolve_write_endpoint(scope, self._api_version.value, identifier)

        if unescape:
            xml = unescape_backslashes(xml)
        payload = xml.encode("utf-8")

        headers = {
            "Content-Type": ORCID_XML_CONTENT_TYPE,
            "Authorization": f"Bearer {self._session.get_access_token()}",
            "Content-Length": str(len(payload)),
        }

        config = self._config or get_config()
        logger.info(f"Saving {len(payload)} bytes to {scope} for {identifier}...")

        with tempfile.TemporaryFile() as staging:
            staging.write(payload)
            staging.seek(0)
            try:
                response = requests.put(
                    endpoint, data=staging, headers=headers, timeout=config.write_timeout
                )
            except requests.RequestException as e:
                logger.warning(f"Network error saving {scope} for {identifier}: {type(e).__name__}: {e}")
                return SaveResult.failure(f"{type(e).__name__}: {e}")

        if not 200 <= response.status_code < 300:
            logger.warning(f"ORCID API returned {response.status_code} saving {scope} for {identifier}")
            return SaveResult.failure(
                f"ORCID API returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info(f"Saved {scope} for {identifier} ({response.status_code})")
        return SaveResult.success(response.status_code, response.text)
