"""Exceptions raised by orcid-profile."""


class OrcidProfileError(Exception):
    """Base class for all orcid-profile errors."""


class UpstreamFetchError(OrcidProfileError):
    """The profile document could not be retrieved from ORCID.

    Covers network failures, non-200 responses and undecodable bodies.
    Never retried by this package.
    """


class MalformedProfileError(OrcidProfileError):
    """The fetched document does not have the shape its API version requires."""


class NotAuthenticatedError(OrcidProfileError):
    """The session has no ORCID iD or access token."""
