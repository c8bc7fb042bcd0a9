"""ORCID profile schemas - subset of fields used by this repository.

Two incompatible generations of the ORCID JSON are supported:

    v1.2 (legacy): https://pub.orcid.org/v1.2/{orcid}/orcid-profile
        Whole document wrapped in "orcid-profile"; biographical data
        lives under "orcid-bio".
    v2.0:          https://pub.orcid.org/v2.0/{orcid}/record
        No wrapper; biographical data lives under "person".

Schema documentation:
    https://github.com/ORCID/ORCID-Source/tree/master/orcid-model/src/main/resources/orcid-message-1.2.xsd
    https://github.com/ORCID/orcid-model/tree/master/src/main/resources/record_2.0

Python identifiers cannot contain hyphens, so keys such as "given-names"
are spelled given_names below. The navigation paths in profile.py use
the real hyphenated keys.
"""

from typing import TypedDict


# =============================================================================
# Value Wrappers
# ORCID wraps most simple values in {"value": ...} objects
# =============================================================================

class StringValue(TypedDict, total=False):
    """Wrapper for string values."""
    value: str


# =============================================================================
# v1.2 (orcid-bio rooted)
# =============================================================================

class ContactEmailV12(TypedDict, total=False):
    """Email entry in contact details.

    Path: orcid-profile/orcid-bio/contact-details/email[]
    """
    value: str        # "testuser@gmail.com"
    primary: bool
    current: bool
    verified: bool
    visibility: str   # "PUBLIC", "LIMITED", "PRIVATE"


class ContactDetailsV12(TypedDict, total=False):
    """Contact details; absent when the researcher hides them.

    Path: orcid-profile/orcid-bio/contact-details
    """
    email: list[ContactEmailV12]
    address: dict


class PersonalDetailsV12(TypedDict, total=False):
    """Name block. ORCID requires a name to register an iD.

    Path: orcid-profile/orcid-bio/personal-details
    """
    given_names: StringValue
    family_name: StringValue
    credit_name: StringValue


class OrcidBio(TypedDict, total=False):
    """Biographical section of a v1.2 profile.

    Path: orcid-profile/orcid-bio
    """
    personal_details: PersonalDetailsV12
    biography: StringValue
    contact_details: ContactDetailsV12
    keywords: dict


class OrcidProfileV12(TypedDict, total=False):
    """Contents of the "orcid-profile" wrapper.

    Path: orcid-profile
    """
    orcid_identifier: dict
    orcid_bio: OrcidBio
    orcid_activities: dict
    type: str  # "USER"


# =============================================================================
# v2.0 (person rooted)
# =============================================================================

class EmailV20(TypedDict, total=False):
    """Email entry.

    Path: person/emails/email[]
    """
    email: str        # "john_smith@genericurl.com"
    primary: bool
    verified: bool
    visibility: str


class EmailsV20(TypedDict, total=False):
    """Container for emails; empty or absent when all are private."""
    email: list[EmailV20]
    path: str


class NameV20(TypedDict, total=False):
    """Name block.

    Path: person/name
    """
    given_names: StringValue
    family_name: StringValue
    credit_name: StringValue
    visibility: str


class Person(TypedDict, total=False):
    """Person section of a v2.0 record.

    Path: person
    Docs: https://info.orcid.org/documentation/integration-guide/orcid-record/#h-person
    """
    name: NameV20
    emails: EmailsV20
    biography: dict
    addresses: dict
    keywords: dict


class RecordV20(TypedDict, total=False):
    """Top level of a v2.0 record."""
    orcid_identifier: dict
    person: Person
    activities_summary: dict
    path: str
