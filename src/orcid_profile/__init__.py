"""orcid-profile: version-independent accessor for ORCID researcher profiles."""

from enum import Enum

__version__ = "0.1.0"


class ApiVersion(str, Enum):
    """ORCID API schema generation."""

    V1_2 = "1.2"
    V2_0 = "2.0"

    def __str__(self) -> str:
        return self.value


VALID_API_VERSIONS = [version.value for version in ApiVersion]
