"""
Error taxonomy for extraction and external lookups.
The line parser and matcher never raise; they degrade to defaults instead.
"""
from typing import Optional


class PantryError(Exception):
    """Base class for errors the HTTP layer maps to a status code."""


class ValidationError(PantryError):
    """Required textual input is missing. Raised before any network call."""


class ConfigurationError(PantryError):
    """A credential or setting for an external service is missing."""


class UpstreamError(PantryError):
    """An external service call failed or returned nothing usable."""


class NotFoundError(PantryError):
    """The external service has no record for the requested id."""


class ExtractionParseError(PantryError):
    """The recovered candidate text is not a valid JSON object."""

    def __init__(self, message: str, candidate: Optional[str] = None):
        super().__init__(message)
        self.candidate = candidate
