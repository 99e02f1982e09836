"""
Error taxonomy shared by both pipeline stages.

ValidationError      bad or missing caller input (client error)
ConfigurationError   missing credential or unusable setting (operator error)
UpstreamError        generative model or search backend failed
ParseError           model text is not the required structure; keeps the raw text
"""

from typing import Optional


class ChronosError(Exception):
    """Base error for the reconstruction service."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ChronosError):
    pass


class ConfigurationError(ChronosError):
    pass


class UpstreamError(ChronosError):
    def __init__(self, message: str, service: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.service = service


class ParseError(ChronosError):
    def __init__(self, message: str, raw_response: str = "", **kwargs):
        super().__init__(message, kwargs)
        self.raw_response = raw_response
