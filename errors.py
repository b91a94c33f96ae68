"""Errors raised while generating stories, on either side of the relay."""

from typing import Optional


class StoryServiceError(Exception):
    """Base error. `status_code` is the HTTP status the relay answers with."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(StoryServiceError):
    """No API credential is configured."""


class UpstreamError(StoryServiceError):
    """The generation API (or the relay, seen from the client) rejected the call."""


class EmptyResultError(StoryServiceError):
    """The call succeeded but returned nothing usable."""


class TransportError(StoryServiceError):
    """The remote end could not be reached."""
