"""Typed exceptions raised by the Apify client."""

from __future__ import annotations

from typing import Optional


class ApifyError(Exception):
    """Base class for failures talking to the Apify platform."""


class MissingCredential(ApifyError):
    """No API token is configured (set ``APIFY_TOKEN``)."""

    def __init__(self, message: str = "Apify token is missing. Set APIFY_TOKEN in your environment."):
        super().__init__(message)


class RequestFailed(ApifyError):
    """Non-success response (or transport error) from the platform.

    Attributes:
        status_code: HTTP status, or None when no response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
