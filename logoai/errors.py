"""
Error taxonomy for logo generation and editing.

Every failure surfaced to a caller is a LogoError; str(err) is the
human-readable message shown to the user.
"""

from __future__ import annotations


class LogoError(Exception):
    """Base class for all user-facing generation/edit failures."""


class ValidationFailure(LogoError):
    """A required text input (company name, philosophy) is blank."""


class TransportFailure(LogoError):
    """The Gemini call itself failed: connectivity, auth, or an error status."""


class ImageDecodeFailure(LogoError):
    """The call succeeded but no response part carried inline image data."""


class MalformedAsset(LogoError):
    """A stored image could not be split into payload and media type."""
