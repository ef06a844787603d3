"""
LogoAI: batch logo generation and iterative editing with Gemini.
"""

from .errors import (
    ImageDecodeFailure,
    LogoError,
    MalformedAsset,
    TransportFailure,
    ValidationFailure,
)
from .gallery import LogoGallery
from .generator import LogoGenerator
from .models import EditRequest, GeneratedAsset, GenerationRequest
from .settings import Settings

__all__ = [
    "EditRequest",
    "GeneratedAsset",
    "GenerationRequest",
    "ImageDecodeFailure",
    "LogoError",
    "LogoGallery",
    "LogoGenerator",
    "MalformedAsset",
    "Settings",
    "TransportFailure",
    "ValidationFailure",
]
