"""
Prompt builders: text for generation calls and multimodal payloads for edits.

Pure functions: nothing here touches the network or validates user input,
except validate_brief(), which callers run before starting a batch.
"""

from __future__ import annotations

import base64
import binascii
import time
from typing import Callable, Dict

from .errors import MalformedAsset, ValidationFailure
from .models import EditRequest, GeneratedAsset, split_data_url

# Quick edit presets offered next to the free-text edit box
EDIT_HINTS: Dict[str, str] = {
    "retro":  "Add a retro vintage filter and aged texture",
    "neon":   "Make it look like a vibrant neon sign with glow",
    "flat":   "Apply a modern flat design minimalist style",
    "golden": "Refine lines using golden ratio geometry",
}


def validate_brief(company_name: str, philosophy: str) -> None:
    if not company_name.strip() or not philosophy.strip():
        raise ValidationFailure("Please enter both a company name and a philosophy.")


def build_generation_prompt(
    company_name: str,
    philosophy: str,
    variation_index: int,
    clock: Callable[[], float] = time.time,
) -> str:
    """
    Build the text prompt for one batch member.

    The variation token only exists to keep prompts within a batch distinct
    so the model does not return near-duplicates; nothing parses it back.
    """
    token = f"{int(clock() * 1000)}-{variation_index}"
    return (
        f'Create a professional, modern, and minimalist logo for a company named "{company_name}".\n'
        f'The company philosophy is: "{philosophy}".\n'
        "Design requirement: High-quality vector style, clean lines, suitable for branding.\n"
        f"Variation unique seed: {token}.\n"
        "Avoid complex text, focus on a symbolic icon and professional typography."
    )


def build_edit_payload(source_asset: GeneratedAsset, instruction: str) -> EditRequest:
    """Split the asset's data URL and frame the edit instruction."""
    mime_type, payload = split_data_url(source_asset.image_url)
    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedAsset(f"Logo image payload is not valid base64: {exc}") from exc

    framed = (
        f'Modify this logo according to the following request: "{instruction}". '
        "Keep the core brand identity recognisable, but apply the requested change faithfully."
    )
    return EditRequest(image_bytes=image_bytes, mime_type=mime_type, instruction=framed)
