"""
Data model for logo generation.

GeneratedAsset keeps its image as a data URL ("data:<mime>;base64,<payload>"),
the same combined form the decoder produces and the edit builder splits.
"""

from __future__ import annotations

import base64
import binascii
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from google.genai import types

from .errors import MalformedAsset

_EXT_TO_MIME = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
}
_MIME_TO_EXT = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


def new_asset_id(prefix: str = "logo") -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def to_data_url(mime_type: str, data: Union[bytes, str]) -> str:
    """Combine a media type and payload into a data URL.

    `data` is raw bytes (what the SDK hands back) or an already
    base64-encoded string, which is kept verbatim.
    """
    if isinstance(data, (bytes, bytearray)):
        data = base64.b64encode(bytes(data)).decode("ascii")
    return f"data:{mime_type};base64,{data}"


def split_data_url(image_url: str) -> Tuple[str, str]:
    """Return (mime_type, base64 payload) or raise MalformedAsset."""
    header, sep, payload = image_url.partition(",")
    if not sep or not payload:
        raise MalformedAsset("Logo image has no payload separator.")
    if not header.startswith("data:") or not header.endswith(";base64"):
        raise MalformedAsset("Logo image is not a base64 data URL.")
    mime_type = header[len("data:"):-len(";base64")]
    if not mime_type:
        raise MalformedAsset("Logo image has no media type.")
    return mime_type, payload


def extension_for(mime_type: str) -> str:
    return _MIME_TO_EXT.get(mime_type, mime_type.rsplit("/", 1)[-1] or "png")


@dataclass(frozen=True)
class GenerationRequest:
    company_name: str
    philosophy: str
    variation_seed: int

    @property
    def origin_prompt(self) -> str:
        return f"{self.company_name} - {self.philosophy}"


@dataclass(frozen=True)
class EditRequest:
    image_bytes: bytes
    mime_type: str
    instruction: str        # already framed, ready to send

    def to_parts(self) -> List[types.Part]:
        return [
            types.Part.from_bytes(data=self.image_bytes, mime_type=self.mime_type),
            types.Part.from_text(text=self.instruction),
        ]


@dataclass(frozen=True)
class GeneratedAsset:
    id: str
    image_url: str          # data:<mime>;base64,<payload>
    prompt: str             # origin prompt, carried through edits

    @property
    def mime_type(self) -> str:
        return split_data_url(self.image_url)[0]

    @property
    def image_bytes(self) -> bytes:
        _, payload = split_data_url(self.image_url)
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedAsset(f"Logo image payload is not valid base64: {exc}") from exc

    @property
    def extension(self) -> str:
        return extension_for(self.mime_type)

    @classmethod
    def from_file(cls, path: Path, prompt: str = "") -> "GeneratedAsset":
        """Load a saved logo from disk so it can be edited."""
        path = Path(path)
        ext = path.suffix.lower().lstrip(".")
        mime = _EXT_TO_MIME.get(ext)
        if mime is None:
            raise MalformedAsset(
                f"Unsupported image type {path.suffix or '(none)'}; use one of: "
                + ", ".join(f".{e}" for e in sorted(_EXT_TO_MIME))
            )
        return cls(
            id=new_asset_id(),
            image_url=to_data_url(mime, path.read_bytes()),
            prompt=prompt or path.stem,
        )
