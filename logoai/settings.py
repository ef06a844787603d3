"""
Settings: runtime configuration read once from the environment.

Call load_dotenv() before Settings.from_env() to pick up a local .env file.

Env vars:
    GEMINI_API_KEY        Gemini credential (API_KEY, then GOOGLE_API_KEY, as fallbacks)
    LOGOAI_MODEL          image model, default gemini-2.5-flash-image
    LOGOAI_BATCH_SIZE     logos per batch, default 10
    LOGOAI_ASPECT_RATIO   default 1:1
    LOGOAI_OUTPUT_DIR     default outputs/
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_BATCH_SIZE = 10


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    batch_size: int = DEFAULT_BATCH_SIZE
    aspect_ratio: str = "1:1"
    output_dir: Path = field(default_factory=lambda: Path("outputs"))

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables (os.environ by default)."""
        env = os.environ if environ is None else environ

        raw_batch = env.get("LOGOAI_BATCH_SIZE", "").strip()
        if raw_batch:
            try:
                batch_size = int(raw_batch)
            except ValueError:
                raise ValueError(f"LOGOAI_BATCH_SIZE must be an integer, got {raw_batch!r}") from None
            if batch_size < 1:
                raise ValueError(f"LOGOAI_BATCH_SIZE must be positive, got {batch_size}")
        else:
            batch_size = DEFAULT_BATCH_SIZE

        return cls(
            api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or env.get("GOOGLE_API_KEY") or "",
            model=env.get("LOGOAI_MODEL") or DEFAULT_MODEL,
            batch_size=batch_size,
            aspect_ratio=env.get("LOGOAI_ASPECT_RATIO") or "1:1",
            output_dir=Path(env.get("LOGOAI_OUTPUT_DIR") or "outputs"),
        )
