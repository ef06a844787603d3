"""
Generator: fans out a batch of Gemini image calls and applies edits.

  generate_batch()  N concurrent text→image calls, index-stable results,
                    the first failure aborts the whole batch
  edit_asset()      one image+text→image call, returns a new asset

Both paths share decode_image(): the first inline image part of the first
candidate becomes the asset's data URL. No retries, no caching.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .errors import ImageDecodeFailure, LogoError, TransportFailure
from .models import GeneratedAsset, GenerationRequest, new_asset_id, to_data_url
from .prompts import build_edit_payload, build_generation_prompt
from .settings import Settings

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "The model returned no image data."


def decode_image(response: Any) -> str:
    """Return the first inline image of the first candidate as a data URL."""
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline and inline.data:
                return to_data_url(inline.mime_type or "image/png", inline.data)
    raise ImageDecodeFailure(NO_IMAGE_MESSAGE)


class LogoGenerator:
    """Batch generation and single-shot editing against the Gemini API."""

    def __init__(self, settings: Settings, client: Optional[Any] = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self.settings.api_key)
            except ValueError as exc:
                # the SDK refuses to build a client without a usable key
                raise TransportFailure(f"Gemini client unavailable: {exc}") from exc
        return self._client

    async def _call(self, contents: Any, config: Optional[types.GenerateContentConfig]) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.settings.model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise TransportFailure(f"Gemini API error ({exc.code}): {exc.message or exc}") from exc
        except LogoError:
            raise
        except Exception as exc:
            # httpx or aiohttp, depending on which async backend the SDK picked
            raise TransportFailure(f"Network error talking to Gemini: {exc}") from exc
        return decode_image(response)

    async def _generate_one(self, request: GenerationRequest) -> GeneratedAsset:
        prompt = build_generation_prompt(
            request.company_name, request.philosophy, request.variation_seed
        )
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=types.ImageConfig(aspect_ratio=self.settings.aspect_ratio),
        )
        logger.debug("dispatching variant %d", request.variation_seed)
        image_url = await self._call([types.Part.from_text(text=prompt)], config)
        return GeneratedAsset(id=new_asset_id(), image_url=image_url, prompt=request.origin_prompt)

    async def generate_batch(
        self,
        company_name: str,
        philosophy: str,
        batch_size: Optional[int] = None,
    ) -> List[GeneratedAsset]:
        """
        Generate `batch_size` logo variants concurrently.

        Results follow request order, not completion order. If any call
        fails the exception propagates and no partial list is returned;
        calls already in flight are left to finish on their own.
        """
        n = self.settings.batch_size if batch_size is None else batch_size
        if n < 1:
            raise ValueError(f"batch_size must be positive, got {n}")

        requests = [GenerationRequest(company_name, philosophy, i) for i in range(n)]
        logger.debug("generating %d logos with %s", n, self.settings.model)
        assets = await asyncio.gather(*(self._generate_one(r) for r in requests))
        return list(assets)

    async def edit_asset(self, source_asset: GeneratedAsset, instruction: str) -> GeneratedAsset:
        """Apply `instruction` to `source_asset`; the source is left untouched."""
        payload = build_edit_payload(source_asset, instruction)
        logger.debug("editing %s", source_asset.id)
        image_url = await self._call(payload.to_parts(), None)
        return GeneratedAsset(
            id=new_asset_id("logo-edit"),
            image_url=image_url,
            prompt=source_asset.prompt,
        )
