from __future__ import annotations

import pytest

from logoai.models import GeneratedAsset, to_data_url
from logoai.settings import Settings
from tests.fakes import PNG_HEADER


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", batch_size=3)


@pytest.fixture
def png_asset() -> GeneratedAsset:
    return GeneratedAsset(
        id="logo-source",
        image_url=to_data_url("image/png", PNG_HEADER + b"source"),
        prompt="Acme - minimalist",
    )
