"""Prompt and edit-payload builder tests."""

from __future__ import annotations

import base64

import pytest

from logoai.errors import MalformedAsset, ValidationFailure
from logoai.models import GeneratedAsset
from logoai.prompts import (
    EDIT_HINTS,
    build_edit_payload,
    build_generation_prompt,
    validate_brief,
)
from tests.fakes import PNG_HEADER


def test_generation_prompt_embeds_name_and_philosophy():
    prompt = build_generation_prompt("Acme", "minimalist", 0, clock=lambda: 1.0)
    assert '"Acme"' in prompt
    assert '"minimalist"' in prompt
    assert "Variation unique seed: 1000-0." in prompt


def test_generation_prompts_are_distinct_within_a_batch():
    # frozen clock: distinctness must come from the index alone
    prompts = [build_generation_prompt("Acme", "minimalist", i, clock=lambda: 42.0) for i in range(10)]
    assert len(set(prompts)) == 10


def test_generation_prompt_accepts_empty_strings():
    prompt = build_generation_prompt("", "", 3)
    assert 'named ""' in prompt


def test_edit_payload_splits_data_url(png_asset):
    payload = build_edit_payload(png_asset, "make it blue")
    assert payload.mime_type == "image/png"
    assert payload.image_bytes == PNG_HEADER + b"source"
    assert '"make it blue"' in payload.instruction
    assert "brand identity" in payload.instruction


def test_edit_payload_parts_put_image_before_text(png_asset):
    parts = build_edit_payload(png_asset, "add a star").to_parts()
    assert len(parts) == 2
    assert parts[0].inline_data.mime_type == "image/png"
    assert parts[0].inline_data.data == PNG_HEADER + b"source"
    assert "add a star" in parts[1].text


def test_edit_payload_allows_empty_instruction(png_asset):
    payload = build_edit_payload(png_asset, "")
    assert '""' in payload.instruction


@pytest.mark.parametrize(
    "image_url",
    [
        "not-a-data-url",
        "data:image/png;base64",
        "data:;base64,AAAA",
        "image/png,AAAA",
        "data:image/png;base64,@@not base64@@",
    ],
)
def test_edit_payload_rejects_malformed_assets(image_url):
    asset = GeneratedAsset(id="logo-bad", image_url=image_url, prompt="x")
    with pytest.raises(MalformedAsset):
        build_edit_payload(asset, "anything")


def test_validate_brief():
    validate_brief("Acme", "minimalist")
    with pytest.raises(ValidationFailure):
        validate_brief("  ", "minimalist")
    with pytest.raises(ValidationFailure):
        validate_brief("Acme", "")


def test_edit_hints_are_non_empty():
    assert set(EDIT_HINTS) == {"retro", "neon", "flat", "golden"}
    assert all(text.strip() for text in EDIT_HINTS.values())


def test_data_url_round_trip():
    payload = base64.b64encode(b"\x00\x01\x02logo").decode("ascii")
    asset = GeneratedAsset(id="logo-1", image_url=f"data:image/webp;base64,{payload}", prompt="p")
    assert asset.mime_type == "image/webp"
    assert asset.image_bytes == b"\x00\x01\x02logo"
    assert asset.extension == "webp"


def test_from_file_reads_known_suffixes(tmp_path):
    path = tmp_path / "mark.JPG"
    path.write_bytes(b"\xff\xd8jpeg")
    asset = GeneratedAsset.from_file(path)
    assert asset.mime_type == "image/jpeg"
    assert asset.image_bytes == b"\xff\xd8jpeg"
    assert asset.prompt == "mark"


@pytest.mark.parametrize("name", ["mark.gif", "mark.bmp", "mark"])
def test_from_file_rejects_unsupported_suffixes(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"GIF89a")
    with pytest.raises(MalformedAsset):
        GeneratedAsset.from_file(path)
