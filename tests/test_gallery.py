"""LogoGallery working-set and export tests."""

from __future__ import annotations

import json
import zipfile

import pytest

from logoai.gallery import LogoGallery, slugify
from logoai.models import GeneratedAsset, to_data_url
from tests.fakes import PNG_HEADER


def _asset(name: str, mime: str = "image/png") -> GeneratedAsset:
    return GeneratedAsset(
        id=f"logo-{name}",
        image_url=to_data_url(mime, PNG_HEADER + name.encode()),
        prompt="Acme - minimalist",
    )


@pytest.fixture
def gallery() -> LogoGallery:
    g = LogoGallery("Acme Corp", "minimalist")
    g.replace_all([_asset("a"), _asset("b"), _asset("c")])
    return g


def test_replace_swaps_one_slot(gallery):
    edited = _asset("b2")
    index = gallery.replace("logo-b", edited)

    assert index == 1
    assert [a.id for a in gallery] == ["logo-a", "logo-b2", "logo-c"]
    assert gallery.get("logo-b") is None
    assert gallery.get("logo-b2") is edited


def test_replace_unknown_id_raises(gallery):
    with pytest.raises(KeyError):
        gallery.replace("logo-missing", _asset("x"))
    assert len(gallery) == 3


def test_new_batch_replaces_everything(gallery):
    gallery.replace_all([_asset("z")])
    assert [a.id for a in gallery] == ["logo-z"]
    gallery.clear()
    assert len(gallery) == 0


def test_save_asset_uses_slug_and_position(gallery, tmp_path):
    path = gallery.save_asset(gallery[1], tmp_path)
    assert path.name == "acme_corp-2.png"
    assert path.read_bytes() == PNG_HEADER + b"b"


def test_save_asset_without_company_name(tmp_path):
    g = LogoGallery()
    g.replace_all([_asset("a", mime="image/jpeg")])
    path = g.save_asset(g[0], tmp_path)
    assert path.name == "logo-1.jpg"


def test_manifest_lists_saved_files(gallery, tmp_path):
    gallery.save_asset(gallery[0], tmp_path)
    data = json.loads(gallery.write_manifest(tmp_path).read_text(encoding="utf-8"))

    assert data["company_name"] == "Acme Corp"
    assert data["philosophy"] == "minimalist"
    assert [r["id"] for r in data["logos"]] == ["logo-a", "logo-b", "logo-c"]
    assert data["logos"][0]["file"] == "acme_corp-1.png"
    assert data["logos"][1]["file"] is None
    assert data["logos"][0]["mime_type"] == "image/png"


def test_export_zip_bundles_logos_and_manifest(gallery, tmp_path):
    zip_path = gallery.export_zip(tmp_path)

    assert zip_path is not None
    assert zip_path.name == "acme_corp_logos.zip"
    with zipfile.ZipFile(zip_path) as zf:
        names = set(zf.namelist())
    assert names == {
        "logos/acme_corp-1.png",
        "logos/acme_corp-2.png",
        "logos/acme_corp-3.png",
        "manifest.json",
    }


def test_export_zip_returns_none_on_write_failure(gallery, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    assert gallery.export_zip(blocker) is None


@pytest.mark.parametrize("text, expected", [
    ("Acme Corp", "acme_corp"),
    ("  星辰科技  ", ""),
    ("a/b\\c", "a_b_c"),
])
def test_slugify(text, expected):
    assert slugify(text) == expected
