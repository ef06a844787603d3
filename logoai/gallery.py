"""
Gallery: the caller's in-memory working set of logos.

A new batch replaces everything; a successful edit swaps one slot. Nothing
is written to disk until save_asset / save_all / write_manifest / export_zip.

Export layout:
  <slug>-1.png … <slug>-N.png
  manifest.json
  <slug>_logos.zip   (optional bundle of the above)
"""

from __future__ import annotations

import logging
import re
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel, Field

from .models import GeneratedAsset

logger = logging.getLogger(__name__)


# ── Manifest schema ───────────────────────────────────────────────────────────

class AssetRecord(BaseModel):
    id: str
    prompt: str = Field(description="Origin prompt carried through edits")
    mime_type: str
    file: Optional[str] = Field(default=None, description="Saved filename, if written")


class GalleryManifest(BaseModel):
    company_name: str
    philosophy: str
    generated_at: datetime
    logos: List[AssetRecord] = Field(default_factory=list)


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-zA-Z0-9_-]+", "_", text.lower().strip()).strip("_")
    return slug[:30]


# ── Gallery ───────────────────────────────────────────────────────────────────

class LogoGallery:
    def __init__(self, company_name: str = "", philosophy: str = "") -> None:
        self.company_name = company_name
        self.philosophy = philosophy
        self._assets: List[GeneratedAsset] = []
        self._saved: Dict[str, Path] = {}

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[GeneratedAsset]:
        return iter(list(self._assets))

    def __getitem__(self, position: int) -> GeneratedAsset:
        return self._assets[position]

    @property
    def slug(self) -> str:
        return slugify(self.company_name) or "logo"

    def replace_all(self, assets: Iterable[GeneratedAsset]) -> None:
        self._assets = list(assets)
        self._saved.clear()

    def clear(self) -> None:
        self.replace_all([])

    def index_of(self, asset_id: str) -> int:
        for i, asset in enumerate(self._assets):
            if asset.id == asset_id:
                return i
        raise KeyError(asset_id)

    def get(self, asset_id: str) -> Optional[GeneratedAsset]:
        try:
            return self._assets[self.index_of(asset_id)]
        except KeyError:
            return None

    def replace(self, asset_id: str, new_asset: GeneratedAsset) -> int:
        """Put `new_asset` in the slot held by `asset_id`; returns the slot index."""
        index = self.index_of(asset_id)
        self._assets[index] = new_asset
        self._saved.pop(asset_id, None)
        return index

    # ── Download / export ─────────────────────────────────────────────────────

    def save_asset(
        self,
        asset: GeneratedAsset,
        output_dir: Path,
        filename: Optional[str] = None,
    ) -> Path:
        """Write one logo to disk (the "download" action)."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        if filename is None:
            try:
                position = self.index_of(asset.id) + 1
            except KeyError:
                position = len(self._assets) + 1
            filename = f"{self.slug}-{position}.{asset.extension}"

        path = output_dir / filename
        path.write_bytes(asset.image_bytes)
        self._saved[asset.id] = path
        logger.info(f"Saved {asset.id} → {path}")
        return path

    def save_all(self, output_dir: Path) -> List[Path]:
        return [self.save_asset(asset, output_dir) for asset in self._assets]

    def manifest(self) -> GalleryManifest:
        return GalleryManifest(
            company_name=self.company_name,
            philosophy=self.philosophy,
            generated_at=datetime.now(),
            logos=[
                AssetRecord(
                    id=a.id,
                    prompt=a.prompt,
                    mime_type=a.mime_type,
                    file=self._saved[a.id].name if a.id in self._saved else None,
                )
                for a in self._assets
            ],
        )

    def write_manifest(self, output_dir: Path) -> Path:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / "manifest.json"
        path.write_text(self.manifest().model_dump_json(indent=2), encoding="utf-8")
        return path

    def export_zip(self, output_dir: Path) -> Optional[Path]:
        """
        Bundle every logo plus manifest.json into <slug>_logos.zip.

        Logos not yet saved are written first. Returns None on failure.
        """
        output_dir = Path(output_dir)
        try:
            for asset in self._assets:
                if asset.id not in self._saved:
                    self.save_asset(asset, output_dir)
            manifest_path = self.write_manifest(output_dir)

            zip_path = output_dir / f"{self.slug}_logos.zip"
            with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
                for asset in self._assets:
                    p = self._saved[asset.id]
                    zf.write(p, f"logos/{p.name}")
                zf.write(manifest_path, manifest_path.name)

            logger.info(f"ZIP created: {zip_path.name} ({zip_path.stat().st_size // 1024} KB)")
            return zip_path
        except (OSError, zipfile.BadZipFile) as e:
            logger.warning(f"ZIP creation failed: {e}")
        return None
