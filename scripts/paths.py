import os
from dataclasses import dataclass
from typing import Optional

from caip import AssetId
from statics import ICONS_DIR, METADATA_DIR, REGISTRY_ROOT, SUPPORTED_IMAGE_EXTENSIONS


@dataclass(frozen=True)
class AssetPaths:
    asset_id: AssetId
    metadata_dir: str
    metadata_file: str
    icon_dir: str
    icon_base: str

    def icon_file(self, ext):
        return f"{self.icon_base}{ext}"

    def logo_path(self, ext):
        return f"./{ICONS_DIR}/{self.asset_id.chain_id}/{self.asset_id.asset_key}{ext}"

    def find_existing_icon(self) -> Optional[str]:
        for ext in SUPPORTED_IMAGE_EXTENSIONS:
            if os.path.exists(self.icon_file(ext)):
                return self.icon_file(ext)
        return None

    def find_all_icons(self) -> list[str]:
        return [self.icon_file(ext) for ext in SUPPORTED_IMAGE_EXTENSIONS if os.path.exists(self.icon_file(ext))]


def resolve_paths(asset_id: AssetId, root=REGISTRY_ROOT) -> AssetPaths:
    metadata_dir = os.path.join(root, METADATA_DIR, asset_id.chain_id)
    icon_dir = os.path.join(root, ICONS_DIR, asset_id.chain_id)
    return AssetPaths(
        asset_id=asset_id,
        metadata_dir=metadata_dir,
        metadata_file=os.path.join(metadata_dir, f"{asset_id.asset_key}.json"),
        icon_dir=icon_dir,
        icon_base=os.path.join(icon_dir, asset_id.asset_key)
    )
