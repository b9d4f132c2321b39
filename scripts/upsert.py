import os
import shutil
from dataclasses import dataclass
from typing import Optional

from caip import AssetId
from common_classes import AssetMetadata
from errors import FilesystemFailure, MetadataValidationFailed, MissingRequiredField
from images import download_file, resolve_image_source
from paths import AssetPaths, resolve_paths
from schema import validate_metadata
from statics import REGISTRY_ROOT
from utils import dump_json, load_json_object, write_atomic

# Asset namespaces that imply a flag when a record is first created:
NAMESPACE_FLAGS = {
    "erc20": "erc20",
    "spl": "spl",
}


@dataclass
class AssetUpdate:
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    image: Optional[str] = None
    erc20: Optional[bool] = None
    spl: Optional[bool] = None

    def missing_for_create(self):
        missing = []
        if not self.name:
            missing.append("--name")
        if not self.symbol:
            missing.append("--symbol")
        if self.decimals is None:
            missing.append("--decimals")
        if not self.image:
            missing.append("--image")
        return missing


@dataclass
class UpsertResult:
    asset_id: AssetId
    metadata: AssetMetadata
    created: bool
    metadata_file: str
    icon_file: Optional[str]


def merge_fields(metadata: dict, updates: AssetUpdate, asset_id: AssetId, created: bool) -> dict:
    merged = dict(metadata)

    if updates.name:
        merged["name"] = updates.name
    if updates.symbol:
        merged["symbol"] = updates.symbol
    if updates.decimals is not None:
        merged["decimals"] = updates.decimals

    for flag in NAMESPACE_FLAGS.values():
        explicit = getattr(updates, flag)
        if explicit is not None:
            merged[flag] = explicit
        elif created and NAMESPACE_FLAGS.get(asset_id.asset_namespace) == flag:
            merged[flag] = True

    return merged


def place_icon(paths: AssetPaths, source_path: str, ext: str) -> str:
    """Install the image as the only icon of the asset, removing icons stored under other extensions."""
    icon_file = paths.icon_file(ext)

    for old_icon in paths.find_all_icons():
        if old_icon != icon_file:
            print(f"Removing old icon: {old_icon}")
            try:
                os.unlink(old_icon)
            except OSError as e:
                raise FilesystemFailure(f"Cannot remove {old_icon}: {e}") from e

    def copy(dest):
        with open(source_path, "rb") as src:
            shutil.copyfileobj(src, dest)

    write_atomic(icon_file, copy, mode="wb")
    return icon_file


def upsert_asset(asset_id: AssetId, updates: AssetUpdate, root=REGISTRY_ROOT, fetch=download_file) -> UpsertResult:
    # The merged record is validated before anything is written:
    paths = resolve_paths(asset_id, root)

    created = not os.path.exists(paths.metadata_file)
    if created:
        print(f"Creating new asset: {asset_id}")
        missing = updates.missing_for_create()
        if missing:
            raise MissingRequiredField(missing, "new asset")
        metadata = {}
    else:
        print(f"Updating existing asset: {asset_id}")
        # A broken file is reported, never silently replaced:
        metadata = load_json_object(paths.metadata_file)

    metadata = merge_fields(metadata, updates, asset_id, created)

    if not updates.image:
        existing_icon = paths.find_existing_icon()
        if existing_icon:
            metadata["logo"] = paths.logo_path(os.path.splitext(existing_icon)[1])
        return write_metadata(asset_id, paths, metadata, created, existing_icon)

    with resolve_image_source(updates.image, paths.icon_dir, fetch) as image:
        metadata["logo"] = paths.logo_path(image.ext)
        ensure_valid(metadata)
        icon_file = place_icon(paths, image.path, image.ext)
        print(f"✓ {'Saved' if created else 'Updated'} image to: {icon_file}")

    return write_metadata(asset_id, paths, metadata, created, icon_file)


def ensure_valid(metadata: dict):
    violations = list(validate_metadata(metadata))
    if violations:
        raise MetadataValidationFailed(violations)


def write_metadata(asset_id, paths: AssetPaths, metadata: dict, created: bool, icon_file) -> UpsertResult:
    ensure_valid(metadata)

    record = AssetMetadata.from_dict(metadata)
    content = dump_json(record.to_dict())
    write_atomic(paths.metadata_file, lambda f: f.write(content))
    print(f"✓ {'Created' if created else 'Updated'} metadata file: {paths.metadata_file}")

    return UpsertResult(
        asset_id=asset_id,
        metadata=record,
        created=created,
        metadata_file=paths.metadata_file,
        icon_file=icon_file
    )
