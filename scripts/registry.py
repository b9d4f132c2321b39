import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import caip
import checksum
from errors import RegistryError
from statics import ICONS_DIR, METADATA_DIR, REGISTRY_ROOT
from upsert import AssetUpdate, upsert_asset
from utils import load_json_object, multiread_json


@dataclass
class RegistryEntry:
    key: str
    path: str
    asset_id: Optional[caip.AssetId] = None
    metadata: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


def read_entries(root=REGISTRY_ROOT) -> List[RegistryEntry]:
    entries = []
    for key, path in multiread_json(os.path.join(root, METADATA_DIR), "*/*.json"):
        entry = RegistryEntry(key=key, path=path)
        try:
            entry.asset_id = caip.parse(key)
            entry.metadata = load_json_object(path)
        except RegistryError as e:
            entry.error = str(e)
        entries.append(entry)
    return entries


def scan_registry(root=REGISTRY_ROOT) -> Dict[str, Dict[str, Any]]:
    # Nothing is cached, every call re-reads the files:
    contract_map = {}
    for key, path in multiread_json(os.path.join(root, METADATA_DIR), "*/*.json"):
        contract_map[key] = load_json_object(path)
    return contract_map


def list_assets(root=REGISTRY_ROOT, chain_filter: Optional[str] = None) -> List[RegistryEntry]:
    entries = read_entries(root)
    if chain_filter is None:
        return entries
    return [e for e in entries if e.asset_id is not None and caip.matches_chain_filter(e.asset_id, chain_filter)]


def find_orphan_icons(root=REGISTRY_ROOT) -> List[str]:
    """Icon files with no metadata record next to them."""
    icons_dir = os.path.join(root, ICONS_DIR)
    metadata_keys = {key for key, _ in multiread_json(os.path.join(root, METADATA_DIR), "*/*.json")}
    return [path for key, path in multiread_json(icons_dir, "*/*") if key not in metadata_keys]


def import_legacy_contract_map(legacy_map: Dict[str, Dict[str, Any]], images_dir: str, root=REGISTRY_ROOT,
                               chain_id="eip155:1"):
    imported = []
    skipped = []

    for address, metadata in sorted(legacy_map.items()):
        if not metadata.get("erc20"):
            continue

        image = os.path.join(images_dir, metadata.get("logo") or "")
        if not metadata.get("logo") or not os.path.isfile(image):
            print(f"Image not found: {image}")
            skipped.append((address, f"image not found: {image}"))
            continue

        try:
            reference = checksum.to_checksum_address(address) if checksum.is_hex_address(address) else address
            asset_id = caip.parse(f"{chain_id}/erc20:{reference}")
            upsert_asset(asset_id, AssetUpdate(
                name=metadata.get("name"),
                symbol=metadata.get("symbol"),
                decimals=metadata.get("decimals"),
                image=image,
                erc20=True
            ), root=root)
        except RegistryError as e:
            print(f"Skipping {address}: {e}")
            skipped.append((address, str(e)))
            continue

        imported.append(asset_id)

    return imported, skipped
