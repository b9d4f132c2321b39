from dataclasses import asdict
from datetime import datetime, timezone

import caip
from common_classes import TokenListEntry
from errors import InvalidIdentifierFormat
from registry import scan_registry
from statics import RAW_BASE_URL, REGISTRY_ROOT, TOKEN_LIST_INFO
from utils import find_duplicates


def build_contract_map(root=REGISTRY_ROOT):
    return dict(sorted(scan_registry(root).items()))


def build_tokens(contract_map, base_url=RAW_BASE_URL):
    for key, metadata in contract_map.items():
        try:
            asset_id = caip.parse(key)
        except InvalidIdentifierFormat:
            print(f"Skipping {key}: not a CAIP-19 asset id")
            continue

        # The token list standard only knows contracts on numeric EVM chain ids:
        if asset_id.chain_namespace != "eip155" or not asset_id.chain_reference.isdigit():
            continue
        if asset_id.asset_namespace != "erc20":
            continue

        yield TokenListEntry.from_metadata(asset_id, metadata, base_url)


def build_token_list(contract_map, timestamp=None, base_url=RAW_BASE_URL, info=TOKEN_LIST_INFO):
    tokens = list(build_tokens(contract_map, base_url))

    duplicates = find_duplicates(tokens, lambda t: (t.chainId, t.address.lower()))
    if duplicates:
        raise Exception(f"Duplicate tokens found: {[key for key, _ in duplicates]}")

    return {
        "name": info.name,
        "logoURI": info.logo_uri,
        "keywords": list(info.keywords),
        "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
        "tokens": list(map(asdict, tokens)),
        "version": {
            "major": info.major,
            "minor": info.minor,
            "patch": info.patch
        }
    }
