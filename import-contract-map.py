import argparse

from registry import import_legacy_contract_map
from statics import REGISTRY_ROOT
from utils import read_json


def main():
    parser = argparse.ArgumentParser(
        description="Migrate a flat {address: metadata} contract map into metadata/ and icons/")
    parser.add_argument("contract_map", help="Path to the legacy contract-map.json")
    parser.add_argument("images_dir", help="Path to the directory holding the legacy logo files")
    parser.add_argument("--root", default=REGISTRY_ROOT, help="Registry root holding metadata/ and icons/")
    parser.add_argument("--chain", default="eip155:1", help="Chain id the legacy entries belong to")
    args = parser.parse_args()

    print(f"Reading legacy contract map from {args.contract_map}")
    legacy_map = read_json(args.contract_map)

    imported, skipped = import_legacy_contract_map(legacy_map, args.images_dir, root=args.root, chain_id=args.chain)

    print(f"Imported {len(imported)} assets, skipped {len(skipped)}")
    for address, reason in skipped:
        print(f"# {address}: {reason}")


if __name__ == '__main__':
    main()
