import argparse
import os

from exporters import build_contract_map, build_token_list
from statics import FINAL_CONTRACT_MAP, FINAL_TOKEN_LIST, REGISTRY_ROOT
from utils import write_json


def build_contract_map_file(root):
    print(f"Reading metadata from {os.path.join(root, 'metadata')}")
    contract_map = build_contract_map(root)

    output_file = os.path.join(root, FINAL_CONTRACT_MAP)
    print(f"Writing {len(contract_map)} assets to {output_file}")
    write_json(contract_map, output_file)
    return contract_map


def build_token_list_file(root, contract_map):
    token_list = build_token_list(contract_map)

    output_file = os.path.join(root, FINAL_TOKEN_LIST)
    print(f"Writing {len(token_list['tokens'])} tokens to {output_file}")
    write_json(token_list, output_file)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--root', default=REGISTRY_ROOT, help="Registry root holding metadata/ and icons/")
    parser.add_argument('--contract-map', action='store_true', help=f"Only write {FINAL_CONTRACT_MAP}")
    parser.add_argument('--token-list', action='store_true', help=f"Only write {FINAL_TOKEN_LIST}")
    args = parser.parse_args()

    if args.token_list and not args.contract_map:
        build_token_list_file(args.root, build_contract_map(args.root))
    elif args.contract_map and not args.token_list:
        build_contract_map_file(args.root)
    else:
        contract_map = build_contract_map_file(args.root)
        build_token_list_file(args.root, contract_map)


if __name__ == '__main__':
    main()
