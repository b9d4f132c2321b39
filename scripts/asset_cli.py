"""
Command line tool for managing CAIP-19 assets (metadata and icons).

Usage:
  asset-registry update --asset "eip155:1/erc20:0x..." --name "Token Name" --symbol "TKN" --decimals 18 --image logo.svg
  asset-registry update --asset "eip155:1/erc20:0x..." --image https://example.com/logo.png
  asset-registry verify --asset "eip155:1/erc20:0x..."
  asset-registry list --chain "eip155:1"
"""
import argparse
import os
import sys
import traceback

import caip
from checks import verify_asset
from errors import RegistryError
from registry import list_assets
from statics import FINAL_CONTRACT_MAP, REGISTRY_ROOT, SUPPORTED_IMAGE_EXTENSIONS
from upsert import AssetUpdate, upsert_asset

PROG = "asset-registry"
UPDATE_COMMANDS = ["update", "set", "add"]
COMMANDS = UPDATE_COMMANDS + ["verify", "list", "help"]
HELP_FLAGS = ["help", "--help", "-h"]

EXAMPLES = f"""
Examples:
  # Add a new token with a local image file
  {PROG} update --asset "eip155:1/erc20:0x1234567890123456789012345678901234567890" \\
    --name "My Token" --symbol "MTK" --decimals 18 --image ./my-token-logo.svg

  # Add a new token with an image URL
  {PROG} update --asset "eip155:1/erc20:0x1234567890123456789012345678901234567890" \\
    --name "My Token" --symbol "MTK" --decimals 18 --image "https://example.com/logo.svg"

  # Update just the image
  {PROG} update --asset "eip155:1/erc20:0x6B175474E89094C44Da98b954EedeAC495271d0F" --image ./new-dai-logo.svg

  # Verify an asset
  {PROG} verify --asset "eip155:1/erc20:0x6B175474E89094C44Da98b954EedeAC495271d0F"

  # List all assets on BNB Smart Chain
  {PROG} list --chain "eip155:56"

Notes:
  - Supported image formats: {', '.join(SUPPORTED_IMAGE_EXTENSIONS)} (svg or png preferred)
  - After adding/updating assets, rebuild {FINAL_CONTRACT_MAP} with scripts/build-lists.py
  - 'update' creates the asset when it does not exist yet
"""


class CLIArgumentParser(argparse.ArgumentParser):
    # Every usage error is a plain failure (exit 1), same as any validation error:
    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)


def parse_bool(value):
    lowered = value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got '{value}'")


def build_parser():
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", default=REGISTRY_ROOT,
                        help="Registry root holding metadata/ and icons/ (default: %(default)s)")

    asset = argparse.ArgumentParser(add_help=False)
    asset.add_argument("--asset", "--caip", dest="asset", required=True, metavar="ID",
                       help=f"CAIP-19 asset identifier, e.g. {caip.EXAMPLE}")

    parser = CLIArgumentParser(prog=PROG, description="CAIP-19 Asset Management CLI", epilog=EXAMPLES,
                               formatter_class=argparse.RawDescriptionHelpFormatter)
    subparsers = parser.add_subparsers(dest="command", title="commands", parser_class=CLIArgumentParser)

    update = subparsers.add_parser("update", aliases=UPDATE_COMMANDS[1:], parents=[common, asset],
                                   help="Add a new asset or update an existing one")
    update.add_argument("--name", help="Asset name (required for new assets)")
    update.add_argument("--symbol", help="Asset symbol (required for new assets)")
    update.add_argument("--decimals", type=int, help="Number of decimals (required for new assets)")
    update.add_argument("--image", "--logo", dest="image", metavar="PATH_OR_URL",
                        help="Local image file or http(s) URL (required for new assets)")
    update.add_argument("--erc20", type=parse_bool, nargs="?", const=True, metavar="BOOL",
                        help="ERC20 token flag (default: detected from the asset namespace)")
    update.add_argument("--spl", type=parse_bool, nargs="?", const=True, metavar="BOOL",
                        help="Solana SPL token flag (default: detected from the asset namespace)")
    update.set_defaults(handler=update_command)

    verify = subparsers.add_parser("verify", parents=[common, asset],
                                   help="Verify an asset's metadata and icon")
    verify.set_defaults(handler=verify_command)

    list_ = subparsers.add_parser("list", parents=[common], help="List assets, optionally for one chain")
    list_.add_argument("--chain", "--namespace", dest="chain", metavar="NS",
                       help="Chain id (eip155:1) or namespace (eip155)")
    list_.set_defaults(handler=list_command)

    subparsers.add_parser("help", help="Show this help message")
    return parser


def update_command(args):
    asset_id = caip.parse(args.asset)
    result = upsert_asset(asset_id, AssetUpdate(
        name=args.name,
        symbol=args.symbol,
        decimals=args.decimals,
        image=args.image,
        erc20=args.erc20,
        spl=args.spl
    ), root=args.root)

    print(f"\n✓ Asset {'added' if result.created else 'updated'} successfully!")
    print("\nNext steps:")
    print("1. Review the changes")
    print(f"2. Verify the asset: {PROG} verify --asset \"{asset_id}\"")
    print(f"3. Rebuild {FINAL_CONTRACT_MAP}: python scripts/build-lists.py --contract-map")
    return 0


def verify_command(args):
    asset_id = caip.parse(args.asset)
    print(f"Verifying asset: {asset_id}")

    report = verify_asset(asset_id, root=args.root)
    for result in report.results:
        print(result)

    if not report.ok:
        print(f"\n{len(report.errors)} error(s), {len(report.warnings)} warning(s)")
        return 1

    print(f"\n✓ OK: {asset_id} ({len(report.warnings)} warning(s))")
    return 0


def list_command(args):
    chain_filter = caip.parse_chain_filter(args.chain) if args.chain else None
    print(f"Listing assets in: {chain_filter or 'all chains'}\n")

    entries = list_assets(args.root, chain_filter)
    for entry in entries:
        if entry.metadata is None:
            print(f"{entry.key}  (error reading metadata: {entry.error})")
            continue
        metadata = entry.metadata
        print(f"{entry.key}  {metadata.get('name')} ({metadata.get('symbol')}), "
              f"decimals: {metadata.get('decimals')}")

    print(f"\nTotal: {len(entries)}")
    return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv or argv[0] in HELP_FLAGS:
        parser.print_help()
        return 0

    if argv[0] not in COMMANDS:
        print(f"Unknown command: {argv[0]}\n", file=sys.stderr)
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except RegistryError as e:
        print(f"\n❌ Error: {e}\n", file=sys.stderr)
        if os.getenv("DEBUG"):
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
