import argparse
import operator
from functools import reduce

from checks import verify_registry
from registry import read_entries
from statics import REGISTRY_ROOT


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--root', default=REGISTRY_ROOT, help="Registry root holding metadata/ and icons/")
    args = parser.parse_args()

    entries = read_entries(args.root)
    chains = {}
    for entry in entries:
        chain_id = entry.key.partition("/")[0]
        chains[chain_id] = chains.get(chain_id, 0) + 1

    for chain_id, count in sorted(chains.items()):
        print(f"{count} {chain_id} assets")

    issues = list(verify_registry(args.root))

    if issues:
        print("")
        print(reduce(operator.add, map(lambda i: "\n- " + str(i), issues)))
        print("")

    if any(i.is_blocker() for i in issues):
        raise Exception("Blocker issue(s) found")


if __name__ == '__main__':
    main()
