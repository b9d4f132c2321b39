import re
from dataclasses import dataclass

from errors import InvalidIdentifierFormat

NAMESPACE_PATTERN = r"[-a-z0-9]{3,8}"
CHAIN_REFERENCE_PATTERN = r"[-a-zA-Z0-9]{1,32}"
ASSET_REFERENCE_PATTERN = r"[-a-zA-Z0-9]{1,128}"

CHAIN_ID_RE = re.compile(rf"^{NAMESPACE_PATTERN}:{CHAIN_REFERENCE_PATTERN}$")
ASSET_ID_RE = re.compile(
    rf"^{NAMESPACE_PATTERN}:{CHAIN_REFERENCE_PATTERN}/{NAMESPACE_PATTERN}:{ASSET_REFERENCE_PATTERN}$"
)
NAMESPACE_RE = re.compile(rf"^{NAMESPACE_PATTERN}$")

EXPECTED_FORMAT = "namespace:chainId/assetNamespace:assetReference"
EXAMPLE = "eip155:1/erc20:0x6B175474E89094C44Da98b954EedeAC495271d0F"


@dataclass(frozen=True)
class AssetId:
    chain_namespace: str
    chain_reference: str
    asset_namespace: str
    asset_reference: str

    @property
    def chain_id(self):
        return f"{self.chain_namespace}:{self.chain_reference}"

    @property
    def asset_key(self):
        return f"{self.asset_namespace}:{self.asset_reference}"

    def __str__(self):
        return f"{self.chain_id}/{self.asset_key}"


def parse(raw: str) -> AssetId:
    if not isinstance(raw, str) or ASSET_ID_RE.match(raw) is None:
        raise InvalidIdentifierFormat(
            f"'{raw}' is not a valid CAIP-19 asset id.\n"
            f"Expected format: {EXPECTED_FORMAT}\n"
            f"Example: {EXAMPLE}"
        )

    chain, _, asset = raw.partition("/")
    chain_namespace, _, chain_reference = chain.partition(":")
    asset_namespace, _, asset_reference = asset.partition(":")

    return AssetId(chain_namespace, chain_reference, asset_namespace, asset_reference)


def is_valid(raw: str) -> bool:
    return isinstance(raw, str) and ASSET_ID_RE.match(raw) is not None


def parse_chain_filter(raw: str) -> str:
    # Either a full chain id ("eip155:56") or a bare namespace ("eip155"):
    if CHAIN_ID_RE.match(raw) or NAMESPACE_RE.match(raw):
        return raw
    raise InvalidIdentifierFormat(
        f"'{raw}' is not a valid chain filter. Expected a namespace (eip155) or chain id (eip155:1)"
    )


def matches_chain_filter(asset_id: AssetId, chain_filter: str) -> bool:
    if ":" in chain_filter:
        return asset_id.chain_id == chain_filter
    return asset_id.chain_namespace == chain_filter
