import os
from dataclasses import dataclass

REGISTRY_ROOT = os.getenv("REGISTRY_ROOT", ".")
RAW_BASE_URL = os.getenv("REGISTRY_RAW_BASE_URL",
                         "https://raw.githubusercontent.com/MetaMask/contract-metadata/master/")

METADATA_DIR = "metadata"
ICONS_DIR = "icons"

# Probe order when looking up an existing icon:
SUPPORTED_IMAGE_EXTENSIONS = [".svg", ".png", ".jpg", ".jpeg"]
PREFERRED_IMAGE_EXTENSIONS = [".svg", ".png"]
DEFAULT_IMAGE_EXTENSION = ".png"

MIME_TO_EXTENSION = {
    "image/svg+xml": ".svg",
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
}

HTTP_TIMEOUT = float(os.getenv("REGISTRY_HTTP_TIMEOUT", "30"))
MAX_REDIRECTS = 5
REDIRECT_STATUS_CODES = (301, 302, 303, 307, 308)

MAX_SYMBOL_LENGTH = 11
MAX_DECIMALS = 255

FINAL_CONTRACT_MAP = "contract-map.json"
FINAL_TOKEN_LIST = "metamask-uniswap-tokenlist.json"


@dataclass
class TokenListInfo:
    name: str
    logo_uri: str
    keywords: list[str]
    major: int
    minor: int
    patch: int


TOKEN_LIST_INFO = TokenListInfo(
    name="MetaMask Token List",
    logo_uri="https://images.ctfassets.net/clixtyxoaeas/1ezuBGezqfIeifWdVtwU4c/"
             "d970d4cdf13b163efddddd5709164d2e/MetaMask-icon-Fox.svg",
    keywords=["metamask", "uniswap", "tokens"],
    major=1,
    minor=0,
    patch=0
)
