import os
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup

import checksum
import registry
from caip import AssetId
from errors import ChecksumMismatch, ChecksumUnavailable, FileNotFound, FilesystemFailure, InvalidFieldValue, \
    InvalidIdentifierFormat, RegistryError, UnsupportedImageFormat
from paths import AssetPaths, resolve_paths
from schema import validate_metadata
from statics import PREFERRED_IMAGE_EXTENSIONS, REGISTRY_ROOT
from utils import find_duplicates, load_json_object

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class CheckResult:
    def __init__(self, ref, msg, kind=None):
        self.ref = ref
        self.msg = msg
        self.kind = kind

    def is_blocker(self):
        return self.BLOCKER

    def __str__(self):
        return f"{self.PREFIX} {self.ref}: {self.msg}"

    def __repr__(self):
        return f"{type(self).__name__}({self.kind}, {self.ref}: {self.msg})"


class Error(CheckResult):
    PREFIX = " 🛑 "
    BLOCKER = True


class Warning(CheckResult):
    PREFIX = " ⚠️ "
    BLOCKER = False


@dataclass
class Report:
    ref: str
    results: List[CheckResult] = field(default_factory=list)

    @property
    def errors(self):
        return [r for r in self.results if r.is_blocker()]

    @property
    def warnings(self):
        return [r for r in self.results if not r.is_blocker()]

    @property
    def ok(self):
        return not self.errors

    def extend(self, results):
        self.results.extend(results)


def check_metadata_fields(ref, metadata):
    for violation in validate_metadata(metadata):
        yield Error(ref, f"Metadata validation: {violation}", violation.kind)


def check_icon_content(ref, icon_file, ext):
    try:
        with open(icon_file, "rb") as f:
            content = f.read()
    except OSError as e:
        yield Error(ref, f"Icon file cannot be read: {e}", FilesystemFailure.__name__)
        return

    if ext == ".png" and not content.startswith(PNG_SIGNATURE):
        yield Warning(ref, f"{os.path.basename(icon_file)} does not look like a PNG image",
                      UnsupportedImageFormat.__name__)
    elif ext == ".svg" and BeautifulSoup(content, "html.parser").find("svg") is None:
        yield Warning(ref, f"{os.path.basename(icon_file)} has no <svg> element", UnsupportedImageFormat.__name__)


def check_icon(ref, paths: AssetPaths, metadata: Optional[dict]):
    icons = paths.find_all_icons()
    if not icons:
        yield Error(ref, f"Icon file not found: {paths.icon_base}.*", FileNotFound.__name__)
        return

    if len(icons) > 1:
        yield Error(ref, f"More than one icon file: {', '.join(os.path.basename(i) for i in icons)}",
                    UnsupportedImageFormat.__name__)

    icon_file = icons[0]
    file_name = os.path.basename(icon_file)
    ext = os.path.splitext(icon_file)[1]

    if os.path.getsize(icon_file) == 0:
        yield Error(ref, f"Icon file is empty: {file_name}", FileNotFound.__name__)
    else:
        yield from check_icon_content(ref, icon_file, ext)

    if ext not in PREFERRED_IMAGE_EXTENSIONS:
        yield Warning(ref, f"Icon {file_name} should be an svg or a png", UnsupportedImageFormat.__name__)

    if any(c.isspace() for c in file_name):
        yield Error(ref, f"Icon file name contains whitespace: '{file_name}'", UnsupportedImageFormat.__name__)

    logo = metadata.get("logo") if metadata else None
    if isinstance(logo, str) and logo and logo != paths.logo_path(ext):
        yield Error(ref, f"Logo path mismatch: metadata references '{logo}' but expected '{paths.logo_path(ext)}'",
                    InvalidFieldValue.__name__)


def check_checksum(ref, asset_id: AssetId, validator):
    # Non-EVM networks have no checksum scheme:
    if asset_id.chain_namespace != "eip155":
        return

    reference = asset_id.asset_reference
    if not reference.startswith("0x"):
        return

    if not checksum.is_hex_address(reference):
        yield Warning(ref, f"{reference} is not a hex address, checksum not verified", ChecksumMismatch.__name__)
        return

    if validator is None:
        yield Warning(ref, "No checksum validator available, checksum not verified", ChecksumUnavailable.__name__)
        return

    try:
        valid = validator.is_valid_checksum_address(reference)
    except ChecksumUnavailable as e:
        yield Warning(ref, f"Checksum not verified: {e}", ChecksumUnavailable.__name__)
        return

    if not valid:
        yield Error(ref, f"Address is not a valid checksum address: {reference} "
                         f"(expected {checksum.to_checksum_address(reference)})", ChecksumMismatch.__name__)


def verify_asset(asset_id: AssetId, root=REGISTRY_ROOT, checksum_validator=checksum.DEFAULT_VALIDATOR) -> Report:
    # A missing or unparsable metadata file only suppresses the field checks:
    ref = str(asset_id)
    paths = resolve_paths(asset_id, root)
    report = Report(ref)

    metadata = None
    try:
        metadata = load_json_object(paths.metadata_file)
    except RegistryError as e:
        report.results.append(Error(ref, str(e), e.kind))

    if metadata is not None:
        report.extend(check_metadata_fields(ref, metadata))

    report.extend(check_icon(ref, paths, metadata))
    report.extend(check_checksum(ref, asset_id, checksum_validator))
    return report


def verify_registry(root=REGISTRY_ROOT, checksum_validator=checksum.DEFAULT_VALIDATOR):
    entries = registry.read_entries(root)

    for entry in entries:
        if entry.asset_id is None:
            yield Error(entry.key, entry.error, InvalidIdentifierFormat.__name__)
            continue
        yield from verify_asset(entry.asset_id, root, checksum_validator).results

    for path in registry.find_orphan_icons(root):
        yield Warning(path, "icon file without a metadata record", FileNotFound.__name__)

    # Symbols only need to be unique within one chain:
    symbols = [(e.asset_id.chain_id, e.metadata["symbol"].upper(), e.key) for e in entries
               if e.metadata and isinstance(e.metadata.get("symbol"), str)]
    for (chain_id, symbol), items in find_duplicates(symbols, lambda s: (s[0], s[1])):
        yield Warning(chain_id, f"'{symbol}' is shared by: {', '.join(key for _, _, key in items)}")
