import re
from typing import Protocol

from web3 import Web3

HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class ChecksumValidator(Protocol):
    def is_valid_checksum_address(self, address: str) -> bool:
        ...


class Web3ChecksumValidator:
    """Mixed-case (EIP-55) checksum validation backed by web3."""

    def is_valid_checksum_address(self, address: str) -> bool:
        return Web3.is_checksum_address(address)


DEFAULT_VALIDATOR = Web3ChecksumValidator()


def is_hex_address(reference: str) -> bool:
    return HEX_ADDRESS_RE.match(reference) is not None


def to_checksum_address(address: str) -> str:
    return Web3.to_checksum_address(address)
