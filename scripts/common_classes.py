from dataclasses import dataclass, fields
from typing import Optional, Self

from caip import AssetId
from schema import PERMITTED_FIELDS
from statics import RAW_BASE_URL


def build_dataclass_from_dict(cls, dict_):
    class_fields = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in dict_.items() if k in class_fields})


@dataclass
class AssetMetadata:
    name: str
    logo: str
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    erc20: Optional[bool] = None
    spl: Optional[bool] = None

    def to_dict(self):
        # Stable key order so that rewriting the same record is byte-identical:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        if isinstance(self.decimals, float):
            values["decimals"] = int(self.decimals)
        return {k: values[k] for k in PERMITTED_FIELDS if values.get(k) is not None}

    @classmethod
    def from_dict(cls, dict_) -> Self:
        return build_dataclass_from_dict(cls, dict_)


@dataclass
class TokenListEntry:
    chainId: int
    address: str
    name: str
    symbol: str
    decimals: int
    logoURI: str

    @staticmethod
    def build_logo_uri(asset_id: AssetId, logo: Optional[str], base_url=RAW_BASE_URL):
        if not logo:
            return ""
        _, dot, ext = logo.rpartition(".")
        suffix = f".{ext}" if dot else ""
        return f"{base_url}icons/{asset_id.chain_id}/{asset_id.asset_key}{suffix}"

    @staticmethod
    def from_metadata(asset_id: AssetId, metadata: dict, base_url=RAW_BASE_URL):
        decimals = metadata.get("decimals")
        if isinstance(decimals, float):
            decimals = int(decimals)
        return TokenListEntry(
            chainId=int(asset_id.chain_reference),
            address=asset_id.asset_reference,
            name=metadata.get("name") or "",
            symbol=metadata.get("symbol") or "",
            decimals=18 if decimals is None else decimals,
            logoURI=TokenListEntry.build_logo_uri(asset_id, metadata.get("logo"), base_url)
        )
