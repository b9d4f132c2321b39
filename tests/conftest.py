"""Shared fixtures for registry tests."""

import json
import os

import pytest

from caip import parse

DAI = "eip155:1/erc20:0x6B175474E89094C44Da98b954EedeAC495271d0F"
USDT_BSC = "eip155:56/erc20:0x55d398326f99059fF775485246999027B3197955"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1 1"><rect width="1" height="1"/></svg>'


def write_metadata(root, asset, data):
    asset_id = parse(asset)
    path = os.path.join(root, "metadata", asset_id.chain_id, f"{asset_id.asset_key}.json")
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)
    return path


def write_icon(root, asset, ext, content=PNG_BYTES):
    asset_id = parse(asset)
    path = os.path.join(root, "icons", asset_id.chain_id, f"{asset_id.asset_key}{ext}")
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(content)
    return path


def write_asset(root, asset, ext=".png", content=None, **fields):
    asset_id = parse(asset)
    data = {
        "name": "Dai Stablecoin",
        "symbol": "DAI",
        "decimals": 18,
        "logo": f"./icons/{asset_id.chain_id}/{asset_id.asset_key}{ext}",
        "erc20": True,
    }
    data.update(fields)
    if content is None:
        content = SVG_BYTES if ext == ".svg" else PNG_BYTES
    write_icon(root, asset, ext, content)
    return write_metadata(root, asset, data)


@pytest.fixture
def root(tmp_path):
    """An empty registry root."""
    return str(tmp_path / "registry")


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "source-logo.png"
    path.write_bytes(PNG_BYTES)
    return str(path)


@pytest.fixture
def svg_file(tmp_path):
    path = tmp_path / "source-logo.svg"
    path.write_bytes(SVG_BYTES)
    return str(path)
