"""Test fixtures."""
import copy
import json
import logging
import sys
from pathlib import Path
from typing import Callable

import pytest

from evmchains.registry import ChainRegistry, get_default_registry


#: Minimal Ethereum mainnet record in ethereum-lists format
ETHEREUM_DATA = {
    "name": "Ethereum Mainnet",
    "chain": "ETH",
    "rpc": [
        "https://mainnet.infura.io/v3/${INFURA_API_KEY}",
        "https://cloudflare-eth.com",
    ],
    "faucets": [],
    "nativeCurrency": {"name": "Ether", "symbol": "ETH", "decimals": 18},
    "infoURL": "https://ethereum.org",
    "shortName": "eth",
    "chainId": 1,
    "networkId": 1,
    "slip44": 60,
    "explorers": [{"name": "etherscan", "url": "https://etherscan.io", "standard": "EIP3091"}],
}

#: Minimal Polygon record in ethereum-lists format
POLYGON_DATA = {
    "name": "Polygon",
    "chain": "Polygon",
    "rpc": ["https://polygon-rpc.com"],
    "faucets": [],
    "nativeCurrency": {"name": "POL", "symbol": "POL", "decimals": 18},
    "infoURL": "https://polygon.technology",
    "shortName": "pol",
    "chainId": 137,
    "networkId": 137,
    "explorers": [],
}


@pytest.fixture(scope="session")
def logger(request) -> logging.Logger:
    """Initialize stdout logger using colored output."""

    logger = logging.getLogger()

    # pytest --log-level option
    log_level = request.config.getoption("--log-level") or "INFO"

    # Set log format to dislay the logger name to hunt down verbose logging modules
    fmt = "%(name)-25s %(levelname)-8s %(message)s"

    # Use colored logging output for console
    try:
        import coloredlogs
        coloredlogs.install(level=log_level, fmt=fmt, logger=logger)
    except ImportError:
        logging.basicConfig(stream=sys.stdout, level=log_level)

    return logger


@pytest.fixture(scope="session")
def default_registry() -> ChainRegistry:
    """The registry of the embedded dataset."""
    return get_default_registry()


@pytest.fixture()
def write_chain_file(tmp_path: Path) -> Callable:
    """Write one chain file into a temporary data folder.

    Data can be a dict or raw file content.
    """

    def _write(data, file_name: str = None) -> Path:
        if file_name is None:
            file_name = f"eip155-{data['chainId']}.json"
        path = tmp_path / file_name
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture()
def ethereum_data() -> dict:
    return copy.deepcopy(ETHEREUM_DATA)


@pytest.fixture()
def polygon_data() -> dict:
    return copy.deepcopy(POLYGON_DATA)


@pytest.fixture()
def two_chain_data_path(tmp_path: Path, write_chain_file, ethereum_data: dict, polygon_data: dict) -> Path:
    """Data folder with Ethereum mainnet and Polygon."""
    write_chain_file(polygon_data)
    write_chain_file(ethereum_data)
    return tmp_path
