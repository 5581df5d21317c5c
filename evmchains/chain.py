"""Blockchain records and ids.

Data structures and information about EVM based blockchains.
Each blockchain is described by a :py:class:`ChainRecord`, decoded from
one JSON file of the `chains repository <https://github.com/ethereum-lists/chains>`_.
The file format is camelCase JSON, e.g. `eip155-1.json` for Ethereum mainnet.

See :py:class:`ChainId` enum class for passing the identity of a well-known blockchain around.
This is based on the underlying `web3.eth.chain_id` attribute of a chain.
"""

import enum
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Collection, Union
from urllib.parse import urlparse

from dataclasses_json import dataclass_json, config, LetterCase, Undefined
from marshmallow import fields, ValidationError
from eth_utils import is_hex_address

from evmchains.config import DEFAULT_URL_SCHEMES
from evmchains.exceptions import DataFormatError
from evmchains.types import RawChainId, URL, TokenSymbol, ShortName, Address


def _check_type(owner: str, name: str, value, expected_type: type, optional=False):
    """Make sure JSON decoded value has the type we expect.

    Records can also be constructed directly or with the coercing `from_dict()`,
    so the dataclasses check their own fields.
    """
    if value is None and optional:
        return

    # bool is a subclass of int
    if expected_type is int and isinstance(value, bool):
        raise DataFormatError(f"{owner}: {name} must be int, got {value!r}")

    if not isinstance(value, expected_type):
        raise DataFormatError(f"{owner}: {name} must be {expected_type.__name__}, got {value!r}")


def _check_str_list(owner: str, name: str, value):
    _check_type(owner, name, value, list)
    for item in value:
        _check_type(owner, name, item, str)


def is_well_formed_url(url: str, schemes: Collection[str] = DEFAULT_URL_SCHEMES) -> bool:
    """Check if a string looks like an URL.

    We do not resolve or connect anything, just check the structure.
    Placeholders like `${INFURA_API_KEY}` in the path are accepted.

    :param url:
        URL candidate

    :param schemes:
        Accepted URL schemes, lowercase

    :return:
        True if the URL has an accepted scheme and a network location
    """
    if not isinstance(url, str) or not url:
        return False

    if any(c.isspace() for c in url):
        return False

    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    return parsed.scheme.lower() in schemes and bool(parsed.netloc)


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass(frozen=True)
class NativeCurrency:
    """The gas token of a chain."""

    #: E.g. "Ether"
    name: str

    #: E.g. "ETH"
    symbol: TokenSymbol

    #: Decimal precision, 18 for almost all EVM chains
    decimals: int = field(metadata=config(mm_field=fields.Integer(strict=True, required=True)))

    def __post_init__(self):
        _check_type("nativeCurrency", "name", self.name, str)
        _check_type("nativeCurrency", "symbol", self.symbol, str)
        _check_type("nativeCurrency", "decimals", self.decimals, int)
        if self.decimals < 0:
            raise DataFormatError(f"nativeCurrency: decimals cannot be negative, got {self.decimals}")


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass(frozen=True)
class Explorer:
    """A block explorer of a chain."""

    #: E.g. "etherscan"
    name: str

    #: Explorer landing page
    url: URL

    #: "EIP3091" if the explorer follows `/address/` and `/tx/` URL conventions, otherwise "none"
    standard: Optional[str] = None

    def __post_init__(self):
        _check_type("explorers", "name", self.name, str)
        _check_type("explorers", "url", self.url, str)
        _check_type("explorers", "standard", self.standard, str, optional=True)


@dataclass_json(undefined=Undefined.EXCLUDE)
@dataclass(frozen=True)
class Ens:
    """ENS deployment on a chain."""

    #: `0x` prefixed address of the ENS registry contract
    registry: Address

    def __post_init__(self):
        if not isinstance(self.registry, str) or not is_hex_address(self.registry):
            raise DataFormatError(f"ens: registry is not an address: {self.registry!r}")


@dataclass_json(undefined=Undefined.EXCLUDE)
@dataclass(frozen=True)
class Feature:
    """An EIP the chain supports."""

    #: E.g. "EIP1559"
    name: str


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass(frozen=True)
class ChainRecord:
    """One EVM-compatible network.

    Decoded from the `ethereum-lists/chains` JSON format.
    Keys in the data that we do not know about are ignored.

    Records are immutable. Two records are equal if all their fields are equal.
    """

    #: E.g. "Ethereum Mainnet"
    name: str

    #: Chain ticker-like identifier.
    #:
    #: E.g. "ETH". Shared by many L2s.
    chain: str

    #: EIP-155 chain id.
    #:
    #: Unique within a registry.
    chain_id: RawChainId = field(metadata=config(mm_field=fields.Integer(strict=True, required=True, data_key="chainId")))

    #: The gas token
    native_currency: NativeCurrency

    #: RPC endpoint URLs in the order of preference.
    #:
    #: May contain API key placeholders like `${INFURA_API_KEY}`.
    rpc_endpoints: List[URL] = field(metadata=config(field_name="rpc"))

    #: EIP-3770 short name, e.g. "eth"
    short_name: ShortName = ""

    #: Network id. Same as chain id for most chains.
    network_id: Optional[int] = field(default=None, metadata=config(mm_field=fields.Integer(strict=True, allow_none=True, data_key="networkId")))

    #: Project homepage
    info_url: Optional[str] = field(default=None, metadata=config(field_name="infoURL"))

    #: Icon identifier in the chains repository
    icon: Optional[str] = None

    #: Faucet URLs. Testnets only.
    faucets: List[str] = field(default_factory=list)

    #: SLIP-44 coin type, if any
    slip44: Optional[int] = field(default=None, metadata=config(mm_field=fields.Integer(strict=True, allow_none=True)))

    #: ENS registry, if deployed
    ens: Optional[Ens] = None

    #: Block explorers in the order of preference
    explorers: List[Explorer] = field(default_factory=list)

    #: Supported EIPs
    features: List[Feature] = field(default_factory=list)

    #: "active", "deprecated" or "incubating".
    #:
    #: Missing means active.
    status: Optional[str] = None

    def __post_init__(self):
        owner = f"chain {self.chain_id!r}"
        _check_type(owner, "chainId", self.chain_id, int)
        if self.chain_id < 0:
            raise DataFormatError(f"{owner}: chainId must be unsigned")
        _check_type(owner, "name", self.name, str)
        _check_type(owner, "chain", self.chain, str)
        _check_type(owner, "nativeCurrency", self.native_currency, NativeCurrency)
        _check_str_list(owner, "rpc", self.rpc_endpoints)
        _check_type(owner, "shortName", self.short_name, str)
        _check_type(owner, "networkId", self.network_id, int, optional=True)
        _check_type(owner, "infoURL", self.info_url, str, optional=True)
        _check_type(owner, "icon", self.icon, str, optional=True)
        _check_str_list(owner, "faucets", self.faucets)
        _check_type(owner, "slip44", self.slip44, int, optional=True)
        _check_type(owner, "ens", self.ens, Ens, optional=True)
        _check_type(owner, "explorers", self.explorers, list)
        for explorer in self.explorers:
            _check_type(owner, "explorers", explorer, Explorer)
        _check_type(owner, "features", self.features, list)
        _check_type(owner, "status", self.status, str, optional=True)

    def __repr__(self):
        return f"<Chain {self.name} ({self.chain_id})>"

    def __hash__(self) -> int:
        return hash(self.chain_id)

    @property
    def explorer_urls(self) -> List[URL]:
        """Explorer landing pages in the order of preference."""
        return [e.url for e in self.explorers]

    @staticmethod
    def from_file(path: Union[Path, str]) -> "ChainRecord":
        """Read one `eip155-{chain_id}.json` file.

        :raise DataFormatError:
            If the file cannot be read or decoded
        """
        path = Path(path)
        try:
            with open(path, "rt", encoding="utf-8") as inp:
                data = json.load(inp)
        except (OSError, ValueError) as e:
            raise DataFormatError(f"Failed to read chain file {path}: {e}") from e

        if not isinstance(data, dict):
            raise DataFormatError(f"Chain file {path} does not contain a JSON object")

        try:
            return ChainRecord.decode(data)
        except DataFormatError as e:
            raise DataFormatError(f"Bad chain file {path}: {e}") from e

    @staticmethod
    def decode(data: dict) -> "ChainRecord":
        """Decode one chain record with type validation.

        Unlike `from_dict()`, which coerces values, the marshmallow schema
        rejects a float chain id, a string where a list is expected and so on.

        :raise DataFormatError:
            If the data does not match the record schema
        """
        try:
            return ChainRecord.schema().load(data)
        except ValidationError as e:
            raise DataFormatError(f"Invalid chain data: {e.messages}") from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DataFormatError(f"Failed to decode chain data: {e!r}") from e

    def check_urls(self, schemes: Collection[str] = DEFAULT_URL_SCHEMES):
        """Make sure RPC and explorer URLs are well-formed.

        :raise DataFormatError:
            On the first malformed URL
        """
        for url in self.rpc_endpoints:
            if not is_well_formed_url(url, schemes):
                raise DataFormatError(f"Chain {self.chain_id}: malformed RPC URL {url!r}")

        for url in self.explorer_urls:
            if not is_well_formed_url(url, schemes):
                raise DataFormatError(f"Chain {self.chain_id}: malformed explorer URL {url!r}")

    def is_deprecated(self) -> bool:
        return self.status == "deprecated"

    def get_explorer(self) -> Optional[URL]:
        """Get explorer landing page for this blockchain.

        :return:
            The first explorer URL without a trailing slash, or None if the chain has no explorers
        """
        if not self.explorers:
            return None
        return self.explorers[0].url.rstrip("/")

    def get_address_link(self, address: Address) -> Optional[URL]:
        """Get one address link.

        Use EIP3091 format.

        https://eips.ethereum.org/EIPS/eip-3091

        :return:
            None if the chain has no explorers
        """
        explorer = self.get_explorer()
        if explorer is None:
            return None
        return f"{explorer}/address/{address}"

    def get_tx_link(self, tx: str) -> Optional[URL]:
        """Get one tx link, or None if the chain has no explorers"""
        explorer = self.get_explorer()
        if explorer is None:
            return None
        return f"{explorer}/tx/{tx}"


def _get_chain_record(chain_id: int) -> ChainRecord:
    assert type(chain_id) == int, f"Got chain_id {type(chain_id)}"
    # Avoid circular import
    from evmchains.registry import get_default_registry
    return get_default_registry().get_by_chain_id(chain_id)


class ChainId(enum.IntEnum):
    """Chain ids and chain metadata helper for well-known chains.

    Chain id is an integer that defines the identity of a blockchain,
    all running on same or different EVM implementations.

    This class also provides various other metadata attributes besides `ChainId.value`,
    like `ChainId.get_name()`. The data is pulled from the embedded chains dataset,
    see :py:func:`evmchains.registry.get_default_registry`.

    For chains not listed here, use :py:class:`evmchains.registry.ChainRegistry` directly.

    For the full chain id list see:

    - `chainid.network <https://chainid.network/>`_

    - `chains repo <https://github.com/ethereum-lists/chains>`_
    """

    #: Ethereum mainnet chain id
    ethereum = 1

    #: OP Mainnet, formerly Optimism
    optimism = 10

    #: BNB Smart Chain mainnet chain id
    bsc = 56

    #: Alias for BNB Smart Chain
    binance = bsc

    #: Ethereum Classic chain id.
    ethereum_classic = 61

    #: Gnosis chain, formerly xDai
    gnosis = 100

    #: Polygon PoS chain id
    polygon = 137

    #: Fantom Opera
    fantom = 250

    #: zkSync Era mainnet
    zksync = 324

    #: Base mainnet
    base = 8453

    #: Arbitrum One id
    arbitrum = 42161

    #: Avalanche C-chain id
    avalanche = 43114

    #: Linea mainnet
    linea = 59144

    #: Sepolia testnet
    sepolia = 11155111

    @property
    def data(self) -> ChainRecord:
        """Get chain data entry for this chain."""
        return _get_chain_record(self.value)

    def get_name(self) -> str:
        """Get full human readable name for this blockchain"""
        return self.data.name

    def get_short_name(self) -> ShortName:
        """Get EIP-3770 short name for this chain"""
        return self.data.short_name

    def get_homepage(self) -> Optional[str]:
        """Get homepage link for this blockchain"""
        return self.data.info_url

    def get_explorer(self) -> Optional[URL]:
        """Get explorer landing page for this blockchain"""
        return self.data.get_explorer()

    def get_address_link(self, address: Address) -> Optional[URL]:
        """Get one address link on the default explorer."""
        return self.data.get_address_link(address)

    def get_tx_link(self, tx: str) -> Optional[URL]:
        """Get one tx link on the default explorer."""
        return self.data.get_tx_link(tx)

    @staticmethod
    def get_by_short_name(short_name: ShortName) -> Optional["ChainId"]:
        """Map an EIP-3770 short name back to the chain.

        :return:
            None if the short name is unknown or the chain is not one of the enum members
        """
        from evmchains.registry import get_default_registry
        from evmchains.registry import ChainNotFoundError

        try:
            record = get_default_registry().get_by_short_name(short_name)
        except ChainNotFoundError:
            return None

        try:
            return ChainId(record.chain_id)
        except ValueError:
            return None
