"""Chain registry.

Load the embedded `ethereum-lists/chains <https://github.com/ethereum-lists/chains>`_ data
and look up chains by their id, name or short name.

The package embeds the chain list data from the chains repository
under `evmchains/chains/_data/chains`, one `eip155-{chain_id}.json` file per chain.

Example:

.. code-block:: python

    from evmchains.registry import get_default_registry

    registry = get_default_registry()
    ethereum = registry.get_by_chain_id(1)
    assert ethereum.name == "Ethereum Mainnet"
    assert ethereum.native_currency.symbol == "ETH"

"""

import logging
import os
import re
import threading
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

import pandas as pd

from evmchains.chain import ChainRecord
from evmchains.config import Configuration
from evmchains.exceptions import DataFormatError, NotFoundError
from evmchains.types import RawChainId, ShortName


logger = logging.getLogger(__name__)


#: Where the embedded chains data lives inside the package
DEFAULT_DATA_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "chains", "_data", "chains"))

#: Chain data file name, chain id captured
CHAIN_FILE_PATTERN = re.compile(r"^eip155-(\d+)\.json$")


class ChainNotFoundError(NotFoundError):
    """Raised when no chain found for the given id or short name"""

    def __init__(
        self,
        *,
        chain_id: Optional[RawChainId] = None,
        short_name: Optional[ShortName] = None,
    ):
        assert chain_id is not None or short_name is not None, "At least one chain_id or short_name must be provided."

        if chain_id is not None:
            message = f"The chain registry does not contain chain_id {chain_id}"
        else:
            message = f"The chain registry does not contain short_name {short_name}"

        super().__init__(message)


def _is_chain_id(value) -> bool:
    # bool is a subclass of int
    return isinstance(value, int) and not isinstance(value, bool)


class _ChainIterable:
    """Restartable view over the records of a registry."""

    def __init__(self, chains: Mapping[RawChainId, ChainRecord]):
        self._chains = chains

    def __iter__(self) -> Iterator[ChainRecord]:
        return iter(self._chains.values())

    def __len__(self) -> int:
        return len(self._chains)


class ChainRegistry:
    """Chain data manager.

    Contains look up for chains by their EIP-155 chain ids.

    The registry is read-only once constructed and can be shared
    between threads without locking.
    Use :py:meth:`load` to construct one, or
    :py:func:`get_default_registry` for the process-wide instance.
    """

    def __init__(self, chains: Dict[RawChainId, ChainRecord]):
        """
        :param chains:
            Chain id -> chain data mapping, in the natural order

        :raise DataFormatError:
            If a key does not match the chain id of its record
        """
        for chain_id, chain in chains.items():
            if chain_id != chain.chain_id:
                raise DataFormatError(f"Chain id mismatch {chain_id} != {chain.chain_id}")

        self._chains: Mapping[RawChainId, ChainRecord] = MappingProxyType(dict(chains))

    def __repr__(self):
        return f"<ChainRegistry with {len(self._chains)} chains>"

    def __len__(self) -> int:
        return len(self._chains)

    def __contains__(self, chain_id: RawChainId) -> bool:
        return _is_chain_id(chain_id) and chain_id in self._chains

    def __iter__(self) -> Iterator[ChainRecord]:
        return iter(self._chains.values())

    def __eq__(self, other) -> bool:
        return isinstance(other, ChainRegistry) and dict(self._chains) == dict(other._chains)

    @staticmethod
    def load(config: Optional[Configuration] = None) -> "ChainRegistry":
        """Construct the registry from the chain data files.

        All or nothing: either every file is decoded or the load fails.

        :param config:
            Where to read the data and how strict to be with URLs.
            Defaults to the embedded dataset.

        :raise DataFormatError:
            If any chain file is missing, malformed or duplicated
        """
        if config is None:
            config = Configuration()

        path = config.data_path or DEFAULT_DATA_PATH

        if not os.path.isdir(path):
            raise DataFormatError(f"Chain data folder {path} not found. Make sure Python packaging is correct.")

        # chain id -> file name
        chain_files: Dict[RawChainId, str] = {}
        for file_name in os.listdir(path):
            if not os.path.isfile(os.path.join(path, file_name)):
                continue

            match = CHAIN_FILE_PATTERN.match(file_name)
            if not match:
                raise DataFormatError(f"Chain file name was in incorrect form, expected: eip155-CHAIN_ID.json, got {file_name}")

            chain_id = int(match.group(1))
            if chain_id in chain_files:
                # E.g. eip155-01.json and eip155-1.json
                raise DataFormatError(f"Duplicate chain id {chain_id}: {chain_files[chain_id]} and {file_name}")
            chain_files[chain_id] = file_name

        chains: Dict[RawChainId, ChainRecord] = {}
        for chain_id in sorted(chain_files):
            file_name = chain_files[chain_id]
            chain = ChainRecord.from_file(os.path.join(path, file_name))

            if chain.chain_id != chain_id:
                raise DataFormatError(f"Chain file {file_name} contains chainId {chain.chain_id}")

            chain.check_urls(config.url_schemes)

            logger.debug("Loaded chain %d: %s", chain_id, chain.name)
            chains[chain_id] = chain

        logger.info("Loaded %d chains from %s", len(chains), path)
        return ChainRegistry(chains)

    def get_by_chain_id(self, chain_id: RawChainId) -> ChainRecord:
        """Get a chain by its EIP-155 id.

        Booleans are not chain ids, even though `True == 1`.

        :raise ChainNotFoundError:
            If the chain is not in the registry
        """
        if not _is_chain_id(chain_id):
            raise ChainNotFoundError(chain_id=chain_id)

        try:
            return self._chains[chain_id]
        except KeyError:
            raise ChainNotFoundError(chain_id=chain_id)

    def get_by_short_name(self, short_name: ShortName) -> ChainRecord:
        """Get a chain by its EIP-3770 short name.

        :param short_name:
            Like `eth` or `arb1`. Case insensitive.

        :raise ChainNotFoundError:
            If the chain is not in the registry
        """
        short_name = short_name.lower()
        for chain in self._chains.values():
            if chain.short_name.lower() == short_name:
                return chain

        raise ChainNotFoundError(short_name=short_name)

    def all(self) -> Iterable[ChainRecord]:
        """Iterate all chains.

        Chains come in the natural order of the dataset, ascending chain id.
        The returned iterable can be iterated more than once.
        """
        return _ChainIterable(self._chains)

    def find_by_name(self, name: str, partial=False) -> List[ChainRecord]:
        """Find chains by their human readable name.

        Names are not unique, so there may be several matches.

        :param name:
            Like `Ethereum Mainnet`. Case insensitive.

        :param partial:
            Match any chain whose name contains `name`,
            instead of the whole name.

        :return:
            Matching chains in the natural order, or an empty list
        """
        name = name.lower()
        if partial:
            return [c for c in self._chains.values() if name in c.name.lower()]
        return [c for c in self._chains.values() if c.name.lower() == name]

    def get_chain_count(self) -> int:
        return len(self._chains)

    def get_chain_ids(self) -> List[RawChainId]:
        return list(self._chains.keys())

    def to_pandas(self) -> pd.DataFrame:
        """Get the chain list as a table.

        One row per chain, indexed by `chain_id`.
        """
        rows = [
            {
                "chain_id": c.chain_id,
                "name": c.name,
                "short_name": c.short_name,
                "chain": c.chain,
                "native_currency_symbol": c.native_currency.symbol,
                "native_currency_decimals": c.native_currency.decimals,
                "rpc_count": len(c.rpc_endpoints),
                "explorer": c.get_explorer(),
                "deprecated": c.is_deprecated(),
            }
            for c in self._chains.values()
        ]
        df = pd.DataFrame(rows, columns=[
            "chain_id",
            "name",
            "short_name",
            "chain",
            "native_currency_symbol",
            "native_currency_decimals",
            "rpc_count",
            "explorer",
            "deprecated",
        ])
        return df.set_index("chain_id")


#: Process-wide registry, see get_default_registry()
_default_registry: Optional[ChainRegistry] = None

#: Prevent duplicate loads when several threads hit get_default_registry() at once
_init_lock = threading.Lock()


def load() -> ChainRegistry:
    """Construct a new registry from the embedded dataset.

    Shortcut for :py:meth:`ChainRegistry.load`.
    """
    return ChainRegistry.load()


def get_default_registry() -> ChainRegistry:
    """Get the process-wide registry of the embedded dataset.

    Loaded on the first call. If the load fails nothing is cached
    and the next call tries again.
    """
    global _default_registry

    with _init_lock:
        if _default_registry is None:
            _default_registry = ChainRegistry.load()
        return _default_registry


def get_chain(chain_id: RawChainId) -> Optional[ChainRecord]:
    """Get chain data from the default registry.

    :return:
        None if the chain is unknown
    """
    try:
        return get_default_registry().get_by_chain_id(chain_id)
    except ChainNotFoundError:
        return None
