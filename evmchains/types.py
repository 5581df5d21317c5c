"""Generic units used in chain data models.

Types aliases are used to give human-readable meaning for various arguments and return values.
"""
from typing import TypeAlias

#: Chain id that is not a wrapped enum.
#:
#: `EIP-155 <https://eips.ethereum.org/EIPS/eip-155>`__ chain id,
#: unsigned integer.
#:
#: See :py:class:`evmchains.chain.ChainId` for details
RawChainId: TypeAlias = int

#: URL as a string type
#:
#: RPC URLs may contain placeholders like `${INFURA_API_KEY}`,
#: these are kept as is.
URL: TypeAlias = str

#: Token symbol of the native currency.
#:
#: E.g. `ETH`
#:
TokenSymbol: TypeAlias = str

#: EIP-3770 chain short name.
#:
#: E.g. `eth`, `arb1`
#:
#: `See EIP-3770 <https://eips.ethereum.org/EIPS/eip-3770>`__.
ShortName: TypeAlias = str

#: Ethereum address, `0x` prefixed hex string.
#:
#: Could be checksummed or non-checksummed address
Address: TypeAlias = str
