"""EVM compatible blockchain list.

Typed lookups over the `ethereum-lists/chains <https://github.com/ethereum-lists/chains>`_
dataset embedded in this package.

- See :py:class:`evmchains.registry.ChainRegistry` for loading and look ups

- See :py:class:`evmchains.chain.ChainId` for well-known chains
"""
