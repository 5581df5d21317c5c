from evmchains.chain import ChainId


def test_chain_name():
    c = ChainId(1)
    assert c.get_name() == "Ethereum Mainnet"


def test_chain_homepage():
    c = ChainId(1)
    assert c.get_homepage() == "https://ethereum.org"


def test_bsc():
    c = ChainId(56)
    assert c.get_name() == "BNB Smart Chain Mainnet"
    assert c.get_short_name() == "bnb"

    d = ChainId.binance
    assert d is ChainId.bsc
    assert d.get_name() == "BNB Smart Chain Mainnet"


def test_avalanche():
    c = ChainId(43114)
    assert c.get_name() == "Avalanche C-Chain"
    assert c.get_short_name() == "avax"


def test_arbitrum():
    c = ChainId(42161)
    assert c.get_name() == "Arbitrum One"
    assert c.get_explorer() == "https://arbiscan.io"
    assert c.get_tx_link("0xabc") == "https://arbiscan.io/tx/0xabc"


def test_every_member_has_data():
    """All well-known chains are in the embedded dataset."""
    for chain_id in ChainId:
        assert chain_id.data.chain_id == chain_id.value


def test_resolve_by_short_name():
    c = ChainId.get_by_short_name("bnb")
    assert c == ChainId.bsc

    c = ChainId.get_by_short_name("arb1")
    assert c.value == 42161

    assert ChainId.get_by_short_name("foobar") is None
