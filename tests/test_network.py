"""
Tests for network selection.
"""

import pytest

from scit.core.network import Network, select_network


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://soroban-testnet.stellar.org", Network.TESTNET),
        ("https://rpc-futurenet.stellar.org:443", Network.FUTURENET),
        ("https://mainnet.sorobanrpc.com", Network.PUBLIC),
        ("", Network.PUBLIC),
        # testnet wins when both appear
        ("https://testnet.futurenet.example", Network.TESTNET),
    ],
)
def test_select_network(url, expected):
    """RPC URLs select their network."""
    assert select_network(url) is expected


def test_passphrases():
    """Each network carries its passphrase."""
    assert Network.TESTNET.passphrase == "Test SDF Network ; September 2015"
    assert Network.FUTURENET.passphrase == "Test SDF Future Network ; October 2022"
    assert Network.PUBLIC.passphrase == "Public Global Stellar Network ; September 2015"
