"""
Network selection from an RPC URL.
"""

from enum import Enum


class Network(str, Enum):
    """Stellar networks a contract can be deployed to."""
    TESTNET = "testnet"
    FUTURENET = "futurenet"
    PUBLIC = "public"

    @property
    def passphrase(self) -> str:
        return _PASSPHRASES[self]


_PASSPHRASES = {
    Network.TESTNET: "Test SDF Network ; September 2015",
    Network.FUTURENET: "Test SDF Future Network ; October 2022",
    Network.PUBLIC: "Public Global Stellar Network ; September 2015",
}


def select_network(url: str) -> Network:
    """
    Pick the network an RPC URL points at.

    Substring match, testnet first: anything that is neither testnet nor
    futurenet is treated as the public network.
    """
    if "testnet" in url:
        return Network.TESTNET
    if "futurenet" in url:
        return Network.FUTURENET
    return Network.PUBLIC
