import copy

import pytest

TREASURY = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
GATEKEEPER_NETWORK = "ignREusXmGrscGNUesoU9mxfds9AiYTezUKex2PsZV6"
WHITELIST_MINT = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
SPL_TOKEN = "So11111111111111111111111111111111111111112"
CANDY_MACHINE = "cndy3Z4yapfJBmL3ShUp5exZKqR3z33thTzeNMm2gRZ"

_DOCUMENT = {
    "price": 1.5,
    "number": 100,
    "gatekeeper": {
        "gatekeeper_network": GATEKEEPER_NETWORK,
        "expire_on_use": True,
    },
    "solTreasuryAccount": TREASURY,
    "splTokenAccount": None,
    "splToken": SPL_TOKEN,
    "goLiveDate": "2022-01-01T00:00:00Z",
    "endSettings": {"end_setting_type": "Amount", "number": 50},
    "whitelistMintSettings": {
        "mode": "burnEveryTime",
        "mint": WHITELIST_MINT,
        "presale": True,
        "discountPrice": 0.5,
    },
    "hiddenSettings": {
        "name": "Hidden #",
        "uri": "https://arweave.net/hidden.json",
        "hash": list(range(32)),
    },
    "uploadMethod": "bundlr",
    "retainAuthority": True,
    "isMutable": False,
}


@pytest.fixture
def document():
    """A complete, valid configuration document (fresh copy per test)."""
    return copy.deepcopy(_DOCUMENT)


@pytest.fixture
def minimal_document():
    """Only the required keys."""
    return {
        "price": 1,
        "number": 10,
        "solTreasuryAccount": TREASURY,
        "goLiveDate": "2022-01-01T00:00:00Z",
        "uploadMethod": "metaplex",
        "retainAuthority": False,
        "isMutable": True,
    }
