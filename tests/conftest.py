import pytest

from bitcoindecoder.service.btc_tx_decoder import decode_transaction_hex
from tests.tx_fixtures import (
    GENESIS_COINBASE_HEX,
    LEGACY_TX_HEX,
    SEGWIT_TX_HEX,
    TAPROOT_KEYPATH_TX_HEX,
)


@pytest.fixture
def genesis_tx():
    return decode_transaction_hex(GENESIS_COINBASE_HEX)


@pytest.fixture
def legacy_tx():
    return decode_transaction_hex(LEGACY_TX_HEX)


@pytest.fixture
def segwit_tx():
    return decode_transaction_hex(SEGWIT_TX_HEX)


@pytest.fixture
def taproot_keypath_tx():
    return decode_transaction_hex(TAPROOT_KEYPATH_TX_HEX)
