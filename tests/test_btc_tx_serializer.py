import random

import pytest

from bitcoindecoder.domain.transaction import BtcTransaction
from bitcoindecoder.domain.transaction_input import BtcOutPoint, BtcTransactionInput
from bitcoindecoder.domain.transaction_output import BtcTransactionOutput
from bitcoindecoder.domain.witness import BtcWitness
from bitcoindecoder.service.btc_tx_decoder import decode_transaction
from bitcoindecoder.service.btc_tx_serializer import (
    serialize_transaction,
    serialize_witness,
    calculate_txid,
    calculate_wtxid,
    calculate_size,
    calculate_weight,
    calculate_vsize,
)
from tests.tx_fixtures import (
    GENESIS_COINBASE_HEX,
    GENESIS_COINBASE_TXID,
    LEGACY_TX_HEX,
    LEGACY_TX_TXID,
    SEGWIT_TX_HEX,
    SEGWIT_TX_TXID,
    SEGWIT_TX_WTXID,
)


def random_bytes(rng, max_size):
    return bytes(rng.getrandbits(8) for _ in range(rng.randint(0, max_size)))


def random_transaction(rng):
    has_witness = rng.random() < 0.5
    inputs = []
    # at least one input, an empty input list reads as a witness marker
    for _ in range(rng.randint(1, 4)):
        witness = None
        if has_witness:
            witness = BtcWitness(
                stack=tuple(random_bytes(rng, 80) for _ in range(rng.randint(0, 4)))
            )
        inputs.append(
            BtcTransactionInput(
                previous_output=BtcOutPoint(
                    txid=bytes(rng.getrandbits(8) for _ in range(32)),
                    vout=rng.getrandbits(32),
                ),
                script_sig=random_bytes(rng, 300),
                sequence=rng.getrandbits(32),
                witness=witness,
            )
        )
    outputs = [
        BtcTransactionOutput(
            value=rng.getrandbits(64), script_pubkey=random_bytes(rng, 60)
        )
        for _ in range(rng.randint(0, 4))
    ]
    return BtcTransaction(
        version=rng.randint(-(2**31), 2**31 - 1),
        has_witness=has_witness,
        inputs=tuple(inputs),
        outputs=tuple(outputs),
        locktime=rng.getrandbits(32),
    )


class TestSerialize:
    @pytest.mark.parametrize(
        "tx_hex", [GENESIS_COINBASE_HEX, LEGACY_TX_HEX, SEGWIT_TX_HEX]
    )
    def test_reproduces_wire_bytes(self, tx_hex):
        raw = bytes.fromhex(tx_hex)
        assert serialize_transaction(decode_transaction(raw)) == raw

    def test_round_trip_generated_transactions(self):
        rng = random.Random(7)
        for _ in range(300):
            tx = random_transaction(rng)
            assert decode_transaction(serialize_transaction(tx)) == tx

    def test_stripped_serialization_drops_the_witness(self, segwit_tx):
        stripped = serialize_transaction(segwit_tx, include_witness=False)
        assert len(stripped) == 95
        assert decode_transaction(stripped).has_witness is False

    def test_serialize_witness(self):
        witness = BtcWitness(stack=(b"\xaa", b""))
        assert serialize_witness(witness).hex() == "0201aa00"


class TestIdentifiers:
    def test_genesis_txid(self, genesis_tx):
        assert calculate_txid(genesis_tx) == GENESIS_COINBASE_TXID

    def test_legacy_txid_equals_wtxid(self, legacy_tx):
        assert calculate_txid(legacy_tx) == LEGACY_TX_TXID
        assert calculate_wtxid(legacy_tx) == LEGACY_TX_TXID

    def test_segwit_ids(self, segwit_tx):
        assert calculate_txid(segwit_tx) == SEGWIT_TX_TXID
        assert calculate_wtxid(segwit_tx) == SEGWIT_TX_WTXID


class TestSizes:
    def test_legacy(self, legacy_tx):
        assert calculate_size(legacy_tx) == 226
        assert calculate_weight(legacy_tx) == 904
        assert calculate_vsize(legacy_tx) == 226

    def test_segwit(self, segwit_tx):
        assert calculate_size(segwit_tx) == 204
        assert calculate_weight(segwit_tx) == 95 * 3 + 204
        # 489 / 4 rounds up
        assert calculate_vsize(segwit_tx) == 123
