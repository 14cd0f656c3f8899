import hashlib
import struct

from bitcoindecoder.domain.transaction import BtcTransaction
from bitcoindecoder.domain.transaction_input import BtcTransactionInput
from bitcoindecoder.domain.transaction_output import BtcTransactionOutput
from bitcoindecoder.domain.witness import BtcWitness
from bitcoindecoder.service.byte_cursor import encode_varint
from bitcoindecoder.service.btc_tx_decoder import WITNESS_MARKER_FLAG

# BIP141: non-witness bytes weigh 4 units, witness bytes 1
WITNESS_SCALE_FACTOR = 4


def double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def serialize_witness(witness: BtcWitness) -> bytes:
    parts = [encode_varint(len(witness.stack))]
    for item in witness.stack:
        parts.append(_var_bytes(item))
    return b"".join(parts)


def serialize_transaction(tx: BtcTransaction, include_witness: bool = True) -> bytes:
    with_witness = include_witness and tx.has_witness

    parts = [struct.pack("<i", tx.version)]
    if with_witness:
        parts.append(WITNESS_MARKER_FLAG)

    parts.append(encode_varint(len(tx.inputs)))
    parts.extend(_serialize_input(input) for input in tx.inputs)

    parts.append(encode_varint(len(tx.outputs)))
    parts.extend(_serialize_output(output) for output in tx.outputs)

    if with_witness:
        for input in tx.inputs:
            parts.append(serialize_witness(input.witness or BtcWitness()))

    parts.append(struct.pack("<I", tx.locktime))
    return b"".join(parts)


def calculate_txid(tx: BtcTransaction) -> str:
    return double_sha256(serialize_transaction(tx, include_witness=False))[::-1].hex()


def calculate_wtxid(tx: BtcTransaction) -> str:
    # equals the txid for transactions without a witness section
    return double_sha256(serialize_transaction(tx))[::-1].hex()


def calculate_size(tx: BtcTransaction) -> int:
    return len(serialize_transaction(tx))


def calculate_weight(tx: BtcTransaction) -> int:
    base_size = len(serialize_transaction(tx, include_witness=False))
    total_size = len(serialize_transaction(tx))
    return base_size * (WITNESS_SCALE_FACTOR - 1) + total_size


def calculate_vsize(tx: BtcTransaction) -> int:
    return (calculate_weight(tx) + WITNESS_SCALE_FACTOR - 1) // WITNESS_SCALE_FACTOR


def _var_bytes(data: bytes) -> bytes:
    return encode_varint(len(data)) + data


def _serialize_input(input: BtcTransactionInput) -> bytes:
    return b"".join(
        [
            input.previous_output.txid,
            struct.pack("<I", input.previous_output.vout),
            _var_bytes(input.script_sig),
            struct.pack("<I", input.sequence),
        ]
    )


def _serialize_output(output: BtcTransactionOutput) -> bytes:
    return struct.pack("<Q", output.value) + _var_bytes(output.script_pubkey)
