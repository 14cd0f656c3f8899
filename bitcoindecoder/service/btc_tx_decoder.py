import logging

from bitcoindecoder.domain.transaction import BtcTransaction
from bitcoindecoder.domain.transaction_input import BtcOutPoint, BtcTransactionInput
from bitcoindecoder.domain.transaction_output import BtcTransactionOutput
from bitcoindecoder.misc.decode_error import TrailingBytes, InvalidHex
from bitcoindecoder.service.byte_cursor import ByteCursor
from bitcoindecoder.service.btc_witness_decoder import decode_witness
from bitcoindecoder.utils import hex_to_bytes

# BIP144 marker and flag, placed where the input count would be
WITNESS_MARKER_FLAG = b"\x00\x01"

# txid + vout + empty script length + sequence
MIN_INPUT_SIZE = 32 + 4 + 1 + 4
# value + empty script length
MIN_OUTPUT_SIZE = 8 + 1

logger = logging.getLogger(__name__)


def decode_transaction(raw: bytes) -> BtcTransaction:
    """Deserialize one transaction, all or nothing.

    Raises UnexpectedEof, InvalidLength or TrailingBytes on malformed input;
    no partially decoded transaction is ever returned.
    """
    cursor = ByteCursor(raw)

    version = cursor.read_int32()

    has_witness = cursor.peek(2) == WITNESS_MARKER_FLAG
    if has_witness:
        cursor.read_exact(2)

    input_count = cursor.read_count("input count", MIN_INPUT_SIZE)
    inputs = [_decode_input(cursor) for _ in range(input_count)]

    output_count = cursor.read_count("output count", MIN_OUTPUT_SIZE)
    outputs = [_decode_output(cursor) for _ in range(output_count)]

    if has_witness:
        # one stack per input, in input order
        inputs = [input._replace(witness=decode_witness(cursor)) for input in inputs]

    locktime = cursor.read_uint32()

    if cursor.remaining() > 0:
        raise TrailingBytes(
            "{} bytes left after the locktime".format(cursor.remaining()),
            cursor.position(),
        )

    logger.debug(
        f"decoded {len(raw)} bytes: version={version} witness={has_witness} "
        f"inputs={input_count} outputs={output_count} locktime={locktime}"
    )
    return BtcTransaction(
        version=version,
        has_witness=has_witness,
        inputs=tuple(inputs),
        outputs=tuple(outputs),
        locktime=locktime,
    )


def decode_transaction_hex(hex_string: str) -> BtcTransaction:
    try:
        raw = hex_to_bytes(hex_string)
    except ValueError as e:
        raise InvalidHex(str(e))
    return decode_transaction(raw)


def _decode_input(cursor: ByteCursor) -> BtcTransactionInput:
    txid = cursor.read_exact(32)
    vout = cursor.read_uint32()
    script_sig = cursor.read_var_bytes("scriptSig")
    sequence = cursor.read_uint32()
    return BtcTransactionInput(
        previous_output=BtcOutPoint(txid=txid, vout=vout),
        script_sig=script_sig,
        sequence=sequence,
    )


def _decode_output(cursor: ByteCursor) -> BtcTransactionOutput:
    value = cursor.read_uint64()
    script_pubkey = cursor.read_var_bytes("scriptPubKey")
    return BtcTransactionOutput(value=value, script_pubkey=script_pubkey)
