from typing import Tuple

from bitcoindecoder.domain.witness import BtcWitness
from bitcoindecoder.misc.decode_error import TrailingBytes
from bitcoindecoder.service.byte_cursor import ByteCursor

# BIP341 control block: 1 byte leaf version/parity, 32 bytes internal key,
# then 32 bytes per merkle path node (at most 128 nodes)
CONTROL_BLOCK_BASE_SIZE = 33
CONTROL_BLOCK_NODE_SIZE = 32
CONTROL_BLOCK_MAX_NODES = 128
TAPSCRIPT_LEAF_MASK = 0xFE


def decode_witness(cursor: ByteCursor) -> BtcWitness:
    """Read one witness stack: an item count followed by length-prefixed items."""
    count = cursor.read_count("witness item count")
    items = []
    for _ in range(count):
        items.append(cursor.read_var_bytes("witness item"))
    return BtcWitness(stack=tuple(items))


def decode_witness_bytes(raw: bytes) -> BtcWitness:
    cursor = ByteCursor(raw)
    witness = decode_witness(cursor)
    if cursor.remaining() > 0:
        raise TrailingBytes(
            "{} bytes left after the witness stack".format(cursor.remaining()),
            cursor.position(),
        )
    return witness


def is_control_block(item: bytes) -> bool:
    size = len(item)
    if size < CONTROL_BLOCK_BASE_SIZE:
        return False
    nodes, rest = divmod(size - CONTROL_BLOCK_BASE_SIZE, CONTROL_BLOCK_NODE_SIZE)
    if rest != 0 or nodes > CONTROL_BLOCK_MAX_NODES:
        return False
    # leaf versions are even, 0xc0 is tapscript
    return (item[0] & TAPSCRIPT_LEAF_MASK) == 0xC0


def is_der_signature(item: bytes) -> bool:
    # DER sequence plus the trailing sighash byte
    return 9 <= len(item) <= 73 and item[0] == 0x30 and item[1] == len(item) - 3


def is_public_key(item: bytes) -> bool:
    if len(item) == 33:
        return item[0] in (0x02, 0x03)
    if len(item) == 65:
        return item[0] == 0x04
    return False


def is_schnorr_signature(item: bytes) -> bool:
    # 64 bytes, or 65 with an explicit sighash type
    return len(item) == 64 or (len(item) == 65 and not is_public_key(item))


def describe_witness_item(item: bytes) -> str:
    size = len(item)
    if size == 0:
        return "Empty"
    if is_der_signature(item):
        return "Signature (DER)"
    if is_public_key(item):
        return "Public Key ({})".format("compressed" if size == 33 else "uncompressed")
    if is_schnorr_signature(item):
        return "Signature (Schnorr)"
    if size > 100:
        return "Script or Data ({} bytes)".format(size)
    return "Data ({} bytes)".format(size)


def describe_witness(witness: BtcWitness) -> Tuple[str, ...]:
    """One label per stack item, using the item's position where it matters."""
    stack = witness.stack_without_annex()
    labels = [describe_witness_item(item) for item in stack]

    # script path spend: [args..., tapscript, control block]
    if len(stack) >= 2 and is_control_block(stack[-1]):
        depth = (len(stack[-1]) - CONTROL_BLOCK_BASE_SIZE) // CONTROL_BLOCK_NODE_SIZE
        labels[-1] = "Control Block (merkle depth {})".format(depth)
        labels[-2] = "Tapscript ({} bytes)".format(len(stack[-2]))

    if witness.has_annex():
        labels.append("Annex ({} bytes)".format(len(witness.annex())))
    return tuple(labels)
