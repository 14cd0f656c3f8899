import hashlib
import struct
from typing import List, NamedTuple, Optional, Tuple

from bitcoindecoder.domain.script_classification import BtcScriptClassification
from bitcoindecoder.domain.witness import BtcWitness
from bitcoindecoder.enumeration.opcode import Opcode, opcode_name
from bitcoindecoder.enumeration.script_type import ScriptType, SignatureScheme
from bitcoindecoder.service.btc_witness_decoder import (
    is_control_block,
    is_der_signature,
    is_public_key,
    is_schnorr_signature,
)

# OP_1 <0x4e73>: witness v1 with the fixed 2-byte anchor program
ANCHOR_PROGRAM = b"\x4e\x73"

# BIP141 witness programs are 2 to 40 bytes
MIN_WITNESS_PROGRAM_SIZE = 2
MAX_WITNESS_PROGRAM_SIZE = 40

_PUSHDATA_WIDTHS = {
    Opcode.OP_PUSHDATA1: (1, "<B"),
    Opcode.OP_PUSHDATA2: (2, "<H"),
    Opcode.OP_PUSHDATA4: (4, "<I"),
}


class ScriptOp(NamedTuple):
    opcode: int
    # pushed bytes, None for non-push opcodes
    data: Optional[bytes] = None


def parse_script(script: bytes) -> Tuple[List[ScriptOp], bool]:
    """Split a script into opcodes and pushes.

    Never raises: returns the ops read so far and False when a push runs
    past the end of the script.
    """
    ops = []
    i = 0
    n = len(script)
    while i < n:
        opcode = script[i]
        i += 1

        if opcode > Opcode.OP_PUSHDATA4:
            ops.append(ScriptOp(opcode))
            continue

        if opcode <= Opcode.MAX_DIRECT_PUSH:
            size = opcode
        else:
            width, fmt = _PUSHDATA_WIDTHS[opcode]
            if i + width > n:
                return ops, False
            size = struct.unpack(fmt, script[i : i + width])[0]
            i += width

        if i + size > n:
            return ops, False
        ops.append(ScriptOp(opcode, script[i : i + size]))
        i += size

    return ops, True


def disassemble(script: bytes) -> str:
    ops, complete = parse_script(script or b"")
    tokens = []
    for op in ops:
        if op.opcode == Opcode.OP_0 or op.data is None:
            tokens.append(opcode_name(op.opcode))
        elif op.opcode <= Opcode.MAX_DIRECT_PUSH:
            tokens.append("OP_PUSHBYTES_{} {}".format(op.opcode, op.data.hex()))
        else:
            tokens.append("{} {}".format(opcode_name(op.opcode), op.data.hex()))
    if not complete:
        tokens.append("[error]")
    return " ".join(tokens)


def classify_script(
    script_pubkey: bytes, witness: Optional[BtcWitness] = None
) -> BtcScriptClassification:
    """Classify a locking script, most constrained shapes first.

    Total: every byte string maps to exactly one classification, with
    nonstandard as the fallback. `witness` only matters for taproot, where
    it tells the key path from the script path.
    """
    script = bytes(script_pubkey or b"")
    for matcher in _SCRIPT_PUBKEY_MATCHERS:
        classification = matcher(script, witness)
        if classification is not None:
            return classification
    return _nonstandard(script)


def classify_spend(
    script_sig: bytes, witness: Optional[BtcWitness] = None
) -> BtcScriptClassification:
    """Infer the spend type of an input from its scriptSig and witness.

    The previous output isn't available here, so this reads the shape of
    the unlocking data instead. Total, like classify_script.
    """
    script_sig = bytes(script_sig or b"")

    if witness is not None and not witness.is_empty():
        if len(script_sig) == 0:
            return _classify_native_witness_spend(witness)
        nested = _nested_witness_program(script_sig)
        if nested is not None:
            return _classification(
                ScriptType.P2SH,
                witness_version=nested.witness_version,
                program=nested.program,
                inner_type=nested.script_type,
            )

    return _classify_legacy_spend(script_sig)


def taproot_spend_path(witness: Optional[BtcWitness]) -> str:
    # BIP341: drop the annex, then a single element is a key path signature
    if witness is None:
        return ScriptType.P2TR
    stack = witness.stack_without_annex()
    if len(stack) == 1:
        return ScriptType.P2TR_KEYPATH
    if len(stack) >= 2:
        return ScriptType.P2TR_SCRIPTPATH
    return ScriptType.P2TR


def _classification(script_type: str, **kwargs) -> BtcScriptClassification:
    return BtcScriptClassification(
        script_type=script_type,
        signature_scheme=SignatureScheme.of(script_type),
        **kwargs,
    )


def _match_p2wpkh(script: bytes, witness: Optional[BtcWitness]):
    # OP_0 <20 bytes>
    if len(script) == 22 and script[0] == Opcode.OP_0 and script[1] == 0x14:
        return _classification(
            ScriptType.P2WPKH, witness_version=0, program=script[2:]
        )
    return None


def _match_p2wsh(script: bytes, witness: Optional[BtcWitness]):
    # OP_0 <32 bytes>
    if len(script) == 34 and script[0] == Opcode.OP_0 and script[1] == 0x20:
        return _classification(
            ScriptType.P2WSH, witness_version=0, program=script[2:]
        )
    return None


def _match_p2tr(script: bytes, witness: Optional[BtcWitness]):
    # OP_1 <32 bytes>
    if len(script) == 34 and script[0] == Opcode.OP_1 and script[1] == 0x20:
        return _classification(
            taproot_spend_path(witness), witness_version=1, program=script[2:]
        )
    return None


def _match_p2pkh(script: bytes, witness: Optional[BtcWitness]):
    # OP_DUP OP_HASH160 <20 bytes> OP_EQUALVERIFY OP_CHECKSIG
    if (
        len(script) == 25
        and script[0] == Opcode.OP_DUP
        and script[1] == Opcode.OP_HASH160
        and script[2] == 0x14
        and script[23] == Opcode.OP_EQUALVERIFY
        and script[24] == Opcode.OP_CHECKSIG
    ):
        return _classification(ScriptType.P2PKH, program=script[3:23])
    return None


def _match_p2sh(script: bytes, witness: Optional[BtcWitness]):
    # OP_HASH160 <20 bytes> OP_EQUAL
    if (
        len(script) == 23
        and script[0] == Opcode.OP_HASH160
        and script[1] == 0x14
        and script[22] == Opcode.OP_EQUAL
    ):
        return _classification(ScriptType.P2SH, program=script[2:22])
    return None


def _match_p2a(script: bytes, witness: Optional[BtcWitness]):
    # OP_1 <0x4e73>, whatever the output value
    if (
        len(script) == 4
        and script[0] == Opcode.OP_1
        and script[1] == len(ANCHOR_PROGRAM)
        and script[2:] == ANCHOR_PROGRAM
    ):
        return _classification(
            ScriptType.P2A, witness_version=1, program=ANCHOR_PROGRAM
        )
    return None


def _match_multisig(script: bytes, witness: Optional[BtcWitness]):
    # OP_m <pubkey>... OP_n OP_CHECKMULTISIG
    if len(script) < 4 or script[-1] != Opcode.OP_CHECKMULTISIG:
        return None
    ops, complete = parse_script(script)
    if not complete or len(ops) < 4:
        return None

    m_op, n_op = ops[0].opcode, ops[-2].opcode
    if not (Opcode.OP_1 <= m_op <= Opcode.OP_16):
        return None
    if not (Opcode.OP_1 <= n_op <= Opcode.OP_16):
        return None

    keys = ops[1:-2]
    if any(op.data is None or len(op.data) not in (33, 65) for op in keys):
        return None

    m = Opcode.small_int_value(m_op)
    n = Opcode.small_int_value(n_op)
    if not (1 <= m <= n == len(keys)):
        return None
    return _classification(ScriptType.MULTISIG, req_sigs=m, total_keys=n)


def _match_nulldata(script: bytes, witness: Optional[BtcWitness]):
    if len(script) > 0 and script[0] == Opcode.OP_RETURN:
        return _classification(
            ScriptType.NULLDATA, program=_nulldata_payload(script[1:])
        )
    return None


_SCRIPT_PUBKEY_MATCHERS = (
    _match_p2wpkh,
    _match_p2wsh,
    _match_p2tr,
    _match_p2pkh,
    _match_p2sh,
    _match_p2a,
    _match_multisig,
    _match_nulldata,
)


def _nulldata_payload(tail: bytes) -> bytes:
    ops, complete = parse_script(tail)
    if not complete or any(op.data is None for op in ops):
        return tail
    return b"".join(op.data for op in ops)


def _nonstandard(script: bytes) -> BtcScriptClassification:
    # keep the version and program of witness versions we don't know yet
    size = len(script)
    if (
        4 <= size <= MAX_WITNESS_PROGRAM_SIZE + 2
        and Opcode.is_small_int(script[0])
        and script[1] == size - 2
        and MIN_WITNESS_PROGRAM_SIZE <= script[1] <= MAX_WITNESS_PROGRAM_SIZE
    ):
        return BtcScriptClassification(
            script_type=ScriptType.NONSTANDARD,
            witness_version=Opcode.small_int_value(script[0]),
            program=script[2:],
        )
    return BtcScriptClassification(script_type=ScriptType.NONSTANDARD)


def _classify_native_witness_spend(witness: BtcWitness) -> BtcScriptClassification:
    stack = witness.stack_without_annex()

    # only taproot spends carry an annex
    if witness.has_annex():
        return _classification(taproot_spend_path(witness), witness_version=1)

    if (
        len(stack) == 2
        and is_der_signature(stack[0])
        and len(stack[1]) == 33
        and is_public_key(stack[1])
    ):
        return _classification(ScriptType.P2WPKH, witness_version=0)

    if len(stack) == 1 and is_schnorr_signature(stack[0]):
        return _classification(ScriptType.P2TR_KEYPATH, witness_version=1)

    if len(stack) >= 2 and is_control_block(stack[-1]):
        return _classification(ScriptType.P2TR_SCRIPTPATH, witness_version=1)

    # the last item is the witness script, the program is its sha256
    return _classification(
        ScriptType.P2WSH,
        witness_version=0,
        program=hashlib.sha256(stack[-1]).digest(),
    )


def _nested_witness_program(script_sig: bytes) -> Optional[BtcScriptClassification]:
    # P2SH-P2WPKH / P2SH-P2WSH: the scriptSig is one push of a v0 program
    ops, complete = parse_script(script_sig)
    if not complete or len(ops) != 1 or ops[0].data is None:
        return None
    inner = classify_script(ops[0].data)
    if inner.script_type in (ScriptType.P2WPKH, ScriptType.P2WSH):
        return inner
    return None


def _classify_legacy_spend(script_sig: bytes) -> BtcScriptClassification:
    ops, complete = parse_script(script_sig)
    if not complete or len(ops) == 0 or any(op.data is None for op in ops):
        return _nonstandard(b"")

    pushes = [op.data for op in ops]

    # <sig> <pubkey>
    if len(pushes) == 2 and is_der_signature(pushes[0]) and is_public_key(pushes[1]):
        return _classification(ScriptType.P2PKH)

    # <args>... <redeem script>
    redeem_script = pushes[-1]
    if is_der_signature(redeem_script) or is_public_key(redeem_script):
        return _nonstandard(b"")
    redeem_ops, redeem_complete = parse_script(redeem_script)
    if redeem_complete and any(op.data is None for op in redeem_ops):
        inner = classify_script(redeem_script)
        return _classification(
            ScriptType.P2SH,
            req_sigs=inner.req_sigs,
            total_keys=inner.total_keys,
            inner_type=inner.script_type,
        )

    return _nonstandard(b"")
