import hashlib
import random

import pytest

from bitcoindecoder.domain.witness import BtcWitness
from bitcoindecoder.enumeration.script_type import ScriptType, SignatureScheme
from bitcoindecoder.service.btc_script_service import (
    parse_script,
    disassemble,
    classify_script,
    classify_spend,
    taproot_spend_path,
)
from tests.tx_fixtures import (
    DER_SIGNATURE_HEX,
    COMPRESSED_PUBKEY_HEX,
    SCHNORR_SIGNATURE_HEX,
    P2TR_SCRIPT_HEX,
)

HASH20 = "ab" * 20
HASH32 = "cd" * 32

P2PKH_SCRIPT = bytes.fromhex("76a914" + HASH20 + "88ac")
P2SH_SCRIPT = bytes.fromhex("a914" + HASH20 + "87")
P2WPKH_SCRIPT = bytes.fromhex("0014" + HASH20)
P2WSH_SCRIPT = bytes.fromhex("0020" + HASH32)
P2TR_SCRIPT = bytes.fromhex(P2TR_SCRIPT_HEX)
P2A_SCRIPT = bytes.fromhex("51024e73")
MULTISIG_2_OF_3 = bytes.fromhex(
    "52" + ("21" + COMPRESSED_PUBKEY_HEX) * 3 + "53" + "ae"
)

DER_SIGNATURE = bytes.fromhex(DER_SIGNATURE_HEX)
COMPRESSED_PUBKEY = bytes.fromhex(COMPRESSED_PUBKEY_HEX)
SCHNORR_SIGNATURE = bytes.fromhex(SCHNORR_SIGNATURE_HEX)
TAPSCRIPT = bytes.fromhex("20" + "ee" * 32 + "ac")
CONTROL_BLOCK = bytes.fromhex("c0" + "ee" * 32)
ANNEX = bytes.fromhex("50" + "01")


class TestParseScript:
    def test_direct_and_pushdata(self):
        ops, complete = parse_script(bytes.fromhex("00" + "02aabb" + "4c01cc" + "ac"))
        assert complete
        assert [op.opcode for op in ops] == [0x00, 0x02, 0x4C, 0xAC]
        assert [op.data for op in ops] == [b"", b"\xaa\xbb", b"\xcc", None]

    def test_pushdata2_and_pushdata4(self):
        ops, complete = parse_script(bytes.fromhex("4d0200aabb" + "4e01000000cc"))
        assert complete
        assert [op.data for op in ops] == [b"\xaa\xbb", b"\xcc"]

    @pytest.mark.parametrize("script", ["02aa", "4c", "4c05aa", "4d01", "4e0100"])
    def test_push_past_end(self, script):
        _, complete = parse_script(bytes.fromhex(script))
        assert not complete


class TestDisassemble:
    def test_p2pkh(self):
        assert disassemble(P2PKH_SCRIPT) == (
            "OP_DUP OP_HASH160 OP_PUSHBYTES_20 {} OP_EQUALVERIFY OP_CHECKSIG".format(
                HASH20
            )
        )

    def test_witness_program(self):
        assert disassemble(P2WPKH_SCRIPT) == "OP_0 OP_PUSHBYTES_20 " + HASH20

    def test_pushdata1(self):
        assert disassemble(bytes.fromhex("6a4c02aabb")) == "OP_RETURN OP_PUSHDATA1 aabb"

    def test_truncated_push(self):
        assert disassemble(bytes.fromhex("6a05aa")) == "OP_RETURN [error]"

    def test_empty(self):
        assert disassemble(b"") == ""


class TestClassifyScript:
    @pytest.mark.parametrize(
        "script,script_type,witness_version,program",
        [
            (P2PKH_SCRIPT, ScriptType.P2PKH, None, HASH20),
            (P2SH_SCRIPT, ScriptType.P2SH, None, HASH20),
            (P2WPKH_SCRIPT, ScriptType.P2WPKH, 0, HASH20),
            (P2WSH_SCRIPT, ScriptType.P2WSH, 0, HASH32),
            (P2TR_SCRIPT, ScriptType.P2TR, 1, "ee" * 32),
            (P2A_SCRIPT, ScriptType.P2A, 1, "4e73"),
        ],
    )
    def test_known_shapes(self, script, script_type, witness_version, program):
        classification = classify_script(script)
        assert classification.script_type == script_type
        assert classification.witness_version == witness_version
        assert classification.program.hex() == program

    def test_signature_schemes(self):
        assert classify_script(P2WPKH_SCRIPT).signature_scheme == SignatureScheme.ECDSA
        assert classify_script(P2TR_SCRIPT).signature_scheme == SignatureScheme.SCHNORR
        assert classify_script(P2A_SCRIPT).signature_scheme is None

    def test_taproot_key_path_with_one_witness_item(self):
        witness = BtcWitness(stack=(SCHNORR_SIGNATURE,))
        classification = classify_script(P2TR_SCRIPT, witness)
        assert classification.script_type == ScriptType.P2TR_KEYPATH

    def test_taproot_script_path(self):
        witness = BtcWitness(stack=(SCHNORR_SIGNATURE, TAPSCRIPT, CONTROL_BLOCK))
        classification = classify_script(P2TR_SCRIPT, witness)
        assert classification.script_type == ScriptType.P2TR_SCRIPTPATH

    @pytest.mark.parametrize(
        "stack",
        [
            (TAPSCRIPT, CONTROL_BLOCK),
            (SCHNORR_SIGNATURE, TAPSCRIPT, CONTROL_BLOCK),
            (TAPSCRIPT, CONTROL_BLOCK, ANNEX),
        ],
    )
    def test_taproot_two_or_more_items_is_script_path(self, stack):
        witness = BtcWitness(stack=stack)
        assert (
            classify_script(P2TR_SCRIPT, witness).script_type
            == ScriptType.P2TR_SCRIPTPATH
        )
        assert classify_spend(b"", witness).script_type == ScriptType.P2TR_SCRIPTPATH

    def test_taproot_annex_is_not_counted(self):
        witness = BtcWitness(stack=(SCHNORR_SIGNATURE, ANNEX))
        assert taproot_spend_path(witness) == ScriptType.P2TR_KEYPATH

    def test_taproot_without_witness(self):
        assert taproot_spend_path(None) == ScriptType.P2TR
        assert taproot_spend_path(BtcWitness()) == ScriptType.P2TR

    def test_multisig(self):
        classification = classify_script(MULTISIG_2_OF_3)
        assert classification.script_type == ScriptType.MULTISIG
        assert classification.req_sigs == 2
        assert classification.total_keys == 3
        assert classification.describe().endswith("(2-of-3)")

    @pytest.mark.parametrize(
        "script",
        [
            # m greater than n
            "53" + ("21" + COMPRESSED_PUBKEY_HEX) * 2 + "52" + "ae",
            # n doesn't match the number of keys
            "51" + ("21" + COMPRESSED_PUBKEY_HEX) * 2 + "53" + "ae",
            # key of the wrong size
            "51" + "14" + HASH20 + "51" + "ae",
        ],
    )
    def test_malformed_multisig(self, script):
        classification = classify_script(bytes.fromhex(script))
        assert classification.script_type == ScriptType.NONSTANDARD

    @pytest.mark.parametrize(
        "script,payload",
        [
            ("6a0b68656c6c6f20776f726c64", b"hello world"),
            ("6a", b""),
            ("6a4c", b"\x4c"),
        ],
    )
    def test_nulldata(self, script, payload):
        classification = classify_script(bytes.fromhex(script))
        assert classification.script_type == ScriptType.NULLDATA
        assert classification.program == payload

    def test_unknown_witness_version(self):
        classification = classify_script(bytes.fromhex("5210" + "aa" * 16))
        assert classification.script_type == ScriptType.NONSTANDARD
        assert classification.witness_version == 2
        assert classification.program == b"\xaa" * 16

    @pytest.mark.parametrize("script", ["", "ac", "0015" + "ab" * 21, "76a914"])
    def test_nonstandard(self, script):
        classification = classify_script(bytes.fromhex(script))
        assert classification.script_type == ScriptType.NONSTANDARD
        assert not classification.is_standard()

    def test_total_over_random_scripts(self):
        rng = random.Random(20240101)
        for _ in range(10000):
            script = bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 64)))
            classification = classify_script(script)
            assert classification.script_type in ScriptType.ALL
            assert classify_spend(script).script_type in ScriptType.ALL
            disassemble(script)


class TestClassifySpend:
    def test_legacy_p2pkh(self):
        script_sig = bytes.fromhex(
            "47" + DER_SIGNATURE_HEX + "21" + COMPRESSED_PUBKEY_HEX
        )
        assert classify_spend(script_sig).script_type == ScriptType.P2PKH

    def test_native_p2wpkh(self):
        witness = BtcWitness(stack=(DER_SIGNATURE, COMPRESSED_PUBKEY))
        classification = classify_spend(b"", witness)
        assert classification.script_type == ScriptType.P2WPKH
        assert classification.witness_version == 0

    def test_native_p2wsh(self):
        witness_script = bytes.fromhex(
            "52" + ("21" + COMPRESSED_PUBKEY_HEX) * 2 + "52" + "ae"
        )
        witness = BtcWitness(stack=(b"", DER_SIGNATURE, DER_SIGNATURE, witness_script))
        classification = classify_spend(b"", witness)
        assert classification.script_type == ScriptType.P2WSH
        assert classification.program == hashlib.sha256(witness_script).digest()

    def test_taproot_key_path(self):
        witness = BtcWitness(stack=(SCHNORR_SIGNATURE,))
        classification = classify_spend(b"", witness)
        assert classification.script_type == ScriptType.P2TR_KEYPATH
        assert classification.signature_scheme == SignatureScheme.SCHNORR

    def test_taproot_script_path(self):
        witness = BtcWitness(stack=(SCHNORR_SIGNATURE, TAPSCRIPT, CONTROL_BLOCK))
        classification = classify_spend(b"", witness)
        assert classification.script_type == ScriptType.P2TR_SCRIPTPATH

    def test_taproot_with_annex(self):
        witness = BtcWitness(stack=(SCHNORR_SIGNATURE, ANNEX))
        classification = classify_spend(b"", witness)
        assert classification.script_type == ScriptType.P2TR_KEYPATH

    def test_nested_p2wpkh(self):
        script_sig = bytes.fromhex("16" + "0014" + HASH20)
        witness = BtcWitness(stack=(DER_SIGNATURE, COMPRESSED_PUBKEY))
        classification = classify_spend(script_sig, witness)
        assert classification.script_type == ScriptType.P2SH
        assert classification.inner_type == ScriptType.P2WPKH
        assert classification.witness_version == 0
        assert "wrapping" in classification.describe()

    def test_p2sh_multisig(self):
        redeem_script = "51" + "21" + COMPRESSED_PUBKEY_HEX + "51" + "ae"
        script_sig = bytes.fromhex(
            "00" + "47" + DER_SIGNATURE_HEX + "25" + redeem_script
        )
        classification = classify_spend(script_sig)
        assert classification.script_type == ScriptType.P2SH
        assert classification.inner_type == ScriptType.MULTISIG
        assert classification.req_sigs == 1
        assert classification.total_keys == 1

    @pytest.mark.parametrize(
        "script_sig", ["", "ffff", "02aa", "47" + DER_SIGNATURE_HEX]
    )
    def test_unrecognized(self, script_sig):
        classification = classify_spend(bytes.fromhex(script_sig))
        assert classification.script_type == ScriptType.NONSTANDARD
