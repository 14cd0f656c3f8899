import pytest

from bitcoindecoder.domain.witness import BtcWitness
from bitcoindecoder.misc.decode_error import DecodeError, TrailingBytes
from bitcoindecoder.service.btc_witness_decoder import (
    decode_witness_bytes,
    describe_witness,
    describe_witness_item,
    is_control_block,
)
from tests.tx_fixtures import (
    DER_SIGNATURE_HEX,
    COMPRESSED_PUBKEY_HEX,
    SCHNORR_SIGNATURE_HEX,
)


def test_decode_witness():
    witness = decode_witness_bytes(bytes.fromhex("03" + "01aa" + "00" + "02bbcc"))
    assert witness.stack == (b"\xaa", b"", b"\xbb\xcc")


def test_decode_empty_witness():
    assert decode_witness_bytes(b"\x00") == BtcWitness()


def test_decode_witness_trailing_bytes():
    with pytest.raises(TrailingBytes):
        decode_witness_bytes(bytes.fromhex("0101aa00"))


@pytest.mark.parametrize("data", ["", "01", "0102aa", "05"])
def test_decode_truncated_witness(data):
    with pytest.raises(DecodeError):
        decode_witness_bytes(bytes.fromhex(data))


@pytest.mark.parametrize(
    "item,label",
    [
        ("", "Empty"),
        (DER_SIGNATURE_HEX, "Signature (DER)"),
        (COMPRESSED_PUBKEY_HEX, "Public Key (compressed)"),
        ("04" + "11" * 64, "Public Key (uncompressed)"),
        (SCHNORR_SIGNATURE_HEX, "Signature (Schnorr)"),
        (SCHNORR_SIGNATURE_HEX + "01", "Signature (Schnorr)"),
        ("ab" * 10, "Data (10 bytes)"),
        ("ab" * 120, "Script or Data (120 bytes)"),
    ],
)
def test_describe_witness_item(item, label):
    assert describe_witness_item(bytes.fromhex(item)) == label


@pytest.mark.parametrize(
    "item,expected",
    [
        ("c0" + "ee" * 32, True),
        ("c1" + "ee" * 64, True),
        ("c2" + "ee" * 32, False),
        ("c0" + "ee" * 33, False),
        ("c0" + "ee" * 31, False),
    ],
)
def test_is_control_block(item, expected):
    assert is_control_block(bytes.fromhex(item)) is expected


class TestDescribeWitness:
    def test_p2wpkh(self):
        witness = BtcWitness(
            stack=(
                bytes.fromhex(DER_SIGNATURE_HEX),
                bytes.fromhex(COMPRESSED_PUBKEY_HEX),
            )
        )
        assert describe_witness(witness) == (
            "Signature (DER)",
            "Public Key (compressed)",
        )

    def test_script_path(self):
        witness = BtcWitness(
            stack=(
                bytes.fromhex(SCHNORR_SIGNATURE_HEX),
                bytes.fromhex("20" + "ee" * 32 + "ac"),
                bytes.fromhex("c1" + "ee" * 32 + "ff" * 32),
                bytes.fromhex("50" + "aa" * 3),
            )
        )
        assert describe_witness(witness) == (
            "Signature (Schnorr)",
            "Tapscript (34 bytes)",
            "Control Block (merkle depth 1)",
            "Annex (4 bytes)",
        )

    def test_one_label_per_item(self):
        witness = BtcWitness(stack=(b"", b"\x01", b"\x02" * 200))
        assert len(describe_witness(witness)) == len(witness.stack)
