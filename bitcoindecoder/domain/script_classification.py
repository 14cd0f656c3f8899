from typing import NamedTuple, Optional

from bitcoindecoder.enumeration.script_type import ScriptType


class BtcScriptClassification(NamedTuple):
    script_type: str = ScriptType.NONSTANDARD
    # ecdsa / schnorr, None when the script carries no ownership proof
    signature_scheme: Optional[str] = None
    witness_version: Optional[int] = None
    # key hash, script hash, taproot output key, anchor or null-data payload
    program: Optional[bytes] = None
    req_sigs: Optional[int] = None
    total_keys: Optional[int] = None
    # what a P2SH scriptSig wraps, e.g. p2wpkh for nested segwit
    inner_type: Optional[str] = None

    def is_standard(self) -> bool:
        return self.script_type != ScriptType.NONSTANDARD

    def describe(self) -> str:
        text = ScriptType.describe(self.script_type)
        if self.script_type == ScriptType.MULTISIG:
            text = "{} ({}-of-{})".format(text, self.req_sigs, self.total_keys)
        if self.inner_type is not None:
            text = "{} wrapping {}".format(text, ScriptType.describe(self.inner_type))
        return text
