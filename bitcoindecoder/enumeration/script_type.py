# hint: this class is not Enum
class ScriptType:
    P2PKH = "p2pkh"
    P2SH = "p2sh"
    P2WPKH = "p2wpkh"
    P2WSH = "p2wsh"
    # taproot output seen without a witness, the spend path is unknown
    P2TR = "p2tr"
    P2TR_KEYPATH = "p2tr_keypath"
    P2TR_SCRIPTPATH = "p2tr_scriptpath"
    P2A = "p2a"
    MULTISIG = "multisig"
    NULLDATA = "nulldata"
    NONSTANDARD = "nonstandard"

    ALL = [
        P2PKH,
        P2SH,
        P2WPKH,
        P2WSH,
        P2TR,
        P2TR_KEYPATH,
        P2TR_SCRIPTPATH,
        P2A,
        MULTISIG,
        NULLDATA,
        NONSTANDARD,
    ]

    TAPROOT = [P2TR, P2TR_KEYPATH, P2TR_SCRIPTPATH]

    DESCRIPTIONS = {
        P2PKH: "Pay-to-Public-Key-Hash (legacy)",
        P2SH: "Pay-to-Script-Hash (legacy)",
        P2WPKH: "Pay-to-Witness-Public-Key-Hash",
        P2WSH: "Pay-to-Witness-Script-Hash",
        P2TR: "Pay-to-Taproot",
        P2TR_KEYPATH: "Pay-to-Taproot (key path spend)",
        P2TR_SCRIPTPATH: "Pay-to-Taproot (script path spend)",
        P2A: "Pay-to-Anchor (ephemeral anchor for CPFP fee bumping)",
        MULTISIG: "Bare multisig",
        NULLDATA: "Null data (OP_RETURN)",
        NONSTANDARD: "Non-standard / unknown",
    }

    @staticmethod
    def describe(script_type: str) -> str:
        return ScriptType.DESCRIPTIONS.get(script_type, script_type)


class SignatureScheme:
    ECDSA = "ecdsa"
    SCHNORR = "schnorr"

    @staticmethod
    def of(script_type: str):
        if script_type in ScriptType.TAPROOT:
            return SignatureScheme.SCHNORR
        if script_type in (
            ScriptType.P2PKH,
            ScriptType.P2SH,
            ScriptType.P2WPKH,
            ScriptType.P2WSH,
            ScriptType.MULTISIG,
        ):
            return SignatureScheme.ECDSA
        # anchors, null data and unknown scripts carry no ownership proof
        return None
