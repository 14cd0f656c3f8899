from typing import NamedTuple, Tuple

from bitcoindecoder.domain.script_classification import BtcScriptClassification
from bitcoindecoder.domain.timelock import BtcRelativeLock, BtcAbsoluteLock


class BtcInputAnnotation(NamedTuple):
    index: int
    classification: BtcScriptClassification
    relative_lock: BtcRelativeLock
    is_coinbase: bool = False
    witness_items: Tuple[str, ...] = ()


class BtcOutputAnnotation(NamedTuple):
    index: int
    classification: BtcScriptClassification
    is_sentinel_value: bool = False


# derived, read-only view over a decoded BtcTransaction, keyed by index
class BtcTransactionAnnotation(NamedTuple):
    txid: str
    wtxid: str
    size: int
    vsize: int
    weight: int
    inputs: Tuple[BtcInputAnnotation, ...]
    outputs: Tuple[BtcOutputAnnotation, ...]
    absolute_lock: BtcAbsoluteLock
    signals_rbf: bool
    total_output_value: int
    anomalies: Tuple[str, ...] = ()
