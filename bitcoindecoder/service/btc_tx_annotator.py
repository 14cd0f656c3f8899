import logging
from typing import List, Tuple

from bitcoindecoder.domain.script_classification import BtcScriptClassification
from bitcoindecoder.domain.transaction import BtcTransaction
from bitcoindecoder.domain.transaction_annotation import (
    BtcInputAnnotation,
    BtcOutputAnnotation,
    BtcTransactionAnnotation,
)
from bitcoindecoder.domain.transaction_input import BtcTransactionInput
from bitcoindecoder.enumeration.script_type import ScriptType
from bitcoindecoder.enumeration.tx_anomaly import TxAnomaly
from bitcoindecoder.service.btc_script_service import classify_script, classify_spend
from bitcoindecoder.service.btc_timelock_service import (
    interpret_sequence,
    interpret_locktime,
    signals_rbf,
)
from bitcoindecoder.service.btc_tx_decoder import (
    decode_transaction,
    decode_transaction_hex,
)
from bitcoindecoder.service.btc_tx_serializer import (
    calculate_txid,
    calculate_wtxid,
    calculate_size,
    calculate_vsize,
    calculate_weight,
)
from bitcoindecoder.service.btc_witness_decoder import describe_witness

logger = logging.getLogger(__name__)


def annotate_transaction(tx: BtcTransaction) -> BtcTransactionAnnotation:
    """Derive classifications, timelocks and ids without touching `tx`."""
    sequences = [input.sequence for input in tx.inputs]

    inputs = tuple(
        _annotate_input(index, input) for index, input in enumerate(tx.inputs)
    )
    outputs = tuple(
        BtcOutputAnnotation(
            index=index,
            classification=classify_script(output.script_pubkey),
            is_sentinel_value=output.is_sentinel_value(),
        )
        for index, output in enumerate(tx.outputs)
    )

    anomalies = _find_anomalies(tx, outputs)
    if len(anomalies) > 0:
        logger.debug(f"unusual transaction structure: {', '.join(anomalies)}")

    return BtcTransactionAnnotation(
        txid=calculate_txid(tx),
        wtxid=calculate_wtxid(tx),
        size=calculate_size(tx),
        vsize=calculate_vsize(tx),
        weight=calculate_weight(tx),
        inputs=inputs,
        outputs=outputs,
        absolute_lock=interpret_locktime(tx.locktime, sequences),
        signals_rbf=signals_rbf(sequences),
        total_output_value=tx.calculate_output_value(),
        anomalies=tuple(anomalies),
    )


def inspect_transaction(raw: bytes) -> Tuple[BtcTransaction, BtcTransactionAnnotation]:
    tx = decode_transaction(raw)
    return tx, annotate_transaction(tx)


def inspect_transaction_hex(
    hex_string: str,
) -> Tuple[BtcTransaction, BtcTransactionAnnotation]:
    tx = decode_transaction_hex(hex_string)
    return tx, annotate_transaction(tx)


def _annotate_input(index: int, input: BtcTransactionInput) -> BtcInputAnnotation:
    is_coinbase = input.is_coinbase()
    if is_coinbase:
        # the coinbase scriptSig is arbitrary data, not an unlocking script
        classification = BtcScriptClassification(script_type=ScriptType.NONSTANDARD)
    else:
        classification = classify_spend(input.script_sig, input.witness)

    witness_items = ()
    if input.witness is not None:
        witness_items = describe_witness(input.witness)

    return BtcInputAnnotation(
        index=index,
        classification=classification,
        relative_lock=interpret_sequence(input.sequence),
        is_coinbase=is_coinbase,
        witness_items=witness_items,
    )


def _find_anomalies(
    tx: BtcTransaction, outputs: Tuple[BtcOutputAnnotation, ...]
) -> List[str]:
    anomalies = []
    if len(tx.inputs) == 0:
        anomalies.append(TxAnomaly.NO_INPUTS)
    if len(tx.outputs) == 0:
        anomalies.append(TxAnomaly.NO_OUTPUTS)
    if any(output.is_sentinel_value for output in outputs):
        anomalies.append(TxAnomaly.SENTINEL_VALUE)
    if tx.has_witness and all(not input.has_witness_items() for input in tx.inputs):
        anomalies.append(TxAnomaly.EMPTY_WITNESS_SECTION)
    anchors = [o for o in outputs if o.classification.script_type == ScriptType.P2A]
    if len(anchors) > 1:
        anomalies.append(TxAnomaly.MULTIPLE_ANCHORS)
    return anomalies
