from typing import Optional

import click

from bitcoindecoder.domain.transaction import BtcTransaction
from bitcoindecoder.domain.transaction_annotation import BtcTransactionAnnotation
from bitcoindecoder.misc.decode_error import DecodeError
from bitcoindecoder.service.btc_tx_annotator import inspect_transaction_hex
from bitcoindecoder.mappers.transaction_mapper import BtcTransactionMapper


def read_tx_hex(tx: Optional[str], file: Optional[str]) -> str:
    if (tx is None) == (file is None):
        raise click.UsageError("exactly one of --tx or --file is required")
    if tx is not None:
        return tx
    with open(file, "rb") as fp:
        raw = fp.read()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise click.ClickException("InvalidHex: {} is not a text file".format(file))


def decode_line(line: str) -> dict:
    """Decode one hex line into its dict form; errors are returned, not raised."""
    try:
        tx, annotation = inspect_transaction_hex(line)
    except DecodeError as e:
        return {"error": e.to_dict()}
    return transaction_to_dict(tx, annotation)


def transaction_to_dict(
    tx: BtcTransaction, annotation: BtcTransactionAnnotation
) -> dict:
    return BtcTransactionMapper().transaction_to_dict(tx, annotation)
