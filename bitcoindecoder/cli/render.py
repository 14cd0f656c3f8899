import click

from bitcoindecoder.domain.timelock import BtcRelativeLock, BtcAbsoluteLock
from bitcoindecoder.domain.transaction import BtcTransaction
from bitcoindecoder.domain.transaction_annotation import BtcTransactionAnnotation
from bitcoindecoder.enumeration.lock_type import RelativeLockType, AbsoluteLockType
from bitcoindecoder.enumeration.script_type import ScriptType
from bitcoindecoder.enumeration.tx_anomaly import TxAnomaly
from bitcoindecoder.service.btc_script_service import disassemble
from bitcoindecoder.utils import satoshi_to_bitcoin

RULE_WIDTH = 70
LABEL_WIDTH = 22


def format_value(satoshi: int) -> str:
    return "{:.8f} BTC ({} satoshis)".format(satoshi_to_bitcoin(satoshi), satoshi)


def format_relative_lock(lock: BtcRelativeLock) -> str:
    if lock.lock_type == RelativeLockType.BLOCKS:
        return "{} blocks".format(lock.value)
    if lock.lock_type == RelativeLockType.TIME:
        return "{} x 512 seconds ({} seconds)".format(lock.value, lock.seconds())
    return "disabled"


def format_absolute_lock(lock: BtcAbsoluteLock) -> str:
    if lock.lock_type == AbsoluteLockType.DISABLED:
        return "disabled"
    if lock.lock_type == AbsoluteLockType.BLOCK_HEIGHT:
        text = "block height {}".format(lock.value)
    else:
        text = "unix time {}".format(lock.value)
    if not lock.enforced:
        text += " (not enforced, every input is final)"
    return text


def _section(title: str, color: str):
    click.echo()
    click.echo(click.style(title, fg=color, bold=True))
    click.echo(click.style("-" * RULE_WIDTH, fg=color))


def _row(label: str, value, fg=None, indent: int = 0):
    label = click.style((" " * indent + label).ljust(LABEL_WIDTH), bold=True)
    click.echo("{} {}".format(label, click.style(str(value), fg=fg)))


def render_transaction(tx: BtcTransaction, annotation: BtcTransactionAnnotation):
    _section("TRANSACTION OVERVIEW", "green")
    _row("Transaction ID (txid)", annotation.txid, fg="cyan")
    if tx.has_witness:
        _row("Witness ID (wtxid)", annotation.wtxid, fg="cyan")
    _row("Version", tx.version)
    _row("Lock Time", format_absolute_lock(annotation.absolute_lock))
    _row("Size", "{} bytes".format(annotation.size))
    _row("Virtual Size", "{} vBytes".format(annotation.vsize))
    _row("Weight", "{} WU".format(annotation.weight))
    _row("Replaceable (RBF)", "yes" if annotation.signals_rbf else "no")

    _section("INPUTS ({})".format(len(tx.inputs)), "blue")
    for input, input_annotation in zip(tx.inputs, annotation.inputs):
        click.echo(click.style("Input #{}".format(input_annotation.index), fg="blue"))
        if input_annotation.is_coinbase:
            _row("Type", "Coinbase", fg="cyan", indent=2)
        else:
            description = input_annotation.classification.describe()
            _row("Type", description, fg="cyan", indent=2)
            _row("Previous TX", input.previous_output.txid_hex(), indent=2)
            _row("Output Index", input.previous_output.vout, indent=2)
        _row("Script Length", "{} bytes".format(len(input.script_sig)), indent=2)
        _row("Script Sig", input.script_sig.hex(), indent=2)
        _row("Sequence", "0x{:08x}".format(input.sequence), indent=2)
        _row(
            "Relative Timelock",
            format_relative_lock(input_annotation.relative_lock),
            indent=2,
        )
        if input.has_witness_items():
            _row("Witness Items", len(input.witness.stack), fg="yellow", indent=2)
            for i, item in enumerate(input.witness.stack):
                _row("Witness [{}]".format(i), item.hex(), fg="yellow", indent=2)
                _row("Type", input_annotation.witness_items[i], indent=4)

    _section("OUTPUTS ({})".format(len(tx.outputs)), "magenta")
    for output, output_annotation in zip(tx.outputs, annotation.outputs):
        classification = output_annotation.classification
        click.echo(
            click.style("Output #{}".format(output_annotation.index), fg="magenta")
        )
        if output_annotation.is_sentinel_value:
            _row("Value", "unset (0xffffffffffffffff)", fg="red", indent=2)
        else:
            _row("Value", format_value(output.value), fg="yellow", indent=2)
        _row("Type", classification.describe(), fg="cyan", indent=2)
        if classification.script_type == ScriptType.P2A:
            _row("Purpose", "Anyone-can-spend anchor for CPFP fee bumping", indent=2)
        _row("Script Length", "{} bytes".format(len(output.script_pubkey)), indent=2)
        _row("Script PubKey", disassemble(output.script_pubkey), fg="green", indent=2)
        _row("Script Hex", output.script_pubkey.hex(), fg="green", indent=2)

    _section("SUMMARY", "yellow")
    _row("Total Output Value", format_value(annotation.total_output_value), fg="yellow")
    _row("Number of Inputs", len(tx.inputs))
    _row("Number of Outputs", len(tx.outputs))
    for anomaly in annotation.anomalies:
        _row("Warning", TxAnomaly.DESCRIPTIONS.get(anomaly, anomaly), fg="red")
    click.echo()
