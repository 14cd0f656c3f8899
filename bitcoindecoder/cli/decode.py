import json
import logging

import click

from bitcoindecoder.cli.render import render_transaction
from bitcoindecoder.cli.utils import (
    read_tx_hex,
    transaction_to_dict,
)
from bitcoindecoder.misc.decode_error import DecodeError
from bitcoindecoder.service.btc_tx_annotator import inspect_transaction_hex

logger = logging.getLogger(__name__)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-t",
    "--tx",
    default=None,
    type=str,
    help="The raw transaction in hex.",
)
@click.option(
    "-f",
    "--file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="A file holding the raw transaction in hex.",
)
@click.option(
    "--format",
    "output_format",
    default="text",
    show_default=True,
    type=click.Choice(["text", "json"]),
    help="The output format.",
)
def decode(tx, file, output_format):
    """Decode a raw transaction and classify its scripts."""
    hex_string = read_tx_hex(tx, file)

    try:
        transaction, annotation = inspect_transaction_hex(hex_string)
    except DecodeError as e:
        logger.debug(f"decode failed: {e}")
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(transaction_to_dict(transaction, annotation), indent=2))
    else:
        render_transaction(transaction, annotation)
