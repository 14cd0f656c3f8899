import click

from bitcoindecoder.logging_utils import logging_basic_config
from bitcoindecoder.cli.decode import decode
from bitcoindecoder.cli.decode_batch import decode_batch

logging_basic_config()


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(version="v0.1.0")
@click.pass_context
def cli(ctx):
    pass


cli.add_command(decode, "decode")
cli.add_command(decode_batch, "decode-batch")
