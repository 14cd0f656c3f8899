import logging
from typing import List

import click
import jsonlines as jl
from loky import get_reusable_executor

from bitcoindecoder import env
from bitcoindecoder.cli.utils import decode_line

logger = logging.getLogger(__name__)

BATCH_SIZE = 100


def decode_lines(lines: List[str]) -> List[dict]:
    return [decode_line(line) for line in lines]


def read_batches(fp, batch_size: int):
    """Yield lists of (line number, hex) pairs, skipping blank lines."""
    batch = []
    for number, line in enumerate(fp, start=1):
        line = line.strip()
        if line == "":
            continue
        batch.append((number, line))
        if len(batch) >= batch_size:
            yield batch
            batch = []
    if len(batch) > 0:
        yield batch


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-i",
    "--input",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="A file with one hex transaction per line.",
)
@click.option(
    "-o",
    "--output",
    required=True,
    type=click.Path(dir_okay=False, writable=True),
    help="The JSON lines file to write the decoded transactions to.",
)
@click.option(
    "-w",
    "--max-workers",
    default=env.MAX_WORKERS,
    show_default=True,
    type=int,
    envvar="BITCOIN_DECODER_MAX_WORKERS",
    help="The number of workers",
)
@click.option(
    "-b",
    "--batch-size",
    default=BATCH_SIZE,
    show_default=True,
    type=int,
    help="How many transactions are sent to a worker at a time",
)
def decode_batch(input, output, max_workers, batch_size):
    """Decode a file of raw transactions into JSON lines, in input order."""
    if max_workers < 1:
        raise click.BadParameter("must be at least 1", param_hint="--max-workers")
    if batch_size < 1:
        raise click.BadParameter("must be at least 1", param_hint="--batch-size")

    executor = get_reusable_executor(max_workers=max_workers, timeout=60)

    # undecodable bytes surface as InvalidHex records for their line
    with open(input, "r", encoding="utf-8", errors="replace") as fp:
        batches = list(read_batches(fp, batch_size))

    futures = []
    for batch in batches:
        f = executor.submit(decode_lines, [line for _, line in batch])
        futures.append(f)

    decoded, failed = 0, 0
    with jl.open(output, mode="w", flush=True) as writer:
        # futures are kept in submission order
        for batch, f in zip(batches, futures):
            for (number, _), item in zip(batch, f.result()):
                if "error" in item:
                    failed += 1
                    logger.warning(f"line {number}: {item['error']['message']}")
                    item = {"line": number, "error": item["error"]}
                else:
                    decoded += 1
                writer.write(item)

    logger.info(f"decoded {decoded} transactions, {failed} failed, into {output}")
