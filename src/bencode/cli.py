import io
import logging
import sys
from typing import Optional

import click

from .config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_INT_DIGITS, DUPLICATE_KEY_POLICIES, DecoderConfig
from .decoder import decode, decode_all
from .encoder import RenderMode, render
from .errors import BencodeDecodeError

logger = logging.getLogger("bencode")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s:%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def dump(data: bytes, config: DecoderConfig, mode: RenderMode, every: bool) -> list:
    """Decodes data and returns one rendered line per root value."""
    if every:
        values = decode_all(data, config)
    else:
        value, used = decode(data, config=config)
        if used < len(data):
            logger.warning("Ignoring %d trailing bytes after the first value", len(data) - used)
        values = [value]

    lines = [render(value, mode) for value in values]
    for value in values:
        value.release()
    return lines


@click.command(
    name="bencode-dump",
    help="Decode a Bencoded file and print it as text. Use '-' to read stdin.",
)
@click.argument("source", type=click.File("rb"), required=True)
@click.option("as_json", "--json", is_flag=True, help="Render as JSON instead of the plain debug form.")
@click.option("every", "--all", is_flag=True, help="Decode every concatenated root value.")
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    help="Deepest container nesting allowed, 0 for no limit.",
)
@click.option(
    "--duplicate-keys",
    type=click.Choice(DUPLICATE_KEY_POLICIES),
    default="last",
    show_default=True,
)
@click.option("--int-bits", type=click.IntRange(min=2), default=None)
@click.option(
    "--max-int-digits",
    type=click.IntRange(min=0),
    default=DEFAULT_MAX_INT_DIGITS,
    show_default=True,
    help="Longest integer allowed, 0 for no limit.",
)
@click.option("-v", "--verbose", is_flag=True)
def main(
    source: io.BufferedReader,
    as_json: bool,
    every: bool,
    max_depth: int,
    duplicate_keys: str,
    int_bits: Optional[int],
    max_int_digits: int,
    verbose: bool,
) -> None:
    configure_logging(verbose)
    config = DecoderConfig(
        max_depth=max_depth or None,
        duplicate_keys=duplicate_keys,
        int_bits=int_bits,
        max_int_digits=max_int_digits or None,
    )
    mode = RenderMode.JSON if as_json else RenderMode.PLAIN

    data = source.read()
    logger.debug("Read %d bytes from %s", len(data), getattr(source, "name", "-"))

    try:
        lines = dump(data, config, mode, every)
    except BencodeDecodeError as e:
        click.echo(f"error: {type(e).__name__} at byte {e.position}: {e.message}", err=True)
        sys.exit(1)

    for line in lines:
        click.echo(line)


if __name__ == "__main__":
    main()
