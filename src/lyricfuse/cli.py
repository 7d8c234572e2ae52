"""Command-line interface using Click."""

import json
import sys
from pathlib import Path

import click

from . import __version__
from .config import AMLL_DB_SERVER
from .exceptions import LyricFuseError
from .core.convert import convert_lines
from .core.pipeline import fetch_amll_lyrics, parse_and_merge
from .core.serialization import (
    lines_to_json,
    raw_lines_to_json,
    save_json,
    save_lines_to_json,
)
from .utils.logging import setup_logging


def _echo_json(data: list) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """lyricfuse - Normalize TTML timed lyrics for highlighted display."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger


@cli.command()
@click.argument('ttml_file', type=click.Path(exists=True, dir_okay=False))
@click.option('-o', '--output', type=click.Path(), help='Write JSON here instead of stdout')
@click.option('--raw', is_flag=True, help='Dump merged lines before conversion')
@click.pass_context
def parse(ctx, ttml_file, output, raw):
    """Parse a local TTML file and print the normalized lines as JSON."""
    logger = ctx.obj['logger']

    try:
        text = Path(ttml_file).read_text(encoding="utf-8")
        merged = parse_and_merge(text, strict=True)
    except LyricFuseError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except UnicodeDecodeError as e:
        logger.error(f"❌ {ttml_file} is not UTF-8: {e}")
        sys.exit(1)

    if not merged:
        logger.warning("No lyric lines found")

    if raw:
        data = raw_lines_to_json(merged)
        if output:
            save_json(output, data)
        else:
            _echo_json(data)
    else:
        lines = convert_lines(merged)
        if output:
            save_lines_to_json(output, lines)
        else:
            _echo_json(lines_to_json(lines))
    logger.debug(f"Wrote {len(merged)} lines")


@cli.command()
@click.argument('song_id')
@click.option('-o', '--output', type=click.Path(), help='Write JSON here instead of stdout')
@click.option('--server', default=AMLL_DB_SERVER, show_default=True,
              help="URL template; '%s' is replaced by the song id")
@click.pass_context
def fetch(ctx, song_id, output, server):
    """Fetch TTML lyrics for SONG_ID and print the normalized lines as JSON."""
    logger = ctx.obj['logger']

    if "%s" not in server:
        raise click.BadParameter("must contain '%s'", param_hint="--server")

    lines = fetch_amll_lyrics(song_id, server=server)
    if lines is None:
        logger.error(f"❌ No TTML lyrics available for {song_id}")
        sys.exit(1)

    if output:
        save_lines_to_json(output, lines)
    else:
        _echo_json(lines_to_json(lines))


def main():
    """Entry point for the console script."""
    cli(obj={})


if __name__ == '__main__':
    main()
