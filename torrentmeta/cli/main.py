"""Command line interface for torrentmeta.

Provides commands to inspect torrent files:
- dump: print the decoded bencode tree
- info: show typed metadata and the info hash
- hash: print the info hash
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.table import Table

from torrentmeta.config.config import ConfigManager, init_config
from torrentmeta.core.bencode import decode
from torrentmeta.core.torrent import TorrentParser
from torrentmeta.models import LogLevel, Torrent
from torrentmeta.utils.exceptions import TorrentMetaError
from torrentmeta.utils.formatting import format_size, format_value
from torrentmeta.utils.logging_config import LoggingContext, log_exception

logger = logging.getLogger(__name__)


def _raise_cli_error(message: str) -> NoReturn:
    """Raise a ClickException with the given message."""
    raise click.ClickException(message) from None


def _get_config_from_context(ctx: click.Context) -> ConfigManager:
    """Return the config manager created by the group callback."""
    return ctx.obj["config_manager"]


def _get_parser(ctx: click.Context) -> TorrentParser:
    return TorrentParser(_get_config_from_context(ctx).config.decoder)


def _read_torrent(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        _raise_cli_error(f"Cannot read {path}: {e}")


def _load_torrent(ctx: click.Context, path: str) -> Torrent:
    data = _read_torrent(path)
    try:
        # The ClickException reports the failure, so the log record stays at debug
        with LoggingContext(
            "parse torrent",
            logger=logger,
            failure_level=logging.DEBUG,
            torrent_file=path,
        ):
            return _get_parser(ctx).parse(data)
    except TorrentMetaError as e:
        _raise_cli_error(f"Invalid torrent {path}: {e.message}")


def _format_date(timestamp: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        )
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def _torrent_summary(torrent: Torrent) -> dict[str, Any]:
    info = torrent.info
    return {
        "announce": torrent.announce,
        "created_by": torrent.created_by,
        "creation_date": torrent.creation_date,
        "name": info.name,
        "piece_length": info.piece_length,
        "num_pieces": info.num_pieces,
        "total_length": info.total_length,
        "info_hash": torrent.info_hash_hex,
        "files": [{"length": f.length, "path": f.path} for f in info.files],
    }


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.pass_context
def cli(ctx, config, verbose):
    """Torrentmeta - inspect BitTorrent metainfo files."""
    ctx.ensure_object(dict)
    try:
        config_manager = init_config(config)
    except TorrentMetaError as e:
        _raise_cli_error(str(e))

    observability = config_manager.config.observability
    if verbose >= 2:
        observability.log_level = LogLevel.DEBUG
    elif verbose == 1:
        observability.log_level = LogLevel.INFO
    if verbose:
        config_manager._setup_logging()  # noqa: SLF001

    ctx.obj["config_manager"] = config_manager
    ctx.obj["verbosity"] = verbose


@cli.command()
@click.argument("torrent_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def dump(ctx, torrent_file):
    """Print the decoded bencode tree of TORRENT_FILE.

    Only the first value is decoded and any bytes after it are ignored.
    Dictionary keys are printed in sorted order.
    """
    data = _read_torrent(torrent_file)
    max_depth = _get_parser(ctx).config.max_depth
    try:
        value, remainder = decode(data, max_depth=max_depth)
    except TorrentMetaError as e:
        log_exception(logger, e, f"Failed to decode {torrent_file}", level=logging.DEBUG)
        _raise_cli_error(f"Invalid bencode in {torrent_file}: {e.message}")
    if remainder:
        logger.debug("Ignoring %d trailing bytes in %s", len(remainder), torrent_file)
    click.echo(format_value(value, sort_keys=True))


@cli.command()
@click.argument("torrent_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def info(ctx, torrent_file, as_json):
    """Show metadata and info hash of TORRENT_FILE."""
    torrent = _load_torrent(ctx, torrent_file)

    if as_json:
        click.echo(json.dumps(_torrent_summary(torrent), indent=2))
        return

    console = Console(markup=False)
    table = Table(title=torrent.info.name, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Announce", torrent.announce)
    table.add_row("Created by", torrent.created_by)
    table.add_row("Creation date", _format_date(torrent.creation_date))
    table.add_row("Piece length", format_size(torrent.info.piece_length))
    table.add_row("Pieces", str(torrent.info.num_pieces))
    table.add_row("Total size", format_size(torrent.info.total_length))
    table.add_row("Info hash", torrent.info_hash_hex)
    console.print(table)

    files = Table(title="Files")
    files.add_column("Path")
    files.add_column("Size", justify="right")
    for f in torrent.info.files:
        files.add_row(f.full_path, format_size(f.length))
    console.print(files)


@cli.command(name="hash")
@click.argument("torrent_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def hash_cmd(ctx, torrent_file):
    """Print the hex info hash of TORRENT_FILE."""
    torrent = _load_torrent(ctx, torrent_file)
    click.echo(torrent.info_hash_hex)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
