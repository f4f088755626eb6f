"""Command line tool that prints a JSON summary of a .torrent file.

Exit codes:
    0  success, summary written to stdout
    1  no file given, or the configuration is invalid
    2  the file does not exist
    3  the file could not be decoded or parsed
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from btmeta.config.config import init_config
from btmeta.core.torrent import Torrent
from btmeta.executor.offload import shutdown_offload_executor
from btmeta.models import LogLevel
from btmeta.utils.exceptions import BTMetaError, ConfigurationError
from btmeta.utils.logging_config import get_logger

EXIT_USAGE = 1
EXIT_NOT_FOUND = 2
EXIT_PARSE_FAILED = 3

logger = get_logger("cli")


def format_timestamp(value: datetime | None) -> str:
    """Render a UTC ISO-8601 timestamp with milliseconds, e.g. ``...T00:00:00.000Z``.

    Naive datetimes are taken to be UTC already.
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def torrent_summary(torrent: Torrent) -> dict[str, Any]:
    """Build the JSON-ready summary printed by the command."""
    return {
        "name": torrent.name,
        "announce": sorted(torrent.announces),
        "infoHash": torrent.info_hash,
        "created": format_timestamp(torrent.creation_date),
        "createdBy": torrent.created_by or "",
        "comment": torrent.comment or "",
        "urlList": sorted(torrent.url_list),
        "files": [
            {
                "path": f.path,
                "name": f.name,
                "length": f.length,
                "offset": f.offset,
            }
            for f in torrent.files
        ],
        "length": torrent.length,
        "pieceLength": torrent.piece_length,
        "lastPieceLength": torrent.last_piece_length,
        "pieces": list(torrent.pieces),
    }


async def _parse(path: Path) -> Torrent:
    try:
        return await Torrent.parse_from_file(path)
    finally:
        shutdown_offload_executor()


@click.command("btmeta-parse")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    help="Configuration file path",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    path: Path | None,
    config_file: Path | None,
    verbose: bool,
) -> None:
    """Parse a .torrent file and print its metainfo as JSON."""
    console = Console(stderr=True)

    if path is None:
        console.print(
            "Usage: btmeta-parse <path_to_torrent_file>", markup=False, soft_wrap=True
        )
        ctx.exit(EXIT_USAGE)

    try:
        manager = init_config(config_file, configure_logging=False)
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        ctx.exit(EXIT_USAGE)
    if verbose:
        manager.config.observability.log_level = LogLevel.DEBUG
    manager.setup_logging()

    if not path.is_file():
        console.print(f"File not found: {path}", markup=False, soft_wrap=True)
        ctx.exit(EXIT_NOT_FOUND)

    try:
        torrent = asyncio.run(_parse(path))
    except BTMetaError as e:
        logger.debug("Parse of %s failed", path, exc_info=True)
        console.print(f"Failed to parse torrent: {e}", markup=False, soft_wrap=True)
        ctx.exit(EXIT_PARSE_FAILED)

    click.echo(json.dumps(torrent_summary(torrent), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
