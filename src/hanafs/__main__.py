"""hanafs command line.

Drives the remote filesystem from a terminal, e.g.::

  hanafs ls hanafs://alice@hana.example.com/sap/demo
  hanafs cat hanafs://hana.example.com/sap/demo/app.xsjs
  hanafs put hanafs://hana.example.com/sap/demo/app.xsjs ./app.xsjs
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hanafs.config import Settings, get_settings
from hanafs.errors import FileSystemError
from hanafs.logging_setup import setup_logging
from hanafs.prompt import TerminalPrompt
from hanafs.remote.filesystem import RemoteFileSystem

logger = logging.getLogger(__name__)
console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hanafs",
        description="Browse and edit files in a HANA repository",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("stat", "Show the kind of a file or folder"),
        ("ls", "List a folder"),
        ("cat", "Print a file's content"),
        ("rm", "Delete a file or folder"),
        ("mkdir", "Create a folder"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("address")

    put = sub.add_parser("put", help="Upload a local file")
    put.add_argument("address")
    put.add_argument("source", type=Path, help="Local file to upload")
    put.add_argument("--no-overwrite", action="store_true", help="Fail if the target exists")

    mv = sub.add_parser("mv", help="Rename or move within one host")
    mv.add_argument("old")
    mv.add_argument("new")
    mv.add_argument("--overwrite", action="store_true")

    return parser


async def run_command(args: argparse.Namespace, fs: RemoteFileSystem) -> None:
    command = args.command

    if command == "stat":
        st = await fs.stat(args.address)
        console.print(f"{st.type.value}  size={st.size}  mtime={st.mtime}")
    elif command == "ls":
        table = Table(show_header=True, header_style="bold")
        table.add_column("Name")
        table.add_column("Type")
        for name, kind in await fs.read_directory(args.address):
            table.add_row(name, kind.value)
        console.print(table)
    elif command == "cat":
        data = await fs.read_file(args.address)
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    elif command == "put":
        data = args.source.read_bytes()
        await fs.write_file(args.address, data, create=True, overwrite=not args.no_overwrite)
        logger.info("Uploaded %s (%d bytes)", args.source, len(data))
    elif command == "mv":
        await fs.rename(args.old, args.new, overwrite=args.overwrite)
    elif command == "rm":
        await fs.delete(args.address)
    elif command == "mkdir":
        await fs.create_directory(args.address)
    else:
        raise ValueError(f"Unknown command: {command}")


async def _main(args: argparse.Namespace, settings: Settings) -> None:
    async with RemoteFileSystem(settings=settings, prompt=TerminalPrompt()) as fs:
        await run_command(args, fs)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(level="DEBUG" if args.verbose else settings.log_level)

    try:
        asyncio.run(_main(args, settings))
    except FileSystemError as e:
        console.print(f"[red]{e.code}[/red]: {escape(str(e))}", highlight=False)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
