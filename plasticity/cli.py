"""Command line front end for inspecting and editing AI programs.

Examples:

    plasticity tree Enemy_Lizalfos.json
    plasticity list Enemy_Lizalfos.json --segment Action
    plasticity refs Enemy_Lizalfos.json 12
    plasticity classes AI
    plasticity add Enemy_Lizalfos.json AI SelectRandom -o edited.json
    plasticity delete Enemy_Lizalfos.json 7
    plasticity rename Enemy_Lizalfos.json 3 Attack Root

Lookup tables come from ``PLASTICITY_DATA_DIR`` (or ``--data-dir``); the
package ships small sample tables.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .catalog import ProgramServices
from .config import Config
from .errors import PlasticityError
from .logging_utils import log_error, log_info, log_success
from .program import AIProgram, render_tree
from .schemas import Segment


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="plasticity",
        description="Inspect and edit AI programs while keeping entry indices consistent",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory with aidef.json, jpen.json and hashes.json (default: PLASTICITY_DATA_DIR)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    tree = commands.add_parser("tree", help="Print the AI tree")
    tree.add_argument("file", type=Path)

    listing = commands.add_parser("list", help="List entries with their global indices")
    listing.add_argument("file", type=Path)
    listing.add_argument("--segment", type=Segment.parse, default=None)

    refs = commands.add_parser("refs", help="Show every reference to an entry")
    refs.add_argument("file", type=Path)
    refs.add_argument("index", type=int)

    classes = commands.add_parser("classes", help="List catalog classes for a segment")
    classes.add_argument("segment", type=Segment.parse)

    commands.add_parser("config", help="Show the active configuration")

    add = commands.add_parser("add", help="Append a new entry")
    add.add_argument("file", type=Path)
    add.add_argument("segment", type=Segment.parse)
    add.add_argument("class_name")
    add.add_argument("-o", "--output", type=Path, default=None)

    delete = commands.add_parser("delete", help="Delete an entry and repair references")
    delete.add_argument("file", type=Path)
    delete.add_argument("index", type=int)
    delete.add_argument("-o", "--output", type=Path, default=None)

    rename = commands.add_parser("rename", help="Set Name/GroupName and propagate to children")
    rename.add_argument("file", type=Path)
    rename.add_argument("index", type=int)
    rename.add_argument("name")
    rename.add_argument("parent")
    rename.add_argument("-o", "--output", type=Path, default=None)

    return parser.parse_args(argv)


def _load(args: argparse.Namespace, services: ProgramServices) -> AIProgram:
    return AIProgram.from_file(args.file, services)


def _save(program: AIProgram, args: argparse.Namespace) -> Path:
    destination = args.output or args.file
    program.save(destination)
    return destination


def run(args: argparse.Namespace) -> int:
    if args.command == "config":
        print(Config.display())
        Config.validate()
        return 0

    services = ProgramServices.from_directory(args.data_dir)

    if args.command == "classes":
        for class_name in services.catalog.classes(args.segment):
            print(class_name)
        return 0

    program = _load(args, services)

    if args.command == "tree":
        print(render_tree(program.to_tree()))
    elif args.command == "list":
        for index, segment, key_name, name in program.describe_entries(args.segment):
            print(f"{index:4d}  {segment.value:<8} {key_name:<14} {name}")
    elif args.command == "refs":
        program.record_at(args.index)
        found = list(program.references(args.index).locations())
        if not found:
            log_info(f"No references to entry {args.index}")
        for object_name, holder, key in found:
            owner = "program" if holder is None else f"entry {holder} ({program.entry_name(holder)})"
            print(f"{owner}: {object_name}.{services.names.try_name(key)}")
    elif args.command == "add":
        index = program.add_entry(args.segment, args.class_name)
        destination = _save(program, args)
        log_success(f"Added {args.segment.value} '{args.class_name}' as entry {index} -> {destination}")
    elif args.command == "delete":
        name = program.entry_name(args.index)
        program.delete_entry(args.index)
        destination = _save(program, args)
        log_success(f"Deleted entry {args.index} ({name}) -> {destination}")
    elif args.command == "rename":
        program.update_names(args.index, args.name, args.parent)
        destination = _save(program, args)
        log_success(f"Renamed entry {args.index} to '{args.name}' -> {destination}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return run(args)
    except (PlasticityError, FileNotFoundError, ValueError) as exc:
        log_error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
