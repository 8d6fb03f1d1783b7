#!/usr/bin/env python3
"""
Elma level command line tool.

Usage:
    elmalev info level.lev
    elmalev top10 level.lev
    elmalev resave level.lev --output fixed.lev --new-link
    elmalev new blank.lev --config defaults.ini
"""

import argparse
import configparser
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .config import NewLevelConfig
from .data_types import Level, ObjectKind, Top10Entry
from .errors import LevelError
from .level_io import load_level, save_level
from .serializer import overlong_strings
from .utils import log, logWarning, logError, init_logging, print_summary, get_counts


def format_time(hundredths: int) -> str:
    """Format a best time as mm:ss,hh (hours prefixed when needed)."""
    minutes, hundredths = divmod(hundredths, 6000)
    seconds, hundredths = divmod(hundredths, 100)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d},{hundredths:02d}"
    return f"{minutes:02d}:{seconds:02d},{hundredths:02d}"


def _print_table(title: str, entries: List[Top10Entry], multi: bool):
    log(f"{title} ({len(entries)})")
    for rank, entry in enumerate(entries, 1):
        names = f"{entry.name1} / {entry.name2}" if multi else entry.name1
        log(f"  {rank:2d}. {format_time(entry.time):>11}  {names}")


def _save(level: Level, path, rng) -> int:
    for message in overlong_strings(level):
        logWarning(message)
    return save_level(level, path, rng)


def cmd_info(args, rng) -> int:
    level = load_level(args.file)
    kinds = {kind: 0 for kind in ObjectKind}
    for obj in level.objects:
        kinds[obj.kind] += 1
    vertex_count = sum(len(p.vertices) for p in level.polygons)
    grass_count = sum(1 for p in level.polygons if p.grass)

    log(f"File:      {args.file}")
    log(f"Name:      {level.name}")
    log(f"Link:      {level.link}")
    log(f"LGR:       {level.lgr} (ground {level.ground}, sky {level.sky})")
    log(f"Polygons:  {len(level.polygons)} ({grass_count} grass, {vertex_count} vertices)")
    log("Objects:   " + ", ".join(f"{kind.name.lower()} {count}" for kind, count in kinds.items()))
    log(f"Pictures:  {len(level.pictures)}")
    log(f"Top10:     {len(level.top10.single)} single, {len(level.top10.multi)} multi")
    log("Integrity: " + ", ".join(f"{value:.4f}" for value in level.integrity))
    return 0


def cmd_top10(args, rng) -> int:
    level = load_level(args.file)
    _print_table("Single player", level.top10.single, multi=False)
    _print_table("Multiplayer", level.top10.multi, multi=True)
    return 0


def cmd_resave(args, rng) -> int:
    level = load_level(args.file)
    if args.new_link:
        level.generate_link(rng)
    output = Path(args.output) if args.output else Path(args.file)
    size = _save(level, output, rng)
    log(f"Saved {output} ({size:,} bytes, link {level.link})")
    return 0


def cmd_new(args, rng) -> int:
    config = NewLevelConfig.from_file(args.config) if args.config else NewLevelConfig()
    level: Level = config.create_level(rng)
    size = _save(level, args.file, rng)
    log(f"Created {args.file} ({size:,} bytes, link {level.link})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='elmalev',
        description='Inspect and rewrite Elasto Mania level files',
    )
    parser.add_argument('--log', default=None,
                        help='Write a log file (includes debug output)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for link and integrity generation')
    sub = parser.add_subparsers(dest='command', required=True)

    info = sub.add_parser('info', help='Show level summary')
    info.add_argument('file')
    info.set_defaults(func=cmd_info)

    top10 = sub.add_parser('top10', help='Show best times')
    top10.add_argument('file')
    top10.set_defaults(func=cmd_top10)

    resave = sub.add_parser('resave', help='Re-encode a level with fresh integrity sums')
    resave.add_argument('file')
    resave.add_argument('--output', '-o', default=None,
                        help='Output path (default: overwrite input)')
    resave.add_argument('--new-link', action='store_true',
                        help='Assign a new random link')
    resave.set_defaults(func=cmd_resave)

    new = sub.add_parser('new', help='Create a minimal level')
    new.add_argument('file')
    new.add_argument('--config', default=None,
                     help='INI file with [level] defaults')
    new.set_defaults(func=cmd_new)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(Path(args.log) if args.log else None)
    rng = np.random.default_rng(args.seed)

    try:
        result = args.func(args, rng)
    except (LevelError, OSError, ValueError, configparser.Error) as e:
        logError(f"{args.command} {args.file}: {e}")
        result = 1

    errors, warnings = get_counts()
    if errors or warnings:
        print_summary()
    return result


if __name__ == '__main__':
    sys.exit(main())
